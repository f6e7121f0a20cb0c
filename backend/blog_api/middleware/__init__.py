"""
Blog Backend: Middleware Package

RequestContextMiddleware runs outside CORS, so the access line and any error
body carry the same ID that ends up in the X-Request-ID header.
"""
