# Routes package init
"""
Blog Backend: API Routes Package
==================================

Route Inventory:
    - posts.py:     GET  /posts                 (list posts)
                    POST /posts                 (create post)
    - comments.py:  GET  /comments/{post_id}    (list comments for a post)
                    POST /comments              (create comment)
    - health.py:    GET  /health                (Data Store reachability)

Routes are THIN: parse the request, call BlogService with the injected
DataStore, return the rows. Errors are formatted by the global handlers.
"""
