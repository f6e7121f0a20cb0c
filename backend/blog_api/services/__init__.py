# Services package init
"""
Blog Backend: Services Layer
==============================

What:  Everything between the route handlers and the hosted Data Store.

Service Inventory:
    - DataStore (abstract): select/insert/health contract for the table store
    - RestDataStore: hosted PostgREST interface over httpx
    - SqlDataStore: direct async SQLAlchemy access to the same tables
    - BlogService: the four CRUD operations against an injected DataStore
"""
