"""
Blog Backend: Application Package Initializer
===============================================

What: Marks the `blog_api` directory as a Python package.
Who:  Used by uvicorn (`blog_api.main:app`), pytest, and `python -m blog_api`.

Architecture Note:
    The backend is a thin pass-through between HTTP and a hosted Data Store:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │       BlogService (pass-through)    │  ← table + filter selection
    ├─────────────────────────────────────┤
    │      DataStore client (injected)    │  ← REST (httpx) or SQL (SQLAlchemy)
    └─────────────────────────────────────┘

    Persistence, identifier generation and cascade deletes all belong to the
    Data Store; nothing here keeps state besides the client handle.
"""

__version__ = "1.0.0"
