"""
Blog Backend: Custom Exception Hierarchy
==========================================

What:  Application-specific exceptions for the two ways a request can fail.
How:   Each exception carries a message and an optional context dict.
       Global handlers (registered in main.py) turn them into JSON responses.
Who:   Raised by the Data Store clients and request validation; caught by
       the global handlers.

Exception Hierarchy:
    BlogError (base)
    ├── InvalidRequestError   → 400 Bad Request, code "invalid_request"
    └── DataStoreError        → 400 Bad Request, code "store_error"

Both map to 400: the Data Store's own rejections (constraint violations,
bad filter values) and transport failures are reported to the client the
same way, with the store's message forwarded verbatim.
"""

from typing import Any, Dict, Optional


class BlogError(Exception):
    """
    Base exception for all blog backend errors.

    Attributes:
        message:  Client-facing error description (returned as `error`)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class InvalidRequestError(BlogError):
    """
    Raised when a request body or path parameter fails presence/type checks.

    Kept separate from DataStoreError so clients can tell "fix your input"
    apart from "the store said no". Nothing is forwarded to the store.
    """

    def __init__(
        self,
        message: str = "Invalid request",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class DataStoreError(BlogError):
    """
    Raised when a Data Store operation fails.

    What:    Transport failure, HTTP error status, constraint violation or
             driver error while selecting or inserting rows.
    Message: Forwarded verbatim from the store client; never empty.
    """

    def __init__(
        self,
        message: str = "Data Store operation failed",
        table: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if table:
            ctx["table"] = table
        super().__init__(message=message or "Data Store operation failed", context=ctx)
        self.table = table
