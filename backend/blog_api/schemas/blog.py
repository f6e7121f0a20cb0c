"""
Blog Backend: Pydantic Request/Response Schemas
=================================================

What:  Pydantic models defining the API contract with the browser UI.
How:   FastAPI validates request bodies against the *Create models, filters
       responses through the *Record models, and generates OpenAPI docs.

Validation scope:
    Presence and type only. `title` must be a non-empty string, `content`
    a string (empty allowed), `author` optional, `post_id` an integer.
    Whether a post_id actually exists is the Data Store's call.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, StrictInt, StrictStr


# ══════════════════════════════════════════════════════════════════════════
# Request Models: What the client sends
# ══════════════════════════════════════════════════════════════════════════


class PostCreate(BaseModel):
    """Body of POST /posts."""
    title: StrictStr = Field(min_length=1, description="Post title (non-empty)")
    content: StrictStr = Field(description="Post body; may be empty")
    author: Optional[StrictStr] = Field(default=None, description="Author display name")


class CommentCreate(BaseModel):
    """Body of POST /comments."""
    post_id: StrictInt = Field(description="ID of the post being replied to")
    content: StrictStr = Field(description="Comment body")
    author: Optional[StrictStr] = Field(default=None, description="Author display name")


# ══════════════════════════════════════════════════════════════════════════
# Response Models: Rows as returned by the Data Store
# ══════════════════════════════════════════════════════════════════════════


class PostRecord(BaseModel):
    """
    What:  A `posts` row.
    Who:   Returned by GET /posts and (as a one-item list) by POST /posts.

    created_at arrives as an ISO string from the REST store and as a
    datetime from the SQL store; pydantic normalizes both.
    """
    id: int = Field(description="Store-generated identifier")
    title: str
    content: Optional[str] = None
    author: Optional[str] = None
    created_at: Optional[datetime] = Field(default=None, description="Set by the store at insert")

    model_config = {"from_attributes": True}


class CommentRecord(BaseModel):
    """A `comments` row."""
    id: int
    post_id: Optional[int] = None
    content: Optional[str] = None
    author: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Error body for every failed CRUD request.

    Example:
        {
            "error": "insert or update on table \"comments\" violates foreign key constraint",
            "code": "store_error",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Human-readable message (forwarded from the store)")
    code: str = Field(description="store_error or invalid_request")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(description="healthy or unhealthy")
    version: str
    backend: str = Field(description="Configured Data Store backend: rest or sql")
    data_store: str = Field(description="reachable or unreachable")
    uptime_seconds: float
