"""
Blog Backend: Post & Comment SQLAlchemy Models
================================================

What:  ORM models for the `posts` and `comments` tables.
Who:   Used by SqlDataStore; the REST backend reaches the same tables remotely.

Table Design:
    Integer identity keys and created_at defaults are generated by the
    database, never by this service. comments.post_id references posts.id
    with ON DELETE CASCADE, so deleting a post removes its comments.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from blog_api.database import Base


class Post(Base):
    """A blog entry. Created by insert only; never updated."""

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        nullable=True,
        server_default=func.now(),
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "author": self.author,
            "created_at": self.created_at,
        }

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, title='{self.title}')>"


class Comment(Base):
    """A reply attached to exactly one Post."""

    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        nullable=True,
        server_default=func.now(),
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "post_id": self.post_id,
            "content": self.content,
            "author": self.author,
            "created_at": self.created_at,
        }

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, post_id={self.post_id})>"


# Table name → model, used by SqlDataStore to resolve generic table requests
MODELS_BY_TABLE = {
    Post.__tablename__: Post,
    Comment.__tablename__: Comment,
}
