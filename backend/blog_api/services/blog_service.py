"""
Blog Backend: Blog Service
============================

What:  The four CRUD operations, expressed against an injected DataStore.
Why:   Keeps table names and filters out of the route handlers, and lets the
       operations be tested with any DataStore double.
How:   Each method is a single store call. No business logic, no retries;
       DataStoreError propagates untouched to the global handler.

BlogService is stateless. The store is passed in per call (the route gets it
from FastAPI's dependency injection), the same way a DB session would be.
"""

import logging
from typing import Any, Dict, List

from blog_api.schemas.blog import CommentCreate, PostCreate
from blog_api.services.store_base import DataStore

logger = logging.getLogger(__name__)

POSTS_TABLE = "posts"
COMMENTS_TABLE = "comments"


class BlogService:
    """
    Responsibilities:
        - list_posts():    every row of `posts`
        - create_post():   insert one post
        - list_comments(): rows of `comments` whose post_id matches
        - create_comment(): insert one comment (the store checks post_id)
    """

    async def list_posts(self, store: DataStore) -> List[Dict[str, Any]]:
        return await store.select(POSTS_TABLE)

    async def create_post(self, store: DataStore, payload: PostCreate) -> List[Dict[str, Any]]:
        """
        Insert one post.

        Returns:
            The store's insert response: a list holding the inserted row.
        """
        rows = await store.insert(POSTS_TABLE, [payload.model_dump()])
        logger.info("Created post %s", ", ".join(str(row.get("id")) for row in rows) or "(no echo)")
        return rows

    async def list_comments(self, store: DataStore, post_id: int) -> List[Dict[str, Any]]:
        """
        Comments for one post. An id with no matching post simply yields [].
        """
        return await store.select(COMMENTS_TABLE, {"post_id": post_id})

    async def create_comment(
        self, store: DataStore, payload: CommentCreate
    ) -> List[Dict[str, Any]]:
        """
        Insert one comment.

        Raises:
            DataStoreError: post_id references no post (FK violation), or
                            any other store failure.
        """
        rows = await store.insert(COMMENTS_TABLE, [payload.model_dump()])
        logger.info("Created comment on post %s", payload.post_id)
        return rows


blog_service = BlogService()
