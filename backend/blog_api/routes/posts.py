"""
Blog Backend: Post Route Handlers
===================================

What:  GET /posts (list) and POST /posts (create).
Who:   Called by the browser UI's post list and new-post form.
"""

from typing import List

from fastapi import APIRouter, Depends

from blog_api.dependencies import get_data_store
from blog_api.schemas.blog import ErrorResponse, PostCreate, PostRecord
from blog_api.services.blog_service import blog_service
from blog_api.services.store_base import DataStore

router = APIRouter(tags=["Posts"])


@router.get(
    "/posts",
    response_model=List[PostRecord],
    responses={400: {"description": "Data Store error", "model": ErrorResponse}},
    summary="List all posts",
    description="Returns every row of the posts table. No pagination, no ordering guarantee.",
)
async def list_posts(store: DataStore = Depends(get_data_store)):
    return await blog_service.list_posts(store)


@router.post(
    "/posts",
    response_model=List[PostRecord],
    responses={
        400: {"description": "Invalid body or Data Store error", "model": ErrorResponse},
    },
    summary="Create a post",
    description="Inserts one post and returns the Data Store's insert response (the inserted row).",
)
async def create_post(
    payload: PostCreate,
    store: DataStore = Depends(get_data_store),
):
    """
    Create a post.

    The store assigns `id` and `created_at`; the response echoes them back.
    """
    return await blog_service.create_post(store, payload)
