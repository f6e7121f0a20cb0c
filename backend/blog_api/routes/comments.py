"""
Blog Backend: Comment Route Handlers
======================================

What:  GET /comments/{post_id} (list for a post) and POST /comments (create).

A post_id with no matching post is not an error on read: the equality filter
just matches nothing and the response is []. On write, the Data Store's
foreign key rejects it and the store's message comes back as a 400.
"""

from typing import List

from fastapi import APIRouter, Depends, Path

from blog_api.dependencies import get_data_store
from blog_api.schemas.blog import CommentCreate, CommentRecord, ErrorResponse
from blog_api.services.blog_service import blog_service
from blog_api.services.store_base import DataStore

router = APIRouter(tags=["Comments"])


@router.get(
    "/comments/{post_id}",
    response_model=List[CommentRecord],
    responses={
        400: {"description": "Invalid post id or Data Store error", "model": ErrorResponse},
    },
    summary="List comments for a post",
)
async def list_comments(
    post_id: int = Path(description="ID of the post whose comments to list"),
    store: DataStore = Depends(get_data_store),
):
    return await blog_service.list_comments(store, post_id)


@router.post(
    "/comments",
    response_model=List[CommentRecord],
    responses={
        400: {
            "description": "Invalid body, unknown post_id, or Data Store error",
            "model": ErrorResponse,
        },
    },
    summary="Create a comment",
)
async def create_comment(
    payload: CommentCreate,
    store: DataStore = Depends(get_data_store),
):
    return await blog_service.create_comment(store, payload)
