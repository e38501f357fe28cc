"""
Post endpoints for API v1.

Every route here is private.  Likes and comments are embedded in the
post; the like/unlike and comment routes answer with the updated list
rather than the whole post.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from devconnector_api.app.api.v1.errors import http_error, server_error
from devconnector_api.app.core.exceptions import DevConnectorError
from devconnector_api.app.core.security import get_current_user
from devconnector_api.app.schemas.post import (
    CommentCreate,
    CommentRead,
    LikeRead,
    Message,
    PostCreate,
    PostRead,
)
from devconnector_api.app.services.post_service import PostService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=PostRead, summary="Create a post")
async def create_post(
    data: PostCreate,
    current_user: dict = Depends(get_current_user),
) -> PostRead:
    try:
        return await PostService.create_post(current_user["user_id"], data)
    except DevConnectorError as e:
        raise http_error(e)
    except Exception:
        raise server_error(logger, "create post")


@router.get("", response_model=List[PostRead], summary="Get all posts")
async def list_posts(current_user: dict = Depends(get_current_user)) -> List[PostRead]:
    """Return every post, newest first."""
    try:
        return await PostService.list_posts()
    except Exception:
        raise server_error(logger, "list posts")


@router.get("/{post_id}", response_model=PostRead, summary="Get post by ID")
async def read_post(post_id: str, current_user: dict = Depends(get_current_user)) -> PostRead:
    try:
        return await PostService.get_post(post_id)
    except DevConnectorError as e:
        raise http_error(e)
    except Exception:
        raise server_error(logger, "load post")


@router.delete("/{post_id}", response_model=Message, summary="Delete a post")
async def delete_post(post_id: str, current_user: dict = Depends(get_current_user)) -> Message:
    """Delete a post.  Only the author may delete it (401 otherwise)."""
    try:
        await PostService.delete_post(current_user["user_id"], post_id)
    except DevConnectorError as e:
        raise http_error(e)
    except Exception:
        raise server_error(logger, "delete post")
    return Message(msg="Post removed")


@router.put("/like/{post_id}", response_model=List[LikeRead], summary="Like a post")
async def like_post(post_id: str, current_user: dict = Depends(get_current_user)) -> List[LikeRead]:
    try:
        return await PostService.like_post(current_user["user_id"], post_id)
    except DevConnectorError as e:
        raise http_error(e)
    except Exception:
        raise server_error(logger, "like post")


@router.put("/unlike/{post_id}", response_model=List[LikeRead], summary="Unlike a post")
async def unlike_post(post_id: str, current_user: dict = Depends(get_current_user)) -> List[LikeRead]:
    try:
        return await PostService.unlike_post(current_user["user_id"], post_id)
    except DevConnectorError as e:
        raise http_error(e)
    except Exception:
        raise server_error(logger, "unlike post")


@router.post("/comment/{post_id}", response_model=List[CommentRead], summary="Comment on a post")
async def add_comment(
    post_id: str,
    data: CommentCreate,
    current_user: dict = Depends(get_current_user),
) -> List[CommentRead]:
    try:
        return await PostService.add_comment(current_user["user_id"], post_id, data)
    except DevConnectorError as e:
        raise http_error(e)
    except Exception:
        raise server_error(logger, "add comment")


@router.delete(
    "/comment/{post_id}/{comment_id}",
    response_model=List[CommentRead],
    summary="Delete comment",
)
async def delete_comment(
    post_id: str,
    comment_id: str,
    current_user: dict = Depends(get_current_user),
) -> List[CommentRead]:
    """Delete one of the caller's comments.

    404 when the post or the comment does not exist, 401 when the
    comment was written by someone else.
    """
    try:
        return await PostService.delete_comment(current_user["user_id"], post_id, comment_id)
    except DevConnectorError as e:
        raise http_error(e)
    except Exception:
        raise server_error(logger, "delete comment")
