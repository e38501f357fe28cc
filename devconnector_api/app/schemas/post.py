"""
Pydantic schemas for posts, likes and comments.

Author name and avatar are copied onto posts and comments when they are
written and are not updated afterwards.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class PostCreate(BaseModel):
    """Schema for creating a post."""

    text: Optional[str] = Field(None, example="Hello developers")


class CommentCreate(BaseModel):
    """Schema for adding a comment to a post."""

    text: Optional[str] = Field(None, example="Nice post!")


class LikeRead(BaseModel):
    id: str = Field(..., alias="_id")
    user: str

    model_config = {
        "populate_by_name": True,
    }


class CommentRead(BaseModel):
    id: str = Field(..., alias="_id")
    user: str
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    date: Optional[datetime] = None

    model_config = {
        "populate_by_name": True,
    }


class PostRead(BaseModel):
    """Schema for reading a post from the API."""

    id: str = Field(..., alias="_id")
    user: str
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    likes: List[LikeRead] = []
    comments: List[CommentRead] = []
    date: Optional[datetime] = None

    model_config = {
        "populate_by_name": True,
    }


class Message(BaseModel):
    """Plain confirmation body, e.g. ``{"msg": "Post removed"}``."""

    msg: str
