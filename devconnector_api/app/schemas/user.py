"""
Pydantic models for user data.

Registration and login payloads keep every field optional so that the
service layer can report all missing fields at once instead of
FastAPI rejecting the request on the first one.  ``UserRead`` never
carries the password hash.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Schema for registering a user."""

    name: Optional[str] = Field(None, example="Jane Doe")
    email: Optional[str] = Field(None, example="jane@example.com")
    password: Optional[str] = Field(None, example="secret123")


class UserLogin(BaseModel):
    """Schema for logging in."""

    email: Optional[str] = Field(None, example="jane@example.com")
    password: Optional[str] = Field(None, example="secret123")


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    id: str = Field(..., alias="_id")
    name: str
    email: str
    avatar: Optional[str] = None
    date: Optional[datetime] = None

    model_config = {
        "populate_by_name": True,
    }


class UserSummary(BaseModel):
    """Owner name and avatar joined into profile responses."""

    id: str = Field(..., alias="_id")
    name: Optional[str] = None
    avatar: Optional[str] = None

    model_config = {
        "populate_by_name": True,
    }


class Token(BaseModel):
    token: str
