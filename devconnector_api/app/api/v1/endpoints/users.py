"""
User and authentication endpoints for API v1.

``POST /users`` registers an account, ``POST /auth`` logs in and
``GET /auth`` returns the account behind the presented token.  The
first two answer with ``{"token": ...}`` which the client sends back in
``x-auth-token`` or as a bearer token.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from devconnector_api.app.api.v1.errors import http_error, server_error
from devconnector_api.app.core.exceptions import DevConnectorError
from devconnector_api.app.core.security import create_access_token, get_current_user
from devconnector_api.app.schemas.user import Token, UserCreate, UserLogin, UserRead
from devconnector_api.app.services.user_service import UserService

logger = logging.getLogger(__name__)

users_router = APIRouter()
auth_router = APIRouter()


@users_router.post("", response_model=Token, summary="Register user")
async def register_user(data: UserCreate) -> Token:
    """Register a new user and return a token for them."""
    try:
        user = await UserService.create_user(data)
    except DevConnectorError as e:
        raise http_error(e)
    except Exception:
        raise server_error(logger, "register user")
    return Token(token=create_access_token({"sub": user["_id"]}))


@auth_router.post("", response_model=Token, summary="Authenticate user & get token")
async def login_user(data: UserLogin) -> Token:
    try:
        user = await UserService.authenticate(data)
    except DevConnectorError as e:
        raise http_error(e)
    except Exception:
        raise server_error(logger, "authenticate user")
    if not user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=[{"msg": "Invalid Credentials"}],
        )
    return Token(token=create_access_token({"sub": user["_id"]}))


@auth_router.get("", response_model=UserRead, summary="Current user")
async def read_current_user(current_user: dict = Depends(get_current_user)) -> UserRead:
    """Return the authenticated user's record without the password."""
    try:
        return await UserService.get_user(current_user["user_id"])
    except DevConnectorError as e:
        raise http_error(e)
    except Exception:
        raise server_error(logger, "load user")
