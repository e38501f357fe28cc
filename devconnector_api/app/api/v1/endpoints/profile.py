"""
Profile endpoints for API v1.

Private routes act on the caller's own profile, identified by the
token.  Listing, lookup by user id and the GitHub repository proxy are
public.  A missing profile answers 400 here, which is what the web
client has always expected from these routes; a missing experience or
education entry answers 404.
"""

import logging
from typing import Any, List

from fastapi import APIRouter, Depends, status

from devconnector_api.app.api.v1.errors import http_error, server_error
from devconnector_api.app.core.exceptions import DevConnectorError
from devconnector_api.app.core.security import get_current_user
from devconnector_api.app.schemas.post import Message
from devconnector_api.app.schemas.profile import (
    EducationCreate,
    ExperienceCreate,
    ProfileCreate,
    ProfileRead,
)
from devconnector_api.app.services.github_service import GithubService
from devconnector_api.app.services.profile_service import ProfileService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/me", response_model=ProfileRead, summary="Get current user's profile")
async def read_my_profile(current_user: dict = Depends(get_current_user)) -> ProfileRead:
    try:
        return await ProfileService.get_my_profile(current_user["user_id"])
    except DevConnectorError as e:
        raise http_error(e, not_found_status=status.HTTP_400_BAD_REQUEST)
    except Exception:
        raise server_error(logger, "load own profile")


@router.post("", response_model=ProfileRead, summary="Create or update user profile")
async def upsert_profile(
    data: ProfileCreate,
    current_user: dict = Depends(get_current_user),
) -> ProfileRead:
    """Create the caller's profile, or update the fields supplied.

    ``status`` and ``skills`` are required on every call.  ``skills``
    may be a comma separated string.
    """
    try:
        return await ProfileService.upsert_profile(current_user["user_id"], data)
    except DevConnectorError as e:
        raise http_error(e, not_found_status=status.HTTP_400_BAD_REQUEST)
    except Exception:
        raise server_error(logger, "save profile")


@router.get("", response_model=List[ProfileRead], summary="Get all profiles")
async def list_profiles() -> List[ProfileRead]:
    try:
        return await ProfileService.list_profiles()
    except Exception:
        raise server_error(logger, "list profiles")


@router.get("/user/{user_id}", response_model=ProfileRead, summary="Get profile by user ID")
async def read_profile_by_user(user_id: str) -> ProfileRead:
    """Return a user's profile.

    An id that is not a valid identifier gets the same 400 "Profile not
    found" as an id without a profile.
    """
    try:
        return await ProfileService.get_profile_by_user(user_id)
    except DevConnectorError as e:
        raise http_error(e, not_found_status=status.HTTP_400_BAD_REQUEST)
    except Exception:
        raise server_error(logger, "load profile by user")


@router.delete("", response_model=Message, summary="Delete profile, user & posts")
async def delete_account(current_user: dict = Depends(get_current_user)) -> Message:
    try:
        await ProfileService.delete_account(current_user["user_id"])
    except DevConnectorError as e:
        raise http_error(e, not_found_status=status.HTTP_400_BAD_REQUEST)
    except Exception:
        raise server_error(logger, "delete account")
    return Message(msg="User deleted")


@router.put("/experience", response_model=ProfileRead, summary="Add profile experience")
async def add_experience(
    data: ExperienceCreate,
    current_user: dict = Depends(get_current_user),
) -> ProfileRead:
    try:
        return await ProfileService.add_experience(current_user["user_id"], data)
    except DevConnectorError as e:
        raise http_error(e, not_found_status=status.HTTP_400_BAD_REQUEST)
    except Exception:
        raise server_error(logger, "add experience")


@router.delete("/experience/{exp_id}", response_model=ProfileRead, summary="Delete experience from profile")
async def remove_experience(
    exp_id: str,
    current_user: dict = Depends(get_current_user),
) -> ProfileRead:
    try:
        return await ProfileService.remove_experience(current_user["user_id"], exp_id)
    except DevConnectorError as e:
        raise http_error(e)
    except Exception:
        raise server_error(logger, "remove experience")


@router.put("/education", response_model=ProfileRead, summary="Add profile education")
async def add_education(
    data: EducationCreate,
    current_user: dict = Depends(get_current_user),
) -> ProfileRead:
    try:
        return await ProfileService.add_education(current_user["user_id"], data)
    except DevConnectorError as e:
        raise http_error(e, not_found_status=status.HTTP_400_BAD_REQUEST)
    except Exception:
        raise server_error(logger, "add education")


@router.delete("/education/{edu_id}", response_model=ProfileRead, summary="Delete education from profile")
async def remove_education(
    edu_id: str,
    current_user: dict = Depends(get_current_user),
) -> ProfileRead:
    try:
        return await ProfileService.remove_education(current_user["user_id"], edu_id)
    except DevConnectorError as e:
        raise http_error(e)
    except Exception:
        raise server_error(logger, "remove education")


@router.get("/github/{username}", summary="Get user repos from GitHub")
async def read_github_repos(username: str) -> Any:
    """Relay GitHub's repository list for ``username`` unchanged.

    Any non-200 answer from GitHub becomes 404 "No Github profile found".
    """
    try:
        return await GithubService.get_repos(username)
    except DevConnectorError as e:
        raise http_error(e)
    except Exception:
        raise server_error(logger, "fetch GitHub repositories")
