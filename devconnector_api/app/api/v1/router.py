"""
Version 1 route table.

Users and auth share ``endpoints/users.py``; profiles (including the
GitHub lookup) and posts have a module each.  ``main.create_app``
mounts this router under both ``/api/v1`` and ``/api``.
"""

from fastapi import APIRouter

from .endpoints import posts, profile, users

router = APIRouter()

router.include_router(users.users_router, prefix="/users", tags=["users"])
router.include_router(users.auth_router, prefix="/auth", tags=["auth"])
router.include_router(profile.router, prefix="/profile", tags=["profile"])
router.include_router(posts.router, prefix="/posts", tags=["posts"])
