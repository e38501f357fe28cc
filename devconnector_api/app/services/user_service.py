"""
Business logic for users.

Users register with a name, e-mail and password and receive an avatar
derived from their e-mail's Gravatar hash.  The password is stored as a
PBKDF2 hash and never returned by any read.
"""

import hashlib
import logging
import re
from datetime import datetime, timezone
from typing import Optional

from pymongo.errors import DuplicateKeyError

from ..core.exceptions import ConflictError, NotFoundError, ValidationFailed
from ..schemas.user import UserCreate, UserLogin

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def gravatar_url(email: str) -> str:
    """Return the Gravatar URL (200px, PG rated, mystery-man fallback)."""
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    return f"//www.gravatar.com/avatar/{digest}?s=200&r=pg&d=mm"


class UserService:
    """Registration, authentication and lookup of user records."""

    @classmethod
    async def create_user(cls, data: UserCreate) -> dict:
        """Register a new user and return the stored record without password.

        Raises ``ValidationFailed`` listing every bad field and
        ``ConflictError`` when the e-mail is already registered.
        """
        fields = data.model_dump()
        errors = []
        if not fields.get("name"):
            errors.append({"msg": "Name is required", "param": "name", "location": "body"})
        if not fields.get("email") or not _EMAIL_RE.match(fields["email"]):
            errors.append({"msg": "Please include a valid email", "param": "email", "location": "body"})
        if not fields.get("password") or len(fields["password"]) < 6:
            errors.append({
                "msg": "Please enter a password with 6 or more characters",
                "param": "password",
                "location": "body",
            })
        if errors:
            raise ValidationFailed(errors)

        from devconnector_api.app.core.db import get_database, serialize
        from devconnector_api.app.core.security import hash_password
        db = get_database()
        email = fields["email"].strip().lower()
        if await db.users.find_one({"email": email}):
            raise ConflictError("User already exists")
        doc = {
            "name": fields["name"],
            "email": email,
            "avatar": gravatar_url(email),
            "password": hash_password(fields["password"]),
            "date": datetime.now(timezone.utc),
        }
        try:
            result = await db.users.insert_one(doc)
        except DuplicateKeyError:
            raise ConflictError("User already exists")
        doc["_id"] = result.inserted_id
        logger.info("Registered user %s", doc["_id"])
        doc.pop("password")
        return serialize(doc)

    @classmethod
    async def authenticate(cls, data: UserLogin) -> Optional[dict]:
        """Return the user when e-mail and password match, otherwise ``None``."""
        fields = data.model_dump()
        errors = []
        if not fields.get("email") or not _EMAIL_RE.match(fields["email"]):
            errors.append({"msg": "Please include a valid email", "param": "email", "location": "body"})
        if not fields.get("password"):
            errors.append({"msg": "Password is required", "param": "password", "location": "body"})
        if errors:
            raise ValidationFailed(errors)

        from devconnector_api.app.core.db import get_database, serialize
        from devconnector_api.app.core.security import verify_password
        db = get_database()
        row = await db.users.find_one({"email": fields["email"].strip().lower()})
        if not row or not verify_password(fields["password"], row.get("password") or ""):
            logger.warning("Failed login for %s", fields["email"])
            return None
        row.pop("password", None)
        return serialize(row)

    @classmethod
    async def get_user(cls, user_id: str) -> dict:
        """Return a user record without its password hash."""
        from devconnector_api.app.core.db import get_database, serialize, to_object_id
        db = get_database()
        row = await db.users.find_one(
            {"_id": to_object_id(user_id, "User not found")},
            {"password": 0},
        )
        if not row:
            raise NotFoundError("User not found")
        return serialize(row)
