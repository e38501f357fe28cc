"""
Business logic for developer profiles.

One profile document per user lives in the ``profiles`` collection,
keyed by the owner's id in ``user``.  Reads that are shown to other
people join the owner's name and avatar from ``users``; writes return
the stored document with ``user`` as a plain id.

Experience and education entries are embedded lists, newest first.
Entries are added with ``$push``/``$position: 0`` and removed with
``$pull`` on the entry id so each change is a single atomic update.
"""

import logging
from datetime import datetime, timezone
from typing import List

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from ..core.exceptions import NotFoundError, require_fields
from ..schemas.profile import SOCIAL_PLATFORMS, EducationCreate, ExperienceCreate, ProfileCreate

logger = logging.getLogger(__name__)

NO_PROFILE = "There is no profile associated with this user"
PROFILE_NOT_FOUND = "Profile not found"

_SCALAR_FIELDS = ("company", "website", "location", "bio", "status", "githubusername")


def normalize_skills(skills) -> List[str]:
    """Turn ``"a, b ,c"`` into ``[" a", " b", " c"]``; lists pass through.

    Each entry keeps a single leading space, which the web client relies
    on when it renders the skills inline.
    """
    if isinstance(skills, list):
        return skills
    return [" " + skill.strip() for skill in skills.split(",")]


class ProfileService:
    """Service for reading and writing profiles."""

    @classmethod
    async def _with_owners(cls, profiles: List[dict]) -> List[dict]:
        """Replace each profile's ``user`` id with ``{_id, name, avatar}``."""
        from devconnector_api.app.core.db import get_database, serialize
        db = get_database()
        owner_ids = list({p["user"] for p in profiles})
        owners = {}
        if owner_ids:
            cursor = db.users.find({"_id": {"$in": owner_ids}}, {"name": 1, "avatar": 1})
            for row in await cursor.to_list(length=None):
                owners[row["_id"]] = row
        for profile in profiles:
            profile["user"] = owners.get(profile["user"], {"_id": profile["user"]})
        return serialize(profiles)

    @classmethod
    async def get_my_profile(cls, user_id: str) -> dict:
        """Return the caller's profile joined with their name and avatar."""
        from devconnector_api.app.core.db import get_database, to_object_id
        db = get_database()
        profile = await db.profiles.find_one({"user": to_object_id(user_id, NO_PROFILE)})
        if not profile:
            raise NotFoundError(NO_PROFILE)
        return (await cls._with_owners([profile]))[0]

    @classmethod
    async def upsert_profile(cls, user_id: str, data: ProfileCreate) -> dict:
        """Create the caller's profile or update the supplied fields of it.

        ``status`` and ``skills`` are required.  Only non-empty fields are
        written: on update every other stored field, including social
        platforms not mentioned in the request, keeps its value.
        """
        fields = data.model_dump(exclude_none=True)
        require_fields(fields, {"status": "Status is required", "skills": "Skills are required"})

        profile_fields = {key: fields[key] for key in _SCALAR_FIELDS if fields.get(key)}
        profile_fields["skills"] = normalize_skills(fields["skills"])
        social = {platform: fields[platform] for platform in SOCIAL_PLATFORMS if fields.get(platform)}

        from devconnector_api.app.core.db import get_database, serialize, to_object_id
        db = get_database()
        owner = to_object_id(user_id, NO_PROFILE)

        if await db.profiles.find_one({"user": owner}, {"_id": 1}) is None:
            doc = {
                "user": owner,
                **profile_fields,
                "social": social,
                "experience": [],
                "education": [],
                "date": datetime.now(timezone.utc),
            }
            try:
                result = await db.profiles.insert_one(doc)
            except DuplicateKeyError:
                # Lost a race with a concurrent create; fall through to update.
                logger.info("Profile for user %s created concurrently, updating instead", user_id)
            else:
                doc["_id"] = result.inserted_id
                logger.info("Created profile %s for user %s", doc["_id"], user_id)
                return serialize(doc)

        updates = dict(profile_fields)
        updates.update({f"social.{platform}": value for platform, value in social.items()})
        profile = await db.profiles.find_one_and_update(
            {"user": owner},
            {"$set": updates},
            return_document=ReturnDocument.AFTER,
        )
        logger.info("Updated profile %s for user %s", profile["_id"], user_id)
        return serialize(profile)

    @classmethod
    async def list_profiles(cls) -> List[dict]:
        """Return every profile with its owner's name and avatar."""
        from devconnector_api.app.core.db import get_database
        db = get_database()
        profiles = await db.profiles.find().to_list(length=None)
        return await cls._with_owners(profiles)

    @classmethod
    async def get_profile_by_user(cls, user_id: str) -> dict:
        """Return the profile owned by ``user_id``.

        A malformed id and an id without a profile raise the same
        ``NotFoundError``.
        """
        from devconnector_api.app.core.db import get_database, to_object_id
        db = get_database()
        profile = await db.profiles.find_one({"user": to_object_id(user_id, PROFILE_NOT_FOUND)})
        if not profile:
            raise NotFoundError(PROFILE_NOT_FOUND)
        return (await cls._with_owners([profile]))[0]

    @classmethod
    async def delete_account(cls, user_id: str) -> None:
        """Remove the caller's posts, then their profile, then the user record.

        If a later step fails the user record survives, so the account
        can still log in and retry rather than leaving orphaned posts.
        """
        from devconnector_api.app.core.db import get_database, to_object_id
        db = get_database()
        owner = to_object_id(user_id, "User not found")
        posts = await db.posts.delete_many({"user": owner})
        await db.profiles.delete_one({"user": owner})
        await db.users.delete_one({"_id": owner})
        logger.info("Deleted account %s with %d posts", user_id, posts.deleted_count)

    # ------------------------------------------------------------------
    # Experience and education
    # ------------------------------------------------------------------

    @classmethod
    async def _push_entry(cls, user_id: str, list_name: str, entry: dict) -> dict:
        from devconnector_api.app.core.db import get_database, serialize, to_object_id
        db = get_database()
        entry = {"_id": ObjectId(), **entry}
        profile = await db.profiles.find_one_and_update(
            {"user": to_object_id(user_id, NO_PROFILE)},
            {"$push": {list_name: {"$each": [entry], "$position": 0}}},
            return_document=ReturnDocument.AFTER,
        )
        if profile is None:
            raise NotFoundError(NO_PROFILE)
        logger.info("Added %s entry %s for user %s", list_name, entry["_id"], user_id)
        return serialize(profile)

    @classmethod
    async def _pull_entry(cls, user_id: str, list_name: str, entry_id: str, missing: str) -> dict:
        """Remove the entry with ``entry_id`` from the caller's list.

        An id that is not in the list raises ``NotFoundError`` and leaves
        the list untouched.
        """
        from devconnector_api.app.core.db import get_database, serialize, to_object_id
        db = get_database()
        owner = to_object_id(user_id, NO_PROFILE)
        entry_oid = to_object_id(entry_id, missing)
        profile = await db.profiles.find_one_and_update(
            {"user": owner, f"{list_name}._id": entry_oid},
            {"$pull": {list_name: {"_id": entry_oid}}},
            return_document=ReturnDocument.AFTER,
        )
        if profile is None:
            if await db.profiles.find_one({"user": owner}, {"_id": 1}) is None:
                raise NotFoundError(NO_PROFILE)
            logger.warning("User %s tried to remove unknown %s entry %s", user_id, list_name, entry_id)
            raise NotFoundError(missing)
        logger.info("Removed %s entry %s for user %s", list_name, entry_id, user_id)
        return serialize(profile)

    @classmethod
    async def add_experience(cls, user_id: str, data: ExperienceCreate) -> dict:
        """Head-insert an experience entry into the caller's profile."""
        entry = data.model_dump(by_alias=True)
        require_fields(entry, {
            "title": "Title is required",
            "company": "Company is required",
            "from": "Start date is required",
        })
        return await cls._push_entry(user_id, "experience", entry)

    @classmethod
    async def remove_experience(cls, user_id: str, exp_id: str) -> dict:
        return await cls._pull_entry(user_id, "experience", exp_id, "Experience not found")

    @classmethod
    async def add_education(cls, user_id: str, data: EducationCreate) -> dict:
        """Head-insert an education entry into the caller's profile.

        ``fieldofstudy`` is accepted but not required.
        """
        entry = data.model_dump(by_alias=True)
        require_fields(entry, {
            "school": "School/college/university is required",
            "degree": "Level is required",
            "from": "Start date is required",
        })
        return await cls._push_entry(user_id, "education", entry)

    @classmethod
    async def remove_education(cls, user_id: str, edu_id: str) -> dict:
        return await cls._pull_entry(user_id, "education", edu_id, "Education not found")
