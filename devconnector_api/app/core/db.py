"""
MongoDB integration.

This module owns the process-wide ``AsyncIOMotorClient`` and exposes
``get_database`` for the service layer, ``init_db`` for the startup
hook (index creation) and ``close_db`` for shutdown.  The client is
created lazily on first use so that importing the application does not
open any sockets; tests swap it out with ``set_client``.

Documents are stored with ``bson.ObjectId`` primary keys.  Helpers at
the bottom convert incoming path parameters to ``ObjectId`` and turn
stored documents into JSON-friendly dictionaries.
"""

import logging
from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClient

from .config import settings
from .exceptions import NotFoundError


logger = logging.getLogger(__name__)

_client: Optional[Any] = None


def get_client() -> Any:
    """Return the shared Motor client, creating it on first call."""
    global _client
    if _client is None:
        logger.info("Connecting to MongoDB at %s", settings.mongo_url)
        _client = AsyncIOMotorClient(settings.mongo_url)
    return _client


def set_client(client: Any) -> None:
    """Replace the shared client (used by the test suite)."""
    global _client
    _client = client


def get_database() -> Any:
    """Return the application database handle."""
    return get_client()[settings.mongo_db_name]


async def init_db() -> None:
    """Create the indexes the application relies on.

    ``profiles.user`` is unique: a user owns at most one profile.
    ``posts.user`` backs the cascade delete and ``posts.date`` the
    newest-first listing.  Creating an index that already exists is a
    no-op, so this runs on every startup.
    """
    db = get_database()
    await db.profiles.create_index("user", unique=True)
    await db.posts.create_index("user")
    await db.posts.create_index([("date", -1)])
    await db.users.create_index("email", unique=True)
    logger.info("Database indexes ensured on %s", settings.mongo_db_name)


def close_db() -> None:
    """Close the shared client if one was opened."""
    global _client
    if _client is not None:
        _client.close()
        _client = None


def to_object_id(value: str, message: str) -> ObjectId:
    """Convert ``value`` into an ``ObjectId``.

    A malformed identifier is reported exactly like a well-formed id
    that matches nothing, so ``message`` should be the caller's
    regular not-found message.
    """
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise NotFoundError(message)


def serialize(value: Any) -> Any:
    """Recursively convert ``ObjectId`` values into strings.

    Datetimes are left alone; FastAPI encodes them as ISO strings.
    """
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: serialize(item) for key, item in value.items()}
    if isinstance(value, list):
        return [serialize(item) for item in value]
    return value
