"""
Business logic for posts.

Posts live in their own ``posts`` collection and are not children of
profiles.  Each post embeds a list of likes (``{_id, user}``) and a list
of comments, both newest first.  The author's name and avatar are
copied onto the post and onto each comment when it is written and are
never re-synced afterwards.
"""

import logging
from datetime import datetime, timezone
from typing import List

from bson import ObjectId
from pymongo import ReturnDocument

from ..core.exceptions import ConflictError, NotAuthorizedError, NotFoundError, require_fields
from ..schemas.post import CommentCreate, PostCreate

POST_NOT_FOUND = "Post not found"


class PostService:
    """Service for posts, likes and comments."""

    @classmethod
    async def _author(cls, user_id: str) -> dict:
        """Load the caller's name and avatar for the denormalized snapshot."""
        from devconnector_api.app.core.db import get_database, to_object_id
        db = get_database()
        user = await db.users.find_one(
            {"_id": to_object_id(user_id, "User not found")},
            {"name": 1, "avatar": 1},
        )
        if not user:
            raise NotFoundError("User not found")
        return user

    @classmethod
    async def _find_post(cls, post_id: str) -> dict:
        from devconnector_api.app.core.db import get_database, to_object_id
        db = get_database()
        post = await db.posts.find_one({"_id": to_object_id(post_id, POST_NOT_FOUND)})
        if not post:
            raise NotFoundError(POST_NOT_FOUND)
        return post

    @classmethod
    async def create_post(cls, user_id: str, data: PostCreate) -> dict:
        """Create a post authored by the caller and return it."""
        logger = logging.getLogger(__name__)
        require_fields(data.model_dump(), {"text": "Post content is required"})
        author = await cls._author(user_id)
        from devconnector_api.app.core.db import get_database, serialize
        db = get_database()
        doc = {
            "user": author["_id"],
            "text": data.text,
            "name": author.get("name"),
            "avatar": author.get("avatar"),
            "likes": [],
            "comments": [],
            "date": datetime.now(timezone.utc),
        }
        result = await db.posts.insert_one(doc)
        doc["_id"] = result.inserted_id
        logger.info("User %s created post %s", user_id, doc["_id"])
        return serialize(doc)

    @classmethod
    async def list_posts(cls) -> List[dict]:
        """Return all posts, most recent first."""
        from devconnector_api.app.core.db import get_database, serialize
        db = get_database()
        posts = await db.posts.find().sort("date", -1).to_list(length=None)
        return serialize(posts)

    @classmethod
    async def get_post(cls, post_id: str) -> dict:
        from devconnector_api.app.core.db import serialize
        return serialize(await cls._find_post(post_id))

    @classmethod
    async def delete_post(cls, user_id: str, post_id: str) -> None:
        """Delete a post; only its author may do so."""
        logger = logging.getLogger(__name__)
        post = await cls._find_post(post_id)
        if str(post["user"]) != user_id:
            logger.warning("User %s tried to delete post %s of user %s", user_id, post_id, post["user"])
            raise NotAuthorizedError("User not authorised")
        from devconnector_api.app.core.db import get_database
        db = get_database()
        await db.posts.delete_one({"_id": post["_id"]})
        logger.info("User %s removed post %s", user_id, post_id)

    @classmethod
    async def like_post(cls, user_id: str, post_id: str) -> List[dict]:
        """Add the caller's like at the head of the like list.

        Raises ``ConflictError`` when the caller already likes the post.
        The update is guarded on the caller's absence from the list, so
        two concurrent likes from the same user store one entry.
        """
        post = await cls._find_post(post_id)
        if any(str(like["user"]) == user_id for like in post.get("likes", [])):
            raise ConflictError("Post already liked")
        from devconnector_api.app.core.db import get_database, serialize, to_object_id
        db = get_database()
        liker = to_object_id(user_id, "User not found")
        updated = await db.posts.find_one_and_update(
            {"_id": post["_id"], "likes.user": {"$ne": liker}},
            {"$push": {"likes": {"$each": [{"_id": ObjectId(), "user": liker}], "$position": 0}}},
            return_document=ReturnDocument.AFTER,
        )
        if updated is None:
            raise ConflictError("Post already liked")
        return serialize(updated["likes"])

    @classmethod
    async def unlike_post(cls, user_id: str, post_id: str) -> List[dict]:
        """Remove the caller's like; ``ConflictError`` if there is none."""
        post = await cls._find_post(post_id)
        if not any(str(like["user"]) == user_id for like in post.get("likes", [])):
            raise ConflictError("Post has not yet been liked")
        from devconnector_api.app.core.db import get_database, serialize, to_object_id
        db = get_database()
        updated = await db.posts.find_one_and_update(
            {"_id": post["_id"]},
            {"$pull": {"likes": {"user": to_object_id(user_id, "User not found")}}},
            return_document=ReturnDocument.AFTER,
        )
        if updated is None:
            raise NotFoundError(POST_NOT_FOUND)
        return serialize(updated["likes"])

    @classmethod
    async def add_comment(cls, user_id: str, post_id: str, data: CommentCreate) -> List[dict]:
        """Head-insert a comment by the caller and return the comment list."""
        logger = logging.getLogger(__name__)
        require_fields(data.model_dump(), {"text": "Comment is required"})
        post = await cls._find_post(post_id)
        author = await cls._author(user_id)
        from devconnector_api.app.core.db import get_database, serialize
        db = get_database()
        comment = {
            "_id": ObjectId(),
            "user": author["_id"],
            "text": data.text,
            "name": author.get("name"),
            "avatar": author.get("avatar"),
            "date": datetime.now(timezone.utc),
        }
        updated = await db.posts.find_one_and_update(
            {"_id": post["_id"]},
            {"$push": {"comments": {"$each": [comment], "$position": 0}}},
            return_document=ReturnDocument.AFTER,
        )
        if updated is None:
            raise NotFoundError(POST_NOT_FOUND)
        logger.info("User %s commented %s on post %s", user_id, comment["_id"], post_id)
        return serialize(updated["comments"])

    @classmethod
    async def delete_comment(cls, user_id: str, post_id: str, comment_id: str) -> List[dict]:
        """Delete one of the caller's comments by its id.

        Raises ``NotFoundError`` for an unknown comment and
        ``NotAuthorizedError`` when the comment belongs to someone else.
        """
        logger = logging.getLogger(__name__)
        post = await cls._find_post(post_id)
        comment = next(
            (c for c in post.get("comments", []) if str(c["_id"]) == comment_id),
            None,
        )
        if comment is None:
            raise NotFoundError("Comment does not exist")
        if str(comment["user"]) != user_id:
            logger.warning("User %s tried to delete comment %s of user %s", user_id, comment_id, comment["user"])
            raise NotAuthorizedError("User not authorised")
        from devconnector_api.app.core.db import get_database, serialize
        db = get_database()
        updated = await db.posts.find_one_and_update(
            {"_id": post["_id"]},
            {"$pull": {"comments": {"_id": comment["_id"]}}},
            return_document=ReturnDocument.AFTER,
        )
        if updated is None:
            raise NotFoundError(POST_NOT_FOUND)
        logger.info("User %s removed comment %s from post %s", user_id, comment_id, post_id)
        return serialize(updated["comments"])
