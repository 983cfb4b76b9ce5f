# =============================================================================
# core/repositories/user_repository.py - User Data Access
# =============================================================================
# Translates user operations into MongoDB queries. One coroutine per CRUD
# verb, one driver call each: no retries, no transactions, no batching.
#
# Not-found is reported as None/False. Driver failures are re-raised as an
# opaque StorageError; this layer does not interpret them.
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from pymongo import ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from app.exceptions import StorageError
from lib.utils import parse_object_id

logger = logging.getLogger(__name__)

# Documents fetched per network round trip when listing
FIND_BATCH_SIZE = 100


class UserRepository:
    """
    Repository for the users collection.

    Holds only the collection handle, so one instance is shared by all
    requests.
    """

    def __init__(self, collection: AsyncCollection) -> None:
        self.collection = collection

    async def find_all(self) -> list[dict[str, Any]]:
        """Return every user document."""
        try:
            cursor = self.collection.find({}, batch_size=FIND_BATCH_SIZE)
            return [document async for document in cursor]
        except PyMongoError as e:
            raise StorageError("find_all") from e

    async def find_by_id(self, user_id: str) -> dict[str, Any] | None:
        """
        Return the user document, or None.

        An id that isn't a valid ObjectId can't match anything, so it
        returns None without a round trip.
        """
        object_id = parse_object_id(user_id)
        if object_id is None:
            return None
        try:
            return await self.collection.find_one({"_id": object_id})
        except PyMongoError as e:
            raise StorageError("find_by_id") from e

    async def find_by_email(self, email: str) -> dict[str, Any] | None:
        """Return the user document with this email, or None."""
        try:
            return await self.collection.find_one({"email": email})
        except PyMongoError as e:
            raise StorageError("find_by_email") from e

    async def insert(self, document: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a new user document.

        Returns:
            A copy of the document including the database-assigned ``_id``
        """
        stored = dict(document)
        try:
            result = await self.collection.insert_one(stored)
        except PyMongoError as e:
            raise StorageError("insert") from e
        stored["_id"] = result.inserted_id
        logger.info("Created user: %s", result.inserted_id)
        return stored

    async def update(self, user_id: str, fields: dict[str, Any]) -> dict[str, Any] | None:
        """
        Set ``fields`` on the user and return the updated document.

        Never upserts: returns None if the user doesn't exist.
        """
        object_id = parse_object_id(user_id)
        if object_id is None:
            return None
        try:
            updated = await self.collection.find_one_and_update(
                {"_id": object_id},
                {"$set": fields},
                upsert=False,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise StorageError("update") from e
        if updated is not None:
            logger.info("Updated user: %s", user_id)
        return updated

    async def delete(self, user_id: str) -> bool:
        """Delete the user; returns True if a document was removed."""
        object_id = parse_object_id(user_id)
        if object_id is None:
            return False
        try:
            result = await self.collection.delete_one({"_id": object_id})
        except PyMongoError as e:
            raise StorageError("delete") from e
        if result.deleted_count:
            logger.info("Deleted user: %s", user_id)
        return result.deleted_count > 0
