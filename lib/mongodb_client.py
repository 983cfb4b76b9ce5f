# =============================================================================
# lib/mongodb_client.py - MongoDB Client Factory
# =============================================================================
# Creates the single AsyncMongoClient shared by every request.
#
# The client owns its own connection pool; the application layer performs
# no locking around it. Connections are established lazily, so creating the
# client never blocks startup. Use ping_mongodb() to check reachability.
#
# Usage:
#   client = create_mongodb_client(settings)
#   users = get_database(client, settings)[USERS_COLLECTION]
# =============================================================================

from __future__ import annotations

import logging

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from app.config import Settings

logger = logging.getLogger(__name__)


def create_mongodb_client(settings: Settings) -> AsyncMongoClient:
    """
    Build the MongoDB client from settings.

    MONGODB_TIMEOUT_SECS bounds both server selection and the TCP connect,
    so an unreachable server fails a request instead of hanging it.
    """
    client: AsyncMongoClient = AsyncMongoClient(
        settings.MONGODB_URI,
        serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
        connectTimeoutMS=settings.mongodb_timeout_ms,
        tz_aware=True,
    )
    logger.info(
        "MongoDB client created (database=%s, timeout=%ss)",
        settings.MONGODB_DATABASE,
        settings.MONGODB_TIMEOUT_SECS,
    )
    return client


def get_database(client: AsyncMongoClient, settings: Settings) -> AsyncDatabase:
    """Return the application database handle."""
    return client[settings.MONGODB_DATABASE]


async def ping_mongodb(client: AsyncMongoClient) -> bool:
    """Return True if the server answers a ping."""
    try:
        await client.admin.command("ping")
        return True
    except PyMongoError as e:
        logger.warning("MongoDB ping failed: %s", e)
        return False
