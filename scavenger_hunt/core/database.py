"""Process-wide MongoDB connection handle."""

import logging
from functools import lru_cache

from pymongo import MongoClient
from pymongo.database import Database

from scavenger_hunt.core.settings import get_settings

logger = logging.getLogger(__name__)


@lru_cache
def get_mongo_client() -> MongoClient:
    """
    Get the cached MongoDB client.

    The client connects lazily, so creating it never blocks on the server.

    Returns:
        MongoClient: The shared client instance.
    """
    settings = get_settings()
    logger.info(f"Creating MongoDB client for database '{settings.mongo.database}'")
    return MongoClient(
        settings.mongo.uri,
        serverSelectionTimeoutMS=settings.mongo.server_selection_timeout_ms,
        tz_aware=True,
    )


def get_database() -> Database:
    """
    Get the hunt database.

    Returns:
        Database: Database configured in the mongo settings.
    """
    return get_mongo_client()[get_settings().mongo.database]


def close_database() -> None:
    """Close the shared client, if one was created."""
    if get_mongo_client.cache_info().currsize:
        get_mongo_client().close()
        logger.info("MongoDB client closed")
    get_mongo_client.cache_clear()
