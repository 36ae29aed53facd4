from __future__ import annotations

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from openbalti.db.settings import get_mongo_settings
from openbalti.exceptions import DatabaseNotInitializedError

logger = logging.getLogger(__name__)

_client: Optional[AsyncIOMotorClient] = None
_db_name: Optional[str] = None


async def initialize_mongo(url: Optional[str] = None, db_name: Optional[str] = None) -> AsyncIOMotorClient:
    """Create the process-wide motor client. Calling it twice reuses the first client."""
    global _client, _db_name
    if _client is not None:
        return _client

    settings = get_mongo_settings()
    resolved = url or settings.resolved_url
    _client = AsyncIOMotorClient(
        resolved,
        maxPoolSize=settings.max_pool_size,
        serverSelectionTimeoutMS=settings.server_selection_timeout_ms,
        socketTimeoutMS=settings.socket_timeout_ms,
        appname=settings.app_name,
        tz_aware=False,
    )
    _db_name = db_name or settings.db
    logger.info("Mongo client initialized (db=%s)", _db_name)
    return _client


async def dispose_mongo() -> None:
    global _client, _db_name
    if _client is None:
        return
    _client.close()
    _client = None
    _db_name = None
    logger.info("Mongo client closed")


def get_mongo_client() -> AsyncIOMotorClient:
    if _client is None:
        raise DatabaseNotInitializedError()
    return _client


def get_mongo_db() -> AsyncIOMotorDatabase:
    client = get_mongo_client()
    return client[_db_name or get_mongo_settings().db]
