from __future__ import annotations

from motor.motor_asyncio import AsyncIOMotorDatabase

from openbalti.db.nosql.mongo.client import get_mongo_db


async def get_db() -> AsyncIOMotorDatabase:
    """Request-scoped handle to the application database. Overridden in tests."""
    return get_mongo_db()
