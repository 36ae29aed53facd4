from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from pymongo.errors import PyMongoError

from openbalti.db.nosql.indexes import ensure_indexes
from openbalti.db.nosql.mongo.client import dispose_mongo, get_mongo_db, initialize_mongo

logger = logging.getLogger(__name__)


def add_mongo(
    app: FastAPI,
    *,
    url: Optional[str] = None,
    db_name: Optional[str] = None,
    create_indexes: bool = True,
) -> None:
    """Attach a lifespan that opens the motor client on startup and closes it on shutdown."""

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        await initialize_mongo(url, db_name)
        if create_indexes:
            try:
                await ensure_indexes(get_mongo_db())
            except PyMongoError:
                logger.exception("Index creation failed; continuing without it")
        try:
            yield
        finally:
            await dispose_mongo()

    app.router.lifespan_context = lifespan
