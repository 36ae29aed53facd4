from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from openbalti.api.fastapi.db.nosql.mongo.deps import get_db
from openbalti.api.fastapi.envelope import ok, pagination
from openbalti.api.routers.words import get_word_or_404
from openbalti.db import collections as c
from openbalti.db.nosql.repository import NoSqlRepository

ROUTER_PREFIX = "/words"
ROUTER_TAG = "history"

router = APIRouter()
history = NoSqlRepository(collection_name=c.WORD_HISTORY)


@router.get("/{word_id}/history")
async def word_history(
    word_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    word = await get_word_or_404(db, word_id)
    query = {"wordId": word["_id"]}
    entries = await history.list(
        db, filter=query, sort=[("createdAt", -1), ("_id", -1)], offset=(page - 1) * limit, limit=limit
    )
    total = await history.count(db, query)
    summary = {
        "id": word["_id"],
        "balti": word.get("balti"),
        "english": word.get("english"),
        "reviewStatus": word.get("reviewStatus"),
    }
    return ok({"word": summary, "history": entries}, pagination=pagination(total, page, limit))
