from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from openbalti.api.fastapi.db.nosql.mongo.deps import get_db
from openbalti.api.fastapi.envelope import ok, pagination, parse_object_id
from openbalti.auth.deps import get_current_user
from openbalti.db import collections as c
from openbalti.db.nosql.populate import populate
from openbalti.db.nosql.repository import NoSqlRepository
from openbalti.security.permissions import is_staff

ROUTER_PREFIX = "/activity"
ROUTER_TAG = "activity"

router = APIRouter()
logs = NoSqlRepository(collection_name=c.ACTIVITY_LOGS)


@router.get("")
async def list_activity(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    userId: Optional[str] = None,
    wordId: Optional[str] = None,
    action: Optional[str] = None,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    query: dict = {}
    if userId:
        query["user"] = parse_object_id(userId, "user")
    if wordId:
        query["wordId"] = parse_object_id(wordId, "word")
    if action:
        query["action"] = action
    # everyone except staff is limited to their own log
    if not is_staff(user):
        query["user"] = user["_id"]

    entries = await logs.list(
        db, filter=query, sort=[("createdAt", -1), ("_id", -1)], offset=(page - 1) * limit, limit=limit
    )
    await populate(db, entries, "user", c.USERS, ("name", "email"))
    total = await logs.count(db, query)
    return ok(entries, pagination=pagination(total, page, limit))
