from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from openbalti.api.fastapi.db.nosql.mongo.deps import get_db
from openbalti.api.fastapi.envelope import ok, parse_object_id
from openbalti.auth.deps import get_current_user
from openbalti.db import collections as c
from openbalti.db.nosql.repository import NoSqlRepository
from openbalti.schemas.learning import LearningSessionIn
from openbalti.services.learning import learning_stats

logger = logging.getLogger(__name__)

ROUTER_PREFIX = "/learning"
ROUTER_TAG = "learning"

router = APIRouter()
sessions = NoSqlRepository(collection_name=c.LEARNING_SESSIONS)


@router.get("/stats")
async def stats(user: dict = Depends(get_current_user), db: AsyncIOMotorDatabase = Depends(get_db)):
    found = await sessions.list(
        db,
        filter={"userId": user["_id"]},
        sort=[("createdAt", -1)],
        projection={"wordsStudied": 1, "score": 1, "createdAt": 1},
    )
    return ok(learning_stats(found))


@router.post("/sessions")
async def record_session(
    body: LearningSessionIn,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    doc = body.model_dump(mode="json")
    doc["wordsStudied"] = [parse_object_id(w, "word") for w in body.wordsStudied]
    doc["userId"] = user["_id"]
    session = await sessions.create(db, doc)
    logger.debug("Recorded %s session %s for %s", body.sessionType, session["_id"], user["_id"])
    return ok(session, status_code=201)
