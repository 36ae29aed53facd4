from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from openbalti.api.fastapi.db.nosql.mongo.deps import get_db
from openbalti.api.fastapi.envelope import ok
from openbalti.api.routers.words import suggestion, text_filter, words
from openbalti.db import collections as c
from openbalti.db.nosql.documents import utcnow
from openbalti.db.nosql.populate import populate_one
from openbalti.services.word_of_day import pick_random_word, pick_word_of_the_day

logger = logging.getLogger(__name__)

ROUTER_PREFIX = "/words"
ROUTER_TAG = "words"

router = APIRouter()

SUGGESTION_FIELDS = {"balti": 1, "english": 1}


@router.get("/categories")
async def list_categories(db: AsyncIOMotorDatabase = Depends(get_db)):
    values = await words.distinct(db, "categories")
    categories = sorted({v for v in values if isinstance(v, str) and v})
    return ok(categories)


@router.get("/dialects")
async def list_dialects(db: AsyncIOMotorDatabase = Depends(get_db)):
    pipeline = [
        {"$match": {"dialect": {"$exists": True, "$nin": ["", None]}}},
        {"$group": {"_id": "$dialect", "count": {"$sum": 1}}},
        {"$project": {"_id": 0, "name": "$_id", "count": 1}},
        {"$sort": {"count": -1, "name": 1}},
    ]
    data = await db[c.WORDS].aggregate(pipeline).to_list(length=None)
    return ok(data)


@router.get("/difficulties")
async def list_difficulties(db: AsyncIOMotorDatabase = Depends(get_db)):
    pipeline = [
        {"$match": {"difficultyLevel": {"$exists": True, "$nin": ["", None]}}},
        {"$group": {"_id": "$difficultyLevel", "count": {"$sum": 1}}},
        {"$project": {"_id": 0, "level": "$_id", "count": 1}},
        {"$sort": {"level": 1}},
    ]
    data = await db[c.WORDS].aggregate(pipeline).to_list(length=None)
    return ok(data)


@router.get("/suggestions")
async def suggestions(
    q: str = "",
    limit: int = Query(10, ge=1, le=100),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    if q.strip():
        found = await words.list(db, filter=text_filter(q.strip()), limit=limit, projection=SUGGESTION_FIELDS)
        return ok([suggestion(w, "suggestion") for w in found])

    popular = await words.list(
        db, sort=[("feedbackStats.usefulCount", -1), ("_id", 1)], limit=5, projection=SUGGESTION_FIELDS
    )
    recent = await words.list(db, sort=[("createdAt", -1)], limit=5, projection=SUGGESTION_FIELDS)
    return ok([suggestion(w, "popular") for w in popular] + [suggestion(w, "recent") for w in recent])


@router.get("/word-of-the-day")
async def word_of_the_day(db: AsyncIOMotorDatabase = Depends(get_db)):
    now = utcnow()
    word = await pick_word_of_the_day(db, now)
    if word is None:
        raise HTTPException(404, "No approved words found")
    await populate_one(db, word, "createdBy", c.USERS, ("name", "image"))
    return ok({"word": word, "date": now})


@router.get("/word-of-day")
async def random_word(db: AsyncIOMotorDatabase = Depends(get_db)):
    word = await pick_random_word(db)
    if word is None:
        raise HTTPException(404, "No words found")
    return ok(word)
