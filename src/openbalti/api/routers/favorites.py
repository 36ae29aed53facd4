from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from openbalti.api.fastapi.db.nosql.mongo.deps import get_db
from openbalti.api.fastapi.envelope import ok, parse_object_id
from openbalti.auth.deps import get_current_user
from openbalti.db import collections as c
from openbalti.db.nosql.populate import populate
from openbalti.db.nosql.repository import NoSqlRepository
from openbalti.schemas.words import FavoriteIn

logger = logging.getLogger(__name__)

ROUTER_PREFIX = "/favorites"
ROUTER_TAG = "favorites"

router = APIRouter()
favorites = NoSqlRepository(collection_name=c.FAVORITES)


@router.get("")
async def list_favorites(user: dict = Depends(get_current_user), db: AsyncIOMotorDatabase = Depends(get_db)):
    found = await favorites.list(db, filter={"userId": user["_id"]}, sort=[("createdAt", -1)])
    await populate(
        db,
        found,
        "wordId",
        c.WORDS,
        ("balti", "english", "pronunciation", "partOfSpeech", "dialect", "difficultyLevel", "categories"),
    )
    return ok(found)


@router.post("")
async def add_favorite(
    body: FavoriteIn,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    if not body.wordId:
        raise HTTPException(400, "Word ID is required")
    word_oid = parse_object_id(body.wordId, "word")

    if await favorites.find_one(db, {"userId": user["_id"], "wordId": word_oid}, projection={"_id": 1}):
        raise HTTPException(400, "Word already in favorites")
    try:
        favorite = await favorites.create(db, {"userId": user["_id"], "wordId": word_oid})
    except DuplicateKeyError:
        raise HTTPException(400, "Word already in favorites")
    logger.info("User %s favorited word %s", user["_id"], word_oid)
    return ok(favorite, status_code=201)


@router.delete("/{word_id}")
async def remove_favorite(
    word_id: str,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    word_oid = parse_object_id(word_id, "word")
    removed = await favorites.delete_many(db, {"userId": user["_id"], "wordId": word_oid})
    if not removed:
        raise HTTPException(404, "Favorite not found")
    return ok({})
