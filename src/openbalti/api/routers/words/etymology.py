from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from openbalti.api.fastapi.db.nosql.mongo.deps import get_db
from openbalti.api.fastapi.envelope import ok, parse_object_id
from openbalti.api.routers.words import get_word_or_404
from openbalti.auth.deps import get_current_user
from openbalti.db import collections as c
from openbalti.db.nosql.documents import utcnow
from openbalti.db.nosql.populate import populate_one
from openbalti.db.nosql.repository import NoSqlRepository
from openbalti.schemas.words import EtymologyIn, EtymologyVerifyIn
from openbalti.security.permissions import RequirePermission

logger = logging.getLogger(__name__)

ROUTER_PREFIX = "/words"
ROUTER_TAG = "etymology"

router = APIRouter()
etymologies = NoSqlRepository(collection_name=c.WORD_ETYMOLOGY)

REQUIRED_FIELDS = ("origin", "culturalContext", "evolution")


async def _populated(db: AsyncIOMotorDatabase, doc: dict | None) -> dict | None:
    await populate_one(db, doc, "createdBy", c.USERS, ("name",))
    await populate_one(db, doc, "verifiedBy", c.USERS, ("name",))
    return doc


async def _update(db: AsyncIOMotorDatabase, word_oid, changes: dict) -> dict:
    doc = await etymologies.collection(db).find_one_and_update(
        {"wordId": word_oid},
        {"$set": {**changes, "updatedAt": utcnow()}},
        return_document=ReturnDocument.AFTER,
    )
    if doc is None:
        raise HTTPException(404, "Etymology not found")
    return await _populated(db, doc)


@router.get("/{word_id}/etymology")
async def get_etymology(word_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    oid = parse_object_id(word_id, "word")
    doc = await etymologies.find_one(db, {"wordId": oid})
    if doc is None:
        raise HTTPException(404, "Etymology not found")
    return ok(await _populated(db, doc))


@router.post("/{word_id}/etymology")
async def create_etymology(
    word_id: str,
    body: EtymologyIn,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    word = await get_word_or_404(db, word_id, projection={"_id": 1})
    if await etymologies.find_one(db, {"wordId": word["_id"]}, projection={"_id": 1}):
        raise HTTPException(409, "Etymology already exists for this word")

    data = body.document()
    if any(not (data.get(f) or "").strip() for f in REQUIRED_FIELDS):
        raise HTTPException(400, "Origin, cultural context and evolution are required")

    data.setdefault("linguisticFamily", "Sino-Tibetan")
    for key in ("historicalForms", "relatedLanguages", "sources"):
        data.setdefault(key, [])
    data.update({"wordId": word["_id"], "createdBy": user["_id"], "isVerified": False})
    try:
        doc = await etymologies.create(db, data)
    except DuplicateKeyError:
        raise HTTPException(409, "Etymology already exists for this word")
    logger.info("Etymology added for word %s by user %s", word["_id"], user["_id"])
    return ok(await _populated(db, doc), status_code=201)


@router.put("/{word_id}/etymology")
async def update_etymology(
    word_id: str,
    body: EtymologyIn,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    oid = parse_object_id(word_id, "word")
    return ok(await _update(db, oid, body.document()))


@router.post("/{word_id}/etymology/verify")
async def verify_etymology(
    word_id: str,
    body: EtymologyVerifyIn | None = None,
    user: dict = RequirePermission("etymology.verify"),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    oid = parse_object_id(word_id, "word")
    verified = body.isVerified if body is not None else True
    doc = await _update(db, oid, {"isVerified": verified, "verifiedBy": user["_id"] if verified else None})
    logger.info("Etymology for word %s verified=%s by %s", oid, verified, user["_id"])
    return ok(doc)
