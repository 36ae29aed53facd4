from __future__ import annotations

import logging
import time
from pathlib import Path

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from motor.motor_asyncio import AsyncIOMotorDatabase

from openbalti.api.fastapi.db.nosql.mongo.deps import get_db
from openbalti.api.fastapi.envelope import ok
from openbalti.api.routers.words import get_word_or_404, text_filter, words
from openbalti.app.settings import get_app_settings
from openbalti.auth.deps import get_current_user
from openbalti.schemas.enums import ActivityAction, ReviewStatus
from openbalti.schemas.words import ReviewIn, WordIn
from openbalti.security.permissions import RequirePermission, has_permission
from openbalti.services.activity import log_activity

logger = logging.getLogger(__name__)

ROUTER_PREFIX = "/words"
ROUTER_TAG = "words"

router = APIRouter()

REVIEW_STATUSES = (ReviewStatus.FLAGGED, ReviewStatus.REVIEWED, None)


def _require_text(body: WordIn) -> dict:
    data = body.document()
    if not data.get("balti") or not data.get("english"):
        raise HTTPException(400, "Balti word and English translation are required")
    return data


@router.get("")
async def list_words(search: str = "", db: AsyncIOMotorDatabase = Depends(get_db)):
    query = text_filter(search) if search else {}
    found = await words.list(db, filter=query, sort=[("createdAt", -1)])
    logger.debug("Fetched %d words (search=%r)", len(found), search)
    return ok(found)


@router.post("")
async def create_word(
    body: WordIn,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    data = _require_text(body)
    data.setdefault("status", "approved")
    data.setdefault("reviewStatus", None)
    data.setdefault("feedbackStats", {"usefulCount": 0, "trustedCount": 0, "needsReviewCount": 0, "totalFeedback": 0})
    data["createdBy"] = user["_id"]
    word = await words.create(db, data)
    logger.info("Created word %s: %s - %s", word["_id"], word["balti"], word["english"])
    await log_activity(db, user, ActivityAction.CREATE, word=word)
    return ok(word, status_code=201)


@router.get("/{word_id}")
async def get_word(word_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    return ok(await get_word_or_404(db, word_id))


@router.put("/{word_id}")
async def update_word(
    word_id: str,
    body: WordIn,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    data = _require_text(body)
    existing = await get_word_or_404(db, word_id, projection={"_id": 1})
    data["updatedBy"] = user["_id"]
    word = await words.update(db, existing["_id"], data)
    if word is None:
        raise HTTPException(404, "Word not found")
    await log_activity(db, user, ActivityAction.UPDATE, word=word)
    return ok(word)


@router.delete("/{word_id}")
async def delete_word(
    word_id: str,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    word = await get_word_or_404(db, word_id)
    if word.get("createdBy") != user["_id"] and not has_permission(user, "word.delete.any"):
        raise HTTPException(403, "Forbidden")
    await words.delete(db, word["_id"])
    logger.info("Deleted word %s by user %s", word["_id"], user["_id"])
    await log_activity(db, user, ActivityAction.DELETE, word=word)
    return ok({})


@router.put("/{word_id}/review")
async def review_word(
    word_id: str,
    body: ReviewIn,
    user: dict = RequirePermission("word.review"),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    if "reviewStatus" not in body.model_fields_set or body.reviewStatus not in REVIEW_STATUSES:
        logger.warning("Invalid review status for word %s: %r", word_id, body.reviewStatus)
        raise HTTPException(400, "Invalid review status. Must be 'flagged', 'reviewed', or null")
    existing = await get_word_or_404(db, word_id, projection={"_id": 1})
    word = await words.update(db, existing["_id"], {"reviewStatus": body.reviewStatus, "updatedBy": user["_id"]})
    await log_activity(
        db, user, ActivityAction.REVIEW, word=word, details=f"Review status set to {body.reviewStatus}"
    )
    return ok(word)


@router.post("/{word_id}/audio")
async def upload_audio(
    word_id: str,
    audio: UploadFile | None = File(default=None),
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    word = await get_word_or_404(db, word_id)
    if audio is None or not audio.filename:
        raise HTTPException(400, "No audio file provided")

    settings = get_app_settings()
    stamp = int(time.time() * 1000)
    relative = Path("audio") / str(word["_id"]) / f"{stamp}.wav"
    target = Path(settings.media_root) / relative
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(await audio.read())

    audio_url = f"{settings.media_url.rstrip('/')}/{relative.as_posix()}"
    word = await words.update(db, word["_id"], {"audioUrl": audio_url, "updatedBy": user["_id"]})
    logger.info("Stored pronunciation audio for word %s at %s", word["_id"], target)
    await log_activity(db, user, ActivityAction.UPDATE, word=word, details="Added pronunciation audio")
    return ok({"audioUrl": audio_url}, message="Audio uploaded successfully")
