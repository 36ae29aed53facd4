from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from openbalti.api.fastapi.db.nosql.mongo.deps import get_db
from openbalti.api.fastapi.envelope import ok, parse_object_id
from openbalti.api.routers.words import get_word_or_404, words
from openbalti.auth.deps import get_current_user, get_optional_user
from openbalti.db import collections as c
from openbalti.db.nosql.populate import populate
from openbalti.db.nosql.repository import NoSqlRepository
from openbalti.schemas.words import FeedbackIn
from openbalti.services.feedback import apply_deltas, current_stats, vote_deltas

logger = logging.getLogger(__name__)

ROUTER_PREFIX = "/words"
ROUTER_TAG = "feedback"

router = APIRouter()
feedback_repo = NoSqlRepository(collection_name=c.WORD_FEEDBACK)


@router.get("/{word_id}/comments")
async def list_comments(word_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    oid = parse_object_id(word_id, "word")
    comments = await feedback_repo.list(
        db,
        filter={"wordId": oid, "comment": {"$exists": True, "$nin": ["", None]}},
        sort=[("createdAt", -1)],
    )
    await populate(db, comments, "userId", c.USERS, ("name", "image"))
    return ok(comments)


@router.get("/{word_id}/feedback")
async def get_feedback(
    word_id: str,
    user: Optional[dict] = Depends(get_optional_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    word = await get_word_or_404(db, word_id, projection={"feedbackStats": 1})
    mine = None
    if user is not None:
        mine = await feedback_repo.find_one(db, {"wordId": word["_id"], "userId": user["_id"]})
    return ok({"stats": current_stats(word), "userFeedback": mine})


@router.post("/{word_id}/feedback")
async def submit_feedback(
    word_id: str,
    body: FeedbackIn,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    word = await get_word_or_404(db, word_id, projection={"_id": 1})
    previous = await feedback_repo.find_one(db, {"wordId": word["_id"], "userId": user["_id"]})

    vote = {
        "isUseful": bool(body.isUseful),
        "isTrusted": bool(body.isTrusted),
        "needsReview": bool(body.needsReview),
    }
    if previous is not None:
        changes = dict(vote)
        if body.comment is not None:
            changes["comment"] = body.comment
        feedback = await feedback_repo.update(db, previous["_id"], changes)
    else:
        feedback = await feedback_repo.create(
            db, {"wordId": word["_id"], "userId": user["_id"], **vote, "comment": body.comment or ""}
        )
    stats = await apply_deltas(words.collection(db), word["_id"], vote_deltas(previous, vote))
    if stats is None:
        raise HTTPException(404, "Word not found")
    logger.debug("Feedback from %s on word %s: %s", user["_id"], word["_id"], vote)
    return ok({"feedback": feedback, "stats": stats})


@router.delete("/{word_id}/feedback")
async def delete_feedback(
    word_id: str,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    oid = parse_object_id(word_id, "word")
    feedback = await feedback_repo.find_one(db, {"wordId": oid, "userId": user["_id"]})
    if feedback is None:
        raise HTTPException(404, "Feedback not found")

    await feedback_repo.delete(db, feedback["_id"])
    # the word may already be gone; its feedback is still removed
    await apply_deltas(words.collection(db), oid, vote_deltas(feedback, None))
    return ok(None, include_data=False)
