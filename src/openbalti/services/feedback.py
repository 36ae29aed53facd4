from __future__ import annotations

from typing import Any, Mapping, Optional

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument

from openbalti.db.nosql.documents import utcnow

FLAG_COUNTERS = (
    ("isUseful", "usefulCount"),
    ("isTrusted", "trustedCount"),
    ("needsReview", "needsReviewCount"),
)


def empty_stats() -> dict:
    return {"usefulCount": 0, "trustedCount": 0, "needsReviewCount": 0, "totalFeedback": 0}


def current_stats(word: Mapping[str, Any]) -> dict:
    return {**empty_stats(), **(word.get("feedbackStats") or {})}


def vote_deltas(previous: Optional[Mapping[str, Any]], vote: Optional[Mapping[str, Any]]) -> dict:
    """
    Counter changes for replacing ``previous`` with ``vote``.

    ``previous=None`` is a first submission and adds to totalFeedback;
    ``vote=None`` is a retraction and takes one away. Zero deltas are dropped.
    """
    deltas = dict.fromkeys(empty_stats(), 0)
    if previous is None:
        deltas["totalFeedback"] += 1
    if vote is None:
        deltas["totalFeedback"] -= 1
    for flag, counter in FLAG_COUNTERS:
        before = bool(previous and previous.get(flag))
        after = bool(vote and vote.get(flag))
        deltas[counter] += int(after) - int(before)
    return {counter: delta for counter, delta in deltas.items() if delta}


async def apply_deltas(collection: AsyncIOMotorCollection, word_id: Any, deltas: Mapping[str, int]) -> Optional[dict]:
    """
    Apply ``deltas`` to a word's feedbackStats with one ``$inc`` and return
    the resulting stats, floored at zero. None when the word is gone.
    """
    # $inc cannot create a field under a null parent
    await collection.update_one({"_id": word_id, "feedbackStats": None}, {"$set": {"feedbackStats": empty_stats()}})

    update: dict = {"$set": {"updatedAt": utcnow()}}
    if deltas:
        update["$inc"] = {f"feedbackStats.{counter}": delta for counter, delta in deltas.items()}
    word = await collection.find_one_and_update(
        {"_id": word_id}, update, projection={"feedbackStats": 1}, return_document=ReturnDocument.AFTER
    )
    if word is None:
        return None

    stats = current_stats(word)
    negative = [counter for counter, value in stats.items() if value < 0]
    if negative:
        await collection.update_one({"_id": word_id}, {"$max": {f"feedbackStats.{c}": 0 for c in negative}})
        stats.update(dict.fromkeys(negative, 0))
    return stats
