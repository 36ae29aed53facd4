from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from openbalti.db import collections as c
from openbalti.db.nosql.documents import to_object_id, utcnow
from openbalti.schemas.enums import ActivityAction, TargetType

logger = logging.getLogger(__name__)

# action -> contributionStats counter
STAT_FOR_ACTION = {
    ActivityAction.CREATE: "wordsAdded",
    ActivityAction.UPDATE: "wordsEdited",
    ActivityAction.REVIEW: "wordsReviewed",
}

HISTORY_ACTIONS = {ActivityAction.CREATE, ActivityAction.UPDATE, ActivityAction.DELETE}


async def increment_user_stat(db: AsyncIOMotorDatabase, user_id: Any, stat: str) -> None:
    await db[c.USERS].update_one(
        {"_id": to_object_id(user_id)},
        {"$inc": {f"contributionStats.{stat}": 1}},
    )


async def log_activity(
    db: AsyncIOMotorDatabase,
    user: Optional[Mapping[str, Any]],
    action: ActivityAction | str,
    *,
    word: Optional[Mapping[str, Any]] = None,
    target_type: TargetType | str = TargetType.WORD,
    target_id: Any = None,
    details: Optional[str] = None,
) -> None:
    """
    Record an activity entry for ``user``.

    Word activities also bump the user's contribution counter and, for
    create/update/delete, append a WordHistory record. Failures are logged
    and never raised: the primary write already succeeded.
    """
    if not user or user.get("_id") is None:
        logger.warning("Attempted to log activity without a signed-in user")
        return

    action = ActivityAction(action)
    target_type = TargetType(target_type)
    now = utcnow()
    entry: dict[str, Any] = {
        "user": user["_id"],
        "action": action.value,
        "targetType": target_type.value,
        "createdAt": now,
        "updatedAt": now,
    }
    if word is not None:
        entry.update({"wordId": word["_id"], "wordBalti": word.get("balti"), "wordEnglish": word.get("english")})
        target_id = target_id or word["_id"]
    if target_id is not None:
        entry["targetId"] = to_object_id(target_id) or target_id
    if details:
        entry["details"] = details

    try:
        await db[c.ACTIVITY_LOGS].insert_one(entry)
        logger.info("Activity logged: %s %s by user %s", action.value, target_type.value, user["_id"])

        if target_type is not TargetType.WORD:
            return

        stat = STAT_FOR_ACTION.get(action)
        if stat:
            await increment_user_stat(db, user["_id"], stat)

        if action in HISTORY_ACTIONS and word is not None:
            await db[c.WORD_HISTORY].insert_one(
                {
                    "wordId": word["_id"],
                    "balti": word.get("balti"),
                    "english": word.get("english"),
                    "action": action.value,
                    "userId": user["_id"],
                    "userName": user.get("name"),
                    "userImage": user.get("image"),
                    "details": details,
                    "createdAt": now,
                    "updatedAt": now,
                }
            )
    except PyMongoError:
        logger.error("Error logging %s activity for user %s", action.value, user["_id"], exc_info=True)
