from __future__ import annotations

import logging
from datetime import datetime, timedelta

from motor.motor_asyncio import AsyncIOMotorDatabase

from openbalti.db import collections as c
from openbalti.db.nosql.documents import utcnow
from openbalti.services.activity import STAT_FOR_ACTION

logger = logging.getLogger(__name__)

PENDING_WARNING = 50
PENDING_CRITICAL = 100
FLAGGED_CRITICAL = 20

# activity logs written before targetType existed are all word activities
_WORD_ACTIVITY = {"$or": [{"targetType": "word"}, {"targetType": {"$exists": False}}]}


def start_of_day(now: datetime | None = None) -> datetime:
    now = now or utcnow()
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


async def rebuild_contribution_stats(db: AsyncIOMotorDatabase) -> int:
    """Recompute every user's contributionStats from the activity log. Returns users updated."""
    updated = 0
    async for user in db[c.USERS].find({}, {"_id": 1, "name": 1}):
        counts = {}
        for action, stat in STAT_FOR_ACTION.items():
            counts[f"contributionStats.{stat}"] = await db[c.ACTIVITY_LOGS].count_documents(
                {"user": user["_id"], "action": action.value, **_WORD_ACTIVITY}
            )
        await db[c.USERS].update_one({"_id": user["_id"]}, {"$set": counts})
        updated += 1
        logger.debug("Updated statistics for user %s (%s)", user.get("name"), user["_id"])
    logger.info("Contribution statistics rebuilt for %d users", updated)
    return updated


def system_health(pending_reviews: int, flagged_content: int) -> str:
    if pending_reviews > PENDING_CRITICAL or flagged_content > FLAGGED_CRITICAL:
        return "critical"
    if pending_reviews > PENDING_WARNING:
        return "warning"
    return "good"


async def dashboard_stats(db: AsyncIOMotorDatabase) -> dict:
    today = start_of_day()
    users, words = db[c.USERS], db[c.WORDS]
    pending = await words.count_documents({"feedbackStats.needsReviewCount": {"$gt": 0}})
    flagged = await words.count_documents({"reviewStatus": "flagged"})
    return {
        "totalUsers": await users.count_documents({}),
        "totalWords": await words.count_documents({}),
        "pendingReviews": pending,
        "flaggedContent": flagged,
        "newUsersToday": await users.count_documents({"createdAt": {"$gte": today}}),
        "wordsAddedToday": await words.count_documents({"createdAt": {"$gte": today}}),
        "systemHealth": system_health(pending, flagged),
    }


async def community_stats(db: AsyncIOMotorDatabase) -> dict:
    return {
        "totalUsers": await db[c.USERS].count_documents({}),
        "totalFeedback": await db[c.WORD_FEEDBACK].count_documents({}),
        "totalComments": await db[c.WORD_FEEDBACK].count_documents({"comment": {"$exists": True, "$ne": ""}}),
    }


async def quick_stats(db: AsyncIOMotorDatabase) -> dict:
    words = db[c.WORDS]
    dialects = await words.distinct("dialect")
    return {
        "totalWords": await words.count_documents({}),
        "totalContributors": await db[c.USERS].count_documents({}),
        "recentlyAdded": await words.count_documents({"createdAt": {"$gte": utcnow() - timedelta(days=7)}}),
        "dialects": len([d for d in dialects if isinstance(d, str) and d.strip()]),
    }
