from __future__ import annotations

import logging

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, IndexModel

from openbalti.db import collections as c

logger = logging.getLogger(__name__)

INDEXES: dict[str, list[IndexModel]] = {
    c.USERS: [IndexModel([("email", ASCENDING)], unique=True, name="email_unique")],
    c.FAVORITES: [
        IndexModel([("userId", ASCENDING), ("wordId", ASCENDING)], unique=True, name="user_word_unique"),
    ],
    c.WORD_FEEDBACK: [
        IndexModel([("wordId", ASCENDING), ("userId", ASCENDING)], unique=True, name="word_user_unique"),
    ],
    c.WORD_ETYMOLOGY: [IndexModel([("wordId", ASCENDING)], unique=True, name="word_unique")],
    c.BLOGS: [IndexModel([("slug", ASCENDING)], unique=True, name="slug_unique")],
    c.ACTIVITY_LOGS: [
        IndexModel([("user", ASCENDING), ("createdAt", DESCENDING)], name="user_recent"),
        IndexModel([("wordId", ASCENDING)], name="word"),
    ],
    c.WORD_HISTORY: [IndexModel([("wordId", ASCENDING), ("createdAt", DESCENDING)], name="word_recent")],
    c.FORUM_REPLIES: [
        IndexModel(
            [("postId", ASCENDING), ("replyPath", ASCENDING), ("createdAt", ASCENDING)],
            name="post_thread",
        ),
    ],
    c.FORUM_POSTS: [IndexModel([("category", ASCENDING), ("createdAt", DESCENDING)], name="category_recent")],
    c.BLOG_COMMENTS: [IndexModel([("blog", ASCENDING), ("createdAt", DESCENDING)], name="blog_recent")],
}


async def ensure_indexes(db: AsyncIOMotorDatabase) -> dict[str, list[str]]:
    """Create every declared index. Idempotent; returns created names per collection."""
    created: dict[str, list[str]] = {}
    for collection, models in INDEXES.items():
        names = await db[collection].create_indexes(models)
        created[collection] = list(names)
        logger.debug("Indexes ensured on %s: %s", collection, names)
    return created


__all__ = ["INDEXES", "ensure_indexes"]
