from __future__ import annotations

import random
from datetime import date, datetime
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from openbalti.db import collections as c
from openbalti.db.nosql.documents import utcnow

# Words without a status predate moderation and count as approved.
ELIGIBLE = {"$or": [{"status": "approved"}, {"status": {"$exists": False}}, {"status": None}]}


def date_seed(day: date) -> int:
    """2024-03-15 -> 2024 + 3 + 15."""
    return day.year + day.month + day.day


async def pick_word_of_the_day(
    db: AsyncIOMotorDatabase, now: Optional[datetime] = None
) -> Optional[dict]:
    """Same word for everyone on a given UTC day; rotates through eligible words by creation order."""
    now = now or utcnow()
    words = db[c.WORDS]
    total = await words.count_documents(ELIGIBLE)
    if total == 0:
        return None
    index = date_seed(now.date()) % total
    found = await words.find(ELIGIBLE).sort([("createdAt", 1), ("_id", 1)]).skip(index).limit(1).to_list(length=1)
    return found[0] if found else None


async def pick_random_word(db: AsyncIOMotorDatabase, rng: random.Random | None = None) -> Optional[dict]:
    words = db[c.WORDS]
    total = await words.count_documents({})
    if total == 0:
        return None
    skip = (rng or random).randrange(total)
    found = await words.find({}).sort("_id", 1).skip(skip).limit(1).to_list(length=1)
    return found[0] if found else None
