from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from openbalti.db import collections as c
from openbalti.db.nosql.documents import utcnow

logger = logging.getLogger(__name__)

OWNER_FIELDS = {"role": "owner", "isVerified": True, "isFounder": True}


async def promote_to_owner(db: AsyncIOMotorDatabase, filter: Mapping[str, Any]) -> Optional[dict]:
    """Mark the matching user as the verified founder/owner. Returns the user without password."""
    user = await db[c.USERS].find_one_and_update(
        dict(filter),
        {"$set": {**OWNER_FIELDS, "updatedAt": utcnow()}},
        projection={"password": 0},
        return_document=ReturnDocument.AFTER,
    )
    if user is not None:
        logger.info("User %s promoted to owner", user["_id"])
    return user
