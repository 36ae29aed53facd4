from __future__ import annotations

from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorCollection

from openbalti.db.nosql.documents import utcnow


async def toggle_like(
    collection: AsyncIOMotorCollection,
    doc_id: Any,
    user_id: Any,
    *,
    members_field: str,
    counter_field: Optional[str] = None,
) -> Optional[tuple[bool, dict]]:
    """
    Add ``user_id`` to ``members_field`` or take it out if already present,
    keeping ``counter_field`` in step. Each branch is a single conditional
    update, so two concurrent toggles cannot double count.

    Returns (liked, document after the change), or None when the document is gone.
    """
    now = utcnow()
    like_update: dict = {"$addToSet": {members_field: user_id}, "$set": {"updatedAt": now}}
    unlike_update: dict = {"$pull": {members_field: user_id}, "$set": {"updatedAt": now}}
    if counter_field:
        like_update["$inc"] = {counter_field: 1}
        unlike_update["$inc"] = {counter_field: -1}

    liked = await collection.update_one({"_id": doc_id, members_field: {"$ne": user_id}}, like_update)
    if liked.modified_count:
        state = True
    else:
        unliked = await collection.update_one({"_id": doc_id, members_field: user_id}, unlike_update)
        if not unliked.matched_count:
            return None
        state = False

    doc = await collection.find_one({"_id": doc_id})
    if doc is None:
        return None
    if counter_field and doc.get(counter_field, 0) < 0:
        await collection.update_one({"_id": doc_id}, {"$set": {counter_field: 0}})
        doc[counter_field] = 0
    return state, doc
