from __future__ import annotations

from typing import Iterable, Sequence

from motor.motor_asyncio import AsyncIOMotorDatabase

from openbalti.db.nosql.documents import to_object_id


async def populate(
    db: AsyncIOMotorDatabase,
    docs: Sequence[dict],
    field: str,
    collection: str,
    fields: Iterable[str],
) -> Sequence[dict]:
    """
    Replace the id stored in ``doc[field]`` with the referenced document,
    restricted to ``fields`` (``_id`` always included). Dangling references
    become None. Mutates and returns ``docs``.
    """
    ids = {to_object_id(d.get(field)) for d in docs}
    ids.discard(None)

    by_id: dict = {}
    if ids:
        projection = {f: 1 for f in fields}
        found = await db[collection].find({"_id": {"$in": list(ids)}}, projection).to_list(length=None)
        by_id = {doc["_id"]: doc for doc in found}

    for d in docs:
        if isinstance(d.get(field), dict):
            continue
        oid = to_object_id(d.get(field))
        d[field] = by_id.get(oid) if oid is not None else None
    return docs


async def populate_one(
    db: AsyncIOMotorDatabase, doc: dict | None, field: str, collection: str, fields: Iterable[str]
) -> dict | None:
    if doc is None:
        return None
    await populate(db, [doc], field, collection, fields)
    return doc


__all__ = ["populate", "populate_one"]
