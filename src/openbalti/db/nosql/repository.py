from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ReturnDocument

from openbalti.db.nosql.documents import to_object_id, utcnow

SortSpec = Sequence[tuple[str, int]]


class NoSqlRepository:
    """
    Thin async repository over a single Mongo collection.

    Every method takes the database handle first so the same repository
    instance can be shared between requests, the CLI and tests.
    Timestamps (createdAt/updatedAt) are maintained here.
    """

    def __init__(self, *, collection_name: str):
        self.collection_name = collection_name

    def collection(self, db: AsyncIOMotorDatabase) -> AsyncIOMotorCollection:
        return db[self.collection_name]

    @staticmethod
    def _id_filter(id_value: Any) -> dict:
        oid = to_object_id(id_value)
        return {"_id": oid if oid is not None else id_value}

    async def create(self, db: AsyncIOMotorDatabase, data: Mapping[str, Any]) -> dict:
        now = utcnow()
        doc = {**data}
        doc.setdefault("createdAt", now)
        doc.setdefault("updatedAt", now)
        result = await self.collection(db).insert_one(doc)
        doc["_id"] = result.inserted_id
        return doc

    async def get(
        self, db: AsyncIOMotorDatabase, id_value: Any, *, projection: Optional[Mapping[str, Any]] = None
    ) -> Optional[dict]:
        return await self.collection(db).find_one(self._id_filter(id_value), projection)

    async def find_one(
        self,
        db: AsyncIOMotorDatabase,
        filter: Mapping[str, Any],
        *,
        projection: Optional[Mapping[str, Any]] = None,
    ) -> Optional[dict]:
        return await self.collection(db).find_one(dict(filter), projection)

    async def list(
        self,
        db: AsyncIOMotorDatabase,
        *,
        filter: Optional[Mapping[str, Any]] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        sort: Optional[SortSpec] = None,
        projection: Optional[Mapping[str, Any]] = None,
    ) -> list[dict]:
        cursor = self.collection(db).find(dict(filter or {}), projection)
        if sort:
            cursor = cursor.sort(list(sort))
        if offset:
            cursor = cursor.skip(offset)
        if limit:
            cursor = cursor.limit(limit)
        return await cursor.to_list(length=None)

    async def count(self, db: AsyncIOMotorDatabase, filter: Optional[Mapping[str, Any]] = None) -> int:
        return await self.collection(db).count_documents(dict(filter or {}))

    async def distinct(
        self, db: AsyncIOMotorDatabase, key: str, filter: Optional[Mapping[str, Any]] = None
    ) -> list:
        return await self.collection(db).distinct(key, dict(filter or {}))

    async def update(
        self,
        db: AsyncIOMotorDatabase,
        id_value: Any,
        data: Mapping[str, Any],
        *,
        extra: Optional[Mapping[str, Any]] = None,
        projection: Optional[Mapping[str, Any]] = None,
    ) -> Optional[dict]:
        """
        ``data`` goes through ``$set``; ``extra`` carries other operators
        (``$inc``, ``$addToSet``, ...). Returns the updated document or None.
        """
        update: dict[str, Any] = {"$set": {**data, "updatedAt": utcnow()}}
        for op, body in (extra or {}).items():
            if op == "$set":
                update["$set"].update(body)
            else:
                update[op] = body
        return await self.collection(db).find_one_and_update(
            self._id_filter(id_value),
            update,
            projection=projection,
            return_document=ReturnDocument.AFTER,
        )

    async def delete(self, db: AsyncIOMotorDatabase, id_value: Any) -> bool:
        result = await self.collection(db).delete_one(self._id_filter(id_value))
        return result.deleted_count > 0

    async def delete_many(self, db: AsyncIOMotorDatabase, filter: Mapping[str, Any]) -> int:
        result = await self.collection(db).delete_many(dict(filter))
        return result.deleted_count


__all__ = ["NoSqlRepository", "SortSpec"]
