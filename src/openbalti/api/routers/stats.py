from __future__ import annotations

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from openbalti.api.fastapi.db.nosql.mongo.deps import get_db
from openbalti.api.fastapi.envelope import ok
from openbalti.services import stats

ROUTER_PREFIX = "/stats"
ROUTER_TAG = "stats"

router = APIRouter()


@router.get("/community")
async def community(db: AsyncIOMotorDatabase = Depends(get_db)):
    return ok(await stats.community_stats(db))


@router.get("/quick")
async def quick(db: AsyncIOMotorDatabase = Depends(get_db)):
    return ok(await stats.quick_stats(db))
