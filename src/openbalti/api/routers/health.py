from __future__ import annotations

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase
from starlette.responses import JSONResponse

from openbalti.api.fastapi.db.nosql.mongo.deps import get_db
from openbalti.api.fastapi.envelope import ok
from openbalti.db.health import mongo_healthcheck

ROUTER_TAG = "health"

router = APIRouter()


@router.get("/health")
async def health(db: AsyncIOMotorDatabase = Depends(get_db)):
    if await mongo_healthcheck(db):
        return ok({"mongo": "ok"})
    return JSONResponse(status_code=503, content={"success": False, "error": "Database unavailable"})
