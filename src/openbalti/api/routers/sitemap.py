from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from motor.motor_asyncio import AsyncIOMotorDatabase

from openbalti.api.fastapi.db.nosql.mongo.deps import get_db
from openbalti.app.settings import get_app_settings
from openbalti.db import collections as c
from openbalti.services.sitemap import render_sitemap

ROUTER_TAG = "sitemap"

router = APIRouter()


@router.get("/sitemap", response_class=Response)
async def sitemap(db: AsyncIOMotorDatabase = Depends(get_db)):
    words = await db[c.WORDS].find({}, {"updatedAt": 1}).to_list(length=None)
    users = await db[c.USERS].find({"isPublic": True}, {"updatedAt": 1}).to_list(length=None)
    xml = render_sitemap(get_app_settings().public_base_url, words, users)
    return Response(content=xml, media_type="application/xml")
