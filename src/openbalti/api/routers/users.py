from __future__ import annotations

import re
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from openbalti.api.fastapi.db.nosql.mongo.deps import get_db
from openbalti.api.fastapi.envelope import ok, pagination, parse_object_id
from openbalti.auth.deps import get_current_user, get_optional_user
from openbalti.db import collections as c
from openbalti.db.nosql.repository import NoSqlRepository
from openbalti.schemas.users import UserUpdateIn
from openbalti.security.permissions import is_staff
from openbalti.services.profile import calculate_profile_completion

ROUTER_PREFIX = "/users"
ROUTER_TAG = "users"

router = APIRouter()
users = NoSqlRepository(collection_name=c.USERS)

DIRECTORY_FIELDS = {"name": 1, "image": 1, "role": 1, "bio": 1, "contributionStats": 1, "createdAt": 1}
PROFILE_FIELDS = (
    "name",
    "image",
    "role",
    "bio",
    "location",
    "website",
    "isPublic",
    "isVerified",
    "isFounder",
    "contributionStats",
    "createdAt",
)
UPDATED_FIELDS = ("name", "bio", "location", "website", "isPublic")

DIRECTORY_SORTS = {
    "contributions": [
        ("contributionStats.wordsAdded", -1),
        ("contributionStats.wordsEdited", -1),
        ("contributionStats.wordsReviewed", -1),
    ],
    "recent": [("createdAt", -1)],
    "name": [("name", 1)],
}


def _is_self(viewer: Optional[dict], user_oid) -> bool:
    return viewer is not None and viewer["_id"] == user_oid


async def _get_user(db: AsyncIOMotorDatabase, user_id: str) -> dict:
    user = await users.get(db, parse_object_id(user_id, "user"), projection={"password": 0})
    if user is None:
        raise HTTPException(404, "User not found")
    return user


@router.get("")
async def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    sortBy: Literal["contributions", "recent", "name"] = "contributions",
    search: str = "",
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    query: dict = {"isPublic": True}
    if search:
        query["name"] = {"$regex": re.escape(search), "$options": "i"}
    found = await users.list(
        db,
        filter=query,
        sort=DIRECTORY_SORTS[sortBy] + [("_id", 1)],
        offset=(page - 1) * limit,
        limit=limit,
        projection=DIRECTORY_FIELDS,
    )
    total = await users.count(db, query)
    return ok(found, pagination=pagination(total, page, limit))


@router.get("/{user_id}")
async def get_user(
    user_id: str,
    viewer: Optional[dict] = Depends(get_optional_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    user = await _get_user(db, user_id)
    privileged = _is_self(viewer, user["_id"]) or is_staff(viewer)
    if not user.get("isPublic", True) and not privileged:
        raise HTTPException(403, "This profile is private")

    data = {"id": user["_id"], **{f: user.get(f) for f in PROFILE_FIELDS}}
    if privileged:
        data["email"] = user.get("email")
    return ok(data)


@router.put("/{user_id}")
async def update_user(
    user_id: str,
    body: UserUpdateIn,
    viewer: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    oid = parse_object_id(user_id, "user")
    if not _is_self(viewer, oid) and not is_staff(viewer):
        raise HTTPException(403, "Unauthorized")

    changes = body.model_dump(exclude_unset=True)
    if "name" in changes:
        changes["name"] = (changes["name"] or "").strip()
        if not changes["name"]:
            raise HTTPException(400, "Name cannot be empty")
    # null leaves optional fields unchanged
    changes = {field: value for field, value in changes.items() if value is not None}
    user = await users.update(db, oid, changes, projection={"password": 0})
    if user is None:
        raise HTTPException(404, "User not found")
    return ok({"id": user["_id"], **{f: user.get(f) for f in UPDATED_FIELDS}})


@router.get("/{user_id}/profile-completion")
async def profile_completion(
    user_id: str,
    viewer: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    oid = parse_object_id(user_id, "user")
    if not _is_self(viewer, oid) and not is_staff(viewer):
        raise HTTPException(403, "Unauthorized")
    user = await _get_user(db, user_id)
    return ok(calculate_profile_completion(user))
