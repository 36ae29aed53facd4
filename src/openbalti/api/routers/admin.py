from __future__ import annotations

import hmac
import logging

from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from openbalti.api.fastapi.db.nosql.mongo.deps import get_db
from openbalti.api.fastapi.envelope import ok, parse_object_id
from openbalti.auth.settings import get_auth_settings
from openbalti.db import collections as c
from openbalti.db.nosql.repository import NoSqlRepository
from openbalti.schemas.users import DirectSetOwnerIn, RoleIn, SetOwnerIn
from openbalti.security.permissions import ROLES, RequirePermission, has_permission
from openbalti.services.owner import promote_to_owner
from openbalti.services.stats import dashboard_stats as compute_dashboard_stats
from openbalti.services.stats import rebuild_contribution_stats

logger = logging.getLogger(__name__)

ROUTER_PREFIX = "/admin"
ROUTER_TAG = "admin"

router = APIRouter()
users = NoSqlRepository(collection_name=c.USERS)


def _owner_card(user: dict) -> dict:
    return {
        "id": user["_id"],
        "name": user.get("name"),
        "role": user.get("role"),
        "isVerified": user.get("isVerified"),
        "isFounder": user.get("isFounder"),
    }


@router.get("/users")
async def list_users(
    _admin: dict = RequirePermission("user.manage"),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    found = await users.list(db, sort=[("createdAt", -1)], projection={"password": 0})
    return ok(found)


@router.put("/users/{user_id}/role")
async def change_role(
    user_id: str,
    body: RoleIn,
    admin: dict = RequirePermission("user.manage"),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    oid = parse_object_id(user_id, "user")
    if body.role not in ROLES:
        raise HTTPException(400, "Invalid role")
    if body.role == "owner" and not has_permission(admin, "owner.assign"):
        raise HTTPException(403, "Only the owner can assign the owner role")

    user = await users.update(db, oid, {"role": body.role}, projection={"password": 0})
    if user is None:
        raise HTTPException(404, "User not found")
    logger.info("Role of user %s set to %s by %s", oid, body.role, admin["_id"])
    return ok(user)


@router.get("/dashboard-stats")
async def dashboard_stats(
    _admin: dict = RequirePermission("admin.dashboard"),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    return ok(await compute_dashboard_stats(db))


@router.post("/update-stats")
async def update_stats(
    _admin: dict = RequirePermission("user.manage"),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    count = await rebuild_contribution_stats(db)
    return ok(
        {"usersUpdated": count},
        message="All user statistics have been updated successfully",
    )


@router.post("/set-owner")
async def set_owner(
    body: SetOwnerIn,
    _admin: dict = RequirePermission("user.manage"),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    if not body.userId:
        raise HTTPException(400, "User ID is required")
    user = await promote_to_owner(db, {"_id": parse_object_id(body.userId, "user")})
    if user is None:
        raise HTTPException(404, "User not found")
    return ok(_owner_card(user), message="User has been set as the owner and founder")


@router.post("/direct-set-owner", include_in_schema=False)
async def direct_set_owner(body: DirectSetOwnerIn, db: AsyncIOMotorDatabase = Depends(get_db)):
    """Bootstrap path for the first owner, guarded by AUTH_OWNER_SECRET_KEY."""
    configured = get_auth_settings().owner_secret_key
    if configured is None or not configured.get_secret_value():
        raise HTTPException(403, "Owner bootstrap is disabled")
    if not body.email or not body.secretKey:
        raise HTTPException(400, "Email and secret key are required")
    if not hmac.compare_digest(body.secretKey.encode(), configured.get_secret_value().encode()):
        logger.warning("Rejected owner bootstrap attempt for %s", body.email)
        raise HTTPException(403, "Invalid secret key")

    user = await promote_to_owner(db, {"email": body.email.strip().lower()})
    if user is None:
        raise HTTPException(404, "No user found with that email")
    return ok(
        _owner_card(user),
        message="Account updated successfully. You are now the verified owner and founder.",
    )
