from __future__ import annotations

import logging
import re
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError
from starlette.responses import JSONResponse

from openbalti.api.fastapi.db.nosql.mongo.deps import get_db
from openbalti.api.fastapi.envelope import ok
from openbalti.auth.deps import get_optional_user
from openbalti.auth.settings import get_auth_settings
from openbalti.db import collections as c
from openbalti.db.nosql.repository import NoSqlRepository
from openbalti.schemas.auth import SigninIn, SignupIn
from openbalti.security.passwords import hash_password, validate_password, verify_password
from openbalti.security.sessions import issue_session_token

logger = logging.getLogger(__name__)

ROUTER_PREFIX = "/auth"
ROUTER_TAG = "auth"

EMAIL_RE = re.compile(r"^\S+@\S+\.\S+$")

router = APIRouter()
users = NoSqlRepository(collection_name=c.USERS)


def user_summary(user: dict) -> dict:
    return {
        "id": str(user["_id"]),
        "name": user.get("name"),
        "email": user.get("email"),
        "role": user.get("role") or "user",
        "image": user.get("image"),
    }


def _set_session_cookie(response: JSONResponse, token: str) -> None:
    settings = get_auth_settings()
    response.set_cookie(
        settings.cookie_name,
        token,
        max_age=settings.jwt_lifetime_seconds,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
        path="/",
    )


@router.post("/signup")
async def signup(body: SignupIn, db: AsyncIOMotorDatabase = Depends(get_db)):
    if not body.name or not body.email or not body.password:
        raise HTTPException(400, "Name, email, and password are required")

    email = body.email.strip().lower()
    if not EMAIL_RE.match(email):
        raise HTTPException(400, "Please enter a valid email")
    validate_password(body.password)

    if await users.find_one(db, {"email": email}, projection={"_id": 1}):
        raise HTTPException(409, "User with this email already exists")

    try:
        user = await users.create(
            db,
            {
                "name": body.name.strip(),
                "email": email,
                "password": hash_password(body.password),
                "role": "user",
                "isPublic": True,
                "isVerified": False,
                "isFounder": False,
                "contributionStats": {"wordsAdded": 0, "wordsEdited": 0, "wordsReviewed": 0},
            },
        )
    except DuplicateKeyError:
        raise HTTPException(409, "User with this email already exists")

    logger.info("New user signed up: %s", user["_id"])
    data = user_summary(user)
    data.pop("image")
    return ok(data, status_code=201)


@router.post("/signin")
async def signin(body: SigninIn, db: AsyncIOMotorDatabase = Depends(get_db)):
    if not body.email or not body.password:
        raise HTTPException(400, "Email and password are required")

    user = await users.find_one(db, {"email": body.email.strip().lower()})
    if user is None or not verify_password(body.password, user.get("password")):
        logger.warning("Failed sign-in attempt")
        raise HTTPException(401, "Invalid email or password")

    token = issue_session_token(user)
    response = ok({"user": user_summary(user), "token": token})
    _set_session_cookie(response, token)
    return response


@router.post("/signout")
async def signout():
    response = ok(None, message="Signed out")
    response.delete_cookie(get_auth_settings().cookie_name, path="/")
    return response


@router.get("/session")
async def session(user: Optional[dict] = Depends(get_optional_user)):
    return ok(user_summary(user) if user else None)
