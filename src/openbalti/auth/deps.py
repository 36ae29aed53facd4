from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from openbalti.api.fastapi.db.nosql.mongo.deps import get_db
from openbalti.auth.settings import get_auth_settings
from openbalti.db import collections as c
from openbalti.db.nosql.documents import to_object_id
from openbalti.security.sessions import decode_session_token

logger = logging.getLogger(__name__)


def _token_from_request(request: Request) -> Optional[str]:
    auth = request.headers.get("authorization")
    if auth and auth.lower().startswith("bearer "):
        return auth[7:].strip() or None
    return request.cookies.get(get_auth_settings().cookie_name)


async def get_optional_user(
    request: Request, db: AsyncIOMotorDatabase = Depends(get_db)
) -> Optional[dict]:
    """The signed-in user document (password excluded), or None."""
    token = _token_from_request(request)
    if not token:
        return None
    claims = decode_session_token(token)
    if not claims:
        return None
    oid = to_object_id(claims.get("sub"))
    if oid is None:
        return None
    # Re-read so role changes take effect without a new token.
    user = await db[c.USERS].find_one({"_id": oid}, {"password": 0})
    if user is None:
        logger.debug("Session token for missing user %s", oid)
    return user


async def get_current_user(user: Optional[dict] = Depends(get_optional_user)) -> dict:
    if user is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return user


__all__ = ["get_optional_user", "get_current_user"]
