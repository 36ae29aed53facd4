"""Document factories and auth helpers shared by the test modules."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict

from openbalti.db import collections as c
from openbalti.db.nosql.documents import utcnow
from openbalti.security.passwords import hash_password
from openbalti.security.sessions import issue_session_token

DEFAULT_PASSWORD = "balti-dictionary-1"


async def insert(db, collection: str, **fields: Any) -> dict:
    """Insert a document with timestamps and return it with its _id."""
    now = utcnow()
    doc = {"createdAt": now, "updatedAt": now, **fields}
    result = await db[collection].insert_one(doc)
    doc["_id"] = result.inserted_id
    return doc


async def make_word(db, balti: str = "ཆུ", english: str = "water", **fields: Any) -> dict:
    defaults: Dict[str, Any] = {
        "status": "approved",
        "reviewStatus": None,
        "feedbackStats": {"usefulCount": 0, "trustedCount": 0, "needsReviewCount": 0, "totalFeedback": 0},
    }
    defaults.update(fields)
    return await insert(db, c.WORDS, balti=balti, english=english, **defaults)


@lru_cache
def _hashed(password: str) -> str:
    return hash_password(password)


async def make_user(
    db,
    *,
    name: str = "Test User",
    email: str = "user@example.com",
    role: str = "user",
    password: str = DEFAULT_PASSWORD,
    **fields: Any,
) -> dict:
    """Create a user document the way signup does; each password is hashed once per run."""
    defaults: Dict[str, Any] = {
        "isPublic": True,
        "isVerified": False,
        "isFounder": False,
        "contributionStats": {"wordsAdded": 0, "wordsEdited": 0, "wordsReviewed": 0},
    }
    defaults.update(fields)
    return await insert(
        db, c.USERS, name=name, email=email, role=role, password=_hashed(password), **defaults
    )


def auth_headers(user: dict) -> dict[str, str]:
    return {"Authorization": f"Bearer {issue_session_token(user)}"}
