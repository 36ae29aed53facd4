"""
Dictionary routes under /api/words.

Modules register in name order: ``browse`` holds the static paths
(/categories, /suggestions, ...) so they win over ``entries``' /{id}.
"""

from __future__ import annotations

import re

from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from openbalti.api.fastapi.envelope import parse_object_id
from openbalti.db import collections as c
from openbalti.db.nosql.repository import NoSqlRepository

words = NoSqlRepository(collection_name=c.WORDS)


def contains(text: str) -> dict:
    """Case-insensitive substring match; user input never reaches the regex engine raw."""
    return {"$regex": re.escape(text), "$options": "i"}


def text_filter(search: str) -> dict:
    return {"$or": [{"balti": contains(search)}, {"english": contains(search)}]}


async def get_word_or_404(db: AsyncIOMotorDatabase, word_id: str, *, projection=None) -> dict:
    oid = parse_object_id(word_id, "word")
    word = await words.get(db, oid, projection=projection)
    if word is None:
        raise HTTPException(404, "Word not found")
    return word


def suggestion(word: dict, kind: str) -> dict:
    return {
        "id": str(word["_id"]),
        "text": f"{word.get('balti')} ({word.get('english')})",
        "balti": word.get("balti"),
        "english": word.get("english"),
        "type": kind,
    }
