from __future__ import annotations

import pytest
from bson import ObjectId

from openbalti.db import collections as c
from openbalti.services.likes import toggle_like
from tests.helpers import insert


@pytest.mark.asyncio
async def test_toggle_like_with_counter(db):
    blog = await insert(db, c.BLOGS, title="t", likes=0, likedBy=[])
    uid = ObjectId()
    coll = db[c.BLOGS]

    liked, doc = await toggle_like(coll, blog["_id"], uid, members_field="likedBy", counter_field="likes")
    assert liked is True
    assert doc["likes"] == 1 and doc["likedBy"] == [uid]

    liked, doc = await toggle_like(coll, blog["_id"], uid, members_field="likedBy", counter_field="likes")
    assert liked is False
    assert doc["likes"] == 0 and doc["likedBy"] == []


@pytest.mark.asyncio
async def test_toggle_like_missing_document(db):
    assert await toggle_like(db[c.BLOGS], ObjectId(), ObjectId(), members_field="likedBy") is None
