from __future__ import annotations

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from openbalti.db import collections as c
from openbalti.db.nosql.indexes import INDEXES
from openbalti.db.nosql.populate import populate, populate_one
from openbalti.db.nosql.repository import NoSqlRepository
from tests.helpers import make_user

words = NoSqlRepository(collection_name=c.WORDS)


@pytest.mark.asyncio
async def test_create_sets_timestamps_and_get(db):
    word = await words.create(db, {"balti": "མེ", "english": "fire"})
    assert word["createdAt"] == word["updatedAt"]
    fetched = await words.get(db, word["_id"])
    assert fetched["english"] == "fire"
    assert await words.get(db, ObjectId()) is None


@pytest.mark.asyncio
async def test_list_count_and_paging(db):
    for i in range(5):
        await words.create(db, {"balti": f"b{i}", "english": f"e{i}", "n": i})
    page = await words.list(db, sort=[("n", 1)], offset=2, limit=2)
    assert [w["n"] for w in page] == [2, 3]
    assert await words.count(db, {"n": {"$gte": 3}}) == 2
    assert sorted(await words.distinct(db, "n", {"n": {"$lt": 2}})) == [0, 1]


@pytest.mark.asyncio
async def test_update_returns_new_document(db):
    word = await words.create(db, {"balti": "ས", "english": "earth"})
    updated = await words.update(db, word["_id"], {"english": "soil"})
    assert updated["english"] == "soil"
    assert updated["updatedAt"] >= word["updatedAt"]
    assert await words.update(db, ObjectId(), {"english": "x"}) is None


@pytest.mark.asyncio
async def test_delete_and_delete_many(db):
    a = await words.create(db, {"balti": "a", "english": "a", "tag": "x"})
    await words.create(db, {"balti": "b", "english": "b", "tag": "x"})
    assert await words.delete(db, a["_id"])
    assert not await words.delete(db, a["_id"])
    assert await words.delete_many(db, {"tag": "x"}) == 1


@pytest.mark.asyncio
async def test_unique_email_index(db):
    await make_user(db, email="dup@example.com")
    with pytest.raises(DuplicateKeyError):
        await make_user(db, email="dup@example.com")


def test_every_unique_index_is_named():
    unique = [m.document["name"] for models in INDEXES.values() for m in models if m.document.get("unique")]
    assert set(unique) == {"email_unique", "user_word_unique", "word_user_unique", "word_unique", "slug_unique"}


@pytest.mark.asyncio
async def test_populate_replaces_references(db, user):
    docs = [{"author": user["_id"]}, {"author": ObjectId()}, {"author": None}, {"author": {"name": "done"}}]
    await populate(db, docs, "author", c.USERS, ("name",))
    assert docs[0]["author"] == {"_id": user["_id"], "name": "Amina"}
    assert docs[1]["author"] is None
    assert docs[2]["author"] is None
    assert docs[3]["author"] == {"name": "done"}
    assert await populate_one(db, None, "author", c.USERS, ("name",)) is None
