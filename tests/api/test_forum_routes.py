from __future__ import annotations

import pytest
from bson import ObjectId

from openbalti.db import collections as c
from tests.helpers import auth_headers


async def _post(client, user, **fields):
    payload = {"title": "How do you say hello?", "content": "Looking for greetings", **fields}
    r = await client.post("/api/forum/posts", json=payload, headers=auth_headers(user))
    assert r.status_code == 201, r.text
    return r.json()["data"]


@pytest.mark.asyncio
async def test_create_post_and_validation(client, user):
    post = await _post(client, user, tags=["greetings"])
    assert post["category"] == "general"
    assert post["author"]["name"] == "Amina"
    assert post["isLocked"] is False

    r = await client.post("/api/forum/posts", json={"title": "t", "content": "c", "category": "sports"}, headers=auth_headers(user))
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid category"

    r = await client.post("/api/forum/posts", json={"title": " ", "content": "c"}, headers=auth_headers(user))
    assert r.json()["error"] == "Title and content are required"


@pytest.mark.asyncio
async def test_list_filters_and_sorts(client, db, user, other_user):
    general = await _post(client, user)
    dialect = await _post(client, user, title="Skardu vs Khaplu", category="dialect")
    await client.post(f"/api/forum/posts/{dialect['_id']}/like", headers=auth_headers(other_user))

    r = await client.get("/api/forum/posts", params={"category": "dialect"})
    assert [p["_id"] for p in r.json()["data"]] == [dialect["_id"]]

    r = await client.get("/api/forum/posts", params={"category": "all", "sort": "popular"})
    assert [p["_id"] for p in r.json()["data"]] == [dialect["_id"], general["_id"]]

    r = await client.get("/api/forum/posts", params={"search": "KHAPLU"})
    assert len(r.json()["data"]) == 1


@pytest.mark.asyncio
async def test_get_post_counts_views(client, user):
    post = await _post(client, user)
    r = await client.get(f"/api/forum/posts/{post['_id']}")
    assert r.json()["data"]["views"] == 1
    r = await client.get("/api/forum/posts/bad")
    assert r.json()["error"] == "Invalid post ID format"


@pytest.mark.asyncio
async def test_like_post(client, user, other_user):
    post = await _post(client, user)
    url = f"/api/forum/posts/{post['_id']}/like"
    r = await client.post(url, headers=auth_headers(other_user))
    assert r.json()["data"] == {"liked": True, "likeCount": 1}
    r = await client.post(url, headers=auth_headers(other_user))
    assert r.json()["data"] == {"liked": False, "likeCount": 0}


@pytest.mark.asyncio
async def test_threaded_replies(client, db, user, other_user):
    post = await _post(client, user)
    url = f"/api/forum/posts/{post['_id']}/replies"

    r = await client.post(url, json={"content": "Try 'julle'"}, headers=auth_headers(other_user))
    assert r.status_code == 201
    top = r.json()["data"]
    assert top["level"] == 0 and top["replyPath"] == ""

    r = await client.post(url, json={"content": "Thanks!", "parentReplyId": top["_id"]}, headers=auth_headers(user))
    child = r.json()["data"]
    assert child["level"] == 1
    assert child["replyPath"] == top["_id"]
    assert child["parentReply"] == top["_id"]

    r = await client.post(url, json={"content": "x", "parentReplyId": "nope"}, headers=auth_headers(user))
    assert r.status_code == 404
    assert r.json()["error"] == "Parent reply not found"

    flat = await client.get(url)
    assert [x["_id"] for x in flat.json()["data"]] == [top["_id"], child["_id"]]

    tree = await client.get(url, params={"format": "tree"})
    roots = tree.json()["data"]
    assert len(roots) == 1
    assert roots[0]["children"][0]["_id"] == child["_id"]

    stored = await db[c.FORUM_POSTS].find_one({"_id": ObjectId(post["_id"])})
    assert len(stored["replies"]) == 2


@pytest.mark.asyncio
async def test_parent_reply_must_belong_to_same_post(client, db, user, other_user):
    first = await _post(client, user)
    second = await _post(client, user, title="Counting to ten")

    r = await client.post(
        f"/api/forum/posts/{first['_id']}/replies", json={"content": "Hello is 'julle'"}, headers=auth_headers(other_user)
    )
    elsewhere = r.json()["data"]

    r = await client.post(
        f"/api/forum/posts/{second['_id']}/replies",
        json={"content": "Wrong thread", "parentReplyId": elsewhere["_id"]},
        headers=auth_headers(user),
    )
    assert r.status_code == 404
    assert r.json()["error"] == "Parent reply not found"
    assert await db[c.FORUM_REPLIES].count_documents({"postId": ObjectId(second["_id"])}) == 0


@pytest.mark.asyncio
async def test_locked_post_rejects_replies(client, db, user):
    post = await _post(client, user)
    await db[c.FORUM_POSTS].update_one({"title": post["title"]}, {"$set": {"isLocked": True}})
    r = await client.post(f"/api/forum/posts/{post['_id']}/replies", json={"content": "hi"}, headers=auth_headers(user))
    assert r.status_code == 403
    assert r.json()["error"] == "Post is locked"


@pytest.mark.asyncio
async def test_edit_delete_and_like_reply(client, db, user, other_user, admin):
    post = await _post(client, user)
    r = await client.post(
        f"/api/forum/posts/{post['_id']}/replies", json={"content": "first"}, headers=auth_headers(other_user)
    )
    reply = r.json()["data"]
    url = f"/api/forum/replies/{reply['_id']}"

    r = await client.patch(url, json={"content": "changed"}, headers=auth_headers(user))
    assert r.status_code == 403
    assert r.json()["error"] == "Unauthorized"

    r = await client.patch(url, json={"content": "changed"}, headers=auth_headers(other_user))
    assert r.json()["data"]["isEdited"] is True
    assert r.json()["data"]["content"] == "changed"

    r = await client.post(f"{url}/like", headers=auth_headers(user))
    assert r.json()["data"] == {"liked": True, "likesCount": 1}

    r = await client.delete(url, headers=auth_headers(user))
    assert r.status_code == 403
    r = await client.delete(url, headers=auth_headers(admin))
    assert r.json() == {"success": True}
    stored = await db[c.FORUM_POSTS].find_one({})
    assert stored["replies"] == []
