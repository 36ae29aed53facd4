from __future__ import annotations

import logging
import re
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from openbalti.api.fastapi.db.nosql.mongo.deps import get_db
from openbalti.api.fastapi.envelope import ok, parse_object_id
from openbalti.auth.deps import get_current_user
from openbalti.db import collections as c
from openbalti.db.nosql.documents import serialize_docs, to_object_id, utcnow
from openbalti.db.nosql.populate import populate, populate_one
from openbalti.db.nosql.repository import NoSqlRepository
from openbalti.schemas.community import ForumPostIn, ReplyIn
from openbalti.schemas.enums import ForumCategory
from openbalti.security.permissions import is_staff
from openbalti.services.likes import toggle_like
from openbalti.services.replies import build_reply_tree, child_position

logger = logging.getLogger(__name__)

ROUTER_PREFIX = "/forum"
ROUTER_TAG = "forum"

router = APIRouter()
posts = NoSqlRepository(collection_name=c.FORUM_POSTS)
replies = NoSqlRepository(collection_name=c.FORUM_REPLIES)

AUTHOR_FIELDS = ("name", "email")
LIST_LIMIT = 50

SORTS = {
    "recent": [("isPinned", -1), ("createdAt", -1)],
    "popular": [("likeCount", -1), ("views", -1)],
    "active": [("lastActivity", -1)],
}


def _contains(text: str) -> dict:
    return {"$regex": re.escape(text), "$options": "i"}


async def _get_reply(db: AsyncIOMotorDatabase, reply_id: str) -> dict:
    reply = await replies.get(db, parse_object_id(reply_id, "reply"))
    if reply is None:
        raise HTTPException(404, "Reply not found")
    return reply


@router.get("/posts")
async def list_posts(
    category: Optional[str] = None,
    search: Optional[str] = None,
    sort: str = "recent",
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    query: dict = {}
    if category and category != "all":
        query["category"] = category
    if search:
        query["$or"] = [
            {"title": _contains(search)},
            {"content": _contains(search)},
            {"tags": _contains(search)},
        ]
    found = await posts.list(db, filter=query, sort=SORTS.get(sort, SORTS["recent"]), limit=LIST_LIMIT)
    await populate(db, found, "author", c.USERS, AUTHOR_FIELDS)
    return ok(found)


@router.post("/posts")
async def create_post(
    body: ForumPostIn,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    title = (body.title or "").strip()
    content = (body.content or "").strip()
    if not title or not content:
        raise HTTPException(400, "Title and content are required")

    category = body.category or ForumCategory.GENERAL.value
    if category not in {cat.value for cat in ForumCategory}:
        raise HTTPException(400, "Invalid category")

    doc = {
        "title": title,
        "content": content,
        "category": category,
        "tags": body.tags or [],
        "author": user["_id"],
        "replies": [],
        "likes": [],
        "likeCount": 0,
        "views": 0,
        "isPinned": False,
        "isLocked": False,
        "lastActivity": utcnow(),
    }
    if body.wordReference:
        doc["wordReference"] = parse_object_id(body.wordReference, "word")

    post = await posts.create(db, doc)
    logger.info("Forum post %s created by %s", post["_id"], user["_id"])
    await populate_one(db, post, "author", c.USERS, AUTHOR_FIELDS)
    return ok(post, status_code=201)


@router.get("/posts/{post_id}")
async def get_post(post_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    post = await posts.collection(db).find_one_and_update(
        {"_id": parse_object_id(post_id, "post")},
        {"$inc": {"views": 1}},
        return_document=ReturnDocument.AFTER,
    )
    if post is None:
        raise HTTPException(404, "Post not found")
    await populate_one(db, post, "author", c.USERS, AUTHOR_FIELDS)
    return ok(post)


@router.post("/posts/{post_id}/like")
async def like_post(
    post_id: str,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    oid = parse_object_id(post_id, "post")
    result = await toggle_like(posts.collection(db), oid, user["_id"], members_field="likes", counter_field="likeCount")
    if result is None:
        raise HTTPException(404, "Post not found")
    liked, post = result
    return ok({"liked": liked, "likeCount": len(post.get("likes") or [])})


@router.get("/posts/{post_id}/replies")
async def list_replies(
    post_id: str,
    format: Literal["flat", "tree"] = "flat",
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    found = await replies.list(
        db,
        filter={"postId": parse_object_id(post_id, "post")},
        sort=[("replyPath", 1), ("createdAt", 1)],
    )
    await populate(db, found, "author", c.USERS, AUTHOR_FIELDS)
    if format == "tree":
        return ok(build_reply_tree(serialize_docs(found)))
    return ok(found)


@router.post("/posts/{post_id}/replies")
async def create_reply(
    post_id: str,
    body: ReplyIn,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    content = (body.content or "").strip()
    if not content:
        raise HTTPException(400, "Content is required")

    post = await posts.get(db, parse_object_id(post_id, "post"), projection={"isLocked": 1})
    if post is None:
        raise HTTPException(404, "Post not found")
    if post.get("isLocked"):
        raise HTTPException(403, "Post is locked")

    parent = None
    if body.parentReplyId:
        parent_oid = to_object_id(body.parentReplyId)
        if parent_oid is not None:
            parent = await replies.find_one(db, {"_id": parent_oid, "postId": post["_id"]})
        if parent is None:
            raise HTTPException(404, "Parent reply not found")

    level, path = child_position(parent)
    doc = {
        "content": content,
        "author": user["_id"],
        "postId": post["_id"],
        "likes": [],
        "isEdited": False,
        "level": level,
        "replyPath": path,
    }
    if parent is not None:
        doc["parentReply"] = parent["_id"]
    reply = await replies.create(db, doc)

    await posts.collection(db).update_one(
        {"_id": post["_id"]},
        {"$push": {"replies": reply["_id"]}, "$set": {"lastActivity": utcnow()}},
    )
    await populate_one(db, reply, "author", c.USERS, AUTHOR_FIELDS)
    return ok(reply, status_code=201)


@router.patch("/replies/{reply_id}")
async def edit_reply(
    reply_id: str,
    body: ReplyIn,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    content = (body.content or "").strip()
    if not content:
        raise HTTPException(400, "Content is required")
    reply = await _get_reply(db, reply_id)
    if reply.get("author") != user["_id"]:
        raise HTTPException(403, "Unauthorized")
    updated = await replies.update(db, reply["_id"], {"content": content, "isEdited": True, "editedAt": utcnow()})
    return ok(updated)


@router.delete("/replies/{reply_id}")
async def delete_reply(
    reply_id: str,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    reply = await _get_reply(db, reply_id)
    if reply.get("author") != user["_id"] and not is_staff(user):
        raise HTTPException(403, "Unauthorized")
    await replies.delete(db, reply["_id"])
    await posts.collection(db).update_one({"_id": reply.get("postId")}, {"$pull": {"replies": reply["_id"]}})
    logger.info("Reply %s deleted by %s", reply["_id"], user["_id"])
    return ok(None, include_data=False)


@router.post("/replies/{reply_id}/like")
async def like_reply(
    reply_id: str,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    oid = parse_object_id(reply_id, "reply")
    result = await toggle_like(replies.collection(db), oid, user["_id"], members_field="likes")
    if result is None:
        raise HTTPException(404, "Reply not found")
    liked, reply = result
    return ok({"liked": liked, "likesCount": len(reply.get("likes") or [])})
