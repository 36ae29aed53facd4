from __future__ import annotations

import logging
import re
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from openbalti.api.fastapi.db.nosql.mongo.deps import get_db
from openbalti.api.fastapi.envelope import ok, pagination, parse_object_id
from openbalti.auth.deps import get_current_user
from openbalti.db import collections as c
from openbalti.db.nosql.populate import populate, populate_one
from openbalti.db.nosql.repository import NoSqlRepository
from openbalti.schemas.community import BlogCommentIn, BlogIn
from openbalti.schemas.enums import ActivityAction, TargetType
from openbalti.security.permissions import is_staff
from openbalti.services.activity import log_activity
from openbalti.services.likes import toggle_like
from openbalti.services.markdown import excerpt, reading_time, slugify

logger = logging.getLogger(__name__)

ROUTER_PREFIX = "/blogs"
ROUTER_TAG = "blogs"

router = APIRouter()
blogs = NoSqlRepository(collection_name=c.BLOGS)
comments = NoSqlRepository(collection_name=c.BLOG_COMMENTS)

AUTHOR_CARD = ("name", "image")
AUTHOR_PROFILE = ("name", "image", "bio")
EDITABLE = ("title", "content", "excerpt", "tags", "category", "featuredImage")


def _contains(text: str) -> dict:
    return {"$regex": re.escape(text), "$options": "i"}


def _can_modify(user: dict, doc: dict) -> bool:
    return doc.get("author") == user["_id"] or is_staff(user)


async def _get_blog(db: AsyncIOMotorDatabase, blog_id: str) -> dict:
    blog = await blogs.get(db, parse_object_id(blog_id, "blog"))
    if blog is None:
        raise HTTPException(404, "Blog not found")
    return blog


async def _get_comment(db: AsyncIOMotorDatabase, blog: dict, comment_id: str) -> dict:
    comment = await comments.find_one(db, {"_id": parse_object_id(comment_id, "comment"), "blog": blog["_id"]})
    if comment is None:
        raise HTTPException(404, "Comment not found")
    return comment


async def _view(db: AsyncIOMotorDatabase, filter: dict) -> dict:
    blog = await blogs.collection(db).find_one_and_update(
        filter, {"$inc": {"views": 1}}, return_document=ReturnDocument.AFTER
    )
    if blog is None:
        raise HTTPException(404, "Blog not found")
    await populate_one(db, blog, "author", c.USERS, AUTHOR_PROFILE)
    blog["readingTime"] = reading_time(blog.get("content") or "")
    return blog


@router.get("")
async def list_blogs(
    search: str = "",
    category: Optional[str] = None,
    tag: Optional[str] = None,
    featured: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    query: dict = {"published": True}
    if search:
        query["$or"] = [
            {"title": _contains(search)},
            {"content": _contains(search)},
            {"tags": _contains(search)},
        ]
    if category:
        query["category"] = category
    if tag:
        query["tags"] = tag
    if featured == "true":
        query["featured"] = True

    found = await blogs.list(db, filter=query, sort=[("createdAt", -1)], offset=(page - 1) * limit, limit=limit)
    await populate(db, found, "author", c.USERS, AUTHOR_CARD)
    total = await blogs.count(db, query)
    return ok(found, pagination=pagination(total, page, limit))


@router.post("")
async def create_blog(
    body: BlogIn,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    title = (body.title or "").strip()
    if not title or not body.content:
        raise HTTPException(400, "Title and content are required")

    slug = slugify(title)
    if await blogs.find_one(db, {"slug": slug}, projection={"_id": 1}):
        raise HTTPException(409, "A blog with this title already exists")

    doc = {
        "title": title,
        "slug": slug,
        "content": body.content,
        "excerpt": body.excerpt or excerpt(body.content),
        "tags": body.tags or [],
        "category": body.category,
        "featuredImage": body.featuredImage,
        "published": bool(body.published),
        "featured": bool(body.featured),
        "author": user["_id"],
        "views": 0,
        "likes": 0,
        "likedBy": [],
    }
    try:
        blog = await blogs.create(db, doc)
    except DuplicateKeyError:
        raise HTTPException(409, "A blog with this title already exists")

    await log_activity(
        db,
        user,
        ActivityAction.CREATE,
        target_type=TargetType.BLOG,
        target_id=blog["_id"],
        details=f"Created new blog: {blog['title']}",
    )
    return ok(blog, status_code=201, message="Blog created successfully")


@router.get("/by-slug/{slug}")
async def get_blog_by_slug(slug: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    return ok(await _view(db, {"slug": slug.lower()}))


@router.get("/{blog_id}")
async def get_blog(blog_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    return ok(await _view(db, {"_id": parse_object_id(blog_id, "blog")}))


@router.put("/{blog_id}")
async def update_blog(
    blog_id: str,
    body: BlogIn,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    blog = await _get_blog(db, blog_id)
    if not _can_modify(user, blog):
        raise HTTPException(403, "Forbidden")

    # empty strings and lists leave the field as it was
    changes = {field: getattr(body, field) for field in EDITABLE if getattr(body, field)}
    if "title" in changes:
        changes["title"] = changes["title"].strip() or blog["title"]
    for flag in ("published", "featured"):
        if getattr(body, flag) is not None:
            changes[flag] = getattr(body, flag)

    updated = await blogs.update(db, blog["_id"], changes)
    await log_activity(
        db,
        user,
        ActivityAction.UPDATE,
        target_type=TargetType.BLOG,
        target_id=blog["_id"],
        details=f"Updated blog: {updated['title']}",
    )
    return ok(updated, message="Blog updated successfully")


@router.delete("/{blog_id}")
async def delete_blog(
    blog_id: str,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    blog = await _get_blog(db, blog_id)
    if not _can_modify(user, blog):
        raise HTTPException(403, "Forbidden")

    await blogs.delete(db, blog["_id"])
    removed = await comments.delete_many(db, {"blog": blog["_id"]})
    logger.info("Deleted blog %s and %d comments", blog["_id"], removed)
    await log_activity(
        db,
        user,
        ActivityAction.DELETE,
        target_type=TargetType.BLOG,
        target_id=blog["_id"],
        details=f"Deleted blog: {blog['title']}",
    )
    return ok(None, include_data=False, message="Blog deleted successfully")


@router.post("/{blog_id}/like")
async def like_blog(
    blog_id: str,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    oid = parse_object_id(blog_id, "blog")
    result = await toggle_like(
        blogs.collection(db), oid, user["_id"], members_field="likedBy", counter_field="likes"
    )
    if result is None:
        raise HTTPException(404, "Blog not found")
    liked, blog = result
    return ok({"likes": blog.get("likes", 0), "liked": liked})


@router.get("/{blog_id}/comments")
async def list_comments(
    blog_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    query = {"blog": parse_object_id(blog_id, "blog")}
    found = await comments.list(db, filter=query, sort=[("createdAt", -1)], offset=(page - 1) * limit, limit=limit)
    await populate(db, found, "author", c.USERS, AUTHOR_CARD)
    total = await comments.count(db, query)
    return ok(found, pagination=pagination(total, page, limit))


@router.post("/{blog_id}/comments")
async def add_comment(
    blog_id: str,
    body: BlogCommentIn,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    if not body.content or not body.content.strip():
        raise HTTPException(400, "Comment content is required")
    blog = await _get_blog(db, blog_id)

    comment = await comments.create(
        db,
        {"blog": blog["_id"], "author": user["_id"], "content": body.content, "likes": 0, "likedBy": []},
    )
    await populate_one(db, comment, "author", c.USERS, AUTHOR_CARD)
    await log_activity(
        db,
        user,
        ActivityAction.CREATE,
        target_type=TargetType.COMMENT,
        target_id=comment["_id"],
        details=f"Commented on blog: {blog['title']}",
    )
    return ok(comment, status_code=201, message="Comment added successfully")


@router.put("/{blog_id}/comments/{comment_id}")
async def update_comment(
    blog_id: str,
    comment_id: str,
    body: BlogCommentIn,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    blog = await _get_blog(db, blog_id)
    comment = await _get_comment(db, blog, comment_id)
    if not _can_modify(user, comment):
        raise HTTPException(403, "Forbidden")
    if not body.content or not body.content.strip():
        raise HTTPException(400, "Comment content is required")

    updated = await comments.update(db, comment["_id"], {"content": body.content})
    await populate_one(db, updated, "author", c.USERS, AUTHOR_CARD)
    return ok(updated, message="Comment updated successfully")


@router.delete("/{blog_id}/comments/{comment_id}")
async def delete_comment(
    blog_id: str,
    comment_id: str,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    blog = await _get_blog(db, blog_id)
    comment = await _get_comment(db, blog, comment_id)
    if not _can_modify(user, comment):
        raise HTTPException(403, "Forbidden")
    await comments.delete(db, comment["_id"])
    return ok(None, include_data=False, message="Comment deleted successfully")


@router.post("/{blog_id}/comments/{comment_id}/like")
async def like_comment(
    blog_id: str,
    comment_id: str,
    user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    blog = await _get_blog(db, blog_id)
    comment = await _get_comment(db, blog, comment_id)
    result = await toggle_like(
        comments.collection(db), comment["_id"], user["_id"], members_field="likedBy", counter_field="likes"
    )
    if result is None:
        raise HTTPException(404, "Comment not found")
    liked, updated = result
    return ok({"likes": updated.get("likes", 0), "liked": liked})
