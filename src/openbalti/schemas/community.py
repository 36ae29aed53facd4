from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class BlogIn(BaseModel):
    title: Optional[str] = Field(default=None, max_length=200)
    content: Optional[str] = None
    excerpt: Optional[str] = Field(default=None, max_length=500)
    tags: Optional[List[str]] = None
    category: Optional[str] = None
    featuredImage: Optional[str] = None
    published: Optional[bool] = None
    featured: Optional[bool] = None


class BlogCommentIn(BaseModel):
    content: Optional[str] = Field(default=None, max_length=1000)


class ForumPostIn(BaseModel):
    title: Optional[str] = Field(default=None, max_length=200)
    content: Optional[str] = Field(default=None, max_length=10000)
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    wordReference: Optional[str] = None


class ReplyIn(BaseModel):
    content: Optional[str] = Field(default=None, max_length=5000)
    parentReplyId: Optional[str] = None
