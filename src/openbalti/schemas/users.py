from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class UserUpdateIn(BaseModel):
    name: Optional[str] = Field(default=None, max_length=100)
    bio: Optional[str] = Field(default=None, max_length=500)
    location: Optional[str] = Field(default=None, max_length=100)
    website: Optional[str] = Field(default=None, max_length=200)
    isPublic: Optional[bool] = None


class RoleIn(BaseModel):
    role: Any = None


class SetOwnerIn(BaseModel):
    userId: Optional[str] = None


class DirectSetOwnerIn(BaseModel):
    email: Optional[str] = None
    secretKey: Optional[str] = None
