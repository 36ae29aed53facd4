from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Set

from fastapi import Depends, HTTPException

from openbalti.auth.deps import get_current_user
from openbalti.schemas.enums import Role

ROLES = tuple(r.value for r in Role)

_USER = {"word.create", "word.edit", "blog.write", "forum.write", "feedback.write"}
_CONTRIBUTOR = _USER | {"word.review", "etymology.write"}
_ADMIN = _CONTRIBUTOR | {
    "word.delete.any",
    "user.manage",
    "admin.dashboard",
    "content.moderate",
    "etymology.verify",
}
_OWNER = _ADMIN | {"owner.assign"}

# Central role -> permissions mapping. Roles are cumulative.
PERMISSION_REGISTRY: Dict[str, Set[str]] = {
    "user": set(_USER),
    "contributor": set(_CONTRIBUTOR),
    "admin": set(_ADMIN),
    "owner": set(_OWNER),
}

STAFF_ROLES = frozenset({"admin", "owner"})


def get_permissions_for_roles(roles: Iterable[str]) -> Set[str]:
    perms: Set[str] = set()
    for r in roles:
        perms |= PERMISSION_REGISTRY.get(r, set())
    return perms


def user_permissions(user: Mapping[str, Any] | None) -> Set[str]:
    if not user:
        return set()
    return get_permissions_for_roles([user.get("role") or "user"])


def has_permission(user: Mapping[str, Any] | None, permission: str) -> bool:
    return permission in user_permissions(user)


def is_staff(user: Mapping[str, Any] | None) -> bool:
    return bool(user) and user.get("role") in STAFF_ROLES


def RequirePermission(*needed: str):
    """FastAPI dependency enforcing all listed permissions are present. Resolves to the user document."""

    async def _guard(user: dict = Depends(get_current_user)) -> dict:
        perms = user_permissions(user)
        missing = [p for p in needed if p not in perms]
        if missing:
            raise HTTPException(403, "Insufficient permissions")
        return user

    return Depends(_guard)


__all__ = [
    "ROLES",
    "PERMISSION_REGISTRY",
    "STAFF_ROLES",
    "get_permissions_for_roles",
    "user_permissions",
    "has_permission",
    "is_staff",
    "RequirePermission",
]
