from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId


def utcnow() -> datetime:
    # naive UTC, which is what pymongo hands back with tz_aware=False
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_object_id(value: Any) -> Optional[ObjectId]:
    """Return an ObjectId for ``value`` or None when it is not a valid id."""
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str):
        return None
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def _iso(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat().replace("+00:00", "Z")


def serialize_value(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return _iso(value)
    if isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value


def serialize_doc(doc: Optional[dict], *, exclude: tuple[str, ...] = ("password",)) -> Optional[dict]:
    """Make a Mongo document JSON-safe. ``_id`` stays under its own key as a string."""
    if doc is None:
        return None
    return {k: serialize_value(v) for k, v in doc.items() if k not in exclude}


def serialize_docs(docs: list[dict], **kwargs) -> list[dict]:
    return [serialize_doc(d, **kwargs) for d in docs]


__all__ = ["utcnow", "to_object_id", "serialize_value", "serialize_doc", "serialize_docs"]
