"""Response envelope helpers shared by every router."""

from __future__ import annotations

import math
from typing import Any, Optional

from bson import ObjectId
from fastapi import HTTPException
from starlette.responses import JSONResponse

from openbalti.db.nosql.documents import serialize_value, to_object_id


def ok(
    data: Any = None,
    *,
    status_code: int = 200,
    message: Optional[str] = None,
    pagination: Optional[dict] = None,
    include_data: bool = True,
) -> JSONResponse:
    body: dict[str, Any] = {"success": True}
    if include_data:
        body["data"] = serialize_value(data)
    if pagination is not None:
        body["pagination"] = pagination
    if message is not None:
        body["message"] = message
    return JSONResponse(status_code=status_code, content=body)


def pagination(total: int, page: int, limit: int) -> dict:
    return {
        "total": total,
        "page": page,
        "limit": limit,
        "pages": math.ceil(total / limit) if limit else 0,
    }


def parse_object_id(value: str, thing: str = "") -> ObjectId:
    """ObjectId for a path parameter, or 400 ``Invalid <thing> ID format``."""
    oid = to_object_id(value)
    if oid is None:
        label = f"{thing} " if thing else ""
        raise HTTPException(status_code=400, detail=f"Invalid {label}ID format")
    return oid


__all__ = ["ok", "pagination", "parse_object_id"]
