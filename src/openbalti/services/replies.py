"""Forum reply threading.

A reply stores ``level`` (0 for top level, capped at MAX_DEPTH) and
``replyPath``, the dot-joined ids of its ancestors. Sorting a flat list by
(replyPath, createdAt) puts every top-level reply (empty path) first, in
posting order, followed by deeper replies grouped under their ancestor path.
Use build_reply_tree for a nested view.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

MAX_DEPTH = 5


def child_position(parent: Optional[Mapping[str, Any]]) -> tuple[int, str]:
    """(level, replyPath) for a new reply under ``parent`` (None for top level)."""
    if parent is None:
        return 0, ""
    parent_id = str(parent["_id"])
    level = min(int(parent.get("level") or 0) + 1, MAX_DEPTH)
    parent_path = parent.get("replyPath") or ""
    path = f"{parent_path}.{parent_id}" if parent_path else parent_id
    return level, path


def build_reply_tree(replies: list[dict]) -> list[dict]:
    """Nest serialized replies under ``children``. Orphans are promoted to roots."""
    nodes = {str(r["_id"]): {**r, "children": []} for r in replies}
    roots: list[dict] = []
    for r in replies:
        node = nodes[str(r["_id"])]
        parent_id = r.get("parentReply")
        parent = nodes.get(str(parent_id)) if parent_id else None
        if parent is None:
            roots.append(node)
        else:
            parent["children"].append(node)
    return roots
