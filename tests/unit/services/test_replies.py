from __future__ import annotations

from bson import ObjectId

from openbalti.services.replies import MAX_DEPTH, build_reply_tree, child_position


def test_top_level_position():
    assert child_position(None) == (0, "")


def test_nested_position_builds_path():
    root = {"_id": ObjectId(), "level": 0, "replyPath": ""}
    level, path = child_position(root)
    assert (level, path) == (1, str(root["_id"]))

    child = {"_id": ObjectId(), "level": level, "replyPath": path}
    level2, path2 = child_position(child)
    assert level2 == 2
    assert path2 == f"{root['_id']}.{child['_id']}"


def test_level_is_capped():
    deep = {"_id": ObjectId(), "level": MAX_DEPTH, "replyPath": "a.b.c.d.e"}
    level, _ = child_position(deep)
    assert level == MAX_DEPTH


def test_build_tree_nests_and_promotes_orphans():
    replies = [
        {"_id": "r1", "parentReply": None},
        {"_id": "r2", "parentReply": "r1"},
        {"_id": "r3", "parentReply": "r2"},
        {"_id": "r4", "parentReply": "deleted"},
    ]
    tree = build_reply_tree(replies)
    assert [n["_id"] for n in tree] == ["r1", "r4"]
    assert tree[0]["children"][0]["_id"] == "r2"
    assert tree[0]["children"][0]["children"][0]["_id"] == "r3"
    assert tree[1]["children"] == []
