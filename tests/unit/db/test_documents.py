from __future__ import annotations

from datetime import datetime, timezone

from bson import ObjectId

from openbalti.db.nosql.documents import serialize_doc, serialize_value, to_object_id, utcnow


def test_to_object_id():
    oid = ObjectId()
    assert to_object_id(oid) is oid
    assert to_object_id(str(oid)) == oid
    assert to_object_id("not-an-id") is None
    assert to_object_id(None) is None
    assert to_object_id(12) is None


def test_utcnow_is_naive():
    assert utcnow().tzinfo is None


def test_serialize_nested_values():
    oid = ObjectId()
    when = datetime(2024, 3, 15, 8, 30)
    value = {"ids": [oid], "at": when, "nested": {"aware": when.replace(tzinfo=timezone.utc)}}
    assert serialize_value(value) == {
        "ids": [str(oid)],
        "at": "2024-03-15T08:30:00Z",
        "nested": {"aware": "2024-03-15T08:30:00Z"},
    }


def test_serialize_doc_drops_password():
    oid = ObjectId()
    assert serialize_doc({"_id": oid, "name": "A", "password": "hash"}) == {"_id": str(oid), "name": "A"}
    assert serialize_doc(None) is None
