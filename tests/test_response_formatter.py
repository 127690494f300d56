"""Unit tests for result sanitising and console sections."""

from __future__ import annotations

import json
from datetime import datetime, timezone

from bson import ObjectId
from bson.son import SON

from bookstore_service.response_formatter import (
    clean_documents,
    format_result,
    format_section,
    sanitise_value,
)


def test_clean_documents_stringifies_object_ids_and_keeps_them() -> None:
    oid = ObjectId("64b7f0c2a1b2c3d4e5f60718")
    docs = [{"_id": oid, "title": "Clean Code", "price": 49.99, "in_stock": True}]

    assert clean_documents(docs) == [
        {"_id": "64b7f0c2a1b2c3d4e5f60718", "title": "Clean Code", "price": 49.99, "in_stock": True}
    ]


def test_sanitise_value_handles_nested_son_datetimes_and_bytes() -> None:
    when = datetime(2024, 1, 2, tzinfo=timezone.utc)
    value = SON([("key", SON([("title", 1)])), ("at", when), ("raw", b"\xff\xfe"), ("tags", ("a", "b"))])

    assert sanitise_value(value) == {
        "key": {"title": 1},
        "at": str(when),
        "raw": "[binary 2 bytes]",
        "tags": ["a", "b"],
    }


def test_format_result_is_indented_json() -> None:
    rendered = format_result([{"_id": "Programming", "avgPrice": 42.5}])

    assert json.loads(rendered) == [{"_id": "Programming", "avgPrice": 42.5}]
    assert "\n  " in rendered


def test_format_section_prints_strings_verbatim() -> None:
    assert format_section("Remaining", "Remaining count: 3") == "\n-- Remaining --\nRemaining count: 3"
    assert format_section("Empty", []) == "\n-- Empty --\n[]"
