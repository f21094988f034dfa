"""Unit tests for the JSON record builder."""

from __future__ import annotations

import json
import re

import pytest

import ingest.json_records as json_records
from core.errors import FlatdexParseError
from ingest.json_records import build_json_records
from tests.fixture_paths import payload_text

_IDENTIFIER = re.compile(r"^[a-z0-9]+(_[a-z0-9]+)*$")


def test_build_json_records_flattens_nested_objects() -> None:
    """Nested objects should become underscore-joined field paths."""
    records = build_json_records(
        json.dumps([{"Dimensions": {"Height-cm": 40, "base": {"width_cm": 15}}}])
    )

    assert records == [{"dimensions_height_cm": 40, "dimensions_base_width_cm": 15}]


def test_build_json_records_keeps_one_record_per_element() -> None:
    """Record count should equal the array length, and names follow the grammar."""
    payload = payload_text("products.json")

    records = build_json_records(payload)

    field_names = [name for record in records for name in record]
    assert len(records) == len(json.loads(payload)) and all(
        _IDENTIFIER.match(name) for name in field_names
    )


def test_build_json_records_coerces_fixture_values() -> None:
    """Scalars keep their JSON types and null fields are omitted."""
    payload = payload_text("products.json")

    first, second = build_json_records(payload)

    assert first == {
        "id": "p-1",
        "product_name": "Desk Lamp",
        "price": 24.5,
        "stock": 12,
        "active": True,
        "dimensions_height_cm": 40,
        "dimensions_base_width_cm": 15,
        "tags": ["lighting", "office"],
    } and second["stock"] == 3000000000 and second["active"] is False


def test_build_json_records_drops_objects_inside_arrays() -> None:
    """Object elements of arrays are dropped; scalar siblings remain."""
    records = build_json_records('[{"tags": [{"a": 1}, "x", 2, true]}]')

    assert records == [{"tags": ["x", 2, True]}]


def test_build_json_records_omits_arrays_with_no_scalar_elements() -> None:
    """A field whose array held only objects or nothing is left out."""
    records = build_json_records('[{"id": 1, "children": [{"a": 1}], "empty": []}]')

    assert records == [{"id": 1}]


def test_build_json_records_skips_null_values() -> None:
    """Null-valued keys must never appear in a record."""
    records = build_json_records('[{"id": 1, "missing": null}]')

    assert records == [{"id": 1}]


def test_build_json_records_merges_colliding_names() -> None:
    """Keys that normalize to the same name form a multi-valued field."""
    records = build_json_records('[{"User Name": "a", "user_name": "b"}]')

    assert records == [{"user_name": ["a", "b"]}]


def test_build_json_records_returns_empty_list_for_object_root() -> None:
    """A non-array root yields no records and no error."""
    assert build_json_records('{"id": 1}') == []


def test_build_json_records_raises_for_malformed_json() -> None:
    """Broken JSON should surface as a parse error."""
    with pytest.raises(FlatdexParseError):
        build_json_records('[{"id": 1,]')


def test_build_json_records_flattens_nesting_deeper_than_recursion_limit(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Decoded objects nested 3000 levels deep still flatten to one path."""
    node: dict[str, object] = {"leaf": 1}
    for _ in range(3000):
        node = {"a": node}
    monkeypatch.setattr(json_records, "_parse_json", lambda json_text: [node])

    records = build_json_records("[]")

    assert records == [{"a_" * 3000 + "leaf": 1}]
