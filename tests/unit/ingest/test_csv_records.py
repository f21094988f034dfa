"""Unit tests for the CSV record builder."""

from __future__ import annotations

import pytest

from core.errors import FlatdexParseError
from ingest.csv_records import build_csv_records
from tests.fixture_paths import payload_text


def test_build_csv_records_maps_header_to_string_values() -> None:
    """Every value should be stored as the original string."""
    records = build_csv_records("id,name,price\n1,A,9.99\n")

    assert records == [{"id": "1", "name": "A", "price": "9.99"}]


def test_build_csv_records_omits_empty_cells() -> None:
    """An empty cell should leave its field out entirely."""
    records = build_csv_records("id,name,price\n1,,9.99\n")

    assert records == [{"id": "1", "price": "9.99"}]


def test_build_csv_records_normalizes_headers_and_skips_blank_lines() -> None:
    """Headers are normalized and blank lines do not become records."""
    payload = payload_text("products.csv")

    records = build_csv_records(payload)

    assert records == [
        {"id": "p-1", "product_name": "Desk Lamp", "price": "24.50"},
        {"id": "p-2", "price": "89.99"},
        {"id": "p-3", "product_name": "Shelf"},
    ]


def test_build_csv_records_uses_shorter_of_header_and_row() -> None:
    """Extra cells are ignored and missing cells are simply absent."""
    records = build_csv_records("a,b\n1,2,3\n4\n")

    assert records == [{"a": "1", "b": "2"}, {"a": "4"}]


def test_build_csv_records_trims_cells_and_honours_quotes() -> None:
    """Quoted commas stay inside one cell and surrounding spaces are trimmed."""
    records = build_csv_records('title, city\n"Dune, Part 1",  Paris \n')

    assert records == [{"title": "Dune, Part 1", "city": "Paris"}]


def test_build_csv_records_accepts_cells_beyond_default_field_limit() -> None:
    """Cells larger than the csv module default limit are kept whole."""
    body = "x" * 200_000

    records = build_csv_records(f"id,body\n1,{body}\n")

    assert records == [{"id": "1", "body": body}]


def test_build_csv_records_returns_empty_list_for_empty_text() -> None:
    """No header row means no records."""
    assert build_csv_records("") == []


def test_build_csv_records_raises_for_broken_quoting() -> None:
    """Malformed quoting should surface as a parse error."""
    with pytest.raises(FlatdexParseError):
        build_csv_records('id,name\n1,"A"B\n')
