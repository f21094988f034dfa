"""CSV payload record builder.

This module turns header-plus-rows CSV text into flat records.
All values stay strings; type inference is left to the index store.
"""

from __future__ import annotations

import csv
import io
import sys

from core.errors import FlatdexParseError
from core.types import Record
from ingest.field_names import normalize_field_name
from ingest.record_fields import add_field


def build_csv_records(csv_text: str) -> list[Record]:
    """Build flat records from CSV text whose first row is the header.

    Args:
        csv_text: CSV payload text.

    Returns:
        One record per non-blank data row, in row order.

    Raises:
        FlatdexParseError: If the CSV is structurally malformed.
    """
    rows = _read_rows(csv_text)
    if not rows:
        return []
    headers = [normalize_field_name(cell.strip()) for cell in rows[0]]
    records: list[Record] = []
    for row in rows[1:]:
        if len(row) == 0:
            continue
        records.append(_build_row_record(headers, row))
    return records


def _read_rows(csv_text: str) -> list[list[str]]:
    """Read every CSV row, wrapping reader failures.

    Args:
        csv_text: CSV payload text.

    Returns:
        Parsed rows including the header row.

    Raises:
        FlatdexParseError: If the reader rejects the payload.
    """
    csv.field_size_limit(sys.maxsize)
    reader = csv.reader(io.StringIO(csv_text, newline=""), strict=True)
    try:
        return list(reader)
    except csv.Error as error:
        raise FlatdexParseError(
            f"Failed to parse CSV document at line {reader.line_num}: {error}. "
            "Check quoting and delimiters and retry."
        ) from error


def _build_row_record(headers: list[str], row: list[str]) -> Record:
    """Map one data row onto the normalized header names."""
    record: Record = {}
    for header, cell in zip(headers, row):
        value = cell.strip()
        if value:
            add_field(record, header, value)
    return record
