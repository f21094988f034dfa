"""JSON payload record builder.

This module flattens a JSON array of objects into flat records.
Nested objects become underscore-joined field paths.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterator, Mapping

from core.errors import FlatdexParseError
from core.logging_config import get_logger
from core.types import FieldScalar, Record
from ingest.field_names import normalize_field_name
from ingest.record_fields import add_field, add_multi_valued_field
from ingest.value_coercion import coerce_scalar

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class _PendingObject:
    """Object whose remaining entries are still to be flattened."""

    entries: Iterator[tuple[str, Any]]
    prefix: str


def build_json_records(json_text: str) -> list[Record]:
    """Build flat records from a JSON array payload.

    A root that is not an array yields no records rather than an error.

    Args:
        json_text: JSON text whose root is an array of objects.

    Returns:
        One record per array element, in array order.

    Raises:
        FlatdexParseError: If the text is not valid JSON.
    """
    root = _parse_json(json_text)
    if not isinstance(root, list):
        _LOGGER.warning("json_root_not_array", root_type=type(root).__name__)
        return []
    records: list[Record] = []
    for item in root:
        record: Record = {}
        if isinstance(item, Mapping):
            _flatten_object(record, item)
        records.append(record)
    return records


def _parse_json(json_text: str) -> Any:
    """Parse JSON text and wrap decoder failures.

    Args:
        json_text: Raw JSON text.

    Returns:
        Decoded JSON value.

    Raises:
        FlatdexParseError: If decoding fails or nesting is too deep.
    """
    try:
        return json.loads(json_text)
    except json.JSONDecodeError as error:
        raise FlatdexParseError(
            f"Failed to parse JSON document at line {error.lineno} column {error.colno}: "
            f"{error.msg}. Fix the JSON syntax and retry."
        ) from error
    except RecursionError as error:
        raise FlatdexParseError(
            "Failed to parse JSON document: nesting is too deep. "
            "Flatten the payload before indexing."
        ) from error


def _flatten_object(record: Record, node: Mapping[str, Any]) -> None:
    """Flatten one JSON object into the record.

    Nested objects are walked depth-first in key order using an explicit stack.

    Args:
        record: Record receiving the fields.
        node: Top-level JSON object of one array element.
    """
    stack = [_PendingObject(entries=iter(node.items()), prefix="")]
    while stack:
        pending = stack[-1]
        entry = next(pending.entries, None)
        if entry is None:
            stack.pop()
            continue
        key, value = entry
        field_name = normalize_field_name(pending.prefix + key)
        if value is None:
            continue
        if isinstance(value, list):
            add_multi_valued_field(record, field_name, _collect_array_values(value))
        elif isinstance(value, Mapping):
            stack.append(_PendingObject(entries=iter(value.items()), prefix=field_name + "_"))
        else:
            add_field(record, field_name, coerce_scalar(value))


def _collect_array_values(items: list[Any]) -> list[FieldScalar]:
    """Coerce non-object array elements, dropping nested objects and nulls."""
    values: list[FieldScalar] = []
    for item in items:
        if item is None or isinstance(item, (Mapping, list)):
            continue
        values.append(coerce_scalar(item))
    return values
