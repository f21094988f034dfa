"""Record field accumulation helpers.

This module adds values to flat records the way a schema-less index
merges repeated fields: a second value under the same name turns the
field into an ordered multi-valued field.
"""

from __future__ import annotations

from typing import Sequence

from core.types import FieldScalar, Record


def add_field(record: Record, name: str, value: FieldScalar) -> None:
    """Add one scalar value to a record field.

    Args:
        record: Record under construction.
        name: Normalized field name.
        value: Canonical scalar value.
    """
    if name not in record:
        record[name] = value
        return
    existing = record[name]
    if isinstance(existing, list):
        existing.append(value)
    else:
        record[name] = [existing, value]


def add_multi_valued_field(record: Record, name: str, values: Sequence[FieldScalar]) -> None:
    """Add several values under one field name, skipping empty sequences.

    Args:
        record: Record under construction.
        name: Normalized field name.
        values: Ordered canonical values.
    """
    if not values:
        return
    if name not in record:
        record[name] = list(values)
        return
    for value in values:
        add_field(record, name, value)
