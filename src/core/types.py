"""Shared typed models.

This module defines the record shape produced by payload builders
and the immutable option and report models used by ingest and store layers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


FieldScalar = Union[str, bool, int, float]
FieldValue = Union[FieldScalar, list[FieldScalar]]
Record = dict[str, FieldValue]


class ScalarKind(str, Enum):
    """Canonical value kinds a record field can hold."""

    BOOLEAN = "boolean"
    INT32 = "int32"
    INT64 = "int64"
    DOUBLE = "double"
    STRING = "string"


@dataclass(frozen=True)
class RecordFailure:
    """One record rejected during per-record fallback.

    Attributes:
        record_index: Zero-based position of the record in the submitted batch.
        message: Store error message for the rejected record.
    """

    record_index: int
    message: str


@dataclass(frozen=True)
class IngestReport:
    """Outcome of one ingestion call.

    Attributes:
        collection: Destination collection name.
        submitted_count: Number of records handed to the ingestor.
        success_count: Number of records the store accepted.
        failures: Records dropped during per-record fallback.
    """

    collection: str
    submitted_count: int
    success_count: int
    failures: tuple[RecordFailure, ...] = field(default_factory=tuple)

    @property
    def failed_count(self) -> int:
        """Return how many submitted records were not accepted."""
        return self.submitted_count - self.success_count


@dataclass(frozen=True)
class IngestOptions:
    """Ingest command options.

    Attributes:
        collection: Destination collection name.
        source_path: Local payload file path.
        payload_format: Optional explicit format; detected from extension if omitted.
        batch_size: Optional records per bulk add call; config default if omitted.
    """

    collection: str
    source_path: str
    payload_format: str | None = None
    batch_size: int | None = None


@dataclass(frozen=True)
class PayloadSource:
    """Raw payload text loaded from disk.

    Attributes:
        source_path: Path the payload was read from.
        payload_format: Resolved payload format name.
        text: Raw payload text.
    """

    source_path: str
    payload_format: str
    text: str
