"""Batch ingestion with per-record fallback.

This module loads records into an index store in fixed-size chunks.
A rejected chunk is retried one record at a time so a single bad
record cannot block the rest, and one commit closes the call.
"""

from __future__ import annotations

from typing import Sequence

from core.constants import DEFAULT_BATCH_SIZE
from core.logging_config import get_logger
from core.types import IngestReport, Record, RecordFailure
from store.index_store import IndexStore

_LOGGER = get_logger(__name__)


class BatchIngestor:
    """Chunked loader that counts accepted records."""

    def __init__(self, store: IndexStore, batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        """Create an ingestor.

        Args:
            store: Backing index store.
            batch_size: Records per bulk add call, must be positive.

        Raises:
            ValueError: If batch size is not positive.
        """
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self._store = store
        self._batch_size = batch_size

    def ingest(self, collection: str, records: Sequence[Record]) -> int:
        """Load records and return how many the store accepted.

        Args:
            collection: Destination collection name.
            records: Records to load, in order.

        Returns:
            Number of records added successfully.

        Raises:
            FlatdexCommitError: If the final commit fails.
        """
        return self.ingest_with_report(collection, records).success_count

    def ingest_with_report(self, collection: str, records: Sequence[Record]) -> IngestReport:
        """Load records and report accepted count and rejected records.

        Args:
            collection: Destination collection name.
            records: Records to load, in order.

        Returns:
            Report with success count and per-record failures.

        Raises:
            FlatdexCommitError: If the final commit fails.
        """
        success_count = 0
        failures: list[RecordFailure] = []
        for start in range(0, len(records), self._batch_size):
            chunk = records[start : start + self._batch_size]
            success_count += self._add_chunk(collection, chunk, start, failures)
        self._store.commit(collection)
        report = IngestReport(
            collection=collection,
            submitted_count=len(records),
            success_count=success_count,
            failures=tuple(failures),
        )
        _LOGGER.info(
            "ingest_completed",
            collection=collection,
            submitted=report.submitted_count,
            indexed=report.success_count,
            failed=report.failed_count,
        )
        return report

    def _add_chunk(
        self,
        collection: str,
        chunk: Sequence[Record],
        offset: int,
        failures: list[RecordFailure],
    ) -> int:
        """Add one chunk, falling back to single-record adds on failure.

        Args:
            collection: Destination collection name.
            chunk: Contiguous slice of the input records.
            offset: Index of the chunk's first record in the input.
            failures: Collector for rejected records.

        Returns:
            Number of records from the chunk that were added.
        """
        try:
            self._store.add_batch(collection, chunk)
            return len(chunk)
        except Exception as error:
            _LOGGER.warning(
                "batch_add_failed",
                collection=collection,
                batch_start=offset,
                batch_size=len(chunk),
                error=str(error),
            )
        added = 0
        for position, record in enumerate(chunk):
            try:
                self._store.add(collection, record)
                added += 1
            except Exception as error:
                failures.append(RecordFailure(record_index=offset + position, message=str(error)))
                _LOGGER.debug("record_add_failed", record_index=offset + position)
        return added
