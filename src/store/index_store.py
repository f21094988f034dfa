"""Index store contract.

This module declares the minimal add/commit surface the ingestor needs
from a backing search index.
"""

from __future__ import annotations

from typing import Protocol, Sequence

from core.types import Record


class IndexStore(Protocol):
    """Backing store operations used by batch ingestion.

    ``add`` and ``add_batch`` raise ``FlatdexStoreError`` on rejection;
    ``commit`` raises ``FlatdexCommitError``.
    """

    def add(self, collection: str, record: Record) -> None: ...

    def add_batch(self, collection: str, records: Sequence[Record]) -> None: ...

    def commit(self, collection: str) -> None: ...
