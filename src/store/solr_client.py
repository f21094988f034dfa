"""Solr index store client.

This module implements the index store contract over the Solr JSON
update API using a synchronous httpx client.
"""

from __future__ import annotations

from typing import Any, Sequence

import httpx

from core.config import FlatdexConfig
from core.errors import FlatdexCommitError, FlatdexStoreError
from core.logging_config import get_logger
from core.types import Record

_LOGGER = get_logger(__name__)


class SolrIndexStore:
    """Solr-backed implementation of ``IndexStore``.

    The store owns one ``httpx.Client`` unless a client is injected,
    and should be closed or used as a context manager.
    """

    def __init__(self, config: FlatdexConfig, http_client: httpx.Client | None = None) -> None:
        """Create a Solr store client.

        Args:
            config: Runtime configuration with base URL and timeouts.
            http_client: Optional preconfigured client, mainly for tests.
        """
        self._base_url = config.solr_url
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            timeout=httpx.Timeout(config.read_timeout, connect=config.connect_timeout),
        )

    def __enter__(self) -> "SolrIndexStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client when owned by this store."""
        if self._owns_client:
            self._client.close()

    def add(self, collection: str, record: Record) -> None:
        """Add a single record without committing.

        Raises:
            FlatdexStoreError: If Solr rejects the record or is unreachable.
        """
        self._post_update(collection, [record])

    def add_batch(self, collection: str, records: Sequence[Record]) -> None:
        """Add several records in one update request without committing.

        Raises:
            FlatdexStoreError: If Solr rejects the batch or is unreachable.
        """
        self._post_update(collection, list(records))

    def commit(self, collection: str) -> None:
        """Commit pending updates so they become searchable.

        Raises:
            FlatdexCommitError: If the commit request fails.
        """
        try:
            self._post_update(collection, {"commit": {}})
        except FlatdexStoreError as error:
            raise FlatdexCommitError(
                f"Failed to commit collection '{collection}': {error}"
            ) from error

    def _post_update(self, collection: str, payload: Any) -> None:
        """Send one JSON update request and check the response status.

        Args:
            collection: Target collection name.
            payload: JSON body, a list of records or an update command.

        Raises:
            FlatdexStoreError: On transport errors or non-success status.
        """
        url = f"{self._base_url}{collection}/update"
        try:
            response = self._client.post(url, params={"wt": "json"}, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as error:
            raise FlatdexStoreError(
                f"Solr update for collection '{collection}' returned "
                f"HTTP {error.response.status_code}: {_error_detail(error.response)}."
            ) from error
        except httpx.HTTPError as error:
            raise FlatdexStoreError(
                f"Solr update for collection '{collection}' failed: {error}. "
                "Check that Solr is reachable at the configured URL."
            ) from error


def _error_detail(response: httpx.Response) -> str:
    """Extract Solr's error message from a failed response."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase
    if isinstance(body, dict):
        error_block = body.get("error")
        if isinstance(error_block, dict) and "msg" in error_block:
            return str(error_block["msg"])
    return response.reason_phrase
