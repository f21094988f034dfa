"""Python SDK for ingestion into a Solr index.

This module exposes high-level APIs for building flat records from
JSON, CSV, and XML payloads and loading them into a collection.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from core.config import FlatdexConfig, normalize_solr_url
from core.constants import PAYLOAD_FORMAT_CSV, PAYLOAD_FORMAT_JSON, PAYLOAD_FORMAT_XML
from core.types import IngestOptions, IngestReport, Record
from ingest.payload_reader import read_payload
from ingest.pipeline import build_records, ingest_payload, ingest_payload_text
from store.batch_ingestor import BatchIngestor
from store.index_store import IndexStore
from store.solr_client import SolrIndexStore


class FlatdexClient:
    """Primary SDK entry point for ingestion workflows."""

    def __init__(self, config: FlatdexConfig | None = None, store: IndexStore | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            store: Optional index store; a Solr store is created on first use.
        """
        self._config = config or FlatdexConfig.from_env()
        self._store = store
        self._owned_store: SolrIndexStore | None = None

    @property
    def config(self) -> FlatdexConfig:
        """Return the runtime configuration."""
        return self._config

    def __enter__(self) -> "FlatdexClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Release the Solr connection pool when this client created it."""
        if self._owned_store is not None:
            self._owned_store.close()
            self._owned_store = None

    def index_json_documents(self, collection: str, json_text: str) -> IngestReport:
        """Index a JSON array of objects into a collection.

        Args:
            collection: Destination collection name.
            json_text: JSON array payload.

        Returns:
            Ingestion report.

        Raises:
            FlatdexParseError: If the JSON is malformed.
            FlatdexCommitError: If the final commit fails.
        """
        return self._ingest_text(collection, json_text, PAYLOAD_FORMAT_JSON)

    def index_csv_documents(self, collection: str, csv_text: str) -> IngestReport:
        """Index header-plus-rows CSV text into a collection.

        Raises:
            FlatdexParseError: If the CSV is malformed.
            FlatdexCommitError: If the final commit fails.
        """
        return self._ingest_text(collection, csv_text, PAYLOAD_FORMAT_CSV)

    def index_xml_documents(self, collection: str, xml_text: str) -> IngestReport:
        """Index an XML document into a collection.

        Raises:
            FlatdexValidationError: If the XML is blank or too large.
            FlatdexParseError: If the XML is malformed or uses DTDs/entities.
            FlatdexCommitError: If the final commit fails.
        """
        return self._ingest_text(collection, xml_text, PAYLOAD_FORMAT_XML)

    def index_records(self, collection: str, records: Sequence[Record]) -> IngestReport:
        """Load already-built records into a collection."""
        ingestor = BatchIngestor(self._index_store(), batch_size=self._config.batch_size)
        return ingestor.ingest_with_report(collection, records)

    def ingest(self, options: IngestOptions) -> IngestReport:
        """Read a payload file and index its records.

        Args:
            options: Ingest options.

        Returns:
            Ingestion report.
        """
        return ingest_payload(options, self._index_store(), self._config)

    def build(self, source_path: str, payload_format: str | None = None) -> list[Record]:
        """Build records from a payload file without indexing them.

        Args:
            source_path: Local payload file path.
            payload_format: Optional explicit format.

        Returns:
            Records built from the payload.
        """
        payload = read_payload(source_path, payload_format)
        return build_records(payload.text, payload.payload_format, self._config)

    def with_solr_url(self, solr_url: str) -> "FlatdexClient":
        """Clone the client against a different Solr base URL.

        Args:
            solr_url: New Solr base URL.

        Returns:
            New SDK client instance.
        """
        updated_config = replace(self._config, solr_url=normalize_solr_url(solr_url))
        return FlatdexClient(updated_config)

    def _ingest_text(self, collection: str, payload_text: str, payload_format: str) -> IngestReport:
        return ingest_payload_text(
            collection, payload_text, payload_format, self._index_store(), self._config
        )

    def _index_store(self) -> IndexStore:
        if self._store is not None:
            return self._store
        if self._owned_store is None:
            self._owned_store = SolrIndexStore(self._config)
        return self._owned_store
