"""Unit tests for the ingestion SDK client."""

from __future__ import annotations

import pytest

from core.config import FlatdexConfig
from core.errors import FlatdexValidationError
from core.types import IngestOptions
from store.index_sdk import FlatdexClient
from tests.fake_index_store import RecordingIndexStore
from tests.fixture_paths import fixture_path


def test_index_json_documents_reports_indexed_records() -> None:
    """JSON indexing should count every accepted record."""
    store = RecordingIndexStore()
    client = FlatdexClient(FlatdexConfig(), store=store)

    report = client.index_json_documents("books", '[{"id": "a"}, {"id": "b"}]')

    assert (report.success_count, store.commits) == (2, ["books"])


def test_index_csv_documents_stores_string_values() -> None:
    """CSV indexing should forward string-valued records."""
    store = RecordingIndexStore()
    client = FlatdexClient(FlatdexConfig(), store=store)

    client.index_csv_documents("books", "id,pages\nb-1,320\n")

    assert store.indexed == [{"id": "b-1", "pages": "320"}]


def test_index_xml_documents_validates_before_store_access() -> None:
    """Blank XML fails validation and never reaches the store."""
    store = RecordingIndexStore()
    client = FlatdexClient(FlatdexConfig(), store=store)

    with pytest.raises(FlatdexValidationError):
        client.index_xml_documents("books", "  ")

    assert store.commits == []


def test_index_records_uses_configured_batch_size() -> None:
    """Prebuilt records are chunked by the configured batch size."""
    store = RecordingIndexStore()
    client = FlatdexClient(FlatdexConfig(batch_size=2), store=store)

    client.index_records("books", [{"id": 1}, {"id": 2}, {"id": 3}])

    assert [len(batch) for batch in store.batch_calls] == [2, 1]


def test_ingest_reads_payload_file() -> None:
    """File ingest should build and index the payload's records."""
    store = RecordingIndexStore()
    client = FlatdexClient(FlatdexConfig(), store=store)
    options = IngestOptions(
        collection="products", source_path=str(fixture_path("payloads/products.csv"))
    )

    report = client.ingest(options)

    assert report.success_count == 3


def test_build_returns_records_without_indexing() -> None:
    """Build should never touch the store."""
    store = RecordingIndexStore()
    client = FlatdexClient(FlatdexConfig(), store=store)

    records = client.build(str(fixture_path("payloads/catalog.xml")))

    assert len(records) == 2 and store.commits == []


def test_with_solr_url_normalizes_url() -> None:
    """Cloned clients should carry the normalized Solr URL."""
    client = FlatdexClient(FlatdexConfig())

    with client.with_solr_url("http://solr.internal:8983") as cloned:
        assert cloned.config.solr_url == "http://solr.internal:8983/solr/"
