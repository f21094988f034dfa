"""Public SDK surface for Flatdex.

This module provides a stable import path for library users.
It re-exports the primary client, builders, and typed models.
"""

from __future__ import annotations

from core.config import FlatdexConfig
from core.errors import (
    FlatdexCommitError,
    FlatdexConfigError,
    FlatdexError,
    FlatdexParseError,
    FlatdexStoreError,
    FlatdexValidationError,
)
from core.types import IngestOptions, IngestReport, Record, RecordFailure, ScalarKind
from ingest.csv_records import build_csv_records
from ingest.field_names import normalize_field_name
from ingest.json_records import build_json_records
from ingest.value_coercion import classify_scalar, coerce_scalar
from ingest.xml_records import build_xml_records
from store.batch_ingestor import BatchIngestor
from store.index_sdk import FlatdexClient
from store.index_store import IndexStore
from store.solr_client import SolrIndexStore

__all__ = [
    "BatchIngestor",
    "FlatdexClient",
    "FlatdexCommitError",
    "FlatdexConfig",
    "FlatdexConfigError",
    "FlatdexError",
    "FlatdexParseError",
    "FlatdexStoreError",
    "FlatdexValidationError",
    "IndexStore",
    "IngestOptions",
    "IngestReport",
    "Record",
    "RecordFailure",
    "ScalarKind",
    "SolrIndexStore",
    "build_csv_records",
    "build_json_records",
    "build_xml_records",
    "classify_scalar",
    "coerce_scalar",
    "normalize_field_name",
]
