"""Ingest orchestration.

This module routes payload text to the matching record builder
and hands the resulting records to the batch ingestor.
"""

from __future__ import annotations

from core.config import FlatdexConfig
from core.constants import PAYLOAD_FORMAT_CSV, PAYLOAD_FORMAT_JSON
from core.logging_config import get_logger
from core.types import IngestOptions, IngestReport, Record
from ingest.csv_records import build_csv_records
from ingest.json_records import build_json_records
from ingest.payload_reader import read_payload, validate_payload_format
from ingest.xml_records import build_xml_records
from store.batch_ingestor import BatchIngestor
from store.index_store import IndexStore

_LOGGER = get_logger(__name__)


def build_records(payload_text: str, payload_format: str, config: FlatdexConfig) -> list[Record]:
    """Build flat records from payload text of a given format.

    Args:
        payload_text: Raw JSON, CSV, or XML text.
        payload_format: One of ``json``, ``csv``, ``xml``.
        config: Runtime configuration, used for the XML size ceiling.

    Returns:
        Records built from the payload.

    Raises:
        FlatdexValidationError: If the format is unknown or XML is rejected.
        FlatdexParseError: If the payload is malformed.
    """
    resolved_format = validate_payload_format(payload_format)
    if resolved_format == PAYLOAD_FORMAT_JSON:
        return build_json_records(payload_text)
    if resolved_format == PAYLOAD_FORMAT_CSV:
        return build_csv_records(payload_text)
    return build_xml_records(payload_text, max_bytes=config.max_xml_bytes)


def ingest_payload_text(
    collection: str,
    payload_text: str,
    payload_format: str,
    store: IndexStore,
    config: FlatdexConfig,
    batch_size: int | None = None,
) -> IngestReport:
    """Build records from payload text and load them into a collection.

    Args:
        collection: Destination collection name.
        payload_text: Raw JSON, CSV, or XML text.
        payload_format: One of ``json``, ``csv``, ``xml``.
        store: Backing index store.
        config: Runtime configuration.
        batch_size: Optional override of the configured batch size.

    Returns:
        Ingestion report.

    Raises:
        FlatdexValidationError: If the payload is rejected before parsing.
        FlatdexParseError: If the payload is malformed.
        FlatdexCommitError: If the final commit fails.
    """
    records = build_records(payload_text, payload_format, config)
    _LOGGER.info(
        "records_built",
        collection=collection,
        payload_format=payload_format,
        record_count=len(records),
    )
    ingestor = BatchIngestor(store, batch_size=batch_size or config.batch_size)
    return ingestor.ingest_with_report(collection, records)


def ingest_payload(options: IngestOptions, store: IndexStore, config: FlatdexConfig) -> IngestReport:
    """Read a payload file and load its records into a collection.

    Args:
        options: Ingest options naming the file and destination.
        store: Backing index store.
        config: Runtime configuration.

    Returns:
        Ingestion report.
    """
    payload = read_payload(options.source_path, options.payload_format)
    return ingest_payload_text(
        options.collection,
        payload.text,
        payload.payload_format,
        store,
        config,
        batch_size=options.batch_size,
    )
