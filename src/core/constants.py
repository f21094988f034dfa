"""Core constants used across Flatdex modules.

This module centralizes limits, defaults, and format names.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

DEFAULT_SOLR_URL = "http://localhost:8983/solr/"
SOLR_PATH_SEGMENT = "solr/"
DEFAULT_BATCH_SIZE = 1000
DEFAULT_MAX_XML_BYTES = 10 * 1024 * 1024
DEFAULT_CONNECT_TIMEOUT_SECONDS = 10.0
DEFAULT_READ_TIMEOUT_SECONDS = 60.0
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
ATTRIBUTE_FIELD_SUFFIX = "_attr"
FIELD_PATH_SEPARATOR = "_"
XML_RECORD_TAG_MARKERS = ("doc", "item", "record")
PAYLOAD_FORMAT_JSON = "json"
PAYLOAD_FORMAT_CSV = "csv"
PAYLOAD_FORMAT_XML = "xml"
SUPPORTED_PAYLOAD_FORMATS = (PAYLOAD_FORMAT_JSON, PAYLOAD_FORMAT_CSV, PAYLOAD_FORMAT_XML)
PAYLOAD_EXTENSION_FORMATS = {
    ".json": PAYLOAD_FORMAT_JSON,
    ".csv": PAYLOAD_FORMAT_CSV,
    ".xml": PAYLOAD_FORMAT_XML,
}
