"""Runtime configuration model for Flatdex.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_CONNECT_TIMEOUT_SECONDS,
    DEFAULT_MAX_XML_BYTES,
    DEFAULT_READ_TIMEOUT_SECONDS,
    DEFAULT_SOLR_URL,
    SOLR_PATH_SEGMENT,
)
from core.errors import FlatdexConfigError


@dataclass(frozen=True)
class FlatdexConfig:
    """Validated runtime configuration.

    Attributes:
        solr_url: Normalized Solr base URL ending with ``/solr/``.
        batch_size: Records sent per bulk add call.
        max_xml_bytes: Size ceiling for XML payloads, in UTF-8 bytes.
        connect_timeout: HTTP connect timeout in seconds.
        read_timeout: HTTP read timeout in seconds.
    """

    solr_url: str = DEFAULT_SOLR_URL
    batch_size: int = DEFAULT_BATCH_SIZE
    max_xml_bytes: int = DEFAULT_MAX_XML_BYTES
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT_SECONDS
    read_timeout: float = DEFAULT_READ_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls) -> "FlatdexConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            FlatdexConfigError: If environment values are invalid.
        """
        return cls(
            solr_url=normalize_solr_url(os.getenv("FLATDEX_SOLR_URL", DEFAULT_SOLR_URL)),
            batch_size=_parse_positive_int(
                "FLATDEX_BATCH_SIZE", os.getenv("FLATDEX_BATCH_SIZE", str(DEFAULT_BATCH_SIZE))
            ),
            max_xml_bytes=_parse_positive_int(
                "FLATDEX_MAX_XML_BYTES",
                os.getenv("FLATDEX_MAX_XML_BYTES", str(DEFAULT_MAX_XML_BYTES)),
            ),
            connect_timeout=_parse_positive_float(
                "FLATDEX_CONNECT_TIMEOUT",
                os.getenv("FLATDEX_CONNECT_TIMEOUT", str(DEFAULT_CONNECT_TIMEOUT_SECONDS)),
            ),
            read_timeout=_parse_positive_float(
                "FLATDEX_READ_TIMEOUT",
                os.getenv("FLATDEX_READ_TIMEOUT", str(DEFAULT_READ_TIMEOUT_SECONDS)),
            ),
        )


def normalize_solr_url(raw_url: str) -> str:
    """Normalize a Solr URL so it ends with the ``/solr/`` path.

    Args:
        raw_url: Base URL with or without the solr path.

    Returns:
        URL ending with ``/solr/``.

    Raises:
        FlatdexConfigError: If the URL is blank.
    """
    url = raw_url.strip()
    if not url:
        raise FlatdexConfigError(
            "Invalid FLATDEX_SOLR_URL value: expected a URL, got an empty string. "
            "Set FLATDEX_SOLR_URL to e.g. http://localhost:8983."
        )
    if not url.endswith("/"):
        url = url + "/"
    if f"/{SOLR_PATH_SEGMENT}" not in url:
        url = url + SOLR_PATH_SEGMENT
    return url


def _parse_positive_int(variable: str, raw_value: str) -> int:
    """Parse a strictly positive integer environment value.

    Args:
        variable: Environment variable name, for error context.
        raw_value: Raw string from environment.

    Returns:
        Parsed integer.

    Raises:
        FlatdexConfigError: If value is not a positive integer.
    """
    try:
        value = int(raw_value)
    except ValueError as error:
        raise FlatdexConfigError(
            f"Invalid {variable} value: expected integer, got '{raw_value}'. "
            f"Set {variable} to a positive number."
        ) from error
    if value <= 0:
        raise FlatdexConfigError(
            f"Invalid {variable} value: expected a positive integer, got {value}."
        )
    return value


def _parse_positive_float(variable: str, raw_value: str) -> float:
    """Parse a strictly positive float environment value."""
    try:
        value = float(raw_value)
    except ValueError as error:
        raise FlatdexConfigError(
            f"Invalid {variable} value: expected seconds, got '{raw_value}'. "
            f"Set {variable} to a positive number."
        ) from error
    if value <= 0:
        raise FlatdexConfigError(
            f"Invalid {variable} value: expected a positive number, got {value}."
        )
    return value
