"""Payload file readers for ingestion.

This module loads payload text from local files and resolves
which record builder applies to it.
"""

from __future__ import annotations

from pathlib import Path

from core.constants import PAYLOAD_EXTENSION_FORMATS, SUPPORTED_PAYLOAD_FORMATS
from core.errors import FlatdexValidationError
from core.types import PayloadSource


def read_payload(source_path: str, payload_format: str | None = None) -> PayloadSource:
    """Load a payload file and resolve its format.

    Args:
        source_path: Local payload file path.
        payload_format: Optional explicit format overriding extension detection.

    Returns:
        Payload text with its resolved format.

    Raises:
        FlatdexValidationError: If the file is missing or the format is unknown.
    """
    file_path = Path(source_path).expanduser()
    if not file_path.is_file():
        raise FlatdexValidationError(
            f"Failed to read payload at {file_path}: file does not exist. "
            "Provide an existing JSON, CSV, or XML file."
        )
    resolved_format = resolve_payload_format(file_path, payload_format)
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        raise FlatdexValidationError(
            f"Failed to read payload at {file_path}: {error}. "
            "Check file permissions and make sure it is UTF-8 encoded."
        ) from error
    return PayloadSource(source_path=str(file_path), payload_format=resolved_format, text=text)


def resolve_payload_format(file_path: Path, payload_format: str | None) -> str:
    """Resolve payload format from an explicit value or the file extension.

    Args:
        file_path: Payload file path.
        payload_format: Optional explicit format name.

    Returns:
        Supported format name.

    Raises:
        FlatdexValidationError: If no supported format can be resolved.
    """
    if payload_format is not None:
        return validate_payload_format(payload_format)
    detected = PAYLOAD_EXTENSION_FORMATS.get(file_path.suffix.lower())
    if detected is None:
        raise FlatdexValidationError(
            f"Cannot detect payload format of {file_path}: unsupported extension "
            f"'{file_path.suffix}'. Use .json, .csv, or .xml, or pass an explicit format."
        )
    return detected


def validate_payload_format(payload_format: str) -> str:
    """Normalize and validate a payload format name."""
    normalized = payload_format.strip().lower()
    if normalized not in SUPPORTED_PAYLOAD_FORMATS:
        supported_rows = ", ".join(SUPPORTED_PAYLOAD_FORMATS)
        raise FlatdexValidationError(
            f"Unsupported payload format '{payload_format}'. Use one of: {supported_rows}."
        )
    return normalized
