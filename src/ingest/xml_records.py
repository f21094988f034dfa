"""XML payload record builder.

This module parses untrusted XML with DTDs and entity declarations
forbidden, decides whether the root holds one record or a list of
records, and flattens elements, attributes, and text into fields.
"""

from __future__ import annotations

from dataclasses import dataclass
from xml.etree.ElementTree import Element, TreeBuilder

from defusedxml import DefusedXmlException
from defusedxml import ElementTree as DefusedElementTree

from core.constants import (
    ATTRIBUTE_FIELD_SUFFIX,
    DEFAULT_MAX_XML_BYTES,
    XML_RECORD_TAG_MARKERS,
)
from core.errors import FlatdexParseError, FlatdexValidationError
from core.logging_config import get_logger
from core.types import Record
from ingest.field_names import join_field_path, normalize_field_name
from ingest.record_fields import add_field

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class _PendingElement:
    """Element waiting to be flattened with its parent path."""

    element: Element
    prefix: str


def build_xml_records(xml_text: str, max_bytes: int = DEFAULT_MAX_XML_BYTES) -> list[Record]:
    """Build flat records from an XML payload.

    Direct children of the root whose tag contains ``doc``, ``item``, or
    ``record`` become one record each; otherwise the whole root is one record.

    Args:
        xml_text: XML payload text.
        max_bytes: Maximum accepted UTF-8 size of the payload.

    Returns:
        Non-empty records in document order.

    Raises:
        FlatdexValidationError: If the payload is blank or too large.
        FlatdexParseError: If the payload is malformed or uses DTDs/entities.
    """
    validate_xml_payload(xml_text, max_bytes)
    root = _parse_xml(xml_text)
    record_elements = _record_children(root)
    if record_elements:
        _LOGGER.debug("xml_multi_record_mode", record_count=len(record_elements))
        candidates = [_flatten_element(child) for child in record_elements]
    else:
        candidates = [_flatten_element(root)]
    return [record for record in candidates if record]


def validate_xml_payload(xml_text: str | None, max_bytes: int = DEFAULT_MAX_XML_BYTES) -> None:
    """Reject blank or oversized XML before any parser runs.

    Args:
        xml_text: XML payload text.
        max_bytes: Maximum accepted UTF-8 size of the payload.

    Raises:
        FlatdexValidationError: If the payload is blank or too large.
    """
    if xml_text is None or not xml_text.strip():
        raise FlatdexValidationError(
            "XML input cannot be null or empty. Provide an XML document to index."
        )
    payload_size = len(xml_text.encode("utf-8"))
    if payload_size > max_bytes:
        raise FlatdexValidationError(
            f"XML document too large: {payload_size} bytes (max: {max_bytes}). "
            "Split the document into smaller payloads."
        )


def _parse_xml(xml_text: str) -> Element:
    """Parse XML with DTDs, entity declarations, and external references forbidden.

    Comments are kept in the tree so the text on either side of one stays a
    separate fragment; they never contribute values themselves.

    Args:
        xml_text: Validated XML payload text.

    Returns:
        Root element of the parsed document.

    Raises:
        FlatdexParseError: If parsing fails or forbidden constructs are present.
    """
    parser = DefusedElementTree.DefusedXMLParser(
        target=TreeBuilder(insert_comments=True),
        forbid_dtd=True,
        forbid_entities=True,
        forbid_external=True,
    )
    try:
        parser.feed(xml_text)
        return parser.close()
    except DefusedXmlException as error:
        raise FlatdexParseError(
            f"Failed to parse XML document: forbidden construct ({error}). "
            "Remove DOCTYPE and entity declarations and retry."
        ) from error
    except DefusedElementTree.ParseError as error:
        raise FlatdexParseError(
            f"Failed to parse XML document: structural error ({error}). "
            "Fix the XML syntax and retry."
        ) from error


def _record_children(root: Element) -> list[Element]:
    """Return root children whose tag marks them as individual records."""
    return [child for child in _child_elements(root) if _is_record_tag(child.tag)]


def _is_record_tag(tag: str) -> bool:
    local_name = _local_name(tag).lower()
    return any(marker in local_name for marker in XML_RECORD_TAG_MARKERS)


def _flatten_element(start: Element) -> Record:
    """Flatten an element subtree into one record.

    Traversal is depth-first in document order using an explicit stack.

    Args:
        start: Element that becomes the record.

    Returns:
        Flat record, empty if nothing in the subtree carried a value.
    """
    record: Record = {}
    stack = [_PendingElement(element=start, prefix="")]
    while stack:
        pending = stack.pop()
        element = pending.element
        path = join_field_path(pending.prefix, normalize_field_name(_local_name(element.tag)))
        _add_attribute_fields(record, element, pending.prefix, path)
        text = _own_text(element)
        if text:
            add_field(record, path, text)
        for child in reversed(_child_elements(element)):
            stack.append(_PendingElement(element=child, prefix=path))
    return record


def _add_attribute_fields(record: Record, element: Element, prefix: str, path: str) -> None:
    """Add ``<name>_attr`` fields, bare at record level and path-prefixed below it."""
    for raw_name, raw_value in element.attrib.items():
        value = raw_value.strip()
        if not value:
            continue
        attribute_name = normalize_field_name(_local_name(raw_name) + ATTRIBUTE_FIELD_SUFFIX)
        field_name = join_field_path(path, attribute_name) if prefix else attribute_name
        add_field(record, field_name, value)


def _child_elements(element: Element) -> list[Element]:
    """Return child elements, skipping comment nodes."""
    return [child for child in element if isinstance(child.tag, str)]


def _own_text(element: Element) -> str:
    """Join the element's direct text nodes, excluding descendant text.

    Tails of comment children count as direct text.
    """
    fragments = [element.text] + [child.tail for child in element]
    return " ".join(fragment.strip() for fragment in fragments if fragment and fragment.strip())


def _local_name(name: str) -> str:
    """Strip a ``{namespace}`` qualifier from a tag or attribute name."""
    if name.startswith("{"):
        return name.split("}", 1)[1]
    return name
