"""Field name normalization.

This module maps arbitrary source field names to identifiers
the index store accepts without escaping.
"""

from __future__ import annotations

import re

from core.constants import FIELD_PATH_SEPARATOR

_INVALID_CHARACTERS = re.compile(r"[^a-z0-9_]")
_EDGE_UNDERSCORES = re.compile(r"^_+|_+$")
_REPEATED_UNDERSCORES = re.compile(r"_{2,}")


def normalize_field_name(raw_name: str) -> str:
    """Normalize a raw field name into an engine-safe identifier.

    Args:
        raw_name: Field name as it appears in the source payload.

    Returns:
        Lowercase identifier over ``[a-z0-9_]``, possibly empty.
    """
    sanitized = _INVALID_CHARACTERS.sub("_", raw_name.lower())
    sanitized = _EDGE_UNDERSCORES.sub("", sanitized)
    return _REPEATED_UNDERSCORES.sub("_", sanitized)


def join_field_path(prefix: str, name: str) -> str:
    """Join a parent path and a child name with the path separator."""
    if not prefix:
        return name
    if not name:
        return prefix
    return f"{prefix}{FIELD_PATH_SEPARATOR}{name}"
