"""Scalar value coercion.

This module classifies parsed scalar tokens into the closed set of
value kinds a record may hold and returns the canonical value.
"""

from __future__ import annotations

from core.constants import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN
from core.types import FieldScalar, ScalarKind


def classify_scalar(token: object) -> ScalarKind:
    """Classify a parsed scalar token.

    Booleans are checked before integers because ``bool`` subclasses ``int``.
    Integers outside the signed 64-bit range fall through to ``STRING``.

    Args:
        token: Scalar produced by a payload parser.

    Returns:
        The first matching kind in boolean, int32, int64, double, string order.
    """
    if isinstance(token, bool):
        return ScalarKind.BOOLEAN
    if isinstance(token, int):
        if INT32_MIN <= token <= INT32_MAX:
            return ScalarKind.INT32
        if INT64_MIN <= token <= INT64_MAX:
            return ScalarKind.INT64
        return ScalarKind.STRING
    if isinstance(token, float):
        return ScalarKind.DOUBLE
    return ScalarKind.STRING


def coerce_scalar(token: object) -> FieldScalar:
    """Return the canonical record value for a parsed scalar token.

    Args:
        token: Scalar produced by a payload parser.

    Returns:
        ``bool``, ``int``, ``float``, or ``str`` matching ``classify_scalar``.
    """
    kind = classify_scalar(token)
    if kind is ScalarKind.BOOLEAN:
        return bool(token)
    if kind in (ScalarKind.INT32, ScalarKind.INT64):
        return int(token)  # type: ignore[call-overload]
    if kind is ScalarKind.DOUBLE:
        return float(token)  # type: ignore[arg-type]
    return token if isinstance(token, str) else str(token)
