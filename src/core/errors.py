"""Flatdex exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each pipeline stage raises a specific error type for debuggability.
"""

from __future__ import annotations


class FlatdexError(Exception):
    """Base exception for all Flatdex failures."""


class FlatdexConfigError(FlatdexError):
    """Raised for invalid runtime configuration."""


class FlatdexValidationError(FlatdexError):
    """Raised when a payload is rejected before any parsing attempt."""


class FlatdexParseError(FlatdexError):
    """Raised for malformed JSON, CSV, or XML payloads."""


class FlatdexStoreError(FlatdexError):
    """Raised when adding records to the index store fails."""


class FlatdexCommitError(FlatdexStoreError):
    """Raised when the final commit of an ingestion call fails."""

