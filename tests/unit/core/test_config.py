"""Unit tests for core config parsing."""

from __future__ import annotations

import pytest

from core.config import FlatdexConfig, normalize_solr_url
from core.errors import FlatdexConfigError


def test_from_env_uses_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fall back to local Solr and default batch size."""
    for variable in ("FLATDEX_SOLR_URL", "FLATDEX_BATCH_SIZE", "FLATDEX_MAX_XML_BYTES"):
        monkeypatch.delenv(variable, raising=False)

    config = FlatdexConfig.from_env()

    assert (config.solr_url, config.batch_size, config.max_xml_bytes) == (
        "http://localhost:8983/solr/",
        1000,
        10 * 1024 * 1024,
    )


def test_from_env_normalizes_solr_url(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should append the solr path to a bare host URL."""
    monkeypatch.setenv("FLATDEX_SOLR_URL", "http://search:8983")

    config = FlatdexConfig.from_env()

    assert config.solr_url == "http://search:8983/solr/"


def test_from_env_reads_timeouts(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should parse HTTP timeouts as seconds."""
    monkeypatch.setenv("FLATDEX_CONNECT_TIMEOUT", "2.5")
    monkeypatch.setenv("FLATDEX_READ_TIMEOUT", "30")

    config = FlatdexConfig.from_env()

    assert (config.connect_timeout, config.read_timeout) == (2.5, 30.0)


def test_from_env_raises_for_invalid_batch_size(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for non-numeric batch size."""
    monkeypatch.setenv("FLATDEX_BATCH_SIZE", "many")

    with pytest.raises(FlatdexConfigError):
        FlatdexConfig.from_env()


def test_from_env_raises_for_zero_xml_limit(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should reject a zero XML size ceiling."""
    monkeypatch.setenv("FLATDEX_MAX_XML_BYTES", "0")

    with pytest.raises(FlatdexConfigError):
        FlatdexConfig.from_env()


@pytest.mark.parametrize(
    ("raw_url", "expected"),
    [
        ("http://localhost:8983", "http://localhost:8983/solr/"),
        ("http://localhost:8983/", "http://localhost:8983/solr/"),
        ("http://localhost:8983/solr", "http://localhost:8983/solr/"),
        ("http://localhost:8983/solr/", "http://localhost:8983/solr/"),
    ],
)
def test_normalize_solr_url_ends_with_solr_path(raw_url: str, expected: str) -> None:
    """Normalization should be idempotent and always end in the solr path."""
    assert normalize_solr_url(raw_url) == expected


def test_normalize_solr_url_rejects_blank() -> None:
    """A blank URL cannot be normalized."""
    with pytest.raises(FlatdexConfigError):
        normalize_solr_url("   ")
