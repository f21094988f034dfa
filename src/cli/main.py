"""Flatdex CLI entry points.
This module exposes commands for building and indexing payload files.
Each command reads one local payload and prints line-oriented results.
"""

from __future__ import annotations

import argparse
import json
from typing import Any, Sequence

from core.constants import SUPPORTED_PAYLOAD_FORMATS
from core.logging_config import enable_console_logging
from core.types import IngestOptions, IngestReport, Record
from store.index_sdk import FlatdexClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="flatdex", description="Flatdex ingestion CLI")
    parser.add_argument("--solr-url", help="Override FLATDEX_SOLR_URL for this command")
    parser.add_argument("--verbose", action="store_true", help="Log structured events to stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_ingest_command(subparsers)
    _add_build_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Flatdex CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        enable_console_logging()
    with _build_client(args.solr_url) as client:
        if args.command == "ingest":
            return _run_ingest_command(client, args)
        if args.command == "build":
            return _run_build_command(client, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def format_ingest_report(report: IngestReport) -> tuple[str, ...]:
    """Render an ingest report as ``key=value`` output lines.

    Args:
        report: Finished ingestion report.

    Returns:
        Summary lines followed by one ``record_failed`` line per rejected record.
    """
    lines = [
        f"collection={report.collection}",
        f"indexed={report.success_count}",
        f"failed={report.failed_count}",
    ]
    lines.extend(f"record_failed={failure.record_index}" for failure in report.failures)
    return tuple(lines)


def format_records(records: list[Record]) -> tuple[str, ...]:
    """Render records as JSON lines with sorted keys."""
    return tuple(json.dumps(record, sort_keys=True) for record in records)


def _build_client(solr_url: str | None) -> FlatdexClient:
    """Build SDK client from the environment with an optional Solr URL override."""
    client = FlatdexClient()
    if solr_url:
        return client.with_solr_url(solr_url)
    return client


def _run_ingest_command(client: FlatdexClient, args: argparse.Namespace) -> int:
    """Handle ingest command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code, non-zero when any record was rejected.
    """
    options = IngestOptions(
        collection=args.collection,
        source_path=args.source,
        payload_format=args.format,
        batch_size=args.batch_size,
    )
    report = client.ingest(options)
    for line in format_ingest_report(report):
        print(line)
    return 0 if report.failed_count == 0 else 1


def _run_build_command(client: FlatdexClient, args: argparse.Namespace) -> int:
    records = client.build(args.source, payload_format=args.format)
    for line in format_records(records):
        print(line)
    return 0


def _add_ingest_command(subparsers: Any) -> None:
    """Register ingest subcommand."""
    parser = subparsers.add_parser("ingest", help="Index a JSON, CSV, or XML file")
    parser.add_argument("source", help="Payload file path")
    parser.add_argument("--collection", required=True, help="Destination collection")
    parser.add_argument(
        "--format",
        choices=SUPPORTED_PAYLOAD_FORMATS,
        help="Payload format, detected from the file extension if omitted",
    )
    parser.add_argument("--batch-size", type=_positive_int, help="Records per bulk add call")


def _add_build_command(subparsers: Any) -> None:
    """Register build subcommand."""
    parser = subparsers.add_parser("build", help="Print flat records as JSON lines")
    parser.add_argument("source", help="Payload file path")
    parser.add_argument(
        "--format",
        choices=SUPPORTED_PAYLOAD_FORMATS,
        help="Payload format, detected from the file extension if omitted",
    )


def _positive_int(raw_value: str) -> int:
    value = int(raw_value)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return value
