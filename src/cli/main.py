"""LedgerLens CLI entry points.
This module exposes import and verification commands for ledger extracts.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Any, Sequence

from cli.verify_command import add_verify_command, run_verify_command
from core.config import LedgerLensConfig
from core.errors import LedgerLensError
from store.dataset_sdk import LedgerClient
from store.record_payload import write_rows_jsonl


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="ledgerlens", description="LedgerLens CLI")
    parser.add_argument(
        "--directory-marker",
        help="Override LEDGERLENS_DIRECTORY_MARKER for this command",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_unify_command(subparsers)
    _add_companies_command(subparsers)
    add_verify_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the LedgerLens CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args.directory_marker)
        client.import_files(args.sources)
        if args.command == "unify":
            return _run_unify_command(client, args)
        if args.command == "companies":
            return _run_companies_command(client)
        if args.command == "verify":
            return run_verify_command(client, args)
    except LedgerLensError as error:
        print(f"error={error}")
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(directory_marker: str | None) -> LedgerClient:
    """Build SDK client with optional directory-marker override.

    Args:
        directory_marker: Optional override marker.

    Returns:
        Configured SDK client.
    """
    config = LedgerLensConfig.from_env()
    if directory_marker:
        config = replace(config, directory_marker=directory_marker)
    return LedgerClient(config)


def _run_unify_command(client: LedgerClient, args: argparse.Namespace) -> int:
    """Handle unify command.

    Args:
        client: SDK client with imported extracts.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    rows = client.rows
    merged = sum(row.related_record_count - 1 for row in rows)
    print(f"canonical_rows={len(rows)}")
    print(f"merged_records={merged}")
    print(f"companies={len(client.companies)}")
    if args.output:
        print(f"output_path={write_rows_jsonl(rows, args.output)}")
    return 0


def _run_companies_command(client: LedgerClient) -> int:
    """Handle companies command."""
    for label in client.companies:
        print(label)
    return 0


def _add_unify_command(subparsers: Any) -> None:
    """Register unify subcommand."""
    parser = subparsers.add_parser("unify", help="Unify and deduplicate ledger extracts")
    parser.add_argument("sources", nargs="+", help="Extract files or directories")
    parser.add_argument("--output", help="Optional JSONL path for canonical rows")


def _add_companies_command(subparsers: Any) -> None:
    """Register companies subcommand."""
    parser = subparsers.add_parser("companies", help="List company display labels")
    parser.add_argument("sources", nargs="+", help="Extract files or directories")
