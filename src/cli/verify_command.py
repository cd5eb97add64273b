"""Verification command wiring for LedgerLens CLI."""

from __future__ import annotations

import argparse
from typing import Any

from core.rules_file import load_verification_rules
from core.types import ViewQuery
from core.verification import render_verification_summary
from store.dataset_sdk import LedgerClient
from store.issue_export import write_issues_csv


def add_verify_command(subparsers: Any) -> None:
    """Register verify subcommand."""
    parser = subparsers.add_parser(
        "verify",
        help="Unify extracts and run data-quality verification",
    )
    parser.add_argument("sources", nargs="+", help="Extract files or directories")
    parser.add_argument(
        "--company",
        action="append",
        default=[],
        help="Company label, code, or name to keep (repeatable)",
    )
    parser.add_argument("--search", default="", help="Case-insensitive search term")
    parser.add_argument("--sort-column", help="Column used to sort the view")
    parser.add_argument(
        "--sort-direction",
        choices=("asc", "desc"),
        default="asc",
        help="Sort direction",
    )
    parser.add_argument("--rules", help="Optional YAML rules file overriding thresholds")
    parser.add_argument("--issues-output", help="Optional CSV path for exported issues")


def run_verify_command(client: LedgerClient, args: argparse.Namespace) -> int:
    """Verify the selected view and print the summary report."""
    thresholds = client.config.thresholds
    if args.rules:
        thresholds = load_verification_rules(args.rules, thresholds)
    query = ViewQuery(
        companies=tuple(args.company),
        search_term=args.search,
        sort_column=args.sort_column,
        sort_direction=args.sort_direction,
    )
    result = client.verify(query, thresholds)
    print(render_verification_summary(result))
    if args.issues_output:
        print(f"issues_path={write_issues_csv(result, args.issues_output)}")
    return 0
