"""Public SDK surface for LedgerLens.

This module provides a stable import path for library users.
It re-exports the primary client, pure functions, and typed models.
"""

from __future__ import annotations

from core.config import LedgerLensConfig
from core.types import (
    CanonicalRow,
    CompanyMapping,
    DatasetView,
    ImportResult,
    SourceBatch,
    ViewQuery,
)
from core.verification import render_verification_summary, verify_rows
from core.verification_types import (
    ColumnStat,
    VerificationIssue,
    VerificationResult,
    VerificationThresholds,
)
from ingest.amount_parser import parse_amount
from ingest.pipeline import import_batches
from store.dataset_sdk import LedgerClient
from store.dataset_view import only_rows_with_issues, paginate, select_view
from store.issue_export import render_issues_csv
from transforms.company_labels import build_company_display_list
from transforms.unification import unify_batches

__all__ = [
    "CanonicalRow",
    "ColumnStat",
    "CompanyMapping",
    "DatasetView",
    "ImportResult",
    "LedgerClient",
    "LedgerLensConfig",
    "SourceBatch",
    "VerificationIssue",
    "VerificationResult",
    "VerificationThresholds",
    "ViewQuery",
    "build_company_display_list",
    "import_batches",
    "only_rows_with_issues",
    "paginate",
    "parse_amount",
    "render_issues_csv",
    "render_verification_summary",
    "select_view",
    "unify_batches",
    "verify_rows",
]
