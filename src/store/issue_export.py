"""Verification issue export.

Issues are flattened into ``originalIndex,column,severity,message``
records, one per issue, ordered by original row index.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path

from core.constants import ISSUES_CSV_HEADER
from core.errors import LedgerLensExportError
from core.logging_config import get_logger
from core.verification_types import VerificationResult

_LOGGER = get_logger(__name__)


def iter_issue_records(result: VerificationResult) -> list[tuple[int, str, str, str]]:
    """Flatten issues into export records sorted by original index."""
    records: list[tuple[int, str, str, str]] = []
    for original_index in sorted(result.issues_by_index):
        for issue in result.issues_by_index[original_index]:
            records.append((original_index, issue.column, issue.severity, issue.message))
    return records


def render_issues_csv(result: VerificationResult) -> str:
    """Render issues as CSV text with a header row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(ISSUES_CSV_HEADER)
    writer.writerows(iter_issue_records(result))
    return buffer.getvalue()


def write_issues_csv(result: VerificationResult, output_path: str) -> Path:
    """Write issues CSV to disk.

    Args:
        result: Verification result to export.
        output_path: Destination file path.

    Returns:
        Resolved path of the written file.

    Raises:
        LedgerLensExportError: If the file cannot be written.
    """
    destination = Path(output_path).expanduser().resolve()
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(render_issues_csv(result), encoding="utf-8")
    except OSError as error:
        raise LedgerLensExportError(
            f"Failed to write issues to {destination}: {error}. "
            "Choose a writable output path and retry."
        ) from error
    _LOGGER.info(
        "issues_exported",
        output_path=str(destination),
        issue_count=result.errors + result.warnings,
    )
    return destination
