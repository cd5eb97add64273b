"""Verification engine orchestration and report formatting.

``verify_rows`` runs two ordered passes over a row view. The first pass
runs independent per-row checks and gathers per-company and per-month
samples; the second runs the checks that need those samples. Every
issue is keyed by the row's original dataset index.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Sequence

from core.logging_config import get_logger
from core.types import CanonicalRow
from core.verification_checks import (
    DuplicateKey,
    build_duplicate_key,
    check_amount,
    check_iqr_bounds,
    check_magnitude,
    check_required_fields,
    check_sign_consistency,
    check_zscore,
    company_group_key,
    duplicate_issue,
    invalid_amount_issue,
)
from core.verification_types import (
    ColumnStat,
    Severity,
    VerificationIssue,
    VerificationResult,
    VerificationThresholds,
)
from transforms.date_detection import detect_date_column, month_key
from transforms.statistics import iqr_bounds, mean, population_stdev, z_score

__all__ = [
    "ColumnStat",
    "Severity",
    "VerificationIssue",
    "VerificationResult",
    "VerificationThresholds",
    "render_verification_summary",
    "verify_rows",
]

_LOGGER = get_logger(__name__)

MonthGroupKey = tuple[str, str]


class _IssueCollector:
    """Mutable accumulator for one verification call."""

    def __init__(self) -> None:
        self.counters: dict[str, int] = defaultdict(int)
        self.issues_by_index: dict[int, list[VerificationIssue]] = {}
        self.column_counts: dict[str, int] = {}

    def add(self, original_index: int, counter: str, issue: VerificationIssue) -> None:
        self.issues_by_index.setdefault(original_index, []).append(issue)
        self.counters[counter] += 1
        self.counters["errors" if issue.severity == "error" else "warnings"] += 1
        self.column_counts[issue.column] = self.column_counts.get(issue.column, 0) + 1


def verify_rows(
    rows: Sequence[CanonicalRow],
    index_map: Sequence[int] | None = None,
    thresholds: VerificationThresholds | None = None,
) -> VerificationResult:
    """Verify a filtered or sorted view of the canonical dataset.

    Args:
        rows: Row view to verify.
        index_map: Original dataset index of each row in ``rows``. Missing
            positions map to themselves.
        thresholds: Verification limits, defaults when omitted.

    Returns:
        Aggregate counters, per-row issues, and column hotspots.
    """
    limits = thresholds or VerificationThresholds()
    original_indices = _resolve_index_map(len(rows), index_map)
    date_column = detect_date_column(rows[0] if rows else None)
    collector = _IssueCollector()

    amounts: list[float | None] = []
    company_samples: dict[str, list[float]] = defaultdict(list)
    month_samples: dict[MonthGroupKey, list[float]] = defaultdict(list)
    month_keys: list[str | None] = []
    seen_duplicates: set[DuplicateKey] = set()

    for row, original_index in zip(rows, original_indices):
        for issue in check_required_fields(row):
            collector.add(original_index, "missing_required", issue)
        amount_check = check_amount(row)
        amounts.append(amount_check.amount)
        if amount_check.invalid:
            collector.add(original_index, "invalid_numbers", invalid_amount_issue())
        row_month = month_key(row.value_of(date_column)) if date_column else None
        month_keys.append(row_month)
        if amount_check.amount is not None:
            outlier = check_magnitude(amount_check.amount, limits)
            if outlier is not None:
                collector.add(original_index, "outliers", outlier)
            company = company_group_key(row)
            company_samples[company].append(amount_check.amount)
            if row_month is not None:
                month_samples[(company, row_month)].append(amount_check.amount)
        duplicate_key = build_duplicate_key(row)
        if duplicate_key in seen_duplicates:
            collector.add(original_index, "duplicates", duplicate_issue())
        else:
            seen_duplicates.add(duplicate_key)

    company_bounds = {
        company: iqr_bounds(samples, limits.iqr_multiplier)
        for company, samples in company_samples.items()
        if len(samples) >= limits.min_iqr_group_size
    }
    month_stats = {
        group: (mean(samples), population_stdev(samples))
        for group, samples in month_samples.items()
        if len(samples) >= limits.min_zscore_group_size
    }

    for row, original_index, amount, row_month in zip(rows, original_indices, amounts, month_keys):
        if amount is None:
            continue
        for issue in check_sign_consistency(row.ledger_account, amount, limits):
            collector.add(original_index, "cross_field", issue)
        company = company_group_key(row)
        bounds = company_bounds.get(company)
        if bounds is not None:
            iqr_issue = check_iqr_bounds(amount, bounds)
            if iqr_issue is not None:
                collector.add(original_index, "company_iqr_anomalies", iqr_issue)
        stats = month_stats.get((company, row_month)) if row_month is not None else None
        if stats is not None:
            zscore_issue = check_zscore(z_score(amount, stats[0], stats[1]), limits)
            if zscore_issue is not None:
                collector.add(original_index, "monthly_anomalies", zscore_issue)

    result = _build_result(collector, len(rows), limits, date_column)
    _LOGGER.debug(
        "verification_completed",
        total_rows=result.total_rows,
        errors=result.errors,
        warnings=result.warnings,
        rows_with_issues=result.rows_with_issues,
        date_column=date_column,
        hot_columns=list(result.hot_columns),
    )
    return result


def _resolve_index_map(row_count: int, index_map: Sequence[int] | None) -> list[int]:
    if index_map is None:
        return list(range(row_count))
    resolved = [int(index) for index in index_map[:row_count]]
    resolved.extend(range(len(resolved), row_count))
    return resolved


def _build_result(
    collector: _IssueCollector,
    total_rows: int,
    limits: VerificationThresholds,
    date_column: str | None,
) -> VerificationResult:
    denominator = total_rows or 1
    column_stats = {
        column: ColumnStat(issue_count=count, ratio=count / denominator)
        for column, count in collector.column_counts.items()
    }
    hot_columns = tuple(
        column for column, stat in column_stats.items() if stat.ratio >= limits.hot_column_ratio
    )
    counters = collector.counters
    return VerificationResult(
        total_rows=total_rows,
        errors=counters["errors"],
        warnings=counters["warnings"],
        missing_required=counters["missing_required"],
        duplicates=counters["duplicates"],
        outliers=counters["outliers"],
        invalid_numbers=counters["invalid_numbers"],
        cross_field=counters["cross_field"],
        monthly_anomalies=counters["monthly_anomalies"],
        company_iqr_anomalies=counters["company_iqr_anomalies"],
        issues_by_index={
            index: tuple(issues) for index, issues in collector.issues_by_index.items()
        },
        column_stats=column_stats,
        hot_columns=hot_columns,
        date_column=date_column,
    )


def render_verification_summary(result: VerificationResult) -> str:
    """Render a verification result into stable multi-line text."""
    lines = [
        f"total_rows={result.total_rows}",
        f"rows_with_issues={result.rows_with_issues}",
        f"errors={result.errors}",
        f"warnings={result.warnings}",
        f"missing_required={result.missing_required}",
        f"duplicates={result.duplicates}",
        f"outliers={result.outliers}",
        f"invalid_numbers={result.invalid_numbers}",
        f"cross_field={result.cross_field}",
        f"company_iqr_anomalies={result.company_iqr_anomalies}",
        f"monthly_anomalies={result.monthly_anomalies}",
        f"date_column={result.date_column or '-'}",
    ]
    for column, stat in result.column_stats.items():
        marker = "HOT" if result.is_hot(column) else "ok"
        lines.append(f"[{marker}] {column} issues={stat.issue_count} ratio={stat.ratio:.3f}")
    return "\n".join(lines)
