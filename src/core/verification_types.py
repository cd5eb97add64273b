"""Typed models for verification workflows."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Mapping

from core.constants import (
    DEFAULT_HOT_COLUMN_RATIO,
    DEFAULT_IQR_MULTIPLIER,
    DEFAULT_MIN_IQR_GROUP_SIZE,
    DEFAULT_MIN_ZSCORE_GROUP_SIZE,
    DEFAULT_OUTLIER_THRESHOLD,
    DEFAULT_ZSCORE_THRESHOLD,
    EXPENSE_KEYWORDS,
    REVENUE_KEYWORDS,
)

Severity = Literal["error", "warning"]


@dataclass(frozen=True)
class VerificationThresholds:
    """Tunable limits used by verification checks.

    Attributes:
        outlier_threshold: Absolute amount above which a row is an outlier.
        hot_column_ratio: Issue ratio at which a column is reported as hot.
        iqr_multiplier: Multiplier applied to the IQR for outlier bounds.
        zscore_threshold: Absolute z-score above which an amount is flagged.
        min_iqr_group_size: Minimum amounts per company for IQR checks.
        min_zscore_group_size: Minimum amounts per company and month for z-scores.
        revenue_keywords: Ledger keywords that require non-negative amounts.
        expense_keywords: Ledger keywords that expect non-positive amounts.
    """

    outlier_threshold: float = DEFAULT_OUTLIER_THRESHOLD
    hot_column_ratio: float = DEFAULT_HOT_COLUMN_RATIO
    iqr_multiplier: float = DEFAULT_IQR_MULTIPLIER
    zscore_threshold: float = DEFAULT_ZSCORE_THRESHOLD
    min_iqr_group_size: int = DEFAULT_MIN_IQR_GROUP_SIZE
    min_zscore_group_size: int = DEFAULT_MIN_ZSCORE_GROUP_SIZE
    revenue_keywords: tuple[str, ...] = REVENUE_KEYWORDS
    expense_keywords: tuple[str, ...] = EXPENSE_KEYWORDS


@dataclass(frozen=True)
class VerificationIssue:
    """One data-quality finding attached to a row."""

    column: str
    message: str
    severity: Severity


@dataclass(frozen=True)
class ColumnStat:
    """Issue count and ratio for one column across the verified view."""

    issue_count: int
    ratio: float


@dataclass(frozen=True)
class VerificationResult:
    """Aggregate verification outcome for one row view.

    ``issues_by_index`` is keyed by original dataset index, so callers can
    page, sort, or filter the view without losing issue attachment.
    """

    total_rows: int = 0
    errors: int = 0
    warnings: int = 0
    missing_required: int = 0
    duplicates: int = 0
    outliers: int = 0
    invalid_numbers: int = 0
    cross_field: int = 0
    monthly_anomalies: int = 0
    company_iqr_anomalies: int = 0
    issues_by_index: Mapping[int, tuple[VerificationIssue, ...]] = field(default_factory=dict)
    column_stats: Mapping[str, ColumnStat] = field(default_factory=dict)
    hot_columns: tuple[str, ...] = ()
    date_column: str | None = None

    @property
    def rows_with_issues(self) -> int:
        """Count rows carrying at least one issue."""
        return sum(1 for issues in self.issues_by_index.values() if issues)

    def issues_for(self, original_index: int) -> tuple[VerificationIssue, ...]:
        """Return issues attached to one original row index."""
        return self.issues_by_index.get(original_index, ())

    def is_hot(self, column: str) -> bool:
        """Return whether a column crossed the hot-column ratio."""
        return column in self.hot_columns
