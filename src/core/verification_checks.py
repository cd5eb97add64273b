"""Row-level verification check implementations."""

from __future__ import annotations

import math
from dataclasses import dataclass

from core.constants import (
    AMOUNT_COLUMN,
    COMPANY_CODE_COLUMN,
    MESSAGE_DUPLICATE,
    MESSAGE_EXPENSE_SIGN,
    MESSAGE_INVALID_NUMBER,
    MESSAGE_IQR_ANOMALY,
    MESSAGE_OUTLIER,
    MESSAGE_REQUIRED_MISSING,
    MESSAGE_REVENUE_SIGN,
    MESSAGE_ZSCORE_ANOMALY,
    REQUIRED_COLUMNS,
    UNKNOWN_COMPANY_KEY,
)
from core.types import CanonicalRow
from core.verification_types import VerificationIssue, VerificationThresholds
from ingest.amount_parser import is_blank_amount, try_parse_amount

DuplicateKey = tuple[str, str, str, str]


@dataclass(frozen=True)
class AmountCheck:
    """Amount usable by statistical checks, or the reason it is not."""

    amount: float | None
    invalid: bool


def check_required_fields(row: CanonicalRow) -> list[VerificationIssue]:
    """Flag each required column that is empty or whitespace."""
    issues: list[VerificationIssue] = []
    for column in REQUIRED_COLUMNS:
        value = row.value_of(column)
        if value is None or not str(value).strip():
            issues.append(VerificationIssue(column, MESSAGE_REQUIRED_MISSING, "error"))
    return issues


def check_amount(row: CanonicalRow) -> AmountCheck:
    """Decide whether a row's amount can feed numeric checks.

    An amount present in the source that does not parse to a finite
    number is invalid. An absent amount keeps its default of zero.
    """
    if not is_blank_amount(row.raw_amount) and try_parse_amount(row.raw_amount) is None:
        return AmountCheck(amount=None, invalid=True)
    amount = row.standardized_amount
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return AmountCheck(amount=None, invalid=True)
    if not math.isfinite(amount):
        return AmountCheck(amount=None, invalid=True)
    return AmountCheck(amount=float(amount), invalid=False)


def invalid_amount_issue() -> VerificationIssue:
    """Issue raised for an amount that is not a finite number."""
    return VerificationIssue(AMOUNT_COLUMN, MESSAGE_INVALID_NUMBER, "error")


def check_magnitude(amount: float, thresholds: VerificationThresholds) -> VerificationIssue | None:
    """Flag amounts whose absolute value exceeds the outlier threshold."""
    if abs(amount) > thresholds.outlier_threshold:
        return VerificationIssue(AMOUNT_COLUMN, MESSAGE_OUTLIER, "warning")
    return None


def build_duplicate_key(row: CanonicalRow) -> DuplicateKey:
    """Build the loose duplicate key shown to reviewers.

    Amount and month are deliberately excluded, unlike the merge key
    used by unification.
    """
    return (row.company_code, row.source_label, row.ledger_account, row.company_name)


def duplicate_issue() -> VerificationIssue:
    """Issue raised for the second and later rows sharing a duplicate key."""
    return VerificationIssue(COMPANY_CODE_COLUMN, MESSAGE_DUPLICATE, "warning")


def company_group_key(row: CanonicalRow) -> str:
    """Grouping key for per-company statistics."""
    return row.company_name or row.company_code or UNKNOWN_COMPANY_KEY


def check_sign_consistency(
    ledger_account: str,
    amount: float,
    thresholds: VerificationThresholds,
) -> list[VerificationIssue]:
    """Match the ledger account text against sign keyword sets.

    Revenue accounts with a negative amount are errors. Expense accounts
    with a positive amount are warnings.
    """
    ledger_text = ledger_account.lower()
    issues: list[VerificationIssue] = []
    if amount < 0 and _matches_any(ledger_text, thresholds.revenue_keywords):
        issues.append(VerificationIssue(AMOUNT_COLUMN, MESSAGE_REVENUE_SIGN, "error"))
    if amount > 0 and _matches_any(ledger_text, thresholds.expense_keywords):
        issues.append(VerificationIssue(AMOUNT_COLUMN, MESSAGE_EXPENSE_SIGN, "warning"))
    return issues


def check_iqr_bounds(amount: float, bounds: tuple[float, float]) -> VerificationIssue | None:
    """Flag an amount outside its company's IQR bounds."""
    low, high = bounds
    if amount < low or amount > high:
        return VerificationIssue(AMOUNT_COLUMN, MESSAGE_IQR_ANOMALY, "warning")
    return None


def check_zscore(
    score: float | None,
    thresholds: VerificationThresholds,
) -> VerificationIssue | None:
    """Flag a monthly z-score above the configured threshold."""
    if score is None or score <= thresholds.zscore_threshold:
        return None
    message = MESSAGE_ZSCORE_ANOMALY.format(threshold=thresholds.zscore_threshold)
    return VerificationIssue(AMOUNT_COLUMN, message, "warning")


def _matches_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)
