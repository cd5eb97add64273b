"""Canonical row builders shared by tests."""

from __future__ import annotations

from core.types import CanonicalRow


def make_row(
    code: str = "1020",
    name: str = "Comercial Andina",
    ledger: str = "",
    amount: float = 0.0,
    source: str = "mayor.csv",
    raw_amount: object | None = None,
    **extra_fields: object,
) -> CanonicalRow:
    """Build a canonical row with sensible defaults.

    Args:
        code: Company code.
        name: Company name.
        ledger: Ledger account text.
        amount: Standardized amount.
        source: Source batch label.
        raw_amount: Amount as received, defaults to ``amount``.
        **extra_fields: Passthrough columns such as ``Fecha``.

    Returns:
        Canonical row with one related record.
    """
    return CanonicalRow(
        source_label=source,
        company_code=code,
        company_name=name,
        ledger_account=ledger,
        standardized_amount=amount,
        related_sources=(source,),
        raw_amount=amount if raw_amount is None else raw_amount,
        extra_fields=dict(extra_fields),
    )
