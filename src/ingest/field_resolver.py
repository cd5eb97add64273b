"""Header-spelling resolution for heterogeneous ledger extracts.

Each canonical field owns an ordered tuple of known header spellings.
Supporting a new extract layout is a one-line addition to a table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from core.types import RawRecord

COMPANY_CODE_KEYS = (
    "Sociedad",
    "Soc.",
    "SociedadCodigo",
    "codigo",
    "SOCIEDAD",
    "Codigo",
    "Cod. Sociedad",
)
COMPANY_NAME_KEYS = ("SociedadNombre", "sociedad", "Nombre Sociedad", "Empresa", "empresa")
LEDGER_ACCOUNT_KEYS = (
    "Libro Mayor",
    "Libro mayor",
    "Cuenta Contable",
    "libro_mayor",
    "cuenta_contable",
)
MONTH_KEYS = ("Mes", "mes")
AMOUNT_KEYS = (
    "MontoEstandarizado",
    "monto",
    "Importe en ML",
    "Saldo Contable",
    "importe_ml",
    "saldo_contable",
)
DIRECTORY_CODE_KEYS = ("codigo", "Codigo", "SOCIEDAD", "Sociedad", "SociedadCodigo")
DIRECTORY_NAME_KEYS = ("sociedad", "SociedadNombre", "Nombre")

FIELD_CANDIDATES: Mapping[str, tuple[str, ...]] = {
    "company_code": COMPANY_CODE_KEYS,
    "company_name": COMPANY_NAME_KEYS,
    "ledger_account": LEDGER_ACCOUNT_KEYS,
    "month": MONTH_KEYS,
}


@dataclass(frozen=True)
class ResolvedFields:
    """Canonical text fields resolved from one raw record."""

    company_code: str
    company_name: str
    ledger_account: str
    month: str


def resolve_field(record: RawRecord, candidates: tuple[str, ...]) -> str:
    """Return the first non-empty trimmed value among candidate keys.

    Args:
        record: Raw record to inspect.
        candidates: Header spellings in priority order.

    Returns:
        Trimmed text value, or an empty string when nothing matches.
    """
    for key in candidates:
        value = record.get(key)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return ""


def resolve_raw_value(record: RawRecord, candidates: tuple[str, ...]) -> object | None:
    """Return the first present, non-blank raw value among candidate keys.

    Numbers are returned untouched so they skip text normalization.
    """
    for key in candidates:
        value = record.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


def resolve_fields(record: RawRecord) -> ResolvedFields:
    """Resolve every canonical text field of one raw record."""
    resolved = {name: resolve_field(record, keys) for name, keys in FIELD_CANDIDATES.items()}
    return ResolvedFields(**resolved)


def cross_fill_company(code: str, name: str) -> tuple[str, str]:
    """Copy whichever of code and name is present into the empty one.

    Args:
        code: Resolved company code.
        name: Resolved company name.

    Returns:
        ``(code, name)`` with the empty side backfilled.
    """
    if code and not name:
        return code, code
    if name and not code:
        return name, name
    return code, name
