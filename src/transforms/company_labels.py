"""Company display labels for company filters."""

from __future__ import annotations

import unicodedata
from typing import Iterable

from core.constants import NO_NAME_PLACEHOLDER
from core.types import CanonicalRow


def build_company_display_list(rows: Iterable[CanonicalRow]) -> list[str]:
    """Build sorted, deduplicated ``"{name} - {code}"`` labels.

    Args:
        rows: Canonical rows.

    Returns:
        Labels sorted accent- and case-insensitively.
    """
    labels = {format_company_label(row.company_name, row.company_code) for row in rows}
    return sorted(labels, key=_collation_key)


def format_company_label(name: str, code: str) -> str:
    """Format one company display label."""
    display_name = name.strip() or NO_NAME_PLACEHOLDER
    return f"{display_name} - {code.strip()}".strip()


def _collation_key(label: str) -> tuple[str, str]:
    decomposed = unicodedata.normalize("NFKD", label)
    base = "".join(character for character in decomposed if not unicodedata.combining(character))
    return base.casefold(), label
