"""Locale-tolerant amount parsing.

Ledger extracts mix European ("1.234,56") and Anglo ("1,234.56")
number formats. Both parsers here are total: they never raise.
"""

from __future__ import annotations

import math
import re

_NUMBER_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")
_IGNORED_CHARACTERS = str.maketrans("", "", " \u00a0\u202f$€£'")


def parse_amount(value: object) -> float:
    """Parse an amount into a finite float.

    Args:
        value: Number or locale-formatted text.

    Returns:
        Parsed amount, ``0.0`` for missing or unparseable input.
    """
    parsed = try_parse_amount(value)
    return 0.0 if parsed is None else parsed


def try_parse_amount(value: object) -> float | None:
    """Parse an amount, reporting failure instead of defaulting.

    Args:
        value: Number or locale-formatted text.

    Returns:
        Finite float, or ``None`` when the value is missing, blank,
        non-numeric, or not finite.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None
    normalized = _normalize_number_text(str(value))
    if normalized is None or not _NUMBER_PATTERN.match(normalized):
        return None
    number = float(normalized)
    return number if math.isfinite(number) else None


def is_blank_amount(value: object) -> bool:
    """Return whether a raw amount value counts as absent."""
    return value is None or (isinstance(value, str) and not value.strip())


def _normalize_number_text(text: str) -> str | None:
    """Strip grouping separators and normalize the decimal mark to ``.``.

    With both separators present the rightmost one is the decimal mark.
    A lone comma is decimal. Repeated separators are grouping. A lone dot
    followed by exactly three digits is grouping, as in "1.234".
    """
    cleaned = text.strip().translate(_IGNORED_CHARACTERS)
    if not cleaned:
        return None
    negative = cleaned.startswith("(") and cleaned.endswith(")")
    if negative:
        cleaned = cleaned[1:-1]
    dot_count = cleaned.count(".")
    comma_count = cleaned.count(",")
    if dot_count and comma_count:
        decimal_mark = "." if cleaned.rfind(".") > cleaned.rfind(",") else ","
        grouping_mark = "," if decimal_mark == "." else "."
        cleaned = cleaned.replace(grouping_mark, "")
        if cleaned.count(decimal_mark) > 1:
            return None
        cleaned = cleaned.replace(decimal_mark, ".")
    elif comma_count:
        cleaned = cleaned.replace(",", "." if comma_count == 1 else "")
    elif dot_count > 1 or _is_thousands_dot(cleaned):
        cleaned = cleaned.replace(".", "")
    if negative:
        return cleaned if cleaned.startswith("-") else f"-{cleaned}"
    return cleaned


def _is_thousands_dot(text: str) -> bool:
    if text.count(".") != 1:
        return False
    integer_part, fraction_part = text.split(".")
    digits_before = integer_part.lstrip("+-")
    return bool(digits_before) and len(fraction_part) == 3 and fraction_part.isdigit()
