"""Shared JSON serialization for canonical rows.

This module centralizes CanonicalRow JSON serialization logic used
when handing the unified dataset to downstream consumers.
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Iterable

from core.errors import LedgerLensExportError
from core.types import CanonicalRow


def canonical_row_to_payload(row: CanonicalRow) -> dict[str, object]:
    """Serialize a CanonicalRow into a JSON-safe payload.

    Args:
        row: Canonical row instance.

    Returns:
        Dictionary payload with canonical fields and passthrough columns.
    """
    return {
        "source_label": row.source_label,
        "company_code": row.company_code,
        "company_name": row.company_name,
        "ledger_account": row.ledger_account,
        "standardized_amount": row.standardized_amount,
        "month": row.month,
        "related_record_count": row.related_record_count,
        "related_sources": list(row.related_sources),
        "extra_fields": {str(key): _json_safe(value) for key, value in row.extra_fields.items()},
    }


def write_rows_jsonl(rows: Iterable[CanonicalRow], output_path: str) -> Path:
    """Write canonical rows as JSON lines.

    Args:
        rows: Rows to serialize.
        output_path: Destination file path.

    Returns:
        Resolved path of the written file.

    Raises:
        LedgerLensExportError: If the file cannot be written.
    """
    destination = Path(output_path).expanduser().resolve()
    lines = [
        json.dumps(canonical_row_to_payload(row), ensure_ascii=False, sort_keys=True)
        for row in rows
    ]
    body = "\n".join(lines) + "\n" if lines else ""
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(body, encoding="utf-8")
    except OSError as error:
        raise LedgerLensExportError(
            f"Failed to write canonical rows to {destination}: {error}. "
            "Choose a writable output path and retry."
        ) from error
    return destination


def _json_safe(value: object) -> object:
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)
