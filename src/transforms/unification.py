"""Batch unification and identity-key deduplication.

This module folds raw records from several extracts into canonical
rows. Records sharing a dedup key are merged into the first-seen row,
which accumulates the labels of every contributing batch.
"""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Iterable, Mapping

from core.constants import AMOUNT_ROUNDING_DIGITS
from core.logging_config import get_logger
from core.types import CanonicalRow, CompanyMapping, RawRecord, SourceBatch
from ingest.amount_parser import parse_amount
from ingest.company_directory import build_company_directory
from ingest.field_resolver import AMOUNT_KEYS, cross_fill_company, resolve_fields, resolve_raw_value

DedupKey = tuple[str, str, str, float]

_LOGGER = get_logger(__name__)


def unify_batches(
    batches: Iterable[SourceBatch],
    mappings: Iterable[CompanyMapping] = (),
) -> list[CanonicalRow]:
    """Unify data batches into deduplicated canonical rows.

    Args:
        batches: Data batches, excluding the company directory batch.
        mappings: Optional company directory entries used to backfill names.

    Returns:
        Representative rows in first-seen dedup key order.
    """
    directory = build_company_directory(mappings)
    by_key: dict[DedupKey, CanonicalRow] = {}
    input_count = 0
    for batch in batches:
        for record in batch.rows:
            input_count += 1
            row = build_canonical_row(record, batch.label, directory)
            key = build_dedup_key(row)
            existing = by_key.get(key)
            by_key[key] = row if existing is None else merge_duplicate(existing, row)
    unified = list(by_key.values())
    _LOGGER.info(
        "unify_completed",
        input_count=input_count,
        output_count=len(unified),
        merged_count=input_count - len(unified),
        directory_size=len(directory),
    )
    return unified


def build_canonical_row(
    record: RawRecord,
    source_label: str,
    directory: Mapping[str, str],
) -> CanonicalRow:
    """Resolve one raw record into a canonical row.

    Args:
        record: Raw record from one batch.
        source_label: Label of the batch holding the record.
        directory: Company code to name lookup.

    Returns:
        Canonical row with one related record and source.
    """
    fields = resolve_fields(record)
    name = fields.company_name or directory.get(fields.company_code, "")
    code, name = cross_fill_company(fields.company_code, name)
    raw_amount = resolve_raw_value(record, AMOUNT_KEYS)
    return CanonicalRow(
        source_label=source_label,
        company_code=code,
        company_name=name,
        ledger_account=fields.ledger_account,
        standardized_amount=parse_amount(raw_amount),
        month=fields.month,
        related_record_count=1,
        related_sources=(source_label,),
        raw_amount=raw_amount,
        extra_fields=dict(record),
    )


def build_dedup_key(row: CanonicalRow) -> DedupKey:
    """Build the identity key used to merge repeated imports.

    The amount is rounded half-up to cents, so values that only differ
    below that precision collapse into one entry.
    """
    return (
        row.company_code,
        row.ledger_account,
        row.month,
        _round_half_up(row.standardized_amount, AMOUNT_ROUNDING_DIGITS),
    )


def merge_duplicate(existing: CanonicalRow, incoming: CanonicalRow) -> CanonicalRow:
    """Merge a colliding row into its representative.

    Args:
        existing: First-seen representative row.
        incoming: Later row sharing the same dedup key.

    Returns:
        Updated representative with unioned sources and incremented count.
    """
    sources = list(existing.related_sources)
    for label in incoming.related_sources:
        if label and label not in sources:
            sources.append(label)
    company_name = existing.company_name
    if _is_backfilled_name(existing) and not _is_backfilled_name(incoming):
        company_name = incoming.company_name
    return replace(
        existing,
        company_name=company_name,
        related_record_count=existing.related_record_count + incoming.related_record_count,
        related_sources=tuple(sources),
    )


def _is_backfilled_name(row: CanonicalRow) -> bool:
    # Empty, or copied from the code by cross-fill.
    return not row.company_name or row.company_name == row.company_code


def _round_half_up(value: float, digits: int) -> float:
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale + 0.0
