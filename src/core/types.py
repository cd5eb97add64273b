"""Shared typed models.

This module defines immutable data models used by ingest, transforms,
store, and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Mapping

from core.constants import (
    AMOUNT_COLUMN,
    COMPANY_CODE_COLUMN,
    COMPANY_NAME_COLUMN,
    LEDGER_ACCOUNT_COLUMN,
    MONTH_COLUMN,
    RELATED_RECORD_COUNT_COLUMN,
    RELATED_SOURCES_COLUMN,
    SOURCE_LABEL_COLUMN,
)

RawRecord = Mapping[str, object]
SortDirection = Literal["asc", "desc"]


@dataclass(frozen=True)
class SourceBatch:
    """One imported tabular extract.

    Attributes:
        label: Batch label, usually the originating file name.
        rows: Raw records with a batch-specific schema.
    """

    label: str
    rows: tuple[RawRecord, ...]


@dataclass(frozen=True)
class CompanyMapping:
    """Company directory entry mapping a code to a display name."""

    code: str
    name: str


@dataclass(frozen=True)
class CanonicalRow:
    """Unified ledger entry with resolved canonical fields.

    Attributes:
        source_label: Label of the first batch that produced this entry.
        company_code: Resolved company code.
        company_name: Resolved company display name.
        ledger_account: Ledger account text, empty when unknown.
        standardized_amount: Parsed amount, always finite.
        month: Month text as found in the extract, empty when unknown.
        related_record_count: Number of raw records merged into this row.
        related_sources: Batch labels that contributed, first-seen order.
        raw_amount: Amount value as received, ``None`` when absent.
        extra_fields: Original columns passed through verbatim.
    """

    source_label: str
    company_code: str
    company_name: str
    ledger_account: str = ""
    standardized_amount: float = 0.0
    month: str = ""
    related_record_count: int = 1
    related_sources: tuple[str, ...] = ()
    raw_amount: object | None = None
    extra_fields: Mapping[str, object] = field(default_factory=dict)

    @property
    def related_sources_text(self) -> str:
        """Comma-joined related source labels."""
        return ", ".join(self.related_sources)

    def canonical_values(self) -> dict[str, object]:
        """Return canonical fields keyed by column name."""
        return {
            SOURCE_LABEL_COLUMN: self.source_label,
            COMPANY_CODE_COLUMN: self.company_code,
            COMPANY_NAME_COLUMN: self.company_name,
            LEDGER_ACCOUNT_COLUMN: self.ledger_account,
            AMOUNT_COLUMN: self.standardized_amount,
            MONTH_COLUMN: self.month,
            RELATED_RECORD_COUNT_COLUMN: self.related_record_count,
            RELATED_SOURCES_COLUMN: self.related_sources_text,
        }

    def value_of(self, column: str) -> object | None:
        """Look up a column by name, canonical fields first."""
        canonical = self.canonical_values()
        if column in canonical:
            return canonical[column]
        return self.extra_fields.get(column)

    def to_dict(self) -> dict[str, object]:
        """Flatten into one mapping of passthrough and canonical columns."""
        payload: dict[str, object] = dict(self.extra_fields)
        payload.update(self.canonical_values())
        return payload


@dataclass(frozen=True)
class ImportResult:
    """Outcome of one import action.

    Attributes:
        rows: Canonical deduplicated rows in first-seen order.
        companies: Sorted company display labels.
        mappings: Company directory entries taken from the directory batch.
        directory_label: Label of the directory batch, if one was supplied.
        input_counts: Raw row counts per data batch label.
    """

    rows: tuple[CanonicalRow, ...]
    companies: tuple[str, ...]
    mappings: tuple[CompanyMapping, ...] = ()
    directory_label: str | None = None
    input_counts: Mapping[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class ViewQuery:
    """Caller-supplied view over the canonical dataset.

    Attributes:
        companies: Company labels, codes, or names to keep. Empty keeps all.
        search_term: Case-insensitive substring matched against any column.
        sort_column: Optional column name to sort by.
        sort_direction: Sort direction used when ``sort_column`` is set.
    """

    companies: tuple[str, ...] = ()
    search_term: str = ""
    sort_column: str | None = None
    sort_direction: SortDirection = "asc"


@dataclass(frozen=True)
class DatasetView:
    """Row subset plus positions of each row in the full dataset."""

    rows: tuple[CanonicalRow, ...]
    index_map: tuple[int, ...]

    def __len__(self) -> int:
        return len(self.rows)
