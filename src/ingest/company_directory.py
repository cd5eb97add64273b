"""Company directory batch handling.

An optional auxiliary extract maps company codes to display names.
It is recognized by a marker in its label, e.g. ``sociedades.csv``.
"""

from __future__ import annotations

from typing import Iterable

from core.constants import DEFAULT_DIRECTORY_MARKER
from core.types import CompanyMapping, SourceBatch
from ingest.field_resolver import DIRECTORY_CODE_KEYS, DIRECTORY_NAME_KEYS, resolve_field


def is_directory_batch(label: str, marker: str = DEFAULT_DIRECTORY_MARKER) -> bool:
    """Return whether a batch label marks the company directory."""
    return marker.lower() in label.lower()


def split_directory_batch(
    batches: Iterable[SourceBatch],
    marker: str = DEFAULT_DIRECTORY_MARKER,
) -> tuple[SourceBatch | None, list[SourceBatch]]:
    """Separate the directory batch from data batches.

    Args:
        batches: All imported batches.
        marker: Label fragment identifying the directory batch.

    Returns:
        ``(directory_batch, data_batches)``. Only the first matching batch
        is the directory; later matches are treated as data.
    """
    directory: SourceBatch | None = None
    data_batches: list[SourceBatch] = []
    for batch in batches:
        if directory is None and is_directory_batch(batch.label, marker):
            directory = batch
            continue
        data_batches.append(batch)
    return directory, data_batches


def extract_company_mappings(batch: SourceBatch | None) -> tuple[CompanyMapping, ...]:
    """Read code/name pairs from a directory batch.

    Rows without a resolvable code are skipped.
    """
    if batch is None:
        return ()
    mappings: list[CompanyMapping] = []
    for record in batch.rows:
        code = resolve_field(record, DIRECTORY_CODE_KEYS)
        if not code:
            continue
        mappings.append(CompanyMapping(code=code, name=resolve_field(record, DIRECTORY_NAME_KEYS)))
    return tuple(mappings)


def build_company_directory(mappings: Iterable[CompanyMapping]) -> dict[str, str]:
    """Build a code to name lookup; later entries override earlier ones."""
    directory: dict[str, str] = {}
    for mapping in mappings:
        code = mapping.code.strip()
        if code:
            directory[code] = mapping.name.strip()
    return directory
