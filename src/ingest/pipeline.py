"""Import orchestration.

This module coordinates directory detection, company mapping extraction,
unification, and company label building for one import action.
"""

from __future__ import annotations

from typing import Iterable

from core.constants import DEFAULT_DIRECTORY_MARKER
from core.logging_config import get_logger
from core.types import ImportResult, SourceBatch
from ingest.company_directory import extract_company_mappings, split_directory_batch
from transforms.company_labels import build_company_display_list
from transforms.unification import unify_batches

_LOGGER = get_logger(__name__)


def import_batches(
    batches: Iterable[SourceBatch],
    directory_marker: str = DEFAULT_DIRECTORY_MARKER,
) -> ImportResult:
    """Run one import action over already-parsed batches.

    Args:
        batches: Data batches plus an optional company directory batch.
        directory_marker: Label fragment identifying the directory batch.

    Returns:
        Canonical rows, company labels, and directory mappings.
    """
    directory_batch, data_batches = split_directory_batch(batches, directory_marker)
    mappings = extract_company_mappings(directory_batch)
    rows = unify_batches(data_batches, mappings)
    companies = build_company_display_list(rows)
    result = ImportResult(
        rows=tuple(rows),
        companies=tuple(companies),
        mappings=mappings,
        directory_label=directory_batch.label if directory_batch else None,
        input_counts={batch.label: len(batch.rows) for batch in data_batches},
    )
    _log_import_completion(result)
    return result


def _log_import_completion(result: ImportResult) -> None:
    """Log import completion with contextual metadata."""
    _LOGGER.info(
        "import_completed",
        batch_count=len(result.input_counts),
        input_count=sum(result.input_counts.values()),
        output_count=len(result.rows),
        company_count=len(result.companies),
        directory_label=result.directory_label,
        mapping_count=len(result.mappings),
    )
