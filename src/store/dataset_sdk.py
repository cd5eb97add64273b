"""Python SDK for ledger dataset operations.

This module exposes high-level APIs for importing extracts, selecting
row views, and verifying them. The client holds only the current
canonical dataset; every import replaces it.
"""

from __future__ import annotations

from typing import Iterable

from core.config import LedgerLensConfig
from core.types import (
    CanonicalRow,
    CompanyMapping,
    DatasetView,
    ImportResult,
    SourceBatch,
    ViewQuery,
)
from core.verification import verify_rows
from core.verification_types import VerificationResult, VerificationThresholds
from ingest.input_reader import read_csv_batches
from ingest.pipeline import import_batches
from store.dataset_view import full_view, only_rows_with_issues, select_view

_CacheKey = tuple[int, ViewQuery, VerificationThresholds]


class LedgerClient:
    """Primary SDK entry point for import and verification workflows."""

    def __init__(self, config: LedgerLensConfig | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
        """
        self._config = config or LedgerLensConfig.from_env()
        self._result = ImportResult(rows=(), companies=())
        self._generation = 0
        self._cached: tuple[_CacheKey, DatasetView, VerificationResult] | None = None

    @property
    def config(self) -> LedgerLensConfig:
        """Runtime configuration in use."""
        return self._config

    @property
    def rows(self) -> tuple[CanonicalRow, ...]:
        """Canonical rows of the current dataset."""
        return self._result.rows

    @property
    def companies(self) -> tuple[str, ...]:
        """Sorted company display labels of the current dataset."""
        return self._result.companies

    @property
    def mappings(self) -> tuple[CompanyMapping, ...]:
        """Company directory entries from the last import."""
        return self._result.mappings

    @property
    def generation(self) -> int:
        """Number of imports performed; identifies the current dataset."""
        return self._generation

    def import_batches(self, batches: Iterable[SourceBatch]) -> ImportResult:
        """Import parsed batches, replacing any previous dataset.

        Args:
            batches: Data batches plus an optional directory batch.

        Returns:
            Import outcome for the new dataset.
        """
        result = import_batches(batches, self._config.directory_marker)
        self._result = result
        self._generation += 1
        self._cached = None
        return result

    def import_files(self, source_paths: Iterable[str]) -> ImportResult:
        """Read extract files and import them, replacing any previous dataset.

        Raises:
            LedgerLensIngestError: If an extract cannot be read.
        """
        return self.import_batches(read_csv_batches(source_paths))

    def view(self, query: ViewQuery | None = None) -> DatasetView:
        """Select a filtered and sorted view of the current dataset."""
        if query is None:
            return full_view(self.rows)
        return select_view(self.rows, query)

    def verify(
        self,
        query: ViewQuery | None = None,
        thresholds: VerificationThresholds | None = None,
    ) -> VerificationResult:
        """Verify a view of the current dataset.

        The last result is reused while the dataset, query, and thresholds
        are unchanged.

        Args:
            query: View to verify, the full dataset when omitted.
            thresholds: Verification limits, config defaults when omitted.

        Returns:
            Verification result keyed by original row index.
        """
        return self._verify_cached(query or ViewQuery(), thresholds)[1]

    def issues_view(
        self,
        query: ViewQuery | None = None,
        thresholds: VerificationThresholds | None = None,
    ) -> DatasetView:
        """Return only the rows of a view that carry verification issues."""
        view, result = self._verify_cached(query or ViewQuery(), thresholds)
        return only_rows_with_issues(view, result)

    def _verify_cached(
        self,
        query: ViewQuery,
        thresholds: VerificationThresholds | None,
    ) -> tuple[DatasetView, VerificationResult]:
        limits = thresholds or self._config.thresholds
        key: _CacheKey = (self._generation, query, limits)
        if self._cached is not None and self._cached[0] == key:
            return self._cached[1], self._cached[2]
        view = self.view(query)
        result = verify_rows(view.rows, view.index_map, limits)
        self._cached = (key, view, result)
        return view, result
