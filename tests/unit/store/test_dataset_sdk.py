"""Unit tests for the LedgerLens SDK client."""

from __future__ import annotations

from core.config import LedgerLensConfig
from core.types import SourceBatch, ViewQuery
from core.verification_types import VerificationThresholds
from store.dataset_sdk import LedgerClient
from tests.fixture_paths import fixture_path


def _batches() -> list[SourceBatch]:
    return [
        SourceBatch(
            label="mayor.csv",
            rows=(
                {"Sociedad": "1020", "Libro Mayor": "4101 Ventas", "monto": "-10"},
                {"Sociedad": "2030", "Libro Mayor": "6101 Gastos", "monto": "-5"},
            ),
        )
    ]


def test_import_batches_replaces_previous_dataset() -> None:
    """Re-importing should replace the dataset instead of appending."""
    client = LedgerClient(LedgerLensConfig())
    client.import_batches(_batches())

    client.import_batches(_batches())

    assert len(client.rows) == 2 and client.generation == 2


def test_import_files_reads_fixture_directory() -> None:
    """File imports should split out the directory and unify extracts."""
    client = LedgerClient(LedgerLensConfig())

    result = client.import_files([str(fixture_path("extracts"))])

    assert (
        len(result.rows) == 4
        and result.directory_label == "sociedades.csv"
        and client.companies
        == ("3040 - 3040", "Comercial Andina - 1020", "Servicios del Sur - 2030")
    )


def test_verify_reuses_result_for_same_inputs() -> None:
    """Unchanged dataset, query, and thresholds should reuse the result."""
    client = LedgerClient(LedgerLensConfig())
    client.import_batches(_batches())

    first = client.verify(ViewQuery(search_term="ventas"))
    second = client.verify(ViewQuery(search_term="ventas"))

    assert first is second and first.cross_field == 1


def test_verify_recomputes_after_import() -> None:
    """A new import should invalidate the cached result."""
    client = LedgerClient(LedgerLensConfig())
    client.import_batches(_batches())
    first = client.verify()

    client.import_batches(_batches())

    assert client.verify() is not first


def test_verify_uses_explicit_thresholds() -> None:
    """Explicit thresholds should override config defaults."""
    client = LedgerClient(LedgerLensConfig())
    client.import_batches(_batches())

    result = client.verify(thresholds=VerificationThresholds(outlier_threshold=1.0))

    assert result.outliers == 2


def test_issues_view_keeps_original_indices() -> None:
    """Issue views should expose original dataset indices."""
    client = LedgerClient(LedgerLensConfig())
    client.import_batches(_batches())

    view = client.issues_view(ViewQuery(sort_column="company_code", sort_direction="desc"))

    assert view.index_map == (0,)
