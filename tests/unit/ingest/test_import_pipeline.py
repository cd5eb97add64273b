"""Unit tests for import orchestration."""

from __future__ import annotations

from core.types import SourceBatch
from ingest.pipeline import import_batches


def _batches() -> list[SourceBatch]:
    return [
        SourceBatch(
            label="sociedades.csv",
            rows=({"codigo": "1020", "sociedad": "Comercial Andina"},),
        ),
        SourceBatch(
            label="mayor_a.csv",
            rows=(
                {"Sociedad": "1020", "Libro Mayor": "2103011004", "Mes": "Febrero", "monto": "-120,84"},
                {"Sociedad": "2030", "Libro Mayor": "6101", "Mes": "Febrero", "monto": "10"},
            ),
        ),
        SourceBatch(
            label="mayor_b.csv",
            rows=(
                {"Soc.": "1020", "cuenta_contable": "2103011004", "mes": "Febrero", "monto": -120.84},
            ),
        ),
    ]


def test_import_batches_merges_and_backfills_names() -> None:
    """Directory names should backfill rows and duplicates should merge."""
    result = import_batches(_batches())

    first = result.rows[0]
    assert (
        len(result.rows) == 2
        and first.company_name == "Comercial Andina"
        and first.related_record_count == 2
        and first.related_sources == ("mayor_a.csv", "mayor_b.csv")
    )


def test_import_batches_reports_directory_and_counts() -> None:
    """Import metadata should describe the directory and data batches."""
    result = import_batches(_batches())

    assert (
        result.directory_label == "sociedades.csv"
        and result.input_counts == {"mayor_a.csv": 2, "mayor_b.csv": 1}
        and result.companies == ("2030 - 2030", "Comercial Andina - 1020")
    )


def test_import_batches_without_directory() -> None:
    """Imports without a directory batch should still unify data."""
    result = import_batches(_batches()[1:])

    assert result.directory_label is None and result.mappings == () and len(result.rows) == 2
