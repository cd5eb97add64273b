"""Unit tests for delimited extract readers."""

from __future__ import annotations

import pytest

from core.errors import LedgerLensIngestError
from ingest.input_reader import read_csv_batch, read_csv_batches
from tests.fixture_paths import fixture_path


def test_read_csv_batch_sniffs_semicolon_delimiter() -> None:
    """Semicolon extracts with decimal commas should keep amount text intact."""
    batch = read_csv_batch(fixture_path("extracts/libro_mayor_enero.csv"))

    assert (
        batch.label == "libro_mayor_enero.csv"
        and len(batch.rows) == 3
        and batch.rows[0]["Importe en ML"] == "-120,84"
        and batch.rows[1]["Soc."] == "1020"
    )


def test_read_csv_batches_expands_directories_in_name_order() -> None:
    """Directory sources should yield one batch per supported file, sorted."""
    batches = read_csv_batches([str(fixture_path("extracts"))])

    assert [batch.label for batch in batches] == [
        "libro_mayor_enero.csv",
        "mayor_consolidado.csv",
        "sociedades.csv",
    ]


def test_read_csv_batch_strips_header_whitespace(tmp_path) -> None:
    """Header names should be trimmed."""
    extract = tmp_path / "mayor.csv"
    extract.write_text(" Sociedad , monto \n1020,5\n", encoding="utf-8")

    batch = read_csv_batch(extract)

    assert set(batch.rows[0]) == {"Sociedad", "monto"}


def test_read_csv_batches_missing_path_raises() -> None:
    """Missing sources should raise an ingest error."""
    with pytest.raises(LedgerLensIngestError):
        read_csv_batches(["tests/fixtures/extracts/does_not_exist.csv"])


def test_read_csv_batch_blank_file_raises() -> None:
    """Files without any content should raise an ingest error."""
    with pytest.raises(LedgerLensIngestError):
        read_csv_batch(fixture_path("invalid/blank_extract.csv"))


def test_read_csv_batch_keeps_blank_lines_inside_quoted_cells(tmp_path) -> None:
    """Quoted multi-line cells should keep their blank lines."""
    extract = tmp_path / "mayor.csv"
    extract.write_text(
        'Sociedad,Glosa\n1020,"linea uno\n\nlinea tres"\n\n2030,ajuste\n',
        encoding="utf-8",
    )

    batch = read_csv_batch(extract)

    assert len(batch.rows) == 2 and batch.rows[0]["Glosa"] == "linea uno\n\nlinea tres"


def test_read_csv_batch_skips_rows_without_values(tmp_path) -> None:
    """Rows made only of delimiters should not become records."""
    extract = tmp_path / "mayor.csv"
    extract.write_text("\nSociedad;monto\n1020;5\n;\n2030;7\n", encoding="utf-8")

    batch = read_csv_batch(extract)

    assert [row["Sociedad"] for row in batch.rows] == ["1020", "2030"]
