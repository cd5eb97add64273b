"""Unit tests for company directory handling."""

from __future__ import annotations

from core.types import CompanyMapping, SourceBatch
from ingest.company_directory import (
    build_company_directory,
    extract_company_mappings,
    is_directory_batch,
    split_directory_batch,
)


def test_is_directory_batch_is_case_insensitive() -> None:
    """The marker should match regardless of label case."""
    assert is_directory_batch("Maestro_SOCIEDADES.csv") and not is_directory_batch("mayor.csv")


def test_split_directory_batch_uses_first_match_only() -> None:
    """Later marker matches should stay in the data batches."""
    first = SourceBatch(label="sociedades.csv", rows=())
    data = SourceBatch(label="mayor.csv", rows=())
    second = SourceBatch(label="sociedades_old.csv", rows=())

    directory, data_batches = split_directory_batch([data, first, second])

    assert directory is first and data_batches == [data, second]


def test_split_directory_batch_honors_custom_marker() -> None:
    """A configured marker should replace the default one."""
    batch = SourceBatch(label="empresas.csv", rows=())

    directory, data_batches = split_directory_batch([batch], marker="EMPRESAS")

    assert directory is batch and data_batches == []


def test_extract_company_mappings_skips_rows_without_code() -> None:
    """Directory rows need a code to produce a mapping."""
    batch = SourceBatch(
        label="sociedades.csv",
        rows=(
            {"codigo": "1020", "sociedad": "Comercial Andina"},
            {"codigo": "", "sociedad": "Sin codigo"},
            {"SOCIEDAD": "2030", "Nombre": "Servicios del Sur"},
        ),
    )

    mappings = extract_company_mappings(batch)

    assert mappings == (
        CompanyMapping(code="1020", name="Comercial Andina"),
        CompanyMapping(code="2030", name="Servicios del Sur"),
    )


def test_extract_company_mappings_without_directory() -> None:
    """No directory batch should yield no mappings."""
    assert extract_company_mappings(None) == ()


def test_build_company_directory_last_entry_wins() -> None:
    """Repeated codes should keep the last name."""
    mappings = [
        CompanyMapping(code="1020", name="Antigua"),
        CompanyMapping(code="1020", name="Comercial Andina"),
    ]

    assert build_company_directory(mappings) == {"1020": "Comercial Andina"}
