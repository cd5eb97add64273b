"""Unit tests for header-spelling resolution."""

from __future__ import annotations

from ingest.field_resolver import (
    AMOUNT_KEYS,
    COMPANY_CODE_KEYS,
    cross_fill_company,
    resolve_field,
    resolve_fields,
    resolve_raw_value,
)


def test_resolve_field_skips_blank_candidates() -> None:
    """The first non-empty trimmed candidate should win."""
    record = {"Sociedad": "   ", "Soc.": " 1020 ", "codigo": "9999"}

    assert resolve_field(record, COMPANY_CODE_KEYS) == "1020"


def test_resolve_field_returns_empty_when_nothing_matches() -> None:
    """Unknown headers should resolve to an empty string."""
    assert resolve_field({"Otra": "x"}, COMPANY_CODE_KEYS) == ""


def test_resolve_fields_reads_alternative_spellings() -> None:
    """Every canonical field should resolve from its own header variants."""
    record = {
        "Cod. Sociedad": 1020,
        "Nombre Sociedad": "Comercial Andina",
        "Cuenta Contable": "4101 Ventas",
        "mes": "Marzo",
    }

    fields = resolve_fields(record)

    assert (
        fields.company_code == "1020"
        and fields.company_name == "Comercial Andina"
        and fields.ledger_account == "4101 Ventas"
        and fields.month == "Marzo"
    )


def test_resolve_raw_value_keeps_numbers() -> None:
    """Numeric raw amounts should be returned untouched."""
    record = {"MontoEstandarizado": "", "monto": 12.5}

    assert resolve_raw_value(record, AMOUNT_KEYS) == 12.5


def test_resolve_raw_value_returns_none_when_absent() -> None:
    """Missing amount columns should resolve to None."""
    assert resolve_raw_value({"Importe en ML": "  "}, AMOUNT_KEYS) is None


def test_cross_fill_company_copies_missing_side() -> None:
    """Whichever of code and name is present should fill the other."""
    assert cross_fill_company("1020", "") == ("1020", "1020") and cross_fill_company(
        "", "Andina"
    ) == ("Andina", "Andina")


def test_cross_fill_company_leaves_complete_pairs() -> None:
    """Complete or empty pairs should be returned as-is."""
    assert cross_fill_company("1020", "Andina") == ("1020", "Andina") and cross_fill_company(
        "", ""
    ) == ("", "")
