"""Unit tests for date column detection."""

from __future__ import annotations

from datetime import date

from core.verification import verify_rows
from tests.row_factory import make_row
from transforms.date_detection import detect_date_column, month_key, parse_date


def test_detect_date_column_prefers_known_headers() -> None:
    """Known date headers should be detected first."""
    row = make_row(Posting="2024-01-31", Fecha="15/03/2024")

    assert detect_date_column(row) == "Fecha"


def test_detect_date_column_falls_back_to_iso_values() -> None:
    """Any column with an ISO-like date should be detected."""
    row = make_row(Posting="2024-01-31", Glosa="Ajuste")

    assert detect_date_column(row) == "Posting"


def test_detect_date_column_without_dates() -> None:
    """Rows without date values should yield no column."""
    assert detect_date_column(make_row(Glosa="Ajuste")) is None and detect_date_column(None) is None


def test_month_key_reads_iso_and_day_first_text() -> None:
    """ISO keeps its month; slash dates are day-first."""
    assert month_key("2024-03-05") == "2024-03" and month_key("05/03/2024") == "2024-03"


def test_month_key_accepts_date_objects() -> None:
    """Date objects should map to their month."""
    assert month_key(date(2024, 11, 2)) == "2024-11"


def test_parse_date_rejects_non_dates() -> None:
    """Month names in Spanish and blanks are not dates."""
    assert parse_date("Febrero") is None and parse_date("  ") is None and parse_date(5) is None


def test_month_key_reads_year_first_slash_and_dot_dates() -> None:
    """Year-first dates keep month before day whatever the separator."""
    assert month_key("2024/01/05") == "2024-01" and month_key("2024.01.05") == "2024-01"


def test_verify_groups_year_first_slash_dates_by_month() -> None:
    """Slash dates in one month should share a monthly z-score group."""
    rows = [
        make_row(
            ledger=f"L{day}",
            amount=1000.0 if day == 20 else 100.0,
            Fecha=f"2024/01/{day:02d}",
        )
        for day in range(1, 21)
    ]

    result = verify_rows(rows)

    assert result.date_column == "Fecha" and result.monthly_anomalies == 1
