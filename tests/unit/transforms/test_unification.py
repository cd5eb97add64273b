"""Unit tests for batch unification and deduplication."""

from __future__ import annotations

from core.types import CompanyMapping, SourceBatch
from transforms.unification import build_dedup_key, unify_batches


def _record(code: str = "1020", ledger: str = "2103011004", amount: object = "-120,84", **extra):
    return {"Sociedad": code, "Libro Mayor": ledger, "Mes": "Febrero", "monto": amount, **extra}


def test_unify_batches_merges_repeated_imports() -> None:
    """The same entry in two extracts should collapse into one row."""
    batches = [
        SourceBatch(label="A", rows=(_record(),)),
        SourceBatch(label="B", rows=(_record(amount=-120.84),)),
    ]

    rows = unify_batches(batches)

    assert (
        len(rows) == 1
        and rows[0].related_record_count == 2
        and rows[0].related_sources == ("A", "B")
        and rows[0].source_label == "A"
    )


def test_unify_batches_keeps_distinct_amounts_apart() -> None:
    """Different cent amounts should produce separate rows."""
    batch = SourceBatch(label="A", rows=(_record(amount="10,00"), _record(amount="10,01")))

    assert len(unify_batches([batch])) == 2


def test_unify_batches_rounds_amounts_to_cents() -> None:
    """Amounts differing below one cent should merge."""
    batch = SourceBatch(label="A", rows=(_record(amount=-120.841), _record(amount=-120.838)))

    assert len(unify_batches([batch])) == 1


def test_unify_batches_counts_same_batch_duplicates_once_per_source() -> None:
    """Repeats inside one batch raise the count but not the source list."""
    batch = SourceBatch(label="A", rows=(_record(), _record()))

    rows = unify_batches([batch])

    assert rows[0].related_record_count == 2 and rows[0].related_sources == ("A",)


def test_unify_batches_preserves_first_seen_order() -> None:
    """Output order should follow first appearance of each key."""
    batch = SourceBatch(
        label="A",
        rows=(_record(ledger="3"), _record(ledger="1"), _record(ledger="3"), _record(ledger="2")),
    )

    assert [row.ledger_account for row in unify_batches([batch])] == ["3", "1", "2"]


def test_unify_batches_backfills_names_from_directory() -> None:
    """Rows with only a code should take the directory name."""
    batch = SourceBatch(label="A", rows=(_record(),))
    mappings = [CompanyMapping(code="1020", name="Comercial Andina")]

    rows = unify_batches([batch], mappings)

    assert rows[0].company_name == "Comercial Andina"


def test_unify_batches_cross_fills_missing_code() -> None:
    """A row with only a name should reuse it as the code."""
    batch = SourceBatch(label="A", rows=({"Empresa": "Andina", "monto": "5"},))

    row = unify_batches([batch])[0]

    assert row.company_code == "Andina" and row.company_name == "Andina"


def test_merge_prefers_real_name_over_backfilled_code() -> None:
    """A later real name should replace a name copied from the code."""
    batches = [
        SourceBatch(label="A", rows=(_record(),)),
        SourceBatch(label="B", rows=(_record(SociedadNombre="Comercial Andina"),)),
    ]

    rows = unify_batches(batches)

    assert rows[0].company_name == "Comercial Andina"


def test_unify_batches_keeps_passthrough_columns() -> None:
    """Unknown columns should survive unification verbatim."""
    batch = SourceBatch(label="A", rows=(_record(Fecha="2024-02-10", Glosa="Ajuste"),))

    row = unify_batches([batch])[0]

    assert row.extra_fields["Fecha"] == "2024-02-10" and row.value_of("Glosa") == "Ajuste"


def test_unify_batches_defaults_missing_amount_to_zero() -> None:
    """A record without amount columns should carry a zero amount."""
    batch = SourceBatch(label="A", rows=({"Sociedad": "1020"},))

    row = unify_batches([batch])[0]

    assert row.standardized_amount == 0.0 and row.raw_amount is None


def test_build_dedup_key_uses_rounded_amount() -> None:
    """The dedup key should hold code, ledger, month, and cents."""
    row = unify_batches([SourceBatch(label="A", rows=(_record(amount="1.234,567"),))])[0]

    assert build_dedup_key(row) == ("1020", "2103011004", "Febrero", 1234.57)
