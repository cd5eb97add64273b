"""Row view helpers over the canonical dataset.

Views never copy or mutate rows; they pair a row subset with the
original index of each row so verification issues stay attached to
the same record across filtering, sorting, and paging.
"""

from __future__ import annotations

from typing import Sequence

from core.types import CanonicalRow, DatasetView, ViewQuery
from core.verification_types import VerificationResult
from transforms.company_labels import format_company_label


def full_view(rows: Sequence[CanonicalRow]) -> DatasetView:
    """Return the identity view over all rows."""
    return DatasetView(rows=tuple(rows), index_map=tuple(range(len(rows))))


def select_view(rows: Sequence[CanonicalRow], query: ViewQuery) -> DatasetView:
    """Filter and sort rows while preserving original indices.

    Args:
        rows: Full canonical dataset.
        query: Company, search, and sort constraints.

    Returns:
        Selected rows with their original dataset indices.
    """
    selected = [(index, row) for index, row in enumerate(rows)]
    if query.companies:
        wanted = set(query.companies)
        selected = [(index, row) for index, row in selected if _matches_company(row, wanted)]
    search_term = query.search_term.strip().lower()
    if search_term:
        selected = [(index, row) for index, row in selected if _matches_search(row, search_term)]
    if query.sort_column:
        column = query.sort_column
        selected = sorted(
            selected,
            key=lambda pair: _sort_key(pair[1].value_of(column)),
            reverse=query.sort_direction == "desc",
        )
    return DatasetView(
        rows=tuple(row for _, row in selected),
        index_map=tuple(index for index, _ in selected),
    )


def only_rows_with_issues(view: DatasetView, result: VerificationResult) -> DatasetView:
    """Keep only rows that carry at least one verification issue."""
    kept = [
        (row, index)
        for row, index in zip(view.rows, view.index_map)
        if result.issues_for(index)
    ]
    return DatasetView(
        rows=tuple(row for row, _ in kept),
        index_map=tuple(index for _, index in kept),
    )


def paginate(view: DatasetView, page: int, page_size: int) -> DatasetView:
    """Slice one page out of a view, pages starting at 1."""
    if page < 1 or page_size < 1:
        return DatasetView(rows=(), index_map=())
    start = (page - 1) * page_size
    end = start + page_size
    return DatasetView(rows=view.rows[start:end], index_map=view.index_map[start:end])


def page_count(view: DatasetView, page_size: int) -> int:
    """Return the number of pages needed to show a view."""
    if page_size < 1:
        return 0
    return -(-len(view) // page_size)


def _matches_company(row: CanonicalRow, wanted: set[str]) -> bool:
    candidates = {
        f"{row.company_name} - {row.company_code}",
        format_company_label(row.company_name, row.company_code),
        row.company_code,
        row.company_name,
    }
    return not wanted.isdisjoint(candidates)


def _matches_search(row: CanonicalRow, search_term: str) -> bool:
    return any(
        search_term in str(value).lower()
        for value in row.to_dict().values()
        if value is not None
    )


def _sort_key(value: object) -> tuple[int, float, str]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, float(value), "")
    text = "" if value is None else str(value)
    return (1, 0.0, text.casefold())
