"""Source extract readers for ingestion.

This module loads delimited text extracts from local paths and turns
them into labelled batches of raw records for unification.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Iterable

from core.constants import CSV_DELIMITER_CANDIDATES, CSV_SNIFF_SAMPLE_SIZE, SUPPORTED_CSV_EXTENSIONS
from core.errors import LedgerLensIngestError
from core.types import SourceBatch


def read_csv_batches(source_paths: Iterable[str]) -> list[SourceBatch]:
    """Load one batch per extract file or per file inside a directory.

    Args:
        source_paths: File or directory paths.

    Returns:
        Batches in argument order, directory contents sorted by name.

    Raises:
        LedgerLensIngestError: If a path is missing or a file cannot be read.
    """
    batches: list[SourceBatch] = []
    for source_path in source_paths:
        path = Path(source_path).expanduser()
        if not path.exists():
            raise LedgerLensIngestError(
                f"Failed to read source at {path}: path does not exist. "
                "Provide an existing file or directory."
            )
        if path.is_file():
            batches.append(read_csv_batch(path))
            continue
        files = [item for item in sorted(path.iterdir()) if _is_supported_file(item)]
        if not files:
            raise LedgerLensIngestError(
                f"No readable extracts found under {path}. "
                f"Supported extensions: {SUPPORTED_CSV_EXTENSIONS}."
            )
        batches.extend(read_csv_batch(item) for item in files)
    return batches


def read_csv_batch(file_path: Path) -> SourceBatch:
    """Read one delimited extract into a batch labelled by file name.

    Args:
        file_path: Path to a CSV-like file.

    Returns:
        Batch of raw records keyed by header.

    Raises:
        LedgerLensIngestError: If the file is unreadable or has no header.
    """
    try:
        text = file_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as error:
        raise LedgerLensIngestError(
            f"Failed to read extract at {file_path}: {error}. "
            "Save the file as UTF-8 text and retry."
        ) from error
    text = text.lstrip("\r\n")
    if not text.strip():
        raise LedgerLensIngestError(
            f"Extract at {file_path} is empty. Add a header row and data rows."
        )
    reader = csv.DictReader(io.StringIO(text), dialect=_sniff_dialect(text))
    if not reader.fieldnames or not any(name.strip() for name in reader.fieldnames):
        raise LedgerLensIngestError(f"Extract at {file_path} has no header row.")
    try:
        rows = tuple(
            _clean_record(record) for record in reader if not _is_empty_record(record)
        )
    except csv.Error as error:
        raise LedgerLensIngestError(
            f"Failed to parse extract at {file_path}: {error}. Fix the delimited format."
        ) from error
    return SourceBatch(label=file_path.name, rows=rows)


def _sniff_dialect(text: str) -> type[csv.Dialect] | csv.Dialect:
    sample = text[:CSV_SNIFF_SAMPLE_SIZE]
    try:
        return csv.Sniffer().sniff(sample, delimiters=CSV_DELIMITER_CANDIDATES)
    except csv.Error:
        return csv.excel


def _is_empty_record(record: dict[str | None, object]) -> bool:
    """Return whether every cell of a parsed record is blank."""
    return all(value is None or not str(value).strip() for value in record.values())


def _clean_record(record: dict[str | None, object]) -> dict[str, object]:
    """Trim header names and drop overflow cells without a header."""
    cleaned: dict[str, object] = {}
    for key, value in record.items():
        if key is None:
            continue
        cleaned[key.strip()] = value
    return cleaned


def _is_supported_file(file_path: Path) -> bool:
    """Return whether a local file extension is supported."""
    return file_path.is_file() and file_path.suffix.lower() in SUPPORTED_CSV_EXTENSIONS
