"""Turn pasted text or uploaded files into a list of text entries."""

from __future__ import annotations

from pathlib import Path

import pandas as pd

ENTRY_SEPARATOR = "\n\n"


def split_entries(raw: str) -> list[str]:
    """Split on blank-line separators, trim each entry, drop empties."""
    if not raw:
        return []
    normalised = raw.replace("\r\n", "\n")
    return [chunk.strip() for chunk in normalised.split(ENTRY_SEPARATOR) if chunk.strip()]


def read_entries(path: str | Path, text_column: str = "text") -> list[str]:
    """Read entries from a .txt or .csv file.

    Text files go through split_entries. CSV files yield one entry per row,
    taken from *text_column* if present, otherwise from the first column.
    """
    path = Path(path)
    if path.suffix.lower() == ".csv":
        try:
            df = pd.read_csv(path, dtype=str, keep_default_na=False)
        except pd.errors.EmptyDataError:
            return []
        if df.empty:
            return []
        column = text_column if text_column in df.columns else df.columns[0]
        return [value.strip() for value in df[column].tolist() if value and value.strip()]

    return split_entries(path.read_text(encoding="utf-8"))
