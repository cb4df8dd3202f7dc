"""Renderers for report rows: plain lines and a pivot table."""

from typing import IO, Iterable, List, Optional, Sequence

import pandas as pd

from .models import ReportRow

__all__ = [
    "format_lines",
    "pivot_rows",
    "render_table",
    "to_frame",
    "write_lines",
]

COLUMNS = ["name", "key", "value"]


def format_lines(rows: Iterable[ReportRow]) -> str:
    """Join rows as ``name value key`` lines, each newline-terminated."""
    return "".join(f"{row.to_line()}\n" for row in rows)


def write_lines(rows: Iterable[ReportRow], stream: IO[str]) -> List[ReportRow]:
    """Write each row to ``stream`` as it arrives and return the rows."""
    written = []
    for row in rows:
        stream.write(f"{row.to_line()}\n")
        written.append(row)
    return written


def to_frame(rows: Iterable[ReportRow]) -> pd.DataFrame:
    """Convert rows to a long-format DataFrame."""
    records = [row.model_dump() for row in rows]
    return pd.DataFrame(records, columns=COLUMNS)


def pivot_rows(
    rows: Iterable[ReportRow],
    keys: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """Pivot rows into one row per result file and one column per key.

    Several values for the same file and key are joined with a space.
    Columns follow ``keys`` when given, otherwise first appearance.
    Missing cells are empty strings.

    Args:
        rows: Report rows
        keys: Column order

    Returns:
        DataFrame indexed by file name
    """
    df = to_frame(rows)
    if keys is None:
        keys = list(dict.fromkeys(df["key"]))

    if df.empty:
        table = pd.DataFrame(columns=list(keys), dtype=object)
    else:
        table = (
            df.groupby(["name", "key"], sort=False)["value"]
            .agg(" ".join)
            .unstack("key")
            .sort_index()
            .reindex(columns=list(keys))
        )
    table.index.name = "name"
    table.columns.name = None
    return table.astype(object).fillna("")


def render_table(table: pd.DataFrame) -> str:
    """Render a pivot table from :func:`pivot_rows` as text."""
    if table.empty:
        return "(no results)"
    return table.to_string()
