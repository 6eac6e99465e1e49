"""
Typed Polars frames over movie records.

The aggregation functions build a narrow frame with only the columns they need, so
grouping and averaging run through Polars expressions instead of hand-written loops.

Dtypes by column kind
- temporal   -> Int64
- continuous -> Float64
- flag       -> Boolean (never null)
- other      -> Utf8

Missing values are nulls; each caller decides which nulls to drop.
"""

from __future__ import annotations

from collections.abc import Sequence

import polars as pl

from marquee.core.constants import OTHER_CATEGORY, TITLE
from marquee.core.records import ColumnKind, MovieRecord, column_kind, record_value

__all__ = ["PRIMARY_GENRE", "primary_genre", "records_frame"]

# Synthetic column holding the first genre token.
PRIMARY_GENRE = "Primary_Genre"


def primary_genre(record: MovieRecord) -> str:
    """First genre token of a record, or "Other" when it lists none."""
    return record.genres[0] if record.genres else OTHER_CATEGORY


def _dtype(kind: ColumnKind) -> pl.DataType:
    if kind is ColumnKind.TEMPORAL:
        return pl.Int64()
    if kind is ColumnKind.CONTINUOUS:
        return pl.Float64()
    if kind is ColumnKind.FLAG:
        return pl.Boolean()
    return pl.Utf8()


def _cell(record: MovieRecord, column: str, kind: ColumnKind) -> object:
    value = record_value(record, column)
    if kind in (ColumnKind.TEMPORAL, ColumnKind.CONTINUOUS, ColumnKind.FLAG):
        return value
    if isinstance(value, tuple):
        return ", ".join(value) if value else None
    return value


def records_frame(records: Sequence[MovieRecord], columns: Sequence[str]) -> pl.DataFrame:
    """Build a frame with TITLE, PRIMARY_GENRE and the requested columns, in record order.

    Args:
        records: Typed movie records.
        columns: Dataset column names (duplicates and TITLE are ignored).

    Returns:
        pl.DataFrame: One row per record; an empty frame keeps the full schema.
    """
    wanted: list[str] = []
    for c in columns:
        if c not in wanted and c not in (TITLE, PRIMARY_GENRE):
            wanted.append(c)

    schema: dict[str, pl.DataType] = {TITLE: pl.Utf8(), PRIMARY_GENRE: pl.Utf8()}
    data: dict[str, list[object]] = {
        TITLE: [r.title for r in records],
        PRIMARY_GENRE: [primary_genre(r) for r in records],
    }
    for c in wanted:
        kind = column_kind(c)
        schema[c] = _dtype(kind)
        data[c] = [_cell(r, c, kind) for r in records]
    return pl.DataFrame(data, schema=schema)
