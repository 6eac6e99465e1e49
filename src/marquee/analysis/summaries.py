"""
Per-column summary statistics for the dataset overview.

Every column gets one ``ColumnSummary``. Genre flag columns are folded into a single
trailing "Genre (boolean flags)" summary that reports the true count per flag.

Dropped rows
- Numeric statistics ignore missing values; ``missing`` counts them.
- Categorical samples and distinct counts ignore missing values.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import polars as pl

from marquee.core.constants import FLAG_SET_SUMMARY_NAME, GENRE
from marquee.core.records import ColumnKind, MovieRecord, column_kind, describe_column, record_value

from .frame import records_frame

__all__ = ["ColumnSummary", "column_summaries", "CATEGORY_SAMPLE_SIZE", "GENRE_SAMPLE_SIZE"]

CATEGORY_SAMPLE_SIZE = 5
GENRE_SAMPLE_SIZE = 8


@dataclass(frozen=True)
class ColumnSummary:
    """
    Summary of one column.

    Attributes:
        name (str): Column name, or "Genre (boolean flags)" for the folded flag summary.
        kind (ColumnKind): Semantic kind.
        type_label (str): Human type label.
        description (str): Column description.
        count (int): Non-missing values (records for the flag summary).
        missing (int): Missing values.
        distinct (int | None): Distinct values for non-numeric columns.
        sample (tuple[str, ...]): First distinct values in encounter order.
        minimum, maximum, mean, median (float | None): Numeric statistics; temporal columns
            only report minimum and maximum.
        flag_counts (tuple[tuple[str, int], ...]): ``(flag column, true count)`` pairs.
    """

    name: str
    kind: ColumnKind
    type_label: str
    description: str
    count: int
    missing: int
    distinct: int | None = None
    sample: tuple[str, ...] = ()
    minimum: float | None = None
    maximum: float | None = None
    mean: float | None = None
    median: float | None = None
    flag_counts: tuple[tuple[str, int], ...] = ()


def _opt(v: object) -> float | None:
    return None if v is None else float(v)  # type: ignore[arg-type]


def _numeric_summary(df: pl.DataFrame, name: str, kind: ColumnKind) -> ColumnSummary:
    type_label, description = describe_column(name)
    c = pl.col(name)
    row = df.select(
        c.min().alias("min"),
        c.max().alias("max"),
        c.cast(pl.Float64).mean().alias("mean"),
        c.cast(pl.Float64).median().alias("median"),
        c.count().alias("count"),
        c.null_count().alias("missing"),
    ).row(0, named=True)
    temporal = kind is ColumnKind.TEMPORAL
    return ColumnSummary(
        name=name,
        kind=kind,
        type_label=type_label,
        description=description,
        count=int(row["count"]),
        missing=int(row["missing"]),
        minimum=_opt(row["min"]),
        maximum=_opt(row["max"]),
        mean=None if temporal else _opt(row["mean"]),
        median=None if temporal else _opt(row["median"]),
    )


def _categorical_summary(
    records: Sequence[MovieRecord], name: str, kind: ColumnKind
) -> ColumnSummary:
    type_label, description = describe_column(name)
    seen: dict[str, None] = {}
    present = 0
    for r in records:
        value = record_value(r, name)
        tokens = value if isinstance(value, tuple) else ((value,) if value else ())
        if not tokens:
            continue
        present += 1
        for tok in tokens:
            seen.setdefault(str(tok), None)
    size = GENRE_SAMPLE_SIZE if name == GENRE else CATEGORY_SAMPLE_SIZE
    return ColumnSummary(
        name=name,
        kind=kind,
        type_label=type_label,
        description=description,
        count=present,
        missing=len(records) - present,
        distinct=len(seen),
        sample=tuple(list(seen)[:size]),
    )


def column_summaries(records: Sequence[MovieRecord], columns: Sequence[str]) -> list[ColumnSummary]:
    """
    Summarize every column in order, then append the folded flag summary.

    Continuous columns report min/max/mean/median; temporal columns min/max; the Genre
    column distinct tokens with an 8-value sample; other columns distinct values with a
    5-value sample. An entirely missing column reports ``count == 0`` with null statistics.
    The flag summary is appended only when ``columns`` contains flag columns.
    """
    kinds = {c: column_kind(c) for c in columns}
    numeric = [c for c in columns if kinds[c] in (ColumnKind.CONTINUOUS, ColumnKind.TEMPORAL)]
    flags = [c for c in columns if kinds[c] is ColumnKind.FLAG]
    df = records_frame(records, numeric + flags)

    out: list[ColumnSummary] = []
    for c in columns:
        kind = kinds[c]
        if kind is ColumnKind.FLAG:
            continue
        if c in numeric:
            out.append(_numeric_summary(df, c, kind))
        else:
            out.append(_categorical_summary(records, c, kind))

    if flags:
        counts = df.select([pl.col(f).sum().alias(f) for f in flags]).row(0)
        out.append(
            ColumnSummary(
                name=FLAG_SET_SUMMARY_NAME,
                kind=ColumnKind.FLAG,
                type_label="Boolean (flag set)",
                description="Derived genre flags; true when the movie lists the genre.",
                count=len(records),
                missing=0,
                distinct=len(flags),
                flag_counts=tuple((f, int(n or 0)) for f, n in zip(flags, counts, strict=True)),
            )
        )
    return out
