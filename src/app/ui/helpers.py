"""
Shared UI helper utilities for the marquee Streamlit application.

This module centralizes small cross-cutting helpers (number formatting, metric choices,
summary tables, quick KPIs) used by multiple tabs. Keeping these here avoids circular
imports and makes the tab renderers leaner.

Notes:
    - This module is UI-adjacent (returns Polars frames ready for st.dataframe) but
      contains no Streamlit state manipulation itself.
"""

from __future__ import annotations

from collections.abc import Sequence

import polars as pl

from marquee.analysis.frame import records_frame
from marquee.analysis.summaries import ColumnSummary
from marquee.core.constants import GROSS, IMDB_RATING, META_SCORE, NO_OF_VOTES, RUNTIME
from marquee.core.parsing import flag_display_name
from marquee.core.records import ColumnKind, MovieDataset, column_kind

__all__ = [
    "METRIC_LABELS",
    "metric_label",
    "format_score",
    "summary_rows",
    "flag_count_rows",
    "correlatable_columns",
    "compute_overview_kpis",
]

# Numeric columns offered as chart metrics, with axis labels.
METRIC_LABELS: dict[str, str] = {
    IMDB_RATING: "IMDB rating",
    META_SCORE: "Metascore",
    RUNTIME: "Runtime (min)",
    GROSS: "Gross (USD)",
    NO_OF_VOTES: "Votes",
}


def metric_label(column: str) -> str:
    """Axis label for a metric column; flag columns read as their genre, others verbatim."""
    if column in METRIC_LABELS:
        return METRIC_LABELS[column]
    if column_kind(column) is ColumnKind.FLAG:
        return flag_display_name(column)
    return column


def format_score(value: float | None, digits: int = 1) -> str:
    """Format an optional number with fixed decimals, or "n/a" when missing.

    Examples:
        >>> format_score(7.456)
        '7.5'
        >>> format_score(None)
        'n/a'
    """
    if value is None:
        return "n/a"
    return f"{value:.{digits}f}"


def summary_rows(summaries: Sequence[ColumnSummary]) -> pl.DataFrame:
    """Flatten column summaries into a table with one row per column.

    Numeric statistics are formatted as strings so the table mixes numeric and
    categorical rows without null-typed columns.
    """
    rows = []
    for s in summaries:
        if s.kind is ColumnKind.FLAG:
            detail = f"{s.distinct} genres"
        elif s.mean is not None:
            detail = f"mean {format_score(s.mean, 2)}, median {format_score(s.median, 2)}"
        elif s.minimum is not None:
            detail = f"{format_score(s.minimum, 0)} to {format_score(s.maximum, 0)}"
        else:
            detail = ", ".join(s.sample)
        rows.append(
            {
                "column": s.name,
                "type": s.type_label,
                "description": s.description,
                "count": s.count,
                "missing": s.missing,
                "distinct": s.distinct,
                "summary": detail,
            }
        )
    return pl.DataFrame(
        rows,
        schema={
            "column": pl.Utf8,
            "type": pl.Utf8,
            "description": pl.Utf8,
            "count": pl.Int64,
            "missing": pl.Int64,
            "distinct": pl.Int64,
            "summary": pl.Utf8,
        },
    )


def flag_count_rows(summary: ColumnSummary) -> pl.DataFrame:
    """Genre flag true counts, most frequent first (ties by genre)."""
    df = pl.DataFrame(
        {
            "genre": [flag_display_name(f) for f, _ in summary.flag_counts],
            "movies": [n for _, n in summary.flag_counts],
        },
        schema={"genre": pl.Utf8, "movies": pl.Int64},
    )
    return df.sort(["movies", "genre"], descending=[True, False])


def correlatable_columns(dataset: MovieDataset, *, include_flags: bool = False) -> list[str]:
    """Dataset columns the correlation heatmap can use, in dataset order."""
    out: list[str] = []
    for c in dataset.columns:
        kind = column_kind(c)
        if kind in (ColumnKind.CONTINUOUS, ColumnKind.TEMPORAL):
            out.append(c)
        elif kind is ColumnKind.FLAG and include_flags:
            out.append(c)
    return out


def compute_overview_kpis(dataset: MovieDataset) -> dict[str, float]:
    """Compute quick KPI metrics for the overview tab.

    Computes:
        - movies: Number of records.
        - mean_imdb: Mean IMDB rating over rated movies.
        - mean_meta: Mean Metascore over scored movies.
        - genres: Number of distinct genre flags.

    Args:
        dataset (MovieDataset): Loaded dataset.

    Returns:
        dict[str, float]: KPI dictionary; means are 0.0 when no value is present.
    """
    df = records_frame(dataset.records, [IMDB_RATING, META_SCORE])
    if df.is_empty():
        return {"movies": 0.0, "mean_imdb": 0.0, "mean_meta": 0.0, "genres": 0.0}
    means = df.select(
        pl.col(IMDB_RATING).mean().alias("_imdb"), pl.col(META_SCORE).mean().alias("_meta")
    ).row(0)
    return {
        "movies": float(df.height),
        "mean_imdb": float(means[0] or 0.0),
        "mean_meta": float(means[1] or 0.0),
        "genres": float(len(dataset.flag_columns)),
    }
