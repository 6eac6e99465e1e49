"""
Grouped series and point sets for the line and scatter views.

Dropped rows
- grouped_series: rows missing the x value or the metric.
- scatter_points: rows missing runtime, the metric, or the release year.
- scatter_points_by_genre: rows missing runtime or the metric.
- critics_vs_audience_points: rows missing either the Metascore or the IMDB rating.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import polars as pl

from marquee.core.constants import (
    ALL_SERIES_KEY,
    IMDB_RATING,
    META_SCORE,
    RELEASED_YEAR,
    RUNTIME,
    TITLE,
)
from marquee.core.records import MovieRecord
from marquee.core.stats import Regression, linear_regression, pearson

from .frame import PRIMARY_GENRE, records_frame

__all__ = [
    "SeriesPoint",
    "LineSeries",
    "ScatterPoint",
    "GenrePoint",
    "CriticPoint",
    "GenreTrend",
    "grouped_series",
    "scatter_points",
    "scatter_points_by_genre",
    "critics_vs_audience_points",
    "genre_trends",
    "overall_correlation",
]


@dataclass(frozen=True)
class SeriesPoint:
    """Mean metric ``y`` over the ``count`` records sharing the x value ``x``."""

    x: float
    y: float
    count: int


@dataclass(frozen=True)
class LineSeries:
    key: str
    points: tuple[SeriesPoint, ...]


@dataclass(frozen=True)
class ScatterPoint:
    title: str
    runtime: float
    value: float
    genre: str
    year: int


@dataclass(frozen=True)
class GenrePoint:
    genre: str
    runtime: float
    value: float
    count: int


@dataclass(frozen=True)
class CriticPoint:
    title: str
    meta_score: float
    imdb_rating: float
    genre: str


@dataclass(frozen=True)
class GenreTrend:
    """OLS line of IMDB rating on Metascore for one primary genre, over ``[x_min, x_max]``."""

    genre: str
    regression: Regression
    x_min: float
    x_max: float
    count: int


def _bucket(df: pl.DataFrame, x_column: str, metric_column: str) -> tuple[SeriesPoint, ...]:
    if df.is_empty():
        return ()
    agg = (
        df.group_by(x_column)
        .agg(pl.col(metric_column).mean().alias("_y"), pl.len().alias("_n"))
        .sort(x_column)
    )
    return tuple(
        SeriesPoint(x=float(x), y=float(y), count=int(n))
        for x, y, n in agg.select(x_column, "_y", "_n").iter_rows()
    )


def grouped_series(
    records: Sequence[MovieRecord],
    grouping_columns: Sequence[str],
    metric_column: str,
    x_column: str = RELEASED_YEAR,
) -> list[LineSeries]:
    """
    Mean of ``metric_column`` per x value, for all records and for each flag group.

    Args:
        records: Active records.
        grouping_columns: Boolean flag columns (e.g. "isDrama"); a record belongs to a
            group when its flag is true.
        metric_column: Numeric column averaged within each x bucket.
        x_column: Discrete x column (release year by default).

    Returns:
        list[LineSeries]: The "All" series first, then one series per grouping column in
        the given order. Points are sorted by x ascending and only present x values are
        emitted. Groups with no qualifying record are omitted, including "All" when no
        record qualifies.
    """
    groups = [g for g in dict.fromkeys(grouping_columns) if g not in (x_column, metric_column)]
    df = records_frame(records, [x_column, metric_column, *groups]).drop_nulls(
        [x_column, metric_column]
    )

    out: list[LineSeries] = []
    every = _bucket(df, x_column, metric_column)
    if every:
        out.append(LineSeries(ALL_SERIES_KEY, every))
    for g in groups:
        pts = _bucket(df.filter(pl.col(g)), x_column, metric_column)
        if pts:
            out.append(LineSeries(g, pts))
    return out


def scatter_points(records: Sequence[MovieRecord], metric_column: str) -> list[ScatterPoint]:
    """One point per movie: runtime vs ``metric_column``, tagged with primary genre and year."""
    df = records_frame(records, [RUNTIME, metric_column, RELEASED_YEAR]).drop_nulls(
        [RUNTIME, metric_column, RELEASED_YEAR]
    )
    return [
        ScatterPoint(title=t, runtime=float(rt), value=float(v), genre=g, year=int(y))
        for t, g, rt, v, y in df.select(
            TITLE, PRIMARY_GENRE, RUNTIME, metric_column, RELEASED_YEAR
        ).iter_rows()
    ]


def scatter_points_by_genre(
    records: Sequence[MovieRecord], metric_column: str
) -> list[GenrePoint]:
    """Mean runtime and mean ``metric_column`` per primary genre, sorted by genre."""
    df = records_frame(records, [RUNTIME, metric_column]).drop_nulls([RUNTIME, metric_column])
    if df.is_empty():
        return []
    agg = (
        df.group_by(PRIMARY_GENRE)
        .agg(
            pl.col(RUNTIME).mean().alias("_rt"),
            pl.col(metric_column).mean().alias("_v"),
            pl.len().alias("_n"),
        )
        .sort(PRIMARY_GENRE)
    )
    return [
        GenrePoint(genre=g, runtime=float(rt), value=float(v), count=int(n))
        for g, rt, v, n in agg.select(PRIMARY_GENRE, "_rt", "_v", "_n").iter_rows()
    ]


def critics_vs_audience_points(records: Sequence[MovieRecord]) -> list[CriticPoint]:
    df = records_frame(records, [META_SCORE, IMDB_RATING]).drop_nulls([META_SCORE, IMDB_RATING])
    return [
        CriticPoint(title=t, meta_score=float(m), imdb_rating=float(i), genre=g)
        for t, g, m, i in df.select(TITLE, PRIMARY_GENRE, META_SCORE, IMDB_RATING).iter_rows()
    ]


def genre_trends(points: Sequence[CriticPoint]) -> list[GenreTrend]:
    """Per-genre regression lines, for genres with at least two points, sorted by genre."""
    by_genre: dict[str, list[CriticPoint]] = {}
    for p in points:
        by_genre.setdefault(p.genre, []).append(p)
    out: list[GenreTrend] = []
    for genre in sorted(by_genre):
        pts = by_genre[genre]
        if len(pts) < 2:
            continue
        xs = [p.meta_score for p in pts]
        ys = [p.imdb_rating for p in pts]
        out.append(GenreTrend(genre, linear_regression(xs, ys), min(xs), max(xs), len(pts)))
    return out


def overall_correlation(points: Sequence[CriticPoint]) -> float:
    """Pearson r between Metascore and IMDB rating; 0.0 for degenerate input."""
    return pearson([p.meta_score for p in points], [p.imdb_rating for p in points])
