"""
Audience vs critic disagreement datasets for the diverging bar and band charts.

The first value (IMDB rating, 1-10) is rescaled onto the second value's scale
(Metascore, 0-100) before differencing, so ``gap = rescale_a(a) - b``. A positive gap
means audiences liked the movie more than critics.

Dropped rows: records missing either value (and, by year, records missing the year).
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

import polars as pl

from marquee.core.constants import IMDB_RATING, META_SCORE
from marquee.core.records import MovieRecord, numeric_value

from .frame import primary_genre

__all__ = [
    "CategoryGap",
    "YearGap",
    "imdb_to_100",
    "disagreement_by_category",
    "disagreement_by_year",
    "sort_by_magnitude",
]


def imdb_to_100(x: float) -> float:
    """Map the 1-10 IMDB scale onto 0-100: ``(x - 1) / 9 * 100``."""
    return (x - 1) / 9 * 100


@dataclass(frozen=True)
class CategoryGap:
    category: str
    mean_gap: float
    count: int


@dataclass(frozen=True)
class YearGap:
    """Yearly means: gap, rescaled first value, second value and their midpoint."""

    year: int
    mean_gap: float
    mean_a: float
    mean_b: float
    mean_avg: float
    count: int


def _gaps(
    records: Sequence[MovieRecord],
    key: Callable[[MovieRecord], object],
    value_a: str,
    value_b: str,
    rescale_a: Callable[[float], float],
) -> pl.DataFrame:
    keys: list[object] = []
    a_vals: list[float] = []
    b_vals: list[float] = []
    for r in records:
        a = numeric_value(r, value_a)
        b = numeric_value(r, value_b)
        k = key(r)
        if a is None or b is None or k is None:
            continue
        keys.append(k)
        a_vals.append(rescale_a(a))
        b_vals.append(b)
    df = pl.DataFrame({"_a": a_vals, "_b": b_vals}, schema={"_a": pl.Float64, "_b": pl.Float64})
    return df.with_columns(pl.Series("_key", keys, strict=False)).with_columns(
        (pl.col("_a") - pl.col("_b")).alias("_gap")
    )


def disagreement_by_category(
    records: Sequence[MovieRecord],
    category: Callable[[MovieRecord], str] = primary_genre,
    value_a: str = IMDB_RATING,
    value_b: str = META_SCORE,
    rescale_a: Callable[[float], float] = imdb_to_100,
) -> list[CategoryGap]:
    """
    Mean signed gap per category.

    Returns:
        list[CategoryGap]: Sorted by mean gap ascending (ties by category). Empty when no
        record has both values.
    """
    df = _gaps(records, category, value_a, value_b, rescale_a)
    if df.is_empty():
        return []
    agg = (
        df.group_by("_key")
        .agg(pl.col("_gap").mean().alias("_mean"), pl.len().alias("_n"))
        .sort(["_mean", "_key"])
    )
    return [
        CategoryGap(category=str(k), mean_gap=float(g), count=int(n))
        for k, g, n in agg.select("_key", "_mean", "_n").iter_rows()
    ]


def sort_by_magnitude(gaps: Sequence[CategoryGap]) -> list[CategoryGap]:
    """Reorder category gaps by absolute mean gap, largest first (stable)."""
    return sorted(gaps, key=lambda g: -abs(g.mean_gap))


def disagreement_by_year(
    records: Sequence[MovieRecord],
    value_a: str = IMDB_RATING,
    value_b: str = META_SCORE,
    rescale_a: Callable[[float], float] = imdb_to_100,
) -> list[YearGap]:
    """Mean gap and mean rescaled values per release year, sorted by year."""
    df = _gaps(records, lambda r: r.year, value_a, value_b, rescale_a)
    if df.is_empty():
        return []
    agg = (
        df.group_by("_key")
        .agg(
            pl.col("_gap").mean().alias("_gap_mean"),
            pl.col("_a").mean().alias("_a_mean"),
            pl.col("_b").mean().alias("_b_mean"),
            pl.len().alias("_n"),
        )
        .sort("_key")
    )
    return [
        YearGap(
            year=int(y),
            mean_gap=float(g),
            mean_a=float(a),
            mean_b=float(b),
            mean_avg=(float(a) + float(b)) / 2,
            count=int(n),
        )
        for y, g, a, b, n in agg.select("_key", "_gap_mean", "_a_mean", "_b_mean", "_n").iter_rows()
    ]
