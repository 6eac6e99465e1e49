"""
Poster gallery ordering and summary statistics.

The gallery shows the records featured by the current selection first and the rest after
them, each part sorted by the same key.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass
from typing import Literal

from marquee.core.records import MovieRecord
from marquee.core.stats import mean

__all__ = ["SortKey", "SORT_KEYS", "GalleryOrder", "GalleryStats", "gallery_order", "gallery_stats"]

SortKey = Literal["title", "year", "imdb", "meta"]
SORT_KEYS: tuple[SortKey, ...] = ("title", "year", "imdb", "meta")


@dataclass(frozen=True)
class GalleryOrder:
    active: tuple[MovieRecord, ...]
    rest: tuple[MovieRecord, ...]

    def __iter__(self):
        yield from self.active
        yield from self.rest


@dataclass(frozen=True)
class GalleryStats:
    """Count plus mean IMDB rating and Metascore over records that have them (None if none)."""

    count: int
    mean_imdb: float | None
    mean_meta: float | None


def _sort_key(sort_by: SortKey):
    # Missing values sort last; ties fall back to title.
    if sort_by == "year":
        return lambda r: (r.year is None, r.year or 0, r.title)
    if sort_by == "imdb":
        return lambda r: (r.imdb_rating is None, -(r.imdb_rating or 0.0), r.title)
    if sort_by == "meta":
        return lambda r: (r.meta_score is None, -(r.meta_score or 0.0), r.title)
    return lambda r: r.title


def gallery_order(
    records: Sequence[MovieRecord], active_ids: Collection[str], sort_by: SortKey = "title"
) -> GalleryOrder:
    """
    Split records into the active ones and the rest, each sorted by ``sort_by``.

    Args:
        records: Every record the gallery may show.
        active_ids: Titles featured by the current selection.
        sort_by: "title" and "year" sort ascending; "imdb" and "meta" descending.
    """
    wanted = set(active_ids)
    key = _sort_key(sort_by)
    active = sorted((r for r in records if r.title in wanted), key=key)
    rest = sorted((r for r in records if r.title not in wanted), key=key)
    return GalleryOrder(tuple(active), tuple(rest))


def gallery_stats(records: Sequence[MovieRecord]) -> GalleryStats:
    return GalleryStats(
        count=len(records),
        mean_imdb=mean([r.imdb_rating for r in records if r.imdb_rating is not None]),
        mean_meta=mean([r.meta_score for r in records if r.meta_score is not None]),
    )
