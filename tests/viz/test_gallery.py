from __future__ import annotations

import math

from marquee.viz.gallery import gallery_order, gallery_stats


def test_active_records_come_first(movies) -> None:
    order = gallery_order(movies, ["Delta", "Alpha"])
    assert [r.title for r in order.active] == ["Alpha", "Delta"]
    assert [r.title for r in order.rest] == ["Beta", "Epsilon", "Gamma"]
    assert [r.title for r in order] == ["Alpha", "Delta", "Beta", "Epsilon", "Gamma"]


def test_sort_keys_put_missing_values_last(movies) -> None:
    every = [r.title for r in movies]
    assert [r.title for r in gallery_order(movies, every, "year").active] == [
        "Alpha",
        "Beta",
        "Gamma",
        "Delta",
        "Epsilon",
    ]
    assert [r.title for r in gallery_order(movies, every, "imdb").active] == [
        "Gamma",
        "Alpha",
        "Delta",
        "Beta",
        "Epsilon",
    ]
    meta = [r.title for r in gallery_order(movies, every, "meta").active]
    assert meta[:3] == ["Alpha", "Delta", "Beta"]
    assert set(meta[3:]) == {"Epsilon", "Gamma"}


def test_unknown_ids_are_ignored(movies) -> None:
    order = gallery_order(movies, ["Nope"])
    assert order.active == ()
    assert len(order.rest) == len(movies)


def test_gallery_stats_skip_missing_scores(movies) -> None:
    stats = gallery_stats(movies)
    assert stats.count == 5
    assert math.isclose(stats.mean_imdb, (8.2 + 7.0 + 8.8 + 7.6) / 4)
    assert math.isclose(stats.mean_meta, (80.0 + 60.0 + 72.0) / 3)
    empty = gallery_stats([])
    assert (empty.count, empty.mean_imdb, empty.mean_meta) == (0, None, None)
