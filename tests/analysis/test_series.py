from __future__ import annotations

import math

from marquee.analysis.series import (
    critics_vs_audience_points,
    genre_trends,
    grouped_series,
    overall_correlation,
    scatter_points,
    scatter_points_by_genre,
)


def test_grouped_series_all_first_then_groups(movies) -> None:
    out = grouped_series(movies, ["isDrama", "isAction"], "IMDB_Rating")
    assert [s.key for s in out] == ["All", "isDrama", "isAction"]

    every = out[0]
    assert [p.x for p in every.points] == [2001.0, 2003.0, 2010.0]
    assert math.isclose(every.points[1].y, 7.9)
    assert every.points[1].count == 2

    drama = out[1]
    assert [(p.x, p.y) for p in drama.points] == [(2001.0, 8.2), (2003.0, 7.0), (2010.0, 7.6)]
    assert [(p.x, p.y) for p in out[2].points] == [(2003.0, 8.8)]


def test_grouped_series_omits_empty_groups(movies) -> None:
    out = grouped_series(movies, ["isWestern", "isDrama"], "IMDB_Rating")
    assert [s.key for s in out] == ["All", "isDrama"]
    assert grouped_series([], ["isDrama"], "IMDB_Rating") == []


def test_group_points_never_outnumber_all(movies) -> None:
    out = grouped_series(movies, ["isDrama", "isComedy", "isAction"], "Runtime")
    every = out[0]
    for s in out[1:]:
        assert len(s.points) <= len(every.points)
        assert {p.x for p in s.points} <= {p.x for p in every.points}


def test_scatter_points_drop_incomplete_rows(movies) -> None:
    pts = scatter_points(movies, "IMDB_Rating")
    assert [p.title for p in pts] == ["Alpha", "Beta", "Gamma", "Delta"]
    beta = pts[1]
    assert (beta.runtime, beta.value, beta.genre, beta.year) == (95.0, 7.0, "Comedy", 2003)


def test_scatter_points_by_genre_average_per_primary_genre(movies) -> None:
    pts = scatter_points_by_genre(movies, "IMDB_Rating")
    assert [p.genre for p in pts] == ["Action", "Comedy", "Drama"]
    drama = pts[2]
    assert drama.count == 2
    assert math.isclose(drama.runtime, 110.5)
    assert math.isclose(drama.value, 7.9)


def test_critics_points_and_trends(movies) -> None:
    pts = critics_vs_audience_points(movies)
    assert [p.title for p in pts] == ["Alpha", "Beta", "Delta"]

    trends = genre_trends(pts)
    # Comedy has a single point and gets no line.
    assert [t.genre for t in trends] == ["Drama"]
    drama = trends[0]
    assert (drama.x_min, drama.x_max, drama.count) == (72.0, 80.0, 2)
    assert math.isclose(drama.regression.slope, 0.075)
    assert math.isclose(drama.regression.predict(80.0), 8.2)

    assert -1.0 <= overall_correlation(pts) <= 1.0
    assert overall_correlation([]) == 0.0
