from __future__ import annotations

import math

from marquee.analysis.disagreement import (
    CategoryGap,
    disagreement_by_category,
    disagreement_by_year,
    imdb_to_100,
    sort_by_magnitude,
)


def test_imdb_rescale_endpoints() -> None:
    assert imdb_to_100(1.0) == 0.0
    assert imdb_to_100(10.0) == 100.0
    assert math.isclose(imdb_to_100(5.5), 50.0)


def test_matching_scores_give_zero_gap(make_movie) -> None:
    recs = [
        make_movie("a", genres=("Drama",), imdb_rating=8.2, meta_score=80.0),
        make_movie("b", genres=("Drama", "Crime"), imdb_rating=5.5, meta_score=50.0),
    ]
    out = disagreement_by_category(recs)
    assert len(out) == 1
    assert out[0].category == "Drama"
    assert out[0].count == 2
    assert math.isclose(out[0].mean_gap, 0.0, abs_tol=1e-9)


def test_gaps_sorted_ascending_and_incomplete_rows_dropped(movies) -> None:
    out = disagreement_by_category(movies)
    assert [g.category for g in out] == ["Drama", "Comedy"]
    drama, comedy = out
    assert drama.count == 2
    assert math.isclose(drama.mean_gap, (0.0 + (imdb_to_100(7.6) - 72.0)) / 2)
    assert comedy.count == 1
    assert math.isclose(comedy.mean_gap, imdb_to_100(7.0) - 60.0)


def test_records_without_genre_fall_into_other(make_movie) -> None:
    out = disagreement_by_category([make_movie("x", imdb_rating=7.0, meta_score=50.0)])
    assert [g.category for g in out] == ["Other"]


def test_sort_by_magnitude_is_stable() -> None:
    gaps = [CategoryGap("a", -1.0, 3), CategoryGap("b", 5.0, 1), CategoryGap("c", 1.0, 2)]
    assert [g.category for g in sort_by_magnitude(gaps)] == ["b", "a", "c"]


def test_disagreement_by_year(movies) -> None:
    out = disagreement_by_year(movies)
    assert [y.year for y in out] == [2001, 2003, 2010]
    first = out[0]
    assert math.isclose(first.mean_gap, 0.0, abs_tol=1e-9)
    assert math.isclose(first.mean_a, 80.0)
    assert math.isclose(first.mean_avg, 80.0)
    assert out[1].count == 1
    assert disagreement_by_year([]) == []
