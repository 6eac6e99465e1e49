from __future__ import annotations

import math

from marquee.analysis.correlation import correlation_matrix


def test_matrix_is_symmetric_with_unit_diagonal(movies) -> None:
    cols = ["IMDB_Rating", "Meta_score", "Runtime", "isDrama"]
    m = correlation_matrix(movies, cols)
    assert m.columns == tuple(cols)
    for a in cols:
        assert m.value(a, a) == 1.0
        for b in cols:
            assert m.value(a, b) == m.value(b, a)
            assert -1.0 <= m.value(a, b) <= 1.0


def test_non_numeric_columns_are_skipped(movies) -> None:
    m = correlation_matrix(movies, ["Series_Title", "Runtime", "Director", "Runtime"])
    assert m.columns == ("Runtime",)
    assert correlation_matrix(movies, ["Director"]).columns == ()


def test_affine_pair_correlates_perfectly(make_movie) -> None:
    recs = [
        make_movie(f"m{i}", imdb_rating=float(i), meta_score=10.0 * i + 5) for i in range(1, 6)
    ]
    m = correlation_matrix(recs, ["IMDB_Rating", "Meta_score"])
    assert math.isclose(m.value("IMDB_Rating", "Meta_score"), 1.0)


def test_pairwise_complete_and_zero_variance(make_movie) -> None:
    recs = [
        make_movie("a", imdb_rating=1.0, meta_score=10.0, runtime=90.0),
        make_movie("b", imdb_rating=2.0, meta_score=20.0, runtime=90.0),
        make_movie("c", imdb_rating=3.0, meta_score=None, runtime=90.0),
    ]
    m = correlation_matrix(recs, ["IMDB_Rating", "Meta_score", "Runtime"])
    # Only a and b have both scores; runtime never varies.
    assert math.isclose(m.value("IMDB_Rating", "Meta_score"), 1.0)
    assert m.value("IMDB_Rating", "Runtime") == 0.0
    cells = m.cells()
    assert len(cells) == 9
    assert cells[1] == ("IMDB_Rating", "Meta_score", m.value("IMDB_Rating", "Meta_score"))
