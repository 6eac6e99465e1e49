from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from marquee.core.records import MovieDataset, MovieRecord


@pytest.fixture
def make_movie() -> Callable[..., MovieRecord]:
    """Factory for typed records; stars are given positionally as a tuple."""

    def _make(title: str, stars: tuple[str, ...] = (), **fields: Any) -> MovieRecord:
        slots = {f"star{i + 1}": s for i, s in enumerate(stars)}
        return MovieRecord(title=title, **slots, **fields)

    return _make


@pytest.fixture
def movies(make_movie) -> list[MovieRecord]:
    """Five small movies covering genres, missing scores and shared stars."""
    return [
        make_movie(
            "Alpha", ("A", "B", "C"), year=2001, runtime=120.0, genres=("Drama",),
            imdb_rating=8.2, meta_score=80.0,
        ),
        make_movie(
            "Beta", ("A", "B"), year=2003, runtime=95.0, genres=("Comedy", "Drama"),
            imdb_rating=7.0, meta_score=60.0,
        ),
        make_movie(
            "Gamma", ("C", "D"), year=2003, runtime=150.0, genres=("Action", "Sci-Fi"),
            imdb_rating=8.8, meta_score=None,
        ),
        make_movie(
            "Delta", ("B", "D"), year=2010, runtime=101.0, genres=("Drama",),
            imdb_rating=7.6, meta_score=72.0,
        ),
        make_movie("Epsilon", ("E",), year=None, runtime=None, genres=(), imdb_rating=None),
    ]


@pytest.fixture
def dataset(movies) -> MovieDataset:
    return MovieDataset(records=tuple(movies), columns=("Series_Title", "isDrama"))
