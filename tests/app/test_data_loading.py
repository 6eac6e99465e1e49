from __future__ import annotations

from pathlib import Path

import pytest

from app.data import CacheConfig, load_movies, read_movie_rows, year_bounds
from marquee.core.errors import RecordError
from marquee.core.records import MovieDataset

HEADER = (
    "Poster_Link,Series_Title,Released_Year,Certificate,Runtime,Genre,IMDB_Rating,Overview,"
    "Meta_score,Director,Star1,Star2,Star3,Star4,No_of_Votes,Gross"
)


def _write_csv(tmp: Path, *lines: str) -> Path:
    p = tmp / "movies.csv"
    p.write_text("\n".join([HEADER, *lines]) + "\n", encoding="utf-8")
    return p


def test_read_movie_rows_keeps_raw_strings(tmp_path: Path) -> None:
    p = _write_csv(
        tmp_path,
        'x.jpg,Heat,1995,A,170 min,"Action, Crime, Drama",8.3,Bank robbers,76,Michael Mann,'
        'Al Pacino,Robert De Niro,Val Kilmer,Jon Voight,577113,"67,436,818"',
        "y.jpg,Nameless,1980,,95 min,Drama,7.1,,,Someone,A,B,,,1000,",
    )
    rows, columns = read_movie_rows(str(p))

    assert columns == HEADER.split(",")
    assert rows[0]["Genre"] == "Action, Crime, Drama"
    assert rows[0]["Gross"] == "67,436,818"
    assert rows[0]["Released_Year"] == "1995"
    assert rows[1]["Meta_score"] == ""


def test_read_movie_rows_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_movie_rows(str(tmp_path / "absent.csv"))


def test_load_movies_builds_dataset(tmp_path: Path) -> None:
    p = _write_csv(
        tmp_path,
        'x.jpg,Heat,1995,A,170 min,"Action, Crime",8.3,Bank robbers,76,Michael Mann,'
        "Al Pacino,Robert De Niro,Val Kilmer,Jon Voight,577113,",
        "y.jpg,Up,2009,U,96 min,Animation,8.2,Balloons,88,Pete Docter,Ed Asner,,,,900000,",
    )
    ds = load_movies(str(p), cfg=CacheConfig(ttl=None, persist=False))

    assert isinstance(ds, MovieDataset)
    assert [r.title for r in ds.records] == ["Heat", "Up"]
    assert ds.flag_columns == ("isAction", "isAnimation", "isCrime")
    assert ds.get("Up").stars == ("Ed Asner",)
    assert year_bounds(ds) == (1995, 2009)


def test_load_movies_rejects_untitled_rows(tmp_path: Path) -> None:
    p = _write_csv(tmp_path, "x.jpg,,1995,A,170 min,Drama,8.3,,76,M,A,B,C,D,1,")
    with pytest.raises(RecordError):
        load_movies(str(p))


def test_year_bounds_without_years() -> None:
    assert year_bounds(MovieDataset(records=())) == (0, 0)
