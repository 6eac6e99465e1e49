from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from marquee.core.errors import RecordError
from marquee.core.records import (
    ColumnKind,
    MovieRecord,
    column_kind,
    describe_column,
    load_dataset,
    numeric_value,
    record_value,
)


def _raw(title: str = "Heat", **overrides: str) -> dict[str, str]:
    row = {
        "Poster_Link": "https://example.org/heat.jpg",
        "Series_Title": title,
        "Released_Year": "1995",
        "Certificate": "A",
        "Runtime": "170 min",
        "Genre": "Action, Crime, Drama",
        "IMDB_Rating": "8.3",
        "Overview": "A group of professional bank robbers ...",
        "Meta_score": "76",
        "Director": "Michael Mann",
        "Star1": "Al Pacino",
        "Star2": "Robert De Niro",
        "Star3": "Val Kilmer",
        "Star4": "Jon Voight",
        "No_of_Votes": "577113",
        "Gross": "67,436,818",
    }
    row.update(overrides)
    return row


def test_from_raw_parses_every_catalog_column() -> None:
    rec = MovieRecord.from_raw(_raw())
    assert rec.title == "Heat"
    assert rec.year == 1995
    assert rec.runtime == 170.0
    assert rec.genres == ("Action", "Crime", "Drama")
    assert rec.imdb_rating == 8.3
    assert rec.meta_score == 76.0
    assert rec.gross == 67436818.0
    assert rec.stars == ("Al Pacino", "Robert De Niro", "Val Kilmer", "Jon Voight")
    assert rec.flags == frozenset({"isAction", "isCrime", "isDrama"})


def test_from_raw_missing_values_become_none() -> None:
    rec = MovieRecord.from_raw(_raw(Meta_score="", Gross="", Released_Year="PG", Star4=""))
    assert rec.meta_score is None
    assert rec.gross is None
    assert rec.year is None
    assert rec.stars == ("Al Pacino", "Robert De Niro", "Val Kilmer")


def test_from_raw_keeps_explicit_flags_and_unknown_columns() -> None:
    rec = MovieRecord.from_raw(_raw(isClassic="true", isRemake="false", Studio="Warner"))
    assert "isClassic" in rec.flags
    assert "isRemake" not in rec.flags
    assert rec.extra == {"Studio": "Warner"}
    assert record_value(rec, "Studio") == "Warner"


def test_empty_title_is_rejected() -> None:
    with pytest.raises(ValidationError):
        MovieRecord.from_raw(_raw(title=""))


def test_records_are_frozen() -> None:
    rec = MovieRecord(title="Heat")
    with pytest.raises(ValidationError):
        rec.title = "Ronin"  # type: ignore[misc]


def test_column_kinds_and_descriptions() -> None:
    assert column_kind("Released_Year") is ColumnKind.TEMPORAL
    assert column_kind("Runtime") is ColumnKind.CONTINUOUS
    assert column_kind("isDrama") is ColumnKind.FLAG
    assert column_kind("Studio") is ColumnKind.CATEGORICAL
    assert ColumnKind.FLAG.is_numeric and not ColumnKind.TEXT.is_numeric
    assert describe_column("Runtime")[0] == "Continuous (quantitative)"
    assert describe_column("isDrama")[0] == "Boolean (genre flag)"


def test_numeric_value_views() -> None:
    rec = MovieRecord.from_raw(_raw())
    assert numeric_value(rec, "Released_Year") == 1995.0
    assert numeric_value(rec, "isCrime") == 1.0
    assert numeric_value(rec, "isComedy") == 0.0
    assert numeric_value(rec, "Director") is None


def test_load_dataset_appends_sorted_flag_columns() -> None:
    rows = [_raw(), _raw(title="Up", Genre="Animation, Adventure")]
    ds = load_dataset(rows)
    assert ds.columns[: len(rows[0])] == tuple(rows[0])
    assert ds.flag_columns == ("isAction", "isAdventure", "isAnimation", "isCrime", "isDrama")
    assert len(ds) == 2
    assert ds.get("Up") is ds.records[1]
    assert ds.get("Missing") is None


def test_load_dataset_reports_row_index() -> None:
    rows = [_raw(), _raw(title="")]
    with pytest.raises(RecordError) as info:
        load_dataset(rows)
    assert info.value.row_index == 1
    assert isinstance(info.value.__cause__, ValidationError)


def test_duplicate_titles_resolve_to_first(caplog) -> None:
    rows = [_raw(), _raw(Released_Year="2020")]
    with caplog.at_level(logging.WARNING, logger="marquee.core.records"):
        ds = load_dataset(rows)
    assert len(ds) == 2
    assert ds.get("Heat").year == 1995
    assert "Duplicate title" in caplog.text
