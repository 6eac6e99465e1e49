"""
Typed movie records, the column catalog, and the load boundary.

Raw rows arrive from the loading collaborator as ``dict[str, str]`` (empty string for a
missing value). ``load_dataset`` validates and parses every row exactly once into a frozen
``MovieRecord`` so the aggregation engine works on typed values instead of re-parsing
strings on every recomputation.

Responsibilities
- Declare the known dataset columns (name, record field, semantic kind, description).
- Parse raw strings with marquee.core.parsing; malformed values become None.
- Derive boolean genre flags (``isDrama``, ``isScifi``...) from the Genre field.
- Raise RecordError for rows that cannot form a record (no title).

Notes
- Records are identified by title. Titles can repeat in the source data (e.g. remakes
  sharing a name); lookups by title resolve to the first occurrence and duplicates are
  logged at WARNING.
- Unknown columns are kept verbatim in ``MovieRecord.extra`` and treated as categorical.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .constants import (
    CERTIFICATE,
    DIRECTOR,
    GENRE,
    GROSS,
    IMDB_RATING,
    META_SCORE,
    NO_OF_VOTES,
    OVERVIEW,
    POSTER_LINK,
    RELEASED_YEAR,
    RUNTIME,
    STAR_COLUMNS,
    TITLE,
)
from .errors import RecordError
from .parsing import (
    flag_column_name,
    is_flag_column,
    parse_duration,
    parse_grouped_number,
    parse_number,
    parse_year,
    split_multi_value,
)

__all__ = [
    "ColumnKind",
    "ColumnDescriptor",
    "COLUMN_CATALOG",
    "MovieRecord",
    "MovieDataset",
    "column_kind",
    "describe_column",
    "record_value",
    "numeric_value",
    "load_dataset",
]

logger = logging.getLogger(__name__)


class ColumnKind(Enum):
    """Semantic type of a column, driving summaries and correlation eligibility."""

    CATEGORICAL = "categorical"
    CONTINUOUS = "continuous"
    TEMPORAL = "temporal"
    TEXT = "text"
    IMAGE = "image"
    FLAG = "flag"

    @property
    def is_numeric(self) -> bool:
        return self in (ColumnKind.CONTINUOUS, ColumnKind.TEMPORAL, ColumnKind.FLAG)


def _text(raw: str | None) -> str | None:
    s = (raw or "").strip()
    return s or None


@dataclass(frozen=True)
class ColumnDescriptor:
    """
    Frozen descriptor for a known dataset column.

    Attributes:
        name (str): CSV header name (e.g. "IMDB_Rating").
        field (str): MovieRecord attribute holding the parsed value.
        kind (ColumnKind): Semantic type.
        type_label (str): Human type label shown in column summaries.
        description (str): One-line description of the column.
        parse (Callable[[str | None], Any]): Raw string -> typed value (None when missing).
    """

    name: str
    field: str
    kind: ColumnKind
    type_label: str
    description: str
    parse: Callable[[str | None], Any] = _text


_CATALOG: tuple[ColumnDescriptor, ...] = (
    ColumnDescriptor(
        POSTER_LINK, "poster_link", ColumnKind.IMAGE, "Image link",
        "Link of the poster that IMDB is using.",
    ),
    ColumnDescriptor(
        TITLE, "title", ColumnKind.CATEGORICAL, "Categorical (nominal)", "Name of the movie."
    ),
    ColumnDescriptor(
        RELEASED_YEAR, "year", ColumnKind.TEMPORAL, "Temporal (sequential)",
        "Year at which that movie released.", parse_year,
    ),
    ColumnDescriptor(
        CERTIFICATE, "certificate", ColumnKind.CATEGORICAL, "Categorical (ordinal)",
        "Certificate earned by that movie.",
    ),
    ColumnDescriptor(
        RUNTIME, "runtime", ColumnKind.CONTINUOUS, "Continuous (quantitative)",
        "Total runtime of the movie (minutes).", parse_duration,
    ),
    ColumnDescriptor(
        GENRE, "genres", ColumnKind.CATEGORICAL, "Categorical (nominal, multi-valued)",
        "Genre of the movie.", split_multi_value,
    ),
    ColumnDescriptor(
        IMDB_RATING, "imdb_rating", ColumnKind.CONTINUOUS, "Continuous (quantitative)",
        "Rating of the movie at IMDB site.", parse_number,
    ),
    ColumnDescriptor(OVERVIEW, "overview", ColumnKind.TEXT, "Text", "Mini story / summary."),
    ColumnDescriptor(
        META_SCORE, "meta_score", ColumnKind.CONTINUOUS, "Continuous (quantitative)",
        "Score earned by the movie.", parse_number,
    ),
    ColumnDescriptor(
        DIRECTOR, "director", ColumnKind.CATEGORICAL, "Categorical (nominal)",
        "Name of the Director.",
    ),
    *(
        ColumnDescriptor(
            star, star.lower(), ColumnKind.CATEGORICAL, "Categorical (nominal)",
            "Name of a star.",
        )
        for star in STAR_COLUMNS
    ),
    ColumnDescriptor(
        NO_OF_VOTES, "votes", ColumnKind.CONTINUOUS, "Continuous (quantitative)",
        "Total number of votes.", parse_grouped_number,
    ),
    ColumnDescriptor(
        GROSS, "gross", ColumnKind.CONTINUOUS, "Continuous (quantitative)",
        "Money earned by that movie.", parse_grouped_number,
    ),
)

COLUMN_CATALOG: dict[str, ColumnDescriptor] = {d.name: d for d in _CATALOG}


class MovieRecord(BaseModel):
    """
    One movie, validated and parsed once at the load boundary.

    Attributes:
        title (str): Movie title; the record identifier. Must be non-empty.
        year (int | None): Release year.
        runtime (float | None): Runtime in minutes.
        genres (tuple[str, ...]): Genre tokens in source order.
        imdb_rating (float | None): IMDB rating on the 1-10 scale.
        meta_score (float | None): Metascore on the 0-100 scale.
        votes (float | None): Number of IMDB votes.
        gross (float | None): Box office gross.
        star1..star4 (str | None): Billed stars.
        flags (frozenset[str]): Genre flag columns that are true for this movie. Derived
            from ``genres`` and merged with any flags passed explicitly.
        extra (dict[str, str]): Unknown columns, kept verbatim.

    Examples:
        >>> r = MovieRecord(title="Heat", year=1995, genres=("Crime", "Drama"))
        >>> sorted(r.flags)
        ['isCrime', 'isDrama']
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    title: str = Field(..., min_length=1)
    poster_link: str | None = None
    year: int | None = None
    certificate: str | None = None
    runtime: float | None = None
    genres: tuple[str, ...] = ()
    imdb_rating: float | None = None
    overview: str | None = None
    meta_score: float | None = None
    director: str | None = None
    star1: str | None = None
    star2: str | None = None
    star3: str | None = None
    star4: str | None = None
    votes: float | None = None
    gross: float | None = None
    flags: frozenset[str] = frozenset()
    extra: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _derive_flags(cls, data: Any) -> Any:
        if isinstance(data, dict):
            genres = data.get("genres") or ()
            explicit = data.get("flags") or ()
            data = {
                **data,
                "flags": frozenset(explicit) | {flag_column_name(g) for g in genres},
            }
        return data

    @property
    def stars(self) -> tuple[str, ...]:
        """Billed stars in order, skipping missing slots."""
        return tuple(s for s in (self.star1, self.star2, self.star3, self.star4) if s)

    @classmethod
    def from_raw(cls, raw: Mapping[str, str]) -> MovieRecord:
        """Parse a raw ``column -> string`` row.

        Raises:
            pydantic.ValidationError: If the row has no title.
        """
        values: dict[str, Any] = {}
        flags: set[str] = set()
        extra: dict[str, str] = {}
        for name, text in raw.items():
            desc = COLUMN_CATALOG.get(name)
            if desc is not None:
                parsed = desc.parse(text)
                values[desc.field] = tuple(parsed) if isinstance(parsed, list) else parsed
            elif is_flag_column(name):
                if (text or "").strip().lower() == "true":
                    flags.add(name)
            elif text is not None:
                extra[name] = text
        values["title"] = values.get("title") or ""
        return cls(**values, flags=frozenset(flags), extra=extra)


def column_kind(name: str) -> ColumnKind:
    """Semantic kind of a column; unknown non-flag columns are categorical."""
    desc = COLUMN_CATALOG.get(name)
    if desc is not None:
        return desc.kind
    if is_flag_column(name):
        return ColumnKind.FLAG
    return ColumnKind.CATEGORICAL


def describe_column(name: str) -> tuple[str, str]:
    """Return ``(type_label, description)`` for a column."""
    desc = COLUMN_CATALOG.get(name)
    if desc is not None:
        return desc.type_label, desc.description
    if is_flag_column(name):
        return "Boolean (genre flag)", "Whether the movie has this genre."
    return "Categorical (nominal)", ""


def record_value(record: MovieRecord, column: str) -> Any:
    """Typed value of ``column`` for ``record`` (None when missing).

    Flag columns yield bool; the Genre column yields the tuple of genre tokens.
    """
    desc = COLUMN_CATALOG.get(column)
    if desc is not None:
        return getattr(record, desc.field)
    if is_flag_column(column):
        return column in record.flags
    return record.extra.get(column) or None


def numeric_value(record: MovieRecord, column: str) -> float | None:
    """Numeric view of a column: numbers as float, flags as 0.0/1.0, anything else None."""
    value = record_value(record, column)
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return float(value)
    return None


@dataclass(frozen=True)
class MovieDataset:
    """
    The immutable record universe handed to the aggregation engine.

    Attributes:
        records (tuple[MovieRecord, ...]): Records in source order.
        columns (tuple[str, ...]): Raw column names followed by derived genre flag columns.
    """

    records: tuple[MovieRecord, ...]
    columns: tuple[str, ...] = field(default=())

    @property
    def flag_columns(self) -> tuple[str, ...]:
        return tuple(c for c in self.columns if column_kind(c) is ColumnKind.FLAG)

    @cached_property
    def by_title(self) -> dict[str, MovieRecord]:
        out: dict[str, MovieRecord] = {}
        for rec in self.records:
            out.setdefault(rec.title, rec)
        return out

    def get(self, title: str) -> MovieRecord | None:
        return self.by_title.get(title)

    def __len__(self) -> int:
        return len(self.records)


def load_dataset(
    rows: Iterable[Mapping[str, str]], columns: Sequence[str] | None = None
) -> MovieDataset:
    """Validate raw rows into a MovieDataset and append derived genre flag columns.

    Args:
        rows: Raw rows, column -> string (empty string for missing).
        columns: Ordered column names. Defaults to the keys of the first row.

    Returns:
        MovieDataset: Typed records plus ``columns + sorted(flag columns)``.

    Raises:
        RecordError: If a row cannot be validated (e.g. an empty title). The original
            pydantic ValidationError is chained as ``__cause__``.
    """
    records: list[MovieRecord] = []
    seen: set[str] = set()
    first_keys: list[str] = []
    for i, raw in enumerate(rows):
        if i == 0:
            first_keys = list(raw.keys())
        try:
            rec = MovieRecord.from_raw(raw)
        except ValidationError as e:
            raise RecordError(
                f"row {i}: invalid movie record ({e.error_count()} errors)", row_index=i
            ) from e
        if rec.title in seen:
            logger.warning(
                "Duplicate title %r at row %d; lookups resolve to the first", rec.title, i
            )
        seen.add(rec.title)
        records.append(rec)

    cols = list(columns) if columns is not None else first_keys
    genre_flags = sorted({flag for rec in records for flag in rec.flags})
    cols += [c for c in genre_flags if c not in cols]
    logger.debug(
        "Loaded %d records, %d columns (%d flags)", len(records), len(cols), len(genre_flags)
    )
    return MovieDataset(records=tuple(records), columns=tuple(cols))
