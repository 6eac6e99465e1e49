"""
Dataset-facing constants shared by parsing, aggregation and rendering.

Defines the canonical IMDB top 1000 column names, the derived genre-flag naming
convention, and the default color palettes. This module is zero-IO and uses only the
Python standard library.

Notes:
    - Column names match the CSV header verbatim (mixed case with underscores).
    - Genre flag columns are named ``FLAG_PREFIX + CamelCaseGenre`` (e.g. ``isScifi``).
    - Changes to palettes should go through ViewSettings rather than mutating these tuples.
"""

from __future__ import annotations

__all__ = [
    "TITLE",
    "POSTER_LINK",
    "RELEASED_YEAR",
    "CERTIFICATE",
    "RUNTIME",
    "GENRE",
    "IMDB_RATING",
    "OVERVIEW",
    "META_SCORE",
    "DIRECTOR",
    "STAR_COLUMNS",
    "NO_OF_VOTES",
    "GROSS",
    "FLAG_PREFIX",
    "FLAG_SET_SUMMARY_NAME",
    "ALL_SERIES_KEY",
    "OTHER_CATEGORY",
    "TABLEAU10",
    "ALL_SERIES_COLOR",
    "ZERO_VARIANCE_EPS",
]

TITLE = "Series_Title"
POSTER_LINK = "Poster_Link"
RELEASED_YEAR = "Released_Year"
CERTIFICATE = "Certificate"
RUNTIME = "Runtime"
GENRE = "Genre"
IMDB_RATING = "IMDB_Rating"
OVERVIEW = "Overview"
META_SCORE = "Meta_score"
DIRECTOR = "Director"
STAR_COLUMNS: tuple[str, ...] = ("Star1", "Star2", "Star3", "Star4")
NO_OF_VOTES = "No_of_Votes"
GROSS = "Gross"

# Derived boolean genre columns: "Sci-Fi" -> "isScifi".
FLAG_PREFIX = "is"
FLAG_SET_SUMMARY_NAME = "Genre (boolean flags)"

# Key of the implicit "every record" group in grouped series.
ALL_SERIES_KEY = "All"
# Category used when a record has no genre at all.
OTHER_CATEGORY = "Other"

# d3.schemeCategory10 / Tableau 10.
TABLEAU10: tuple[str, ...] = (
    "#1f77b4",
    "#ff7f0e",
    "#2ca02c",
    "#d62728",
    "#9467bd",
    "#8c564b",
    "#e377c2",
    "#7f7f7f",
    "#bcbd22",
    "#17becf",
)
ALL_SERIES_COLOR = "#333333"

# Variances (or standard deviations) below this are treated as zero.
ZERO_VARIANCE_EPS = 1e-10
