"""
Aggregation engine: pure functions from typed records to chart-ready structures.

Responsibilities
- Column summaries and the folded genre flag summary.
- Pairwise-complete correlation matrix over numeric and flag columns.
- Grouped yearly series, runtime scatter points, critics vs audience points and trends.
- Audience/critic disagreement by category and by year.
- Star co-occurrence graph with threshold, weight range and participant restriction.

Conventions
- Inputs are sequences of ``MovieRecord``; outputs are frozen dataclasses or lists of them.
- An empty active record set yields an empty structure, never an error.
- Each function documents the rows it drops for missing values.
"""

from __future__ import annotations

from .cooccurrence import (
    CoEdge,
    CoNode,
    CoOccurrence,
    clamp_min_weight,
    co_occurrence,
    connection_weight_range,
    edge_key,
    restrict_to_participants,
    stars,
    year_range,
)
from .correlation import CorrelationMatrix, correlation_matrix
from .disagreement import (
    CategoryGap,
    YearGap,
    disagreement_by_category,
    disagreement_by_year,
    imdb_to_100,
    sort_by_magnitude,
)
from .frame import PRIMARY_GENRE, primary_genre, records_frame
from .series import (
    CriticPoint,
    GenrePoint,
    GenreTrend,
    LineSeries,
    ScatterPoint,
    SeriesPoint,
    critics_vs_audience_points,
    genre_trends,
    grouped_series,
    overall_correlation,
    scatter_points,
    scatter_points_by_genre,
)
from .summaries import ColumnSummary, column_summaries

__all__ = [
    "CoEdge",
    "CoNode",
    "CoOccurrence",
    "clamp_min_weight",
    "co_occurrence",
    "connection_weight_range",
    "edge_key",
    "restrict_to_participants",
    "stars",
    "year_range",
    "CorrelationMatrix",
    "correlation_matrix",
    "CategoryGap",
    "YearGap",
    "disagreement_by_category",
    "disagreement_by_year",
    "imdb_to_100",
    "sort_by_magnitude",
    "PRIMARY_GENRE",
    "primary_genre",
    "records_frame",
    "CriticPoint",
    "GenrePoint",
    "GenreTrend",
    "LineSeries",
    "ScatterPoint",
    "SeriesPoint",
    "critics_vs_audience_points",
    "genre_trends",
    "grouped_series",
    "overall_correlation",
    "scatter_points",
    "scatter_points_by_genre",
    "ColumnSummary",
    "column_summaries",
]
