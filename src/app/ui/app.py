"""
Streamlit application orchestrator for marquee.

This module composes the global header and all page tabs while delegating supporting
concerns to focused modules under app.ui.* (header, linked, helpers).

Responsibilities:
    - Configure the Streamlit page and load ViewSettings (env > TOML > defaults).
    - Render the global header (dataset path, cache prefs).
    - Load and validate the dataset via app.data with configurable caching.
    - Apply the sidebar year filter shared by the exploratory tabs.
    - Mount tab content (Overview, Correlation, Years, Runtime, Critics vs audiences,
      Disagreement, Co-stars).

Notes:
    - Charts are produced by marquee.viz.charts; aggregation by marquee.analysis.
    - Load and configuration errors are reported in the page, not raised.
"""

from __future__ import annotations

from typing import Any, cast

import streamlit as st

from app.data import load_movies, year_bounds
from marquee.analysis import (
    column_summaries,
    correlation_matrix,
    critics_vs_audience_points,
    disagreement_by_category,
    disagreement_by_year,
    genre_trends,
    grouped_series,
    overall_correlation,
    scatter_points,
    scatter_points_by_genre,
    sort_by_magnitude,
    year_range,
)
from marquee.config import ViewSettings
from marquee.core.constants import IMDB_RATING, RUNTIME
from marquee.core.errors import ConfigError, RecordError
from marquee.core.parsing import flag_display_name
from marquee.core.records import MovieDataset, MovieRecord, numeric_value
from marquee.viz import (
    DECEPTIVE_STYLE,
    HONEST_STYLE,
    correlation_heatmap,
    critics_vs_audience_chart,
    disagreement_band_chart,
    diverging_bar_chart,
    line_chart,
    scatter_chart,
)
from marquee.viz.scales import extent, nice_domain

from .header import render_header
from .helpers import (
    METRIC_LABELS,
    compute_overview_kpis,
    correlatable_columns,
    flag_count_rows,
    format_score,
    metric_label,
    summary_rows,
)
from .linked import render_linked_view

# Genres preselected in the yearly line chart when present.
_DEFAULT_GENRES = ("isDrama", "isComedy", "isAction")


def _show(chart: Any) -> None:
    st.altair_chart(cast(Any, chart), theme=None, use_container_width=False)


def streamlit_app(default_data: str | None = None) -> None:
    """Render the marquee Streamlit application.

    Args:
        default_data (str | None): Optional dataset path; defaults to
            ViewSettings.data_path.

    Returns:
        None
    """
    st.set_page_config(page_title="Marquee", layout="wide")

    try:
        settings = ViewSettings.load().validate()
    except ConfigError as e:
        st.error(f"Invalid view settings: {e}")
        return

    data_path, cache_cfg = render_header(default_data=default_data or settings.data_path)
    if not data_path:
        st.error("Enter the path of the movie CSV in the header.")
        return

    try:
        with st.spinner("Loading movies ..."):
            dataset = load_movies(data_path, cfg=cache_cfg)
    except FileNotFoundError as e:
        st.error(str(e))
        return
    except RecordError as e:
        st.error(f"Invalid movie data: {e}")
        return

    lo, hi = year_bounds(dataset)
    with st.sidebar.expander("Filters", expanded=True):
        records = list(dataset.records)
        if lo < hi:
            years = st.slider(
                "Release years", min_value=lo, max_value=hi, value=(lo, hi), key="global_years"
            )
            if years != (lo, hi):
                keep = year_range(*years)
                records = [r for r in records if keep(r)]
    st.sidebar.caption(f"{len(records)} of {len(dataset)} movies")

    (
        tab_overview,
        tab_corr,
        tab_years,
        tab_runtime,
        tab_critics,
        tab_gap,
        tab_linked,
    ) = st.tabs(
        [
            "Overview",
            "Correlation",
            "Years",
            "Runtime",
            "Critics vs audiences",
            "Disagreement",
            "Co-stars",
        ]
    )

    with tab_overview:
        _render_overview(dataset)
    with tab_corr:
        _render_correlation(dataset, records, settings)
    with tab_years:
        _render_years(dataset, records, settings)
    with tab_runtime:
        _render_runtime(records, settings)
    with tab_critics:
        _render_critics(records, settings)
    with tab_gap:
        _render_disagreement(records, settings)
    with tab_linked:
        render_linked_view(dataset, settings)


# ----------------------------
# Overview
# ----------------------------


def _render_overview(dataset: MovieDataset) -> None:
    kpi = compute_overview_kpis(dataset)
    c1, c2, c3, c4 = st.columns(4)
    with c1:
        st.metric("Movies", f"{int(kpi['movies'])}")
    with c2:
        st.metric("Mean IMDB rating", format_score(kpi["mean_imdb"], 2))
    with c3:
        st.metric("Mean Metascore", format_score(kpi["mean_meta"], 1))
    with c4:
        st.metric("Genres", f"{int(kpi['genres'])}")

    summaries = column_summaries(dataset.records, dataset.columns)
    st.subheader("Columns")
    st.dataframe(summary_rows(summaries), hide_index=True, use_container_width=True)

    flag_summary = next((s for s in summaries if s.flag_counts), None)
    if flag_summary is not None:
        with st.expander("Genre flags", expanded=False):
            st.dataframe(flag_count_rows(flag_summary), hide_index=True)


# ----------------------------
# Correlation
# ----------------------------


def _render_correlation(
    dataset: MovieDataset, records: list[MovieRecord], settings: ViewSettings
) -> None:
    include_flags = st.checkbox("Include genre flags", value=False, key="corr_flags")
    options = correlatable_columns(dataset, include_flags=include_flags)
    chosen = st.multiselect(
        "Columns",
        options=options,
        default=correlatable_columns(dataset),
        format_func=metric_label,
        key=f"corr_columns_{int(include_flags)}",
    )
    _show(correlation_heatmap(correlation_matrix(records, chosen), settings))


# ----------------------------
# Years
# ----------------------------


def _render_years(
    dataset: MovieDataset, records: list[MovieRecord], settings: ViewSettings
) -> None:
    c1, c2, c3 = st.columns([0.3, 0.5, 0.2])
    with c1:
        metric = st.selectbox(
            "Metric", options=list(METRIC_LABELS), format_func=metric_label, key="years_metric"
        )
    with c2:
        flags = list(dataset.flag_columns)
        genres = st.multiselect(
            "Genres",
            options=flags,
            default=[g for g in _DEFAULT_GENRES if g in flags],
            format_func=flag_display_name,
            key="years_genres",
        )
    with c3:
        fixed = st.checkbox(
            "Fixed y axis",
            value=False,
            help="Keep the y axis at the full dataset range while filtering.",
            key="years_fixed",
        )

    y_domain = None
    if fixed:
        ext = extent(numeric_value(r, metric) for r in dataset.records)
        y_domain = nice_domain(*ext) if ext is not None else None

    series = grouped_series(records, genres, metric)
    _show(line_chart(series, settings, metric_label=metric_label(metric), y_domain=y_domain))


# ----------------------------
# Runtime
# ----------------------------


def _render_runtime(records: list[MovieRecord], settings: ViewSettings) -> None:
    c1, c2 = st.columns([0.4, 0.6])
    with c1:
        metric = st.selectbox(
            "Metric",
            options=[m for m in METRIC_LABELS if m != RUNTIME],
            format_func=metric_label,
            key="runtime_metric",
        )
    with c2:
        by_genre = st.toggle("Average by primary genre", value=False, key="runtime_by_genre")

    label = metric_label(metric)
    if by_genre:
        ch = scatter_chart(scatter_points_by_genre(records, metric), settings, metric_label=label)
    else:
        ch = scatter_chart(scatter_points(records, metric), settings, metric_label=label)
    _show(ch)


# ----------------------------
# Critics vs audiences
# ----------------------------


def _render_critics(records: list[MovieRecord], settings: ViewSettings) -> None:
    points = critics_vs_audience_points(records)
    r = overall_correlation(points) if points else None
    _show(critics_vs_audience_chart(points, genre_trends(points), settings, r=r))
    st.caption("Click a genre in the legend to isolate it; shift-click to add more.")


# ----------------------------
# Disagreement
# ----------------------------


def _render_disagreement(records: list[MovieRecord], settings: ViewSettings) -> None:
    gaps = disagreement_by_category(records)
    st.caption(
        "Gap = IMDB rating rescaled to 0-100 minus Metascore, averaged per primary genre. "
        f"Positive means audiences ({metric_label(IMDB_RATING)}) liked the genre more."
    )
    c1, c2 = st.columns(2)
    with c1:
        st.markdown("**By genre, with sample sizes**")
        _show(diverging_bar_chart(gaps, settings, style=HONEST_STYLE))
    with c2:
        st.markdown("**By genre, ranked by gap**")
        _show(diverging_bar_chart(sort_by_magnitude(gaps), settings, style=DECEPTIVE_STYLE))

    st.markdown("**By release year**")
    _show(disagreement_band_chart(disagreement_by_year(records), settings))
