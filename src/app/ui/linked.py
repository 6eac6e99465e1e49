"""
Co-star chord diagram linked to the poster gallery.

The SelectionController lives in ``st.session_state`` and is the only state shared by the
two views. Everything drawn here is derived from it on each rerun:

    co_occurrence -> scoped_co_occurrence -> chord_layout -> visual_props -> chord_chart
    active_record_ids -> gallery_order / gallery_stats

Ribbon clicks arrive through Streamlit's chart selection events (``on_select="rerun"``
restricted to the ribbon click parameter, so hovering never reruns the script). After a
click is applied the chart key is bumped so the next render starts with no selection and
the same ribbon can be clicked again to toggle it off.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, cast

import streamlit as st

from app.data import year_bounds
from marquee.analysis import (
    clamp_min_weight,
    co_occurrence,
    connection_weight_range,
    year_range,
)
from marquee.config import ViewSettings
from marquee.core.records import MovieDataset, MovieRecord
from marquee.selection import (
    SelectionController,
    active_record_ids,
    describe,
    scoped_co_occurrence,
    visual_props,
)
from marquee.viz import RIBBON_PARAM, chord_chart, chord_layout, gallery_order, gallery_stats
from marquee.viz.gallery import SORT_KEYS

from .helpers import format_score

__all__ = ["ribbon_from_event", "render_linked_view"]

logger = logging.getLogger(__name__)

_SORT_LABELS = {"title": "Title", "year": "Year", "imdb": "IMDB rating", "meta": "Metascore"}
_GALLERY_COLUMNS = 4
# Posters shown for movies outside the current selection.
_REST_LIMIT = 24


def ribbon_from_event(event: Mapping[str, Any] | None) -> tuple[str, str] | None:
    """Extract the clicked ``(source, target)`` pair from a Streamlit chart event.

    Returns None when the event carries no complete ribbon selection.

    Examples:
        >>> ribbon_from_event({"selection": {"ribbon": [{"source": "A", "target": "B"}]}})
        ('A', 'B')
        >>> ribbon_from_event({"selection": {"ribbon": []}}) is None
        True
    """
    if not event:
        return None
    picked = (event.get("selection") or {}).get(RIBBON_PARAM) or []
    if not picked:
        return None
    first = picked[0]
    source, target = first.get("source"), first.get("target")
    if not source or not target:
        return None
    return (str(source), str(target))


def _controller() -> SelectionController:
    if "selection" not in st.session_state:
        st.session_state["selection"] = SelectionController()
    return cast(SelectionController, st.session_state["selection"])


def _default_years(settings: ViewSettings, lo: int, hi: int) -> tuple[int, int]:
    a = min(max(settings.year_min, lo), hi)
    b = max(min(settings.year_max, hi), lo)
    return (a, b) if a <= b else (lo, hi)


def render_linked_view(dataset: MovieDataset, settings: ViewSettings) -> None:
    """Render the filters, chord diagram and poster gallery for ``dataset``."""
    ctrl = _controller()
    if "chord_nonce" not in st.session_state:
        st.session_state["chord_nonce"] = 0

    lo, hi = year_bounds(dataset)
    c1, c2 = st.columns(2)
    with c1:
        if lo < hi:
            years = st.slider(
                "Release years",
                min_value=lo,
                max_value=hi,
                value=_default_years(settings, lo, hi),
                key="linked_years",
            )
        else:
            years = (lo, hi)
    predicate = year_range(*years)

    weights = connection_weight_range(dataset.records, predicate)
    with c2:
        if weights[0] < weights[1]:
            min_weight = st.slider(
                "Minimum movies together",
                min_value=weights[0],
                max_value=weights[1],
                value=clamp_min_weight(settings.min_edge_weight, weights),
                key="linked_min_weight",
            )
        else:
            min_weight = weights[0]
            st.caption(f"Every pair shares {min_weight} movie(s).")

    co = co_occurrence(dataset.records, predicate, min_weight)
    state = ctrl.state

    left, right = st.columns([0.55, 0.45])
    with left:
        scoped = scoped_co_occurrence(state, co, dataset)
        layout = chord_layout(
            scoped.nodes,
            scoped.edges,
            padding=settings.chord_padding,
            radius=settings.chord_radius,
            inner_radius_ratio=settings.chord_inner_ratio,
            palette=settings.palette,
        )
        ribbon_props, arc_props = visual_props(
            state, layout, ribbon_opacity=settings.ribbon_opacity
        ).chart_props()
        chart = chord_chart(layout, settings, ribbon_props=ribbon_props, arc_props=arc_props)

        if layout.is_empty():
            st.altair_chart(cast(Any, chart), theme=None)
        else:
            event = st.altair_chart(
                cast(Any, chart),
                theme=None,
                on_select="rerun",
                selection_mode=[RIBBON_PARAM],
                key=f"chord_{st.session_state['chord_nonce']}",
            )
            pair = ribbon_from_event(event)
            if pair is not None:
                ctrl.select_edge(*pair)
                st.session_state["chord_nonce"] += 1
                st.rerun()
        st.caption(
            "Click a ribbon to show the movies two stars made together; click again to clear."
        )

    with right:
        _render_gallery(dataset, ctrl, active_record_ids(state, co))


def _render_gallery(
    dataset: MovieDataset, ctrl: SelectionController, active_ids: tuple[str, ...]
) -> None:
    state = ctrl.state
    h1, h2 = st.columns([0.7, 0.3])
    with h1:
        st.markdown(f"**{describe(state)}**")
    with h2:
        if st.button("Clear selection", key="gallery_clear"):
            ctrl.clear()
            st.rerun()

    sort_by = st.selectbox(
        "Sort posters by",
        options=list(SORT_KEYS),
        format_func=lambda k: _SORT_LABELS[k],
        key="gallery_sort",
    )
    order = gallery_order(dataset.records, active_ids, sort_by)
    stats = gallery_stats(order.active)
    st.caption(
        f"{stats.count} movie(s), mean IMDB {format_score(stats.mean_imdb, 2)}, "
        f"mean Metascore {format_score(stats.mean_meta, 1)}"
    )

    if not order.active:
        st.info("No movies match the current selection and filters.")
    _poster_grid(order.active, ctrl, prefix="active")
    with st.expander("Other movies", expanded=False):
        _poster_grid(order.rest[:_REST_LIMIT], ctrl, prefix="rest")


def _poster_grid(
    records: tuple[MovieRecord, ...], ctrl: SelectionController, *, prefix: str
) -> None:
    selected_id = getattr(ctrl.state, "record_id", None)
    for start in range(0, len(records), _GALLERY_COLUMNS):
        cols = st.columns(_GALLERY_COLUMNS)
        for i, (col, record) in enumerate(
            zip(cols, records[start : start + _GALLERY_COLUMNS], strict=False)
        ):
            with col:
                if record.poster_link:
                    st.image(record.poster_link, width=140)
                year = f" ({record.year})" if record.year is not None else ""
                st.caption(f"{record.title}{year}")
                label = "Selected" if record.title == selected_id else "Select"
                if st.button(label, key=f"{prefix}_{start + i}"):
                    ctrl.select_record(record.title)
                    logger.debug("gallery click: %r", record.title)
                    st.rerun()
