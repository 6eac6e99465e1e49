from __future__ import annotations

from marquee.analysis.cooccurrence import co_occurrence, year_range
from marquee.selection import (
    IDLE,
    EdgeSelected,
    RecordSelected,
    SelectionController,
    active_record_ids,
    describe,
    scoped_co_occurrence,
    visual_props,
)
from marquee.viz.layout import chord_layout


def test_edge_toggle_is_order_independent() -> None:
    c = SelectionController()
    assert c.select_edge("B", "A") == EdgeSelected("A", "B")
    assert c.select_edge("A", "B") == IDLE
    assert c.state == IDLE


def test_record_toggle_and_clear() -> None:
    c = SelectionController()
    assert c.select_record("Heat") == RecordSelected("Heat")
    assert c.select_record("Heat") == IDLE
    c.select_record("Heat")
    assert c.clear() == IDLE


def test_edge_and_record_replace_each_other() -> None:
    c = SelectionController()
    c.select_edge("A", "B")
    assert c.select_record("Heat") == RecordSelected("Heat")
    assert c.select_edge("A", "B") == EdgeSelected("A", "B")
    assert c.select_edge("A", "C") == EdgeSelected("A", "C")
    assert "EdgeSelected" in repr(c)


def test_active_records_follow_the_selection(movies) -> None:
    co = co_occurrence(movies)
    assert active_record_ids(IDLE, co) == co.record_ids
    assert active_record_ids(EdgeSelected.of("B", "A"), co) == ("Alpha", "Beta")
    assert active_record_ids(RecordSelected("Gamma"), co) == ("Gamma",)
    # An edge removed by the current filter features nothing.
    filtered = co_occurrence(movies, year_range(2001, 2003))
    assert active_record_ids(EdgeSelected.of("B", "D"), filtered) == ()


def test_record_selection_scopes_the_chord(movies, dataset) -> None:
    co = co_occurrence(movies)
    scoped = scoped_co_occurrence(RecordSelected("Alpha"), co, dataset)
    assert scoped.labels == ("A", "B", "C")
    assert [e.key for e in scoped.edges] == ["A|B", "A|C", "B|C"]
    assert scoped_co_occurrence(IDLE, co, dataset) is co
    assert scoped_co_occurrence(RecordSelected("Missing"), co, dataset).is_empty()


def test_visual_props_emphasize_selected_edge(movies) -> None:
    co = co_occurrence(movies)
    layout = chord_layout(co.nodes, co.edges)

    rest = visual_props(IDLE, layout, ribbon_opacity=0.65)
    assert {p.opacity for p in rest.ribbons.values()} == {0.65}
    assert {p.opacity for p in rest.arcs.values()} == {1.0}

    props = visual_props(EdgeSelected.of("A", "B"), layout, dimmed_opacity=0.1)
    assert props.ribbons["A|B"].emphasized
    assert props.ribbons["A|B"].opacity > props.ribbons["C|D"].opacity == 0.1
    assert props.arcs["A"].emphasized and props.arcs["B"].emphasized
    assert not props.arcs["C"].emphasized

    ribbons, arcs = props.chart_props()
    assert ribbons["A|B"] == (0.95, 1.5)
    assert arcs["D"] == (0.35, 0.0)


def test_describe() -> None:
    assert describe(IDLE) == "All movies (filtered)"
    assert describe(EdgeSelected.of("Pacino", "De Niro")) == "De Niro ↔ Pacino"
    assert describe(RecordSelected("Heat")) == "Heat"
