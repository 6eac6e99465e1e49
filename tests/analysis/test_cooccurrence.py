from __future__ import annotations

from math import comb

import pytest

from marquee.analysis.cooccurrence import (
    clamp_min_weight,
    co_occurrence,
    connection_weight_range,
    edge_key,
    restrict_to_participants,
    year_range,
)


@pytest.fixture
def triangle(make_movie):
    """Three movies, each pairing two of three stars exactly once."""
    return [
        make_movie("m1", ("A", "B"), year=2001),
        make_movie("m2", ("B", "C"), year=2002),
        make_movie("m3", ("A", "C"), year=2003),
    ]


def test_edge_key_is_order_independent() -> None:
    assert edge_key("B", "A") == edge_key("A", "B") == "A|B"


def test_threshold_keeps_or_drops_whole_graph(triangle) -> None:
    co = co_occurrence(triangle)
    assert co.labels == ("A", "B", "C")
    assert [(e.source, e.target, e.weight) for e in co.edges] == [
        ("A", "B", 1),
        ("A", "C", 1),
        ("B", "C", 1),
    ]
    assert [n.weight for n in co.nodes] == [2, 2, 2]

    empty = co_occurrence(triangle, min_edge_weight=2)
    assert empty.is_empty()
    assert empty.edges == ()
    # Active records are reported even when no edge survives.
    assert empty.record_ids == ("m1", "m2", "m3")


def test_weights_and_contributing_records(movies) -> None:
    co = co_occurrence(movies)
    ab = co.edge("B", "A")
    assert ab is not None
    assert ab.weight == 2
    assert ab.record_ids == ("Alpha", "Beta")
    assert {n.label: n.weight for n in co.nodes} == {"A": 3, "B": 4, "C": 3, "D": 2}
    # Epsilon lists a single star: active, but contributes no edge.
    assert "Epsilon" in co.record_ids
    assert "E" not in co.labels


def test_node_weight_is_sum_of_incident_edges(movies) -> None:
    co = co_occurrence(movies)
    for node in co.nodes:
        incident = [e.weight for e in co.edges if node.label in (e.source, e.target)]
        assert node.weight == sum(incident)


def test_total_weight_bounded_by_pairs_per_record(movies) -> None:
    co = co_occurrence(movies)
    bound = sum(comb(len(set(r.stars)), 2) for r in movies)
    assert sum(e.weight for e in co.edges) <= bound


def test_duplicate_participants_count_once(make_movie) -> None:
    co = co_occurrence([make_movie("x", ("A", "A", "B"))])
    assert [(e.source, e.target, e.weight) for e in co.edges] == [("A", "B", 1)]


def test_predicate_restricts_active_records(movies) -> None:
    co = co_occurrence(movies, year_range(2001, 2003))
    assert co.record_ids == ("Alpha", "Beta", "Gamma")
    assert co.edge("B", "D") is None


def test_connection_weight_range(movies) -> None:
    assert connection_weight_range(movies) == (1, 2)
    assert connection_weight_range(movies, year_range(2005, 2020)) == (1, 1)
    assert connection_weight_range(movies, year_range(1900, 1901)) == (1, 1)


def test_clamp_min_weight() -> None:
    assert clamp_min_weight(5, (1, 3)) == 3
    assert clamp_min_weight(0, (1, 3)) == 1
    assert clamp_min_weight(2, (1, 3)) == 2


def test_restrict_to_participants_recomputes_node_weights(movies) -> None:
    co = co_occurrence(movies)
    sub = restrict_to_participants(co, {"A", "B", "C"})
    assert [e.key for e in sub.edges] == ["A|B", "A|C", "B|C"]
    assert {n.label: n.weight for n in sub.nodes} == {"A": 3, "B": 3, "C": 2}
    assert sub.record_ids == co.record_ids
    assert restrict_to_participants(co, {"E"}).is_empty()
