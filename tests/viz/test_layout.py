from __future__ import annotations

import math

from marquee.analysis.cooccurrence import CoEdge, CoNode, co_occurrence
from marquee.viz.layout import chord_layout, polar_point
from marquee.viz.scales import blend_hex

TAU = 2 * math.pi


def test_polar_point_is_clockwise_from_twelve_oclock() -> None:
    x, y = polar_point(0.0, 10.0)
    assert math.isclose(x, 0.0, abs_tol=1e-12) and math.isclose(y, -10.0)
    x, y = polar_point(math.pi / 2, 10.0)
    assert math.isclose(x, 10.0) and math.isclose(y, 0.0, abs_tol=1e-12)


def test_spans_and_padding_fill_the_circle(movies) -> None:
    co = co_occurrence(movies)
    layout = chord_layout(co.nodes, co.edges, padding=0.05)
    total = sum(a.span for a in layout.arcs) + layout.padding * len(layout.arcs)
    assert math.isclose(total, TAU)
    assert layout.arcs[0].start_angle == 0.0
    # Arcs are proportional to node weight.
    ratio = {a.label: a.span / a.weight for a in layout.arcs}
    assert max(ratio.values()) - min(ratio.values()) < 1e-9


def test_sub_intervals_tile_each_arc(movies) -> None:
    co = co_occurrence(movies)
    layout = chord_layout(co.nodes, co.edges)
    for arc in layout.arcs:
        widths = []
        for rb in layout.ribbons:
            if rb.source == arc.label:
                widths.append(rb.source_end - rb.source_start)
            if rb.target == arc.label:
                widths.append(rb.target_end - rb.target_start)
        assert math.isclose(sum(widths), arc.span)
    for rb in layout.ribbons:
        assert math.isclose(rb.source_end - rb.source_start, rb.target_end - rb.target_start)


def test_ribbon_color_blends_endpoint_colors(movies) -> None:
    co = co_occurrence(movies)
    layout = chord_layout(co.nodes, co.edges, palette=("#000000", "#ffffff"))
    ab = next(r for r in layout.ribbons if r.key == "A|B")
    assert ab.color == blend_hex("#000000", "#ffffff") == "#808080"
    assert layout.arc("A").color == "#000000"
    assert layout.arc("Z") is None


def test_padding_is_capped() -> None:
    nodes = [CoNode("A", 1), CoNode("B", 1)]
    edges = [CoEdge("A", "B", 1, ("m",))]
    layout = chord_layout(nodes, edges, padding=10.0)
    assert math.isclose(layout.padding, math.pi / 2)
    assert math.isclose(sum(a.span for a in layout.arcs), math.pi)


def test_empty_and_zero_weight_inputs() -> None:
    assert chord_layout([], []).is_empty()
    assert chord_layout([CoNode("A", 0)], []).is_empty()


def test_geometry_is_closed_and_within_radius(movies) -> None:
    co = co_occurrence(movies)
    layout = chord_layout(co.nodes, co.edges, radius=100.0, inner_radius_ratio=0.9)
    assert layout.inner_radius == 90.0
    for arc in layout.arcs:
        assert arc.polygon[0] == arc.polygon[-1]
        assert arc.path.startswith("M") and arc.path.endswith("Z")
        assert all(math.hypot(x, y) <= 100.0 + 1e-9 for x, y in arc.polygon)
    for rb in layout.ribbons:
        assert rb.polygon[0] == rb.polygon[-1]
        assert all(math.hypot(x, y) <= 90.0 + 1e-9 for x, y in rb.polygon)
