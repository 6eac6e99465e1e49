"""
Chord diagram layout: weighted nodes and edges to arc and ribbon geometry.

Angles are in radians, measured clockwise from 12 o'clock, so a point at angle ``a`` and
radius ``r`` sits at ``(r sin a, -r cos a)`` relative to the diagram center (screen
coordinates, y grows downward).

Algorithm
1. Nodes keep their input order. The circle minus ``padding * n`` is split across nodes
   proportionally to node weight, with a single radians-per-weight factor ``k``. Padding
   is capped so the total padding never exceeds half the circle.
2. Each node span is split across its incident edges, ordered by the other endpoint's
   index, each sub-interval ``k * edge.weight`` wide. Both ends of a ribbon are therefore
   equally wide, and the sub-intervals of a node sum to its span when the node weight is
   the sum of its incident edge weights.
3. A ribbon joins its two sub-intervals with quadratic curves through the center. Its fill
   is the 50/50 blend of the endpoint colors.

The layout is stateless; recompute it from scratch whenever nodes or edges change.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from marquee.analysis.cooccurrence import CoEdge, CoNode, edge_key
from marquee.core.constants import TABLEAU10

from .scales import blend_hex

__all__ = [
    "Point",
    "ArcGeometry",
    "RibbonGeometry",
    "ChordLayout",
    "chord_layout",
    "polar_point",
    "arc_path",
    "ribbon_path",
]

Point = tuple[float, float]

TAU = 2 * math.pi
# Polygon vertices per radian of arc, and per quadratic curve.
_ARC_SAMPLES_PER_RADIAN = 24
_CURVE_SAMPLES = 24


def polar_point(angle: float, radius: float) -> Point:
    return (radius * math.sin(angle), -radius * math.cos(angle))


@dataclass(frozen=True)
class ArcGeometry:
    """
    Angular span of one node.

    Attributes:
        label (str): Node label.
        weight (int): Node weight.
        start_angle, end_angle (float): Span in radians.
        color (str): Node color.
        path (str): SVG path of the annular sector.
        polygon (tuple[Point, ...]): Closed ring approximating the sector.
    """

    label: str
    weight: int
    start_angle: float
    end_angle: float
    color: str
    path: str
    polygon: tuple[Point, ...]

    @property
    def span(self) -> float:
        return self.end_angle - self.start_angle

    @property
    def mid_angle(self) -> float:
        return (self.start_angle + self.end_angle) / 2


@dataclass(frozen=True)
class RibbonGeometry:
    """
    One edge drawn between two node sub-intervals.

    Attributes:
        source, target (str): Endpoint labels (``source < target``).
        weight (int): Edge weight.
        source_start, source_end (float): Sub-interval on the source arc.
        target_start, target_end (float): Sub-interval on the target arc.
        color (str): Blend of the endpoint colors.
        path (str): SVG path.
        polygon (tuple[Point, ...]): Closed ring approximating the ribbon.
    """

    source: str
    target: str
    weight: int
    source_start: float
    source_end: float
    target_start: float
    target_end: float
    color: str
    path: str
    polygon: tuple[Point, ...]

    @property
    def key(self) -> str:
        return edge_key(self.source, self.target)


@dataclass(frozen=True)
class ChordLayout:
    arcs: tuple[ArcGeometry, ...] = ()
    ribbons: tuple[RibbonGeometry, ...] = ()
    padding: float = 0.0
    radius: float = 0.0
    inner_radius: float = 0.0

    def arc(self, label: str) -> ArcGeometry | None:
        for a in self.arcs:
            if a.label == label:
                return a
        return None

    def is_empty(self) -> bool:
        return not self.arcs


def _fmt(p: Point) -> str:
    return f"{p[0]:.3f},{p[1]:.3f}"


def _large(a0: float, a1: float) -> int:
    return 1 if abs(a1 - a0) > math.pi else 0


def arc_path(start: float, end: float, inner: float, outer: float) -> str:
    """SVG path of the annular sector ``[start, end] x [inner, outer]``."""
    large = _large(start, end)
    return (
        f"M{_fmt(polar_point(start, outer))}"
        f"A{outer:.3f},{outer:.3f} 0 {large} 1 {_fmt(polar_point(end, outer))}"
        f"L{_fmt(polar_point(end, inner))}"
        f"A{inner:.3f},{inner:.3f} 0 {large} 0 {_fmt(polar_point(start, inner))}Z"
    )


def ribbon_path(s0: float, s1: float, t0: float, t1: float, radius: float) -> str:
    """SVG path: source arc, curve through the center, target arc, curve back."""
    r = f"{radius:.3f},{radius:.3f}"
    return (
        f"M{_fmt(polar_point(s0, radius))}"
        f"A{r} 0 {_large(s0, s1)} 1 {_fmt(polar_point(s1, radius))}"
        f"Q0,0 {_fmt(polar_point(t0, radius))}"
        f"A{r} 0 {_large(t0, t1)} 1 {_fmt(polar_point(t1, radius))}"
        f"Q0,0 {_fmt(polar_point(s0, radius))}Z"
    )


def _sample_arc(a0: float, a1: float, radius: float) -> list[Point]:
    n = max(2, math.ceil(abs(a1 - a0) * _ARC_SAMPLES_PER_RADIAN) + 1)
    return [polar_point(a0 + (a1 - a0) * i / (n - 1), radius) for i in range(n)]


def _sample_curve(p0: Point, p2: Point) -> list[Point]:
    # Quadratic Bezier with the control point at the center (0, 0).
    out: list[Point] = []
    for i in range(1, _CURVE_SAMPLES):
        t = i / _CURVE_SAMPLES
        a = (1 - t) ** 2
        b = t * t
        out.append((a * p0[0] + b * p2[0], a * p0[1] + b * p2[1]))
    return out


def _arc_polygon(start: float, end: float, inner: float, outer: float) -> tuple[Point, ...]:
    ring = _sample_arc(start, end, outer) + _sample_arc(end, start, inner)
    ring.append(ring[0])
    return tuple(ring)


def _ribbon_polygon(s0: float, s1: float, t0: float, t1: float, radius: float) -> tuple[Point, ...]:
    src = _sample_arc(s0, s1, radius)
    tgt = _sample_arc(t0, t1, radius)
    ring = src + _sample_curve(src[-1], tgt[0]) + tgt + _sample_curve(tgt[-1], src[0])
    ring.append(ring[0])
    return tuple(ring)


def chord_layout(
    nodes: Sequence[CoNode],
    edges: Sequence[CoEdge],
    *,
    padding: float = 0.04,
    radius: float = 250.0,
    inner_radius_ratio: float = 0.92,
    palette: Sequence[str] = TABLEAU10,
) -> ChordLayout:
    """
    Lay out nodes around the circle and connect them with ribbons.

    Args:
        nodes: Nodes in display order; weights size the arcs.
        edges: Edges between listed nodes; edges naming unknown nodes are skipped.
        padding: Angular gap after each node, in radians.
        radius: Outer arc radius.
        inner_radius_ratio: Inner arc radius (where ribbons attach) as a fraction of radius.
        palette: Node colors, assigned by node index.

    Returns:
        ChordLayout: Empty when there are no nodes or the total weight is zero.
    """
    n = len(nodes)
    total = sum(max(node.weight, 0) for node in nodes)
    if n == 0 or total <= 0:
        return ChordLayout()

    pad = min(max(padding, 0.0), math.pi / n)
    k = (TAU - pad * n) / total
    inner = radius * inner_radius_ratio
    colors = [palette[i % len(palette)] for i in range(n)]
    index = {node.label: i for i, node in enumerate(nodes)}

    starts: list[float] = []
    arcs: list[ArcGeometry] = []
    angle = 0.0
    for i, node in enumerate(nodes):
        start = angle
        end = start + k * max(node.weight, 0)
        starts.append(start)
        arcs.append(
            ArcGeometry(
                label=node.label,
                weight=node.weight,
                start_angle=start,
                end_angle=end,
                color=colors[i],
                path=arc_path(start, end, inner, radius),
                polygon=_arc_polygon(start, end, inner, radius),
            )
        )
        angle = end + pad

    known = [e for e in edges if e.source in index and e.target in index]
    incident: dict[int, list[tuple[int, CoEdge]]] = {i: [] for i in range(n)}
    for e in known:
        s, t = index[e.source], index[e.target]
        incident[s].append((t, e))
        incident[t].append((s, e))

    # (node index, edge key) -> (start, end) sub-interval on that node's arc
    sub: dict[tuple[int, str], tuple[float, float]] = {}
    for i in range(n):
        cursor = starts[i]
        for _, e in sorted(incident[i], key=lambda pair: pair[0]):
            width = k * e.weight
            sub[(i, e.key)] = (cursor, cursor + width)
            cursor += width

    ribbons: list[RibbonGeometry] = []
    for e in known:
        s, t = index[e.source], index[e.target]
        s0, s1 = sub[(s, e.key)]
        t0, t1 = sub[(t, e.key)]
        ribbons.append(
            RibbonGeometry(
                source=e.source,
                target=e.target,
                weight=e.weight,
                source_start=s0,
                source_end=s1,
                target_start=t0,
                target_end=t1,
                color=blend_hex(colors[s], colors[t]),
                path=ribbon_path(s0, s1, t0, t1, inner),
                polygon=_ribbon_polygon(s0, s1, t0, t1, inner),
            )
        )

    return ChordLayout(
        arcs=tuple(arcs),
        ribbons=tuple(ribbons),
        padding=pad,
        radius=radius,
        inner_radius=inner,
    )
