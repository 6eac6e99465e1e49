"""
Linked selection across the chord diagram and the poster gallery.

The selection is the only mutable state shared between views. It is exactly one of:

- ``Idle``: nothing selected.
- ``EdgeSelected(a, b)``: one co-star pair; the pair is unordered.
- ``RecordSelected(record_id)``: one movie.

Transitions (``SelectionController``)
- ``select_edge(a, b)``: EdgeSelected, or Idle when that pair (in either order) is
  already selected.
- ``select_record(id)``: RecordSelected, or Idle when that record is already selected.
- ``clear()``: Idle.

Selecting a record replaces a selected edge and vice versa. Everything else (active
records, scoped chord, opacities) is derived from the state by pure functions below.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from marquee.analysis.cooccurrence import CoOccurrence, edge_key, restrict_to_participants
from marquee.core.records import MovieDataset
from marquee.viz.layout import ChordLayout

__all__ = [
    "Idle",
    "EdgeSelected",
    "RecordSelected",
    "Selection",
    "IDLE",
    "SelectionController",
    "active_record_ids",
    "scoped_co_occurrence",
    "ElementProps",
    "VisualProps",
    "visual_props",
    "describe",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class EdgeSelected:
    """A selected pair, stored with ``a <= b``; build it through ``EdgeSelected.of``."""

    a: str
    b: str

    @classmethod
    def of(cls, a: str, b: str) -> EdgeSelected:
        return cls(*sorted((a, b)))

    @property
    def key(self) -> str:
        return edge_key(self.a, self.b)


@dataclass(frozen=True)
class RecordSelected:
    record_id: str


Selection = Idle | EdgeSelected | RecordSelected
IDLE = Idle()


class SelectionController:
    """
    Holds the current selection and applies the three transitions.

    Examples:
        >>> c = SelectionController()
        >>> c.select_edge("Pacino", "De Niro")
        EdgeSelected(a='De Niro', b='Pacino')
        >>> c.select_edge("De Niro", "Pacino")
        Idle()
    """

    def __init__(self, state: Selection = IDLE) -> None:
        self._state: Selection = state

    @property
    def state(self) -> Selection:
        return self._state

    def select_edge(self, a: str, b: str) -> Selection:
        nxt = EdgeSelected.of(a, b)
        self._state = IDLE if self._state == nxt else nxt
        logger.debug("select_edge(%r, %r) -> %r", a, b, self._state)
        return self._state

    def select_record(self, record_id: str) -> Selection:
        nxt = RecordSelected(record_id)
        self._state = IDLE if self._state == nxt else nxt
        logger.debug("select_record(%r) -> %r", record_id, self._state)
        return self._state

    def clear(self) -> Selection:
        self._state = IDLE
        return self._state

    def __repr__(self) -> str:
        return f"SelectionController(state={self._state!r})"


def active_record_ids(selection: Selection, co: CoOccurrence) -> tuple[str, ...]:
    """
    Record ids the gallery should feature under ``selection``.

    - Idle: every record that passed the filters.
    - EdgeSelected: the records behind that edge; empty if the edge did not survive the
      current filters or threshold.
    - RecordSelected: that single record.
    """
    if isinstance(selection, EdgeSelected):
        e = co.edge(selection.a, selection.b)
        return e.record_ids if e is not None else ()
    if isinstance(selection, RecordSelected):
        return (selection.record_id,)
    return co.record_ids


def scoped_co_occurrence(
    selection: Selection, co: CoOccurrence, dataset: MovieDataset
) -> CoOccurrence:
    """Restrict the chord to the selected movie's stars; other states leave it unchanged."""
    if isinstance(selection, RecordSelected):
        record = dataset.get(selection.record_id)
        stars = record.stars if record is not None else ()
        return restrict_to_participants(co, stars)
    return co


@dataclass(frozen=True)
class ElementProps:
    opacity: float
    stroke_width: float = 0.0
    emphasized: bool = False


@dataclass(frozen=True)
class VisualProps:
    """Per-ribbon (by edge key) and per-arc (by label) rendering properties."""

    ribbons: dict[str, ElementProps] = field(default_factory=dict)
    arcs: dict[str, ElementProps] = field(default_factory=dict)

    def chart_props(
        self,
    ) -> tuple[dict[str, tuple[float, float]], dict[str, tuple[float, float]]]:
        """``(ribbon_props, arc_props)`` in the ``(opacity, stroke width)`` form chord_chart takes."""
        return (
            {k: (p.opacity, p.stroke_width) for k, p in self.ribbons.items()},
            {k: (p.opacity, p.stroke_width) for k, p in self.arcs.items()},
        )


def visual_props(
    selection: Selection,
    layout: ChordLayout,
    *,
    ribbon_opacity: float = 0.65,
    dimmed_opacity: float = 0.1,
) -> VisualProps:
    """
    Derive opacities from the selection.

    With a selected edge, its ribbon is emphasized and every other ribbon dimmed; arcs
    not touching the edge fade. Idle and record selections draw everything at rest.
    """
    if isinstance(selection, EdgeSelected):
        ribbons = {
            r.key: (
                ElementProps(0.95, 1.5, True)
                if r.key == selection.key
                else ElementProps(dimmed_opacity)
            )
            for r in layout.ribbons
        }
        ends = {selection.a, selection.b}
        arcs = {
            a.label: ElementProps(1.0, 1.0, True) if a.label in ends else ElementProps(0.35)
            for a in layout.arcs
        }
        return VisualProps(ribbons, arcs)
    return VisualProps(
        {r.key: ElementProps(ribbon_opacity) for r in layout.ribbons},
        {a.label: ElementProps(1.0) for a in layout.arcs},
    )


def describe(selection: Selection) -> str:
    """Subtitle for the gallery: what the current selection shows."""
    if isinstance(selection, EdgeSelected):
        return f"{selection.a} ↔ {selection.b}"
    if isinstance(selection, RecordSelected):
        return selection.record_id
    return "All movies (filtered)"
