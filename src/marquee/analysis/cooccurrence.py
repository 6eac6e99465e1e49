"""
Weighted co-occurrence graph (who appears with whom) for the chord diagram.

Algorithm
1. Keep the records that satisfy the filter predicate (the active subset).
2. Extract each active record's participants, deduplicated within the record.
3. Every unordered pair of co-listed participants adds 1 to the pair's weight and appends
   the record id to the pair's contribution list.
4. Drop pairs with weight below ``min_edge_weight``.
5. Node weight is the sum of the surviving incident edge weights. Nodes without a
   surviving edge do not appear.

Ordering is deterministic: nodes sort by label; edges store ``source < target`` and sort
by (source index, target index).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection, Sequence
from dataclasses import dataclass, field
from itertools import combinations

from marquee.core.records import MovieRecord

__all__ = [
    "CoNode",
    "CoEdge",
    "CoOccurrence",
    "edge_key",
    "stars",
    "year_range",
    "co_occurrence",
    "connection_weight_range",
    "clamp_min_weight",
    "restrict_to_participants",
]

logger = logging.getLogger(__name__)

Predicate = Callable[[MovieRecord], bool]


def edge_key(a: str, b: str) -> str:
    """Order-independent key of a pair: ``edge_key("B", "A") == "A|B"``."""
    lo, hi = (a, b) if a <= b else (b, a)
    return f"{lo}|{hi}"


def stars(record: MovieRecord) -> tuple[str, ...]:
    return record.stars


def _title(record: MovieRecord) -> str:
    return record.title


def year_range(lo: int, hi: int) -> Predicate:
    """Inclusive release-year filter; records without a year fail it."""

    def _pred(record: MovieRecord) -> bool:
        return record.year is not None and lo <= record.year <= hi

    return _pred


@dataclass(frozen=True)
class CoNode:
    label: str
    weight: int


@dataclass(frozen=True)
class CoEdge:
    """Unordered pair with ``source < target`` and the ids of the records behind it."""

    source: str
    target: str
    weight: int
    record_ids: tuple[str, ...]

    @property
    def key(self) -> str:
        return edge_key(self.source, self.target)


@dataclass(frozen=True)
class CoOccurrence:
    """
    Nodes, surviving edges, and the ids of every active record.

    ``record_ids`` lists the records that passed the filter, in source order, whether or
    not they contributed an edge.
    """

    nodes: tuple[CoNode, ...] = ()
    edges: tuple[CoEdge, ...] = ()
    record_ids: tuple[str, ...] = ()
    _edges_by_key: dict[str, CoEdge] = field(default_factory=dict, compare=False, repr=False)

    def __post_init__(self) -> None:
        self._edges_by_key.update({e.key: e for e in self.edges})

    def edge(self, a: str, b: str) -> CoEdge | None:
        return self._edges_by_key.get(edge_key(a, b))

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(n.label for n in self.nodes)

    def is_empty(self) -> bool:
        return not self.nodes


def _pair_counts(
    records: Sequence[MovieRecord],
    predicate: Predicate | None,
    participants: Callable[[MovieRecord], Sequence[str]],
    record_id: Callable[[MovieRecord], str],
) -> tuple[list[str], dict[tuple[str, str], list[str]]]:
    active: list[str] = []
    pairs: dict[tuple[str, str], list[str]] = {}
    for r in records:
        if predicate is not None and not predicate(r):
            continue
        rid = record_id(r)
        active.append(rid)
        people = sorted(set(participants(r)))
        for a, b in combinations(people, 2):
            pairs.setdefault((a, b), []).append(rid)
    return active, pairs


def _build(
    pairs: dict[tuple[str, str], Sequence[str]],
    min_edge_weight: int,
    record_ids: Sequence[str],
) -> CoOccurrence:
    kept = {p: ids for p, ids in pairs.items() if len(ids) >= min_edge_weight}
    weights: dict[str, int] = {}
    for (a, b), ids in kept.items():
        weights[a] = weights.get(a, 0) + len(ids)
        weights[b] = weights.get(b, 0) + len(ids)
    labels = sorted(weights)
    index = {label: i for i, label in enumerate(labels)}
    edges = sorted(
        (CoEdge(a, b, len(ids), tuple(ids)) for (a, b), ids in kept.items()),
        key=lambda e: (index[e.source], index[e.target]),
    )
    return CoOccurrence(
        nodes=tuple(CoNode(label, weights[label]) for label in labels),
        edges=tuple(edges),
        record_ids=tuple(record_ids),
    )


def co_occurrence(
    records: Sequence[MovieRecord],
    predicate: Predicate | None = None,
    min_edge_weight: int = 1,
    participants: Callable[[MovieRecord], Sequence[str]] = stars,
    record_id: Callable[[MovieRecord], str] = _title,
) -> CoOccurrence:
    """
    Build the co-occurrence graph of the records passing ``predicate``.

    Args:
        records: Record universe.
        predicate: Active-subset filter (e.g. ``year_range(2000, 2020)``); None keeps all.
        min_edge_weight: Edges with fewer contributing records are dropped entirely.
        participants: Entities listed by a record (stars by default).
        record_id: Record identifier (title by default).

    Returns:
        CoOccurrence: Empty nodes and edges when the threshold excludes every pair.
    """
    active, pairs = _pair_counts(records, predicate, participants, record_id)
    co = _build(pairs, min_edge_weight, active)
    logger.debug(
        "co_occurrence: %d active records, %d/%d pairs kept at min weight %d, %d nodes",
        len(active),
        len(co.edges),
        len(pairs),
        min_edge_weight,
        len(co.nodes),
    )
    return co


def connection_weight_range(
    records: Sequence[MovieRecord],
    predicate: Predicate | None = None,
    participants: Callable[[MovieRecord], Sequence[str]] = stars,
) -> tuple[int, int]:
    """Smallest and largest pair weight among active records; ``(1, 1)`` with no pairs."""
    _, pairs = _pair_counts(records, predicate, participants, _title)
    if not pairs:
        return (1, 1)
    counts = [len(ids) for ids in pairs.values()]
    return (min(counts), max(counts))


def clamp_min_weight(value: int, weight_range: tuple[int, int]) -> int:
    lo, hi = weight_range
    return max(lo, min(hi, value))


def restrict_to_participants(co: CoOccurrence, participants: Collection[str]) -> CoOccurrence:
    """
    Keep only edges whose endpoints are both in ``participants``.

    Node weights are recomputed from the kept edges and nodes left without an edge are
    dropped. ``record_ids`` is unchanged.
    """
    wanted = set(participants)
    pairs = {
        (e.source, e.target): e.record_ids
        for e in co.edges
        if e.source in wanted and e.target in wanted
    }
    return _build(pairs, 0, co.record_ids)
