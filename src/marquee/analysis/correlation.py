"""
Pairwise Pearson correlation matrix over numeric and flag columns.

Each entry is computed over pairwise-complete observations: rows where both columns are
present. Flags count as 0/1. A column with zero variance over those rows correlates 0 with
every other column; the diagonal is 1 regardless.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from marquee.core.records import MovieRecord, column_kind, numeric_value
from marquee.core.stats import pearson

__all__ = ["CorrelationMatrix", "correlation_matrix"]


@dataclass(frozen=True)
class CorrelationMatrix:
    """Square, symmetric matrix with unit diagonal; ``matrix[i][j]`` pairs ``columns[i], columns[j]``."""

    columns: tuple[str, ...]
    matrix: tuple[tuple[float, ...], ...]

    def value(self, a: str, b: str) -> float:
        return self.matrix[self.columns.index(a)][self.columns.index(b)]

    def cells(self) -> list[tuple[str, str, float]]:
        """Long form ``(row column, column, r)`` for heatmap encodings."""
        return [
            (a, b, self.matrix[i][j])
            for i, a in enumerate(self.columns)
            for j, b in enumerate(self.columns)
        ]


def correlation_matrix(records: Sequence[MovieRecord], columns: Sequence[str]) -> CorrelationMatrix:
    """
    Correlate every numeric or flag column in ``columns`` with every other.

    Args:
        records: Active records.
        columns: Candidate columns; non-numeric ones are skipped, order is preserved.

    Returns:
        CorrelationMatrix: Empty when no candidate column is numeric.
    """
    selected = tuple(c for c in dict.fromkeys(columns) if column_kind(c).is_numeric)
    values = [[numeric_value(r, c) for r in records] for c in selected]

    n = len(selected)
    m = [[1.0] * n for _ in range(n)]
    for i in range(n):
        for j in range(i + 1, n):
            xs: list[float] = []
            ys: list[float] = []
            for a, b in zip(values[i], values[j], strict=True):
                if a is not None and b is not None:
                    xs.append(a)
                    ys.append(b)
            r = pearson(xs, ys)
            m[i][j] = r
            m[j][i] = r
    return CorrelationMatrix(selected, tuple(tuple(row) for row in m))
