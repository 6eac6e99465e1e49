"""
Statistical primitives shared by the aggregation engine and the chart builders.

All functions are pure and total: they never raise on degenerate input. "No data" is a
frequent, expected case in a dataset with missing fields, so degenerate results are
encoded as sentinel values:

- ``covariance``: 0.0 for fewer than 2 pairs.
- ``pearson``: 0.0 for fewer than 2 pairs or when either series has zero variance.
  A 0.0 therefore does not by itself mean "uncorrelated"; check variance separately when
  the distinction matters.
- ``linear_regression``: slope 0.0 and intercept 0.0 for fewer than 2 pairs or
  zero-variance x.
- ``mean`` / ``median``: None for empty input.

Series are paired by index; when lengths differ the extra tail of the longer one is
ignored.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from .constants import ZERO_VARIANCE_EPS

__all__ = [
    "Regression",
    "mean",
    "median",
    "covariance",
    "pearson",
    "linear_regression",
]


@dataclass(frozen=True)
class Regression:
    """Ordinary least squares line ``y = slope * x + intercept``."""

    slope: float
    intercept: float

    def predict(self, x: float) -> float:
        return self.slope * x + self.intercept


def mean(values: Sequence[float]) -> float | None:
    if not values:
        return None
    return math.fsum(values) / len(values)


def median(values: Sequence[float]) -> float | None:
    """Median via a full sort; the two middle values are averaged for even lengths."""
    if not values:
        return None
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return float(ordered[mid])
    return (ordered[mid - 1] + ordered[mid]) / 2


def covariance(xs: Sequence[float], ys: Sequence[float]) -> float:
    """Sample covariance ``sum((x - mx)(y - my)) / (n - 1)``; 0.0 for fewer than 2 pairs."""
    n = min(len(xs), len(ys))
    if n < 2:
        return 0.0
    mx = math.fsum(xs[:n]) / n
    my = math.fsum(ys[:n]) / n
    return math.fsum((xs[i] - mx) * (ys[i] - my) for i in range(n)) / (n - 1)


def pearson(xs: Sequence[float], ys: Sequence[float]) -> float:
    """Pearson correlation coefficient; 0.0 for degenerate input (see module notes)."""
    n = min(len(xs), len(ys))
    if n < 2:
        return 0.0
    mx = math.fsum(xs[:n]) / n
    my = math.fsum(ys[:n]) / n
    num = 0.0
    den_x = 0.0
    den_y = 0.0
    for i in range(n):
        dx = xs[i] - mx
        dy = ys[i] - my
        num += dx * dy
        den_x += dx * dx
        den_y += dy * dy
    den = math.sqrt(den_x * den_y)
    if den < ZERO_VARIANCE_EPS:
        return 0.0
    # Clamp rounding noise so callers can rely on [-1, 1].
    return max(-1.0, min(1.0, num / den))


def linear_regression(xs: Sequence[float], ys: Sequence[float]) -> Regression:
    """OLS fit minimizing squared residuals in y.

    Returns:
        Regression: ``Regression(0.0, 0.0)`` for fewer than 2 pairs or zero-variance x.
    """
    n = min(len(xs), len(ys))
    if n < 2:
        return Regression(0.0, 0.0)
    mx = math.fsum(xs[:n]) / n
    my = math.fsum(ys[:n]) / n
    num = 0.0
    den = 0.0
    for i in range(n):
        dx = xs[i] - mx
        num += dx * (ys[i] - my)
        den += dx * dx
    if den < ZERO_VARIANCE_EPS:
        return Regression(0.0, 0.0)
    slope = num / den
    return Regression(slope, my - slope * mx)
