"""
Scale helpers: numeric domains, nice bounds, ordinal color assignment and color blending.

Zero-IO and stdlib-only; the chart builders turn these into Altair scale arguments.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from marquee.core.constants import ALL_SERIES_COLOR, ALL_SERIES_KEY

__all__ = [
    "extent",
    "nice_domain",
    "zero_inclusive_domain",
    "ordinal_colors",
    "series_color",
    "blend_hex",
]


def extent(values: Iterable[float | None]) -> tuple[float, float] | None:
    """Min and max of the present values; None when there are none."""
    present = [v for v in values if v is not None]
    if not present:
        return None
    return (min(present), max(present))


def _tick_step(lo: float, hi: float, count: int) -> float:
    raw = (hi - lo) / max(count, 1)
    power = 10 ** math.floor(math.log10(raw))
    err = raw / power
    if err >= math.sqrt(50):
        factor = 10
    elif err >= math.sqrt(10):
        factor = 5
    elif err >= math.sqrt(2):
        factor = 2
    else:
        factor = 1
    return factor * power


def nice_domain(lo: float, hi: float, count: int = 10) -> tuple[float, float]:
    """Extend ``[lo, hi]`` outward to round tick multiples, as d3's ``scale.nice()`` does.

    Examples:
        >>> nice_domain(0.3, 9.6)
        (0.0, 10.0)
    """
    if hi < lo:
        lo, hi = hi, lo
    if not (math.isfinite(lo) and math.isfinite(hi)) or hi == lo:
        return (lo, hi)
    prev = None
    for _ in range(10):
        step = _tick_step(lo, hi, count)
        if step == prev:
            break
        lo = math.floor(lo / step) * step
        hi = math.ceil(hi / step) * step
        prev = step
    return (float(lo), float(hi))


def zero_inclusive_domain(values: Iterable[float | None], pad: float = 0.0) -> tuple[float, float]:
    """Domain spanning the values and zero, widened by ``pad`` on both ends."""
    ext = extent(values) or (0.0, 0.0)
    lo = min(ext[0], 0.0) - pad
    hi = max(ext[1], 0.0) + pad
    return (lo, hi)


def ordinal_colors(keys: Sequence[str], palette: Sequence[str]) -> dict[str, str]:
    """Assign palette colors to keys in order, cycling when keys outnumber colors."""
    return {k: palette[i % len(palette)] for i, k in enumerate(keys)}


def series_color(key: str, index: int, palette: Sequence[str]) -> str:
    """Color of the ``index``-th group series; the "All" series is always drawn dark."""
    if key == ALL_SERIES_KEY:
        return ALL_SERIES_COLOR
    return palette[index % len(palette)]


def _rgb(color: str) -> tuple[int, int, int]:
    h = color.lstrip("#")
    if len(h) == 3:
        h = "".join(ch * 2 for ch in h)
    return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))


def blend_hex(a: str, b: str, t: float = 0.5) -> str:
    """Linear RGB blend ``(1 - t) * a + t * b``; with ``t = 0.5`` the result is symmetric."""
    ra, ga, ba = _rgb(a)
    rb, gb, bb = _rgb(b)
    mix = (round(x + (y - x) * t) for x, y in ((ra, rb), (ga, gb), (ba, bb)))
    return "#" + "".join(f"{c:02x}" for c in mix)
