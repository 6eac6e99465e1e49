from __future__ import annotations

from marquee.core.constants import ALL_SERIES_COLOR
from marquee.viz.scales import (
    blend_hex,
    extent,
    nice_domain,
    ordinal_colors,
    series_color,
    zero_inclusive_domain,
)


def test_extent_ignores_missing() -> None:
    assert extent([3.0, None, -1.0]) == (-1.0, 3.0)
    assert extent([None]) is None


def test_nice_domain_rounds_outward() -> None:
    assert nice_domain(0.3, 9.6) == (0.0, 10.0)
    assert nice_domain(9.6, 0.3) == (0.0, 10.0)
    assert nice_domain(5.0, 5.0) == (5.0, 5.0)


def test_zero_inclusive_domain() -> None:
    assert zero_inclusive_domain([2.0, 5.0]) == (0.0, 5.0)
    assert zero_inclusive_domain([-3.0, -1.0], pad=1.0) == (-4.0, 1.0)
    assert zero_inclusive_domain([]) == (0.0, 0.0)


def test_palette_assignment_cycles() -> None:
    colors = ordinal_colors(["a", "b", "c"], ("#111111", "#222222"))
    assert colors == {"a": "#111111", "b": "#222222", "c": "#111111"}
    assert series_color("All", 3, ("#111111",)) == ALL_SERIES_COLOR


def test_blend_is_symmetric() -> None:
    a, b = "#1f77b4", "#ff7f0e"
    assert blend_hex(a, b) == blend_hex(b, a)
    assert blend_hex("#fff", "#fff") == "#ffffff"
