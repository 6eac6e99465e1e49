"""
Rendering layer: scales, chord layout geometry, poster gallery ordering and Altair charts.

Modules
- scales: domains, nice bounds, ordinal colors, color blending.
- layout: chord diagram arcs and ribbons (pure geometry, no Altair).
- gallery: poster ordering and summary statistics.
- charts: Altair chart builders taking ViewSettings explicitly.
"""

from __future__ import annotations

from .charts import (
    DECEPTIVE_STYLE,
    HONEST_STYLE,
    RIBBON_PARAM,
    BarStyle,
    chord_chart,
    correlation_heatmap,
    critics_vs_audience_chart,
    disagreement_band_chart,
    diverging_bar_chart,
    empty_chart,
    line_chart,
    scatter_chart,
)
from .gallery import GalleryOrder, GalleryStats, gallery_order, gallery_stats
from .layout import ArcGeometry, ChordLayout, RibbonGeometry, chord_layout

__all__ = [
    "DECEPTIVE_STYLE",
    "HONEST_STYLE",
    "RIBBON_PARAM",
    "BarStyle",
    "chord_chart",
    "correlation_heatmap",
    "critics_vs_audience_chart",
    "disagreement_band_chart",
    "diverging_bar_chart",
    "empty_chart",
    "line_chart",
    "scatter_chart",
    "GalleryOrder",
    "GalleryStats",
    "gallery_order",
    "gallery_stats",
    "ArcGeometry",
    "ChordLayout",
    "RibbonGeometry",
    "chord_layout",
]
