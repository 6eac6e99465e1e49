"""
Altair chart builders.

Every builder takes a fully materialized structure from marquee.analysis or
marquee.viz.layout plus a ViewSettings value (sizes and palettes), and returns a chart
with uniform defaults applied. Empty inputs render a text placeholder.

Interaction
- Hover highlights use ``selection_point(on="pointerover", clear="pointerout")`` so an
  overlay never outlives the pointer.
- The chord chart exposes a click param named ``ribbon`` (fields source, target); the
  Streamlit shell consumes it through ``st.altair_chart(on_select="rerun")``.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import altair as alt

from marquee.analysis.correlation import CorrelationMatrix
from marquee.analysis.disagreement import CategoryGap, YearGap
from marquee.analysis.series import CriticPoint, GenrePoint, GenreTrend, LineSeries, ScatterPoint
from marquee.config import ViewSettings
from marquee.core.constants import ALL_SERIES_KEY
from marquee.core.parsing import flag_display_name

from .layout import ChordLayout, Point
from .scales import extent, nice_domain, ordinal_colors, series_color, zero_inclusive_domain

__all__ = [
    "RIBBON_PARAM",
    "BarStyle",
    "HONEST_STYLE",
    "DECEPTIVE_STYLE",
    "bar_opacity",
    "magnitude_color",
    "gap_label",
    "empty_chart",
    "line_chart",
    "scatter_chart",
    "critics_vs_audience_chart",
    "diverging_bar_chart",
    "disagreement_band_chart",
    "correlation_heatmap",
    "chord_chart",
]

RIBBON_PARAM = "ribbon"

_MAGNITUDE_GREEN = "#22c55e"
_MAGNITUDE_YELLOW = "#eab308"
_MAGNITUDE_RED = "#e34a33"


# Uniform chart defaults for a professional look
def _apply_chart_defaults(ch: alt.TopLevelMixin) -> alt.TopLevelMixin:
    return (
        ch.configure_axis(labelFontSize=12, titleFontSize=12, grid=True)
        .configure_legend(labelFontSize=12, titleFontSize=12)
        .configure_title(fontSize=14, subtitleFontSize=12, anchor="start")
        .configure_view(strokeOpacity=0)
    )


def empty_chart(message: str, *, width: int = 400, height: int = 80) -> alt.TopLevelMixin:
    """Text placeholder shown instead of a chart when there is nothing to draw."""
    return _apply_chart_defaults(
        alt.Chart(alt.Data(values=[{"text": message}]))
        .mark_text(fontSize=13, color="#888")
        .encode(text="text:N")
        .properties(width=width, height=height)
    )


def _color_scale(keys: Sequence[str], palette: Sequence[str]) -> alt.Scale:
    colors = ordinal_colors(keys, palette)
    return alt.Scale(domain=list(colors), range=list(colors.values()))


# ----------------------------
# Line chart (mean metric by year)
# ----------------------------


def line_chart(
    series: Sequence[LineSeries],
    settings: ViewSettings,
    *,
    metric_label: str,
    y_domain: tuple[float, float] | None = None,
    title: str | None = None,
) -> alt.TopLevelMixin:
    """
    Multi-series line chart with a nearest-year rule listing every visible series.

    Args:
        series: Output of grouped_series; "All" is drawn dark and thicker.
        settings: Canvas size and palette.
        metric_label: Y axis title.
        y_domain: Fixed y domain; defaults to nice bounds of the data.
        title: Optional chart title.
    """
    if not series:
        return empty_chart("No data for the selected filters.", width=settings.width)

    names = [flag_display_name(s.key) for s in series]
    colors: list[str] = []
    group_index = 0
    for s in series:
        if s.key == ALL_SERIES_KEY:
            colors.append(series_color(s.key, 0, settings.palette))
        else:
            colors.append(series_color(s.key, group_index, settings.palette))
            group_index += 1

    rows = [
        {"series": name, "key": s.key, "x": p.x, "y": p.y, "count": p.count}
        for s, name in zip(series, names, strict=True)
        for p in s.points
    ]
    if y_domain is None:
        ext = extent(r["y"] for r in rows) or (0.0, 1.0)
        y_domain = nice_domain(*ext)

    base = alt.Chart(alt.Data(values=rows)).encode(
        x=alt.X("x:Q", title="Year", axis=alt.Axis(format="d"), scale=alt.Scale(zero=False)),
        y=alt.Y("y:Q", title=metric_label, scale=alt.Scale(domain=list(y_domain))),
        color=alt.Color("series:N", title="Series", scale=alt.Scale(domain=names, range=colors)),
    )
    nearest = alt.selection_point(
        name="year_hover",
        nearest=True,
        on="pointerover",
        clear="pointerout",
        fields=["x"],
        empty=False,
    )
    lines = base.mark_line(interpolate="monotone").encode(
        strokeWidth=alt.condition(
            alt.datum.key == ALL_SERIES_KEY, alt.value(2.5), alt.value(1.5)
        )
    )
    points = base.mark_point(filled=True, size=40).encode(
        opacity=alt.condition(nearest, alt.value(1), alt.value(0))
    )
    rule = (
        alt.Chart(alt.Data(values=rows))
        .transform_pivot("series", value="y", groupby=["x"])
        .mark_rule(color="#999")
        .encode(
            x=alt.X("x:Q", title="Year"),
            opacity=alt.condition(nearest, alt.value(0.6), alt.value(0)),
            tooltip=[alt.Tooltip("x:Q", title="Year", format="d")]
            + [alt.Tooltip(f"{name}:Q", format=".2f") for name in names],
        )
        .add_params(nearest)
    )
    ch = alt.layer(lines, points, rule).properties(
        width=settings.width, height=settings.line_height
    )
    if title:
        ch = ch.properties(title=title)
    return _apply_chart_defaults(ch)


# ----------------------------
# Scatter charts
# ----------------------------


def scatter_chart(
    points: Sequence[ScatterPoint] | Sequence[GenrePoint],
    settings: ViewSettings,
    *,
    metric_label: str,
    title: str | None = None,
) -> alt.TopLevelMixin:
    """Runtime vs metric, one point per movie or one sized point per primary genre."""
    if not points:
        return empty_chart("No movies with runtime and metric.", width=settings.width)

    by_genre = isinstance(points[0], GenrePoint)
    if by_genre:
        rows: list[dict[str, Any]] = [
            {"genre": p.genre, "runtime": p.runtime, "value": p.value, "count": p.count}
            for p in points  # type: ignore[union-attr]
        ]
        tooltip = [
            alt.Tooltip("genre:N", title="Genre"),
            alt.Tooltip("count:Q", title="Movies"),
            alt.Tooltip("runtime:Q", title="Mean runtime (min)", format=".1f"),
            alt.Tooltip("value:Q", title=f"Mean {metric_label}", format=".2f"),
        ]
    else:
        rows = [
            {
                "title": p.title,  # type: ignore[union-attr]
                "genre": p.genre,
                "year": p.year,  # type: ignore[union-attr]
                "runtime": p.runtime,
                "value": p.value,
            }
            for p in points
        ]
        tooltip = [
            alt.Tooltip("title:N", title="Title"),
            alt.Tooltip("genre:N", title="Genre"),
            alt.Tooltip("year:Q", title="Year", format="d"),
            alt.Tooltip("runtime:Q", title="Runtime (min)"),
            alt.Tooltip("value:Q", title=metric_label),
        ]

    genres = sorted({r["genre"] for r in rows})
    x_dom = nice_domain(*(extent(r["runtime"] for r in rows) or (0.0, 1.0)))
    y_dom = nice_domain(*(extent(r["value"] for r in rows) or (0.0, 1.0)))
    hover = alt.selection_point(
        name="point_hover", on="pointerover", clear="pointerout", nearest=True, empty=False
    )

    x = alt.X("runtime:Q", title="Runtime (min)", scale=alt.Scale(domain=list(x_dom)))
    y = alt.Y("value:Q", title=metric_label, scale=alt.Scale(domain=list(y_dom)))
    size: Any = (
        alt.Size("count:Q", title="Movies", scale=alt.Scale(range=[40, 800]))
        if by_genre
        else alt.condition(hover, alt.value(120), alt.value(40))
    )
    ch = (
        alt.Chart(alt.Data(values=rows))
        .mark_circle(stroke="white", strokeWidth=0.5)
        .encode(
            x=x,
            y=y,
            color=alt.Color(
                "genre:N", title="Primary genre", scale=_color_scale(genres, settings.palette)
            ),
            size=size,
            opacity=alt.condition(hover, alt.value(1.0), alt.value(0.7)),
            tooltip=tooltip,
        )
        .add_params(hover)
    )
    if by_genre:
        labels = (
            alt.Chart(alt.Data(values=rows))
            .mark_text(dy=-12, fontSize=10, color="#444")
            .encode(x=x, y=y, text="genre:N")
        )
        ch = alt.layer(ch, labels)
    ch = ch.properties(width=settings.width, height=settings.scatter_height)
    if title:
        ch = ch.properties(title=title)
    return _apply_chart_defaults(ch)


def critics_vs_audience_chart(
    points: Sequence[CriticPoint],
    trends: Sequence[GenreTrend],
    settings: ViewSettings,
    *,
    r: float | None = None,
) -> alt.TopLevelMixin:
    """Metascore vs IMDB rating, colored by primary genre, with per-genre OLS trend lines.

    ``r`` (overall Pearson correlation) is shown in the subtitle when given.
    """
    if not points:
        return empty_chart("No movies with both scores.", width=settings.width)

    rows = [
        {"title": p.title, "genre": p.genre, "meta": p.meta_score, "imdb": p.imdb_rating}
        for p in points
    ]
    genres = sorted({p.genre for p in points})
    color = alt.Color(
        "genre:N", title="Primary genre", scale=_color_scale(genres, settings.palette)
    )
    x_dom = nice_domain(*(extent(p.meta_score for p in points) or (0.0, 100.0)))
    y_dom = nice_domain(*(extent(p.imdb_rating for p in points) or (1.0, 10.0)))
    x = alt.X("meta:Q", title="Metascore (critics)", scale=alt.Scale(domain=list(x_dom)))
    y = alt.Y("imdb:Q", title="IMDB rating (audiences)", scale=alt.Scale(domain=list(y_dom)))

    hover = alt.selection_point(
        name="critic_hover", on="pointerover", clear="pointerout", nearest=True, empty=False
    )
    genre_pick = alt.selection_point(name="genre_pick", fields=["genre"], bind="legend")
    dots = (
        alt.Chart(alt.Data(values=rows))
        .mark_circle(size=45)
        .encode(
            x=x,
            y=y,
            color=color,
            opacity=alt.condition(genre_pick, alt.value(0.8), alt.value(0.1)),
            size=alt.condition(hover, alt.value(140), alt.value(45)),
            tooltip=[
                alt.Tooltip("title:N", title="Title"),
                alt.Tooltip("genre:N", title="Genre"),
                alt.Tooltip("meta:Q", title="Metascore"),
                alt.Tooltip("imdb:Q", title="IMDB"),
            ],
        )
        .add_params(hover, genre_pick)
    )
    layers: list[alt.Chart] = [dots]
    if trends:
        line_rows = [
            {"genre": t.genre, "meta": xv, "imdb": t.regression.predict(xv), "n": t.count}
            for t in trends
            for xv in (t.x_min, t.x_max)
        ]
        layers.append(
            alt.Chart(alt.Data(values=line_rows))
            .mark_line(strokeWidth=2)
            .encode(
                x=x,
                y=y,
                color=color,
                detail="genre:N",
                opacity=alt.condition(genre_pick, alt.value(0.9), alt.value(0.05)),
                tooltip=[alt.Tooltip("genre:N", title="Trend"), alt.Tooltip("n:Q", title="Movies")],
            )
        )

    subtitle = f"n = {len(points)}"
    if r is not None:
        subtitle = f"Pearson r = {r:.3f}, {subtitle}"
    ch = alt.layer(*layers).properties(
        width=settings.width,
        height=settings.scatter_height,
        title=alt.TitleParams("Critics vs audiences", subtitle=subtitle),
    )
    return _apply_chart_defaults(ch)


# ----------------------------
# Diverging bars (mean gap by category)
# ----------------------------


@dataclass(frozen=True)
class BarStyle:
    """
    Encoding switches for the diverging bar chart.

    Attributes:
        show_count (bool): Append "(n=...)" to value labels.
        outline (bool): Stroke around each bar.
        opacity_by_count (bool): Fill opacity grows with sample size.
        bold_large_gaps (bool): Bold labels where ``|gap| >= large_gap_threshold``.
        bold_single_counts (bool): Bold value labels of single-movie categories.
        highlight_zero (bool): Prominent zero line and direction labels on the axis.
        color_by_magnitude (bool): Green/yellow/red by ``|gap|`` instead of direction.
    """

    show_count: bool = True
    outline: bool = False
    opacity_by_count: bool = False
    bold_large_gaps: bool = False
    bold_single_counts: bool = False
    highlight_zero: bool = False
    color_by_magnitude: bool = False


HONEST_STYLE = BarStyle(
    show_count=True,
    outline=True,
    opacity_by_count=True,
    bold_single_counts=True,
    highlight_zero=True,
)
DECEPTIVE_STYLE = BarStyle(show_count=False, bold_large_gaps=True, color_by_magnitude=True)


def bar_opacity(count: int, cap: float) -> float:
    """``0.4 + 0.6 * clamp(count / cap, 0, 1)``."""
    t = max(0.0, min(1.0, count / cap)) if cap > 0 else 1.0
    return 0.4 + 0.6 * t


def magnitude_color(gap: float) -> str:
    a = abs(gap)
    if a < 2:
        return _MAGNITUDE_GREEN
    if a < 4:
        return _MAGNITUDE_YELLOW
    return _MAGNITUDE_RED


def gap_label(gap: float, count: int, show_count: bool) -> str:
    """Signed one-decimal label, e.g. ``"+3.2 (n=14)"``."""
    text = f"{'+' if gap >= 0 else ''}{gap:.1f}"
    return f"{text} (n={count})" if show_count else text


def _label_layers(
    rows: list[dict[str, Any]], x: str, text: str, bold_field: str, dx: float
) -> list[alt.Chart]:
    # One text layer per (side, weight): align and fontWeight are mark properties.
    out: list[alt.Chart] = []
    for negative in (False, True):
        for bold in (False, True):
            part = [r for r in rows if (r["gap"] < 0) == negative and r[bold_field] == bold]
            if not part:
                continue
            # Value labels sit outside the bar end; category labels sit on the other side
            # of zero from the bar.
            outward = negative if x == "gap" else not negative
            out.append(
                alt.Chart(alt.Data(values=part))
                .mark_text(
                    align="right" if outward else "left",
                    dx=-dx if outward else dx,
                    fontSize=11,
                    fontWeight="bold" if bold else "normal",
                )
                .encode(
                    x=alt.X(f"{x}:Q", axis=None),
                    y=alt.Y("category:N", sort=[r["category"] for r in rows], axis=None),
                    text=f"{text}:N",
                )
            )
    return out


def diverging_bar_chart(
    gaps: Sequence[CategoryGap],
    settings: ViewSettings,
    *,
    style: BarStyle = HONEST_STYLE,
    label_a: str = "Audiences higher",
    label_b: str = "Critics higher",
    title: str | None = None,
) -> alt.TopLevelMixin:
    """
    Horizontal bars of mean gap per category around a zero line, in the given order.

    Opacity by count saturates at ``settings.opacity_count_cap``, or at the largest count
    when the cap is None.
    """
    if not gaps:
        return empty_chart("No categories with both scores.", width=settings.width)

    cap = settings.opacity_count_cap or max(g.count for g in gaps)
    threshold = settings.large_gap_threshold
    rows: list[dict[str, Any]] = []
    for g in gaps:
        if style.color_by_magnitude:
            fill = magnitude_color(g.mean_gap)
        else:
            fill = settings.positive_color if g.mean_gap > 0 else settings.negative_color
        large = style.bold_large_gaps and abs(g.mean_gap) >= threshold
        rows.append(
            {
                "category": g.category,
                "gap": g.mean_gap,
                "zero": 0.0,
                "count": g.count,
                "fill": fill,
                "opacity": bar_opacity(g.count, cap) if style.opacity_by_count else 1.0,
                "label": gap_label(g.mean_gap, g.count, style.show_count),
                "value_bold": large
                or (style.bold_single_counts and style.show_count and g.count == 1),
                "category_bold": large,
            }
        )

    order = [r["category"] for r in rows]
    lo, hi = zero_inclusive_domain((r["gap"] for r in rows), pad=1.0)
    axis_title = f"← {label_b}  |  {label_a} →" if style.highlight_zero else "Mean gap"
    bar_kwargs: dict[str, Any] = {}
    if style.outline:
        bar_kwargs = {"stroke": "#333", "strokeWidth": 1, "strokeOpacity": 0.4}

    tooltip = [
        alt.Tooltip("category:N", title="Category"),
        alt.Tooltip("gap:Q", title="Mean gap", format="+.1f"),
    ]
    if style.show_count:
        tooltip.append(alt.Tooltip("count:Q", title="Movies"))

    bars = (
        alt.Chart(alt.Data(values=rows))
        .mark_bar(**bar_kwargs)
        .encode(
            x=alt.X(
                "gap:Q",
                title=axis_title,
                scale=alt.Scale(domain=[lo, hi]),
                axis=alt.Axis(orient="top", labelExpr="(datum.value > 0 ? '+' : '') + datum.label"),
            ),
            x2=alt.X2("zero:Q"),
            y=alt.Y("category:N", sort=order, axis=None, scale=alt.Scale(paddingInner=0.1)),
            color=alt.Color("fill:N", scale=None, legend=None),
            opacity=alt.Opacity("opacity:Q", scale=None, legend=None),
            tooltip=tooltip,
        )
    )
    zero = (
        alt.Chart(alt.Data(values=[{"zero": 0.0}]))
        .mark_rule(
            color="#333",
            strokeWidth=2 if style.highlight_zero else 1,
            strokeOpacity=0.5 if style.highlight_zero else 0.3,
        )
        .encode(x=alt.X("zero:Q", axis=None))
    )
    layers = [
        bars,
        zero,
        *_label_layers(rows, "gap", "label", "value_bold", 4),
        *_label_layers(rows, "zero", "category", "category_bold", 6),
    ]
    ch = alt.layer(*layers).properties(
        width=settings.width, height=max(len(rows), 1) * settings.bar_row_height
    )
    if title:
        ch = ch.properties(title=title)
    return _apply_chart_defaults(ch)


# ----------------------------
# Yearly disagreement band
# ----------------------------


def disagreement_band_chart(
    years: Sequence[YearGap],
    settings: ViewSettings,
    *,
    label_a: str = "Audiences (IMDB, rescaled)",
    label_b: str = "Critics (Metascore)",
) -> alt.TopLevelMixin:
    """Step bands from the yearly midline to each yearly mean, plus the three step lines."""
    if not years:
        return empty_chart("No years with both scores.", width=settings.width)

    rows = [
        {
            "year": y.year,
            "a": y.mean_a,
            "b": y.mean_b,
            "avg": y.mean_avg,
            "gap": y.mean_gap,
            "count": y.count,
        }
        for y in years
    ]
    lo = min(min(min(r["a"], r["b"]) for r in rows), 0.0)
    hi = max(max(max(r["a"], r["b"]) for r in rows), 100.0)
    base = alt.Chart(alt.Data(values=rows)).encode(
        x=alt.X("year:Q", title="Year", axis=alt.Axis(format="d"), scale=alt.Scale(zero=False))
    )

    def score(field: str) -> alt.Y:
        return alt.Y(f"{field}:Q", title="↑ Score (0–100)", scale=alt.Scale(domain=[lo, hi]))

    y = score("avg")

    band_a = base.mark_area(interpolate="step", opacity=0.4, color=settings.audience_color).encode(
        y=y, y2=alt.Y2("a:Q")
    )
    band_b = base.mark_area(interpolate="step", opacity=0.4, color=settings.critic_color).encode(
        y=y, y2=alt.Y2("b:Q")
    )
    mid = base.mark_line(interpolate="step", color="black", strokeWidth=1.5).encode(y=y)
    line_a = base.mark_line(
        interpolate="step", color=settings.audience_color, strokeWidth=1.5
    ).encode(y=score("a"))
    line_b = base.mark_line(
        interpolate="step", color=settings.critic_color, strokeWidth=1.5, strokeDash=[4, 3]
    ).encode(y=score("b"))

    hover = alt.selection_point(
        name="band_hover",
        nearest=True,
        on="pointerover",
        clear="pointerout",
        fields=["year"],
        empty=False,
    )
    dots = (
        base.mark_circle(color="black", stroke="white", strokeWidth=1)
        .encode(
            y=y,
            size=alt.condition(hover, alt.value(90), alt.value(25)),
            tooltip=[
                alt.Tooltip("year:Q", title="Year", format="d"),
                alt.Tooltip("a:Q", title=label_a, format=".1f"),
                alt.Tooltip("b:Q", title=label_b, format=".1f"),
                alt.Tooltip("gap:Q", title="Gap", format="+.1f"),
                alt.Tooltip("count:Q", title="Movies"),
            ],
        )
        .add_params(hover)
    )
    ch = alt.layer(band_a, band_b, mid, line_a, line_b, dots).properties(
        width=settings.width, height=settings.band_height
    )
    return _apply_chart_defaults(ch)


# ----------------------------
# Correlation heatmap
# ----------------------------


def correlation_heatmap(matrix: CorrelationMatrix, settings: ViewSettings) -> alt.TopLevelMixin:
    """Diverging heatmap of r in [-1, 1] with values printed in each cell."""
    if not matrix.columns:
        return empty_chart("No numeric columns to correlate.", width=settings.width)

    rows = [{"row": a, "col": b, "r": v} for a, b, v in matrix.cells()]
    order = list(matrix.columns)
    side = max(min(settings.width, 36 * len(order)), 200)
    base = alt.Chart(alt.Data(values=rows)).encode(
        x=alt.X("col:N", sort=order, title=None, axis=alt.Axis(labelAngle=-45)),
        y=alt.Y("row:N", sort=order, title=None),
    )
    cells = base.mark_rect().encode(
        color=alt.Color(
            "r:Q",
            title="r",
            scale=alt.Scale(scheme="redblue", domain=[-1, 1], reverse=True),
        ),
        tooltip=[
            alt.Tooltip("row:N", title="Row"),
            alt.Tooltip("col:N", title="Column"),
            alt.Tooltip("r:Q", format=".3f"),
        ],
    )
    text = base.mark_text(fontSize=9).encode(
        text=alt.Text("r:Q", format=".2f"),
        color=alt.condition("abs(datum.r) > 0.6", alt.value("white"), alt.value("#222")),
    )
    ch = alt.layer(cells, text).properties(width=side, height=side)
    return _apply_chart_defaults(ch)


# ----------------------------
# Chord diagram
# ----------------------------


def _feature(polygon: Sequence[Point], props: dict[str, Any]) -> dict[str, Any]:
    return {
        "type": "Feature",
        "geometry": {"type": "Polygon", "coordinates": [[list(p) for p in polygon]]},
        "properties": {},
        **props,
    }


def chord_chart(
    layout: ChordLayout,
    settings: ViewSettings,
    *,
    ribbon_props: dict[str, tuple[float, float]] | None = None,
    arc_props: dict[str, tuple[float, float]] | None = None,
    label_min_span: float = 0.035,
    title: str | None = None,
) -> alt.TopLevelMixin:
    """
    Render a chord layout: arcs, ribbons and arc labels.

    Geometry is drawn as GeoJSON polygons in pixel coordinates under an identity
    projection centered on the canvas.

    Args:
        layout: Output of chord_layout.
        settings: Canvas size and resting ribbon opacity.
        ribbon_props: Edge key -> (opacity, stroke width); resting opacity when absent.
        arc_props: Arc label -> (opacity, stroke width).
        label_min_span: Arcs narrower than this (radians) are left unlabeled.
        title: Optional chart title.
    """
    size = settings.chord_size
    if layout.is_empty():
        return empty_chart("No connections at this threshold.", width=size, height=size)

    ribbon_props = ribbon_props or {}
    arc_props = arc_props or {}
    half = size / 2
    projection = {"type": "identity", "scale": 1, "translate": [half, half]}

    ribbon_rows = []
    for rb in layout.ribbons:
        opacity, stroke = ribbon_props.get(rb.key, (settings.ribbon_opacity, 0.0))
        ribbon_rows.append(
            _feature(
                rb.polygon,
                {
                    "source": rb.source,
                    "target": rb.target,
                    "key": rb.key,
                    "weight": rb.weight,
                    "color": rb.color,
                    "opacity": opacity,
                    "stroke_width": stroke,
                },
            )
        )
    arc_rows = []
    for arc in layout.arcs:
        opacity, stroke = arc_props.get(arc.label, (1.0, 0.0))
        arc_rows.append(
            _feature(
                arc.polygon,
                {
                    "label": arc.label,
                    "weight": arc.weight,
                    "color": arc.color,
                    "opacity": opacity,
                    "stroke_width": stroke,
                },
            )
        )

    click = alt.selection_point(name=RIBBON_PARAM, fields=["source", "target"], on="click")
    hover = alt.selection_point(
        name="ribbon_hover", fields=["key"], on="pointerover", clear="pointerout", empty=False
    )
    ribbons = (
        alt.Chart(alt.Data(values=ribbon_rows))
        .mark_geoshape(stroke="#333", cursor="pointer")
        .encode(
            color=alt.Color("color:N", scale=None, legend=None),
            opacity=alt.condition(
                hover, alt.value(0.95), alt.Opacity("opacity:Q", scale=None, legend=None)
            ),
            strokeWidth=alt.condition(
                hover, alt.value(1.5), alt.StrokeWidth("stroke_width:Q", scale=None, legend=None)
            ),
            tooltip=[
                alt.Tooltip("source:N", title="Star"),
                alt.Tooltip("target:N", title="Co-star"),
                alt.Tooltip("weight:Q", title="Movies together"),
            ],
        )
        .add_params(click, hover)
        .project(**projection)
    )
    arcs = (
        alt.Chart(alt.Data(values=arc_rows))
        .mark_geoshape(stroke="white")
        .encode(
            color=alt.Color("color:N", scale=None, legend=None),
            opacity=alt.Opacity("opacity:Q", scale=None, legend=None),
            strokeWidth=alt.StrokeWidth("stroke_width:Q", scale=None, legend=None),
            tooltip=[
                alt.Tooltip("label:N", title="Star"),
                alt.Tooltip("weight:Q", title="Connections"),
            ],
        )
        .project(**projection)
    )

    layers: list[alt.Chart] = [ribbons, arcs]
    label_r = layout.radius + 6
    for right in (True, False):
        labels = [
            {
                "label": a.label,
                "x": label_r * math.sin(a.mid_angle),
                "y": -label_r * math.cos(a.mid_angle),
            }
            for a in layout.arcs
            if a.span >= label_min_span and (math.sin(a.mid_angle) >= 0) == right
        ]
        if not labels:
            continue
        layers.append(
            alt.Chart(alt.Data(values=labels))
            .mark_text(align="left" if right else "right", fontSize=10, baseline="middle")
            .encode(
                x=alt.X("x:Q", scale=alt.Scale(domain=[-half, half]), axis=None),
                y=alt.Y("y:Q", scale=alt.Scale(domain=[half, -half]), axis=None),
                text="label:N",
            )
        )

    ch = alt.layer(*layers).properties(width=size, height=size)
    if title:
        ch = ch.properties(title=title)
    return _apply_chart_defaults(ch)
