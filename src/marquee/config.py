"""
Configuration for marquee views.

Defines ViewSettings, a frozen dataclass carrying canvas sizes, palettes and default filter
values. Chart builders receive it explicitly; nothing reads palettes or sizes from module
state.

Source of truth
- marquee.core.constants.TABLEAU10, the default categorical palette.

Import DAG discipline
- Depends only on stdlib and marquee.core.
- Does not import higher layers (analysis, viz, selection, app).

Notes
- Precedence: environment (MARQUEE_*) > TOML > defaults.
- Loose mappings are coerced field by field; values that fail to coerce are ignored and
  the previous value is kept. Call ``validate()`` to reject out-of-range values.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from marquee.core.constants import TABLEAU10
from marquee.core.errors import ConfigError

__all__ = ["ViewSettings"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewSettings:
    """
    Runtime settings for the chart views.

    Attributes:
        data_path (str): CSV consumed by the Streamlit shell.
        width (int): Default chart width in pixels.
        line_height (int): Height of the yearly line chart.
        scatter_height (int): Height of scatter charts.
        band_height (int): Height of the yearly disagreement band chart.
        bar_row_height (int): Pixels per category row in diverging bar charts.
        chord_size (int): Width and height of the chord diagram canvas.
        chord_padding (float): Angular gap between chord arcs, in radians.
        chord_inner_ratio (float): Inner arc radius as a fraction of the outer radius.
        ribbon_opacity (float): Resting opacity of chord ribbons.
        palette (tuple[str, ...]): Categorical palette for series, genres and chord nodes.
        positive_color (str): Bars where the first value exceeds the second.
        negative_color (str): Bars where the second value exceeds the first.
        audience_color (str): Audience (IMDB) band color.
        critic_color (str): Critic (Metascore) band color.
        opacity_count_cap (int | None): Sample count at which bar opacity saturates.
            None uses the largest observed count.
        large_gap_threshold (float): Absolute mean gap at which bar labels turn bold.
        year_min (int): Default lower bound of the year range filter.
        year_max (int): Default upper bound of the year range filter.
        min_edge_weight (int): Default minimum co-occurrence weight.

    Examples:
        >>> ViewSettings(chord_size=600).chord_size
        600
    """

    data_path: str = "data/imdb_top_1000.csv"
    width: int = 700
    line_height: int = 380
    scatter_height: int = 420
    band_height: int = 380
    bar_row_height: int = 22
    chord_size: int = 560
    chord_padding: float = 0.04
    chord_inner_ratio: float = 0.92
    ribbon_opacity: float = 0.65
    palette: tuple[str, ...] = TABLEAU10
    positive_color: str = "#3182bd"
    negative_color: str = "#e34a33"
    audience_color: str = "#e6550d"
    critic_color: str = "#3182bd"
    opacity_count_cap: int | None = 100
    large_gap_threshold: float = 3.0
    year_min: int = 2000
    year_max: int = 2020
    min_edge_weight: int = 1

    @property
    def chord_radius(self) -> float:
        """Outer arc radius: half the canvas less room for star labels."""
        return max(self.chord_size / 2 - 90, self.chord_size / 4)

    def validate(self) -> ViewSettings:
        """Return self when every value is in range.

        Raises:
            ConfigError: On non-positive sizes, an inverted year range, opacities outside
                [0, 1] or an empty palette.
        """
        for name in (
            "width",
            "line_height",
            "scatter_height",
            "band_height",
            "bar_row_height",
            "chord_size",
            "min_edge_weight",
        ):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive, got {getattr(self, name)!r}")
        if self.chord_padding < 0:
            raise ConfigError(f"chord_padding must be >= 0, got {self.chord_padding!r}")
        if not 0 < self.chord_inner_ratio < 1:
            raise ConfigError(
                f"chord_inner_ratio must be in (0, 1), got {self.chord_inner_ratio!r}"
            )
        if not 0 <= self.ribbon_opacity <= 1:
            raise ConfigError(f"ribbon_opacity must be in [0, 1], got {self.ribbon_opacity!r}")
        if not self.palette:
            raise ConfigError("palette must not be empty")
        if self.opacity_count_cap is not None and self.opacity_count_cap <= 0:
            raise ConfigError(
                f"opacity_count_cap must be positive or unset, got {self.opacity_count_cap!r}"
            )
        if self.year_min > self.year_max:
            raise ConfigError(f"year_min {self.year_min} is after year_max {self.year_max}")
        return self

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(cls, base: ViewSettings, cfg: dict[str, Any] | None) -> ViewSettings:
        """Apply a loose config mapping onto ViewSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base
        for f in fields(cls):
            if f.name not in cfg:
                continue
            raw = cfg[f.name]
            try:
                value = _coerce(f.name, raw)
            except (TypeError, ValueError):
                logger.warning("Ignoring invalid setting %s=%r", f.name, raw)
                continue
            s = replace(s, **{f.name: value})
        return s

    @classmethod
    def from_env(cls, base: ViewSettings | None = None, prefix: str = "MARQUEE_") -> ViewSettings:
        """
        Build ViewSettings from environment variables. Precedence is env > base (if provided) > defaults.

        Every field maps to ``prefix + FIELD_NAME.upper()``, e.g. MARQUEE_CHORD_SIZE or
        MARQUEE_DATA_PATH. MARQUEE_PALETTE is a comma-separated list of colors and
        MARQUEE_OPACITY_COUNT_CAP accepts "none" for the data-driven cap.
        """
        s = base or cls()
        mapping: dict[str, Any] = {}
        for f in fields(cls):
            v = os.getenv(prefix + f.name.upper())
            if v:
                mapping[f.name] = v
        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> ViewSettings:
        """
        Build ViewSettings from a TOML file.

        Search order when `path` is None:
            1) ./marquee.toml (with either a [view] table or direct keys)
            2) ./pyproject.toml under [tool.marquee.view]

        Returns defaults if no file is present.
        """
        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "marquee.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        for p in cand:
            if not p.exists():
                continue
            try:
                with p.open("rb") as fh:
                    data = tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError) as e:
                logger.warning("Skipping unreadable config %s: %s", p, e)
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("marquee", {}).get("view") if isinstance(tool, dict) else None
            elif isinstance(data.get("view"), dict):
                cfg = data["view"]
            else:
                cfg = data
            if cfg:
                logger.debug("Loaded view settings from %s", p)
                break

        return cls._apply_mapping(cls(), cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> ViewSettings:
        """
        Load ViewSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults (marquee.toml, pyproject.toml).

        Returns:
            ViewSettings
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s


_INT_FIELDS = {
    "width",
    "line_height",
    "scatter_height",
    "band_height",
    "bar_row_height",
    "chord_size",
    "year_min",
    "year_max",
    "min_edge_weight",
}
_FLOAT_FIELDS = {"chord_padding", "chord_inner_ratio", "ribbon_opacity", "large_gap_threshold"}


def _coerce(name: str, raw: Any) -> Any:
    if name in _INT_FIELDS:
        if isinstance(raw, bool):
            raise TypeError(name)
        return int(raw)
    if name in _FLOAT_FIELDS:
        if isinstance(raw, bool):
            raise TypeError(name)
        return float(raw)
    if name == "opacity_count_cap":
        if raw is None or (isinstance(raw, str) and raw.strip().lower() in {"", "none", "auto"}):
            return None
        return int(raw)
    if name == "palette":
        if isinstance(raw, str):
            items = [c.strip() for c in raw.split(",") if c.strip()]
        elif isinstance(raw, (list, tuple)):
            items = [str(c).strip() for c in raw if str(c).strip()]
        else:
            raise TypeError(name)
        if not items:
            raise ValueError(name)
        return tuple(items)
    if not isinstance(raw, str):
        raise TypeError(name)
    return raw
