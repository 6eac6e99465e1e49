from __future__ import annotations

from pathlib import Path

import pytest

from marquee.config import ViewSettings
from marquee.core.errors import ConfigError

ENV_KEYS = [
    "MARQUEE_DATA_PATH",
    "MARQUEE_CHORD_SIZE",
    "MARQUEE_RIBBON_OPACITY",
    "MARQUEE_PALETTE",
    "MARQUEE_OPACITY_COUNT_CAP",
    "MARQUEE_YEAR_MIN",
]


def _clear_env(monkeypatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def _write_marquee_toml(tmp: Path, content: str) -> Path:
    p = tmp / "marquee.toml"
    p.write_text(content)
    return p


def test_view_settings_precedence_env_over_toml(tmp_path: Path, monkeypatch) -> None:
    _write_marquee_toml(
        tmp_path,
        """
        [view]
        data_path = "toml.csv"
        chord_size = 480
        ribbon_opacity = 0.5
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)
    monkeypatch.setenv("MARQUEE_DATA_PATH", "env.csv")
    monkeypatch.setenv("MARQUEE_CHORD_SIZE", "640")

    s = ViewSettings.load()

    assert s.data_path == "env.csv"
    assert s.chord_size == 640  # env override
    assert s.ribbon_opacity == 0.5  # from TOML


def test_view_settings_from_pyproject_when_no_marquee_toml(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "pyproject.toml").write_text(
        """
        [tool.marquee.view]
        palette = ["#000000", "#ffffff"]
        opacity_count_cap = 50
        """.strip()
    )
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    s = ViewSettings.load()

    assert s.palette == ("#000000", "#ffffff")
    assert s.opacity_count_cap == 50


def test_env_palette_and_auto_cap(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)
    monkeypatch.setenv("MARQUEE_PALETTE", "#111111, #222222")
    monkeypatch.setenv("MARQUEE_OPACITY_COUNT_CAP", "none")

    s = ViewSettings.load()

    assert s.palette == ("#111111", "#222222")
    assert s.opacity_count_cap is None


def test_invalid_values_are_ignored(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)
    monkeypatch.setenv("MARQUEE_CHORD_SIZE", "huge")

    assert ViewSettings.load().chord_size == ViewSettings().chord_size


def test_defaults_when_no_config(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    s = ViewSettings.load()

    assert s == ViewSettings()
    assert s.validate() is s
    assert s.chord_radius < s.chord_size / 2


@pytest.mark.parametrize(
    "overrides",
    [
        {"chord_size": 0},
        {"ribbon_opacity": 1.5},
        {"chord_inner_ratio": 1.0},
        {"palette": ()},
        {"year_min": 2021, "year_max": 2000},
        {"opacity_count_cap": 0},
    ],
)
def test_validate_rejects_out_of_range(overrides) -> None:
    with pytest.raises(ConfigError):
        ViewSettings(**overrides).validate()
