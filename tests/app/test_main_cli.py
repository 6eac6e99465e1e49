from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

from app import main as app_main


def test_main_renders_inline(monkeypatch, tmp_path) -> None:
    called = {}

    def fake_streamlit_app(*, default_data=None):
        called["default_data"] = default_data

    monkeypatch.setenv("STREAMLIT_SERVER_PORT", "1")
    # Patch the imported symbol used inside app.main (not the package attribute)
    monkeypatch.setattr(app_main, "streamlit_app", fake_streamlit_app, raising=True)

    csv = str(tmp_path / "movies.csv")
    app_main.main(["--data", csv])

    assert called["default_data"] == csv


def test_main_execs_streamlit(monkeypatch, tmp_path) -> None:
    # Ensure not in Streamlit context
    monkeypatch.delenv("STREAMLIT_SERVER_PORT", raising=False)

    captured = {}

    def fake_execv(exe: str, cmd: list[str]) -> None:
        captured["exe"] = exe
        captured["cmd"] = cmd
        # Prevent process handoff
        raise SystemExit

    monkeypatch.setattr(os, "execv", fake_execv, raising=True)

    csv = str(tmp_path / "movies.csv")
    with pytest.raises(SystemExit):
        app_main.main(["--data", csv])

    assert captured["cmd"][0] == captured["exe"]
    assert captured["cmd"][1:4] == ["-m", "streamlit", "run"]
    expected_main_path = str(Path(app_main.__file__).resolve())
    assert captured["cmd"][4] == expected_main_path
    dashdash_idx = captured["cmd"].index("--")
    assert captured["cmd"][dashdash_idx + 1 :] == ["--data", csv]


def test_main_without_data_passes_nothing_through(monkeypatch) -> None:
    monkeypatch.delenv("STREAMLIT_SERVER_PORT", raising=False)
    captured = {}

    def fake_execv(exe: str, cmd: list[str]) -> None:
        captured["cmd"] = cmd
        raise SystemExit

    monkeypatch.setattr(os, "execv", fake_execv, raising=True)
    with pytest.raises(SystemExit):
        app_main.main([])
    assert "--" not in captured["cmd"]


def test_configure_logging_reads_level(monkeypatch) -> None:
    seen = {}

    def fake_basic_config(**kwargs):
        seen.update(kwargs)

    monkeypatch.setattr(logging, "basicConfig", fake_basic_config)
    monkeypatch.setenv("MARQUEE_LOG_LEVEL", "debug")
    app_main.configure_logging()
    assert seen["level"] == logging.DEBUG

    monkeypatch.setenv("MARQUEE_LOG_LEVEL", "chatty")
    app_main.configure_logging()
    assert seen["level"] == logging.WARNING
