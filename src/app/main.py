"""
Marquee app entrypoint.

This module provides the CLI entrypoint to launch the Streamlit UI. It defers
all UI composition to the app.ui package and exists solely to start Streamlit
programmatically or render directly when already running under Streamlit.

Usage:
    - Python execution (hands process to Streamlit):
        python -m app.main --data data/imdb_top_1000.csv

    - Streamlit direct:
        streamlit run src/app/main.py -- --data data/imdb_top_1000.csv

Logging:
    MARQUEE_LOG_LEVEL (e.g. DEBUG) sets the root log level; WARNING by default.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from app.ui import streamlit_app


def configure_logging() -> None:
    """Configure root logging from MARQUEE_LOG_LEVEL (unknown names fall back to WARNING)."""
    name = os.environ.get("MARQUEE_LOG_LEVEL", "WARNING").upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> None:
    """Console entrypoint that launches Streamlit with the marquee UI.

    If already executing within a Streamlit server (environment variable
    STREAMLIT_SERVER_PORT is set), this function renders the app directly.
    Otherwise, it execs "python -m streamlit run <this_module>" to leverage
    Streamlit's reloader, passing the dataset path through after "--".

    Args:
        argv (list[str] | None): Optional list of CLI arguments. If None,
            sys.argv[1:] is used.

    Examples:
        python -m app.main --data data/imdb_top_1000.csv
        streamlit run src/app/main.py -- --data data/imdb_top_1000.csv
    """
    args = list(sys.argv[1:] if argv is None else argv)

    parser = argparse.ArgumentParser(description="Marquee Streamlit App")
    parser.add_argument(
        "--data",
        default=None,
        help="Movie CSV (defaults to view.data_path from marquee.toml or MARQUEE_DATA_PATH).",
    )
    ns = parser.parse_args(args)

    # If invoked within Streamlit, just render
    if os.environ.get("STREAMLIT_SERVER_PORT"):
        configure_logging()
        streamlit_app(default_data=ns.data)
        return

    # Otherwise, exec streamlit run on this module to take over the process
    app_path = Path(__file__).resolve()
    cmd = [sys.executable, "-m", "streamlit", "run", str(app_path)]
    if ns.data:
        cmd += ["--", "--data", ns.data]

    os.execv(sys.executable, cmd)


if __name__ == "__main__":
    # Support: --data after '--' when using `streamlit run`
    configure_logging()
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("--data", default=None)
    ns, _ = parser.parse_known_args(sys.argv[1:])
    streamlit_app(default_data=ns.data)
