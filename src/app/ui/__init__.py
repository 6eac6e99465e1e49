"""
Marquee UI package.

Decomposed Streamlit UI for the movie explorer.

Modules:
    - app: Streamlit application orchestrator (streamlit_app) and the chart tabs.
    - header: Global header (dataset path, cache preferences).
    - linked: Co-star chord diagram linked to the poster gallery.
    - helpers: Small cross-cutting helpers (formatting, metric choices, summary rows).

Usage:
    from app.ui import streamlit_app
    streamlit_app(default_data="data/imdb_top_1000.csv")
"""

from __future__ import annotations

from .app import streamlit_app
from .header import render_header

__all__ = [
    "streamlit_app",
    "render_header",
]
