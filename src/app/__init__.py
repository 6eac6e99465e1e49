"""
Top-level Streamlit app package.

This package hosts the interactive movie explorer (Streamlit), decoupled from the
marquee.* library modules. Parsing, aggregation, layout and chart building live under
marquee.*; the Streamlit UI shell, caching and widget state live here.

CLI entrypoint (configured in pyproject.toml):
    marquee-app = app.main:main
"""

from __future__ import annotations
