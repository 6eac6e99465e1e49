"""
Header (global controls) for the marquee Streamlit application.

This module renders the top-of-page controls:
- Dataset path input, prefilled from the CLI argument or ViewSettings.data_path.
- Reload button that drops cached loaders.
- Cache preferences panel and construction of the CacheConfig used by data loaders.

Notes:
    - Performs no IO itself beyond a file-existence check for the caption.
"""

from __future__ import annotations

from pathlib import Path

import streamlit as st

from app.data import CacheConfig


def render_header(*, default_data: str) -> tuple[str, CacheConfig]:
    """Render the global header and return the dataset path and cache config.

    Args:
        default_data (str): Initial dataset path for the session.

    Returns:
        tuple[str, CacheConfig]: (dataset_path, cache_config)
    """
    st.markdown("### Marquee: IMDB top 1000")

    # Session defaults
    if "data_path" not in st.session_state:
        st.session_state["data_path"] = default_data
    if "cache_ttl" not in st.session_state:
        st.session_state["cache_ttl"] = 600
    if "cache_persist" not in st.session_state:
        st.session_state["cache_persist"] = False

    c1, c2, c3 = st.columns([0.62, 0.18, 0.20])

    with c1:
        data_path = st.text_input(
            "Dataset (CSV)",
            value=st.session_state["data_path"],
            key="data_path_header",
        )
        if data_path and Path(data_path).exists():
            st.caption(f"{Path(data_path).stat().st_size / 1024:.0f} KiB")
        else:
            st.caption("File not found; enter the path of imdb_top_1000.csv.")

    with c2:
        if st.button("Reload"):
            st.cache_data.clear()
            st.rerun()

    with c3:
        with st.expander("Cache", expanded=False):
            ttl = st.number_input(
                "Cache TTL (seconds)",
                min_value=0,
                value=int(st.session_state["cache_ttl"]),
                step=60,
                help="0 disables TTL",
                key="cache_ttl_header",
            )
            persist = st.checkbox(
                "Persist to disk",
                value=bool(st.session_state["cache_persist"]),
                key="cache_persist_header",
            )
            st.session_state["cache_ttl"] = int(ttl)
            st.session_state["cache_persist"] = bool(persist)

    st.session_state["data_path"] = data_path

    cache_cfg = CacheConfig(
        ttl=int(st.session_state["cache_ttl"]) if int(st.session_state["cache_ttl"]) > 0 else None,
        persist=bool(st.session_state["cache_persist"]),
    )
    return (data_path, cache_cfg)
