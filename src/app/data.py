from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import polars as pl
import streamlit as st

from marquee.core.records import MovieDataset, load_dataset

__all__ = [
    "CacheConfig",
    "read_movie_rows",
    "load_movies",
    "year_bounds",
]

logger = logging.getLogger(__name__)

# ---------- Cache configuration (factory of cached callables) ----------


@dataclass(frozen=True)
class CacheConfig:
    """Hashable cache configuration for Streamlit @st.cache_data.

    Note: Streamlit's decorator parameters (ttl, persist) are fixed at decoration
    time. Decorated callables are built and memoized per (name, ttl, persist) so the
    header can switch these at runtime.
    """

    ttl: int | None = None
    persist: bool = False


_CACHE_REGISTRY: dict[tuple[str, CacheConfig], Callable[..., Any]] = {}


def _get_cached(loader_name: str, cfg: CacheConfig, fn: Callable[..., Any]) -> Callable[..., Any]:
    key = (loader_name, cfg)
    if key in _CACHE_REGISTRY:
        return _CACHE_REGISTRY[key]
    if cfg.persist:
        wrapped = st.cache_data(persist="disk", ttl=cfg.ttl)(fn)
    else:
        wrapped = st.cache_data(ttl=cfg.ttl)(fn)
    _CACHE_REGISTRY[key] = wrapped
    return wrapped


# ---------- Loaders (internal implementations) ----------


def read_movie_rows(path: str) -> tuple[list[dict[str, str]], list[str]]:
    """Read the movie CSV as raw strings.

    Every column is read as text (no schema inference) and nulls become empty strings,
    so typing happens once, in MovieRecord.from_raw.

    Returns:
        tuple[list[dict[str, str]], list[str]]: (rows, header columns in file order)

    Raises:
        FileNotFoundError: If ``path`` does not exist.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Required file not found: {p}")
    df = pl.read_csv(p, infer_schema=False)
    df = df.fill_null("")
    logger.debug("Read %d rows x %d columns from %s", df.height, df.width, p)
    return df.to_dicts(), list(df.columns)


def _load_movies_impl(path: str) -> MovieDataset:
    rows, columns = read_movie_rows(path)
    return load_dataset(rows, columns)


# ---------- Public loader APIs (dispatch to cached implementations) ----------


def load_movies(path: str, *, cfg: CacheConfig = CacheConfig()) -> MovieDataset:
    """Load and validate the dataset at ``path`` through the Streamlit cache.

    Raises:
        FileNotFoundError: If the CSV is missing.
        RecordError: If a row fails validation.
    """
    fn = _get_cached("load_movies", cfg, _load_movies_impl)
    return fn(path)  # type: ignore[no-any-return]


# ---------- Year bounds ----------


def year_bounds(dataset: MovieDataset) -> tuple[int, int]:
    """Smallest and largest release year in the dataset, or (0, 0) when none is known."""
    years = [r.year for r in dataset.records if r.year is not None]
    if not years:
        return (0, 0)
    return (min(years), max(years))
