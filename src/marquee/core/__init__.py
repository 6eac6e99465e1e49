"""
Core package aggregator for marquee contracts (columns, parsing, typed records, statistics).

## Contracts (single source of truth)
- Constants — canonical column names, flag naming convention, palettes.
- Parsing — total coercion helpers from raw strings to typed values.
- Records — frozen pydantic `MovieRecord`, column catalog, `MovieDataset`, `load_dataset`.
- Stats — covariance, Pearson correlation, OLS regression, mean/median.
- Errors — `RecordError` (load boundary) and `ConfigError` (settings).

## Notes
- Zero-IO policy: stdlib + pydantic only; no file/network IO.
- Parsing happens once, at `load_dataset`; downstream code reads typed fields.

## Downstream usage
- marquee.analysis — aggregates `MovieRecord` sequences into chart-ready structures.
- marquee.viz / marquee.selection — consume analysis outputs and record lookups.
- app — loads the CSV and hands raw rows to `load_dataset`.

## Examples
```python
from marquee.core import load_dataset
ds = load_dataset([
    {"Series_Title": "Heat", "Released_Year": "1995", "Genre": "Crime, Drama", "Runtime": "170 min"},
])
ds.records[0].runtime  # 170.0
ds.columns  # ('Series_Title', 'Released_Year', 'Genre', 'Runtime', 'isCrime', 'isDrama')
```
"""

from __future__ import annotations

from .errors import ConfigError, MarqueeError, RecordError
from .records import (
    COLUMN_CATALOG,
    ColumnDescriptor,
    ColumnKind,
    MovieDataset,
    MovieRecord,
    column_kind,
    describe_column,
    load_dataset,
    numeric_value,
    record_value,
)
from .stats import Regression, covariance, linear_regression, mean, median, pearson

__all__ = [
    "MarqueeError",
    "RecordError",
    "ConfigError",
    "COLUMN_CATALOG",
    "ColumnDescriptor",
    "ColumnKind",
    "MovieDataset",
    "MovieRecord",
    "column_kind",
    "describe_column",
    "load_dataset",
    "numeric_value",
    "record_value",
    "Regression",
    "covariance",
    "linear_regression",
    "mean",
    "median",
    "pearson",
]
