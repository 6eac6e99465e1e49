"""
marquee — Linked statistical views over the IMDB top 1000 movie dataset.

## Responsibilities
- Convert raw CSV rows into typed, immutable movie records once, at the load boundary.
- Aggregate records into chart-ready structures (summaries, correlations, grouped series,
  co-occurrence matrices, audience/critic disagreement).
- Lay out chord diagrams and build Altair charts from those structures.
- Hold the single cross-view selection state and derive every linked view from it.

## Public API
- core — constants, errors, parsing helpers, statistical primitives, typed records.
- analysis — pure aggregation functions over typed records (Polars-first).
- viz — scales, chord layout, chart builders and gallery helpers.
- selection — the linked selection controller and derived views.
- config — ViewSettings (env > TOML > defaults).

## Import DAG discipline
- core depends on stdlib + pydantic only.
- analysis depends on core and polars.
- viz depends on core, analysis and altair.
- selection depends on core and analysis.
- Nothing under marquee imports streamlit; the shell lives in the top-level `app` package.

## Examples
```python
from marquee.core.records import load_dataset
from marquee.analysis.cooccurrence import co_occurrence, year_range

ds = load_dataset(rows, columns)  # doctest: +SKIP
co = co_occurrence(ds.records, year_range(2000, 2020), min_edge_weight=2)  # doctest: +SKIP
```
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
