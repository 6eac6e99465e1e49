"""
Exception types raised at the boundaries of marquee.

Provides typed exceptions for the only places the pipeline can fail:
- RecordError when a raw row cannot become a typed MovieRecord at the load boundary.
- ConfigError when ViewSettings carry invalid or unsupported values.

Notes:
    - Aggregation, layout and selection code never raises on data. Missing values are
      excluded and degenerate statistics return documented sentinels instead.
    - This module uses only the Python standard library and has no side effects.

Examples:
    Catch a load boundary failure.

    >>> from marquee.core.errors import RecordError
    >>> try:
    ...     raise RecordError("row 3: Series_Title must not be empty", row_index=3)
    ... except RecordError as e:
    ...     e.row_index
    3
"""

from __future__ import annotations

__all__ = [
    "MarqueeError",
    "RecordError",
    "ConfigError",
]


class MarqueeError(Exception):
    """Base class for marquee errors."""


class RecordError(MarqueeError, ValueError):
    """
    Raised when a raw row fails validation at the load boundary.

    Attributes:
        row_index (int | None): Zero-based index of the offending row, when known.
    """

    def __init__(self, message: str, *, row_index: int | None = None) -> None:
        super().__init__(message)
        self.row_index = row_index


class ConfigError(MarqueeError, ValueError):
    """
    Raised when view configuration is invalid.

    Examples:
        - Non-positive canvas sizes
        - Negative chord padding or ribbon opacity outside [0, 1]
    """
