"""
Parsing and coercion helpers for raw dataset strings.

Every helper is total: malformed or empty input yields ``None`` (or an empty list) rather
than raising, and callers exclude ``None`` values from aggregates. The helpers are
applied once, at the load boundary (see marquee.core.records).

Examples:
    >>> parse_duration("142 min")
    142.0
    >>> parse_grouped_number("1,234,567")
    1234567.0
    >>> split_multi_value("Crime, Drama,, ")
    ['Crime', 'Drama']
    >>> flag_column_name("Sci-Fi")
    'isScifi'
"""

from __future__ import annotations

import math
import re

from .constants import ALL_SERIES_KEY, FLAG_PREFIX

__all__ = [
    "parse_duration",
    "parse_grouped_number",
    "parse_number",
    "parse_year",
    "split_multi_value",
    "flag_column_name",
    "is_flag_column",
    "flag_display_name",
]

_DURATION_RE = re.compile(r"^(\d+)\s*[a-z]+", re.IGNORECASE)
_NON_WORD_RE = re.compile(r"\W")
_WHITESPACE_RE = re.compile(r"\s+")


def parse_number(text: str | None) -> float | None:
    """Parse a plain decimal number; None for empty, non-numeric or non-finite input."""
    if text is None:
        return None
    s = text.strip()
    if not s:
        return None
    try:
        value = float(s)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_duration(text: str | None) -> float | None:
    """Parse a leading integer followed by a unit token, e.g. ``"142 min"``.

    Args:
        text (str | None): Raw field value.

    Returns:
        float | None: The leading integer as a float, without rounding or unit
        conversion, or None when the input is empty or does not match.
    """
    if not text:
        return None
    m = _DURATION_RE.match(text.strip())
    return float(m.group(1)) if m else None


def parse_grouped_number(text: str | None) -> float | None:
    """Parse a number that may carry ``,`` digit-group separators (``"28,341,469"``)."""
    if not text:
        return None
    return parse_number(text.replace(",", ""))


def parse_year(text: str | None) -> int | None:
    """Parse an integral year; None for empty, fractional or non-numeric input."""
    value = parse_number(text)
    if value is None or not value.is_integer():
        return None
    return int(value)


def split_multi_value(text: str | None, delimiter: str = ",") -> list[str]:
    """Split a delimiter-separated field into trimmed, non-empty tokens.

    Order and duplicates are preserved; deduplication is left to the aggregation layer.
    """
    if not text:
        return []
    return [tok.strip() for tok in text.split(delimiter) if tok.strip()]


def flag_column_name(label: str) -> str:
    """Turn a genre label into its boolean flag column name.

    Words are capitalized, joined, and stripped of non-word characters:
    ``"Sci-Fi" -> "isScifi"``, ``"film noir" -> "isFilmNoir"``.
    """
    words = _WHITESPACE_RE.sub(" ", label.strip()).split(" ")
    cleaned = "".join(w[:1].upper() + w[1:].lower() for w in words if w)
    return FLAG_PREFIX + _NON_WORD_RE.sub("", cleaned)


def is_flag_column(name: str) -> bool:
    """Return True when ``name`` follows the derived flag naming convention."""
    return name.startswith(FLAG_PREFIX) and len(name) > len(FLAG_PREFIX)


def flag_display_name(key: str) -> str:
    """Human label for a series key: ``"isDrama" -> "Drama"``; ``"All"`` is kept."""
    if key == ALL_SERIES_KEY:
        return key
    base = key[len(FLAG_PREFIX) :] if key.startswith(FLAG_PREFIX) else key
    return base[:1].upper() + base[1:]
