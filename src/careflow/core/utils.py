"""Utility functions shared by the scoring and planning modules."""

from __future__ import annotations

import math
from collections.abc import Mapping
from types import MappingProxyType
from typing import TypeVar


V = TypeVar("V")


def normalize_key(value: object) -> str:
    """Normalize a categorical value for table lookup.

    Lookups are case- and whitespace-insensitive so that ``"public transit"``
    and ``"Public Transit "`` resolve to the same entry.
    """
    if value is None:
        return ""
    return " ".join(str(value).split()).casefold()


def lookup_table(entries: Mapping[str, V]) -> Mapping[str, V]:
    """Build an immutable lookup table keyed by normalized names."""
    return MappingProxyType({normalize_key(k): v for k, v in entries.items()})


def lookup(table: Mapping[str, V], key: object, default: V) -> V:
    """Return ``table[key]`` after normalization, or ``default`` when absent.

    Args:
        table: Table produced by :func:`lookup_table`.
        key: Raw categorical value (may be ``None``).
        default: Value used for missing or unrecognized keys.

    Returns:
        The table entry or the default.
    """
    return table.get(normalize_key(key), default)


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(value, upper))


def round1(value: float) -> float:
    """Round to one decimal place, halves toward positive infinity."""
    return math.floor(value * 10 + 0.5) / 10


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + 0.5)
