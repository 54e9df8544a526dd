"""Geographic proximity scoring between ZIP codes."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeAlias


DistanceFunction: TypeAlias = Callable[[str | None, str | None], float]
"""Maps ``(patient_zip, appointment_zip)`` to a 0-10 proximity score (10 = closest)."""

UNKNOWN_DISTANCE_SCORE = 5.0

# Leading digits shared -> score. USPS ZIPs are hierarchical: the first digit is
# the national area, the first three the sectional center.
PREFIX_SCORES: dict[int, float] = {4: 9.0, 3: 7.0, 2: 5.0, 1: 3.0, 0: 1.0}


def shared_prefix_length(first: str, second: str) -> int:
    count = 0
    for a, b in zip(first, second):
        if a != b:
            break
        count += 1
    return count


def zip_prefix_distance(patient_zip: str | None, appointment_zip: str | None) -> float:
    """Score proximity by the number of matching leading ZIP digits."""
    if not patient_zip or not appointment_zip:
        return UNKNOWN_DISTANCE_SCORE
    p_zip, a_zip = str(patient_zip).strip(), str(appointment_zip).strip()
    if not p_zip or not a_zip:
        return UNKNOWN_DISTANCE_SCORE
    if p_zip == a_zip:
        return 10.0
    return PREFIX_SCORES[min(shared_prefix_length(p_zip, a_zip), 4)]
