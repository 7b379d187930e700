"""Load arithmetic: plate rounding, percentage adjustment and estimated 1RM.

References:
    - Epley (1985): e1RM = weight × (1 + reps / 30)
"""

from __future__ import annotations

import math

from adaptive_coach.models.enums import LOAD_INCREMENT


def round_to_increment(load: float, increment: float = LOAD_INCREMENT) -> float:
    """Round *load* to the nearest plate increment, halves rounding up.

    Python's round() rounds halves to even, which would send 3.75 down to 2.5;
    floor(x + 0.5) keeps the familiar gym rounding.
    """
    return math.floor(load / increment + 0.5) * increment


def adjust_load(
    load: float | None,
    multiplier: float,
    increment: float = LOAD_INCREMENT,
    strict: bool = False,
) -> float | None:
    """Scale *load* and snap it to the nearest increment.

    On light loads a small percentage rounds back to the starting value.
    That is fine for the set-by-set ladder, but an explicit "too hard" or
    "too easy" must change the load, so ``strict`` forces the result at
    least one increment away from *load* in the multiplier's direction.
    Loads never go below zero.

    Args:
        load: Current load. None or 0 are returned unchanged.
        multiplier: Scale factor, e.g. 1.05 for +5%.
        increment: Plate increment to snap to.
        strict: Require the load to move when the multiplier is not 1.

    Returns:
        The adjusted load, or the original value when there is nothing to scale.
    """
    if not load:
        return load

    adjusted = round_to_increment(load * multiplier, increment)
    if strict and multiplier > 1 and adjusted <= load:
        adjusted = round_to_increment(load, increment) + increment
        if adjusted <= load:
            adjusted += increment
    elif strict and multiplier < 1 and adjusted >= load:
        adjusted = round_to_increment(load, increment) - increment
        if adjusted >= load:
            adjusted -= increment
    return max(0.0, adjusted)


def estimate_e1rm(weight: float | None, reps: int | None) -> float | None:
    """Epley estimated one-rep max, or None without a positive weight and reps."""
    if not weight or not reps or weight <= 0 or reps <= 0:
        return None
    return weight * (1 + reps / 30)
