"""Compound-lift recognition by exercise name."""

from __future__ import annotations

import re

# Multi-joint lifts, matched anywhere in the exercise name
COMPOUND_PATTERNS: tuple[str, ...] = (
    "squat",
    "deadlift",
    "bench press",
    "overhead press",
    "military press",
    "press",
    "row",
    "pull-up",
    "pullup",
    "pull up",
    "chin-up",
    "chinup",
    "chin up",
    "clean",
    "snatch",
    "lunge",
    "dip",
)

_COMPOUND_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(p) for p in COMPOUND_PATTERNS) + r")",
    re.IGNORECASE,
)


def is_compound_lift(name: str) -> bool:
    """True when *name* contains a compound-lift keyword at a word start.

    Keywords are matched at word starts so "Squats" and "Barbell Rows" count
    but "Narrow Grip Curl" does not.
    """
    return bool(_COMPOUND_RE.search(name or ""))
