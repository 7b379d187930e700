"""Behavioral pattern detection over completed sessions.

Detects the training split, exercises the athlete habitually pairs, and the
weekdays they tend to train on. Patterns are recomputed from scratch on every
call and never persisted here.
"""

from __future__ import annotations

import re
from collections import Counter
from itertools import combinations
from typing import Iterable, Sequence

from adaptive_coach.models.enums import (
    BODY_PART_SPLIT_MIN_PARTS,
    DAY_MAX_RESULTS,
    DAY_MIN_SHARE,
    MIN_SESSIONS_FOR_DAY_PATTERN,
    MIN_SESSIONS_FOR_PAIRINGS,
    MIN_SESSIONS_FOR_PATTERNS,
    MIN_SESSIONS_FOR_SPLIT_PATTERN,
    PAIRING_MAX_RESULTS,
    PAIRING_MIN_CO_OCCURRENCE,
    PAIRING_MIN_RATE,
    SPLIT_MIN_CONFIDENCE,
    SPLIT_RECENT_SESSIONS,
    SPLIT_TOP_FOCUSES,
    PatternType,
    SplitType,
)
from adaptive_coach.models.history import CompletedSession, DetectedPattern

WEEKDAY_NAMES = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)

BODY_PARTS = ("chest", "back", "shoulder", "arm", "leg")

SPLIT_NAMES: dict[SplitType, str] = {
    SplitType.PUSH_PULL_LEGS: "Push/Pull/Legs",
    SplitType.UPPER_LOWER: "Upper/Lower",
    SplitType.BODY_PART: "Body Part Split",
    SplitType.FULL_BODY: "Full Body",
    SplitType.CUSTOM: "Custom Split",
}

_PARENTHETICAL = re.compile(r"\s*\([^)]*\)\s*")
_SEPARATOR = re.compile(r"\s*[+&]\s*")


def normalize_focus(focus: str | None) -> str:
    """Lower-case a focus label, drop parentheticals and unify separators."""
    text = _PARENTHETICAL.sub(" ", (focus or "").lower())
    text = _SEPARATOR.sub(" + ", text)
    return " ".join(text.split())


def classify_split(focuses: Sequence[str]) -> tuple[SplitType, list[str]] | None:
    """Label a set of normalized focus labels with a split, in priority order.

    Returns the split type and its component day names, or None when there
    is nothing to label.
    """
    focuses = [f for f in focuses if f]

    def any_has(*words: str) -> bool:
        return any(word in f for f in focuses for word in words)

    if any_has("push") and any_has("pull") and any_has("leg"):
        return SplitType.PUSH_PULL_LEGS, ["Push", "Pull", "Legs"]

    if any_has("upper") and any_has("lower"):
        return SplitType.UPPER_LOWER, ["Upper", "Lower"]

    parts = [part for part in BODY_PARTS if any_has(part)]
    if len(parts) >= BODY_PART_SPLIT_MIN_PARTS:
        return SplitType.BODY_PART, [part.capitalize() for part in parts]

    if any_has("full body", "fullbody"):
        return SplitType.FULL_BODY, ["Full Body"]

    if len(focuses) >= 2:
        return SplitType.CUSTOM, [f.capitalize() for f in focuses[:4]]

    return None


def completed_sessions(sessions: Iterable[CompletedSession]) -> list[CompletedSession]:
    """Completed sessions only, most recent first (ties broken by id)."""
    done = [s for s in sessions if s.date_completed is not None]
    return sorted(done, key=lambda s: (s.date_completed, s.id), reverse=True)


def estimate_days_per_week(sessions: Sequence[CompletedSession]) -> float:
    """Sessions per week across the span of the given history, to one decimal."""
    done = completed_sessions(sessions)
    if len(done) < 2:
        return 0.0
    span_days = max(1, (done[0].date_completed - done[-1].date_completed).days)
    return round(len(done) / (span_days / 7), 1)


def detect_training_split(sessions: Sequence[CompletedSession]) -> DetectedPattern | None:
    done = completed_sessions(sessions)
    if len(done) < MIN_SESSIONS_FOR_SPLIT_PATTERN:
        return None

    recent = done[:SPLIT_RECENT_SESSIONS]
    focus_counts = Counter(normalize_focus(s.focus) for s in recent)
    focus_counts.pop("", None)
    top = sorted(focus_counts.items(), key=lambda item: (-item[1], item[0]))[:SPLIT_TOP_FOCUSES]

    split = classify_split([focus for focus, _count in top])
    if split is None:
        return None
    split_type, splits = split

    confidence = min(1.0, sum(count for _focus, count in top) / len(recent))
    if confidence < SPLIT_MIN_CONFIDENCE:
        return None

    name = SPLIT_NAMES[split_type]
    days_per_week = estimate_days_per_week(done)
    return DetectedPattern(
        type=PatternType.TRAINING_SPLIT,
        name=name,
        confidence=confidence,
        description=f"You train {name} approximately {days_per_week} days/week",
        data={
            "split_type": split_type.name,
            "splits": splits,
            "days_per_week": days_per_week,
            "focus_distribution": dict(focus_counts),
        },
    )


def detect_exercise_pairings(sessions: Sequence[CompletedSession]) -> list[DetectedPattern]:
    done = completed_sessions(sessions)
    if len(done) < MIN_SESSIONS_FOR_PAIRINGS:
        return []

    appearances: Counter[str] = Counter()
    pair_counts: Counter[tuple[str, str]] = Counter()
    for session in done:
        names = sorted(set(session.exercise_names))
        appearances.update(names)
        pair_counts.update(combinations(names, 2))

    patterns: list[DetectedPattern] = []
    for (first, second), count in pair_counts.items():
        if count < PAIRING_MIN_CO_OCCURRENCE:
            continue
        rate = count / min(appearances[first], appearances[second])
        if rate < PAIRING_MIN_RATE:
            continue
        patterns.append(
            DetectedPattern(
                type=PatternType.EXERCISE_PAIRING,
                name=f"{first} + {second}",
                confidence=min(1.0, rate),
                description=f"You typically pair {first} with {second}",
                data={
                    "exercises": [first, second],
                    "co_occurrence": count,
                    "co_occurrence_rate": rate,
                },
            )
        )

    patterns.sort(key=lambda pattern: (-pattern.confidence, pattern.name))
    return patterns[:PAIRING_MAX_RESULTS]


def detect_training_days(sessions: Sequence[CompletedSession]) -> DetectedPattern | None:
    done = completed_sessions(sessions)
    if len(done) < MIN_SESSIONS_FOR_DAY_PATTERN:
        return None

    total = len(done)
    day_counts = Counter(s.date_completed.weekday() for s in done)
    ranked = sorted(day_counts.items(), key=lambda item: (-item[1], item[0]))
    frequent = [(day, count) for day, count in ranked if count / total >= DAY_MIN_SHARE]
    if not frequent:
        return None

    top = frequent[:DAY_MAX_RESULTS]
    preferred = [WEEKDAY_NAMES[day] for day, _count in top]
    return DetectedPattern(
        type=PatternType.TRAINING_DAY,
        name="Training Schedule",
        confidence=sum(count for _day, count in top) / total,
        description=f"You typically train on {', '.join(preferred)}",
        data={
            "preferred_days": preferred,
            "day_distribution": {
                WEEKDAY_NAMES[day]: count for day, count in sorted(day_counts.items())
            },
        },
    )


def detect_all_patterns(sessions: Iterable[CompletedSession]) -> list[DetectedPattern]:
    """Run every detector. Fewer than four completed sessions yields nothing."""
    done = completed_sessions(sessions)
    if len(done) < MIN_SESSIONS_FOR_PATTERNS:
        return []

    patterns: list[DetectedPattern] = []
    split = detect_training_split(done)
    if split is not None:
        patterns.append(split)
    patterns.extend(detect_exercise_pairings(done))
    days = detect_training_days(done)
    if days is not None:
        patterns.append(days)
    return patterns


def matches_pattern(session: CompletedSession, pattern: DetectedPattern) -> bool:
    """True when *session*'s focus belongs to a detected split."""
    if pattern.type != PatternType.TRAINING_SPLIT:
        return False
    focus = normalize_focus(session.focus)
    return any(split.lower() in focus for split in pattern.data.get("splits", []))


def pattern_stability(
    pattern: DetectedPattern, sessions: Sequence[CompletedSession], window: int = 12
) -> float:
    """Share of the most recent *window* sessions that follow *pattern*."""
    recent = completed_sessions(sessions)[:window]
    if not recent:
        return 0.0
    return sum(matches_pattern(s, pattern) for s in recent) / len(recent)


def should_offer_structure(
    pattern: DetectedPattern, sessions: Sequence[CompletedSession]
) -> bool:
    """Whether a freestyle split is stable enough to offer as a formal program."""
    if pattern.type != PatternType.TRAINING_SPLIT or pattern.confidence < 0.7:
        return False
    return (
        len(completed_sessions(sessions)) >= 8
        and pattern_stability(pattern, sessions) >= 0.6
    )
