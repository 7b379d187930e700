"""Deterministic intent parser.

parse_intent() tries an ordered dispatch table of matchers. Each matcher
either returns the payload for its intent type or None, and the first
payload wins. Nothing here raises: text that no matcher claims becomes a
CHAT intent tagged with a lexicon sentiment.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from adaptive_coach.intent import patterns as p
from adaptive_coach.intent.lexicon import (
    LOWER_BACK_PART,
    NEGATIVE_WORDS,
    NOT_BODY_PARTS,
    POSITIVE_WORDS,
    constraint_for,
    find_activity,
    find_exercise,
    normalize_exercise_name,
    title_case,
)
from adaptive_coach.models.enums import IntentType, ModificationKind, Sentiment
from adaptive_coach.models.intent import (
    AddExercisePayload,
    ChatPayload,
    Intent,
    IntentPayload,
    LogCardioPayload,
    LogWorkoutPayload,
    ModifySessionPayload,
    SkipExercisePayload,
)

logger = logging.getLogger(__name__)

UNKNOWN_EXERCISE = "Unknown Exercise"
DEFAULT_WEIGHT_UNIT = "lbs"


# ---------------------------------------------------------------------------
# Workout log
# ---------------------------------------------------------------------------

def _capture_name(words: list[str]) -> str | None:
    picked: list[str] = []
    for word in words:
        lowered = word.lower()
        if lowered in p.NAME_STOP_WORDS:
            break
        if lowered in p.NAME_FILLER_WORDS and not picked:
            continue
        picked.append(lowered)
        if len(picked) == p.NAME_MAX_WORDS:
            break
    if not picked:
        return None
    return normalize_exercise_name(" ".join(picked))


def _name_around(text: str, start: int, end: int) -> str | None:
    """Free-text exercise name after the sets×reps token, else just before it."""
    after = _capture_name(p.WORD.findall(text[end:]))
    if after is not None:
        return after
    before = [w for w in p.WORD.findall(text[:start]) if w.lower() not in p.NAME_FILLER_WORDS]
    return _capture_name(before[-p.NAME_MAX_WORDS:])


def _find_weight(text: str, allow_bare: bool) -> tuple[float | None, str]:
    for pattern, unit in p.WEIGHT:
        if unit is not None:
            match = pattern.search(text)
            if match:
                return float(match.group(1)), unit
            continue
        if not allow_bare:
            continue
        for match in pattern.finditer(text):
            value = float(match.group(1))
            # "@8" is an RPE, not a weight
            if match.group(0).startswith("@") and value <= p.RPE_MAX:
                continue
            return value, DEFAULT_WEIGHT_UNIT
    return None, DEFAULT_WEIGHT_UNIT


def _find_rpe(text: str) -> float | None:
    for pattern in p.RPE:
        match = pattern.search(text)
        if match:
            value = float(match.group(1))
            if 0 < value <= p.RPE_MAX:
                return value
    return None


def match_workout_log(text: str) -> LogWorkoutPayload | None:
    """Strength log: needs sets×reps or a weight."""
    if p.ADD_VERB.search(text):
        return None

    sets = reps = None
    span: tuple[int, int] | None = None
    for pattern in p.SETS_REPS:
        match = pattern.search(text)
        if match:
            sets, reps = int(match.group(1)), int(match.group(2))
            span = match.span()
            break

    exercise = find_exercise(text)
    rpe = _find_rpe(text)
    # A unit-less "at 135" only reads as a weight alongside other strength cues
    weight, unit = _find_weight(text, allow_bare=exercise is not None or span is not None)

    if weight is None or reps is None:
        for_reps = p.WEIGHT_FOR_REPS.search(text)
        if for_reps and (exercise is not None or weight is not None):
            weight = weight if weight is not None else float(for_reps.group(1))
            reps = reps if reps is not None else int(for_reps.group(2))

    if not ((sets and reps) or weight):
        return None

    if exercise is None and span is not None:
        exercise = _name_around(text, *span)

    return LogWorkoutPayload(
        exercise=exercise or UNKNOWN_EXERCISE,
        sets=sets,
        reps=reps,
        weight=weight,
        weight_unit=unit,
        rpe=rpe,
    )


def _score_workout(payload: LogWorkoutPayload) -> float:
    confidence = 0.5
    if payload.exercise != UNKNOWN_EXERCISE:
        confidence += 0.2
    if payload.sets and payload.reps:
        confidence += 0.15
    if payload.weight is not None:
        confidence += 0.15
    return min(confidence, 1.0)


# ---------------------------------------------------------------------------
# Cardio log
# ---------------------------------------------------------------------------

def _find_duration(text: str) -> float | None:
    clock = p.DURATION_CLOCK.search(text)
    if clock:
        return int(clock.group(1)) + int(clock.group(2)) / 60
    for pattern, minutes_per_unit in p.DURATION:
        match = pattern.search(text)
        if match:
            return float(match.group(1)) * minutes_per_unit
    return None


def match_cardio_log(text: str) -> LogCardioPayload | None:
    """Cardio log: activity verb plus a distance or a duration."""
    activity = find_activity(text)
    if activity is None:
        return None

    distance = unit = None
    for pattern, pattern_unit in p.DISTANCE:
        match = pattern.search(text)
        if match:
            distance, unit = float(match.group(1)), pattern_unit
            break

    duration = _find_duration(text)
    if not distance and not duration:
        return None

    return LogCardioPayload(
        activity=activity,
        distance=distance,
        distance_unit=unit,
        duration_min=round(duration, 2) if duration else None,
    )


def _score_cardio(payload: LogCardioPayload) -> float:
    confidence = 0.6
    if payload.distance:
        confidence += 0.2
    if payload.duration_min:
        confidence += 0.2
    return min(confidence, 1.0)


# ---------------------------------------------------------------------------
# Add / skip a named exercise
# ---------------------------------------------------------------------------

def match_add_exercise(text: str) -> AddExercisePayload | None:
    match = p.ADD_EXERCISE.match(text)
    if match is None:
        return None
    # "add another set" and "add more weight" are modifications
    if any(pattern.search(text) for pattern in p.ADD_SET + p.TOO_EASY):
        return None

    rest = match.group("rest")
    sets = reps = None
    for pattern in p.SETS_REPS:
        counts = pattern.search(rest)
        if counts:
            sets, reps = int(counts.group(1)), int(counts.group(2))
            rest = rest[: counts.start()] + " " + rest[counts.end():]
            break
    else:
        sets_only = p.SETS_ONLY.search(rest)
        if sets_only:
            sets = int(sets_only.group(1))
            rest = rest[: sets_only.start()] + " " + rest[sets_only.end():]

    exercise = find_exercise(rest) or _capture_name(p.WORD.findall(rest))
    if exercise is None:
        return None
    return AddExercisePayload(exercise=exercise, sets=sets, reps=reps)


def match_skip_named(text: str) -> SkipExercisePayload | None:
    match = p.SKIP_NAMED.search(text)
    if match is None:
        return None
    rest = " ".join(match.group("rest").lower().split())
    if not rest or rest in p.SKIP_FILLER:
        return None
    exercise = find_exercise(rest)
    if exercise is None:
        words = rest.split()[: p.NAME_MAX_WORDS]
        exercise = title_case(" ".join(words))
    return SkipExercisePayload(exercise=exercise)


# ---------------------------------------------------------------------------
# Session modification
# ---------------------------------------------------------------------------

def _match_pain(text: str) -> ModifySessionPayload | None:
    for pattern in p.PAIN:
        for match in pattern.finditer(text):
            part = match.group(1).lower()
            if part in NOT_BODY_PARTS or part.isdigit():
                continue
            if part == "back" and p.LOWER_BACK.search(text):
                part = LOWER_BACK_PART
            return ModifySessionPayload(
                intent=ModificationKind.PAIN,
                reason=f"User reported {part.replace('_', ' ')} pain",
                body_part=part,
                constraint=constraint_for(part),
            )
    return None


def _match_time_crunch(text: str) -> ModifySessionPayload | None:
    if not any(pattern.search(text) for pattern in p.TIME_CRUNCH):
        return None
    minutes = p.AVAILABLE_MINUTES.search(text)
    return ModifySessionPayload(
        intent=ModificationKind.TIME_CRUNCH,
        reason="User is short on time",
        available_minutes=int(minutes.group(1)) if minutes else None,
    )


def _family(
    family: tuple[re.Pattern[str], ...], kind: ModificationKind, reason: str
) -> Callable[[str], ModifySessionPayload | None]:
    def matcher(text: str) -> ModifySessionPayload | None:
        if any(pattern.search(text) for pattern in family):
            return ModifySessionPayload(intent=kind, reason=reason)
        return None

    return matcher


_MODIFICATION_MATCHERS: tuple[Callable[[str], ModifySessionPayload | None], ...] = (
    _match_pain,
    _match_time_crunch,
    _family(p.FATIGUE, ModificationKind.FATIGUE, "User is fatigued"),
    _family(p.TOO_EASY, ModificationKind.TOO_EASY, "User finds exercise too easy"),
    _family(p.TOO_HARD, ModificationKind.TOO_HARD, "User finds exercise too hard"),
    _family(p.ADD_SET, ModificationKind.ADD_SET, "User wants another set"),
    _family(p.SKIP, ModificationKind.SKIP_EXERCISE, "User wants to skip exercise"),
)


def match_modification(text: str) -> ModifySessionPayload | None:
    for matcher in _MODIFICATION_MATCHERS:
        payload = matcher(text)
        if payload is not None:
            return payload
    return None


def _score_modification(payload: ModifySessionPayload) -> float:
    return 0.9 if payload.intent == ModificationKind.PAIN else 0.75


# ---------------------------------------------------------------------------
# Chat fallback
# ---------------------------------------------------------------------------

def analyze_sentiment(text: str) -> Sentiment:
    if POSITIVE_WORDS.search(text):
        return Sentiment.POSITIVE
    if NEGATIVE_WORDS.search(text):
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


def match_chat(text: str) -> ChatPayload:
    return ChatPayload(message=text, sentiment=analyze_sentiment(text))


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

# (intent type, matcher, confidence scorer), tried in order
DISPATCH: tuple[tuple[IntentType, Callable, Callable], ...] = (
    (IntentType.LOG_WORKOUT, match_workout_log, _score_workout),
    (IntentType.LOG_CARDIO, match_cardio_log, _score_cardio),
    (IntentType.ADD_EXERCISE, match_add_exercise, lambda _payload: 0.8),
    (IntentType.SKIP_EXERCISE, match_skip_named, lambda _payload: 0.8),
    (IntentType.MODIFY_SESSION, match_modification, _score_modification),
    (IntentType.CHAT, match_chat, lambda _payload: 0.3),
)


def parse_intent(utterance: str | None) -> Intent:
    """Parse one athlete utterance into a structured Intent.

    Args:
        utterance: Raw text as typed or dictated. None is treated as empty.

    Returns:
        The first intent whose matcher claims the text. Empty input yields a
        CHAT intent with confidence 0.
    """
    raw = utterance or ""
    text = raw.strip()
    if not text:
        return Intent(
            type=IntentType.CHAT,
            payload=ChatPayload(message="", sentiment=Sentiment.NEUTRAL),
            confidence=0.0,
            raw_input=raw,
        )

    for intent_type, matcher, scorer in DISPATCH:
        payload = matcher(text)
        if payload is not None:
            intent = Intent(
                type=intent_type,
                payload=payload,
                confidence=scorer(payload),
                raw_input=raw,
            )
            logger.debug("Parsed %r as %s (%.2f)", text, intent_type.name, intent.confidence)
            return intent

    # match_chat always claims the text; kept for type checkers
    return Intent(IntentType.CHAT, match_chat(text), 0.3, raw)


def to_modification_kind(
    payload: IntentPayload | Intent | None,
) -> ModificationKind | None:
    """Map a parsed payload to the engine's modification kind, if it has one.

    Modification payloads map to their own kind and a named-exercise skip maps
    to SKIP_EXERCISE. Every other payload maps to None.
    """
    if isinstance(payload, Intent):
        payload = payload.payload
    if isinstance(payload, ModifySessionPayload):
        return payload.intent
    if isinstance(payload, SkipExercisePayload):
        return ModificationKind.SKIP_EXERCISE
    return None
