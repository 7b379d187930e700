"""Structured intents produced by the intent parser.

``Intent.payload`` is a closed sum: each IntentType has exactly one payload
class, listed in PAYLOAD_TYPES.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from adaptive_coach.models.enums import IntentType, ModificationKind, Sentiment


@dataclass(frozen=True)
class LogWorkoutPayload:
    exercise: str
    sets: int | None = None
    reps: int | None = None
    weight: float | None = None
    weight_unit: str = "lbs"
    rpe: float | None = None


@dataclass(frozen=True)
class LogCardioPayload:
    activity: str
    distance: float | None = None
    distance_unit: str | None = None  # "km", "mi" or "m"
    duration_min: float | None = None


@dataclass(frozen=True)
class ModifySessionPayload:
    intent: ModificationKind
    reason: str = ""
    body_part: str | None = None
    constraint: str | None = None  # machine-actionable, e.g. "no_knee_flexion"
    available_minutes: int | None = None


@dataclass(frozen=True)
class AddExercisePayload:
    exercise: str
    sets: int | None = None
    reps: int | None = None


@dataclass(frozen=True)
class SkipExercisePayload:
    exercise: str


@dataclass(frozen=True)
class ChatPayload:
    message: str
    sentiment: Sentiment = Sentiment.NEUTRAL


IntentPayload = Union[
    LogWorkoutPayload,
    LogCardioPayload,
    ModifySessionPayload,
    AddExercisePayload,
    SkipExercisePayload,
    ChatPayload,
]

PAYLOAD_TYPES: dict[IntentType, type] = {
    IntentType.LOG_WORKOUT: LogWorkoutPayload,
    IntentType.LOG_CARDIO: LogCardioPayload,
    IntentType.MODIFY_SESSION: ModifySessionPayload,
    IntentType.ADD_EXERCISE: AddExercisePayload,
    IntentType.SKIP_EXERCISE: SkipExercisePayload,
    IntentType.CHAT: ChatPayload,
}


@dataclass(frozen=True)
class Intent:
    """A parsed utterance: tag, payload, relative confidence and the raw text."""

    type: IntentType
    payload: IntentPayload
    confidence: float
    raw_input: str
