"""Session-start volume policy chosen from the readiness score.

At most one policy applies per session. The table is ordered; the first row
whose predicate holds wins and everything else means NONE.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Callable

from adaptive_coach.math.loading import adjust_load
from adaptive_coach.models.enums import (
    CHALLENGE_DEFAULT_REPS,
    CHALLENGE_LOAD_MULTIPLIER,
    CHALLENGE_REP_REDUCTION,
    CHALLENGE_TARGET_RPE,
    READINESS_FATIGUE_THRESHOLD,
    READINESS_PEAK_THRESHOLD,
    ReadinessPolicy,
    SetStatus,
)
from adaptive_coach.models.session import SessionExercise, SessionSet
from adaptive_coach.rules.compound import is_compound_lift


@dataclass(frozen=True)
class PolicyRow:
    policy: ReadinessPolicy
    predicate: Callable[[float], bool]


READINESS_POLICIES: tuple[PolicyRow, ...] = (
    PolicyRow(ReadinessPolicy.FATIGUE, lambda score: score < READINESS_FATIGUE_THRESHOLD),
    PolicyRow(ReadinessPolicy.PEAK, lambda score: score > READINESS_PEAK_THRESHOLD),
)

_MESSAGES: dict[ReadinessPolicy, str] = {
    ReadinessPolicy.NONE: "Session initialized. Let's get to work.",
    ReadinessPolicy.FATIGUE: (
        "Fatigue mode: recovery is low today, so I've dropped the last set from "
        "{count} exercise(s) to keep you moving without digging a deeper hole."
    ),
    ReadinessPolicy.PEAK: (
        "Peak mode: green light today. I've added a challenge set to {name}. "
        "Go for it if you feel good."
    ),
}

_PEAK_WITHOUT_COMPOUND = (
    "Peak mode: green light today, but there's no compound lift to add a "
    "challenge set to. Train as planned."
)


def select_readiness_policy(score: float | None) -> ReadinessPolicy:
    """Pick the session policy for *score*; no check-in means NONE."""
    if score is None:
        return ReadinessPolicy.NONE
    for row in READINESS_POLICIES:
        if row.predicate(score):
            return row.policy
    return ReadinessPolicy.NONE


def apply_fatigue_mode(queue: list[SessionExercise]) -> list[str]:
    """Drop the last set from every multi-set exercise. Returns affected names."""
    affected: list[str] = []
    for exercise in queue:
        if len(exercise.sets) > 1:
            exercise.sets.pop()
            affected.append(exercise.name)
    return affected


def build_challenge_set(last: SessionSet, set_id: str, set_order: int) -> SessionSet:
    """Clone *last* into a heavier, lower-rep set at RPE 9."""
    if last.target_reps:
        reps = max(last.target_reps - CHALLENGE_REP_REDUCTION, 1)
    else:
        reps = CHALLENGE_DEFAULT_REPS
    return dataclasses.replace(
        last,
        id=set_id,
        set_order=set_order,
        target_load=adjust_load(last.target_load, CHALLENGE_LOAD_MULTIPLIER),
        target_reps=reps,
        target_rpe=CHALLENGE_TARGET_RPE,
        actual_weight=None,
        actual_reps=None,
        actual_rpe=None,
        is_warmup=False,
        is_pr=False,
        status=SetStatus.PENDING,
        notes=None,
        missed_reps=False,
        agent_adjusted=True,
        agent_reasoning="Challenge set @ 105% - you earned this",
    )


def apply_peak_mode(
    queue: list[SessionExercise], id_factory: Callable[[], str]
) -> str | None:
    """Append a challenge set to the first compound lift. Returns its name."""
    for exercise in queue:
        if exercise.sets and is_compound_lift(exercise.name):
            challenge = build_challenge_set(
                exercise.sets[-1], id_factory(), len(exercise.sets) + 1
            )
            exercise.sets.append(challenge)
            return exercise.name
    return None


def apply_readiness_policy(
    policy: ReadinessPolicy,
    queue: list[SessionExercise],
    id_factory: Callable[[], str],
) -> str:
    """Apply *policy* to *queue* in place and return the initialization message."""
    if policy == ReadinessPolicy.FATIGUE:
        affected = apply_fatigue_mode(queue)
        return _MESSAGES[policy].format(count=len(affected))
    if policy == ReadinessPolicy.PEAK:
        name = apply_peak_mode(queue, id_factory)
        if name is None:
            return _PEAK_WITHOUT_COMPOUND
        return _MESSAGES[policy].format(name=name)
    return _MESSAGES[ReadinessPolicy.NONE]
