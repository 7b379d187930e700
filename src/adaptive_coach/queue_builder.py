"""Builds the initial session queue from catalog exercises and movement memory."""

from __future__ import annotations

import uuid
from typing import Callable, Iterable

from adaptive_coach.math.loading import round_to_increment
from adaptive_coach.math.readiness import readiness_weight_factor
from adaptive_coach.models.enums import (
    DEFAULT_SET_COUNT,
    DEFAULT_TARGET_REPS,
    DEFAULT_TARGET_RPE,
    SetStatus,
)
from adaptive_coach.models.exercise import Exercise, MovementMemory
from adaptive_coach.models.readiness import ReadinessSnapshot
from adaptive_coach.models.session import ExerciseContext, SessionExercise, SessionSet


def new_set_id() -> str:
    return f"set-{uuid.uuid4().hex[:12]}"


def suggest_weight(
    memory: MovementMemory | None, readiness: ReadinessSnapshot | None
) -> float | None:
    """Last weight scaled by readiness and snapped to the plate increment."""
    if memory is None or not memory.last_weight:
        return None
    score = readiness.score if readiness is not None else None
    return round_to_increment(memory.last_weight * readiness_weight_factor(score))


def build_session_exercise(
    exercise: Exercise,
    memory: MovementMemory | None = None,
    readiness: ReadinessSnapshot | None = None,
    id_factory: Callable[[], str] = new_set_id,
) -> SessionExercise:
    """Prescribe one exercise: set count, reps and RPE come from memory or defaults."""
    weight = suggest_weight(memory, readiness)
    set_count = (memory.last_sets if memory else None) or DEFAULT_SET_COUNT
    reps = (memory.typical_rep_max if memory else None) or DEFAULT_TARGET_REPS
    rpe = (memory.avg_rpe if memory else None) or DEFAULT_TARGET_RPE

    sets = [
        SessionSet(
            id=id_factory(),
            exercise_id=exercise.id,
            set_order=order,
            target_reps=reps,
            target_rpe=rpe,
            target_load=weight,
            status=SetStatus.PENDING,
        )
        for order in range(1, set_count + 1)
    ]
    return SessionExercise(
        exercise=exercise,
        sets=sets,
        context=ExerciseContext(
            last_performance=memory, suggested_weight=weight, suggested_reps=reps
        ),
    )


def build_session_queue(
    exercises: Iterable[Exercise],
    memory: Iterable[MovementMemory] = (),
    readiness: ReadinessSnapshot | None = None,
    id_factory: Callable[[], str] = new_set_id,
) -> list[SessionExercise]:
    """Template queue ready for SessionEngine.initialize_session().

    Every set starts PENDING; the engine activates the first one.
    """
    by_exercise = {m.exercise_id: m for m in memory}
    return [
        build_session_exercise(ex, by_exercise.get(ex.id), readiness, id_factory)
        for ex in exercises
    ]
