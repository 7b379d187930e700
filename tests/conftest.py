"""Shared test fixtures: catalog exercises, movement memory, sessions, engines."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from itertools import count
from typing import Callable

import pytest

from adaptive_coach.engine import SessionEngine
from adaptive_coach.models.enums import ConfidenceLevel, Modality, SetStatus, Trend
from adaptive_coach.models.exercise import Exercise, MovementMemory
from adaptive_coach.models.history import CompletedSession, LoggedSet
from adaptive_coach.models.readiness import ReadinessSnapshot
from adaptive_coach.models.session import SessionExercise
from adaptive_coach.queue_builder import build_session_queue

AS_OF = date(2026, 3, 2)  # a Monday
NOON = datetime(2026, 3, 2, 12, 0, 0)


@pytest.fixture
def squat() -> Exercise:
    return Exercise(id="ex-squat", name="Back Squat", muscle_group="legs")


@pytest.fixture
def bench() -> Exercise:
    return Exercise(id="ex-bench", name="Bench Press", muscle_group="chest")


@pytest.fixture
def curl() -> Exercise:
    return Exercise(id="ex-curl", name="Bicep Curl", muscle_group="arms")


@pytest.fixture
def plank() -> Exercise:
    return Exercise(
        id="ex-plank", name="Plank", modality=Modality.HYBRID, primary_metric="duration"
    )


@pytest.fixture
def squat_memory() -> MovementMemory:
    """Squat: 3×5 at 100, RPE 8, PR e1RM 120."""
    return MovementMemory(
        exercise_id="ex-squat",
        exercise_name="Back Squat",
        last_date=AS_OF - timedelta(days=3),
        last_weight=100.0,
        last_reps=5,
        last_sets=3,
        last_rpe=8.0,
        avg_rpe=8.0,
        typical_rep_max=5,
        pr_e1rm=120.0,
        exposure_count=6,
        confidence_level=ConfidenceLevel.HIGH,
        trend=Trend.PROGRESSING,
    )


@pytest.fixture
def bench_memory() -> MovementMemory:
    """Bench: 3×8 at 60, RPE 7."""
    return MovementMemory(
        exercise_id="ex-bench",
        exercise_name="Bench Press",
        last_weight=60.0,
        last_reps=8,
        last_sets=3,
        avg_rpe=7.0,
        typical_rep_max=8,
        exposure_count=4,
        trend=Trend.STAGNANT,
    )


@pytest.fixture
def id_factory() -> Callable[[], str]:
    counter = count(1)
    return lambda: f"set-{next(counter)}"


@pytest.fixture
def template_queue(
    squat, bench, curl, squat_memory, bench_memory, id_factory
) -> list[SessionExercise]:
    """Squat 3×5@100, Bench 3×8@60, Curl 3×8 with no load (no memory)."""
    return build_session_queue(
        [squat, bench, curl], [squat_memory, bench_memory], id_factory=id_factory
    )


@pytest.fixture
def engine(id_factory) -> SessionEngine:
    return SessionEngine(clock=lambda: NOON, id_factory=id_factory)


@pytest.fixture
def make_readiness() -> Callable[..., ReadinessSnapshot]:
    def _make(score: float) -> ReadinessSnapshot:
        return ReadinessSnapshot(check_in_date=AS_OF, readiness_score=score)

    return _make


@pytest.fixture
def make_session() -> Callable[..., CompletedSession]:
    """Factory: completed session *days_ago* before AS_OF."""
    counter = count(1)

    def _make(
        days_ago: int,
        focus: str = "",
        exercises: tuple[str, ...] = ("Squat",),
        weight: float | None = 100.0,
        reps: int | None = 5,
        rpe: float | None = 8.0,
        duration: float | None = 60.0,
        muscle_group: str = "legs",
    ) -> CompletedSession:
        sets = tuple(
            LoggedSet(
                exercise_id=name.lower().replace(" ", "-"),
                exercise_name=name,
                muscle_group=muscle_group,
                actual_weight=weight,
                actual_reps=reps,
                actual_rpe=rpe,
            )
            for name in exercises
        )
        return CompletedSession(
            id=f"session-{next(counter)}",
            date_completed=AS_OF - timedelta(days=days_ago),
            focus=focus,
            duration_minutes=duration,
            sets=sets,
        )

    return _make


@pytest.fixture
def assert_contiguous() -> Callable[[SessionEngine], None]:
    """Checker for the completed* active? pending* status split."""

    def _check(engine: SessionEngine) -> None:
        seq = [s.status for ex in engine.queue for s in ex.sets]
        active = [i for i, s in enumerate(seq) if s == SetStatus.ACTIVE]
        assert len(active) <= 1
        if active:
            idx = active[0]
            assert all(s == SetStatus.COMPLETED for s in seq[:idx])
            assert all(s == SetStatus.PENDING for s in seq[idx + 1:])
        else:
            assert all(s == SetStatus.COMPLETED for s in seq)

    return _check
