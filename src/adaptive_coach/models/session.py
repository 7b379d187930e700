"""Live-session models: sets, exercises and the records the engine emits.

Unlike the other models, SessionSet and SessionExercise are mutable: the
SessionEngine owns them and edits them in place as the session unfolds.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from adaptive_coach.models.enums import SetStatus
from adaptive_coach.models.exercise import Exercise, MovementMemory


@dataclass
class SessionSet:
    """The mutable unit of work: a prescription and what was actually done."""

    id: str
    exercise_id: str
    set_order: int

    # Prescription
    target_reps: int | None = None
    target_rpe: float | None = None
    target_load: float | None = None
    tempo: str | None = None

    # Performance
    actual_weight: float | None = None
    actual_reps: int | None = None
    actual_rpe: float | None = None

    is_warmup: bool = False
    is_pr: bool = False
    status: SetStatus = SetStatus.PENDING
    notes: str | None = None

    # Engine annotations
    agent_adjusted: bool = False
    agent_reasoning: str | None = None
    missed_reps: bool = False

    @property
    def is_remaining(self) -> bool:
        """True for PENDING and ACTIVE sets."""
        return self.status != SetStatus.COMPLETED


@dataclass(frozen=True)
class ExerciseContext:
    """History bundle shown alongside an exercise."""

    last_performance: MovementMemory | None = None
    suggested_weight: float | None = None
    suggested_reps: int | None = None


@dataclass
class SessionExercise:
    """One exercise's ordered sets for the current session."""

    exercise: Exercise
    sets: list[SessionSet] = field(default_factory=list)
    context: ExerciseContext = field(default_factory=ExerciseContext)

    @property
    def exercise_id(self) -> str:
        return self.exercise.id

    @property
    def name(self) -> str:
        return self.exercise.name

    @property
    def remaining_sets(self) -> list[SessionSet]:
        return [s for s in self.sets if s.is_remaining]

    @property
    def pending_sets(self) -> list[SessionSet]:
        return [s for s in self.sets if s.status == SetStatus.PENDING]

    def find_set(self, set_id: str) -> int | None:
        """Index of the set with *set_id*, or None."""
        for idx, s in enumerate(self.sets):
            if s.id == set_id:
                return idx
        return None


@dataclass(frozen=True)
class SetResult:
    """What the athlete reports after performing a set."""

    weight: float
    reps: int
    rpe: float


@dataclass(frozen=True)
class SetRecord:
    """Normalized record handed to the persistence callback after a logged set."""

    exercise_id: str
    set_id: str
    set_order: int
    target_reps: int | None
    target_rpe: float | None
    target_load: float | None
    actual_weight: float
    actual_reps: int
    actual_rpe: float

    def as_payload(self) -> dict:
        """camelCase mapping handed to the persistence layer."""
        return {
            "exerciseId": self.exercise_id,
            "setId": self.set_id,
            "setOrder": self.set_order,
            "targetReps": self.target_reps,
            "targetRpe": self.target_rpe,
            "targetLoad": self.target_load,
            "actualWeight": self.actual_weight,
            "actualReps": self.actual_reps,
            "actualRpe": self.actual_rpe,
        }


@dataclass(frozen=True)
class SessionProgress:
    completed: int
    total: int
    percentage: int


@dataclass(frozen=True)
class CompletedExerciseSets:
    """Completed sets for one exercise, as returned by the query surface."""

    exercise_id: str
    sets: tuple[SessionSet, ...] = field(default_factory=tuple)
