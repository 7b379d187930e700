"""History inputs and the outputs of the history analyzer and phase detector."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable

from adaptive_coach.models.enums import (
    ConfidenceLevel,
    DisruptionType,
    PatternType,
    Severity,
    SplitType,
    TrainingPhase,
    Trend,
)


@dataclass(frozen=True)
class LoggedSet:
    """A performed set from a completed session."""

    exercise_id: str
    exercise_name: str = ""
    muscle_group: str = "unknown"
    actual_weight: float | None = None
    actual_reps: int | None = None
    actual_rpe: float | None = None
    is_warmup: bool = False


@dataclass(frozen=True)
class CompletedSession:
    """A workout from the data store. Only sessions with ``date_completed`` count."""

    id: str
    date_completed: date | None = None
    scheduled_date: date | None = None
    focus: str = ""
    duration_minutes: float | None = None
    sets: tuple[LoggedSet, ...] = field(default_factory=tuple)

    @property
    def exercise_names(self) -> tuple[str, ...]:
        """Distinct exercise names in first-seen order."""
        seen: dict[str, None] = {}
        for s in self.sets:
            name = s.exercise_name or s.exercise_id
            seen.setdefault(name, None)
        return tuple(seen)


@dataclass(frozen=True)
class Disruption:
    """Recorded injury, illness or life event affecting training capacity."""

    id: str
    type: DisruptionType
    start_date: date
    end_date: date | None = None
    severity: Severity = Severity.MODERATE
    notes: str | None = None

    def is_active_on(self, as_of: date) -> bool:
        """Active once started and until its end date (open-ended if no end)."""
        if self.start_date > as_of:
            return False
        return self.end_date is None or self.end_date >= as_of


def most_severe_active(disruptions: Iterable[Disruption], as_of: date) -> Disruption | None:
    """The highest-severity disruption active on *as_of*; the first listed wins ties."""
    active = [d for d in disruptions if d.is_active_on(as_of)]
    if not active:
        return None
    return max(active, key=lambda d: d.severity)


@dataclass(frozen=True)
class TrainingGap:
    start_date: date
    end_date: date
    days: int


@dataclass(frozen=True)
class ExerciseProgression:
    exercise_id: str
    exercise_name: str
    trend: Trend
    recent_e1rm: float | None = None
    last_performed: date | None = None
    exposure_count: int = 0


@dataclass(frozen=True)
class DetectedPattern:
    """A behavioral pattern found in history. Recomputed on every call."""

    type: PatternType
    name: str
    confidence: float
    description: str
    data: dict = field(default_factory=dict)


@dataclass(frozen=True)
class HistoryAnalysis:
    """Aggregate statistics over the trailing analysis window."""

    total_sessions: int = 0
    sessions_per_week: float = 0.0
    average_session_minutes: float = 0.0
    total_volume: float = 0.0
    volume_by_muscle_group: dict[str, float] = field(default_factory=dict)
    preferred_days: tuple[str, ...] = field(default_factory=tuple)
    detected_split: SplitType | None = None

    progressing_exercises: tuple[ExerciseProgression, ...] = field(default_factory=tuple)
    stagnant_exercises: tuple[ExerciseProgression, ...] = field(default_factory=tuple)
    regressing_exercises: tuple[ExerciseProgression, ...] = field(default_factory=tuple)

    gaps: tuple[TrainingGap, ...] = field(default_factory=tuple)
    recent_disruption: Disruption | None = None
    patterns: tuple[DetectedPattern, ...] = field(default_factory=tuple)

    data_quality: ConfidenceLevel = ConfidenceLevel.LOW
    weeks_analyzed: int = 0
    as_of: date | None = None

    @property
    def tracked_exercise_count(self) -> int:
        return (
            len(self.progressing_exercises)
            + len(self.stagnant_exercises)
            + len(self.regressing_exercises)
        )


@dataclass(frozen=True)
class PhaseDetection:
    """Where the athlete sits in the macro cycle, and why."""

    phase: TrainingPhase
    confidence: ConfidenceLevel
    reasoning: str
    suggested_duration_weeks: int
    rule_id: str = ""
