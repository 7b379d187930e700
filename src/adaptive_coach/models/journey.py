"""Journey detection inputs and outputs."""

from __future__ import annotations

from dataclasses import dataclass

from adaptive_coach.models.enums import ConfidenceLevel, UserJourney


@dataclass(frozen=True)
class JourneySignals:
    """Behavioral counts over the lookback window (30 days by default)."""

    # Freestyler
    unstructured_workouts: int = 0
    exercises_added_mid_workout: int = 0
    quick_start_usage: int = 0

    # Planner
    block_workouts_completed: int = 0
    blocks_created: int = 0
    scheduled_workouts_followed: int = 0

    # Guided
    readiness_check_ins: int = 0
    coach_interactions: int = 0
    daily_suggestions_used: int = 0

    @property
    def total_workouts(self) -> int:
        return self.unstructured_workouts + self.block_workouts_completed


@dataclass(frozen=True)
class JourneyScores:
    freestyler: float
    planner: float
    guided: float

    def as_dict(self) -> dict[UserJourney, float]:
        return {
            UserJourney.FREESTYLER: self.freestyler,
            UserJourney.PLANNER: self.planner,
            UserJourney.GUIDED: self.guided,
        }


@dataclass(frozen=True)
class JourneyUpgrade:
    from_journey: UserJourney
    to_journey: UserJourney
    reason: str
    prompt: str


@dataclass(frozen=True)
class JourneyDetection:
    primary_journey: UserJourney
    confidence: ConfidenceLevel
    scores: JourneyScores
    signals: JourneySignals
    is_new_user: bool
    suggested_upgrade: JourneyUpgrade | None = None
