"""Daily readiness check-in."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from adaptive_coach.models.enums import ReadinessAdjustment


@dataclass(frozen=True)
class ReadinessSnapshot:
    """At most one per day. Consumed once, at session start.

    Inputs are 1-5 self-reports: higher sleep quality is better, higher
    soreness and stress are worse. ``readiness_score`` may be supplied by the
    caller (e.g. computed by the data store); otherwise it is derived.
    """

    sleep_quality: int = 3
    muscle_soreness: int = 3
    stress_level: int = 3
    check_in_date: date | None = None
    readiness_score: float | None = None
    notes: str | None = None

    @property
    def score(self) -> float:
        if self.readiness_score is not None:
            return self.readiness_score
        from adaptive_coach.math.readiness import calculate_readiness_score

        return calculate_readiness_score(
            self.sleep_quality, self.muscle_soreness, self.stress_level
        )


@dataclass(frozen=True)
class ReadinessAnalysis:
    """Score, suggested adjustment and athlete-facing guidance for a check-in."""

    score: float
    adjustment: ReadinessAdjustment
    message: str
    recommendations: tuple[str, ...] = ()
