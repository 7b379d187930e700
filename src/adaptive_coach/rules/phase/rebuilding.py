"""Phase rules that send the athlete back to rebuilding.

Disruptions, recent layoffs and sustained low frequency all outrank
performance trends: consistency has to come back before intensity does.
"""

from __future__ import annotations

from adaptive_coach.models.enums import (
    DISRUPTION_REBUILD_WEEKS,
    LONG_GAP_DAYS,
    LOW_FREQUENCY_MIN_SESSIONS,
    LOW_FREQUENCY_SESSIONS_PER_WEEK,
    RECENT_GAP_WINDOW_DAYS,
    SHORT_GAP_DAYS,
    ConfidenceLevel,
    Severity,
    TrainingPhase,
)
from adaptive_coach.models.history import PhaseDetection, TrainingGap
from adaptive_coach.models.phase_context import PhaseContext
from adaptive_coach.rules.base import PhaseRule


class ActiveDisruptionRule(PhaseRule):
    """An active injury, illness or life disruption forces rebuilding."""

    rule_id = "active_disruption"
    version = "1.0.0"
    order = 1
    required_data = ["disruptions"]

    def evaluate(self, context: PhaseContext) -> PhaseDetection | None:
        disruption = context.active_disruption()
        if disruption is None:
            return None

        severity = disruption.severity
        kind = disruption.type.name.lower().replace("_", " ")
        return self._detect(
            TrainingPhase.REBUILDING,
            ConfidenceLevel.HIGH if severity == Severity.MAJOR else ConfidenceLevel.MED,
            (
                f"You have an active {kind} disruption ({severity.name.lower()}). "
                "Focus on rebuilding consistency before pushing intensity."
            ),
            DISRUPTION_REBUILD_WEEKS[severity],
        )


class RecentGapRule(PhaseRule):
    """A layoff that ended in the last two weeks calls for a ramp back in."""

    rule_id = "recent_gap"
    version = "1.0.0"
    order = 2

    def evaluate(self, context: PhaseContext) -> PhaseDetection | None:
        gap = self._most_recent_gap(context)
        if gap is None:
            return None

        if gap.days >= LONG_GAP_DAYS:
            return self._detect(
                TrainingPhase.REBUILDING,
                ConfidenceLevel.HIGH,
                (
                    f"You had a {gap.days}-day gap in training. "
                    "Let's rebuild your base before pushing hard."
                ),
                2,
            )
        if gap.days >= SHORT_GAP_DAYS:
            return self._detect(
                TrainingPhase.REBUILDING,
                ConfidenceLevel.MED,
                f"Coming back from a {gap.days}-day break. Ease back in this week.",
                1,
            )
        return None

    @staticmethod
    def _most_recent_gap(context: PhaseContext) -> TrainingGap | None:
        for gap in sorted(context.history.gaps, key=lambda g: g.end_date, reverse=True):
            days_ago = (context.as_of - gap.end_date).days
            if 0 <= days_ago <= RECENT_GAP_WINDOW_DAYS:
                return gap
        return None


class LowFrequencyRule(PhaseRule):
    """Fewer than two sessions a week means consistency is the priority."""

    rule_id = "low_frequency"
    version = "1.0.0"
    order = 3

    def evaluate(self, context: PhaseContext) -> PhaseDetection | None:
        history = context.history
        if (
            history.sessions_per_week < LOW_FREQUENCY_SESSIONS_PER_WEEK
            and history.total_sessions >= LOW_FREQUENCY_MIN_SESSIONS
        ):
            return self._detect(
                TrainingPhase.REBUILDING,
                ConfidenceLevel.MED,
                (
                    f"Training frequency has been low ({history.sessions_per_week:.1f} "
                    "sessions/week). Focus on rebuilding consistency."
                ),
                2,
            )
        return None
