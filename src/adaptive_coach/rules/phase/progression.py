"""Phase rules driven by per-exercise progression trends."""

from __future__ import annotations

from adaptive_coach.models.enums import (
    REGRESSION_MAX_SHARE,
    REGRESSION_MIN_COUNT,
    ConfidenceLevel,
    TrainingPhase,
)
from adaptive_coach.models.history import PhaseDetection
from adaptive_coach.models.phase_context import PhaseContext
from adaptive_coach.rules.base import PhaseRule


class RegressionDeloadRule(PhaseRule):
    """Widespread regression suggests accumulated fatigue: deload."""

    rule_id = "regression_deload"
    version = "1.0.0"
    order = 4

    def evaluate(self, context: PhaseContext) -> PhaseDetection | None:
        history = context.history
        regressing = len(history.regressing_exercises)
        tracked = history.tracked_exercise_count

        if regressing >= REGRESSION_MIN_COUNT or (
            tracked > 0 and regressing / tracked > REGRESSION_MAX_SHARE
        ):
            return self._detect(
                TrainingPhase.DELOADING,
                ConfidenceLevel.MED,
                (
                    f"{regressing} of {tracked} tracked exercises are regressing. "
                    "A deload week may help recovery."
                ),
                1,
            )
        return None


class ProgressingRule(PhaseRule):
    """Progress outnumbering stalls and regressions: keep accumulating."""

    rule_id = "progressing"
    version = "1.0.0"
    order = 6

    def evaluate(self, context: PhaseContext) -> PhaseDetection | None:
        history = context.history
        progressing = len(history.progressing_exercises)
        if progressing > len(history.stagnant_exercises) and progressing > len(
            history.regressing_exercises
        ):
            return self._detect(
                TrainingPhase.ACCUMULATING,
                ConfidenceLevel.MED,
                "Good progress across exercises. Continue building volume.",
                4,
            )
        return None


class StagnantRule(PhaseRule):
    """Stable but not regressing: maintain and look for a new stimulus."""

    rule_id = "stagnant"
    version = "1.0.0"
    order = 7

    def evaluate(self, context: PhaseContext) -> PhaseDetection | None:
        history = context.history
        if len(history.stagnant_exercises) > len(history.regressing_exercises):
            return self._detect(
                TrainingPhase.MAINTAINING,
                ConfidenceLevel.MED,
                (
                    "Exercises are stable. Consider pushing intensity or adding "
                    "volume to break plateaus."
                ),
                2,
            )
        return None
