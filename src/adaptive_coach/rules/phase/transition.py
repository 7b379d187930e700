"""Phase rule: time-boxed transitions out of the athlete's current block."""

from __future__ import annotations

from adaptive_coach.models.enums import (
    DELOAD_COMPLETE_WEEKS,
    INTENSIFICATION_MAX_WEEKS,
    ConfidenceLevel,
    TrainingPhase,
)
from adaptive_coach.models.history import PhaseDetection
from adaptive_coach.models.phase_context import PhaseContext
from adaptive_coach.rules.base import PhaseRule


class PhaseTransitionRule(PhaseRule):
    """Deloads last a week; intensification blocks end after four."""

    rule_id = "phase_transition"
    version = "1.0.0"
    order = 5
    required_data = ["current_phase_label", "weeks_in_phase"]

    def evaluate(self, context: PhaseContext) -> PhaseDetection | None:
        label = context.normalized_phase_label
        weeks = context.weeks_in_phase or 0

        if label == "deload" and weeks >= DELOAD_COMPLETE_WEEKS:
            return self._detect(
                TrainingPhase.ACCUMULATING,
                ConfidenceLevel.HIGH,
                "Deload complete. Time to build volume again.",
                4,
            )

        if label == "intensification" and weeks >= INTENSIFICATION_MAX_WEEKS:
            return self._detect(
                TrainingPhase.DELOADING,
                ConfidenceLevel.MED,
                (
                    f"You've been intensifying for {weeks} weeks. "
                    "Consider a deload before pushing further."
                ),
                1,
            )

        return None
