"""Phase rule: the catch-all at the end of the decision list."""

from __future__ import annotations

from adaptive_coach.models.enums import ConfidenceLevel, TrainingPhase
from adaptive_coach.models.history import PhaseDetection
from adaptive_coach.models.phase_context import PhaseContext
from adaptive_coach.rules.base import PhaseRule


class DefaultAccumulationRule(PhaseRule):
    """Always fires. Low confidence: nothing more specific applied."""

    rule_id = "default_accumulation"
    version = "1.0.0"
    order = 8

    def evaluate(self, context: PhaseContext) -> PhaseDetection | None:
        return self._detect(
            TrainingPhase.ACCUMULATING,
            ConfidenceLevel.LOW,
            "Not enough data to determine phase confidently. Building base volume.",
            4,
        )
