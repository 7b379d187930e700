"""Abstract base class for all phase detection rules."""

from __future__ import annotations

from abc import ABC, abstractmethod

from adaptive_coach.models.enums import ConfidenceLevel, TrainingPhase
from adaptive_coach.models.history import PhaseDetection
from adaptive_coach.models.phase_context import PhaseContext


class PhaseRule(ABC):
    """Base class for the macro-cycle phase rules.

    Each rule encapsulates one branch of the phase decision list. Rules are
    discovered automatically by the PhaseRuleRegistry and evaluated by the
    PhaseDetector in ascending ``order``; the first rule to return a
    detection decides, so order is policy.

    Subclasses must define:
        rule_id: unique identifier (e.g. "active_disruption")
        version: semantic version string
        order: position in the decision list (1 evaluates first)
        required_data: list of PhaseContext field names needed by this rule
        evaluate(): the rule's decision logic
    """

    rule_id: str
    version: str
    order: int
    required_data: list[str] = []

    def has_required_data(self, context: PhaseContext) -> bool:
        """Check that all required PhaseContext fields are not None."""
        for field_name in self.required_data:
            value = getattr(context, field_name, None)
            if value is None:
                return False
            # Also treat empty sequences as missing data
            if isinstance(value, (list, tuple)) and len(value) == 0:
                return False
        return True

    @abstractmethod
    def evaluate(self, context: PhaseContext) -> PhaseDetection | None:
        """Evaluate this rule against the phase context.

        Returns a PhaseDetection if the rule decides the phase, or None to
        pass to the next rule.
        """
        ...

    def _detect(
        self,
        phase: TrainingPhase,
        confidence: ConfidenceLevel,
        reasoning: str,
        weeks: int,
    ) -> PhaseDetection:
        return PhaseDetection(
            phase=phase,
            confidence=confidence,
            reasoning=reasoning,
            suggested_duration_weeks=weeks,
            rule_id=self.rule_id,
        )
