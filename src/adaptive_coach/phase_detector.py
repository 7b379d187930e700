"""PhaseDetector — classifies the athlete's position in the macro cycle."""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable

from adaptive_coach.models.decision_trace import DecisionTrace, RuleResult, RuleStatus
from adaptive_coach.models.history import Disruption, HistoryAnalysis, PhaseDetection
from adaptive_coach.models.phase_context import PhaseContext
from adaptive_coach.registry import PhaseRuleRegistry
from adaptive_coach.rules.phase.fallback import DefaultAccumulationRule

logger = logging.getLogger(__name__)


class PhaseDetector:
    """Runs the ordered phase rules; the first rule to fire decides.

    Usage:
        detector = PhaseDetector()
        detection, trace = detector.detect(history, disruptions, "deload", 1)
    """

    def __init__(self, registry: PhaseRuleRegistry | None = None) -> None:
        self.registry = registry or PhaseRuleRegistry()

        # Auto-discover rules if using default registry
        if registry is None:
            self.registry.discover_rules()

    def detect(
        self,
        history: HistoryAnalysis,
        disruptions: Iterable[Disruption] = (),
        current_phase_label: str | None = None,
        weeks_in_phase: int | None = None,
        as_of: date | None = None,
    ) -> tuple[PhaseDetection, DecisionTrace]:
        """Classify the current training phase.

        Args:
            history: Output of analyze_training_history().
            disruptions: Disruption records; only those active on ``as_of``
                count.
            current_phase_label: Phase stored on the athlete profile, if any.
            weeks_in_phase: Weeks already spent in that phase.
            as_of: Reference date. Defaults to ``history.as_of``, then today.

        Returns:
            A tuple of (PhaseDetection, DecisionTrace).
        """
        reference = as_of or history.as_of or date.today()
        context = PhaseContext(
            history=history,
            as_of=reference,
            disruptions=tuple(disruptions),
            current_phase_label=current_phase_label,
            weeks_in_phase=weeks_in_phase,
        )

        rule_results: list[RuleResult] = []
        detection: PhaseDetection | None = None

        for rule in self.registry.get_all_rules():
            if detection is not None:
                rule_results.append(
                    RuleResult(
                        rule_id=rule.rule_id,
                        status=RuleStatus.NOT_REACHED,
                        explanation=f"Decided earlier by {detection.rule_id}.",
                    )
                )
                continue

            if not rule.has_required_data(context):
                rule_results.append(
                    RuleResult(
                        rule_id=rule.rule_id,
                        status=RuleStatus.NOT_APPLICABLE,
                        explanation=f"Missing required data: {rule.required_data}",
                    )
                )
                continue

            result = rule.evaluate(context)
            if result is None:
                rule_results.append(
                    RuleResult(
                        rule_id=rule.rule_id,
                        status=RuleStatus.SKIPPED,
                        explanation="Rule returned no detection.",
                    )
                )
                continue

            detection = result
            rule_results.append(
                RuleResult(
                    rule_id=rule.rule_id,
                    status=RuleStatus.FIRED,
                    detection=result,
                    explanation=result.reasoning,
                )
            )

        if detection is None:
            # Custom registries may omit the catch-all rule
            detection = DefaultAccumulationRule().evaluate(context)

        logger.debug(
            "Phase %s (%s) decided by %s",
            detection.phase.name,
            detection.confidence.name,
            detection.rule_id,
        )
        return detection, DecisionTrace(
            rule_results=tuple(rule_results), final_detection=detection
        )


_default_detector: PhaseDetector | None = None


def detect_current_phase(
    history: HistoryAnalysis,
    disruptions: Iterable[Disruption] = (),
    current_phase_label: str | None = None,
    weeks_in_phase: int | None = None,
    as_of: date | None = None,
) -> PhaseDetection:
    """Module-level convenience wrapper returning just the detection."""
    global _default_detector
    if _default_detector is None:
        _default_detector = PhaseDetector()
    detection, _trace = _default_detector.detect(
        history, disruptions, current_phase_label, weeks_in_phase, as_of
    )
    return detection
