"""Decision trace — audit trail of how the phase detector reached its verdict."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import auto, IntEnum

from adaptive_coach.models.history import PhaseDetection


class RuleStatus(IntEnum):
    """Outcome of a single rule during a detector call."""

    FIRED = auto()
    SKIPPED = auto()
    NOT_APPLICABLE = auto()
    NOT_REACHED = auto()


@dataclass(frozen=True)
class RuleResult:
    """Record of a single rule's evaluation during a detector call."""

    rule_id: str
    status: RuleStatus
    detection: PhaseDetection | None = None
    explanation: str = ""


@dataclass(frozen=True)
class DecisionTrace:
    """Complete audit trail for a single PhaseDetector.detect() call.

    Rules are evaluated in order and the first one to fire decides, so the
    trace shows every earlier rule as SKIPPED and every later one as
    NOT_REACHED.
    """

    rule_results: tuple[RuleResult, ...] = field(default_factory=tuple)
    final_detection: PhaseDetection | None = None

    @property
    def deciding_rule(self) -> str | None:
        for result in self.rule_results:
            if result.status == RuleStatus.FIRED:
                return result.rule_id
        return None
