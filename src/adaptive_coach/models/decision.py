"""Agent decision — append-only audit entry for every autonomous change."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from adaptive_coach.models.enums import DecisionOrigin, DecisionType


@dataclass(frozen=True)
class AgentDecision:
    """One change to a future set, with a one-line justification.

    ``origin`` separates engine-driven adjustments (AGENT) from changes the
    athlete asked for (ATHLETE).
    """

    type: DecisionType
    reasoning: str
    applied_at: datetime
    origin: DecisionOrigin = DecisionOrigin.AGENT
    exercise_id: str | None = None
    set_id: str | None = None
