"""Frozen inputs to a phase detection call."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from adaptive_coach.models.history import Disruption, HistoryAnalysis, most_severe_active


@dataclass(frozen=True)
class PhaseContext:
    """Everything the phase rules may look at.

    ``current_phase_label`` is the free-text phase stored on the athlete's
    profile (e.g. "deload", "intensification"); it is compared
    case-insensitively.
    """

    history: HistoryAnalysis
    as_of: date
    disruptions: tuple[Disruption, ...] = field(default_factory=tuple)
    current_phase_label: str | None = None
    weeks_in_phase: int | None = None

    @property
    def normalized_phase_label(self) -> str:
        return (self.current_phase_label or "").strip().lower()

    def active_disruption(self) -> Disruption | None:
        """The most severe disruption active on ``as_of``, if any.

        Ties keep the earliest listed.
        """
        return most_severe_active(self.disruptions, self.as_of)
