"""Tests for individual phase rules evaluated in isolation."""

from __future__ import annotations

from datetime import date, timedelta

from adaptive_coach.models.enums import DisruptionType, Severity, TrainingPhase
from adaptive_coach.models.history import Disruption, HistoryAnalysis, TrainingGap
from adaptive_coach.models.phase_context import PhaseContext
from adaptive_coach.rules.phase.fallback import DefaultAccumulationRule
from adaptive_coach.rules.phase.rebuilding import (
    ActiveDisruptionRule,
    LowFrequencyRule,
    RecentGapRule,
)
from adaptive_coach.rules.phase.transition import PhaseTransitionRule

AS_OF = date(2026, 3, 2)


def _make_context(**kwargs) -> PhaseContext:
    history = kwargs.pop("history", HistoryAnalysis(as_of=AS_OF))
    return PhaseContext(history=history, as_of=AS_OF, **kwargs)


class TestActiveDisruptionRule:
    def setup_method(self) -> None:
        self.rule = ActiveDisruptionRule()

    def test_requires_disruptions(self) -> None:
        assert self.rule.has_required_data(_make_context()) is False

    def test_picks_first_active(self) -> None:
        disruptions = (
            Disruption("old", DisruptionType.TRAVEL, AS_OF - timedelta(days=20), AS_OF - timedelta(days=10)),
            Disruption("now", DisruptionType.LIFE_STRESS, AS_OF, severity=Severity.MINOR),
        )
        detection = self.rule.evaluate(_make_context(disruptions=disruptions))
        assert detection is not None
        assert "life stress" in detection.reasoning
        assert detection.suggested_duration_weeks == 1

    def test_end_date_is_inclusive(self) -> None:
        disruption = Disruption("d", DisruptionType.ILLNESS, AS_OF - timedelta(days=5), AS_OF)
        assert self.rule.evaluate(_make_context(disruptions=(disruption,))) is not None


class TestRecentGapRule:
    def setup_method(self) -> None:
        self.rule = RecentGapRule()

    def test_most_recent_gap_wins(self) -> None:
        gaps = (
            TrainingGap(AS_OF - timedelta(days=25), AS_OF - timedelta(days=13), 12),
            TrainingGap(AS_OF - timedelta(days=10), AS_OF - timedelta(days=2), 8),
        )
        detection = self.rule.evaluate(_make_context(history=HistoryAnalysis(gaps=gaps)))
        assert detection is not None
        assert "8-day" in detection.reasoning

    def test_no_gaps(self) -> None:
        assert self.rule.evaluate(_make_context()) is None


class TestLowFrequencyRule:
    def test_boundary_two_per_week_is_fine(self) -> None:
        history = HistoryAnalysis(total_sessions=12, sessions_per_week=2.0)
        assert LowFrequencyRule().evaluate(_make_context(history=history)) is None


class TestPhaseTransitionRule:
    def setup_method(self) -> None:
        self.rule = PhaseTransitionRule()

    def test_requires_label_and_weeks(self) -> None:
        assert self.rule.has_required_data(_make_context(current_phase_label="deload")) is False
        assert self.rule.has_required_data(
            _make_context(current_phase_label="deload", weeks_in_phase=0)
        ) is True

    def test_fresh_deload_does_not_transition(self) -> None:
        context = _make_context(current_phase_label="deload", weeks_in_phase=0)
        assert self.rule.evaluate(context) is None

    def test_label_is_case_insensitive(self) -> None:
        context = _make_context(current_phase_label="  INTENSIFICATION ", weeks_in_phase=5)
        detection = self.rule.evaluate(context)
        assert detection.phase == TrainingPhase.DELOADING


class TestDefaultAccumulationRule:
    def test_always_fires(self) -> None:
        detection = DefaultAccumulationRule().evaluate(_make_context())
        assert detection.phase == TrainingPhase.ACCUMULATING
        assert detection.rule_id == "default_accumulation"
