"""Tests for the session-start readiness policy table."""

from __future__ import annotations

import pytest

from adaptive_coach.models.enums import ReadinessPolicy, SetStatus
from adaptive_coach.models.session import SessionSet
from adaptive_coach.queue_builder import build_session_queue
from adaptive_coach.rules.readiness_policy import (
    apply_fatigue_mode,
    apply_peak_mode,
    apply_readiness_policy,
    build_challenge_set,
    select_readiness_policy,
)


class TestSelectReadinessPolicy:
    @pytest.mark.parametrize(
        "score,policy",
        [
            (None, ReadinessPolicy.NONE),
            (20, ReadinessPolicy.FATIGUE),
            (39.9, ReadinessPolicy.FATIGUE),
            (40, ReadinessPolicy.NONE),
            (85, ReadinessPolicy.NONE),
            (85.1, ReadinessPolicy.PEAK),
            (100, ReadinessPolicy.PEAK),
        ],
    )
    def test_thresholds(self, score, policy) -> None:
        assert select_readiness_policy(score) == policy


class TestFatigueMode:
    def test_drops_last_set_of_multi_set_exercises(self, template_queue) -> None:
        affected = apply_fatigue_mode(template_queue)
        assert affected == ["Back Squat", "Bench Press", "Bicep Curl"]
        assert [len(ex.sets) for ex in template_queue] == [2, 2, 2]


class TestChallengeSet:
    def test_clone_is_heavier_and_shorter(self) -> None:
        last = SessionSet(
            id="s-3", exercise_id="ex", set_order=3, target_reps=5,
            target_rpe=8.0, target_load=100.0, status=SetStatus.COMPLETED,
            actual_weight=100.0, actual_reps=5, actual_rpe=8.0,
        )
        challenge = build_challenge_set(last, "s-4", 4)
        assert challenge.id == "s-4"
        assert challenge.target_load == 105.0
        assert challenge.target_reps == 3
        assert challenge.target_rpe == 9.0
        assert challenge.status == SetStatus.PENDING
        assert challenge.actual_weight is None
        assert last.target_load == 100.0

    def test_low_rep_floor(self) -> None:
        last = SessionSet(id="s", exercise_id="ex", set_order=1, target_reps=2, target_load=50.0)
        assert build_challenge_set(last, "c", 2).target_reps == 1

    def test_no_rep_target_defaults(self) -> None:
        last = SessionSet(id="s", exercise_id="ex", set_order=1, target_load=50.0)
        assert build_challenge_set(last, "c", 2).target_reps == 3

    def test_unloaded_set_stays_unloaded(self) -> None:
        last = SessionSet(id="s", exercise_id="ex", set_order=1, target_reps=10)
        assert build_challenge_set(last, "c", 2).target_load is None


class TestPeakMode:
    def test_skips_isolation_before_compound(self, curl, squat, id_factory) -> None:
        queue = build_session_queue([curl, squat], id_factory=id_factory)
        name = apply_peak_mode(queue, id_factory)
        assert name == "Back Squat"
        assert [len(ex.sets) for ex in queue] == [3, 4]

    def test_none_message(self, template_queue, id_factory) -> None:
        message = apply_readiness_policy(ReadinessPolicy.NONE, template_queue, id_factory)
        assert message == "Session initialized. Let's get to work."
        assert [len(ex.sets) for ex in template_queue] == [3, 3, 3]
