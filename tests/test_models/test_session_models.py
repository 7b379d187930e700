"""Tests for live-session models."""

from __future__ import annotations

from adaptive_coach.models.enums import SetStatus
from adaptive_coach.models.exercise import Exercise
from adaptive_coach.models.session import SessionExercise, SessionSet


class TestSessionExercise:
    def setup_method(self) -> None:
        self.exercise = SessionExercise(
            exercise=Exercise(id="ex", name="Row"),
            sets=[
                SessionSet("a", "ex", 1, status=SetStatus.COMPLETED),
                SessionSet("b", "ex", 2, status=SetStatus.ACTIVE),
                SessionSet("c", "ex", 3),
            ],
        )

    def test_remaining_sets(self) -> None:
        assert [s.id for s in self.exercise.remaining_sets] == ["b", "c"]
        assert [s.id for s in self.exercise.pending_sets] == ["c"]

    def test_find_set(self) -> None:
        assert self.exercise.find_set("c") == 2
        assert self.exercise.find_set("zzz") is None

    def test_identity_passthrough(self) -> None:
        assert self.exercise.exercise_id == "ex"
        assert self.exercise.name == "Row"
