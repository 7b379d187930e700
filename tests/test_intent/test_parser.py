"""Tests for the deterministic intent parser."""

from __future__ import annotations

import pytest

from adaptive_coach.intent import parse_intent, to_modification_kind
from adaptive_coach.models.enums import IntentType, ModificationKind, Sentiment
from adaptive_coach.models.intent import (
    AddExercisePayload,
    LogCardioPayload,
    LogWorkoutPayload,
    ModifySessionPayload,
    SkipExercisePayload,
)


class TestWorkoutLogs:
    def test_sets_reps_weight(self) -> None:
        intent = parse_intent("3x10 curls with 30lbs")
        assert intent.type == IntentType.LOG_WORKOUT
        assert intent.payload == LogWorkoutPayload(
            exercise="Bicep Curl", sets=3, reps=10, weight=30.0, weight_unit="lbs"
        )
        assert intent.confidence == 1.0

    def test_bare_weight_and_rpe(self) -> None:
        payload = parse_intent("squat 5x5 at 225 @8").payload
        assert payload.exercise == "Squat"
        assert (payload.sets, payload.reps) == (5, 5)
        assert payload.weight == 225.0
        assert payload.rpe == 8.0

    def test_kilograms(self) -> None:
        payload = parse_intent("100kg deadlift 3x3").payload
        assert payload.exercise == "Deadlift"
        assert payload.weight == 100.0
        assert payload.weight_unit == "kg"

    def test_weight_for_reps(self) -> None:
        intent = parse_intent("bench 225 for 5")
        assert intent.payload.exercise == "Bench Press"
        assert intent.payload.weight == 225.0
        assert intent.payload.reps == 5
        assert intent.payload.sets is None
        assert intent.confidence == pytest.approx(0.85)


class TestCardioLogs:
    def test_distance_and_duration(self) -> None:
        intent = parse_intent("I ran 5k in 25 minutes")
        assert intent.type == IntentType.LOG_CARDIO
        assert intent.payload == LogCardioPayload(
            activity="Running", distance=5.0, distance_unit="km", duration_min=25.0
        )
        assert intent.confidence == 1.0

    def test_distance_only(self) -> None:
        intent = parse_intent("rowed 2000m")
        assert intent.payload.activity == "Rowing"
        assert intent.payload.distance == 2000.0
        assert intent.payload.distance_unit == "m"
        assert intent.confidence == pytest.approx(0.8)

    def test_activity_word_without_numbers_is_not_cardio(self) -> None:
        intent = parse_intent("running late")
        assert intent.type == IntentType.MODIFY_SESSION
        assert intent.payload.intent == ModificationKind.TIME_CRUNCH


class TestExerciseRequests:
    def test_add_exercise(self) -> None:
        intent = parse_intent("add 3 sets of lunges")
        assert intent.type == IntentType.ADD_EXERCISE
        assert intent.payload == AddExercisePayload(exercise="Lunge", sets=3)
        assert intent.confidence == 0.8

    def test_add_another_set_is_a_modification(self) -> None:
        intent = parse_intent("add another set")
        assert intent.type == IntentType.MODIFY_SESSION
        assert intent.payload.intent == ModificationKind.ADD_SET

    def test_skip_named(self) -> None:
        intent = parse_intent("skip the squats")
        assert intent.type == IntentType.SKIP_EXERCISE
        assert intent.payload == SkipExercisePayload(exercise="Squat")

    def test_skip_this_is_a_modification(self) -> None:
        intent = parse_intent("skip this")
        assert intent.type == IntentType.MODIFY_SESSION
        assert intent.payload.intent == ModificationKind.SKIP_EXERCISE
        assert intent.confidence == 0.75


class TestModifications:
    def test_pain_with_constraint(self) -> None:
        intent = parse_intent("my knee hurts")
        assert intent.payload.intent == ModificationKind.PAIN
        assert intent.payload.body_part == "knee"
        assert intent.payload.constraint == "no_knee_flexion"
        assert intent.confidence == 0.9

    def test_lower_back(self) -> None:
        payload = parse_intent("my lower back hurts").payload
        assert payload.body_part == "lower_back"
        assert payload.constraint == "no_spinal_loading"

    @pytest.mark.parametrize(
        "text,kind",
        [
            ("this is too heavy", ModificationKind.TOO_HARD),
            ("way too easy", ModificationKind.TOO_EASY),
            ("I'm exhausted", ModificationKind.FATIGUE),
            ("feeling tired", ModificationKind.FATIGUE),
            ("one more set", ModificationKind.ADD_SET),
            ("only have 20 minutes", ModificationKind.TIME_CRUNCH),
        ],
    )
    def test_families(self, text, kind) -> None:
        intent = parse_intent(text)
        assert intent.type == IntentType.MODIFY_SESSION
        assert intent.payload.intent == kind

    def test_available_minutes(self) -> None:
        assert parse_intent("only have 20 minutes").payload.available_minutes == 20


class TestChat:
    def test_positive(self) -> None:
        intent = parse_intent("great workout today!")
        assert intent.type == IntentType.CHAT
        assert intent.payload.sentiment == Sentiment.POSITIVE
        assert intent.confidence == 0.3

    def test_negative(self) -> None:
        assert parse_intent("ugh this sucks").payload.sentiment == Sentiment.NEGATIVE

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_empty_input(self, text) -> None:
        intent = parse_intent(text)
        assert intent.type == IntentType.CHAT
        assert intent.confidence == 0.0

    def test_raw_input_preserved(self) -> None:
        assert parse_intent("  skip this ").raw_input == "  skip this "


class TestToModificationKind:
    def test_from_intent(self) -> None:
        assert to_modification_kind(parse_intent("too heavy")) == ModificationKind.TOO_HARD

    def test_named_skip(self) -> None:
        assert to_modification_kind(SkipExercisePayload("Squat")) == ModificationKind.SKIP_EXERCISE

    def test_swap_keeps_its_kind(self) -> None:
        payload = ModifySessionPayload(intent=ModificationKind.SWAP_EXERCISE)
        assert to_modification_kind(payload) == ModificationKind.SWAP_EXERCISE

    def test_non_modifications(self) -> None:
        assert to_modification_kind(parse_intent("great session")) is None
        assert to_modification_kind(None) is None
