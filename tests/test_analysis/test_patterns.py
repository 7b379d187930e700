"""Tests for behavioral pattern detection."""

from __future__ import annotations

import pytest

from adaptive_coach.analysis.patterns import (
    classify_split,
    detect_all_patterns,
    detect_exercise_pairings,
    detect_training_days,
    detect_training_split,
    matches_pattern,
    normalize_focus,
    pattern_stability,
    should_offer_structure,
)
from adaptive_coach.models.enums import PatternType, SplitType


class TestNormalizeFocus:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Push (Chest & Triceps)", "push"),
            ("Chest+Back", "chest + back"),
            ("  UPPER   body ", "upper body"),
            (None, ""),
        ],
    )
    def test_normalize(self, raw, expected) -> None:
        assert normalize_focus(raw) == expected


class TestClassifySplit:
    def test_push_pull_legs_wins(self) -> None:
        split_type, splits = classify_split(["push", "pull", "legs", "upper"])
        assert split_type == SplitType.PUSH_PULL_LEGS
        assert splits == ["Push", "Pull", "Legs"]

    def test_upper_lower(self) -> None:
        assert classify_split(["upper", "lower"])[0] == SplitType.UPPER_LOWER

    def test_body_part(self) -> None:
        split_type, splits = classify_split(["chest", "back", "legs"])
        assert split_type == SplitType.BODY_PART
        assert splits == ["Chest", "Back", "Leg"]

    def test_full_body(self) -> None:
        assert classify_split(["full body"])[0] == SplitType.FULL_BODY

    def test_custom(self) -> None:
        assert classify_split(["sprints", "olympic"])[0] == SplitType.CUSTOM

    def test_nothing_to_label(self) -> None:
        assert classify_split(["sprints"]) is None
        assert classify_split([]) is None


class TestDetectors:
    def test_too_few_sessions_yields_nothing(self, make_session) -> None:
        sessions = [make_session(i, focus="Push") for i in range(3)]
        assert detect_all_patterns(sessions) == []

    def test_split_pattern(self, make_session) -> None:
        focuses = ["Push", "Pull", "Legs"]
        sessions = [make_session(i * 2, focus=focuses[i % 3]) for i in range(6)]
        pattern = detect_training_split(sessions)
        assert pattern is not None
        assert pattern.type == PatternType.TRAINING_SPLIT
        assert pattern.name == "Push/Pull/Legs"
        assert pattern.confidence == 1.0
        assert pattern.data["splits"] == ["Push", "Pull", "Legs"]

    def test_split_needs_six_sessions(self, make_session) -> None:
        sessions = [make_session(i, focus="Upper" if i % 2 else "Lower") for i in range(5)]
        assert detect_training_split(sessions) is None

    def test_exercise_pairing(self, make_session) -> None:
        sessions = [make_session(i * 2, exercises=("Squat", "Leg Press")) for i in range(5)]
        (pairing,) = detect_exercise_pairings(sessions)
        assert pairing.name == "Leg Press + Squat"
        assert pairing.confidence == 1.0
        assert pairing.data["co_occurrence"] == 5

    def test_rare_pairing_ignored(self, make_session) -> None:
        sessions = [make_session(i, exercises=("Squat",)) for i in range(4)]
        sessions += [make_session(10 + i, exercises=("Squat", "Curl")) for i in range(2)]
        assert detect_exercise_pairings(sessions) == []

    def test_training_days(self, make_session) -> None:
        # AS_OF is a Monday; weekly sessions all land on Mondays
        sessions = [make_session(7 * i) for i in range(8)]
        pattern = detect_training_days(sessions)
        assert pattern.data["preferred_days"] == ["Monday"]
        assert pattern.confidence == 1.0

    def test_all_patterns_combined(self, make_session) -> None:
        focuses = ["Upper", "Lower"]
        sessions = [
            make_session(7 * (i // 2) + (i % 2) * 3, focus=focuses[i % 2],
                         exercises=("Squat", "Bench Press"))
            for i in range(8)
        ]
        types = [p.type for p in detect_all_patterns(sessions)]
        assert types == [
            PatternType.TRAINING_SPLIT,
            PatternType.EXERCISE_PAIRING,
            PatternType.TRAINING_DAY,
        ]


class TestStructureOffer:
    def _ppl(self, make_session, count: int):
        focuses = ["Push", "Pull", "Legs"]
        return [make_session(i * 2, focus=focuses[i % 3]) for i in range(count)]

    def test_matches_pattern(self, make_session) -> None:
        sessions = self._ppl(make_session, 6)
        pattern = detect_training_split(sessions)
        assert matches_pattern(make_session(1, focus="Pull (Back)"), pattern) is True
        assert matches_pattern(make_session(1, focus="Cardio"), pattern) is False

    def test_stable_split_is_offered(self, make_session) -> None:
        sessions = self._ppl(make_session, 9)
        pattern = detect_training_split(sessions)
        assert pattern_stability(pattern, sessions) == 1.0
        assert should_offer_structure(pattern, sessions) is True

    def test_short_history_is_not_offered(self, make_session) -> None:
        sessions = self._ppl(make_session, 6)
        pattern = detect_training_split(sessions)
        assert should_offer_structure(pattern, sessions) is False
