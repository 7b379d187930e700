"""Tests for the operator CLI."""

from __future__ import annotations

import json

from adaptive_coach import config
from adaptive_coach.cli import build_parser, main


def _write_history(tmp_path, payload) -> str:
    path = tmp_path / "history.json"
    path.write_text(json.dumps(payload))
    return str(path)


class TestParseCommand:
    def test_prints_intent(self, capsys) -> None:
        assert main(["parse", "my knee hurts"]) == 0
        output = json.loads(capsys.readouterr().out)
        assert output["type"] == "modify_session"
        assert output["payload"]["body_part"] == "knee"


class TestAnalyzeCommand:
    def test_analysis_and_phase(self, tmp_path, capsys) -> None:
        path = _write_history(
            tmp_path,
            {
                "sessions": [
                    {"id": "w1", "date_completed": "2026-02-27", "focus": "Push",
                     "sets": [{"exercise_id": "ex-bench", "actual_weight": 60,
                               "actual_reps": 8, "actual_rpe": 7}]},
                    {"id": "w2", "date_completed": "2026-03-01", "focus": "Pull"},
                ],
                "memory": [{"exercise_id": "ex-bench", "trend": "stagnant", "exposure_count": 4}],
                "disruptions": [],
            },
        )
        assert main(["analyze", path, "--as-of", "2026-03-02", "--trace"]) == 0
        output = json.loads(capsys.readouterr().out)
        assert output["analysis"]["total_sessions"] == 2
        assert output["analysis"]["total_volume"] == 480.0
        # 2 sessions over 6 weeks is low frequency
        assert output["phase"]["ruleId"] == "low_frequency"
        assert output["trace"]["decidingRule"] == "low_frequency"

    def test_phase_from_file(self, tmp_path, capsys) -> None:
        path = _write_history(tmp_path, {"current_phase": "deload", "weeks_in_phase": 1})
        assert main(["analyze", path, "--as-of", "2026-03-02"]) == 0
        output = json.loads(capsys.readouterr().out)
        assert output["phase"]["ruleId"] == "phase_transition"
        assert "trace" not in output

    def test_missing_file(self, tmp_path) -> None:
        assert main(["analyze", str(tmp_path / "nope.json")]) == 1

    def test_malformed_file(self, tmp_path) -> None:
        path = _write_history(tmp_path, {"sessions": [{"date_completed": "2026-03-01"}]})
        assert main(["analyze", path]) == 1

    def test_non_object_file(self, tmp_path) -> None:
        path = _write_history(tmp_path, [1, 2, 3])
        assert main(["analyze", path]) == 1


class TestParser:
    def test_defaults(self) -> None:
        args = build_parser().parse_args(["analyze", "h.json"])
        assert args.weeks == config.HISTORY_WEEKS
        assert args.as_of is None
        assert args.trace is False
