"""Operator CLI for the adaptive coach.

Usage:
    adaptive-coach parse "3x10 curls with 30lbs"
    adaptive-coach analyze history.json --as-of 2026-03-01
    python -m adaptive_coach.cli analyze history.json --phase deload --weeks-in-phase 1

The history file is a JSON object with optional ``sessions``, ``memory`` and
``disruptions`` lists, plus optional ``current_phase`` and ``weeks_in_phase``.
"""

from __future__ import annotations

import argparse
import json
import logging
from datetime import date

from adaptive_coach import config
from adaptive_coach.analysis.history import analyze_training_history
from adaptive_coach.intent.parser import parse_intent
from adaptive_coach.phase_detector import PhaseDetector
from adaptive_coach.serialization import (
    decision_trace_to_dict,
    disruption_from_dict,
    history_analysis_to_dict,
    intent_to_dict,
    memory_from_dict,
    phase_detection_to_dict,
    session_from_dict,
)

logger = logging.getLogger(__name__)


def _print_json(payload: dict) -> None:
    print(json.dumps(payload, indent=2))


def _cmd_parse(args: argparse.Namespace) -> int:
    intent = parse_intent(args.text)
    logger.info("Parsed %s with confidence %.2f", intent.type.name, intent.confidence)
    _print_json(intent_to_dict(intent))
    return 0


def _load_history_file(path: str) -> dict:
    with open(path) as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("history file must contain a JSON object")
    return data


def _cmd_analyze(args: argparse.Namespace) -> int:
    try:
        data = _load_history_file(args.history)
        sessions = [session_from_dict(s) for s in data.get("sessions", [])]
        memory = [memory_from_dict(m) for m in data.get("memory", [])]
        disruptions = [disruption_from_dict(d) for d in data.get("disruptions", [])]
    except FileNotFoundError:
        logger.error("History file not found at %s", args.history)
        return 1
    except (ValueError, KeyError, TypeError) as exc:
        logger.error("Malformed history file %s: %s", args.history, exc)
        return 1

    analysis = analyze_training_history(
        sessions,
        memory,
        disruptions,
        window_weeks=args.weeks,
        as_of=args.as_of,
    )
    logger.info(
        "Analyzed %d sessions over %d weeks (data quality %s)",
        analysis.total_sessions,
        analysis.weeks_analyzed,
        analysis.data_quality.name,
    )

    detection, trace = PhaseDetector().detect(
        analysis,
        disruptions,
        current_phase_label=args.phase or data.get("current_phase"),
        weeks_in_phase=(
            args.weeks_in_phase
            if args.weeks_in_phase is not None
            else data.get("weeks_in_phase")
        ),
        as_of=args.as_of,
    )

    output = {
        "analysis": history_analysis_to_dict(analysis),
        "phase": phase_detection_to_dict(detection),
    }
    if args.trace:
        output["trace"] = decision_trace_to_dict(trace)
    _print_json(output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Adaptive coach operator tools")
    sub = parser.add_subparsers(dest="command", required=True)

    parse_cmd = sub.add_parser("parse", help="Parse one athlete utterance into an intent")
    parse_cmd.add_argument("text", help="Free-form text, quoted")
    parse_cmd.set_defaults(func=_cmd_parse)

    analyze = sub.add_parser(
        "analyze", help="Analyze a history export and detect the training phase"
    )
    analyze.add_argument("history", help="Path to a history JSON file")
    analyze.add_argument(
        "--weeks",
        type=int,
        default=config.HISTORY_WEEKS,
        help="Trailing analysis window in weeks (default: %(default)s)",
    )
    analyze.add_argument(
        "--as-of",
        type=date.fromisoformat,
        default=None,
        help="Reference date, YYYY-MM-DD (default: today)",
    )
    analyze.add_argument("--phase", default=None, help="Current profile phase label")
    analyze.add_argument("--weeks-in-phase", type=int, default=None)
    analyze.add_argument(
        "--trace", action="store_true", help="Include the phase rule trace"
    )
    analyze.set_defaults(func=_cmd_analyze)
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
