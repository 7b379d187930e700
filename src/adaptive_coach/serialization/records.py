"""JSON-friendly dict views of coach outputs.

All functions are pure (no I/O). Enum members are written by name in lower
case and dates as ISO strings, so the result can go straight to json.dumps.
"""

from __future__ import annotations

import dataclasses
from datetime import date, datetime
from enum import Enum
from typing import Any

from adaptive_coach.models.decision import AgentDecision
from adaptive_coach.models.decision_trace import DecisionTrace
from adaptive_coach.models.history import HistoryAnalysis, PhaseDetection
from adaptive_coach.models.intent import Intent
from adaptive_coach.models.journey import JourneyDetection
from adaptive_coach.models.session import SetRecord


def _plain(value: Any) -> Any:
    """Recursively convert enums, dates, tuples and dataclasses to JSON types."""
    if isinstance(value, Enum):
        return value.name.lower()
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _plain(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, dict):
        return {_plain(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def set_record_to_dict(record: SetRecord) -> dict:
    """Persistence payload for a logged set (camelCase keys)."""
    return record.as_payload()


def intent_to_dict(intent: Intent) -> dict:
    return {
        "type": _plain(intent.type),
        "payload": _plain(intent.payload),
        "confidence": round(intent.confidence, 2),
        "rawInput": intent.raw_input,
    }


def decision_to_dict(decision: AgentDecision) -> dict:
    return {
        "type": _plain(decision.type),
        "reasoning": decision.reasoning,
        "appliedAt": decision.applied_at.isoformat(),
        "origin": _plain(decision.origin),
        "exerciseId": decision.exercise_id,
        "setId": decision.set_id,
    }


def phase_detection_to_dict(detection: PhaseDetection) -> dict:
    return {
        "phase": _plain(detection.phase),
        "confidence": _plain(detection.confidence),
        "reasoning": detection.reasoning,
        "suggestedDurationWeeks": detection.suggested_duration_weeks,
        "ruleId": detection.rule_id,
    }


def decision_trace_to_dict(trace: DecisionTrace) -> dict:
    return {
        "rules": [
            {
                "ruleId": result.rule_id,
                "status": _plain(result.status),
                "explanation": result.explanation,
            }
            for result in trace.rule_results
        ],
        "decidingRule": trace.deciding_rule,
        "detection": (
            phase_detection_to_dict(trace.final_detection)
            if trace.final_detection is not None
            else None
        ),
    }


def history_analysis_to_dict(analysis: HistoryAnalysis) -> dict:
    """Full analysis, with the derived tracked-exercise count."""
    result = _plain(analysis)
    result["tracked_exercise_count"] = analysis.tracked_exercise_count
    return result


def journey_detection_to_dict(detection: JourneyDetection) -> dict:
    return _plain(detection)
