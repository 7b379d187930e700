"""Build history inputs from plain dicts, e.g. a JSON export of the data store.

Keys are snake_case field names. Enum values are given by name, in any case.
Missing optional fields fall back to the model defaults; a missing required
field (an id or a date that must exist) raises KeyError or ValueError for the
caller to report.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from adaptive_coach.models.enums import ConfidenceLevel, DisruptionType, Severity, Trend
from adaptive_coach.models.exercise import MovementMemory
from adaptive_coach.models.history import CompletedSession, Disruption, LoggedSet


def _date(value: Any) -> date | None:
    if value in (None, ""):
        return None
    return date.fromisoformat(str(value)[:10])


def _enum(enum_cls, value: Any, default=None):
    if value in (None, ""):
        return default
    return enum_cls[str(value).upper()]


def logged_set_from_dict(data: dict) -> LoggedSet:
    return LoggedSet(
        exercise_id=str(data["exercise_id"]),
        exercise_name=data.get("exercise_name") or "",
        muscle_group=data.get("muscle_group") or "unknown",
        actual_weight=data.get("actual_weight"),
        actual_reps=data.get("actual_reps"),
        actual_rpe=data.get("actual_rpe"),
        is_warmup=bool(data.get("is_warmup", False)),
    )


def session_from_dict(data: dict) -> CompletedSession:
    return CompletedSession(
        id=str(data["id"]),
        date_completed=_date(data.get("date_completed")),
        scheduled_date=_date(data.get("scheduled_date")),
        focus=data.get("focus") or "",
        duration_minutes=data.get("duration_minutes"),
        sets=tuple(logged_set_from_dict(s) for s in data.get("sets", ())),
    )


def memory_from_dict(data: dict) -> MovementMemory:
    return MovementMemory(
        exercise_id=str(data["exercise_id"]),
        exercise_name=data.get("exercise_name"),
        last_date=_date(data.get("last_date")),
        last_weight=data.get("last_weight"),
        last_reps=data.get("last_reps"),
        last_sets=data.get("last_sets"),
        last_rpe=data.get("last_rpe"),
        avg_rpe=data.get("avg_rpe"),
        typical_rep_max=data.get("typical_rep_max"),
        pr_e1rm=data.get("pr_e1rm"),
        exposure_count=int(data.get("exposure_count", 0)),
        confidence_level=_enum(
            ConfidenceLevel, data.get("confidence_level"), ConfidenceLevel.LOW
        ),
        trend=_enum(Trend, data.get("trend")),
    )


def disruption_from_dict(data: dict) -> Disruption:
    start = _date(data["start_date"])
    if start is None:
        raise ValueError(f"Disruption {data.get('id')!r} has no start_date")
    return Disruption(
        id=str(data["id"]),
        type=_enum(DisruptionType, data["type"]),
        start_date=start,
        end_date=_date(data.get("end_date")),
        severity=_enum(Severity, data.get("severity"), Severity.MODERATE),
        notes=data.get("notes"),
    )
