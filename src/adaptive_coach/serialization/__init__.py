"""Serialization module — dict views of coach outputs and loaders for history inputs."""

from adaptive_coach.serialization.loaders import (
    disruption_from_dict,
    memory_from_dict,
    session_from_dict,
)
from adaptive_coach.serialization.records import (
    decision_to_dict,
    decision_trace_to_dict,
    history_analysis_to_dict,
    intent_to_dict,
    journey_detection_to_dict,
    phase_detection_to_dict,
    set_record_to_dict,
)

__all__ = [
    "decision_to_dict",
    "decision_trace_to_dict",
    "disruption_from_dict",
    "history_analysis_to_dict",
    "intent_to_dict",
    "journey_detection_to_dict",
    "memory_from_dict",
    "phase_detection_to_dict",
    "session_from_dict",
    "set_record_to_dict",
]
