"""Adaptive coach — live session adaptation, intent parsing and training analysis."""

from adaptive_coach.analysis import (
    analyze_training_history,
    detect_all_patterns,
    detect_user_journey,
)
from adaptive_coach.engine import SessionEngine
from adaptive_coach.intent import parse_intent, to_modification_kind
from adaptive_coach.phase_detector import PhaseDetector, detect_current_phase
from adaptive_coach.queue_builder import build_session_queue

__all__ = [
    "PhaseDetector",
    "SessionEngine",
    "analyze_training_history",
    "build_session_queue",
    "detect_all_patterns",
    "detect_current_phase",
    "detect_user_journey",
    "parse_intent",
    "to_modification_kind",
]

__version__ = "0.1.0"
