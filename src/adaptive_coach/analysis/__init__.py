"""History, pattern and journey analysis — pure functions over past training."""

from adaptive_coach.analysis.history import analyze_training_history
from adaptive_coach.analysis.journey import detect_user_journey
from adaptive_coach.analysis.patterns import detect_all_patterns

__all__ = ["analyze_training_history", "detect_all_patterns", "detect_user_journey"]
