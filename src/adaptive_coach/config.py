"""Environment-variable-based configuration for the adaptive coach.

Coaching thresholds are constants in models/enums.py; only operator-facing
knobs live here.
"""

from __future__ import annotations

import os

LOG_LEVEL: str = os.environ.get("ADAPTIVE_COACH_LOG_LEVEL", "INFO").upper()
HISTORY_WEEKS: int = int(os.environ.get("ADAPTIVE_COACH_HISTORY_WEEKS", "6"))
WEIGHT_UNIT: str = os.environ.get("ADAPTIVE_COACH_WEIGHT_UNIT", "lbs")
