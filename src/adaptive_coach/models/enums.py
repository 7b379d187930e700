"""Enumerations and coaching constants for the adaptive coach.

Every threshold a rule table or analyzer compares against lives here so the
decision policy can be read in one place.
"""

from enum import IntEnum, auto


class Modality(IntEnum):
    """How an exercise is measured."""

    STRENGTH = auto()
    CARDIO = auto()
    HYBRID = auto()


class SetStatus(IntEnum):
    """Lifecycle of a set inside a live session. COMPLETED is terminal."""

    PENDING = auto()
    ACTIVE = auto()
    COMPLETED = auto()


class Trend(IntEnum):
    """Per-exercise performance trend computed upstream in movement memory."""

    PROGRESSING = auto()
    STAGNANT = auto()
    REGRESSING = auto()


class ConfidenceLevel(IntEnum):
    """Coarse confidence used for data quality and phase detection."""

    LOW = auto()
    MED = auto()
    HIGH = auto()


class TrainingPhase(IntEnum):
    """Where the athlete sits in the macro cycle."""

    REBUILDING = auto()
    ACCUMULATING = auto()
    INTENSIFYING = auto()
    MAINTAINING = auto()
    DELOADING = auto()


class DisruptionType(IntEnum):
    ILLNESS = auto()
    TRAVEL = auto()
    INJURY = auto()
    LIFE_STRESS = auto()
    SCHEDULE = auto()


class Severity(IntEnum):
    MINOR = auto()
    MODERATE = auto()
    MAJOR = auto()


class DecisionType(IntEnum):
    """Kind of change recorded in an AgentDecision."""

    WEIGHT_INCREASE = auto()
    WEIGHT_DECREASE = auto()
    VOLUME_ADJUSTMENT = auto()
    EXERCISE_SWAP = auto()
    REST_SUGGESTION = auto()


class DecisionOrigin(IntEnum):
    """Who asked for a change: the engine on its own, or the athlete."""

    AGENT = auto()
    ATHLETE = auto()


class ReadinessPolicy(IntEnum):
    """Global volume policy applied once at session start."""

    NONE = auto()
    FATIGUE = auto()
    PEAK = auto()


class ReadinessAdjustment(IntEnum):
    """Suggested session adjustment derived from a readiness score."""

    FULL = auto()
    MODERATE = auto()
    LIGHT = auto()
    REST = auto()


class ModificationKind(IntEnum):
    """Athlete-requested in-session modification."""

    PAIN = auto()
    TOO_HARD = auto()
    TOO_EASY = auto()
    FATIGUE = auto()
    TIME_CRUNCH = auto()
    ADD_SET = auto()
    SKIP_EXERCISE = auto()
    SWAP_EXERCISE = auto()


class LifeEvent(IntEnum):
    TRAVEL = auto()
    SICKNESS = auto()
    INJURY = auto()
    STRESS = auto()


class IntentType(IntEnum):
    """Closed set of intents the parser can produce."""

    LOG_WORKOUT = auto()
    LOG_CARDIO = auto()
    MODIFY_SESSION = auto()
    ADD_EXERCISE = auto()
    SKIP_EXERCISE = auto()
    CHAT = auto()


class Sentiment(IntEnum):
    POSITIVE = auto()
    NEUTRAL = auto()
    NEGATIVE = auto()


class PatternType(IntEnum):
    TRAINING_SPLIT = auto()
    EXERCISE_PAIRING = auto()
    TRAINING_DAY = auto()


class SplitType(IntEnum):
    """Training split labels, in detection priority order."""

    PUSH_PULL_LEGS = auto()
    UPPER_LOWER = auto()
    BODY_PART = auto()
    FULL_BODY = auto()
    CUSTOM = auto()


class UserJourney(IntEnum):
    FREESTYLER = auto()
    PLANNER = auto()
    GUIDED = auto()


# ---------------------------------------------------------------------------
# Load rounding and in-session load ladder
# ---------------------------------------------------------------------------
LOAD_INCREMENT = 2.5  # Smallest plate-pair step; all adjusted loads snap to it

# Ladder thresholds, evaluated against the logged set's RPE and target reps
RPE_VERY_EASY = 6.0        # RPE below this → +5%
RPE_EASY = 6.5             # RPE at or below this with reps hit → +2.5%
RPE_GRINDER = 9.5          # RPE at or above this → -5%
RPE_NEAR_FAILURE = 9.0     # RPE at or above this with reps missed → -7.5%

LOAD_BUMP_LARGE = 1.05
LOAD_BUMP_SMALL = 1.025
LOAD_BACKOFF_SMALL = 0.95
LOAD_BACKOFF_LARGE = 0.925

# Athlete-requested load changes
TOO_HARD_MULTIPLIER = 0.90
TOO_EASY_MULTIPLIER = 1.05

# Defaults when a set carries no prescription
DEFAULT_TARGET_REPS = 8
DEFAULT_TARGET_RPE = 7.0
DEFAULT_SET_COUNT = 3

# ---------------------------------------------------------------------------
# Readiness
# ---------------------------------------------------------------------------
# Score = sleep*8 + (6 - soreness)*6 + (6 - stress)*6, range 20-100
READINESS_SLEEP_WEIGHT = 8
READINESS_SORENESS_WEIGHT = 6
READINESS_STRESS_WEIGHT = 6

READINESS_FATIGUE_THRESHOLD = 40   # score < 40 → drop the last set everywhere
READINESS_PEAK_THRESHOLD = 85      # score > 85 → add a challenge set

READINESS_FULL_THRESHOLD = 80
READINESS_MODERATE_THRESHOLD = 60
READINESS_LIGHT_THRESHOLD = 40

# Suggested starting weight scaling from readiness
READINESS_LOW_WEIGHT_THRESHOLD = 50
READINESS_HIGH_WEIGHT_THRESHOLD = 80
READINESS_LOW_WEIGHT_FACTOR = 0.90
READINESS_HIGH_WEIGHT_FACTOR = 1.025

# Challenge ("peak mode") set
CHALLENGE_LOAD_MULTIPLIER = 1.05
CHALLENGE_REP_REDUCTION = 2
CHALLENGE_DEFAULT_REPS = 3
CHALLENGE_TARGET_RPE = 9.0

# ---------------------------------------------------------------------------
# Life events (present-session only)
# ---------------------------------------------------------------------------
TRAVEL_LOAD_MULTIPLIER = 0.5
TRAVEL_TARGET_REPS = 15
TRAVEL_TARGET_RPE = 6.0
STRESS_LOAD_MULTIPLIER = 0.8
STRESS_RPE_REDUCTION = 1.0
STRESS_RPE_FLOOR = 5.0
SICKNESS_LIGHT_REPS = 10
SICKNESS_LIGHT_RPE = 4.0

# ---------------------------------------------------------------------------
# History analysis
# ---------------------------------------------------------------------------
DEFAULT_WINDOW_WEEKS = 6
TRAINING_GAP_DAYS = 7            # consecutive sessions more than this apart form a gap
MIN_EXPOSURES_FOR_TREND = 2
MIN_SESSIONS_FOR_SPLIT_LABEL = 3
TOP_PREFERRED_DAYS = 3

# Data quality scoring (max 100)
DATA_QUALITY_HIGH_SCORE = 70
DATA_QUALITY_MED_SCORE = 40
DATA_QUALITY_SESSION_TIERS = ((12, 30), (6, 20), (3, 10))
DATA_QUALITY_MEMORY_TIERS = ((10, 30), (5, 20), (2, 10))
DATA_QUALITY_RPE_POINTS = 20
DATA_QUALITY_CONFIDENCE_POINTS = 20

# Pattern detection
MIN_SESSIONS_FOR_PATTERNS = 4
MIN_SESSIONS_FOR_SPLIT_PATTERN = 6
MIN_SESSIONS_FOR_PAIRINGS = 5
MIN_SESSIONS_FOR_DAY_PATTERN = 8
SPLIT_RECENT_SESSIONS = 20
SPLIT_TOP_FOCUSES = 6
SPLIT_MIN_CONFIDENCE = 0.5
PAIRING_MIN_CO_OCCURRENCE = 3
PAIRING_MIN_RATE = 0.6
PAIRING_MAX_RESULTS = 5
DAY_MIN_SHARE = 0.1
DAY_MAX_RESULTS = 4
BODY_PART_SPLIT_MIN_PARTS = 3

# ---------------------------------------------------------------------------
# Phase detection
# ---------------------------------------------------------------------------
RECENT_GAP_WINDOW_DAYS = 14
LONG_GAP_DAYS = 10
SHORT_GAP_DAYS = 7
LOW_FREQUENCY_SESSIONS_PER_WEEK = 2.0
LOW_FREQUENCY_MIN_SESSIONS = 2
REGRESSION_MIN_COUNT = 3
REGRESSION_MAX_SHARE = 0.3
DELOAD_COMPLETE_WEEKS = 1
INTENSIFICATION_MAX_WEEKS = 4

DISRUPTION_REBUILD_WEEKS = {
    Severity.MAJOR: 3,
    Severity.MODERATE: 2,
    Severity.MINOR: 1,
}

# ---------------------------------------------------------------------------
# Journey detection
# ---------------------------------------------------------------------------
JOURNEY_MIN_SESSIONS = 3
JOURNEY_HIGH_GAP = 0.3
JOURNEY_HIGH_MIN_SESSIONS = 10
JOURNEY_MEDIUM_GAP = 0.15
JOURNEY_MEDIUM_MIN_SESSIONS = 5
