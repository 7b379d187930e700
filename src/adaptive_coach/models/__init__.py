"""Data models for the adaptive coach."""

from adaptive_coach.models.decision import AgentDecision
from adaptive_coach.models.decision_trace import DecisionTrace, RuleResult, RuleStatus
from adaptive_coach.models.enums import (
    ConfidenceLevel,
    DecisionOrigin,
    DecisionType,
    DisruptionType,
    IntentType,
    LifeEvent,
    Modality,
    ModificationKind,
    PatternType,
    ReadinessAdjustment,
    ReadinessPolicy,
    Sentiment,
    SetStatus,
    Severity,
    SplitType,
    TrainingPhase,
    Trend,
    UserJourney,
)
from adaptive_coach.models.exercise import Exercise, MovementMemory
from adaptive_coach.models.history import (
    CompletedSession,
    DetectedPattern,
    Disruption,
    ExerciseProgression,
    HistoryAnalysis,
    LoggedSet,
    PhaseDetection,
    TrainingGap,
)
from adaptive_coach.models.intent import (
    AddExercisePayload,
    ChatPayload,
    Intent,
    LogCardioPayload,
    LogWorkoutPayload,
    ModifySessionPayload,
    SkipExercisePayload,
)
from adaptive_coach.models.journey import (
    JourneyDetection,
    JourneyScores,
    JourneySignals,
    JourneyUpgrade,
)
from adaptive_coach.models.phase_context import PhaseContext
from adaptive_coach.models.readiness import ReadinessAnalysis, ReadinessSnapshot
from adaptive_coach.models.session import (
    CompletedExerciseSets,
    ExerciseContext,
    SessionExercise,
    SessionProgress,
    SessionSet,
    SetRecord,
    SetResult,
)

__all__ = [
    "AddExercisePayload",
    "AgentDecision",
    "ChatPayload",
    "CompletedExerciseSets",
    "CompletedSession",
    "ConfidenceLevel",
    "DecisionOrigin",
    "DecisionTrace",
    "DecisionType",
    "DetectedPattern",
    "Disruption",
    "DisruptionType",
    "Exercise",
    "ExerciseContext",
    "ExerciseProgression",
    "HistoryAnalysis",
    "Intent",
    "IntentType",
    "JourneyDetection",
    "JourneyScores",
    "JourneySignals",
    "JourneyUpgrade",
    "LifeEvent",
    "LogCardioPayload",
    "LogWorkoutPayload",
    "LoggedSet",
    "Modality",
    "ModificationKind",
    "ModifySessionPayload",
    "MovementMemory",
    "PatternType",
    "PhaseContext",
    "PhaseDetection",
    "ReadinessAdjustment",
    "ReadinessAnalysis",
    "ReadinessPolicy",
    "ReadinessSnapshot",
    "RuleResult",
    "RuleStatus",
    "Sentiment",
    "SessionExercise",
    "SessionProgress",
    "SessionSet",
    "SetRecord",
    "SetResult",
    "SetStatus",
    "Severity",
    "SkipExercisePayload",
    "SplitType",
    "TrainingGap",
    "TrainingPhase",
    "Trend",
    "UserJourney",
]
