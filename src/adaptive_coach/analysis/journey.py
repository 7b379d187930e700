"""Journey detection: which way of using the app an athlete gravitates to.

Journeys are inferred from behavior rather than asked for:

- Freestyler: ad-hoc workouts, no blocks, adds exercises mid-workout.
- Planner: builds blocks and follows the schedule.
- Guided: checks readiness, talks to the coach, takes daily suggestions.
"""

from __future__ import annotations

import dataclasses

from adaptive_coach.models.enums import (
    JOURNEY_HIGH_GAP,
    JOURNEY_HIGH_MIN_SESSIONS,
    JOURNEY_MEDIUM_GAP,
    JOURNEY_MEDIUM_MIN_SESSIONS,
    JOURNEY_MIN_SESSIONS,
    ConfidenceLevel,
    UserJourney,
)
from adaptive_coach.models.journey import (
    JourneyDetection,
    JourneyScores,
    JourneySignals,
    JourneyUpgrade,
)


def _normalize(value: int, max_for_full: float) -> float:
    return min(1.0, max(0, value) / max_for_full)


def _clamp(score: float) -> float:
    return max(0.0, min(1.0, score))


def calculate_journey_scores(signals: JourneySignals) -> JourneyScores:
    """Affinity score in [0, 1] for each journey."""
    freestyler = (
        _normalize(signals.unstructured_workouts, 10) * 0.35
        + _normalize(signals.quick_start_usage, 8) * 0.25
        + _normalize(signals.exercises_added_mid_workout, 6) * 0.15
        + (1 - _normalize(signals.blocks_created, 2)) * 0.15
        + (1 - _normalize(signals.block_workouts_completed, 15)) * 0.1
    )
    planner = (
        _normalize(signals.blocks_created, 2) * 0.3
        + _normalize(signals.block_workouts_completed, 15) * 0.4
        + _normalize(signals.scheduled_workouts_followed, 10) * 0.3
    )
    guided = (
        _normalize(signals.readiness_check_ins, 14) * 0.35
        + _normalize(signals.coach_interactions, 10) * 0.35
        + _normalize(signals.daily_suggestions_used, 8) * 0.3
    )
    return JourneyScores(
        freestyler=_clamp(freestyler), planner=_clamp(planner), guided=_clamp(guided)
    )


def determine_confidence(scores: JourneyScores, total_workouts: int) -> ConfidenceLevel:
    """Confidence grows with the lead of the top journey and with data volume."""
    if total_workouts < JOURNEY_MIN_SESSIONS:
        return ConfidenceLevel.LOW

    ranked = sorted(scores.as_dict().values(), reverse=True)
    gap = ranked[0] - ranked[1]
    if gap > JOURNEY_HIGH_GAP and total_workouts >= JOURNEY_HIGH_MIN_SESSIONS:
        return ConfidenceLevel.HIGH
    if gap > JOURNEY_MEDIUM_GAP and total_workouts >= JOURNEY_MEDIUM_MIN_SESSIONS:
        return ConfidenceLevel.MED
    return ConfidenceLevel.LOW


def detect_upgrade_opportunity(
    primary: UserJourney, signals: JourneySignals, scores: JourneyScores
) -> JourneyUpgrade | None:
    if (
        primary == UserJourney.FREESTYLER
        and signals.unstructured_workouts >= 8
        and signals.quick_start_usage >= 6
    ):
        return JourneyUpgrade(
            from_journey=UserJourney.FREESTYLER,
            to_journey=UserJourney.PLANNER,
            reason="You've logged consistently. Ready for a structured program?",
            prompt=(
                "We noticed you train regularly. Want us to build a personalized "
                "program based on your workout history?"
            ),
        )

    if (
        primary == UserJourney.PLANNER
        and signals.blocks_created >= 1
        and signals.scheduled_workouts_followed < signals.block_workouts_completed * 0.3
    ):
        return JourneyUpgrade(
            from_journey=UserJourney.PLANNER,
            to_journey=UserJourney.FREESTYLER,
            reason="Your schedule seems flexible",
            prompt=(
                "Looks like you prefer flexibility over rigid schedules. Want to "
                "switch to freestyle mode where we just remember your exercises?"
            ),
        )

    if (
        primary == UserJourney.FREESTYLER
        and signals.readiness_check_ins >= 7
        and scores.guided > 0.4
    ):
        return JourneyUpgrade(
            from_journey=UserJourney.FREESTYLER,
            to_journey=UserJourney.GUIDED,
            reason="You check in regularly",
            prompt=(
                "Since you're tracking readiness, want the coach to suggest daily "
                "workouts based on how you're feeling?"
            ),
        )

    return None


def detect_user_journey(signals: JourneySignals) -> JourneyDetection:
    """Classify the athlete's preferred journey from behavioral signals.

    Ties between journeys resolve in FREESTYLER, PLANNER, GUIDED order.
    """
    scores = calculate_journey_scores(signals)
    ranked = sorted(scores.as_dict().items(), key=lambda item: (-item[1], item[0]))
    primary = ranked[0][0]
    total = signals.total_workouts

    return JourneyDetection(
        primary_journey=primary,
        confidence=determine_confidence(scores, total),
        scores=scores,
        signals=signals,
        is_new_user=total < JOURNEY_MIN_SESSIONS,
        suggested_upgrade=detect_upgrade_opportunity(primary, signals, scores),
    )


def record_session_signals(
    signals: JourneySignals,
    exercises_added: int = 0,
    used_daily_suggestion: bool = False,
) -> JourneySignals:
    """Fold one finished session's instrumentation into the running signals.

    ``exercises_added`` is normally SessionEngine.exercises_added_count.
    """
    return dataclasses.replace(
        signals,
        exercises_added_mid_workout=signals.exercises_added_mid_workout + max(0, exercises_added),
        daily_suggestions_used=signals.daily_suggestions_used + int(used_daily_suggestion),
    )
