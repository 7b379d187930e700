"""Readiness scoring from the daily 1-5 check-in.

Score = sleep×8 + (6 − soreness)×6 + (6 − stress)×6, giving 20-100. Sleep is
weighted heaviest; soreness and stress are inverted so that higher is always
better.
"""

from __future__ import annotations

from adaptive_coach.models.enums import (
    READINESS_FULL_THRESHOLD,
    READINESS_HIGH_WEIGHT_FACTOR,
    READINESS_HIGH_WEIGHT_THRESHOLD,
    READINESS_LIGHT_THRESHOLD,
    READINESS_LOW_WEIGHT_FACTOR,
    READINESS_LOW_WEIGHT_THRESHOLD,
    READINESS_MODERATE_THRESHOLD,
    READINESS_SLEEP_WEIGHT,
    READINESS_SORENESS_WEIGHT,
    READINESS_STRESS_WEIGHT,
    ReadinessAdjustment,
)
from adaptive_coach.models.readiness import ReadinessAnalysis, ReadinessSnapshot

_MESSAGES: dict[ReadinessAdjustment, str] = {
    ReadinessAdjustment.FULL: "You're primed for a great session. Let's push it!",
    ReadinessAdjustment.MODERATE: (
        "Solid foundation today. We'll keep intensity but watch for fatigue signals."
    ),
    ReadinessAdjustment.LIGHT: (
        "Recovery day vibes. Let's dial back intensity and focus on movement quality."
    ),
    ReadinessAdjustment.REST: (
        "Your body's asking for a break. Consider active recovery or rest today."
    ),
}


def _clamp_rating(value: int) -> int:
    return max(1, min(5, int(value)))


def calculate_readiness_score(
    sleep_quality: int, muscle_soreness: int, stress_level: int
) -> float:
    """Combine the three 1-5 ratings into a 20-100 readiness score.

    Out-of-range ratings are clamped to 1-5.
    """
    sleep = _clamp_rating(sleep_quality)
    soreness = _clamp_rating(muscle_soreness)
    stress = _clamp_rating(stress_level)
    return float(
        sleep * READINESS_SLEEP_WEIGHT
        + (6 - soreness) * READINESS_SORENESS_WEIGHT
        + (6 - stress) * READINESS_STRESS_WEIGHT
    )


def classify_readiness(score: float) -> ReadinessAdjustment:
    """Map a readiness score to the suggested session adjustment."""
    if score >= READINESS_FULL_THRESHOLD:
        return ReadinessAdjustment.FULL
    if score >= READINESS_MODERATE_THRESHOLD:
        return ReadinessAdjustment.MODERATE
    if score >= READINESS_LIGHT_THRESHOLD:
        return ReadinessAdjustment.LIGHT
    return ReadinessAdjustment.REST


def readiness_weight_factor(score: float | None) -> float:
    """Multiplier applied to a suggested starting weight.

    Low readiness trims the suggestion by 10%, high readiness adds 2.5%.
    Without a check-in the suggestion is left alone.
    """
    if score is None:
        return 1.0
    if score < READINESS_LOW_WEIGHT_THRESHOLD:
        return READINESS_LOW_WEIGHT_FACTOR
    if score >= READINESS_HIGH_WEIGHT_THRESHOLD:
        return READINESS_HIGH_WEIGHT_FACTOR
    return 1.0


def analyze_readiness(snapshot: ReadinessSnapshot) -> ReadinessAnalysis:
    """Score a check-in and attach the guidance shown to the athlete."""
    score = snapshot.score
    adjustment = classify_readiness(score)

    recommendations: list[str] = []
    if snapshot.sleep_quality <= 2:
        recommendations.append("Poor sleep detected. Consider limiting high-skill movements.")
    if snapshot.muscle_soreness >= 4:
        recommendations.append("High soreness. We'll reduce volume on affected muscle groups.")
    if snapshot.stress_level >= 4:
        recommendations.append("Elevated stress. Training can help, but we'll keep it controlled.")
    if adjustment == ReadinessAdjustment.FULL:
        recommendations.append("Great day to attempt PRs or push intensity.")
    elif adjustment == ReadinessAdjustment.MODERATE:
        recommendations.append("Stick to your planned weights and reps.")
    elif adjustment == ReadinessAdjustment.REST:
        recommendations.append("Focus on mobility, light cardio, or complete rest.")

    return ReadinessAnalysis(
        score=score,
        adjustment=adjustment,
        message=_MESSAGES[adjustment],
        recommendations=tuple(recommendations),
    )
