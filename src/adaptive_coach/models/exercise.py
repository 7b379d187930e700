"""Catalog and movement-memory records — read-only inputs to the coach."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from adaptive_coach.models.enums import ConfidenceLevel, Modality, Trend


@dataclass(frozen=True)
class Exercise:
    """Immutable catalog entry."""

    id: str
    name: str
    modality: Modality = Modality.STRENGTH
    primary_metric: str = "weight"
    muscle_group: str = "unknown"


@dataclass(frozen=True)
class MovementMemory:
    """Rolling per-exercise performance summary, computed upstream.

    Seeds default prescriptions (sets, reps, starting weight) and feeds the
    progression buckets of the history analyzer.
    """

    exercise_id: str
    exercise_name: str | None = None

    # Most recent exposure
    last_date: date | None = None
    last_weight: float | None = None
    last_reps: int | None = None
    last_sets: int | None = None
    last_rpe: float | None = None

    # Aggregates
    avg_rpe: float | None = None
    typical_rep_max: int | None = None
    pr_e1rm: float | None = None
    exposure_count: int = 0
    confidence_level: ConfidenceLevel = ConfidenceLevel.LOW
    trend: Trend | None = None
