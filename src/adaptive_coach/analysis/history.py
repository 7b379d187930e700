"""Training history analysis over a trailing window of completed sessions.

Aggregates frequency, volume and duration with pandas, buckets exercises by
their movement-memory trend, finds training gaps and scores how much the
data can be trusted.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterable

import numpy as np
import pandas as pd

from adaptive_coach.analysis.patterns import (
    WEEKDAY_NAMES,
    classify_split,
    detect_all_patterns,
    normalize_focus,
)
from adaptive_coach.models.enums import (
    DATA_QUALITY_CONFIDENCE_POINTS,
    DATA_QUALITY_HIGH_SCORE,
    DATA_QUALITY_MED_SCORE,
    DATA_QUALITY_MEMORY_TIERS,
    DATA_QUALITY_RPE_POINTS,
    DATA_QUALITY_SESSION_TIERS,
    DEFAULT_WINDOW_WEEKS,
    MIN_EXPOSURES_FOR_TREND,
    MIN_SESSIONS_FOR_SPLIT_LABEL,
    SPLIT_TOP_FOCUSES,
    TOP_PREFERRED_DAYS,
    TRAINING_GAP_DAYS,
    ConfidenceLevel,
    SplitType,
    Trend,
)
from adaptive_coach.models.exercise import MovementMemory
from adaptive_coach.models.history import (
    CompletedSession,
    Disruption,
    ExerciseProgression,
    HistoryAnalysis,
    TrainingGap,
    most_severe_active,
)

logger = logging.getLogger(__name__)

_SET_COLUMNS = ["session_id", "muscle_group", "weight", "reps", "rpe", "is_warmup"]


def _sets_frame(sessions: list[CompletedSession]) -> pd.DataFrame:
    rows = [
        (
            session.id,
            logged.muscle_group or "unknown",
            logged.actual_weight,
            logged.actual_reps,
            logged.actual_rpe,
            bool(logged.is_warmup),
        )
        for session in sessions
        for logged in session.sets
    ]
    return pd.DataFrame.from_records(rows, columns=_SET_COLUMNS)


def _volume(sets: pd.DataFrame) -> tuple[float, dict[str, float]]:
    """Σ weight×reps over working sets that carry both values."""
    working = sets[~sets["is_warmup"].astype(bool)]
    working = working.dropna(subset=["weight", "reps"])
    if working.empty:
        return 0.0, {}
    volume = working["weight"].astype(float) * working["reps"].astype(float)
    by_group = volume.groupby(working["muscle_group"]).sum().sort_index()
    return float(volume.sum()), {str(k): float(v) for k, v in by_group.items()}


def _preferred_days(dates: list[date]) -> tuple[str, ...]:
    """Most-trained weekdays; ties resolve in Monday-first order."""
    if not dates:
        return ()
    counts = pd.Series([d.weekday() for d in dates]).value_counts()
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return tuple(WEEKDAY_NAMES[int(day)] for day, _count in ranked[:TOP_PREFERRED_DAYS])


def _detect_split(sessions: list[CompletedSession]) -> SplitType | None:
    if len(sessions) < MIN_SESSIONS_FOR_SPLIT_LABEL:
        return None
    focuses = pd.Series([normalize_focus(s.focus) for s in sessions])
    focuses = focuses[focuses != ""]
    if focuses.empty:
        return None
    counts = focuses.value_counts()
    top = sorted(counts.items(), key=lambda item: (-item[1], item[0]))[:SPLIT_TOP_FOCUSES]
    split = classify_split([str(focus) for focus, _count in top])
    return split[0] if split else None


def detect_training_gaps(dates: Iterable[date]) -> tuple[TrainingGap, ...]:
    """Consecutive completion dates more than TRAINING_GAP_DAYS apart."""
    ordered = sorted(dates)
    if len(ordered) < 2:
        return ()
    stamps = pd.Series(pd.to_datetime(ordered))
    diffs = stamps.diff().dt.days.to_numpy()
    gaps = []
    for idx in np.flatnonzero(diffs > TRAINING_GAP_DAYS):
        gaps.append(
            TrainingGap(
                start_date=ordered[idx - 1],
                end_date=ordered[idx],
                days=int(diffs[idx]),
            )
        )
    return tuple(gaps)


def bucket_progression(
    memory: Iterable[MovementMemory],
) -> tuple[
    tuple[ExerciseProgression, ...],
    tuple[ExerciseProgression, ...],
    tuple[ExerciseProgression, ...],
]:
    """Split memory records into (progressing, stagnant, regressing).

    Exercises seen fewer than twice, or without a trend, are left out.
    """
    buckets: dict[Trend, list[ExerciseProgression]] = {trend: [] for trend in Trend}
    for record in memory:
        if record.exposure_count < MIN_EXPOSURES_FOR_TREND or record.trend is None:
            continue
        buckets[record.trend].append(
            ExerciseProgression(
                exercise_id=record.exercise_id,
                exercise_name=record.exercise_name or record.exercise_id,
                trend=record.trend,
                recent_e1rm=record.pr_e1rm,
                last_performed=record.last_date,
                exposure_count=record.exposure_count,
            )
        )
    return (
        tuple(buckets[Trend.PROGRESSING]),
        tuple(buckets[Trend.STAGNANT]),
        tuple(buckets[Trend.REGRESSING]),
    )


def _tier_points(count: int, tiers: tuple[tuple[int, int], ...]) -> int:
    for threshold, points in tiers:
        if count >= threshold:
            return points
    return 0


def _half_up(value: float) -> int:
    return int(np.floor(value + 0.5))


def calculate_data_quality(
    sessions: list[CompletedSession],
    memory: list[MovementMemory],
    sets: pd.DataFrame | None = None,
) -> ConfidenceLevel:
    """Weighted 0-100 score over how much usable history there is.

    Session count and memory-record count are worth up to 30 points each;
    RPE-logging completeness and the share of high-confidence memory records
    up to 20 each.
    """
    if sets is None:
        sets = _sets_frame(sessions)

    score = _tier_points(len(sessions), DATA_QUALITY_SESSION_TIERS)
    score += _tier_points(len(memory), DATA_QUALITY_MEMORY_TIERS)

    if len(sets):
        rpe = sets["rpe"].astype(float)
        rpe_ratio = float((rpe.fillna(0) > 0).mean())
        score += _half_up(rpe_ratio * DATA_QUALITY_RPE_POINTS)

    if memory:
        high = sum(1 for m in memory if m.confidence_level == ConfidenceLevel.HIGH)
        score += _half_up(high / len(memory) * DATA_QUALITY_CONFIDENCE_POINTS)

    if score >= DATA_QUALITY_HIGH_SCORE:
        return ConfidenceLevel.HIGH
    if score >= DATA_QUALITY_MED_SCORE:
        return ConfidenceLevel.MED
    return ConfidenceLevel.LOW


def analyze_training_history(
    sessions: Iterable[CompletedSession],
    memory: Iterable[MovementMemory] = (),
    disruptions: Iterable[Disruption] = (),
    window_weeks: int = DEFAULT_WINDOW_WEEKS,
    as_of: date | None = None,
) -> HistoryAnalysis:
    """Summarize the trailing *window_weeks* of training ending at *as_of*.

    Args:
        sessions: Sessions from the data store. Only those with a completion
            date inside the window count.
        memory: Movement-memory records, one per exercise.
        disruptions: Disruption records; the most severe one active on
            *as_of* is reported.
        window_weeks: Length of the trailing window.
        as_of: Reference date, today if omitted. Fixing it makes the result
            a pure function of the inputs.

    Returns:
        A HistoryAnalysis. Empty input produces zeroed statistics and LOW
        data quality.
    """
    as_of = as_of or date.today()
    window_weeks = max(0, int(window_weeks))
    cutoff = as_of - timedelta(weeks=window_weeks)
    memory = list(memory)

    recent = sorted(
        (
            s
            for s in sessions
            if s.date_completed is not None and cutoff <= s.date_completed <= as_of
        ),
        key=lambda s: (s.date_completed, s.id),
    )
    dates = [s.date_completed for s in recent]
    sets = _sets_frame(recent)

    total_volume, volume_by_group = _volume(sets)
    durations = pd.Series([s.duration_minutes or 0.0 for s in recent], dtype=float)
    progressing, stagnant, regressing = bucket_progression(memory)
    active = most_severe_active(disruptions, as_of)

    analysis = HistoryAnalysis(
        total_sessions=len(recent),
        sessions_per_week=len(recent) / window_weeks if window_weeks > 0 else 0.0,
        average_session_minutes=float(durations.mean()) if len(recent) else 0.0,
        total_volume=total_volume,
        volume_by_muscle_group=volume_by_group,
        preferred_days=_preferred_days(dates),
        detected_split=_detect_split(recent),
        progressing_exercises=progressing,
        stagnant_exercises=stagnant,
        regressing_exercises=regressing,
        gaps=detect_training_gaps(dates),
        recent_disruption=active,
        patterns=tuple(detect_all_patterns(recent)),
        data_quality=calculate_data_quality(recent, memory, sets),
        weeks_analyzed=window_weeks,
        as_of=as_of,
    )
    logger.debug(
        "Analyzed %d sessions over %d weeks (quality %s)",
        analysis.total_sessions,
        window_weeks,
        analysis.data_quality.name,
    )
    return analysis
