"""In-session load ladder: how the next set's load reacts to the last one.

The ladder is an ordered decision table. Rows are tried top to bottom
against the logged set and the first matching row decides the multiplier
for the next set of the same exercise. No match leaves the load alone.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from adaptive_coach.models.enums import (
    LOAD_BACKOFF_LARGE,
    LOAD_BACKOFF_SMALL,
    LOAD_BUMP_LARGE,
    LOAD_BUMP_SMALL,
    RPE_EASY,
    RPE_GRINDER,
    RPE_NEAR_FAILURE,
    RPE_VERY_EASY,
    DecisionType,
)


@dataclass(frozen=True)
class SetObservation:
    """A logged set compared against its own prescription."""

    rpe: float
    reps: int
    target_reps: int | None

    @property
    def reps_hit(self) -> bool:
        """Without a rep target every rep count counts as hit."""
        return self.target_reps is None or self.reps >= self.target_reps

    @property
    def target_label(self) -> str:
        return str(self.target_reps) if self.target_reps is not None else "?"


@dataclass(frozen=True)
class LadderRow:
    rule_id: str
    predicate: Callable[[SetObservation], bool]
    multiplier: float
    reasoning: str  # formatted with the observation's fields
    message: str

    @property
    def decision_type(self) -> DecisionType:
        if self.multiplier > 1:
            return DecisionType.WEIGHT_INCREASE
        return DecisionType.WEIGHT_DECREASE

    def explain(self, obs: SetObservation) -> str:
        return self.reasoning.format(
            rpe=obs.rpe, reps=obs.reps, target_reps=obs.target_label
        )


LOAD_LADDER: tuple[LadderRow, ...] = (
    LadderRow(
        rule_id="very_easy",
        predicate=lambda o: o.rpe < RPE_VERY_EASY,
        multiplier=LOAD_BUMP_LARGE,
        reasoning="Previous set RPE {rpe} is well under target. +5% load.",
        message="That looked easy! I've bumped up the weight for your next set.",
    ),
    LadderRow(
        rule_id="easy_reps_hit",
        predicate=lambda o: o.rpe <= RPE_EASY and o.reps_hit,
        multiplier=LOAD_BUMP_SMALL,
        reasoning="RPE {rpe} with {reps}/{target_reps} reps. +2.5% load.",
        message="Solid set. Let's add a little weight.",
    ),
    LadderRow(
        rule_id="grinder",
        predicate=lambda o: o.rpe >= RPE_GRINDER,
        multiplier=LOAD_BACKOFF_SMALL,
        reasoning="Near failure detected (RPE {rpe}). -5% load to maintain volume.",
        message="That was a grinder. I'm backing off the weight to keep quality high.",
    ),
    LadderRow(
        rule_id="near_failure_missed_reps",
        predicate=lambda o: o.rpe >= RPE_NEAR_FAILURE and not o.reps_hit,
        multiplier=LOAD_BACKOFF_LARGE,
        reasoning="RPE {rpe} with only {reps}/{target_reps} reps. -7.5% load.",
        message="Reps fell short near failure. I've dropped the weight for the next set.",
    ),
)

MISSED_REPS_MESSAGE = "You missed reps. Take an extra 90s rest before the next set."


def match_load_ladder(
    obs: SetObservation, ladder: tuple[LadderRow, ...] = LOAD_LADDER
) -> LadderRow | None:
    """Return the first ladder row whose predicate holds, or None."""
    for row in ladder:
        if row.predicate(obs):
            return row
    return None
