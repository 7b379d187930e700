"""SessionEngine — owns one live session and adapts it set by set."""

from __future__ import annotations

import asyncio
import copy
import dataclasses
import inspect
import logging
from datetime import datetime
from typing import Any, Callable, Iterable

from adaptive_coach import config
from adaptive_coach.intent.lexicon import normalize_exercise_name
from adaptive_coach.intent.parser import to_modification_kind
from adaptive_coach.math.loading import adjust_load, estimate_e1rm
from adaptive_coach.models.decision import AgentDecision
from adaptive_coach.models.enums import (
    SICKNESS_LIGHT_REPS,
    SICKNESS_LIGHT_RPE,
    STRESS_LOAD_MULTIPLIER,
    STRESS_RPE_FLOOR,
    STRESS_RPE_REDUCTION,
    TOO_EASY_MULTIPLIER,
    TOO_HARD_MULTIPLIER,
    TRAVEL_LOAD_MULTIPLIER,
    TRAVEL_TARGET_REPS,
    TRAVEL_TARGET_RPE,
    DecisionOrigin,
    DecisionType,
    LifeEvent,
    ModificationKind,
    ReadinessPolicy,
    SetStatus,
)
from adaptive_coach.models.exercise import Exercise, MovementMemory
from adaptive_coach.models.intent import Intent, ModifySessionPayload, SkipExercisePayload
from adaptive_coach.models.readiness import ReadinessSnapshot
from adaptive_coach.models.session import (
    CompletedExerciseSets,
    SessionExercise,
    SessionProgress,
    SessionSet,
    SetRecord,
    SetResult,
)
from adaptive_coach.queue_builder import build_session_exercise, new_set_id
from adaptive_coach.rules.compound import is_compound_lift
from adaptive_coach.rules.readiness_policy import (
    apply_readiness_policy,
    select_readiness_policy,
)
from adaptive_coach.rules.set_performance import (
    MISSED_REPS_MESSAGE,
    SetObservation,
    match_load_ladder,
)

logger = logging.getLogger(__name__)

SetLoggedCallback = Callable[[SetRecord], Any]
DecisionCallback = Callable[[AgentDecision], Any]

SESSION_COMPLETE_MESSAGE = "Session complete! Great work today."
SKIPPED_NOTE = "Skipped"


def _fmt_load(load: float | None) -> str:
    return f"{load:g}" if load is not None else "?"


class SessionEngine:
    """Live session state machine: a queue of exercises, a cursor, a decision log.

    Every set moves PENDING → ACTIVE → COMPLETED. Exactly one set is ACTIVE
    while the session runs; everything before it in traversal order is
    COMPLETED and everything after it is PENDING.

    Mutators return the message shown to the athlete, or None when they were
    called with a stale reference and nothing changed.

    Usage:
        engine = SessionEngine(on_set_logged=save_set)
        engine.initialize_session(build_session_queue(exercises, memory), readiness)
        current = engine.get_current_set()
        engine.log_set(current.exercise_id, current.id, SetResult(100, 8, 7))
        engine.request_modification(parse_intent("this is too heavy"))
    """

    def __init__(
        self,
        on_set_logged: SetLoggedCallback | None = None,
        on_decision: DecisionCallback | None = None,
        clock: Callable[[], datetime] = datetime.now,
        id_factory: Callable[[], str] = new_set_id,
    ) -> None:
        self.on_set_logged = on_set_logged
        self.on_decision = on_decision
        self._clock = clock
        self._id_factory = id_factory

        self._queue: list[SessionExercise] = []
        self._decisions: list[AgentDecision] = []
        self._constraints: list[str] = []
        self._best_e1rm: dict[str, float] = {}
        self._pending_tasks: set[asyncio.Task] = set()

        self.agent_message: str | None = None
        self.is_active = False
        self.started_at: datetime | None = None
        self.readiness: ReadinessSnapshot | None = None
        self.readiness_policy = ReadinessPolicy.NONE
        self.workout_context = "building"
        self.workout_id: str | None = None
        self.exercises_added_count = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize_session(
        self,
        queue: Iterable[SessionExercise],
        readiness: ReadinessSnapshot | None = None,
        history: Iterable[MovementMemory] = (),
        workout_context: str = "building",
        workout_id: str | None = None,
    ) -> str:
        """Start a session from a template queue.

        The template is deep-copied, so the caller's queue is never mutated.
        At most one readiness policy is applied (fatigue or peak mode).

        Args:
            queue: Template exercises, e.g. from build_session_queue().
            readiness: Today's check-in, if any.
            history: Movement memory used to fill in missing last-performance
                context and to seed PR detection.
            workout_context: Free-form label for how the session was started.
            workout_id: Identifier of the persisted workout, if any.

        Returns:
            The initialization message naming the applied policy.
        """
        self._queue = copy.deepcopy(list(queue))
        self._decisions = []
        self._constraints = []
        self._best_e1rm = {}
        self.readiness = readiness
        self.workout_context = workout_context
        self.workout_id = workout_id
        self.exercises_added_count = 0
        self.started_at = self._clock()
        self.is_active = True

        memory_by_exercise = {m.exercise_id: m for m in history}
        for exercise in self._queue:
            memory = memory_by_exercise.get(exercise.exercise_id)
            if memory is not None and exercise.context.last_performance is None:
                exercise.context = dataclasses.replace(
                    exercise.context, last_performance=memory
                )
            self._seed_pr(exercise)
            for s in exercise.sets:
                if s.status == SetStatus.ACTIVE:
                    s.status = SetStatus.PENDING

        score = readiness.score if readiness is not None else None
        self.readiness_policy = select_readiness_policy(score)
        message = apply_readiness_policy(
            self.readiness_policy, self._queue, self._id_factory
        )
        self._sync_statuses()

        logger.info(
            "Session initialized: %d exercises, %d sets, policy %s",
            len(self._queue),
            sum(len(ex.sets) for ex in self._queue),
            self.readiness_policy.name,
        )
        self.agent_message = message
        return message

    def end_session(self) -> str:
        self.is_active = False
        self.agent_message = "Session ended."
        logger.info("Session ended with %d decisions", len(self._decisions))
        return self.agent_message

    def dismiss_message(self) -> None:
        self.agent_message = None

    # ------------------------------------------------------------------
    # Logging sets
    # ------------------------------------------------------------------

    def log_set(self, exercise_id: str, set_id: str, result: SetResult) -> str | None:
        """Record the ACTIVE set's actuals and adapt the next set of the exercise.

        The load ladder only looks at the next set of the same exercise. The
        persistence callback fires after the cursor has advanced.

        Returns:
            The athlete-facing message, or None if *set_id* is not the ACTIVE
            set of *exercise_id*.
        """
        if not self.is_active:
            logger.debug("Ignoring log for set %s: no active session", set_id)
            return None
        located = self._locate_set(exercise_id, set_id)
        if located is None:
            return None
        ex_idx, set_idx = located
        exercise = self._queue[ex_idx]
        current = exercise.sets[set_idx]
        if current.status != SetStatus.ACTIVE:
            logger.debug("Ignoring log for non-active set %s", set_id)
            return None

        current.actual_weight = result.weight
        current.actual_reps = result.reps
        current.actual_rpe = result.rpe
        current.status = SetStatus.COMPLETED
        current.missed_reps = (
            current.target_reps is not None and result.reps < current.target_reps
        )
        current.is_pr = self._check_pr(exercise_id, result)

        messages: list[str] = []
        next_set = exercise.sets[set_idx + 1] if set_idx + 1 < len(exercise.sets) else None
        if next_set is not None and next_set.status == SetStatus.PENDING:
            adjusted = self._apply_load_ladder(current, next_set, result)
            if adjusted:
                messages.append(adjusted)
            if current.missed_reps:
                self._record(
                    DecisionType.REST_SUGGESTION,
                    "Missed target reps - extended rest recommended",
                    exercise_id=exercise_id,
                    set_id=next_set.id,
                )
                messages.append(MISSED_REPS_MESSAGE)

        self._sync_statuses()
        cursor = self._cursor()
        if cursor is None:
            message: str | None = SESSION_COMPLETE_MESSAGE
            logger.info("Session complete")
        elif cursor[0] != ex_idx:
            message = self._transition_message(self._queue[cursor[0]])
        else:
            message = " ".join(messages) or None
        self.agent_message = message

        self._notify(
            self.on_set_logged,
            SetRecord(
                exercise_id=exercise_id,
                set_id=set_id,
                set_order=current.set_order,
                target_reps=current.target_reps,
                target_rpe=current.target_rpe,
                target_load=current.target_load,
                actual_weight=result.weight,
                actual_reps=result.reps,
                actual_rpe=result.rpe,
            ),
        )
        return message

    def _apply_load_ladder(
        self, logged: SessionSet, next_set: SessionSet, result: SetResult
    ) -> str | None:
        obs = SetObservation(rpe=result.rpe, reps=result.reps, target_reps=logged.target_reps)
        row = match_load_ladder(obs)
        if row is None:
            return None

        base = result.weight if result.weight and result.weight > 0 else next_set.target_load
        new_load = adjust_load(base, row.multiplier)
        if not new_load or new_load == next_set.target_load:
            return None

        reasoning = row.explain(obs)
        next_set.target_load = new_load
        next_set.agent_adjusted = True
        next_set.agent_reasoning = reasoning
        self._record(
            row.decision_type,
            reasoning,
            exercise_id=next_set.exercise_id,
            set_id=next_set.id,
        )
        logger.debug(
            "Ladder %s: %s → %s on set %s", row.rule_id, base, new_load, next_set.id
        )
        return row.message

    def _check_pr(self, exercise_id: str, result: SetResult) -> bool:
        e1rm = estimate_e1rm(result.weight, result.reps)
        if e1rm is None:
            return False
        best = self._best_e1rm.get(exercise_id)
        if best is None:
            # No known PR to beat; start tracking from this set
            self._best_e1rm[exercise_id] = e1rm
            return False
        if e1rm > best:
            self._best_e1rm[exercise_id] = e1rm
            return True
        return False

    def _seed_pr(self, exercise: SessionExercise) -> None:
        memory = exercise.context.last_performance
        if memory is not None and memory.pr_e1rm:
            current = self._best_e1rm.get(exercise.exercise_id, 0.0)
            self._best_e1rm[exercise.exercise_id] = max(current, memory.pr_e1rm)

    def _transition_message(self, exercise: SessionExercise) -> str:
        memory = exercise.context.last_performance
        if memory is not None and memory.last_weight is not None:
            last = (
                f"Last time: {_fmt_load(memory.last_weight)}{config.WEIGHT_UNIT}"
                f" × {memory.last_reps if memory.last_reps is not None else '?'}"
            )
        else:
            last = "First time logging this movement."
        return f"Moving to {exercise.name}. {last}"

    # ------------------------------------------------------------------
    # Athlete-requested modifications
    # ------------------------------------------------------------------

    def request_modification(
        self,
        intent: Intent | ModifySessionPayload | SkipExercisePayload | ModificationKind,
        context: str | None = None,
    ) -> str | None:
        """Apply an athlete request to the current exercise.

        Args:
            intent: A parsed Intent, its payload, or a bare ModificationKind.
            context: Free text explaining the request, kept in the decision log.

        Returns:
            The athlete-facing message, or None when there is no current
            exercise or the intent is not a modification.
        """
        if isinstance(intent, ModificationKind):
            kind: ModificationKind | None = intent
            payload = None
        else:
            kind = to_modification_kind(intent)
            payload = intent.payload if isinstance(intent, Intent) else intent

        exercise = self.current_exercise
        if kind is None or exercise is None or not self.is_active:
            logger.debug("No modification applied for %r", intent)
            return None

        handler = self._MODIFICATION_HANDLERS[kind]
        message = handler(self, exercise, payload, context)
        self.agent_message = message
        return message

    def _handle_pain(
        self,
        exercise: SessionExercise,
        payload: ModifySessionPayload | None,
        context: str | None,
    ) -> str:
        body_part = payload.body_part if isinstance(payload, ModifySessionPayload) else None
        constraint = payload.constraint if isinstance(payload, ModifySessionPayload) else None
        if constraint and constraint not in self._constraints:
            self._constraints.append(constraint)

        where = f" in your {body_part.replace('_', ' ')}" if body_part else ""
        self._record(
            DecisionType.REST_SUGGESTION,
            f"Pain reported{where} during {exercise.name}",
            origin=DecisionOrigin.ATHLETE,
            exercise_id=exercise.exercise_id,
        )
        return (
            f"Pain reported{where}. Consider reducing load or swapping to a "
            "pain-free variation. Let me know if you need to skip this movement."
        )

    def _scale_remaining(
        self, exercise: SessionExercise, multiplier: float, reasoning: str
    ) -> int:
        changed = 0
        for s in exercise.remaining_sets:
            if not s.target_load:
                continue
            s.target_load = adjust_load(s.target_load, multiplier, strict=True)
            s.agent_adjusted = True
            s.agent_reasoning = reasoning
            changed += 1
        return changed

    def _handle_too_hard(self, exercise, payload, context) -> str:
        if not self._scale_remaining(exercise, TOO_HARD_MULTIPLIER, "Adjusted for difficulty"):
            return "No loads to adjust on this exercise. Slow down and own each rep."
        self._record(
            DecisionType.WEIGHT_DECREASE,
            context or "User reported exercise too difficult",
            origin=DecisionOrigin.ATHLETE,
            exercise_id=exercise.exercise_id,
        )
        return "Got it. I've reduced the load for your remaining sets."

    def _handle_too_easy(self, exercise, payload, context) -> str:
        if not self._scale_remaining(exercise, TOO_EASY_MULTIPLIER, "Bumped for challenge"):
            return "No loads to adjust on this exercise. Push the tempo instead."
        self._record(
            DecisionType.WEIGHT_INCREASE,
            context or "User requested more challenge",
            origin=DecisionOrigin.ATHLETE,
            exercise_id=exercise.exercise_id,
        )
        return "Let's add some weight. Updated your remaining sets."

    def _handle_fatigue(self, exercise, payload, context) -> str:
        if not self._drop_trailing_pending(exercise):
            return "No more sets to remove. Let's finish this one strong."
        self._record(
            DecisionType.VOLUME_ADJUSTMENT,
            context or "Fatigue-based volume reduction",
            origin=DecisionOrigin.ATHLETE,
            exercise_id=exercise.exercise_id,
        )
        return "Fatigue noted. I've removed one set to manage recovery."

    def _handle_add_set(self, exercise, payload, context) -> str:
        last = exercise.sets[-1]
        new_set = dataclasses.replace(
            last,
            id=self._id_factory(),
            set_order=len(exercise.sets) + 1,
            actual_weight=None,
            actual_reps=None,
            actual_rpe=None,
            is_pr=False,
            status=SetStatus.PENDING,
            notes=None,
            agent_adjusted=False,
            agent_reasoning=None,
            missed_reps=False,
        )
        exercise.sets.append(new_set)
        self._sync_statuses()
        self._record(
            DecisionType.VOLUME_ADJUSTMENT,
            context or f"Athlete added a set to {exercise.name}",
            origin=DecisionOrigin.ATHLETE,
            exercise_id=exercise.exercise_id,
            set_id=new_set.id,
        )
        return "Added another set. Let's go."

    def _handle_skip(self, exercise, payload, context) -> str:
        if isinstance(payload, SkipExercisePayload) and not self._names_exercise(
            payload.exercise, exercise
        ):
            logger.debug(
                "Skip for %r ignored; current exercise is %s", payload.exercise, exercise.name
            )
            return (
                f"You're on {exercise.name} right now. "
                f"Ask again when you get to {payload.exercise}."
            )
        self._skip_remaining(exercise)
        self._sync_statuses()
        self._record(
            DecisionType.VOLUME_ADJUSTMENT,
            context or f"Skipped {exercise.name}",
            origin=DecisionOrigin.ATHLETE,
            exercise_id=exercise.exercise_id,
        )
        if self.is_complete:
            return SESSION_COMPLETE_MESSAGE
        return "Exercise skipped. Moving to the next one."

    @staticmethod
    def _names_exercise(name: str | None, exercise: SessionExercise) -> bool:
        """True when a spoken exercise name refers to *exercise*."""
        if not name:
            return True
        if name.strip().lower() == exercise.name.strip().lower():
            return True
        return normalize_exercise_name(name) == normalize_exercise_name(exercise.name)

    def _handle_swap(self, exercise, payload, context) -> str:
        self._record(
            DecisionType.EXERCISE_SWAP,
            context or f"Swap requested for {exercise.name}",
            origin=DecisionOrigin.ATHLETE,
            exercise_id=exercise.exercise_id,
        )
        return "Noted. Continue when ready."

    def _handle_time_crunch(self, exercise, payload, context) -> str:
        cursor = self._cursor()
        start = cursor[0] if cursor is not None else len(self._queue)
        removed = sum(
            1 for ex in self._queue[start:] if self._drop_trailing_pending(ex)
        )
        if not removed:
            return "You're already lean on sets. Let's finish strong."
        minutes = payload.available_minutes if isinstance(payload, ModifySessionPayload) else None
        reasoning = "Time crunch - reduced volume across remaining exercises"
        if minutes:
            reasoning += f" ({minutes} min available)"
        self._record(
            DecisionType.VOLUME_ADJUSTMENT, reasoning, origin=DecisionOrigin.ATHLETE
        )
        plural = "s" if removed > 1 else ""
        return f"Got it, short on time. I've trimmed {removed} set{plural} to keep you moving."

    _MODIFICATION_HANDLERS: dict[ModificationKind, Callable[..., str]] = {
        ModificationKind.PAIN: _handle_pain,
        ModificationKind.TOO_HARD: _handle_too_hard,
        ModificationKind.TOO_EASY: _handle_too_easy,
        ModificationKind.FATIGUE: _handle_fatigue,
        ModificationKind.ADD_SET: _handle_add_set,
        ModificationKind.SKIP_EXERCISE: _handle_skip,
        ModificationKind.TIME_CRUNCH: _handle_time_crunch,
        ModificationKind.SWAP_EXERCISE: _handle_swap,
    }

    # ------------------------------------------------------------------
    # Life events (present session only)
    # ------------------------------------------------------------------

    def handle_life_event(self, event: LifeEvent, duration_days: int = 1) -> str | None:
        """Reshape what is left of today's session around a life event.

        Only sets that have not been performed are touched. Nothing is
        scheduled for future sessions.
        """
        if not self.is_active:
            logger.debug("Ignoring %s: no active session", event.name)
            return None

        remaining = [ex for ex in self._queue if ex.remaining_sets]

        if event == LifeEvent.TRAVEL:
            names = []
            for ex in remaining:
                if not is_compound_lift(ex.name):
                    continue
                names.append(ex.name)
                for s in ex.remaining_sets:
                    s.target_load = adjust_load(s.target_load, TRAVEL_LOAD_MULTIPLIER)
                    s.target_reps = TRAVEL_TARGET_REPS
                    s.target_rpe = TRAVEL_TARGET_RPE
                    s.agent_adjusted = True
                    s.agent_reasoning = "Travel mode: maintenance stimulus"
            if names:
                message = (
                    f"I've switched {', '.join(names)} to a hotel-friendly version: "
                    "half the load, high reps, easy effort."
                )
            else:
                message = "Travel noted. Nothing heavy left today, so train as planned."

        elif event == LifeEvent.SICKNESS:
            if duration_days > 1:
                for ex in remaining:
                    self._skip_remaining(ex)
                message = (
                    "Health comes first. I've cleared today's session. "
                    "Focus on rest and recovery."
                )
            else:
                self._reduce_to_light_set()
                message = (
                    "Taking it easy today. I've set up some light mobility work - "
                    "skip it if you need to."
                )

        elif event == LifeEvent.STRESS:
            for ex in remaining:
                for s in ex.remaining_sets:
                    s.target_load = adjust_load(s.target_load, STRESS_LOAD_MULTIPLIER)
                    if s.target_rpe is not None:
                        s.target_rpe = max(s.target_rpe - STRESS_RPE_REDUCTION, STRESS_RPE_FLOOR)
                    s.agent_adjusted = True
                    s.agent_reasoning = "Stress management: reduced intensity"
            message = (
                "I can tell you're under stress. I've dialed back the intensity "
                "today. You'll still get a good session without adding to the load."
            )

        else:
            message = (
                "I've noted the injury. Let's work around it today. Please consult "
                "a professional before resuming that movement pattern."
            )

        self._sync_statuses()
        self._record(
            DecisionType.VOLUME_ADJUSTMENT,
            f"Life event: {event.name.lower()} ({duration_days} days)",
            origin=DecisionOrigin.ATHLETE,
        )
        self.agent_message = message
        return message

    def _reduce_to_light_set(self) -> None:
        """Keep only the current set, unloaded and easy; drop everything after it."""
        cursor = self._cursor()
        if cursor is None:
            return
        ex_idx, set_idx = cursor
        exercise = self._queue[ex_idx]
        del exercise.sets[set_idx + 1:]
        light = exercise.sets[set_idx]
        light.target_load = None
        light.target_reps = SICKNESS_LIGHT_REPS
        light.target_rpe = SICKNESS_LIGHT_RPE
        light.agent_adjusted = True
        light.agent_reasoning = "Recovery mode: light mobility only"
        del self._queue[ex_idx + 1:]

    # ------------------------------------------------------------------
    # Freestyle queue editing
    # ------------------------------------------------------------------

    def add_exercise(
        self, exercise: Exercise, memory: MovementMemory | None = None
    ) -> str | None:
        """Append an exercise prescribed from memory and today's readiness."""
        if not self.is_active:
            logger.debug("Ignoring add of %s: no active session", exercise.id)
            return None
        session_exercise = build_session_exercise(
            exercise, memory, self.readiness, self._id_factory
        )
        self._queue.append(session_exercise)
        self._seed_pr(session_exercise)
        self.exercises_added_count += 1
        self._sync_statuses()
        self.agent_message = f"Added {exercise.name} to your session."
        return self.agent_message

    def remove_exercise(self, exercise_id: str) -> str | None:
        """Remove an exercise that still has work left.

        Finished exercises stay in the log. An exercise that is part-way done
        keeps its logged sets and loses the rest, so the cursor moves on.
        """
        idx = self._exercise_index(exercise_id)
        if idx is None:
            return None
        exercise = self._queue[idx]
        if not exercise.remaining_sets:
            logger.debug("Refusing to remove completed exercise %s", exercise_id)
            return None

        if any(s.status == SetStatus.COMPLETED for s in exercise.sets):
            exercise.sets = [s for s in exercise.sets if s.status == SetStatus.COMPLETED]
        else:
            del self._queue[idx]
        self._sync_statuses()
        self.agent_message = "Exercise removed from session."
        return self.agent_message

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def queue(self) -> tuple[SessionExercise, ...]:
        return tuple(self._queue)

    @property
    def decisions(self) -> tuple[AgentDecision, ...]:
        return tuple(self._decisions)

    @property
    def constraints(self) -> tuple[str, ...]:
        """Movement constraints surfaced by pain reports, e.g. "no_knee_flexion"."""
        return tuple(self._constraints)

    @property
    def is_complete(self) -> bool:
        return self.started_at is not None and self._cursor() is None

    @property
    def current_exercise(self) -> SessionExercise | None:
        cursor = self._cursor()
        return self._queue[cursor[0]] if cursor is not None else None

    def get_current_set(self) -> SessionSet | None:
        cursor = self._cursor()
        if cursor is None:
            return None
        ex_idx, set_idx = cursor
        return self._queue[ex_idx].sets[set_idx]

    def get_session_progress(self) -> SessionProgress:
        total = sum(len(ex.sets) for ex in self._queue)
        completed = sum(
            1 for ex in self._queue for s in ex.sets if s.status == SetStatus.COMPLETED
        )
        percentage = int(completed / total * 100 + 0.5) if total else 0
        return SessionProgress(completed=completed, total=total, percentage=percentage)

    def get_completed_sets(self) -> list[CompletedExerciseSets]:
        return [
            CompletedExerciseSets(
                exercise_id=ex.exercise_id,
                sets=tuple(s for s in ex.sets if s.status == SetStatus.COMPLETED),
            )
            for ex in self._queue
        ]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _cursor(self) -> tuple[int, int] | None:
        """(exercise index, set index) of the ACTIVE set, or None when done."""
        for ex_idx, exercise in enumerate(self._queue):
            for set_idx, s in enumerate(exercise.sets):
                if s.status == SetStatus.ACTIVE:
                    return ex_idx, set_idx
        return None

    def _sync_statuses(self) -> None:
        """Re-establish the completed* active? pending* split after a mutation."""
        activated = False
        for exercise in self._queue:
            for s in exercise.sets:
                if s.status == SetStatus.COMPLETED:
                    continue
                if not activated:
                    s.status = SetStatus.ACTIVE
                    activated = True
                else:
                    s.status = SetStatus.PENDING

    def _exercise_index(self, exercise_id: str) -> int | None:
        for idx, exercise in enumerate(self._queue):
            if exercise.exercise_id == exercise_id:
                return idx
        logger.debug("Unknown exercise id %s", exercise_id)
        return None

    def _locate_set(self, exercise_id: str, set_id: str) -> tuple[int, int] | None:
        ex_idx = self._exercise_index(exercise_id)
        if ex_idx is None:
            return None
        set_idx = self._queue[ex_idx].find_set(set_id)
        if set_idx is None:
            logger.debug("Unknown set id %s on exercise %s", set_id, exercise_id)
            return None
        return ex_idx, set_idx

    @staticmethod
    def _drop_trailing_pending(exercise: SessionExercise) -> bool:
        if exercise.sets and exercise.sets[-1].status == SetStatus.PENDING:
            exercise.sets.pop()
            return True
        return False

    @staticmethod
    def _skip_remaining(exercise: SessionExercise) -> None:
        for s in exercise.remaining_sets:
            s.status = SetStatus.COMPLETED
            s.notes = SKIPPED_NOTE

    def _record(
        self,
        decision_type: DecisionType,
        reasoning: str,
        origin: DecisionOrigin = DecisionOrigin.AGENT,
        exercise_id: str | None = None,
        set_id: str | None = None,
    ) -> AgentDecision:
        decision = AgentDecision(
            type=decision_type,
            reasoning=reasoning,
            applied_at=self._clock(),
            origin=origin,
            exercise_id=exercise_id,
            set_id=set_id,
        )
        self._decisions.append(decision)
        self._notify(self.on_decision, decision)
        return decision

    def _notify(self, callback: Callable[[Any], Any] | None, payload: Any) -> None:
        """Fire-and-forget: failures are logged and never stall the session."""
        if callback is None:
            return
        try:
            result = callback(payload)
        except Exception as exc:
            logger.warning("Session callback failed for %r: %s", payload, exc)
            return

        if not inspect.iscoroutine(result):
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            result.close()
            logger.warning("No running event loop; dropped async callback for %r", payload)
            return
        task = loop.create_task(result)
        self._pending_tasks.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._pending_tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.warning("Async session callback failed: %s", task.exception())
