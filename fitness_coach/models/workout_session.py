# workout_session.py
"""
Workout session orchestrator.
Sequences the workout plan, routes frames to the active exercise counter,
times each exercise and produces the workout summary on completion.
"""

import time
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Type

from fitness_coach.config import config
from fitness_coach.models.armcurl_counter import ArmCurlCounter
from fitness_coach.models.exercise_catalog import (
    DEFAULT_WORKOUT_PLAN,
    EXERCISE_CATALOG,
    ExerciseDefinition,
    PlanEntry,
    WorkoutPlan,
    calories_for,
)
from fitness_coach.models.exercise_counter import ExerciseCounter
from fitness_coach.models.jumping_jack_counter import JumpingJackCounter
from fitness_coach.models.overhead_press_counter import OverheadPressCounter
from fitness_coach.models.push_up_counter import PushUpCounter
from fitness_coach.models.rep_counter import RepCounter
from fitness_coach.models.schemas import (
    ExerciseCount,
    ExerciseKind,
    PoseSnapshot,
    SessionPhase,
    WorkoutState,
    WorkoutSummary,
)
from fitness_coach.models.squat_counter import SquatCounter
from fitness_coach.services.scheduler import Scheduler, TaskHandle
from fitness_coach.utils.logging_utils import logger

COUNTER_CLASSES: Dict[ExerciseKind, Type[ExerciseCounter]] = {
    ExerciseKind.PUSHUP: PushUpCounter,
    ExerciseKind.SQUAT: SquatCounter,
    ExerciseKind.OVERHEAD_PRESS: OverheadPressCounter,
    ExerciseKind.DUMBBELL_CURL: ArmCurlCounter,
    ExerciseKind.JUMPING_JACK: JumpingJackCounter,
}


class SessionStateError(Exception):
    """Raised when a session transition is not valid in the current phase"""


class WorkoutSession:
    """
    Main workout coordinator.
    Idle -> InExercise(0) -> ... -> InExercise(last) -> Completed, with
    explicit advance() calls between exercises once a target is reached.
    """

    def __init__(self,
                 plan: WorkoutPlan = DEFAULT_WORKOUT_PLAN,
                 scheduler: Optional[Scheduler] = None,
                 clock: Callable[[], float] = time.monotonic,
                 history_store=None,
                 catalog: Dict[ExerciseKind, ExerciseDefinition] = EXERCISE_CATALOG):
        self.plan = plan
        self.catalog = catalog
        self.clock = clock
        self.scheduler = scheduler if scheduler is not None else Scheduler(clock)
        self.history_store = history_store

        self.rep_counter = RepCounter()
        self.counters: Dict[ExerciseKind, ExerciseCounter] = {
            kind: COUNTER_CLASSES[kind](self.rep_counter) for kind in ExerciseKind
        }

        self.phase = SessionPhase.IDLE
        self.current_exercise_index = -1
        self.exercise_times: List[int] = [0] * len(plan)
        self.timer = 0
        self.started_at: Optional[float] = None
        self.detection_active = False
        self.last_skeleton: PoseSnapshot = {}
        self.last_summary: Optional[WorkoutSummary] = None

        self._entry_count = 0  # Count of the current exercise when it was entered
        self._timer_handle: Optional[TaskHandle] = None

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def current_entry(self) -> Optional[PlanEntry]:
        if self.phase != SessionPhase.IN_EXERCISE:
            return None
        return self.plan[self.current_exercise_index]

    @property
    def current_exercise(self) -> Optional[ExerciseKind]:
        entry = self.current_entry
        return entry.exercise if entry else None

    @property
    def active_counter(self) -> Optional[ExerciseCounter]:
        exercise = self.current_exercise
        return self.counters[exercise] if exercise else None

    @property
    def reps_in_current_exercise(self) -> int:
        exercise = self.current_exercise
        if exercise is None:
            return 0
        return self.rep_counter.count(exercise) - self._entry_count

    @property
    def advance_available(self) -> bool:
        """True once the current plan entry reached its target reps"""
        entry = self.current_entry
        return entry is not None and self.reps_in_current_exercise >= entry.target_reps

    @property
    def total_reps(self) -> int:
        return self.rep_counter.total

    @property
    def is_running(self) -> bool:
        return self.phase == SessionPhase.IN_EXERCISE

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(self, plan: Optional[WorkoutPlan] = None):
        """Start the workout at the first plan entry"""
        if self.phase != SessionPhase.IDLE:
            raise SessionStateError(f"Cannot start a workout while {self.phase.value}")

        if plan is not None:
            self.plan = plan

        self.rep_counter.reset()
        for counter in self.counters.values():
            counter.reset()

        self.exercise_times = [0] * len(self.plan)
        self.started_at = self.clock()
        self.last_summary = None
        self.last_skeleton = {}
        self.phase = SessionPhase.IN_EXERCISE
        self._enter_exercise(0)
        logger.info(f"Workout started with {len(self.plan)} exercises")

    def _enter_exercise(self, index: int):
        """Make plan[index] the active exercise with a fresh counter and timer"""
        self.current_exercise_index = index
        exercise = self.plan[index].exercise

        self.counters[exercise].reset()
        self._entry_count = self.rep_counter.count(exercise)
        self.timer = 0
        self._start_timer()
        self.detection_active = True
        logger.info(f"Now doing {exercise.value} ({index + 1}/{len(self.plan)}), "
                    f"target {self.plan[index].target_reps} reps")

    def _start_timer(self):
        self._stop_timer()
        self._timer_handle = self.scheduler.schedule_every(
            config.exercise_timer_interval, self.tick, name="exercise_timer"
        )

    def _stop_timer(self):
        if self._timer_handle is not None:
            self._timer_handle.cancel()
            self._timer_handle = None

    def tick(self):
        """Advance the per-exercise timer by one second"""
        if self.phase == SessionPhase.IN_EXERCISE:
            self.timer += 1

    def advance(self) -> Optional[WorkoutSummary]:
        """
        Move to the next exercise, or complete the workout after the last one.
        Returns the WorkoutSummary on completion, otherwise None.
        """
        if self.phase != SessionPhase.IN_EXERCISE:
            raise SessionStateError(f"Cannot advance while {self.phase.value}")
        if not self.advance_available:
            raise SessionStateError(
                f"{self.current_exercise.value}: {self.reps_in_current_exercise}/"
                f"{self.current_entry.target_reps} reps, target not reached"
            )

        # Frames arriving from here on must not reach the old counter
        self.detection_active = False
        self._stop_timer()
        self.exercise_times[self.current_exercise_index] = self.timer

        next_index = self.current_exercise_index + 1
        if next_index < len(self.plan):
            self._enter_exercise(next_index)
            return None
        return self._complete()

    def _complete(self) -> WorkoutSummary:
        summary = self.build_summary()
        self.last_summary = summary

        if self.history_store is not None:
            try:
                self.history_store.append_workout_summary(summary)
            except Exception as e:
                logger.error(f"Error saving workout summary: {e}")

        self.phase = SessionPhase.COMPLETED
        self.current_exercise_index = -1
        self.timer = 0
        self.rep_counter.reset()
        logger.info(f"Workout completed: {summary.total_calories:.1f} kcal "
                    f"in {summary.total_duration_seconds}s")
        return summary

    def build_summary(self) -> WorkoutSummary:
        """Totals over the exercises of the plan, using per-exercise recorded seconds"""
        kinds: List[ExerciseKind] = []
        for entry in self.plan.entries:
            if entry.exercise not in kinds:
                kinds.append(entry.exercise)

        counts = {kind: self.rep_counter.count(kind) for kind in kinds}
        return WorkoutSummary(
            date=datetime.now(timezone.utc),
            total_calories=round(calories_for(counts, self.catalog), 2),
            total_duration_seconds=sum(self.exercise_times),
            per_exercise_counts=[ExerciseCount(exercise=kind, count=counts[kind]) for kind in kinds],
        )

    def abandon(self):
        """Drop the current session without a summary and return to idle"""
        if self.phase == SessionPhase.IDLE:
            raise SessionStateError("No workout to abandon")

        self.detection_active = False
        self._stop_timer()
        self.phase = SessionPhase.IDLE
        self.current_exercise_index = -1
        self.exercise_times = [0] * len(self.plan)
        self.timer = 0
        self.started_at = None
        self.last_skeleton = {}
        self.rep_counter.reset()
        for counter in self.counters.values():
            counter.reset()
        logger.info("Workout session reset")

    reset = abandon

    # ------------------------------------------------------------------
    # Frame pipeline
    # ------------------------------------------------------------------

    def process_frame(self, snapshot: Optional[PoseSnapshot]) -> bool:
        """
        Route one keypoint snapshot to the counter of the current exercise.
        The active exercise is looked up on every call. Returns True when a
        counter consumed the frame.
        """
        if not snapshot or not self.detection_active or self.phase != SessionPhase.IN_EXERCISE:
            return False

        self.last_skeleton = snapshot
        self.active_counter.analyze_pose(snapshot)
        return True

    def snapshot(self) -> WorkoutState:
        """Read-only view of the session for the UI"""
        entry = self.current_entry
        counter = self.active_counter
        return WorkoutState(
            phase=self.phase,
            currentExerciseIndex=self.current_exercise_index,
            currentExercise=entry.exercise if entry else None,
            targetReps=entry.target_reps if entry else 0,
            repCount=self.reps_in_current_exercise,
            repCounts=dict(self.rep_counter.rep_counts),
            position=counter.position if counter else None,
            angle=counter.last_angle if counter else None,
            timer=self.timer,
            exerciseTimes=list(self.exercise_times),
            advanceAvailable=self.advance_available,
            isWorkoutActive=self.is_running,
            skeleton=list(self.last_skeleton.values()),
            summary=self.last_summary,
        )
