import asyncio
import time
from typing import Callable, Optional

from fitness_coach.config import config
from fitness_coach.models.exercise_catalog import DEFAULT_WORKOUT_PLAN, WorkoutPlan
from fitness_coach.models.schemas import PoseSnapshot, WorkoutState
from fitness_coach.models.workout_session import WorkoutSession
from fitness_coach.services.breathing_service import BreathingGuide
from fitness_coach.services.frame_loop import FrameLoop, PoseSource
from fitness_coach.services.risk_monitor import RiskMonitor
from fitness_coach.services.scheduler import Scheduler
from fitness_coach.utils.logging_utils import logger


class CoachService:
    """
    Wires the workout session to its periodic monitors.
    The frame pipeline, the exercise timer, the risk monitor and the breathing
    guide share one scheduler and one in-memory session.
    """

    def __init__(self,
                 history_store=None,
                 plan: WorkoutPlan = DEFAULT_WORKOUT_PLAN,
                 scheduler: Optional[Scheduler] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self.scheduler = scheduler if scheduler is not None else Scheduler(clock)
        self.session = WorkoutSession(plan, self.scheduler, clock, history_store)
        self.risk_monitor = RiskMonitor(self.session, clock)
        self.breathing = BreathingGuide(self.session)

        self.risk_task = self.scheduler.schedule_every(
            config.risk_sample_interval, self.risk_monitor.sample, name="risk_monitor"
        )
        self.breathing_task = self.scheduler.schedule_every(
            config.breathing_interval, self.breathing.update, name="breathing_guide"
        )
        self.frame_loop: Optional[FrameLoop] = None
        self._frame_task: Optional[asyncio.Task] = None
        self._frame_task_lock: Optional[asyncio.Lock] = None
        self._timer_task: Optional[asyncio.Task] = None

    def start_workout(self, plan: Optional[WorkoutPlan] = None) -> WorkoutState:
        self.risk_monitor.reset()
        self.session.start(plan)
        self.breathing.update()
        return self.state()

    def process_frame(self, snapshot: Optional[PoseSnapshot]) -> bool:
        return self.session.process_frame(snapshot)

    def advance(self) -> WorkoutState:
        self.session.advance()
        self.breathing.update()
        return self.state()

    def abandon(self) -> WorkoutState:
        self.session.abandon()
        self.breathing.update()
        return self.state()

    def state(self) -> WorkoutState:
        """Session snapshot merged with the latest risk status and breathing cue"""
        return self.session.snapshot().model_copy(update={
            "risk": self.risk_monitor.status.model_copy(deep=True),
            "breathingPhase": self.breathing.phase,
        })

    def start_timers(self) -> asyncio.Task:
        """Run the shared scheduler as a background task, once"""
        if self._timer_task is None or self._timer_task.done():
            self._timer_task = asyncio.create_task(self.scheduler.run_forever())
        return self._timer_task

    def _frame_lock(self) -> asyncio.Lock:
        # Created lazily inside the running event loop
        if self._frame_task_lock is None:
            self._frame_task_lock = asyncio.Lock()
        return self._frame_task_lock

    async def start_frame_loop(self, pose_source: PoseSource) -> asyncio.Task:
        """
        Run the frame loop for `pose_source` as a background task.
        A running loop is stopped and awaited first, so at most one pose
        request is ever in flight.
        """
        async with self._frame_lock():
            await self._finish_frame_loop()
            self.frame_loop = FrameLoop(pose_source, self.session)
            self._frame_task = asyncio.create_task(self.frame_loop.run())
            return self._frame_task

    async def stop_frame_loop(self):
        """Stop the frame loop and wait for its in-flight pose request to settle"""
        async with self._frame_lock():
            await self._finish_frame_loop()

    async def _finish_frame_loop(self):
        if self.frame_loop is not None:
            self.frame_loop.stop()
        task = self._frame_task
        if task is not None:
            try:
                await task
            except Exception as e:
                logger.error(f"Frame loop ended with an error: {e}")
        self.frame_loop = None
        self._frame_task = None

    async def shutdown(self):
        """Stop the frame loop and the timers, waiting for both tasks to finish"""
        await self.stop_frame_loop()
        self.scheduler.stop()
        self.scheduler.cancel_all()
        if self._timer_task is not None:
            await self._timer_task
            self._timer_task = None
        logger.info("Coach service shut down")
