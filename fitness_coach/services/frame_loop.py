# frame_loop.py
"""
Best-effort frame processing loop.
Awaits one pose estimate at a time and hands it to the workout session.
Failed or empty inferences mean "no update this frame", never a stop.
Repeated failures back off exponentially; an exhausted source ends the loop.
"""

import asyncio
from typing import Awaitable, Callable, Optional

from fitness_coach.config import config
from fitness_coach.models.schemas import PoseSnapshot
from fitness_coach.utils.logging_utils import logger

PoseSource = Callable[[], Awaitable[Optional[PoseSnapshot]]]


class EndOfStream(Exception):
    """Raised by a pose source that has no more frames to deliver"""


class FrameLoop:
    """Pulls snapshots from `pose_source` and feeds `session.process_frame`"""

    def __init__(self, pose_source: PoseSource, session, max_frames: Optional[int] = None):
        self.pose_source = pose_source
        self.session = session
        self.max_frames = max_frames
        self.running = False
        self.stop_requested = False
        self.frames_requested = 0
        self.frames_processed = 0
        self.failures = 0
        self.consecutive_failures = 0

    def retry_delay(self) -> float:
        """Seconds to wait before the next request after the current failure streak"""
        if self.consecutive_failures == 0:
            return 0.0
        delay = config.frame_retry_delay * 2 ** (self.consecutive_failures - 1)
        return min(delay, config.frame_retry_max_delay)

    async def run(self):
        # A loop stopped before its task got scheduled never starts
        self.running = not self.stop_requested
        logger.info("Frame loop started")
        while self.running:
            if self.max_frames is not None and self.frames_requested >= self.max_frames:
                break
            self.frames_requested += 1

            try:
                snapshot = await self.pose_source()
            except asyncio.CancelledError:
                raise
            except EndOfStream:
                logger.info("Pose source exhausted")
                break
            except Exception as e:
                self.failures += 1
                self.consecutive_failures += 1
                if self.consecutive_failures == 1:
                    logger.error(f"Error estimating pose: {e}")
                else:
                    logger.debug(f"Error estimating pose ({self.consecutive_failures} in a row): {e}")
                await asyncio.sleep(self.retry_delay())
                continue

            if self.consecutive_failures:
                logger.info(f"Pose source recovered after {self.consecutive_failures} failures")
                self.consecutive_failures = 0

            if snapshot is None:
                logger.debug("No pose detected")
            elif self.running and self.session.process_frame(snapshot):
                # Results arriving after stop() are discarded
                self.frames_processed += 1

            await asyncio.sleep(0)

        self.running = False
        logger.info(f"Frame loop stopped after {self.frames_requested} frames")

    def stop(self):
        self.stop_requested = True
        self.running = False
