# exercise_counter.py
"""
Base class for the per-exercise classifiers.
Each classifier is a two-state machine with a dead-band between its enter
and exit thresholds; reps are credited through the shared RepCounter.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from fitness_coach.config import config
from fitness_coach.models.rep_counter import RepCounter
from fitness_coach.models.schemas import ExerciseKind, PoseSnapshot, Position
from fitness_coach.utils.geometry import all_confident
from fitness_coach.utils.logging_utils import logger


class ExerciseCounter(ABC):
    """
    Abstract base class defining interface for all exercise-specific counters.
    Subclasses declare the landmarks they need and map a snapshot to a position.
    """

    kind: ExerciseKind
    default_position: Position = Position.UP
    counting_position: Position = Position.UP  # Entering this position credits a rep
    required_keypoints: Tuple[str, ...] = ()

    def __init__(self, rep_counter: Optional[RepCounter] = None):
        self.rep_counter = rep_counter if rep_counter is not None else RepCounter()
        self.position = self.default_position
        self.frame_count = 0
        self.skipped_frames = 0
        self.last_angle: Optional[float] = None

    @property
    def min_confidence(self) -> float:
        return config.min_confidence

    @property
    def count(self) -> int:
        return self.rep_counter.count(self.kind)

    @property
    def in_progress(self) -> bool:
        return self.rep_counter.in_progress(self.kind)

    @abstractmethod
    def classify(self, snapshot: PoseSnapshot) -> Optional[Position]:
        """Return the position shown by this frame, or None inside the dead-band"""
        pass

    def analyze_pose(self, snapshot: Optional[PoseSnapshot]) -> Tuple[int, Position]:
        """
        Analyze one keypoint snapshot and return (rep_count, position).
        Frames missing a required landmark or under the confidence floor are skipped.
        """
        self.frame_count += 1

        if not snapshot or not all_confident(snapshot, self.required_keypoints, self.min_confidence):
            self.skipped_frames += 1
            logger.debug(f"{self.kind.value}: frame {self.frame_count} skipped (low confidence)")
            return self.count, self.position

        self._change_position(self.classify(snapshot))
        return self.count, self.position

    def _change_position(self, new_position: Optional[Position]):
        """Apply a hysteresis transition and credit or release the rep guard."""
        if new_position is None or new_position == self.position:
            return

        old_position = self.position
        self.position = new_position

        if new_position == self.counting_position:
            self.rep_counter.on_transition_detected(self.kind)
        else:
            self.rep_counter.release(self.kind)

        logger.info(f"{self.kind.value}: {old_position.value} -> {new_position.value}")

    def reset(self):
        """Return to the default position and clear this exercise's guard"""
        self.position = self.default_position
        self.frame_count = 0
        self.skipped_frames = 0
        self.last_angle = None
        self.rep_counter.reset_guard(self.kind)
