# overhead_press_counter.py
"""
Overhead press / pull counter using elbow height relative to the shoulders.
"""

from typing import Optional

from fitness_coach.models.exercise_counter import ExerciseCounter
from fitness_coach.models.schemas import ExerciseKind, PoseSnapshot, Position


class OverheadPressCounter(ExerciseCounter):
    """
    Counts a rep each time both elbows rise above the shoulders after hanging below them.
    """

    kind = ExerciseKind.OVERHEAD_PRESS
    default_position = Position.UP
    counting_position = Position.UP
    required_keypoints = ("left_shoulder", "right_shoulder", "left_elbow", "right_elbow")

    def classify(self, snapshot: PoseSnapshot) -> Optional[Position]:
        left_shoulder, right_shoulder = snapshot["left_shoulder"], snapshot["right_shoulder"]
        left_elbow, right_elbow = snapshot["left_elbow"], snapshot["right_elbow"]

        # Hanging
        if left_elbow.y > left_shoulder.y and right_elbow.y > right_shoulder.y:
            return Position.DOWN
        # Pulled / pressed
        if left_elbow.y < left_shoulder.y and right_elbow.y < right_shoulder.y:
            return Position.UP
        return None
