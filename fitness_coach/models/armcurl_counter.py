# armcurl_counter.py
"""
Dumbbell curl counter using elbow angle analysis on both arms.
Measures shoulder-elbow-wrist angle to determine curl position and count reps.
"""

from typing import Optional

from fitness_coach.config import config
from fitness_coach.models.exercise_counter import ExerciseCounter
from fitness_coach.models.schemas import ExerciseKind, PoseSnapshot, Position
from fitness_coach.utils.geometry import angle_at


class ArmCurlCounter(ExerciseCounter):
    """
    Dumbbell curl repetition counter.
    Tracks arm flexion (curl up) and extension (lower down); the rep is
    credited when both arms are extended again.
    """

    kind = ExerciseKind.DUMBBELL_CURL
    default_position = Position.DOWN
    counting_position = Position.DOWN
    required_keypoints = (
        "left_shoulder", "left_elbow", "left_wrist",
        "right_shoulder", "right_elbow", "right_wrist",
    )

    def classify(self, snapshot: PoseSnapshot) -> Optional[Position]:
        left_angle = angle_at(snapshot["left_elbow"], snapshot["left_shoulder"], snapshot["left_wrist"])
        right_angle = angle_at(snapshot["right_elbow"], snapshot["right_shoulder"], snapshot["right_wrist"])
        self.last_angle = (left_angle + right_angle) / 2

        if left_angle > config.armcurl_down_angle and right_angle > config.armcurl_down_angle:
            return Position.DOWN
        if left_angle < config.armcurl_up_angle and right_angle < config.armcurl_up_angle:
            return Position.UP
        return None
