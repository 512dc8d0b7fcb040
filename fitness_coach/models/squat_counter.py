# squat_counter.py
"""
Squat counter comparing knee and hip heights.
Lower-body landmarks are tracked with less confidence, so the floor is lower.
"""

from typing import Optional

from fitness_coach.config import config
from fitness_coach.models.exercise_counter import ExerciseCounter
from fitness_coach.models.schemas import ExerciseKind, PoseSnapshot, Position


class SquatCounter(ExerciseCounter):
    """
    Squat repetition counter.
    Both knees above the hips (smaller y) means squatting, both below means standing.
    A rep is counted when standing back up.
    """

    kind = ExerciseKind.SQUAT
    default_position = Position.UP
    counting_position = Position.UP
    required_keypoints = ("left_knee", "right_knee", "left_hip", "right_hip")

    @property
    def min_confidence(self) -> float:
        return config.lower_body_min_confidence

    def classify(self, snapshot: PoseSnapshot) -> Optional[Position]:
        left_knee, right_knee = snapshot["left_knee"], snapshot["right_knee"]
        left_hip, right_hip = snapshot["left_hip"], snapshot["right_hip"]

        if left_knee.y < left_hip.y and right_knee.y < right_hip.y:
            return Position.DOWN
        if left_knee.y > left_hip.y and right_knee.y > right_hip.y:
            return Position.UP
        return None
