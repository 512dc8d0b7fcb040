# push_up_counter.py
"""
Push-up counter using elbow angle analysis plus the head position.
The nose has to drop below both shoulders before a bottom position is accepted.
"""

from typing import Optional

from fitness_coach.config import config
from fitness_coach.models.exercise_counter import ExerciseCounter
from fitness_coach.models.schemas import ExerciseKind, PoseSnapshot, Position
from fitness_coach.utils.geometry import angle_at


class PushUpCounter(ExerciseCounter):
    """
    Push-up repetition counter.
    DOWN: both elbows bent under the down threshold with the nose below the shoulders.
    UP: both elbows extended over the up threshold. A rep is counted on DOWN -> UP.
    """

    kind = ExerciseKind.PUSHUP
    default_position = Position.UP
    counting_position = Position.UP
    required_keypoints = (
        "left_shoulder", "right_shoulder",
        "left_elbow", "right_elbow",
        "left_wrist", "right_wrist",
        "nose",
    )

    def classify(self, snapshot: PoseSnapshot) -> Optional[Position]:
        left_angle = angle_at(snapshot["left_elbow"], snapshot["left_shoulder"], snapshot["left_wrist"])
        right_angle = angle_at(snapshot["right_elbow"], snapshot["right_shoulder"], snapshot["right_wrist"])
        self.last_angle = (left_angle + right_angle) / 2

        nose = snapshot["nose"]
        head_low = nose.y > snapshot["left_shoulder"].y and nose.y > snapshot["right_shoulder"].y

        if left_angle < config.pushup_down_angle and right_angle < config.pushup_down_angle and head_low:
            return Position.DOWN
        if left_angle > config.pushup_up_angle and right_angle > config.pushup_up_angle:
            return Position.UP
        return None
