# jumping_jack_counter.py
"""
Jumping jack counter using the shoulder-elbow-hip angle of both arms.
Angles are smoothed over a short trailing window so one noisy frame cannot flip the position.
"""

from collections import deque
from typing import Optional

import numpy as np

from fitness_coach.config import config
from fitness_coach.models.exercise_counter import ExerciseCounter
from fitness_coach.models.rep_counter import RepCounter
from fitness_coach.models.schemas import ExerciseKind, PoseSnapshot, Position
from fitness_coach.utils.geometry import angle_at


class JumpingJackCounter(ExerciseCounter):
    """
    Jumping jack repetition counter.
    Arms raised (small smoothed angle) is UP, arms at the sides is DOWN;
    a rep is counted when the arms come back down.
    """

    kind = ExerciseKind.JUMPING_JACK
    default_position = Position.DOWN
    counting_position = Position.DOWN
    required_keypoints = (
        "left_shoulder", "right_shoulder",
        "left_elbow", "right_elbow",
        "left_hip", "right_hip",
    )

    def __init__(self, rep_counter: Optional[RepCounter] = None):
        super().__init__(rep_counter)
        self.left_history = deque(maxlen=config.jumping_jack_window)
        self.right_history = deque(maxlen=config.jumping_jack_window)

    def classify(self, snapshot: PoseSnapshot) -> Optional[Position]:
        left_angle = angle_at(snapshot["left_elbow"], snapshot["left_shoulder"], snapshot["left_hip"])
        right_angle = angle_at(snapshot["right_elbow"], snapshot["right_shoulder"], snapshot["right_hip"])

        self.left_history.append(left_angle)
        self.right_history.append(right_angle)
        smooth_left = float(np.mean(self.left_history))
        smooth_right = float(np.mean(self.right_history))
        self.last_angle = (smooth_left + smooth_right) / 2

        if smooth_left > config.jumping_jack_down_angle and smooth_right > config.jumping_jack_down_angle:
            return Position.DOWN
        if smooth_left < config.jumping_jack_up_angle and smooth_right < config.jumping_jack_up_angle:
            return Position.UP
        return None

    def reset(self):
        """Reset position, guard and the smoothing window"""
        super().reset()
        self.left_history.clear()
        self.right_history.clear()
