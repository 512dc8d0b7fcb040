"""Shared fixtures: synthetic keypoint snapshots and a controllable clock."""

import math
from typing import List

import pytest

from fitness_coach.models.schemas import ExerciseKind, Keypoint, PoseSnapshot
from fitness_coach.services.scheduler import Scheduler

SHOULDER_Y = 150.0
ELBOW_Y = 200.0
HIP_Y = 300.0
LIMB = 50.0


def kp(name: str, x: float, y: float, score: float = 0.9) -> Keypoint:
    return Keypoint(name=name, x=x, y=y, score=score)


class PoseFactory:
    """
    Builds snapshots with exact joint geometry.
    Elbows sit directly below the shoulders; the third point of an arm is
    placed so that the angle at the elbow equals the requested value.
    """

    def arms(self, left_angle: float, right_angle: float, far: str = "wrist",
             nose_y: float = None, score: float = 0.9) -> PoseSnapshot:
        snapshot = {}
        for side, x, sign, angle in (("left", 100.0, -1, left_angle), ("right", 300.0, 1, right_angle)):
            rad = math.radians(angle)
            snapshot[f"{side}_shoulder"] = kp(f"{side}_shoulder", x, SHOULDER_Y, score)
            snapshot[f"{side}_elbow"] = kp(f"{side}_elbow", x, ELBOW_Y, score)
            snapshot[f"{side}_{far}"] = kp(
                f"{side}_{far}", x + sign * LIMB * math.sin(rad), ELBOW_Y - LIMB * math.cos(rad), score
            )
        if nose_y is not None:
            snapshot["nose"] = kp("nose", 200.0, nose_y, score)
        return snapshot

    def pushup(self, angle: float, head_low: bool = True, score: float = 0.9) -> PoseSnapshot:
        nose_y = SHOULDER_Y + 30 if head_low else SHOULDER_Y - 50
        return self.arms(angle, angle, nose_y=nose_y, score=score)

    def jack(self, angle: float, score: float = 0.9) -> PoseSnapshot:
        return self.arms(angle, angle, far="hip", score=score)

    def squat(self, left_knee_above: bool, right_knee_above: bool = None, score: float = 0.9) -> PoseSnapshot:
        if right_knee_above is None:
            right_knee_above = left_knee_above
        snapshot = {}
        for side, x, above in (("left", 150.0, left_knee_above), ("right", 250.0, right_knee_above)):
            snapshot[f"{side}_hip"] = kp(f"{side}_hip", x, HIP_Y, score)
            snapshot[f"{side}_knee"] = kp(f"{side}_knee", x, HIP_Y - 40 if above else HIP_Y + 80, score)
        return snapshot

    def press(self, left_elbow_above: bool, right_elbow_above: bool = None, score: float = 0.9) -> PoseSnapshot:
        if right_elbow_above is None:
            right_elbow_above = left_elbow_above
        snapshot = {}
        for side, x, above in (("left", 100.0, left_elbow_above), ("right", 300.0, right_elbow_above)):
            snapshot[f"{side}_shoulder"] = kp(f"{side}_shoulder", x, SHOULDER_Y, score)
            snapshot[f"{side}_elbow"] = kp(f"{side}_elbow", x, SHOULDER_Y - 60 if above else SHOULDER_Y + 60, score)
        return snapshot

    def cycle(self, exercise: ExerciseKind) -> List[PoseSnapshot]:
        """Frames for one complete rep, starting from the exercise's default position"""
        if exercise == ExerciseKind.PUSHUP:
            return [self.pushup(90), self.pushup(170)]
        if exercise == ExerciseKind.SQUAT:
            return [self.squat(True), self.squat(False)]
        if exercise == ExerciseKind.OVERHEAD_PRESS:
            return [self.press(False), self.press(True)]
        if exercise == ExerciseKind.DUMBBELL_CURL:
            return [self.arms(60, 60), self.arms(170, 170)]
        if exercise == ExerciseKind.JUMPING_JACK:
            return [self.jack(20)] * 5 + [self.jack(175)] * 5
        raise ValueError(exercise)


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def poses():
    return PoseFactory()


@pytest.fixture
def clock():
    return FakeClock(1000.0)


@pytest.fixture
def scheduler(clock):
    return Scheduler(clock)
