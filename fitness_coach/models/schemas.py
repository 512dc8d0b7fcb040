# schemas.py
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field


class ExerciseKind(str, Enum):
    """The five exercises the coach can classify"""
    PUSHUP = "pushups"
    SQUAT = "squats"
    OVERHEAD_PRESS = "overhead press"
    DUMBBELL_CURL = "dumbbell curls"
    JUMPING_JACK = "jumping jacks"


class Position(str, Enum):
    UP = "up"
    DOWN = "down"


class SessionPhase(str, Enum):
    IDLE = "idle"
    IN_EXERCISE = "in_exercise"
    COMPLETED = "completed"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class BreathingPhase(str, Enum):
    INHALE = "inhale"
    EXHALE = "exhale"
    HOLD = "hold"


# COCO keypoint order used by the YOLO pose model
COCO_KEYPOINT_NAMES = [
    "nose", "left_eye", "right_eye", "left_ear", "right_ear",
    "left_shoulder", "right_shoulder", "left_elbow", "right_elbow",
    "left_wrist", "right_wrist", "left_hip", "right_hip",
    "left_knee", "right_knee", "left_ankle", "right_ankle",
]


class Keypoint(BaseModel):
    """
    One named anatomical landmark for a single frame.
    Coordinates are frame-relative pixels (y grows downwards), score is in [0, 1].
    """
    model_config = ConfigDict(frozen=True)

    name: str
    x: float
    y: float
    score: float = Field(ge=0.0, le=1.0)


# Landmark name -> keypoint for one frame
PoseSnapshot = Dict[str, Keypoint]


def snapshot_from_array(keypoints: np.ndarray, names: List[str] = COCO_KEYPOINT_NAMES) -> PoseSnapshot:
    """
    Convert a (N, 3) array of [x, y, confidence] rows into a PoseSnapshot.
    Row order follows `names`; extra rows are ignored.
    """
    snapshot: PoseSnapshot = {}
    for name, row in zip(names, keypoints):
        score = float(np.clip(row[2], 0.0, 1.0))
        snapshot[name] = Keypoint(name=name, x=float(row[0]), y=float(row[1]), score=score)
    return snapshot


class RiskAssessment(BaseModel):
    level: RiskLevel = RiskLevel.LOW
    message: str = ""


class RiskStatus(BaseModel):
    """Current fatigue and cardiac warnings. Recomputed, never historized."""
    cramps: RiskAssessment = Field(default_factory=RiskAssessment)
    heart_attack: RiskAssessment = Field(default_factory=RiskAssessment)


class ExerciseCount(BaseModel):
    exercise: ExerciseKind
    count: int = 0


class WorkoutSummary(BaseModel):
    """
    Created once per completed session and appended to the workout history.
    """
    date: datetime
    total_calories: float
    total_duration_seconds: int
    per_exercise_counts: List[ExerciseCount]

    def count_for(self, exercise: ExerciseKind) -> int:
        return sum(item.count for item in self.per_exercise_counts if item.exercise == exercise)


class WorkoutState(BaseModel):
    """
    Pydantic model representing the complete workout state returned to clients.
    Read-only snapshot of the session, risk monitor and breathing guide.
    """
    phase: SessionPhase = SessionPhase.IDLE          # Session state machine phase
    currentExerciseIndex: int = -1                   # Index into the workout plan, -1 when idle
    currentExercise: Optional[ExerciseKind] = None   # Exercise receiving frames
    targetReps: int = 0                              # Target of the current plan entry
    repCount: int = 0                                # Reps done since entering the current exercise
    repCounts: Dict[ExerciseKind, int] = Field(default_factory=dict)  # Session totals per exercise
    position: Optional[Position] = None              # Classifier position of the current exercise
    angle: Optional[float] = None                    # Joint angle behind the last classification, if angle-based
    timer: int = 0                                   # Seconds spent in the current exercise
    exerciseTimes: List[int] = Field(default_factory=list)  # Recorded seconds per plan entry
    advanceAvailable: bool = False                   # Target reached, advance() will succeed
    isWorkoutActive: bool = False                    # Whether a plan is being worked through
    risk: RiskStatus = Field(default_factory=RiskStatus)
    breathingPhase: BreathingPhase = BreathingPhase.HOLD
    skeleton: List[Keypoint] = Field(default_factory=list)  # Last accepted keypoints for overlay
    summary: Optional[WorkoutSummary] = None         # Set once the session completed
