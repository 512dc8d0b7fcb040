# breathing_service.py
"""
Breathing cues derived from the current exercise and its position.
Refreshed on a fixed cadence instead of per frame.
"""

from typing import Dict, Optional, Tuple

from fitness_coach.models.schemas import BreathingPhase, ExerciseKind, Position

BREATHING_TABLE: Dict[Tuple[ExerciseKind, Position], BreathingPhase] = {
    (ExerciseKind.PUSHUP, Position.DOWN): BreathingPhase.EXHALE,
    (ExerciseKind.PUSHUP, Position.UP): BreathingPhase.INHALE,
    (ExerciseKind.SQUAT, Position.DOWN): BreathingPhase.INHALE,
    (ExerciseKind.SQUAT, Position.UP): BreathingPhase.EXHALE,
    (ExerciseKind.OVERHEAD_PRESS, Position.UP): BreathingPhase.EXHALE,
    (ExerciseKind.OVERHEAD_PRESS, Position.DOWN): BreathingPhase.INHALE,
    (ExerciseKind.DUMBBELL_CURL, Position.UP): BreathingPhase.EXHALE,
    (ExerciseKind.DUMBBELL_CURL, Position.DOWN): BreathingPhase.INHALE,
    (ExerciseKind.JUMPING_JACK, Position.UP): BreathingPhase.INHALE,
    (ExerciseKind.JUMPING_JACK, Position.DOWN): BreathingPhase.EXHALE,
}


def breathing_phase_for(exercise: Optional[ExerciseKind], position: Optional[Position]) -> BreathingPhase:
    """Look up the cue; HOLD when no exercise is active"""
    if exercise is None or position is None:
        return BreathingPhase.HOLD
    return BREATHING_TABLE[(exercise, position)]


class BreathingGuide:
    """Keeps the latest breathing cue for the session's active exercise"""

    def __init__(self, session):
        self.session = session
        self.phase = BreathingPhase.HOLD

    def update(self) -> BreathingPhase:
        counter = self.session.active_counter
        position = counter.position if counter else None
        self.phase = breathing_phase_for(self.session.current_exercise, position)
        return self.phase
