# rep_counter.py
"""
Shared rep bookkeeping for all classifiers.
Each exercise kind has its own in-progress guard so that one motion cycle
is credited exactly once and guards never leak between exercises.
"""

from typing import Dict

from fitness_coach.models.schemas import ExerciseKind
from fitness_coach.utils.logging_utils import logger


class RepCounter:
    """
    Holds rep counts and in-progress guards keyed by exercise kind.
    Counts only ever go up; corrections are done by resetting the session.
    """

    def __init__(self):
        self.rep_counts: Dict[ExerciseKind, int] = {kind: 0 for kind in ExerciseKind}
        self.guards: Dict[ExerciseKind, bool] = {kind: False for kind in ExerciseKind}

    def on_transition_detected(self, kind: ExerciseKind) -> bool:
        """
        Credit one rep for `kind` unless this cycle was already counted.
        Returns True when the count was incremented.
        """
        if self.guards[kind]:
            return False
        self.rep_counts[kind] += 1
        self.guards[kind] = True
        logger.info(f"{kind.value} rep #{self.rep_counts[kind]} counted")
        return True

    def release(self, kind: ExerciseKind):
        """Clear the guard once the movement reached the opposite extreme"""
        self.guards[kind] = False

    def in_progress(self, kind: ExerciseKind) -> bool:
        return self.guards[kind]

    def count(self, kind: ExerciseKind) -> int:
        return self.rep_counts[kind]

    @property
    def total(self) -> int:
        return sum(self.rep_counts.values())

    def reset_guard(self, kind: ExerciseKind):
        self.guards[kind] = False

    def reset(self):
        """Zero every count and guard"""
        for kind in ExerciseKind:
            self.rep_counts[kind] = 0
            self.guards[kind] = False
