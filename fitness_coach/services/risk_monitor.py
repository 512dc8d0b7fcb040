# risk_monitor.py
"""
Coarse fatigue (cramps) and cardiac risk heuristics.
Sampled frequently but evaluated at most once per real second; levels only
escalate within a session. This is a rough guide, not a medical device.
"""

import time
from typing import Callable, Optional

from fitness_coach.config import config
from fitness_coach.models.schemas import RiskAssessment, RiskLevel, RiskStatus
from fitness_coach.utils.logging_utils import logger

_SEVERITY = {RiskLevel.LOW: 0, RiskLevel.MEDIUM: 1, RiskLevel.HIGH: 2}

CRAMP_MESSAGES = {
    RiskLevel.MEDIUM: "Remember to stay hydrated",
    RiskLevel.HIGH: "Extended exercise duration. Consider taking a break and hydrating.",
}

HEART_MESSAGES = {
    RiskLevel.MEDIUM: "Moderate to high intensity. Monitor your breathing.",
    RiskLevel.HIGH: "High intensity detected. Please slow down and check your heart rate.",
}


def reps_per_minute(total_reps: int, duration_seconds: float) -> float:
    """Session pace; 0 when no time has elapsed yet"""
    if duration_seconds <= 0:
        return 0.0
    return total_reps / (duration_seconds / 60)


def cramp_level(duration_seconds: float) -> Optional[RiskLevel]:
    if duration_seconds > config.cramp_high_seconds:
        return RiskLevel.HIGH
    if duration_seconds > config.cramp_medium_seconds:
        return RiskLevel.MEDIUM
    return None


def heart_level(rpm: float) -> Optional[RiskLevel]:
    if rpm > config.heart_high_rpm:
        return RiskLevel.HIGH
    if rpm > config.heart_medium_rpm:
        return RiskLevel.MEDIUM
    return None


class RiskMonitor:
    """
    Periodic evaluator of session duration and pace against risk thresholds.
    `session` only needs `is_running`, `started_at` and `total_reps`.
    """

    def __init__(self, session, clock: Callable[[], float] = time.monotonic,
                 min_interval: Optional[float] = None):
        self.session = session
        self.clock = clock
        self.min_interval = config.risk_eval_interval if min_interval is None else min_interval
        self.status = RiskStatus()
        self.last_evaluation: Optional[float] = None
        self.duration_seconds = 0.0
        self.total_reps = 0

    def sample(self, now: Optional[float] = None) -> bool:
        """
        Called on a short cadence. Evaluates only when at least `min_interval`
        seconds passed since the last evaluation. Returns True if it evaluated.
        """
        if now is None:
            now = self.clock()
        if not self.session.is_running or self.session.started_at is None:
            return False
        if self.last_evaluation is not None and now - self.last_evaluation < self.min_interval:
            return False

        self.last_evaluation = now
        self.duration_seconds = now - self.session.started_at
        self.total_reps = self.session.total_reps
        self.evaluate(self.duration_seconds, self.total_reps)
        return True

    def evaluate(self, duration_seconds: float, total_reps: int) -> RiskStatus:
        """Escalate cramp and cardiac risk from the current duration and rep count"""
        level = cramp_level(duration_seconds)
        if level is not None and self._escalates(self.status.cramps, level):
            self.status.cramps = RiskAssessment(level=level, message=CRAMP_MESSAGES[level])
            logger.warning(f"Cramp risk {level.value} after {duration_seconds:.0f}s")

        rpm = reps_per_minute(total_reps, duration_seconds)
        level = heart_level(rpm)
        if level is not None and self._escalates(self.status.heart_attack, level):
            self.status.heart_attack = RiskAssessment(level=level, message=HEART_MESSAGES[level])
            logger.warning(f"Cardiac risk {level.value} at {rpm:.1f} reps/min")

        return self.status

    @staticmethod
    def _escalates(current: RiskAssessment, level: RiskLevel) -> bool:
        return _SEVERITY[level] > _SEVERITY[current.level]

    def reset(self):
        self.status = RiskStatus()
        self.last_evaluation = None
        self.duration_seconds = 0.0
        self.total_reps = 0
