from types import SimpleNamespace

import pytest

from fitness_coach.models.schemas import RiskLevel
from fitness_coach.services.risk_monitor import RiskMonitor, reps_per_minute


def running_session(started_at=0.0, total_reps=0):
    return SimpleNamespace(is_running=True, started_at=started_at, total_reps=total_reps)


@pytest.fixture
def monitor():
    return RiskMonitor(running_session())


def test_cramp_medium_after_fifteen_minutes(monitor):
    status = monitor.evaluate(901, 0)
    assert status.cramps.level == RiskLevel.MEDIUM
    assert status.cramps.message


def test_cramp_high_after_thirty_minutes(monitor):
    assert monitor.evaluate(1801, 0).cramps.level == RiskLevel.HIGH


def test_short_session_stays_low(monitor):
    status = monitor.evaluate(600, 5)
    assert status.cramps.level == RiskLevel.LOW
    assert status.heart_attack.level == RiskLevel.LOW


def test_twenty_reps_per_minute_is_high_cardiac_risk(monitor):
    assert monitor.evaluate(60, 20).heart_attack.level == RiskLevel.HIGH


def test_twelve_reps_per_minute_is_medium(monitor):
    assert monitor.evaluate(60, 12).heart_attack.level == RiskLevel.MEDIUM


def test_zero_duration_does_not_divide_by_zero(monitor):
    assert reps_per_minute(10, 0) == 0.0
    assert monitor.evaluate(0, 10).heart_attack.level == RiskLevel.LOW


def test_levels_only_escalate(monitor):
    monitor.evaluate(60, 20)
    status = monitor.evaluate(600, 20)
    assert status.heart_attack.level == RiskLevel.HIGH

    monitor.evaluate(1801, 0)
    assert monitor.evaluate(950, 0).cramps.level == RiskLevel.HIGH


def test_sample_evaluates_at_most_once_per_second():
    session = running_session(started_at=0.0, total_reps=20)
    monitor = RiskMonitor(session)

    assert monitor.sample(now=60.0)
    assert monitor.status.heart_attack.level == RiskLevel.HIGH
    assert not monitor.sample(now=60.5)
    assert not monitor.sample(now=60.9)
    assert monitor.sample(now=61.0)
    assert monitor.duration_seconds == pytest.approx(61.0)


def test_sample_skips_when_no_session_runs():
    session = SimpleNamespace(is_running=False, started_at=None, total_reps=0)
    monitor = RiskMonitor(session)

    assert not monitor.sample(now=5000.0)
    assert monitor.last_evaluation is None


def test_reset(monitor):
    monitor.evaluate(1801, 100)
    monitor.reset()

    assert monitor.status.cramps.level == RiskLevel.LOW
    assert monitor.status.heart_attack.level == RiskLevel.LOW
