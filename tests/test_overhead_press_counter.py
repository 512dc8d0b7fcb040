from fitness_coach.models.overhead_press_counter import OverheadPressCounter
from fitness_coach.models.schemas import Position


def test_press_counts_when_elbows_rise_above_shoulders(poses):
    counter = OverheadPressCounter()
    assert counter.position == Position.UP

    counter.analyze_pose(poses.press(False))
    assert counter.position == Position.DOWN
    assert counter.count == 0

    counter.analyze_pose(poses.press(True))
    assert counter.count == 1


def test_starting_pressed_does_not_count(poses):
    counter = OverheadPressCounter()
    for _ in range(5):
        counter.analyze_pose(poses.press(True))

    assert counter.count == 0


def test_mixed_elbows_hold_position(poses):
    counter = OverheadPressCounter()
    counter.analyze_pose(poses.press(False))
    counter.analyze_pose(poses.press(True, False))

    assert counter.position == Position.DOWN
    assert counter.count == 0


def test_three_reps(poses):
    counter = OverheadPressCounter()
    for _ in range(3):
        counter.analyze_pose(poses.press(False))
        counter.analyze_pose(poses.press(True))
        counter.analyze_pose(poses.press(True))

    assert counter.count == 3


def test_low_confidence_elbow_is_skipped(poses):
    counter = OverheadPressCounter()
    counter.analyze_pose(poses.press(False, score=0.4))

    assert counter.position == Position.UP
    assert counter.skipped_frames == 1
