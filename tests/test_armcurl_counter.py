from fitness_coach.models.armcurl_counter import ArmCurlCounter
from fitness_coach.models.schemas import Position


def test_starts_extended():
    counter = ArmCurlCounter()
    assert counter.position == Position.DOWN


def test_curl_counts_when_arms_extend_again(poses):
    counter = ArmCurlCounter()

    assert counter.analyze_pose(poses.arms(60, 60)) == (0, Position.UP)
    assert counter.analyze_pose(poses.arms(170, 170)) == (1, Position.DOWN)


def test_extended_frames_alone_do_not_count(poses):
    counter = ArmCurlCounter()
    for _ in range(10):
        counter.analyze_pose(poses.arms(170, 170))

    assert counter.count == 0


def test_dead_band_between_105_and_145(poses):
    counter = ArmCurlCounter()
    counter.analyze_pose(poses.arms(100, 100))
    for angle in (110, 130, 144, 120):
        counter.analyze_pose(poses.arms(angle, angle))
    assert counter.position == Position.UP
    assert counter.count == 0

    counter.analyze_pose(poses.arms(150, 150))
    assert counter.count == 1


def test_single_arm_curl_is_not_a_rep(poses):
    counter = ArmCurlCounter()
    counter.analyze_pose(poses.arms(60, 170))
    counter.analyze_pose(poses.arms(170, 170))

    assert counter.count == 0


def test_missing_wrist_skips(poses):
    counter = ArmCurlCounter()
    frame = poses.arms(60, 60)
    del frame["right_wrist"]
    counter.analyze_pose(frame)

    assert counter.position == Position.DOWN
    assert counter.skipped_frames == 1
