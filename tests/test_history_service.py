from datetime import datetime, timezone

import pytest

from fitness_coach.models.schemas import ExerciseCount, ExerciseKind, WorkoutSummary
from fitness_coach.services import history_service
from fitness_coach.services.history_service import HistoryStore


def make_summary(pushups, squats):
    return WorkoutSummary(
        date=datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc),
        total_calories=pushups * 0.5 + squats * 0.3,
        total_duration_seconds=42,
        per_exercise_counts=[
            ExerciseCount(exercise=ExerciseKind.PUSHUP, count=pushups),
            ExerciseCount(exercise=ExerciseKind.SQUAT, count=squats),
        ],
    )


def test_empty_history(tmp_path):
    assert HistoryStore(tmp_path / "history.json").load_workout_history() == []


def test_append_keeps_order(tmp_path):
    store = HistoryStore(tmp_path / "nested" / "history.json")
    first, second = make_summary(5, 5), make_summary(2, 8)
    store.append_workout_summary(first)
    store.append_workout_summary(second)

    history = HistoryStore(tmp_path / "nested" / "history.json").load_workout_history()
    assert history == [first, second]
    assert history[1].count_for(ExerciseKind.SQUAT) == 8


def test_corrupt_file_reads_as_empty(tmp_path):
    path = tmp_path / "history.json"
    path.write_text("{not json")

    assert HistoryStore(path).load_workout_history() == []


def test_append_moves_unreadable_file_aside(tmp_path):
    path = tmp_path / "history.json"
    path.write_text("{not json")
    summary = make_summary(3, 0)

    HistoryStore(path).append_workout_summary(summary)

    assert HistoryStore(path).load_workout_history() == [summary]
    backups = list(tmp_path.glob("history.json.corrupt-*"))
    assert len(backups) == 1
    assert backups[0].read_text() == "{not json"


def test_append_leaves_no_temporary_files(tmp_path):
    store = HistoryStore(tmp_path / "history.json")
    store.append_workout_summary(make_summary(1, 1))
    store.append_workout_summary(make_summary(2, 2))

    assert sorted(p.name for p in tmp_path.iterdir()) == ["history.json"]


def test_failed_write_keeps_previous_history(tmp_path, monkeypatch):
    store = HistoryStore(tmp_path / "history.json")
    first = make_summary(5, 5)
    store.append_workout_summary(first)

    def broken_replace(self, target):
        raise OSError("disk full")

    monkeypatch.setattr(history_service.Path, "replace", broken_replace)
    with pytest.raises(OSError):
        store.append_workout_summary(make_summary(1, 1))
    monkeypatch.undo()

    assert store.load_workout_history() == [first]
    assert sorted(p.name for p in tmp_path.iterdir()) == ["history.json"]
