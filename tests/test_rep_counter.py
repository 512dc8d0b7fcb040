from fitness_coach.models.rep_counter import RepCounter
from fitness_coach.models.schemas import ExerciseKind


def test_transition_counts_once_per_guarded_cycle():
    counter = RepCounter()

    assert counter.on_transition_detected(ExerciseKind.PUSHUP)
    assert not counter.on_transition_detected(ExerciseKind.PUSHUP)
    assert counter.count(ExerciseKind.PUSHUP) == 1
    assert counter.in_progress(ExerciseKind.PUSHUP)

    counter.release(ExerciseKind.PUSHUP)
    assert counter.on_transition_detected(ExerciseKind.PUSHUP)
    assert counter.count(ExerciseKind.PUSHUP) == 2


def test_guards_are_per_exercise():
    counter = RepCounter()
    counter.on_transition_detected(ExerciseKind.SQUAT)

    assert counter.on_transition_detected(ExerciseKind.PUSHUP)
    assert counter.in_progress(ExerciseKind.SQUAT)
    assert not counter.in_progress(ExerciseKind.DUMBBELL_CURL)

    counter.reset_guard(ExerciseKind.SQUAT)
    assert not counter.in_progress(ExerciseKind.SQUAT)
    assert counter.in_progress(ExerciseKind.PUSHUP)


def test_total_and_reset():
    counter = RepCounter()
    for kind in (ExerciseKind.PUSHUP, ExerciseKind.SQUAT, ExerciseKind.JUMPING_JACK):
        counter.on_transition_detected(kind)
    assert counter.total == 3

    counter.reset()
    assert counter.total == 0
    assert not any(counter.guards.values())
