# exercise_catalog.py
"""
Static exercise definitions and the workout plan types.
Calories per rep and instructions are shown to the user and used for summaries.
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from fitness_coach.models.schemas import ExerciseKind


class ExerciseDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ExerciseKind
    name: str
    target_reps: int = Field(gt=0)
    calories_per_rep: float = Field(ge=0.0)
    description: str = ""
    instructions: List[str] = Field(default_factory=list)


class PlanEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    exercise: ExerciseKind
    target_reps: int = Field(gt=0)


class WorkoutPlan(BaseModel):
    """Ordered exercises with their targets, fixed once a session starts"""
    model_config = ConfigDict(frozen=True)

    entries: List[PlanEntry] = Field(min_length=1)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> PlanEntry:
        return self.entries[index]


EXERCISE_CATALOG: Dict[ExerciseKind, ExerciseDefinition] = {
    ExerciseKind.PUSHUP: ExerciseDefinition(
        kind=ExerciseKind.PUSHUP,
        name="Pushups",
        target_reps=5,
        calories_per_rep=0.5,
        description="A classic upper body exercise that targets chest, shoulders, and triceps.",
        instructions=[
            "Start in plank position",
            "Lower body until chest nearly touches ground",
            "Push back up to starting position",
            "Keep body straight throughout",
        ],
    ),
    ExerciseKind.SQUAT: ExerciseDefinition(
        kind=ExerciseKind.SQUAT,
        name="Squats",
        target_reps=5,
        calories_per_rep=0.3,
        description="A fundamental lower body exercise targeting quads, hamstrings, and glutes.",
        instructions=[
            "Stand with feet shoulder-width apart",
            "Lower body as if sitting back into a chair",
            "Keep chest up and back straight",
            "Return to standing position",
        ],
    ),
    ExerciseKind.OVERHEAD_PRESS: ExerciseDefinition(
        kind=ExerciseKind.OVERHEAD_PRESS,
        name="Overhead Press",
        target_reps=3,
        calories_per_rep=1.0,
        description="An advanced upper body exercise targeting shoulders and triceps.",
        instructions=[
            "Stand with feet shoulder-width apart",
            "Hold barbell at shoulder level with an overhand grip",
            "Press barbell overhead until arms are fully extended",
            "Lower barbell back to shoulder level with control",
            "Keep core engaged and maintain proper posture throughout",
        ],
    ),
    ExerciseKind.DUMBBELL_CURL: ExerciseDefinition(
        kind=ExerciseKind.DUMBBELL_CURL,
        name="Dumbbell Curls",
        target_reps=4,
        calories_per_rep=0.4,
        description="An isolation exercise targeting the biceps muscles.",
        instructions=[
            "Stand with dumbbells at sides",
            "Curl weights toward shoulders",
            "Lower with control",
            "Keep elbows close to body",
        ],
    ),
    ExerciseKind.JUMPING_JACK: ExerciseDefinition(
        kind=ExerciseKind.JUMPING_JACK,
        name="Jumping Jacks",
        target_reps=5,
        calories_per_rep=0.2,
        description="A full-body cardio exercise that raises heart rate and improves coordination.",
        instructions=[
            "Start with feet together, arms at sides",
            "Jump feet apart while raising arms",
            "Jump back to starting position",
            "Maintain rhythm",
        ],
    ),
}

# Catalog order doubles as the default plan
DEFAULT_WORKOUT_PLAN = WorkoutPlan(entries=[
    PlanEntry(exercise=definition.kind, target_reps=definition.target_reps)
    for definition in EXERCISE_CATALOG.values()
])


def calories_for(counts: Dict[ExerciseKind, int],
                 catalog: Dict[ExerciseKind, ExerciseDefinition] = EXERCISE_CATALOG) -> float:
    """Sum of count x calories_per_rep over every exercise"""
    total = 0.0
    for kind, count in counts.items():
        definition = catalog.get(kind)
        if definition is not None:
            total += count * definition.calories_per_rep
    return total
