from typing import Annotated, Literal
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

Rpe = Annotated[float, Field(ge=1, le=10)]
NonNegInt = Annotated[int, Field(ge=0)]
ActivityType = Literal["strength", "cardio"]


def _non_blank(v: str, what: str) -> str:
    v2 = v.strip()
    if not v2:
        raise ValueError(f"{what} cannot be blank")
    return v2


class SetCreate(BaseModel):
    # free text ("100kg", "8-10", "AMRAP")
    weight: str = ""
    reps: str = ""
    rpe: Rpe | None = None

class ExerciseCreate(BaseModel):
    name: str
    notes: str = ""
    sets: list[SetCreate] = []

    @field_validator("name")
    @classmethod
    def name_non_blank(cls, v: str) -> str:
        return _non_blank(v, "exercise name")

class WorkoutCreate(BaseModel):
    workout_name: str
    workout_date: datetime
    duration_hours: NonNegInt = 0
    duration_minutes: NonNegInt
    overall_rpe: Rpe
    estimated_calories: NonNegInt = 0
    activity_type: ActivityType
    exercises: list[ExerciseCreate] = []

    @field_validator("workout_name")
    @classmethod
    def workout_name_non_blank(cls, v: str) -> str:
        return _non_blank(v, "workout_name")


class SetRead(BaseModel):
    id: str
    exercise_id: str
    weight: str
    reps: str
    rpe: float | None = None

    model_config = {"from_attributes": True}

class ExerciseRead(BaseModel):
    id: str
    workout_id: str
    name: str
    notes: str
    order: int
    sets: list[SetRead] = []

    model_config = {"from_attributes": True}

class WorkoutRead(BaseModel):
    id: str
    user_id: str
    workout_name: str
    workout_date: datetime
    duration_hours: int
    duration_minutes: int
    overall_rpe: float
    estimated_calories: int
    activity_type: str
    exercises: list[ExerciseRead] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}

class WorkoutCreated(BaseModel):
    id: str
    message: str = "Workout created successfully"

class WorkoutDeleted(BaseModel):
    message: str = "Workout deleted successfully"
    deleted_exercises: int
    deleted_sets: int
    # "<table>:<id>" of child rows the cascade could not remove
    orphaned: list[str] = []
