from __future__ import annotations
from fittrack.models import WorkoutSet
from fittrack.repositories.base import BaseRepository

class SetRepository(BaseRepository[WorkoutSet]):
    model = WorkoutSet

    def list_by_exercise(self, exercise_id: str) -> list[WorkoutSet]:
        return self.find(exercise_id=exercise_id)
