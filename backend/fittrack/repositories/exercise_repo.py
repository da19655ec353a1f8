from __future__ import annotations
from fittrack.models import Exercise
from fittrack.repositories.base import BaseRepository

class ExerciseRepository(BaseRepository[Exercise]):
    model = Exercise

    def list_by_session(self, session_id: str) -> list[Exercise]:
        return self.find(workout_id=session_id)
