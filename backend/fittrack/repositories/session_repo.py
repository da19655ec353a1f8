from __future__ import annotations
from typing import Optional
from fittrack.models import WorkoutSession
from fittrack.repositories.base import BaseRepository

class SessionRepository(BaseRepository[WorkoutSession]):
    model = WorkoutSession

    def get_for_user(self, session_id: str, user_id: str) -> Optional[WorkoutSession]:
        found = self.find(id=session_id, user_id=user_id)
        return found[0] if found else None

    def list_by_user(self, user_id: str) -> list[WorkoutSession]:
        return self.find(user_id=user_id)
