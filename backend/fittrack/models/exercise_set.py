from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(slots=True)
class WorkoutSet:
    __tablename__ = "workout_sets"

    id: str
    exercise_id: str
    weight: str = ""
    reps: str = ""
    rpe: Optional[float] = None

    def to_row(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "exercise_id": self.exercise_id,
            "weight": self.weight,
            "reps": self.reps,
            "rpe": self.rpe,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> WorkoutSet:
        rpe = row.get("rpe")
        return cls(
            id=row["id"],
            exercise_id=row["exercise_id"],
            weight=row.get("weight") or "",
            reps=row.get("reps") or "",
            rpe=float(rpe) if rpe is not None else None,
        )
