from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from .exercise_set import WorkoutSet


@dataclass(slots=True)
class Exercise:
    __tablename__ = "workout_exercises"

    id: str
    workout_id: str
    name: str
    notes: str = ""
    # position in the list the client submitted; never renumbered
    order: int = 0
    sets: list[WorkoutSet] = field(default_factory=list)

    def to_row(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "workout_id": self.workout_id,
            "name": self.name,
            "notes": self.notes,
            "order": self.order,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Exercise:
        return cls(
            id=row["id"],
            workout_id=row["workout_id"],
            name=row["name"],
            notes=row.get("notes") or "",
            order=int(row.get("order") or 0),
        )
