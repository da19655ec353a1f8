from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from .exercise import Exercise


def _ts(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    # the store may answer with a trailing "Z"
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


@dataclass(slots=True)
class WorkoutSession:
    __tablename__ = "workout_sessions"

    id: str
    user_id: str
    workout_name: str
    workout_date: datetime
    duration_hours: int
    duration_minutes: int
    overall_rpe: float
    estimated_calories: int
    activity_type: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    exercises: list[Exercise] = field(default_factory=list)

    def to_row(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "workout_name": self.workout_name,
            "workout_date": self.workout_date.isoformat(),
            "duration_hours": self.duration_hours,
            "duration_minutes": self.duration_minutes,
            "overall_rpe": self.overall_rpe,
            "estimated_calories": self.estimated_calories,
            "activity_type": self.activity_type,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> WorkoutSession:
        return cls(
            id=row["id"],
            user_id=row["user_id"],
            workout_name=row["workout_name"],
            workout_date=_ts(row["workout_date"]),
            duration_hours=int(row.get("duration_hours") or 0),
            duration_minutes=int(row.get("duration_minutes") or 0),
            overall_rpe=float(row["overall_rpe"]),
            estimated_calories=int(row.get("estimated_calories") or 0),
            activity_type=row["activity_type"],
            created_at=_ts(row.get("created_at")),
            updated_at=_ts(row.get("updated_at")),
        )
