from .user import AuthUser, IdentityUser
from .session import WorkoutSession
from .exercise import Exercise
from .exercise_set import WorkoutSet

__all__ = ["AuthUser", "IdentityUser", "WorkoutSession", "Exercise", "WorkoutSet"]
