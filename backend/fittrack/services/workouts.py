"""Workout aggregate persistence over three flat store tables.

A workout is stored as one ``workout_sessions`` row, one ``workout_exercises``
row per exercise and one ``workout_sets`` row per set. The store offers no
multi-row transaction and no cascade, so this module writes, reads and
deletes the tree one row at a time:

* create writes parent before children and stops at the first failure.
  Rows already written stay written; :class:`PartialWriteError` lists them.
* reads are lenient: a failed exercise/set fetch yields no children instead
  of failing the whole read.
* delete is a best-effort cascade: child rows it failed to delete, or could
  not list, are collected in the returned :class:`DeleteReport`. An exercise
  whose sets cannot be listed is kept. Only the session delete can fail.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Optional

from fittrack.db import RecordStore, StoreError
from fittrack.models import Exercise, WorkoutSession, WorkoutSet
from fittrack.repositories.exercise_repo import ExerciseRepository
from fittrack.repositories.session_repo import SessionRepository
from fittrack.repositories.set_repo import SetRepository
from fittrack.schemas.workout import WorkoutCreate

log = logging.getLogger("uvicorn")


class WorkoutNotFound(Exception):
    pass


@dataclass(slots=True)
class CommittedRows:
    workout_id: Optional[str] = None
    exercise_ids: list[str] = field(default_factory=list)
    set_ids: list[str] = field(default_factory=list)

    def as_dict(self) -> dict:
        return asdict(self)


class PartialWriteError(Exception):
    """A create stopped partway; ``committed`` holds what reached the store."""

    def __init__(self, step: str, cause: StoreError, committed: CommittedRows):
        super().__init__(f"Failed to create {step}: {cause.message}")
        self.step = step
        self.cause = cause
        self.committed = committed


@dataclass(slots=True)
class DeleteReport:
    workout_id: str
    deleted_exercises: int = 0
    deleted_sets: int = 0
    orphaned: list[str] = field(default_factory=list)


def _new_id() -> str:
    return str(uuid.uuid4())


class WorkoutService:
    def __init__(self, store: RecordStore):
        self.sessions = SessionRepository(store)
        self.exercises = ExerciseRepository(store)
        self.sets = SetRepository(store)

    # WRITES
    def create(self, user_id: str, payload: WorkoutCreate) -> WorkoutSession:
        now = datetime.now(timezone.utc)
        committed = CommittedRows()

        session = WorkoutSession(
            id=_new_id(),
            user_id=user_id,
            workout_name=payload.workout_name,
            workout_date=payload.workout_date,
            duration_hours=payload.duration_hours,
            duration_minutes=payload.duration_minutes,
            overall_rpe=payload.overall_rpe,
            estimated_calories=payload.estimated_calories,
            activity_type=payload.activity_type,
            created_at=now,
            updated_at=now,
        )
        self._write(self.sessions, session, "workout", committed)
        committed.workout_id = session.id

        for index, ex_in in enumerate(payload.exercises):
            exercise = Exercise(
                id=_new_id(),
                workout_id=session.id,
                name=ex_in.name,
                notes=ex_in.notes,
                order=index,
            )
            self._write(self.exercises, exercise, "exercise", committed)
            committed.exercise_ids.append(exercise.id)

            for set_in in ex_in.sets:
                ws = WorkoutSet(
                    id=_new_id(),
                    exercise_id=exercise.id,
                    weight=set_in.weight,
                    reps=set_in.reps,
                    rpe=set_in.rpe,
                )
                self._write(self.sets, ws, "set", committed)
                committed.set_ids.append(ws.id)
                exercise.sets.append(ws)

            session.exercises.append(exercise)

        log.info(
            "workout %s created for user %s (%d exercises, %d sets)",
            session.id, user_id, len(committed.exercise_ids), len(committed.set_ids),
        )
        return session

    def _write(self, repo, entity, step: str, committed: CommittedRows) -> None:
        try:
            repo.add(entity)
        except StoreError as e:
            log.error(
                "workout create stopped at %s write; committed=%s: %s",
                step, committed.as_dict(), e.message,
            )
            raise PartialWriteError(step, e, committed) from e

    def delete(self, user_id: str, workout_id: str) -> DeleteReport:
        session = self.sessions.get_for_user(workout_id, user_id)
        if session is None:
            raise WorkoutNotFound(workout_id)

        report = DeleteReport(workout_id=workout_id)
        exercises = self._fetch_for_delete(
            self.exercises.list_by_session, workout_id,
            f"{self.exercises.table}:workout_id={workout_id}", report,
        )
        for exercise in exercises or []:
            sets = self._fetch_for_delete(
                self.sets.list_by_exercise, exercise.id,
                f"{self.exercises.table}:{exercise.id}", report,
            )
            if sets is None:
                # keep the exercise so its unseen sets still have a parent
                continue
            for ws in sets:
                if self._try_delete(self.sets, ws.id, report):
                    report.deleted_sets += 1
            if self._try_delete(self.exercises, exercise.id, report):
                report.deleted_exercises += 1

        self.sessions.delete(workout_id)
        if report.orphaned:
            log.warning("workout %s deleted with orphaned rows: %s", workout_id, report.orphaned)
        return report

    @staticmethod
    def _fetch_for_delete(fetch, parent_id: str, marker: str, report: DeleteReport) -> Optional[list]:
        """Children of ``parent_id``, or None (and ``marker`` orphaned) if unknown."""
        try:
            return fetch(parent_id)
        except (StoreError, KeyError, TypeError, ValueError) as e:
            log.warning("cascade fetch under %s failed, leaving %s: %r", parent_id, marker, e)
            report.orphaned.append(marker)
            return None

    def _try_delete(self, repo, row_id: str, report: DeleteReport) -> bool:
        try:
            repo.delete(row_id)
        except StoreError as e:
            log.warning("cascade delete of %s:%s failed: %s", repo.table, row_id, e.message)
            report.orphaned.append(f"{repo.table}:{row_id}")
            return False
        return True

    # READS
    def list_for_user(self, user_id: str) -> list[WorkoutSession]:
        sessions = self.sessions.list_by_user(user_id)
        for session in sessions:
            self._attach_children(session)
        return sessions

    def get(self, user_id: str, workout_id: str) -> WorkoutSession:
        session = self.sessions.get_for_user(workout_id, user_id)
        if session is None:
            raise WorkoutNotFound(workout_id)
        self._attach_children(session)
        return session

    def _attach_children(self, session: WorkoutSession) -> None:
        exercises = self._children(self.exercises.list_by_session, session.id)
        for exercise in exercises:
            exercise.sets = self._children(self.sets.list_by_exercise, exercise.id)
        # stable: equal indices keep store order
        session.exercises = sorted(exercises, key=lambda e: e.order)

    @staticmethod
    def _children(fetch, parent_id: str) -> list:
        try:
            return fetch(parent_id)
        except StoreError as e:
            log.warning("child fetch for %s failed, treating as empty: %s", parent_id, e.message)
            return []
        except (KeyError, TypeError, ValueError) as e:
            log.warning("child rows for %s unreadable, treating as empty: %r", parent_id, e)
            return []
