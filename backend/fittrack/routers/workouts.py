from fastapi import APIRouter, Depends, HTTPException, status
from fittrack.db import RecordStore, StoreError, get_store
from fittrack.deps.auth import get_current_user
from fittrack.models import AuthUser
from fittrack.schemas.workout import WorkoutCreate, WorkoutCreated, WorkoutDeleted, WorkoutRead
from fittrack.services.workouts import PartialWriteError, WorkoutNotFound, WorkoutService

router = APIRouter(prefix="/api/v1/workouts", tags=["workouts"])

def get_workout_service(store: RecordStore = Depends(get_store)) -> WorkoutService:
    return WorkoutService(store)

def _upstream(action: str, e: StoreError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Failed to {action}: {e.message}")

def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout not found")

@router.post("", response_model=WorkoutCreated, status_code=status.HTTP_201_CREATED)
def create_workout(
    payload: WorkoutCreate,
    svc: WorkoutService = Depends(get_workout_service),
    current: AuthUser = Depends(get_current_user),
):
    try:
        workout = svc.create(current.id, payload)
    except PartialWriteError as e:
        # nothing is rolled back; tell the client what did land
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"error": str(e), "step": e.step, "committed": e.committed.as_dict()},
        )
    return WorkoutCreated(id=workout.id)

@router.get("", response_model=list[WorkoutRead])
def list_my_workouts(
    svc: WorkoutService = Depends(get_workout_service),
    current: AuthUser = Depends(get_current_user),
):
    try:
        return svc.list_for_user(current.id)
    except StoreError as e:
        raise _upstream("fetch workouts", e)

@router.get("/{workout_id}", response_model=WorkoutRead)
def get_workout(
    workout_id: str,
    svc: WorkoutService = Depends(get_workout_service),
    current: AuthUser = Depends(get_current_user),
):
    try:
        return svc.get(current.id, workout_id)
    except WorkoutNotFound:
        raise _not_found()
    except StoreError as e:
        raise _upstream("fetch workout", e)

@router.delete("/{workout_id}", response_model=WorkoutDeleted)
def delete_workout(
    workout_id: str,
    svc: WorkoutService = Depends(get_workout_service),
    current: AuthUser = Depends(get_current_user),
):
    try:
        report = svc.delete(current.id, workout_id)
    except WorkoutNotFound:
        raise _not_found()
    except StoreError as e:
        raise _upstream("delete workout", e)
    return WorkoutDeleted(
        deleted_exercises=report.deleted_exercises,
        deleted_sets=report.deleted_sets,
        orphaned=report.orphaned,
    )
