from fastapi import APIRouter, Depends
from fittrack.deps.auth import get_current_user

# Food logging is not built yet; routes exist so clients can probe them.
router = APIRouter(
    prefix="/api/v1/food",
    tags=["food"],
    dependencies=[Depends(get_current_user)],
)

@router.post("/parse-text")
def parse_text():
    return {"message": "Food text parsing - coming soon"}

@router.post("/parse-image")
def parse_image():
    return {"message": "Food image parsing - coming soon"}

@router.get("/logs")
def food_logs():
    return {"message": "Food logs - coming soon"}
