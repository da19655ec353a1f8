from fastapi import APIRouter, Depends
from fittrack.deps.auth import get_current_user

router = APIRouter(prefix="/api/v1", tags=["dashboard"], dependencies=[Depends(get_current_user)])

@router.get("/dashboard")
def dashboard():
    return {"message": "Dashboard insights - coming soon"}
