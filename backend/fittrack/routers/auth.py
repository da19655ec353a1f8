from fastapi import APIRouter, Depends, HTTPException, status
from fittrack.deps.auth import get_current_user
from fittrack.identity import IdentityClient, IdentityError, MalformedIdentityResponse, get_identity
from fittrack.models import AuthUser, IdentityUser
from fittrack.schemas.user import AuthResponse, UserLogin, UserRead, UserRegister
from fittrack.security import create_access_token

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])

def _issue(user: IdentityUser) -> AuthResponse:
    token = create_access_token(sub=user.id, email=user.email)
    return AuthResponse(token=token, user=UserRead(id=user.id, email=user.email))

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: UserRegister, identity: IdentityClient = Depends(get_identity)):
    try:
        user = identity.sign_up(payload.email, payload.password)
    except MalformedIdentityResponse as e:
        raise HTTPException(status_code=500, detail=e.message)
    except IdentityError as e:
        raise HTTPException(status_code=400, detail=f"Failed to create account: {e.message}")
    return _issue(user)

@router.post("/login", response_model=AuthResponse)
def login(payload: UserLogin, identity: IdentityClient = Depends(get_identity)):
    try:
        user = identity.sign_in(payload.email, payload.password)
    except MalformedIdentityResponse as e:
        raise HTTPException(status_code=500, detail=e.message)
    except IdentityError:
        raise HTTPException(status_code=401, detail="Invalid email or password")
    return _issue(user)

@router.get("/me", response_model=UserRead)
def me(current_user: AuthUser = Depends(get_current_user)):
    return current_user
