from typing import Annotated
from pydantic import BaseModel, EmailStr, Field

class UserRegister(BaseModel):
    email: EmailStr
    # strength rules are enforced by the identity service
    password: Annotated[str, Field(min_length=8)]

class UserLogin(BaseModel):
    email: EmailStr
    password: Annotated[str, Field(min_length=1)]

class UserRead(BaseModel):
    id: str
    email: str
    model_config = {"from_attributes": True}

class AuthResponse(BaseModel):
    token: str
    user: UserRead
