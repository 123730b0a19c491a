"""Auth routes for the mock API"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ...models.auth import AuthResponse, User
from ...models.common import WireModel
from ..database import UserDatabase
from ..deps import get_user_db
from ..security import issue_token, require_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(WireModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(min_length=6)
    phone: Optional[str] = None


class MeResponse(BaseModel):
    user: User


@router.post("/login", response_model=AuthResponse)
async def login(request: LoginRequest, user_db: UserDatabase = Depends(get_user_db)):
    user = user_db.authenticate(request.email, request.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid email or password")
    logger.info(f"User {user.email} logged in")
    return AuthResponse(user=user, token=issue_token(user))


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(request: RegisterRequest, user_db: UserDatabase = Depends(get_user_db)):
    user = user_db.create_user(
        email=request.email,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
        phone=request.phone,
    )
    if not user:
        raise HTTPException(status_code=409, detail="Email is already registered")
    return AuthResponse(user=user, token=issue_token(user), message="Registration successful")


@router.get("/me", response_model=MeResponse)
async def me(user: User = Depends(require_user)):
    return MeResponse(user=user)
