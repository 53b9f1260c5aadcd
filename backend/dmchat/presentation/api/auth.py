"""
Auth API Router - registration, login and "who am I".

Endpoints:
- POST /api/register  {username, password} → {token, user}
- POST /api/login     {username, password} → {token, user}
- GET  /api/me        → {user}

Login failures answer 400 (not 401) with "User not found" / "Wrong password",
which is what existing clients expect.
"""

from logging import getLogger
from fastapi import APIRouter, Depends, HTTPException, status
from dishka.integrations.fastapi import FromDishka, inject
from pydantic import BaseModel

from dmchat.application.commands.auth import (
    AuthResult,
    LoginUserCommand,
    LoginUserHandler,
    RegisterUserCommand,
    RegisterUserHandler,
)
from dmchat.application.dto.user import UserDTO
from dmchat.domain.exceptions import AuthError, DomainValidationError
from dmchat.domain.ports.repositories import UserRepository
from dmchat.presentation.dependencies.auth import AuthUser, get_current_user

logger = getLogger(__name__)


# ==================== REQUEST/RESPONSE MODELS ====================


class CredentialsRequest(BaseModel):
    """Request body for register and login."""

    username: str = ""
    password: str = ""


class AuthResponse(BaseModel):
    token: str
    user: UserDTO


class MeResponse(BaseModel):
    user: UserDTO


def _to_response(result: AuthResult) -> AuthResponse:
    return AuthResponse(token=result.token, user=UserDTO.from_entity(result.user))


# ==================== ROUTER ====================

router = APIRouter(prefix="/api", tags=["auth"])


# ==================== ENDPOINTS ====================


@router.post("/register", response_model=AuthResponse)
@inject
async def register(
    request: CredentialsRequest,
    handler: FromDishka[RegisterUserHandler],
):
    """Create an account and return a credential for it."""
    try:
        result = await handler.execute(
            RegisterUserCommand(username=request.username, password=request.password)
        )
    except DomainValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    return _to_response(result)


@router.post("/login", response_model=AuthResponse)
@inject
async def login(
    request: CredentialsRequest,
    handler: FromDishka[LoginUserHandler],
):
    try:
        result = await handler.execute(
            LoginUserCommand(username=request.username, password=request.password)
        )
    except AuthError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    return _to_response(result)


@router.get("/me", response_model=MeResponse)
@inject
async def me(
    users: FromDishka[UserRepository],
    current_user: AuthUser = Depends(get_current_user),
):
    user = await users.get_by_id(current_user.id)
    if not user:
        # Token outlived the account
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unknown user")
    return MeResponse(user=UserDTO.from_entity(user))
