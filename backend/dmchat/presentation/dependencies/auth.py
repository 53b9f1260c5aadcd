"""
Authentication Dependency for FastAPI.

- Extracts the bearer token from the Authorization header
- Verifies it with the app's CredentialService (resolved from the DI container)
- Raises HTTPException 401 if missing or invalid
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from dmchat.domain.exceptions import AuthError
from dmchat.domain.ports.credentials import CredentialService
from dmchat.domain.value_objects.user_id import UserId


@dataclass
class AuthUser:
    id: UserId


security = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthUser:
    """
    Resolve the caller's identity from the bearer token.

    Raises:
        HTTPException 401 if the token is missing, invalid or expired
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing token",
        )

    credential_service = await request.app.state.dishka_container.get(
        CredentialService
    )
    try:
        user_id = credential_service.verify(credentials.credentials)
    except AuthError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
        ) from e

    return AuthUser(id=user_id)
