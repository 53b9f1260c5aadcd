"""
JWT credential service - issues and verifies HS256 bearer tokens.

Claims: sub (user id as string), username, iat, exp, iss, aud.
"""

import logging
from datetime import datetime, timedelta, timezone

import jwt

from dmchat.domain.entities.user import User
from dmchat.domain.exceptions import AuthError
from dmchat.domain.ports.credentials import CredentialService
from dmchat.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


class JwtCredentialService(CredentialService):
    def __init__(
        self,
        secret: str,
        issuer: str,
        audience: str,
        expires_in: timedelta = timedelta(days=7),
    ):
        if not secret:
            raise ValueError("JWT secret must be configured")
        self._secret = secret
        self._issuer = issuer
        self._audience = audience
        self._expires_in = expires_in

    def issue(self, user: User) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user.id.value),
            "username": user.username,
            "iat": now,
            "exp": now + self._expires_in,
            "iss": self._issuer,
            "aud": self._audience,
        }
        return jwt.encode(payload, self._secret, algorithm="HS256")

    def decode(self, token: str) -> dict:
        """Validate the token and return its claims, or raise AuthError."""
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=["HS256"],
                audience=self._audience,
                issuer=self._issuer,
                options={"require": ["sub", "exp", "iat", "aud", "iss"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise AuthError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            logger.debug("JWT decode failed: %s", e)
            raise AuthError("Invalid token") from e
        return claims

    def verify(self, token: str) -> UserId:
        claims = self.decode(token)
        try:
            return UserId.from_reference(claims.get("sub"))
        except ValueError as e:
            raise AuthError("Invalid token claims") from e
