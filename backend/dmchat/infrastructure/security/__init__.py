"""Security - password hashing and bearer credentials."""

from dmchat.infrastructure.security.password_hasher import ScryptPasswordHasher
from dmchat.infrastructure.security.jwt_credentials import JwtCredentialService

__all__ = [
    "ScryptPasswordHasher",
    "JwtCredentialService",
]
