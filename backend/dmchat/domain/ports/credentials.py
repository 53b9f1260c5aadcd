"""
Credential Ports - the auth collaborator the core depends on.
Implementations: dmchat/infrastructure/security/
"""

from abc import ABC, abstractmethod

from dmchat.domain.entities.user import User
from dmchat.domain.value_objects.user_id import UserId


class CredentialService(ABC):
    @abstractmethod
    def issue(self, user: User) -> str:
        """Issue a bearer credential bound to the user's identity."""
        ...

    @abstractmethod
    def verify(self, token: str) -> UserId:
        """Return the identity the credential is bound to, or raise AuthError."""
        ...


class PasswordHasher(ABC):
    @abstractmethod
    def hash(self, password: str) -> str: ...

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool: ...
