"""
User Repository Port - Interface for user persistence.
Implementation: dmchat/infrastructure/persistence/prisma_user_repository.py
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from dmchat.domain.entities.user import User
from dmchat.domain.value_objects.user_id import UserId


class UserRepository(ABC):
    @abstractmethod
    async def get_by_id(self, user_id: UserId) -> Optional[User]: ...

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    async def create(
        self, username: str, password_hash: str, created_at: datetime
    ) -> User:
        """Insert a new user; raises DomainValidationError if the username is taken."""
        ...

    @abstractmethod
    async def list_except(self, user_id: UserId) -> list[User]:
        """All other users, ordered by username."""
        ...

    @abstractmethod
    async def exists(self, user_id: UserId) -> bool: ...
