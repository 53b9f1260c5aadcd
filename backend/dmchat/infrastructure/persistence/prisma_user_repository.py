"""
Prisma User Repository Implementation.

Prisma User Model (from schema.prisma):
    model User {
        id            Int      @id @default(autoincrement())
        username      String   @unique
        password_hash String
        created_at    DateTime
    }
"""

import logging
from datetime import datetime
from typing import Any, Optional

from prisma.errors import PrismaError, UniqueViolationError

from dmchat.domain.entities.user import User
from dmchat.domain.exceptions import DomainValidationError, StorageError
from dmchat.domain.ports.repositories.user_repository import UserRepository
from dmchat.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


class PrismaUserRepository(UserRepository):
    def __init__(self, prisma: Any):
        self._prisma = prisma

    def _to_entity(self, record: Any) -> User:
        """Map Prisma record to domain entity."""
        return User(
            id=UserId(record.id),
            username=record.username,
            password_hash=record.password_hash,
            created_at=record.created_at,
        )

    async def get_by_id(self, user_id: UserId) -> Optional[User]:
        try:
            record = await self._prisma.user.find_unique(where={"id": user_id.value})
        except PrismaError as e:
            raise StorageError(f"Could not load user: {e}") from e
        return self._to_entity(record) if record else None

    async def get_by_username(self, username: str) -> Optional[User]:
        try:
            record = await self._prisma.user.find_unique(where={"username": username})
        except PrismaError as e:
            raise StorageError(f"Could not load user: {e}") from e
        return self._to_entity(record) if record else None

    async def create(
        self, username: str, password_hash: str, created_at: datetime
    ) -> User:
        try:
            record = await self._prisma.user.create(
                data={
                    "username": username,
                    "password_hash": password_hash,
                    "created_at": created_at,
                }
            )
        except UniqueViolationError as e:
            raise DomainValidationError("Username already taken") from e
        except PrismaError as e:
            raise StorageError(f"Could not create user: {e}") from e
        logger.info("Registered user %s (%s)", record.id, username)
        return self._to_entity(record)

    async def list_except(self, user_id: UserId) -> list[User]:
        try:
            records = await self._prisma.user.find_many(
                where={"id": {"not": user_id.value}},
                order={"username": "asc"},
            )
        except PrismaError as e:
            raise StorageError(f"Could not list users: {e}") from e
        return [self._to_entity(record) for record in records]

    async def exists(self, user_id: UserId) -> bool:
        try:
            count = await self._prisma.user.count(where={"id": user_id.value})
        except PrismaError as e:
            raise StorageError(f"Could not look up user: {e}") from e
        return count > 0
