"""
Persistence Layer - Database implementations.

Contains Prisma implementations of the domain storage ports.
"""

from dmchat.infrastructure.persistence.database import Database
from dmchat.infrastructure.persistence.prisma_message_store import PrismaMessageStore
from dmchat.infrastructure.persistence.prisma_user_repository import (
    PrismaUserRepository,
)

__all__ = [
    "Database",
    "PrismaMessageStore",
    "PrismaUserRepository",
]
