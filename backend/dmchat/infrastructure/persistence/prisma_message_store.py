"""
Prisma Message Store Implementation.

Prisma Message Model (from schema.prisma):
    model Message {
        id          Int      @id @default(autoincrement())
        sender_id   Int
        receiver_id Int
        text        String
        created_at  DateTime
        @@index([sender_id, receiver_id, created_at])
    }

Mapping:
- Prisma: id (int) ←→ Domain: id (MessageId)
- Prisma: sender_id / receiver_id (int) ←→ Domain: UserId
- text, created_at map directly

Ids come from the database's autoincrement, so each append is atomic and ids
grow in commit order. Every Prisma failure is re-raised as StorageError.
"""

import logging
from datetime import datetime
from typing import Any

from prisma.errors import PrismaError

from dmchat.domain.entities.message import Message
from dmchat.domain.exceptions import StorageError
from dmchat.domain.ports.repositories.message_store import MessageStore
from dmchat.domain.value_objects.message_id import MessageId
from dmchat.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


def _pair_filter(user_a: UserId, user_b: UserId) -> dict:
    return {
        "OR": [
            {"sender_id": user_a.value, "receiver_id": user_b.value},
            {"sender_id": user_b.value, "receiver_id": user_a.value},
        ]
    }


class PrismaMessageStore(MessageStore):
    """
    Prisma implementation of MessageStore.

    Handles persistence of Message entities via the Prisma client.
    """

    def __init__(self, prisma: Any):
        """
        Args:
            prisma: Connected Prisma client (injected by DI container)
        """
        self._prisma = prisma

    def _to_entity(self, record: Any) -> Message:
        """Map Prisma record to domain entity."""
        return Message(
            id=MessageId(record.id),
            sender_id=UserId(record.sender_id),
            receiver_id=UserId(record.receiver_id),
            text=record.text,
            created_at=record.created_at,
        )

    async def append(
        self, sender_id: UserId, receiver_id: UserId, text: str, timestamp: datetime
    ) -> Message:
        Message.validate_text(text)
        try:
            record = await self._prisma.message.create(
                data={
                    "sender_id": sender_id.value,
                    "receiver_id": receiver_id.value,
                    "text": text,
                    "created_at": timestamp,
                }
            )
        except PrismaError as e:
            logger.error("Failed to append message from %s: %s", sender_id, e)
            raise StorageError(f"Could not save message: {e}") from e
        return self._to_entity(record)

    async def history(
        self, user_a: UserId, user_b: UserId, limit: int = 200
    ) -> list[Message]:
        """
        Messages for the unordered pair, oldest first.

        Note:
            Returns the earliest `limit` messages of the conversation.
        """
        if limit <= 0:
            return []
        try:
            records = await self._prisma.message.find_many(
                where=_pair_filter(user_a, user_b),
                order=[{"created_at": "asc"}, {"id": "asc"}],
                take=limit,
            )
        except PrismaError as e:
            logger.error("Failed to load history %s<->%s: %s", user_a, user_b, e)
            raise StorageError(f"Could not load messages: {e}") from e
        return [self._to_entity(record) for record in records]

    async def delete_conversation(self, user_a: UserId, user_b: UserId) -> int:
        try:
            return await self._prisma.message.delete_many(
                where=_pair_filter(user_a, user_b)
            )
        except PrismaError as e:
            logger.error("Failed to delete conversation %s<->%s: %s", user_a, user_b, e)
            raise StorageError(f"Could not delete messages: {e}") from e
