"""
Message Store Port - durable, append-only log of direct messages.
Implementation: dmchat/infrastructure/persistence/prisma_message_store.py

Contract:
- append() validates text (Message.validate_text), assigns the id, and
  raises StorageError on any storage failure.
- history() returns the unordered pair's messages ascending by
  (created_at, id), at most `limit` of them.
- delete_conversation() is idempotent and returns the number removed.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from dmchat.domain.entities.message import Message
from dmchat.domain.value_objects.user_id import UserId


class MessageStore(ABC):
    @abstractmethod
    async def append(
        self, sender_id: UserId, receiver_id: UserId, text: str, timestamp: datetime
    ) -> Message: ...

    @abstractmethod
    async def history(
        self, user_a: UserId, user_b: UserId, limit: int = 200
    ) -> list[Message]: ...

    @abstractmethod
    async def delete_conversation(self, user_a: UserId, user_b: UserId) -> int: ...
