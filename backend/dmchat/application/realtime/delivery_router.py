"""
Delivery Router - persist a direct message, then fan it out.

Flow of send():
    normalize text / parse recipient  ── invalid ──► dropped (returns None)
              │
              ▼
    MessageStore.append()             ── StorageError propagates, nothing pushed
              │
              ▼
    IdentityDirectory snapshot of receiver + sender handles
              │
              ▼
    asyncio.gather(push per handle)   ── failures logged and counted only

The router holds no state of its own; the store and the directory are
injected.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Optional

from dmchat.domain.entities.message import Message, MAX_TEXT_LENGTH
from dmchat.domain.ports.connection_handle import ConnectionHandle
from dmchat.domain.ports.repositories.message_store import MessageStore
from dmchat.domain.value_objects.user_id import UserId
from dmchat.application.realtime.identity_directory import IdentityDirectory
from dmchat.observability import (
    DropReason,
    increment_dropped,
    increment_persisted,
    increment_push_failures,
)

logger = logging.getLogger(__name__)

RecipientCheck = Callable[[UserId], Awaitable[bool]]


class DeliveryRouter:
    def __init__(
        self,
        store: MessageStore,
        directory: IdentityDirectory,
        recipient_exists: Optional[RecipientCheck] = None,
        max_text_length: int = MAX_TEXT_LENGTH,
    ):
        self._store = store
        self._directory = directory
        self._recipient_exists = recipient_exists
        self._max_text_length = max_text_length

    async def send(
        self,
        sender: UserId,
        receiver_ref: Any,
        raw_text: Any,
        now: Optional[datetime] = None,
    ) -> Optional[Message]:
        """
        Persist and deliver one direct message.

        Returns:
            The persisted Message, or None when the input was dropped
            (blank text, malformed or unknown recipient). Drops are silent
            towards the caller.

        Raises:
            StorageError: the store could not commit; no push was attempted.
        """
        text = Message.normalize_text(raw_text, self._max_text_length)
        if not text:
            increment_dropped(DropReason.EMPTY_TEXT)
            logger.debug("Dropped send from %s: empty text", sender)
            return None

        try:
            receiver = UserId.from_reference(receiver_ref)
        except ValueError:
            increment_dropped(DropReason.INVALID_RECIPIENT)
            logger.debug("Dropped send from %s: invalid recipient %r", sender, receiver_ref)
            return None

        if self._recipient_exists is not None and not await self._recipient_exists(receiver):
            increment_dropped(DropReason.UNKNOWN_RECIPIENT)
            logger.debug("Dropped send from %s: unknown recipient %s", sender, receiver)
            return None

        message = await self._store.append(
            sender, receiver, text, now or datetime.now(timezone.utc)
        )
        increment_persisted()

        await self.fan_out(message)
        return message

    async def fan_out(self, message: Message) -> int:
        """
        Push a persisted message to every live handle of both participants.

        Returns the number of handles that accepted the push.
        """
        targets = self._directory.active_handles(
            message.receiver_id
        ) | self._directory.active_handles(message.sender_id)
        if not targets:
            return 0

        handles = list(targets)
        results = await asyncio.gather(
            *[self._safe_push(handle, message) for handle in handles],
            return_exceptions=True,
        )
        failed = sum(1 for ok in results if ok is not True)
        if failed:
            increment_push_failures(failed)
        logger.debug(
            "Message %s delivered to %d/%d handle(s)",
            message.id,
            len(handles) - failed,
            len(handles),
        )
        return len(handles) - failed

    async def _safe_push(self, handle: ConnectionHandle, message: Message) -> bool:
        try:
            await handle.push(message)
            return True
        except Exception as e:
            logger.warning("Push of message %s to a connection failed: %s", message.id, e)
            return False
