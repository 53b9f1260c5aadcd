"""Delete Conversation Command - remove every message between two users."""

import logging
from dataclasses import dataclass

from dmchat.application.common.interfaces import Command, CommandHandler
from dmchat.domain.ports.repositories import MessageStore
from dmchat.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteConversationCommand(Command[int]):
    user_id: UserId
    other_user_id: UserId


class DeleteConversationHandler(CommandHandler[int]):
    def __init__(self, message_store: MessageStore):
        self._message_store = message_store

    async def execute(self, command: DeleteConversationCommand) -> int:
        deleted = await self._message_store.delete_conversation(
            command.user_id, command.other_user_id
        )
        logger.info(
            "User %s deleted %d message(s) with %s",
            command.user_id,
            deleted,
            command.other_user_id,
        )
        return deleted
