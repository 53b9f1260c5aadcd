"""
GetConversationHistory Query - messages exchanged between the caller and one other user.

Used by the frontend to load a conversation when it is opened.
"""

from dataclasses import dataclass

from dmchat.application.common.interfaces import Query, QueryHandler
from dmchat.config.settings import Config
from dmchat.domain.entities.message import Message
from dmchat.domain.ports.repositories import MessageStore
from dmchat.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class GetConversationHistoryQuery(Query[list[Message]]):
    user_id: UserId
    other_user_id: UserId
    limit: int = Config.HISTORY_LIMIT


class GetConversationHistoryHandler(QueryHandler[list[Message]]):
    def __init__(self, message_store: MessageStore):
        self._message_store = message_store

    async def execute(self, query: GetConversationHistoryQuery) -> list[Message]:
        return await self._message_store.history(
            query.user_id, query.other_user_id, limit=query.limit
        )
