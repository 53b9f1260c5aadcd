"""Message queries."""

from dmchat.application.queries.messages.get_conversation_history import (
    GetConversationHistoryQuery,
    GetConversationHistoryHandler,
)

__all__ = [
    "GetConversationHistoryQuery",
    "GetConversationHistoryHandler",
]
