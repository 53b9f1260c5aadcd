"""
Connection Handle Port - one live realtime channel bound to one identity.
Implementation: dmchat/application/realtime/connection_session.py
"""

from abc import ABC, abstractmethod

from dmchat.domain.entities.message import Message


class ConnectionHandle(ABC):
    @abstractmethod
    async def push(self, message: Message) -> None:
        """Deliver a persisted message to this connection. Raises if the connection is gone."""
        ...
