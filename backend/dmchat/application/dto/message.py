"""Message DTOs for API responses and realtime events."""

from datetime import datetime
from pydantic import BaseModel

from dmchat.domain.entities.message import Message


class MessageDTO(BaseModel):
    """DTO for a persisted direct message returned to clients."""

    id: int
    sender_id: int
    receiver_id: int
    text: str
    created_at: datetime

    @classmethod
    def from_entity(cls, message: Message) -> "MessageDTO":
        return cls(
            id=message.id.value,
            sender_id=message.sender_id.value,
            receiver_id=message.receiver_id.value,
            text=message.text,
            created_at=message.created_at,
        )
