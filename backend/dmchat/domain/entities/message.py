"""
Message Entity - One direct message between two identities.

Messages are immutable once persisted: the only mutation the system supports
is deleting a whole conversation.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from dmchat.domain.exceptions.validation_error import DomainValidationError
from dmchat.domain.value_objects.message_id import MessageId
from dmchat.domain.value_objects.user_id import UserId

MAX_TEXT_LENGTH = 500


@dataclass(frozen=True)
class Message:
    id: MessageId
    sender_id: UserId
    receiver_id: UserId
    text: str
    created_at: datetime

    @staticmethod
    def normalize_text(raw: Any, max_length: int = MAX_TEXT_LENGTH) -> str:
        """
        Trim client input and cut it to the maximum length ("" if nothing is left).

        Falsy payloads (None, False, 0, empty containers) count as no text.
        """
        if not raw:
            return ""
        return str(raw).strip()[:max_length]

    @staticmethod
    def validate_text(text: str, max_length: int = MAX_TEXT_LENGTH) -> None:
        """Store-side check: text must be non-blank and already truncated."""
        if not isinstance(text, str) or not text.strip():
            raise DomainValidationError("Message text cannot be empty")
        if len(text) > max_length:
            raise DomainValidationError(
                f"Message text cannot exceed {max_length} characters"
            )
