"""
ENTITIES - Business objects with identity

Pure Python dataclasses (no ORM, no Pydantic).
"""

from dmchat.domain.entities.message import Message, MAX_TEXT_LENGTH
from dmchat.domain.entities.user import User

__all__ = [
    "Message",
    "MAX_TEXT_LENGTH",
    "User",
]
