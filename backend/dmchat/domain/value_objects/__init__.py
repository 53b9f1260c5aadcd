"""
VALUE OBJECTS - Immutable domain types

Each value object:
- Is compared by value
- Is immutable (frozen dataclass)
- Validates itself on creation
"""

from dmchat.domain.value_objects.user_id import UserId
from dmchat.domain.value_objects.message_id import MessageId

__all__ = [
    "UserId",
    "MessageId",
]
