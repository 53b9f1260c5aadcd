"""
REPOSITORY PORTS - Data persistence interfaces

Each repository port is an ABC; infrastructure provides implementations.
"""

from dmchat.domain.ports.repositories.message_store import MessageStore
from dmchat.domain.ports.repositories.user_repository import UserRepository

__all__ = [
    "MessageStore",
    "UserRepository",
]
