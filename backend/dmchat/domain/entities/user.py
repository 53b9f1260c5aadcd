"""
User Entity - A registered account.
"""

from dataclasses import dataclass
from datetime import datetime

from dmchat.domain.value_objects.user_id import UserId


@dataclass
class User:
    id: UserId
    username: str
    password_hash: str
    created_at: datetime
