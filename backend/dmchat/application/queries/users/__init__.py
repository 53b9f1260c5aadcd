"""User queries."""

from dmchat.application.queries.users.list_other_users import (
    ListOtherUsersQuery,
    ListOtherUsersHandler,
)

__all__ = [
    "ListOtherUsersQuery",
    "ListOtherUsersHandler",
]
