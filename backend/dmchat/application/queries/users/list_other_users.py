"""List Other Users Query."""

from dataclasses import dataclass

from dmchat.application.common.interfaces import Query, QueryHandler
from dmchat.domain.entities.user import User
from dmchat.domain.ports.repositories import UserRepository
from dmchat.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class ListOtherUsersQuery(Query[list[User]]):
    user_id: UserId


class ListOtherUsersHandler(QueryHandler[list[User]]):
    def __init__(self, user_repository: UserRepository):
        self._user_repository = user_repository

    async def execute(self, query: ListOtherUsersQuery) -> list[User]:
        return await self._user_repository.list_except(query.user_id)
