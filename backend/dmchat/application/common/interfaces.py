"""
Base interfaces for the CQRS handlers.

Commands change state (register, login, delete conversation); queries only
read (history, user listing). Handlers are built per request by the DI
container and expose a single async `execute`.

Usage:
    @dataclass(frozen=True)
    class DeleteConversationCommand(Command[int]):
        user_id: UserId
        other_user_id: UserId

    class DeleteConversationHandler(CommandHandler[int]):
        async def execute(self, command: DeleteConversationCommand) -> int:
            return await self._message_store.delete_conversation(...)
"""
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

R = TypeVar("R")


class Command(ABC, Generic[R]):
    """Write operation producing R"""


class Query(ABC, Generic[R]):
    """Read-only operation producing R"""


class CommandHandler(ABC, Generic[R]):
    @abstractmethod
    async def execute(self, command: Command[R]) -> R: ...


class QueryHandler(ABC, Generic[R]):
    @abstractmethod
    async def execute(self, query: Query[R]) -> R: ...
