"""Login User Command."""

from dataclasses import dataclass

from dmchat.application.common.interfaces import Command, CommandHandler
from dmchat.application.commands.auth.register_user import AuthResult
from dmchat.domain.exceptions import AuthError
from dmchat.domain.ports.credentials import CredentialService, PasswordHasher
from dmchat.domain.ports.repositories import UserRepository


@dataclass(frozen=True)
class LoginUserCommand(Command[AuthResult]):
    username: str
    password: str


class LoginUserHandler(CommandHandler[AuthResult]):
    def __init__(
        self,
        user_repository: UserRepository,
        password_hasher: PasswordHasher,
        credentials: CredentialService,
    ):
        self._user_repository = user_repository
        self._password_hasher = password_hasher
        self._credentials = credentials

    async def execute(self, command: LoginUserCommand) -> AuthResult:
        user = await self._user_repository.get_by_username(
            (command.username or "").strip()
        )
        if not user:
            raise AuthError("User not found")

        if not self._password_hasher.verify(command.password or "", user.password_hash):
            raise AuthError("Wrong password")

        return AuthResult(token=self._credentials.issue(user), user=user)
