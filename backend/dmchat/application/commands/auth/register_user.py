"""
Register User Command.

- Username is trimmed and cut to Config.USERNAME_MAX_LENGTH characters
- Password must be at least Config.PASSWORD_MIN_LENGTH characters
- Returns a credential for the new account together with the user
"""

from dataclasses import dataclass
from datetime import datetime, timezone

from dmchat.application.common.interfaces import Command, CommandHandler
from dmchat.config.settings import Config
from dmchat.domain.entities.user import User
from dmchat.domain.exceptions import DomainValidationError
from dmchat.domain.ports.credentials import CredentialService, PasswordHasher
from dmchat.domain.ports.repositories import UserRepository


@dataclass
class AuthResult:
    token: str
    user: User


@dataclass(frozen=True)
class RegisterUserCommand(Command[AuthResult]):
    username: str
    password: str


class RegisterUserHandler(CommandHandler[AuthResult]):
    def __init__(
        self,
        user_repository: UserRepository,
        password_hasher: PasswordHasher,
        credentials: CredentialService,
    ):
        self._user_repository = user_repository
        self._password_hasher = password_hasher
        self._credentials = credentials

    async def execute(self, command: RegisterUserCommand) -> AuthResult:
        username = (command.username or "").strip()[: Config.USERNAME_MAX_LENGTH]
        password = command.password or ""

        if not username or len(password) < Config.PASSWORD_MIN_LENGTH:
            raise DomainValidationError(
                "Username is required and password must be at least "
                f"{Config.PASSWORD_MIN_LENGTH} characters"
            )

        user = await self._user_repository.create(
            username=username,
            password_hash=self._password_hasher.hash(password),
            created_at=datetime.now(timezone.utc),
        )
        return AuthResult(token=self._credentials.issue(user), user=user)
