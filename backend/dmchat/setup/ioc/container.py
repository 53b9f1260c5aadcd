"""
Dishka DI Container Setup.

- PersistenceProvider: Prisma database lifecycle and the storage ports
- AppProvider: security services, the realtime core, command/query handlers

Scopes:
- Scope.APP = created ONCE and shared (database, directory, router)
- Scope.REQUEST = new instance per HTTP request (handlers)

The IdentityDirectory is APP-scoped: it is the single live-connection map of
the process, shared by the DeliveryRouter and every ConnectionSession.

Flow:
  Container → provides → PrismaMessageStore → to → DeliveryRouter
                                    ↓
                            uses MessageStore interface
"""

from datetime import timedelta
from typing import AsyncIterable, Optional

from dishka import Provider, Scope, make_async_container, provide, AsyncContainer

from dmchat.application.commands.auth import LoginUserHandler, RegisterUserHandler
from dmchat.application.commands.messages import DeleteConversationHandler
from dmchat.application.queries.messages import GetConversationHistoryHandler
from dmchat.application.queries.users import ListOtherUsersHandler
from dmchat.application.realtime import DeliveryRouter, IdentityDirectory
from dmchat.config.settings import Config, get_config
from dmchat.domain.ports.credentials import CredentialService, PasswordHasher
from dmchat.domain.ports.repositories import MessageStore, UserRepository
from dmchat.infrastructure.persistence import (
    Database,
    PrismaMessageStore,
    PrismaUserRepository,
)
from dmchat.infrastructure.security import JwtCredentialService, ScryptPasswordHasher


class PersistenceProvider(Provider):
    """Durable storage backed by Prisma."""

    def __init__(self, config: type[Config] = Config):
        super().__init__()
        self._config = config

    @provide(scope=Scope.APP)
    async def get_database(self) -> AsyncIterable[Database]:
        """
        Connected Prisma database (singleton).

        - async generator: disconnects when the container is closed
        """
        database = Database(self._config.DATABASE_URL)
        await database.connect()
        yield database
        await database.disconnect()

    @provide(scope=Scope.APP)
    def get_message_store(self, database: Database) -> MessageStore:
        """
        - Return type is ABSTRACT (MessageStore)
        - Implementation is CONCRETE (PrismaMessageStore)
        """
        return PrismaMessageStore(database.client)

    @provide(scope=Scope.APP)
    def get_user_repository(self, database: Database) -> UserRepository:
        return PrismaUserRepository(database.client)


class AppProvider(Provider):
    """
    Application dependency provider.

    Storage ports (MessageStore, UserRepository) come from a persistence
    provider composed next to this one.
    """

    def __init__(self, config: type[Config] = Config):
        super().__init__()
        self._config = config

    # ==================== SECURITY ====================

    @provide(scope=Scope.APP)
    def get_password_hasher(self) -> PasswordHasher:
        return ScryptPasswordHasher()

    @provide(scope=Scope.APP)
    def get_credential_service(self) -> CredentialService:
        return JwtCredentialService(
            secret=self._config.JWT_SECRET,
            issuer=self._config.JWT_ISSUER,
            audience=self._config.JWT_AUDIENCE,
            expires_in=timedelta(days=self._config.JWT_EXPIRES_DAYS),
        )

    # ==================== REALTIME CORE ====================

    @provide(scope=Scope.APP)
    def get_identity_directory(self) -> IdentityDirectory:
        return IdentityDirectory(stripes=self._config.DIRECTORY_LOCK_STRIPES)

    @provide(scope=Scope.APP)
    def get_delivery_router(
        self,
        message_store: MessageStore,
        directory: IdentityDirectory,
        user_repository: UserRepository,
    ) -> DeliveryRouter:
        return DeliveryRouter(
            store=message_store,
            directory=directory,
            recipient_exists=(
                user_repository.exists if self._config.DM_VERIFY_RECIPIENT else None
            ),
            max_text_length=self._config.MAX_MESSAGE_LENGTH,
        )

    # ==================== HANDLERS ====================

    @provide(scope=Scope.REQUEST)
    def get_register_user_handler(
        self,
        user_repository: UserRepository,
        password_hasher: PasswordHasher,
        credentials: CredentialService,
    ) -> RegisterUserHandler:
        return RegisterUserHandler(user_repository, password_hasher, credentials)

    @provide(scope=Scope.REQUEST)
    def get_login_user_handler(
        self,
        user_repository: UserRepository,
        password_hasher: PasswordHasher,
        credentials: CredentialService,
    ) -> LoginUserHandler:
        return LoginUserHandler(user_repository, password_hasher, credentials)

    @provide(scope=Scope.REQUEST)
    def get_list_other_users_handler(
        self, user_repository: UserRepository
    ) -> ListOtherUsersHandler:
        return ListOtherUsersHandler(user_repository)

    @provide(scope=Scope.REQUEST)
    def get_conversation_history_handler(
        self, message_store: MessageStore
    ) -> GetConversationHistoryHandler:
        return GetConversationHistoryHandler(message_store)

    @provide(scope=Scope.REQUEST)
    def get_delete_conversation_handler(
        self, message_store: MessageStore
    ) -> DeleteConversationHandler:
        return DeleteConversationHandler(message_store)


def create_container(
    *providers: Provider, config: Optional[type[Config]] = None
) -> AsyncContainer:
    """
    Create and configure the DI container.

    Args:
        providers: storage providers; defaults to the Prisma one (tests pass
            their own)
        config: settings class; defaults to get_config() for APP_ENV
    """
    config = config or get_config()
    return make_async_container(
        *(providers or (PersistenceProvider(config),)), AppProvider(config)
    )
