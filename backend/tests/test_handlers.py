from datetime import datetime, timezone

import pytest

from dmchat.application.commands.auth import (
    LoginUserCommand,
    LoginUserHandler,
    RegisterUserCommand,
    RegisterUserHandler,
)
from dmchat.application.commands.messages import (
    DeleteConversationCommand,
    DeleteConversationHandler,
)
from dmchat.application.queries.messages import (
    GetConversationHistoryHandler,
    GetConversationHistoryQuery,
)
from dmchat.application.queries.users import ListOtherUsersHandler, ListOtherUsersQuery
from dmchat.config.settings import DevelopmentConfig, ProductionConfig, TestingConfig, get_config
from dmchat.domain.exceptions import AuthError, DomainValidationError
from dmchat.domain.value_objects.user_id import UserId
from dmchat.infrastructure.security import ScryptPasswordHasher

from fakes import InMemoryMessageStore, InMemoryUserRepository, StaticCredentials


@pytest.fixture
def users():
    return InMemoryUserRepository()


@pytest.fixture
def hasher():
    return ScryptPasswordHasher(n=2**10)


@pytest.fixture
def credentials():
    return StaticCredentials({})


@pytest.fixture
def register_handler(users, hasher, credentials):
    return RegisterUserHandler(users, hasher, credentials)


@pytest.mark.asyncio
async def test_register_stores_hash_and_issues_credential(register_handler, users, hasher, credentials):
    result = await register_handler.execute(RegisterUserCommand(" alice ", "secret123"))

    stored = await users.get_by_username("alice")
    assert result.user == stored
    assert stored.password_hash != "secret123"
    assert hasher.verify("secret123", stored.password_hash)
    assert credentials.verify(result.token) == stored.id


@pytest.mark.asyncio
@pytest.mark.parametrize("username, password", [("", "secret123"), ("   ", "secret123"), ("alice", "short")])
async def test_register_validation(register_handler, username, password):
    with pytest.raises(DomainValidationError):
        await register_handler.execute(RegisterUserCommand(username, password))


@pytest.mark.asyncio
async def test_register_duplicate(register_handler):
    await register_handler.execute(RegisterUserCommand("alice", "secret123"))
    with pytest.raises(DomainValidationError, match="taken"):
        await register_handler.execute(RegisterUserCommand("alice", "secret456"))


@pytest.mark.asyncio
async def test_login(register_handler, users, hasher, credentials):
    await register_handler.execute(RegisterUserCommand("alice", "secret123"))
    handler = LoginUserHandler(users, hasher, credentials)

    result = await handler.execute(LoginUserCommand("alice", "secret123"))
    assert result.user.username == "alice"

    with pytest.raises(AuthError, match="Wrong password"):
        await handler.execute(LoginUserCommand("alice", "secret12"))
    with pytest.raises(AuthError, match="User not found"):
        await handler.execute(LoginUserCommand("bob", "secret123"))


@pytest.mark.asyncio
async def test_list_other_users(register_handler, users):
    for name in ("zoe", "anna", "mike"):
        await register_handler.execute(RegisterUserCommand(name, "secret123"))
    mike = await users.get_by_username("mike")

    others = await ListOtherUsersHandler(users).execute(ListOtherUsersQuery(mike.id))

    assert [u.username for u in others] == ["anna", "zoe"]


@pytest.mark.asyncio
async def test_history_and_delete_handlers():
    store = InMemoryMessageStore()
    alice, bob = UserId(1), UserId(2)
    now = datetime.now(timezone.utc)
    await store.append(alice, bob, "one", now)
    await store.append(bob, alice, "two", now)

    history = GetConversationHistoryHandler(store)
    delete = DeleteConversationHandler(store)

    assert [m.text for m in await history.execute(GetConversationHistoryQuery(bob, alice))] == ["one", "two"]
    assert len(await history.execute(GetConversationHistoryQuery(alice, bob, limit=1))) == 1
    assert await delete.execute(DeleteConversationCommand(alice, bob)) == 2
    assert await history.execute(GetConversationHistoryQuery(alice, bob)) == []


def test_get_config_by_environment():
    assert get_config("testing") is TestingConfig
    assert get_config("production") is ProductionConfig
    assert get_config("unknown") is DevelopmentConfig
    assert TestingConfig.TESTING is True
