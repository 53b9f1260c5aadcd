import os
import sys

import pytest

# Add backend directory to path
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__) + '/..'))

from dishka import Provider, Scope, provide
from fastapi.testclient import TestClient

from dmchat.config.settings import TestingConfig
from dmchat.domain.ports.repositories import MessageStore, UserRepository
from dmchat.fastapi_app import create_fastapi_app
from dmchat.setup.ioc.container import create_container

from fakes import InMemoryMessageStore, InMemoryUserRepository

PASSWORD = "secret123"


class InMemoryPersistenceProvider(Provider):
    """Storage ports backed by the in-memory fakes instead of Prisma."""

    def __init__(self, store: MessageStore, users: UserRepository):
        super().__init__()
        self._store = store
        self._users = users

    @provide(scope=Scope.APP)
    def get_message_store(self) -> MessageStore:
        return self._store

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        return self._users


@pytest.fixture()
def store():
    return InMemoryMessageStore()


@pytest.fixture()
def users():
    return InMemoryUserRepository()


@pytest.fixture()
def app(store, users):
    """Create a new FastAPI app with in-memory storage for each test."""
    container = create_container(
        InMemoryPersistenceProvider(store, users), config=TestingConfig
    )
    return create_fastapi_app(container, config=TestingConfig)


@pytest.fixture()
def client(app):
    """A test client for the FastAPI app (one event loop for all sockets)."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def register(client):
    """Register a user and return (user dict, auth headers, token)."""

    def _register(username: str, password: str = PASSWORD):
        res = client.post("/api/register", json={"username": username, "password": password})
        assert res.status_code == 200, res.text
        body = res.json()
        return body["user"], {"Authorization": f"Bearer {body['token']}"}, body["token"]

    return _register
