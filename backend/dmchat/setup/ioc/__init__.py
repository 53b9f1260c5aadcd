"""Dishka DI container setup."""

from dmchat.setup.ioc.container import AppProvider, PersistenceProvider, create_container

__all__ = [
    "AppProvider",
    "PersistenceProvider",
    "create_container",
]
