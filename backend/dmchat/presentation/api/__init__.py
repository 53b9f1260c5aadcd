"""
API Routers - FastAPI endpoint definitions.
"""

from dmchat.presentation.api.auth import router as auth_router
from dmchat.presentation.api.users import router as users_router
from dmchat.presentation.api.messages import (
    messages_router,
    contacts_router,
)
from dmchat.presentation.api.metrics import router as metrics_router

__all__ = [
    "auth_router",
    "users_router",
    "messages_router",
    "contacts_router",
    "metrics_router",
]
