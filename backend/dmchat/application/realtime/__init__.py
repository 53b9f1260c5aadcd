"""
Realtime delivery and session routing.

    ConnectionSession ──send──► DeliveryRouter ──append──► MessageStore
            ▲                         │
            └──────push────── IdentityDirectory (lookup)
"""

from dmchat.application.realtime.identity_directory import IdentityDirectory
from dmchat.application.realtime.delivery_router import DeliveryRouter
from dmchat.application.realtime.connection_session import (
    ConnectionSession,
    SessionState,
    SessionTransport,
    TransportClosed,
)

__all__ = [
    "IdentityDirectory",
    "DeliveryRouter",
    "ConnectionSession",
    "SessionState",
    "SessionTransport",
    "TransportClosed",
]
