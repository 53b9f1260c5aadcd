"""WebSocket message envelope models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

# Event types
DM_EVENT = "dm"
ERROR_EVENT = "error"


class WsInbound(BaseModel):
    """Client → Server."""

    type: str  # dm
    data: dict[str, Any] = {}


class WsOutbound(BaseModel):
    """Server → Client."""

    type: str  # dm | error
    data: dict[str, Any] = {}
