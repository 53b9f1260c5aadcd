"""
WebSocket endpoint - one ConnectionSession per socket.

Handshake:
    ws://host/ws?token=<jwt>   (or "Authorization: Bearer <jwt>")
    A missing or invalid token closes the socket with 1008 before accept.

Frames (JSON):
    → {"type": "dm", "data": {"toUserId": 2, "text": "hi"}}
    ← {"type": "dm", "data": {"id": 1, "sender_id": 1, "receiver_id": 2, "text": "hi", "created_at": "..."}}
    ← {"type": "error", "data": {"detail": "..."}}
"""

import json
import logging
from typing import Any, Optional

from fastapi import APIRouter, WebSocket, status
from starlette.websockets import WebSocketDisconnect, WebSocketState

from dmchat.application.realtime import (
    ConnectionSession,
    DeliveryRouter,
    IdentityDirectory,
    SessionTransport,
    TransportClosed,
)
from dmchat.config.logging_config import correlation_id_var
from dmchat.config.settings import Config
from dmchat.domain.ports.credentials import CredentialService

logger = logging.getLogger(__name__)


class WebSocketTransport(SessionTransport):
    """Adapts a Starlette WebSocket to the session transport port."""

    def __init__(self, websocket: WebSocket):
        self._ws = websocket

    async def accept(self) -> None:
        await self._ws.accept()

    async def reject(self, reason: str) -> None:
        await self._ws.close(code=status.WS_1008_POLICY_VIOLATION, reason=reason)

    async def receive_json(self) -> Any:
        try:
            message = await self._ws.receive()
        except (WebSocketDisconnect, RuntimeError) as e:
            raise TransportClosed() from e
        if message["type"] == "websocket.disconnect":
            raise TransportClosed()

        raw = message.get("text")
        if raw is None and message.get("bytes") is not None:
            raw = message["bytes"].decode("utf-8", errors="replace")
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            return None

    async def send_json(self, payload: dict) -> None:
        await self._ws.send_json(payload)

    async def close(self) -> None:
        if self._ws.application_state != WebSocketState.DISCONNECTED:
            await self._ws.close()


def _extract_token(websocket: WebSocket) -> Optional[str]:
    token = websocket.query_params.get("token")
    if token:
        return token
    auth_header = websocket.headers.get("authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header.split(" ", 1)[1].strip()
    return None


router = APIRouter(tags=["realtime"])


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    container = websocket.app.state.dishka_container
    session = ConnectionSession(
        transport=WebSocketTransport(websocket),
        directory=await container.get(IdentityDirectory),
        router=await container.get(DeliveryRouter),
        credentials=await container.get(CredentialService),
        outbox_size=Config.SESSION_OUTBOX_SIZE,
    )
    correlation_id_var.set(f"ws-{id(session):x}")
    await session.run(_extract_token(websocket))
