"""
Connection Session - one realtime channel bound to one authenticated identity.

Lifecycle:
    CONNECTING ──(credential ok)──► AUTHENTICATED ──(disconnect)──► CLOSED
        │                                                          ▲
        └──────────────(missing / invalid credential)──────────────┘

- A session that fails authentication is rejected before it is accepted and
  never appears in the IdentityDirectory.
- Once authenticated it registers itself in the directory; it is
  unregistered in a finally block so abnormal termination cannot leave a
  stale handle behind.
- Outbound pushes go through a bounded outbox drained by a writer task, so a
  slow socket never blocks the router. Closing the session cancels the writer
  and drops whatever is still queued; it never touches committed messages.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional

from pydantic import ValidationError

from dmchat.application.dto.message import MessageDTO
from dmchat.application.dto.realtime import DM_EVENT, ERROR_EVENT, WsInbound, WsOutbound
from dmchat.application.realtime.delivery_router import DeliveryRouter
from dmchat.application.realtime.identity_directory import IdentityDirectory
from dmchat.domain.entities.message import Message
from dmchat.domain.exceptions import AuthError, SessionClosedError, StorageError
from dmchat.domain.ports.connection_handle import ConnectionHandle
from dmchat.domain.ports.credentials import CredentialService
from dmchat.domain.value_objects.user_id import UserId
from dmchat.observability import (
    MetricsErrorType,
    connection_closed,
    connection_opened,
    increment_error,
)

logger = logging.getLogger(__name__)


class TransportClosed(Exception):
    """Raised by a transport when the peer has gone away."""


class SessionTransport(ABC):
    """The network side of a session (a WebSocket in production)."""

    @abstractmethod
    async def accept(self) -> None: ...

    @abstractmethod
    async def reject(self, reason: str) -> None: ...

    @abstractmethod
    async def receive_json(self) -> Any:
        """Next decoded frame, None for an undecodable one; TransportClosed on disconnect."""
        ...

    @abstractmethod
    async def send_json(self, payload: dict) -> None: ...

    @abstractmethod
    async def close(self) -> None: ...


class SessionState(str, Enum):
    CONNECTING = "connecting"
    AUTHENTICATED = "authenticated"
    CLOSED = "closed"


class ConnectionSession(ConnectionHandle):
    def __init__(
        self,
        transport: SessionTransport,
        directory: IdentityDirectory,
        router: DeliveryRouter,
        credentials: CredentialService,
        outbox_size: int = 256,
    ):
        self._transport = transport
        self._directory = directory
        self._router = router
        self._credentials = credentials
        self._outbox: asyncio.Queue = asyncio.Queue(maxsize=outbox_size)
        self._writer: Optional[asyncio.Task] = None
        self._registered = False
        self.state = SessionState.CONNECTING
        self.identity: Optional[UserId] = None

    async def run(self, token: Optional[str]) -> None:
        """Authenticate, serve inbound events until disconnect, then release."""
        if not await self._authenticate(token):
            return

        try:
            await self._transport.accept()
            self._writer = asyncio.create_task(self._drain_outbox())
            self._directory.register(self.identity, self)
            self._registered = True
            connection_opened()
            logger.info(
                "User %s connected (%d connection(s), %d user(s) online)",
                self.identity,
                self._directory.connection_count(),
                len(self._directory.online_identities()),
            )

            await self._receive_loop()
        finally:
            self._release()
            if self._writer is not None:
                self._writer.cancel()
            logger.info("User %s disconnected", self.identity)

    async def _authenticate(self, token: Optional[str]) -> bool:
        try:
            if not token:
                raise AuthError("Missing token")
            self.identity = self._credentials.verify(token)
        except AuthError as e:
            self.state = SessionState.CLOSED
            increment_error(MetricsErrorType.AUTH_REJECTED)
            logger.info("Rejected realtime connection: %s", e.message)
            await self._transport.reject(e.message)
            return False

        self.state = SessionState.AUTHENTICATED
        return True

    async def _receive_loop(self) -> None:
        while self.state is SessionState.AUTHENTICATED:
            try:
                frame = await self._transport.receive_json()
            except TransportClosed:
                return
            await self.handle_frame(frame)

    async def handle_frame(self, frame: Any) -> None:
        """Forward a "dm" frame to the router; anything else is ignored."""
        try:
            event = WsInbound.model_validate(frame)
        except ValidationError:
            logger.debug("Ignoring malformed frame from %s", self.identity)
            return

        if event.type != DM_EVENT:
            logger.debug("Ignoring %r event from %s", event.type, self.identity)
            return

        try:
            await self._router.send(
                self.identity, event.data.get("toUserId"), event.data.get("text")
            )
        except StorageError as e:
            increment_error(MetricsErrorType.STORAGE_FAILED)
            logger.error("Could not persist message from %s: %s", self.identity, e)
            self._enqueue(
                WsOutbound(type=ERROR_EVENT, data={"detail": "Message could not be saved"})
            )

    async def push(self, message: Message) -> None:
        if self.state is not SessionState.AUTHENTICATED:
            raise SessionClosedError()
        payload = WsOutbound(
            type=DM_EVENT, data=MessageDTO.from_entity(message).model_dump(mode="json")
        )
        # QueueFull propagates to the router, which counts it as a failed push
        self._outbox.put_nowait(payload.model_dump(mode="json"))

    def _enqueue(self, event: WsOutbound) -> None:
        try:
            self._outbox.put_nowait(event.model_dump(mode="json"))
        except asyncio.QueueFull:
            logger.warning("Outbox full for %s, dropping %s event", self.identity, event.type)

    async def _drain_outbox(self) -> None:
        while True:
            payload = await self._outbox.get()
            try:
                await self._transport.send_json(payload)
            except Exception as e:
                logger.warning("Send to %s failed, closing session: %s", self.identity, e)
                self._release()
                try:
                    await self._transport.close()
                except Exception:
                    logger.debug("Transport for %s already closed", self.identity)
                return

    def _release(self) -> None:
        """Idempotent: leave the directory and stop accepting pushes."""
        self.state = SessionState.CLOSED
        if self._registered:
            self._registered = False
            self._directory.unregister(self.identity, self)
            connection_closed()
