"""
Prisma client lifecycle.

The generated client (`prisma generate`, see schema.prisma) is imported on
connect, so the rest of the application can be imported and tested with
other MessageStore/UserRepository implementations before generation.
"""

import logging
from typing import Any, Optional

from prisma.errors import PrismaError

from dmchat.domain.exceptions import StorageError

logger = logging.getLogger(__name__)


class Database:
    def __init__(self, url: str):
        self._url = url
        self._client: Optional[Any] = None

    @property
    def client(self) -> Any:
        if self._client is None:
            raise StorageError("Database is not connected")
        return self._client

    async def connect(self) -> None:
        from prisma import Prisma

        client = Prisma(datasource={"url": self._url})
        try:
            await client.connect()
        except PrismaError as e:
            raise StorageError(f"Could not connect to database: {e}") from e
        self._client = client
        logger.info("Connected to database")

    async def disconnect(self) -> None:
        if self._client is not None and self._client.is_connected():
            await self._client.disconnect()
            logger.info("Disconnected from database")
        self._client = None
