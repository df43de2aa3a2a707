"""Lazy, idempotent MongoDB connection helper."""

import asyncio
import logging
from typing import Any, Callable, Optional

from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class MongoConnection:
    """Holds a single MongoDB client, connected on first use."""

    def __init__(
        self,
        uri: str,
        timeout_ms: int = 5000,
        client_factory: Callable[..., Any] = AsyncMongoClient,
    ):
        self.uri = uri
        self.timeout_ms = timeout_ms
        self._client_factory = client_factory
        self._client: Optional[Any] = None
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    @property
    def client(self) -> Optional[Any]:
        return self._client

    async def ensure_connected(self) -> bool:
        """Connect unless already connected. Errors are logged, not raised."""
        if self._client is not None:
            return True

        async with self._lock:
            if self._client is not None:
                return True

            client = None
            try:
                client = self._client_factory(
                    self.uri, serverSelectionTimeoutMS=self.timeout_ms
                )
                await client.admin.command("ping")
            except PyMongoError as e:
                logger.error(f"MongoDB connection error: {e}")
                if client is not None:
                    await client.close()
                return False

            self._client = client
            logger.info("MongoDB connected")
            return True

    async def close(self):
        """Close the client if one is open."""
        if self._client is not None:
            await self._client.close()
            self._client = None
            logger.info("MongoDB connection closed")
