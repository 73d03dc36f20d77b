"""Pool of pre-opened bidirectional streams on one connection."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

logger = logging.getLogger(__name__)

REPLENISH_THRESHOLD = 5


class Connection(Protocol):
    """A multiplexed connection able to open bidirectional streams."""

    async def open_bi(self) -> tuple[Any, Any]:
        """Open a stream and return its (send, receive) halves."""
        ...


class PoolExhaustedError(RuntimeError):
    """Raised when no stream is available in the pool."""


class StreamPool:
    """Keeps ready-to-use streams and tops the pool up in the background."""

    def __init__(self, connection: Connection) -> None:
        self._connection = connection
        self._streams: list[tuple[Any, Any]] = []
        self._lock = asyncio.Lock()
        self._tasks: set[asyncio.Task] = set()

    @classmethod
    async def create(cls, pool_size: int, connection: Connection) -> StreamPool:
        """Open ``pool_size`` streams on ``connection`` and pool them."""
        pool = cls(connection)
        for _ in range(pool_size):
            stream = await connection.open_bi()
            async with pool._lock:
                pool._streams.append(stream)
        return pool

    def __len__(self) -> int:
        return len(self._streams)

    async def _replenish(self) -> None:
        async with self._lock:
            if len(self._streams) >= REPLENISH_THRESHOLD:
                return
        try:
            stream = await self._connection.open_bi()
        except Exception:
            logger.exception("failed to open a stream while replenishing the pool")
            return
        async with self._lock:
            self._streams.append(stream)

    async def get_bi_stream(self) -> tuple[Any, Any]:
        """Take a (send, receive) pair out of the pool."""
        task = asyncio.get_running_loop().create_task(self._replenish())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        async with self._lock:
            if not self._streams:
                raise PoolExhaustedError("No available send stream")
            return self._streams.pop()