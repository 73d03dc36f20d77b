"""Request/response client speaking RRCP frames over pooled streams."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .header import Flag, RrcpHeader
from .proto import Action, RrcpConfig, SensorData
from .stream_pool import Connection, StreamPool

logger = logging.getLogger(__name__)

DEFAULT_POOL_SIZE = 10


@dataclass
class RrcpFrame:
    """A header together with its body."""

    header: RrcpHeader
    body: bytes = b""

    def to_bytes(self) -> bytes:
        """Encode header and body in wire form."""
        return self.header.to_bytes() + bytes(self.body)


async def read_rrcp_frame(reader: Any) -> RrcpFrame:
    """Read one frame from a stream offering ``readexactly``."""
    raw_header = await reader.readexactly(RrcpHeader.SIZE)
    header = RrcpHeader.from_bytes(raw_header)
    body = await reader.readexactly(header.body_length) if header.body_length else b""
    return RrcpFrame(header=header, body=body)


class RrcpClient:
    """Client issuing configuration and action requests."""

    def __init__(self, stream_pool: StreamPool) -> None:
        self._stream_pool = stream_pool

    @classmethod
    async def connect(
        cls, connection: Connection, pool_size: int = DEFAULT_POOL_SIZE
    ) -> RrcpClient:
        """Build a client over an established connection."""
        logger.debug("new robot client")
        pool = await StreamPool.create(pool_size, connection)
        return cls(pool)

    async def _do_request(self, request: bytes) -> RrcpFrame:
        send, recv = await self._stream_pool.get_bi_stream()
        send.write(request)
        await send.drain()
        return await read_rrcp_frame(recv)

    async def get_config(self) -> RrcpConfig:
        """Ask the server for the robot configuration."""
        request = RrcpHeader.new_with_flag(Flag.GET_CONFIG).to_bytes()
        frame = await self._do_request(request)
        return RrcpConfig.from_msgpack(frame.body)

    async def get_action(self, sensor_data: SensorData) -> Action:
        """Send sensor readings and return the server's action."""
        header = RrcpHeader.new_with_flag(Flag.GET_ACTION)
        body = sensor_data.to_msgpack()
        logger.debug("request body: %s", body.hex(" "))
        header.body_length = len(body)
        request = RrcpFrame(header=header, body=body)
        logger.info("Sending request: %r", request)
        frame = await self._do_request(request.to_bytes())
        action = Action.from_msgpack(frame.body)
        logger.info("Received frame: %r", frame.header)
        return action