"""Fixed-size frame header used on every request and response."""

from __future__ import annotations

import enum
import struct
import time
from dataclasses import dataclass
from typing import ClassVar

MAGIC_NUMBER = 0x7312
PROTOCOL_VERSION = 1

_HEADER_STRUCT = struct.Struct("<IIQQHH")


class HeaderError(ValueError):
    """Raised when a header cannot be decoded."""


class ContentType(enum.IntEnum):
    """Encoding of the frame body."""

    NONE = 0
    MESSAGE_PACK = 1


class Flag(enum.IntEnum):
    """Kind of request or response a frame carries."""

    NONE = 0
    GET_CONFIG = 1
    GET_ACTION = 2


def now_timestamp_ms() -> int:
    """Milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


@dataclass
class RrcpHeader:
    """Header preceding each frame body, 28 bytes little-endian on the wire."""

    SIZE: ClassVar[int] = _HEADER_STRUCT.size

    magic: int
    version: int
    body_length: int
    server_timestamp_ms: int
    content_type: ContentType
    flag: Flag

    @classmethod
    def new_with_flag(cls, flag: Flag) -> RrcpHeader:
        """Build a header for an empty MessagePack frame with the given flag."""
        return cls(
            magic=MAGIC_NUMBER,
            version=PROTOCOL_VERSION,
            body_length=0,
            server_timestamp_ms=now_timestamp_ms(),
            content_type=ContentType.MESSAGE_PACK,
            flag=Flag(flag),
        )

    def to_bytes(self) -> bytes:
        """Encode the header in its wire form."""
        return _HEADER_STRUCT.pack(
            self.magic,
            self.version,
            self.body_length,
            self.server_timestamp_ms,
            int(self.content_type),
            int(self.flag),
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> RrcpHeader:
        """Decode a header from the first bytes of ``data``."""
        if len(data) < cls.SIZE:
            raise HeaderError("Bytes too short for RRCPHeader")
        magic, version, body_length, timestamp, content_type, flag = (
            _HEADER_STRUCT.unpack_from(data)
        )
        if magic != MAGIC_NUMBER:
            raise HeaderError(f"Invalid magic number: {magic}")
        try:
            content = ContentType(content_type)
        except ValueError:
            raise HeaderError(f"Unknown content type: {content_type}") from None
        if flag == Flag.NONE:
            raise HeaderError(f"Unknown flag value: {flag}")
        try:
            parsed_flag = Flag(flag)
        except ValueError:
            raise HeaderError(f"Unknown flag value: {flag}") from None
        return cls(
            magic=magic,
            version=version,
            body_length=body_length,
            server_timestamp_ms=timestamp,
            content_type=content,
            flag=parsed_flag,
        )