"""Asyncio client for the RRCP robot control protocol."""

__version__ = "0.1.0"
__all__ = ["client", "header", "proto", "stream_pool", "tls"]