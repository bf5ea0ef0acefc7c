"""Byte channels for reading and writing documents.

Key Components:
    ByteChannel: Base class with scoped ``open`` that always releases
    FileChannel: File on disk
    BufferChannel: In-memory bytes
    StreamChannel: Caller-owned binary file object
"""

from .device import (
    BufferChannel,
    ByteChannel,
    ChannelMode,
    ChannelSource,
    FileChannel,
    StreamChannel,
    as_channel,
)

__all__ = [
    "BufferChannel",
    "ByteChannel",
    "ChannelMode",
    "ChannelSource",
    "FileChannel",
    "StreamChannel",
    "as_channel",
]
