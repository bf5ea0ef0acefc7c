"""Byte channels that the reader and writer acquire for a single call.

A channel is opened in one mode, used, and released when the ``open``
context exits, whichever way it exits. Open failures are reported as
``ChannelOpenError`` carrying the operating system's reason.
"""

import io
from abc import ABC, abstractmethod
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Any, BinaryIO, Iterator, Optional, Union

from textfile_xml.shared.errors import ChannelOpenError


class ChannelMode(Enum):
    """Direction a channel is opened in."""

    READ = "reading"
    WRITE = "writing"


class ByteChannel(ABC):
    """Opaque readable/writable byte channel."""

    def __init__(self) -> None:
        self._is_open = False

    @property
    def is_open(self) -> bool:
        """Whether the channel is currently acquired."""
        return self._is_open

    @abstractmethod
    def describe(self) -> str:
        """Short human-readable description used in logs."""

    @abstractmethod
    def _acquire(self, mode: ChannelMode) -> BinaryIO:
        """Open the underlying stream; raise OSError on failure."""

    @abstractmethod
    def _release(self, stream: BinaryIO, mode: ChannelMode) -> None:
        """Close or detach the underlying stream."""

    @contextmanager
    def open(self, mode: ChannelMode) -> Iterator[BinaryIO]:
        """Acquire the channel for one read or write and always release it.

        Raises:
            ChannelOpenError: If the channel is already open or cannot be opened
        """
        if self._is_open:
            raise ChannelOpenError(
                f"Unable to open XML file for {mode.value}: channel is already open"
            )
        try:
            stream = self._acquire(mode)
        except OSError as e:
            reason = e.strerror or str(e)
            raise ChannelOpenError(
                f"Unable to open XML file for {mode.value}: {reason}"
            ) from e

        self._is_open = True
        try:
            yield stream
        finally:
            self._is_open = False
            self._release(stream, mode)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.describe()})"


class FileChannel(ByteChannel):
    """Channel backed by a file on disk."""

    def __init__(self, path: Union[str, Path]) -> None:
        super().__init__()
        self.path = Path(path)

    def describe(self) -> str:
        return str(self.path)

    def _acquire(self, mode: ChannelMode) -> BinaryIO:
        return open(self.path, "rb" if mode is ChannelMode.READ else "wb")

    def _release(self, stream: BinaryIO, mode: ChannelMode) -> None:
        stream.close()


class BufferChannel(ByteChannel):
    """In-memory channel; written bytes are available in ``data`` after release."""

    def __init__(self, data: bytes = b"") -> None:
        super().__init__()
        self.data = bytes(data)

    def describe(self) -> str:
        return f"<buffer of {len(self.data)} bytes>"

    def _acquire(self, mode: ChannelMode) -> BinaryIO:
        if mode is ChannelMode.READ:
            return io.BytesIO(self.data)
        return io.BytesIO()

    def _release(self, stream: BinaryIO, mode: ChannelMode) -> None:
        if mode is ChannelMode.WRITE:
            self.data = stream.getvalue()  # type: ignore[attr-defined]
        stream.close()


class StreamChannel(ByteChannel):
    """Channel around a binary file object owned by the caller.

    The wrapped object is flushed after writing but never closed.
    """

    def __init__(self, stream: BinaryIO, name: Optional[str] = None) -> None:
        super().__init__()
        self.stream = stream
        self.name = name or getattr(stream, "name", None) or "<stream>"

    def describe(self) -> str:
        return str(self.name)

    def _acquire(self, mode: ChannelMode) -> BinaryIO:
        if getattr(self.stream, "closed", False):
            raise OSError("I/O operation on closed file")
        if mode is ChannelMode.READ:
            readable = getattr(self.stream, "readable", None)
            if readable is not None and not readable():
                raise OSError("stream is not readable")
        else:
            writable = getattr(self.stream, "writable", None)
            if writable is not None and not writable():
                raise OSError("stream is not writable")
        return self.stream

    def _release(self, stream: BinaryIO, mode: ChannelMode) -> None:
        if mode is ChannelMode.WRITE and not getattr(stream, "closed", False):
            stream.flush()


ChannelSource = Union[ByteChannel, str, Path, bytes, bytearray, BinaryIO]


def as_channel(source: Any) -> ByteChannel:
    """Wrap a path, raw bytes or binary file object in a channel.

    Args:
        source: Existing channel, filesystem path, bytes, or binary file object

    Returns:
        ByteChannel for the source

    Raises:
        TypeError: If the source cannot be used as a byte channel
    """
    if isinstance(source, ByteChannel):
        return source
    if isinstance(source, (str, Path)):
        return FileChannel(source)
    if isinstance(source, (bytes, bytearray)):
        return BufferChannel(bytes(source))
    if hasattr(source, "read") or hasattr(source, "write"):
        if isinstance(source, io.TextIOBase):
            raise TypeError("Text streams are not supported; open the file in binary mode")
        return StreamChannel(source)
    raise TypeError(f"Cannot use {type(source).__name__} as a byte channel")
