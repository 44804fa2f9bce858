"""Sources that MessagePack data can be read from."""

from __future__ import annotations

import errno
import struct
from typing import BinaryIO, Protocol

from .errors import InsufficientBytesError, InvalidDataReadError

_DATA_FORMATS = {
    "u8": struct.Struct(">B"),
    "u16": struct.Struct(">H"),
    "u32": struct.Struct(">I"),
    "u64": struct.Struct(">Q"),
    "i8": struct.Struct(">b"),
    "i16": struct.Struct(">h"),
    "i32": struct.Struct(">i"),
    "i64": struct.Struct(">q"),
    "f32": struct.Struct(">f"),
    "f64": struct.Struct(">d"),
}


class Reader(Protocol):
    """Anything that can hand out single bytes and exact byte runs."""

    def read_u8(self) -> int: ...

    def read_exact(self, n: int) -> bytes: ...


class Bytes:
    """An in-memory byte source that tracks how far it has been read."""

    __slots__ = ("_data", "_offset")

    def __init__(self, data: bytes | bytearray | memoryview = b"") -> None:
        self._data = memoryview(data).cast("B")
        self._offset = 0

    @property
    def position(self) -> int:
        """Number of bytes consumed so far."""
        return self._offset

    def __len__(self) -> int:
        return len(self._data) - self._offset

    def remaining_slice(self) -> bytes:
        """The bytes not yet consumed."""
        return self._data[self._offset:].tobytes()

    def read_u8(self) -> int:
        """Read one unsigned byte."""
        if self._offset >= len(self._data):
            raise InsufficientBytesError(1, 0, self._offset)
        byte = self._data[self._offset]
        self._offset += 1
        return byte

    def read_exact(self, n: int) -> bytes:
        """Read exactly ``n`` bytes, consuming nothing if fewer remain."""
        if n < 0:
            raise ValueError(f"cannot read a negative number of bytes: {n}")
        remaining = len(self)
        if n > remaining:
            raise InsufficientBytesError(n, remaining, self._offset)
        chunk = self._data[self._offset : self._offset + n].tobytes()
        self._offset += n
        return chunk


class StreamReader:
    """A byte source over a binary file-like object."""

    __slots__ = ("_stream", "_position")

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._position = 0

    @property
    def position(self) -> int:
        """Number of bytes consumed from the stream so far."""
        return self._position

    def read_u8(self) -> int:
        """Read one unsigned byte."""
        return self.read_exact(1)[0]

    def read_exact(self, n: int) -> bytes:
        """Read exactly ``n`` bytes, retrying short reads until the stream ends."""
        if n < 0:
            raise ValueError(f"cannot read a negative number of bytes: {n}")
        start = self._position
        parts: list[bytes] = []
        got = 0
        while got < n:
            chunk = self._stream.read(n - got)
            if chunk is None:
                raise BlockingIOError(errno.EAGAIN, "stream has no data available")
            if not chunk:
                self._position += got
                raise InsufficientBytesError(n, got, start)
            parts.append(bytes(chunk))
            got += len(chunk)
        self._position += got
        return b"".join(parts)


def as_reader(source) -> Reader:
    """Wrap ``source`` so that it can be read from.

    Byte strings become :class:`Bytes`, file-like objects become
    :class:`StreamReader`, and existing readers are returned unchanged.
    """
    if isinstance(source, (Bytes, StreamReader)):
        return source
    if isinstance(source, (bytes, bytearray, memoryview)):
        return Bytes(source)
    if hasattr(source, "read_u8") and hasattr(source, "read_exact"):
        return source
    if hasattr(source, "read"):
        return StreamReader(source)
    raise TypeError(f"cannot read MessagePack data from {type(source).__name__}")


def read_data(rd: Reader, fmt: str):
    """Read one big-endian number of the given format (``"u8"`` to ``"f64"``).

    A failure of the underlying reader is raised as
    :class:`~rmpack.errors.InvalidDataReadError`.
    """
    try:
        codec = _DATA_FORMATS[fmt]
    except KeyError:
        raise ValueError(f"unknown data format: {fmt!r}") from None
    try:
        raw = rd.read_exact(codec.size)
    except (InsufficientBytesError, OSError) as err:
        raise InvalidDataReadError(err) from err
    return codec.unpack(raw)[0]