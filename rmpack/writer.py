"""Sinks that MessagePack data can be written to."""

from __future__ import annotations

import errno
import struct
from typing import BinaryIO, Protocol

from .errors import InvalidDataWriteError, InvalidMarkerWriteError
from .marker import Marker

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


class Writer(Protocol):
    """Anything that accepts single bytes and byte runs."""

    def write_u8(self, val: int) -> None: ...

    def write_bytes(self, data) -> None: ...


class ByteBuf:
    """A growable in-memory byte sink that never fails to write.

    A ``bytearray`` given to the constructor is appended to in place; any
    other bytes-like value is copied.
    """

    __slots__ = ("_buf",)

    def __init__(self, data=b"") -> None:
        self._buf = data if isinstance(data, bytearray) else bytearray(data)

    @property
    def buffer(self) -> bytearray:
        """The underlying byte array."""
        return self._buf

    def __len__(self) -> int:
        return len(self._buf)

    def __bytes__(self) -> bytes:
        return bytes(self._buf)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ByteBuf):
            return self._buf == other._buf
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def write_u8(self, val: int) -> None:
        """Append one byte."""
        self._buf.append(val)

    def write_bytes(self, data) -> None:
        """Append a run of bytes."""
        self._buf += data

    def to_bytes(self) -> bytes:
        """The bytes written so far."""
        return bytes(self._buf)


class FixedBuffer:
    """A sink that writes into a fixed-size writable buffer from its start.

    A write that does not fit raises :class:`OSError` and writes nothing.
    """

    __slots__ = ("_view", "_offset")

    def __init__(self, buffer) -> None:
        view = memoryview(buffer)
        if view.readonly:
            raise TypeError("FixedBuffer needs a writable buffer")
        self._view = view.cast("B")
        self._offset = 0

    @property
    def position(self) -> int:
        """Number of bytes written so far."""
        return self._offset

    @property
    def remaining(self) -> int:
        """Number of bytes that can still be written."""
        return len(self._view) - self._offset

    def write_u8(self, val: int) -> None:
        """Write one byte."""
        self.write_bytes(bytes((val,)))

    def write_bytes(self, data) -> None:
        """Write a run of bytes, all or nothing."""
        chunk = memoryview(data).cast("B")
        size = len(chunk)
        if size > self.remaining:
            raise OSError(errno.ENOSPC, "Capacity overflow for fixed-size byte buffer")
        self._view[self._offset : self._offset + size] = chunk
        self._offset += size


class StreamWriter:
    """A sink over a binary file-like object."""

    __slots__ = ("_stream", "_position")

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._position = 0

    @property
    def position(self) -> int:
        """Number of bytes written to the stream so far."""
        return self._position

    def write_u8(self, val: int) -> None:
        """Write one byte."""
        self.write_bytes(bytes((val,)))

    def write_bytes(self, data) -> None:
        """Write every byte of ``data``, retrying short writes."""
        view = memoryview(data).cast("B")
        while view:
            written = self._stream.write(view)
            if written is None:
                written = len(view)
            if written == 0:
                raise OSError("failed to write whole buffer")
            self._position += written
            view = view[written:]


def as_writer(sink) -> Writer:
    """Wrap ``sink`` so that it can be written to.

    A ``bytearray`` is appended to, a ``memoryview`` is filled from its start
    through a new :class:`FixedBuffer`, file-like objects become
    :class:`StreamWriter`, and existing writers are returned unchanged.
    """
    if isinstance(sink, (ByteBuf, FixedBuffer, StreamWriter)):
        return sink
    if isinstance(sink, bytearray):
        return ByteBuf(sink)
    if isinstance(sink, memoryview):
        return FixedBuffer(sink)
    if hasattr(sink, "write_u8") and hasattr(sink, "write_bytes"):
        return sink
    if hasattr(sink, "write"):
        return StreamWriter(sink)
    raise TypeError(f"cannot write MessagePack data to {type(sink).__name__}")


def write_marker(wr, marker: Marker) -> None:
    """Write a single marker byte.

    A failure of the underlying sink is raised as
    :class:`~rmpack.errors.InvalidMarkerWriteError`.
    """
    wr = as_writer(wr)
    try:
        wr.write_u8(marker.to_byte())
    except OSError as err:
        raise InvalidMarkerWriteError(err) from err


def write_data(wr, fmt: str, value) -> None:
    """Write one big-endian number in the given format (``"u8"`` to ``"f64"``).

    A failure of the underlying sink is raised as
    :class:`~rmpack.errors.InvalidDataWriteError`.
    """
    try:
        codec = _DATA_FORMATS[fmt]
    except KeyError:
        raise ValueError(f"unknown data format: {fmt!r}") from None
    try:
        raw = codec.pack(value)
    except struct.error as err:
        raise ValueError(f"{value!r} does not fit the {fmt} format") from err
    wr = as_writer(wr)
    try:
        if codec.size == 1:
            wr.write_u8(raw[0])
        else:
            wr.write_bytes(raw)
    except OSError as err:
        raise InvalidDataWriteError(err) from err