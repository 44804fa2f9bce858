"""Reading MessagePack strings."""

from __future__ import annotations

from .decode import read_marker
from .errors import (
    BufferSizeTooSmallError,
    InsufficientBytesError,
    InvalidDataReadError,
    InvalidUtf8Error,
    TypeMismatchError,
)
from .marker import MarkerKind
from .reader import Bytes, as_reader, read_data

_STR_LEN_FORMATS = {
    MarkerKind.STR8: "u8",
    MarkerKind.STR16: "u16",
    MarkerKind.STR32: "u32",
}


def read_str_len(rd) -> int:
    """Read the byte length of a string."""
    rd = as_reader(rd)
    marker = read_marker(rd)
    if marker.kind is MarkerKind.FIX_STR:
        return marker.value
    fmt = _STR_LEN_FORMATS.get(marker.kind)
    if fmt is None:
        raise TypeMismatchError(marker)
    return read_data(rd, fmt)


def read_str(rd, limit: int | None = None) -> str:
    """Read a whole string value.

    If ``limit`` is given and the string is longer than ``limit`` bytes,
    :class:`~rmpack.errors.BufferSizeTooSmallError` is raised and the data is
    left unread.
    """
    rd = as_reader(rd)
    length = read_str_len(rd)
    if limit is not None and length > limit:
        raise BufferSizeTooSmallError(length)
    return read_str_data(rd, length)


def read_str_data(rd, length: int) -> str:
    """Read ``length`` bytes of string data and decode them as UTF-8."""
    rd = as_reader(rd)
    try:
        raw = rd.read_exact(length)
    except (InsufficientBytesError, OSError) as err:
        raise InvalidDataReadError(err) from err
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as err:
        raise InvalidUtf8Error(raw, err) from err


def read_str_ref(buf) -> bytes:
    """Read a string header from ``buf`` and return its raw, undecoded bytes."""
    cur = Bytes(buf)
    length = read_str_len(cur)
    rest = cur.remaining_slice()
    if len(rest) < length:
        raise BufferSizeTooSmallError(length)
    return rest[:length]


def read_str_from_slice(buf) -> tuple[str, bytes]:
    """Decode one string from the start of ``buf``.

    Returns the string and the bytes that follow it.
    """
    data = bytes(buf)
    cur = Bytes(data)
    length = read_str_len(cur)
    start = cur.position
    end = start + length
    if len(data) - start < length:
        raise BufferSizeTooSmallError(length)
    try:
        text = data[start:end].decode("utf-8")
    except UnicodeDecodeError as err:
        raise InvalidUtf8Error(data, err) from err
    return text, data[end:]