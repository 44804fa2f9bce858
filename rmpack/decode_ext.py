"""Reading MessagePack extension values."""

from __future__ import annotations

from dataclasses import dataclass

from .decode import read_marker
from .errors import InsufficientBytesError, InvalidDataReadError, TypeMismatchError
from .marker import MarkerKind
from .reader import as_reader, read_data

_FIXEXT_SIZES = {
    MarkerKind.FIX_EXT1: 1,
    MarkerKind.FIX_EXT2: 2,
    MarkerKind.FIX_EXT4: 4,
    MarkerKind.FIX_EXT8: 8,
    MarkerKind.FIX_EXT16: 16,
}

_EXT_LEN_FORMATS = {
    MarkerKind.EXT8: "u8",
    MarkerKind.EXT16: "u16",
    MarkerKind.EXT32: "u32",
}


@dataclass(frozen=True)
class ExtMeta:
    """Type tag and payload size of an extension value.

    Tags 0 to 127 are for applications; negative tags are reserved.
    """

    typeid: int
    size: int


def _read_fixext(rd, kind: MarkerKind) -> tuple[int, bytes]:
    rd = as_reader(rd)
    marker = read_marker(rd)
    if marker.kind is not kind:
        raise TypeMismatchError(marker)
    typeid = read_data(rd, "i8")
    try:
        data = rd.read_exact(_FIXEXT_SIZES[kind])
    except (InsufficientBytesError, OSError) as err:
        raise InvalidDataReadError(err) from err
    return typeid, data


def read_fixext1(rd) -> tuple[int, int]:
    """Read a fixext1 value, returning its type tag and its single data byte."""
    typeid, data = _read_fixext(rd, MarkerKind.FIX_EXT1)
    return typeid, data[0]


def read_fixext2(rd) -> tuple[int, bytes]:
    """Read a fixext2 value, returning its type tag and 2 data bytes."""
    return _read_fixext(rd, MarkerKind.FIX_EXT2)


def read_fixext4(rd) -> tuple[int, bytes]:
    """Read a fixext4 value, returning its type tag and 4 data bytes."""
    return _read_fixext(rd, MarkerKind.FIX_EXT4)


def read_fixext8(rd) -> tuple[int, bytes]:
    """Read a fixext8 value, returning its type tag and 8 data bytes."""
    return _read_fixext(rd, MarkerKind.FIX_EXT8)


def read_fixext16(rd) -> tuple[int, bytes]:
    """Read a fixext16 value, returning its type tag and 16 data bytes."""
    return _read_fixext(rd, MarkerKind.FIX_EXT16)


def read_ext_meta(rd) -> ExtMeta:
    """Read the marker, length and type tag of any extension value.

    The payload itself is left unread.
    """
    rd = as_reader(rd)
    marker = read_marker(rd)
    kind = marker.kind
    if kind in _FIXEXT_SIZES:
        size = _FIXEXT_SIZES[kind]
    elif kind in _EXT_LEN_FORMATS:
        size = read_data(rd, _EXT_LEN_FORMATS[kind])
    else:
        raise TypeMismatchError(marker)
    typeid = read_data(rd, "i8")
    return ExtMeta(typeid, size)