"""Reading MessagePack markers, lengths and unsigned integers."""

from __future__ import annotations

from .errors import (
    InsufficientBytesError,
    InvalidMarkerReadError,
    OutOfRangeError,
    TypeMismatchError,
)
from .marker import Marker, MarkerKind
from .reader import Reader, as_reader, read_data

_INT_DATA_FORMATS = {
    MarkerKind.U8: "u8",
    MarkerKind.U16: "u16",
    MarkerKind.U32: "u32",
    MarkerKind.U64: "u64",
    MarkerKind.I8: "i8",
    MarkerKind.I16: "i16",
    MarkerKind.I32: "i32",
    MarkerKind.I64: "i64",
}


def read_marker(rd) -> Marker:
    """Read one byte and decode it as a format marker.

    Raises :class:`~rmpack.errors.InvalidMarkerReadError` if no byte can be read.
    """
    rd = as_reader(rd)
    try:
        byte = rd.read_u8()
    except (InsufficientBytesError, OSError) as err:
        raise InvalidMarkerReadError(err) from err
    return Marker.from_byte(byte)


def _expect(rd: Reader, kind: MarkerKind) -> Marker:
    marker = read_marker(rd)
    if marker.kind is not kind:
        raise TypeMismatchError(marker)
    return marker


def read_nil(rd) -> None:
    """Read a nil value (a single ``0xc0`` byte)."""
    _expect(as_reader(rd), MarkerKind.NULL)


def read_bool(rd) -> bool:
    """Read a boolean value."""
    marker = read_marker(rd)
    if marker.kind is MarkerKind.TRUE:
        return True
    if marker.kind is MarkerKind.FALSE:
        return False
    raise TypeMismatchError(marker)


def read_int(rd, min_value: int | None = None, max_value: int | None = None) -> int:
    """Read an integer stored in any of the integer formats.

    If ``min_value`` or ``max_value`` is given, a value outside that inclusive
    range raises :class:`~rmpack.errors.OutOfRangeError`. A marker that is not
    an integer raises :class:`~rmpack.errors.TypeMismatchError`.
    """
    rd = as_reader(rd)
    marker = read_marker(rd)
    kind = marker.kind
    if kind is MarkerKind.FIX_POS or kind is MarkerKind.FIX_NEG:
        value = marker.value
    elif kind in _INT_DATA_FORMATS:
        value = read_data(rd, _INT_DATA_FORMATS[kind])
    else:
        raise TypeMismatchError(marker)
    if (min_value is not None and value < min_value) or (
        max_value is not None and value > max_value
    ):
        raise OutOfRangeError()
    return value


def read_array_len(rd) -> int:
    """Read the length of an array."""
    rd = as_reader(rd)
    marker = read_marker(rd)
    if marker.kind is MarkerKind.FIX_ARRAY:
        return marker.value
    if marker.kind is MarkerKind.ARRAY16:
        return read_data(rd, "u16")
    if marker.kind is MarkerKind.ARRAY32:
        return read_data(rd, "u32")
    raise TypeMismatchError(marker)


def read_map_len(rd) -> int:
    """Read the number of key-value pairs of a map."""
    rd = as_reader(rd)
    return marker_to_len(rd, read_marker(rd))


def marker_to_len(rd, marker: Marker) -> int:
    """Finish reading a map length whose marker has already been read."""
    rd = as_reader(rd)
    if marker.kind is MarkerKind.FIX_MAP:
        return marker.value
    if marker.kind is MarkerKind.MAP16:
        return read_data(rd, "u16")
    if marker.kind is MarkerKind.MAP32:
        return read_data(rd, "u32")
    raise TypeMismatchError(marker)


def read_bin_len(rd) -> int:
    """Read the length of a binary blob."""
    rd = as_reader(rd)
    marker = read_marker(rd)
    if marker.kind is MarkerKind.BIN8:
        return read_data(rd, "u8")
    if marker.kind is MarkerKind.BIN16:
        return read_data(rd, "u16")
    if marker.kind is MarkerKind.BIN32:
        return read_data(rd, "u32")
    raise TypeMismatchError(marker)


def read_pfix(rd) -> int:
    """Read a positive fixnum (``0x00`` to ``0x7f``)."""
    return _expect(as_reader(rd), MarkerKind.FIX_POS).value


def _read_strict(rd, kind: MarkerKind) -> int:
    rd = as_reader(rd)
    _expect(rd, kind)
    return read_data(rd, _INT_DATA_FORMATS[kind])


def read_u8(rd) -> int:
    """Read a value stored strictly in the ``u8`` format."""
    return _read_strict(rd, MarkerKind.U8)


def read_u16(rd) -> int:
    """Read a value stored strictly in the ``u16`` format."""
    return _read_strict(rd, MarkerKind.U16)


def read_u32(rd) -> int:
    """Read a value stored strictly in the ``u32`` format."""
    return _read_strict(rd, MarkerKind.U32)


def read_u64(rd) -> int:
    """Read a value stored strictly in the ``u64`` format."""
    return _read_strict(rd, MarkerKind.U64)