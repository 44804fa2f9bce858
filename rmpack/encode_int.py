"""Writing MessagePack unsigned and signed integers."""

from __future__ import annotations

import operator

from .errors import InvalidMarkerWriteError
from .marker import Marker, MarkerKind
from .writer import Writer, as_writer, write_data, write_marker

_U8_MAX = 0xFF
_U16_MAX = 0xFFFF
_U32_MAX = 0xFFFFFFFF
_U64_MAX = 0xFFFFFFFFFFFFFFFF
_I8_MIN, _I8_MAX = -0x80, 0x7F
_I16_MIN, _I16_MAX = -0x8000, 0x7FFF
_I32_MIN, _I32_MAX = -0x80000000, 0x7FFFFFFF
_I64_MIN, _I64_MAX = -0x8000000000000000, 0x7FFFFFFFFFFFFFFF


def _check(val, low: int, high: int, what: str) -> int:
    val = operator.index(val)
    if not low <= val <= high:
        raise ValueError(f"{val} does not fit in {what} ({low} to {high})")
    return val


def _write_strict(wr, kind: MarkerKind, fmt: str, val: int) -> None:
    wr = as_writer(wr)
    write_marker(wr, Marker(kind))
    write_data(wr, fmt, val)


def _write_fix_marker(wr: Writer, marker: Marker) -> Marker:
    """Write a single-byte marker, wrapping a sink failure as a marker error."""
    try:
        wr.write_u8(marker.to_byte())
    except OSError as err:
        raise InvalidMarkerWriteError(err) from err
    return marker


def write_pfix(wr, val: int) -> None:
    """Write a positive fixnum (0 to 127) as a single byte.

    Raises :class:`ValueError` if ``val`` is out of range. A failure of the
    sink is raised unchanged.
    """
    val = _check(val, 0, 0x7F, "a positive fixnum")
    as_writer(wr).write_u8(Marker(MarkerKind.FIX_POS, val).to_byte())


def write_u8(wr, val: int) -> None:
    """Write ``val`` strictly in the 2-byte ``u8`` format."""
    _write_strict(wr, MarkerKind.U8, "u8", _check(val, 0, _U8_MAX, "u8"))


def write_u16(wr, val: int) -> None:
    """Write ``val`` strictly in the 3-byte ``u16`` format."""
    _write_strict(wr, MarkerKind.U16, "u16", _check(val, 0, _U16_MAX, "u16"))


def write_u32(wr, val: int) -> None:
    """Write ``val`` strictly in the 5-byte ``u32`` format."""
    _write_strict(wr, MarkerKind.U32, "u32", _check(val, 0, _U32_MAX, "u32"))


def write_u64(wr, val: int) -> None:
    """Write ``val`` strictly in the 9-byte ``u64`` format."""
    _write_strict(wr, MarkerKind.U64, "u64", _check(val, 0, _U64_MAX, "u64"))


def write_uint8(wr, val: int) -> Marker:
    """Write a value from 0 to 255 in the most compact form; return the marker used."""
    val = _check(val, 0, _U8_MAX, "u8")
    wr = as_writer(wr)
    if val < 128:
        return _write_fix_marker(wr, Marker(MarkerKind.FIX_POS, val))
    write_u8(wr, val)
    return Marker(MarkerKind.U8)


def write_uint(wr, val: int) -> Marker:
    """Write an unsigned 64-bit value in the most compact form; return the marker used."""
    val = _check(val, 0, _U64_MAX, "u64")
    wr = as_writer(wr)
    if val <= _U8_MAX:
        return write_uint8(wr, val)
    if val <= _U16_MAX:
        write_u16(wr, val)
        return Marker(MarkerKind.U16)
    if val <= _U32_MAX:
        write_u32(wr, val)
        return Marker(MarkerKind.U32)
    write_u64(wr, val)
    return Marker(MarkerKind.U64)


def write_nfix(wr, val: int) -> None:
    """Write a negative fixnum (-32 to -1) as a single byte.

    Raises :class:`ValueError` if ``val`` is out of range. A failure of the
    sink is raised unchanged.
    """
    val = _check(val, -32, -1, "a negative fixnum")
    as_writer(wr).write_u8(Marker(MarkerKind.FIX_NEG, val).to_byte())


def write_i8(wr, val: int) -> None:
    """Write ``val`` strictly in the 2-byte ``i8`` format."""
    _write_strict(wr, MarkerKind.I8, "i8", _check(val, _I8_MIN, _I8_MAX, "i8"))


def write_i16(wr, val: int) -> None:
    """Write ``val`` strictly in the 3-byte ``i16`` format."""
    _write_strict(wr, MarkerKind.I16, "i16", _check(val, _I16_MIN, _I16_MAX, "i16"))


def write_i32(wr, val: int) -> None:
    """Write ``val`` strictly in the 5-byte ``i32`` format."""
    _write_strict(wr, MarkerKind.I32, "i32", _check(val, _I32_MIN, _I32_MAX, "i32"))


def write_i64(wr, val: int) -> None:
    """Write ``val`` strictly in the 9-byte ``i64`` format."""
    _write_strict(wr, MarkerKind.I64, "i64", _check(val, _I64_MIN, _I64_MAX, "i64"))


def write_sint(wr, val: int) -> Marker:
    """Write a signed 64-bit value in the most compact form; return the marker used.

    Non-negative values use the unsigned formats.
    """
    val = _check(val, _I64_MIN, _I64_MAX, "i64")
    wr = as_writer(wr)
    if -32 <= val < 0:
        return _write_fix_marker(wr, Marker(MarkerKind.FIX_NEG, val))
    if _I8_MIN <= val < -32:
        write_i8(wr, val)
        return Marker(MarkerKind.I8)
    if _I16_MIN <= val < _I8_MIN:
        write_i16(wr, val)
        return Marker(MarkerKind.I16)
    if _I32_MIN <= val < _I16_MIN:
        write_i32(wr, val)
        return Marker(MarkerKind.I32)
    if val < _I32_MIN:
        write_i64(wr, val)
        return Marker(MarkerKind.I64)
    return write_uint(wr, val)