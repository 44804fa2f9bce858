"""Writing MessagePack nil, booleans, lengths, binaries, strings and floats."""

from __future__ import annotations

from .marker import Marker, MarkerKind
from .writer import Writer, as_writer, write_data, write_marker

_U8_MAX = 0xFF
_U16_MAX = 0xFFFF
_U32_MAX = 0xFFFFFFFF

_FIXEXT_KINDS = {
    1: MarkerKind.FIX_EXT1,
    2: MarkerKind.FIX_EXT2,
    4: MarkerKind.FIX_EXT4,
    8: MarkerKind.FIX_EXT8,
    16: MarkerKind.FIX_EXT16,
}


def _check_len(length: int) -> int:
    if not 0 <= length <= _U32_MAX:
        raise ValueError(f"length does not fit in 32 bits: {length}")
    return length


def _write_sized(wr: Writer, length: int, small: MarkerKind | None,
                 kinds: tuple[MarkerKind, MarkerKind, MarkerKind]) -> Marker:
    """Write a marker chosen from 8/16/32-bit length kinds, then the length."""
    kind8, kind16, kind32 = kinds
    if length <= _U8_MAX and kind8 is not None:
        marker, fmt = Marker(kind8), "u8"
    elif length <= _U16_MAX:
        marker, fmt = Marker(kind16), "u16"
    else:
        marker, fmt = Marker(kind32), "u32"
    write_marker(wr, marker)
    write_data(wr, fmt, length)
    return marker


def write_nil(wr) -> None:
    """Write a nil value (a single ``0xc0`` byte).

    A failure of the sink is raised unchanged.
    """
    as_writer(wr).write_u8(Marker(MarkerKind.NULL).to_byte())


def write_bool(wr, val: bool) -> None:
    """Write a boolean value as a single byte.

    A failure of the sink is raised unchanged.
    """
    kind = MarkerKind.TRUE if val else MarkerKind.FALSE
    as_writer(wr).write_u8(Marker(kind).to_byte())


def _write_container_len(wr, length: int, fix: MarkerKind,
                         kind16: MarkerKind, kind32: MarkerKind) -> Marker:
    wr = as_writer(wr)
    length = _check_len(length)
    if length < 16:
        marker = Marker(fix, length)
        write_marker(wr, marker)
        return marker
    if length <= _U16_MAX:
        marker, fmt = Marker(kind16), "u16"
    else:
        marker, fmt = Marker(kind32), "u32"
    write_marker(wr, marker)
    write_data(wr, fmt, length)
    return marker


def write_array_len(wr, length: int) -> Marker:
    """Write the most compact array header for ``length`` items; return its marker."""
    return _write_container_len(
        wr, length, MarkerKind.FIX_ARRAY, MarkerKind.ARRAY16, MarkerKind.ARRAY32
    )


def write_map_len(wr, length: int) -> Marker:
    """Write the most compact map header for ``length`` pairs; return its marker."""
    return _write_container_len(
        wr, length, MarkerKind.FIX_MAP, MarkerKind.MAP16, MarkerKind.MAP32
    )


def write_ext_meta(wr, length: int, typeid: int) -> Marker:
    """Write the header of an extension value with a payload of ``length`` bytes.

    Returns the marker used. The payload itself is left for the caller.
    """
    wr = as_writer(wr)
    length = _check_len(length)
    fix = _FIXEXT_KINDS.get(length)
    if fix is not None:
        marker = Marker(fix)
        write_marker(wr, marker)
    else:
        marker = _write_sized(
            wr, length, None, (MarkerKind.EXT8, MarkerKind.EXT16, MarkerKind.EXT32)
        )
    write_data(wr, "i8", typeid)
    return marker


def write_bin_len(wr, length: int) -> Marker:
    """Write the most compact binary header for ``length`` bytes; return its marker."""
    wr = as_writer(wr)
    return _write_sized(
        wr, _check_len(length), None,
        (MarkerKind.BIN8, MarkerKind.BIN16, MarkerKind.BIN32),
    )


def write_bin(wr, data) -> None:
    """Write a binary value: its header followed by the bytes of ``data``."""
    wr = as_writer(wr)
    payload = memoryview(data).cast("B")
    write_bin_len(wr, len(payload))
    _write_payload(wr, payload)


def write_str_len(wr, length: int) -> Marker:
    """Write the most compact string header for ``length`` bytes; return its marker."""
    wr = as_writer(wr)
    length = _check_len(length)
    if length < 32:
        marker = Marker(MarkerKind.FIX_STR, length)
        write_marker(wr, marker)
        return marker
    return _write_sized(
        wr, length, None, (MarkerKind.STR8, MarkerKind.STR16, MarkerKind.STR32)
    )


def write_str(wr, data: str) -> None:
    """Write a string value encoded as UTF-8."""
    wr = as_writer(wr)
    payload = data.encode("utf-8")
    write_str_len(wr, len(payload))
    _write_payload(wr, payload)


def _write_payload(wr: Writer, payload) -> None:
    from .errors import InvalidDataWriteError

    try:
        wr.write_bytes(payload)
    except OSError as err:
        raise InvalidDataWriteError(err) from err


def write_f32(wr, val: float) -> None:
    """Write a single-precision float as 5 bytes."""
    wr = as_writer(wr)
    write_marker(wr, Marker(MarkerKind.F32))
    write_data(wr, "f32", val)


def write_f64(wr, val: float) -> None:
    """Write a double-precision float as 9 bytes."""
    wr = as_writer(wr)
    write_marker(wr, Marker(MarkerKind.F64))
    write_data(wr, "f64", val)