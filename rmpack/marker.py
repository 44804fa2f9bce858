"""MessagePack format markers: the first byte of every encoded value."""

from __future__ import annotations

import enum
import operator
from dataclasses import dataclass

MSGPACK_VERSION = 5
"""Version of the MessagePack specification implemented by this package."""

FIXSTR_SIZE = 0x1F
FIXARRAY_SIZE = 0x0F
FIXMAP_SIZE = 0x0F


class MarkerKind(enum.IntEnum):
    """The family of a format marker; each value is the family's base byte."""

    FIX_POS = 0x00
    FIX_MAP = 0x80
    FIX_ARRAY = 0x90
    FIX_STR = 0xA0
    NULL = 0xC0
    RESERVED = 0xC1  # marked in the specification as never used
    FALSE = 0xC2
    TRUE = 0xC3
    BIN8 = 0xC4
    BIN16 = 0xC5
    BIN32 = 0xC6
    EXT8 = 0xC7
    EXT16 = 0xC8
    EXT32 = 0xC9
    F32 = 0xCA
    F64 = 0xCB
    U8 = 0xCC
    U16 = 0xCD
    U32 = 0xCE
    U64 = 0xCF
    I8 = 0xD0
    I16 = 0xD1
    I32 = 0xD2
    I64 = 0xD3
    FIX_EXT1 = 0xD4
    FIX_EXT2 = 0xD5
    FIX_EXT4 = 0xD6
    FIX_EXT8 = 0xD7
    FIX_EXT16 = 0xD8
    STR8 = 0xD9
    STR16 = 0xDA
    STR32 = 0xDB
    ARRAY16 = 0xDC
    ARRAY32 = 0xDD
    MAP16 = 0xDE
    MAP32 = 0xDF
    FIX_NEG = 0xE0

    @property
    def carries_value(self) -> bool:
        """Whether markers of this kind embed a value in the marker byte."""
        return self in _VALUED_KINDS


_VALUED_KINDS = frozenset(
    {
        MarkerKind.FIX_POS,
        MarkerKind.FIX_MAP,
        MarkerKind.FIX_ARRAY,
        MarkerKind.FIX_STR,
        MarkerKind.FIX_NEG,
    }
)


@dataclass(frozen=True)
class Marker:
    """A format marker.

    ``value`` is the embedded payload for the fixed families: the integer for
    ``FIX_POS`` and ``FIX_NEG`` (the latter negative) and the length for
    ``FIX_MAP``, ``FIX_ARRAY`` and ``FIX_STR``. It is zero for all other kinds.
    """

    kind: MarkerKind
    value: int = 0

    @classmethod
    def from_byte(cls, byte: int) -> Marker:
        """Decode a single byte into a marker."""
        byte = operator.index(byte)
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"marker byte out of range: {byte}")
        return _BYTE_TABLE[byte]

    def to_byte(self) -> int:
        """Encode this marker as a single byte."""
        kind = self.kind
        if kind is MarkerKind.FIX_POS or kind is MarkerKind.FIX_NEG:
            return self.value & 0xFF
        if kind is MarkerKind.FIX_STR:
            return 0xA0 | (self.value & FIXSTR_SIZE)
        if kind is MarkerKind.FIX_ARRAY:
            return 0x90 | (self.value & FIXARRAY_SIZE)
        if kind is MarkerKind.FIX_MAP:
            return 0x80 | (self.value & FIXMAP_SIZE)
        return int(kind)


def _decode_byte(n: int) -> Marker:
    if n <= 0x7F:
        return Marker(MarkerKind.FIX_POS, n)
    if n <= 0x8F:
        return Marker(MarkerKind.FIX_MAP, n & FIXMAP_SIZE)
    if n <= 0x9F:
        return Marker(MarkerKind.FIX_ARRAY, n & FIXARRAY_SIZE)
    if n <= 0xBF:
        return Marker(MarkerKind.FIX_STR, n & FIXSTR_SIZE)
    if n >= 0xE0:
        return Marker(MarkerKind.FIX_NEG, n - 0x100)
    return Marker(MarkerKind(n))


_BYTE_TABLE = tuple(_decode_byte(n) for n in range(256))