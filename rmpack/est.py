"""Finding the encoded length of a possibly incomplete MessagePack message."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .errors import MsgpackError
from .marker import Marker, MarkerKind

_U16_MAX = 0xFFFF
_U32_MAX = 0xFFFFFFFF
_EMPTY = memoryview(b"")


class LenError(MsgpackError):
    """The length of a message could not be determined (yet)."""

    def __init__(self, length: int, message: str) -> None:
        self.length = length
        super().__init__(message)


class TruncatedError(LenError):
    """The message is incomplete; ``length`` is a lower bound of its total size."""

    def __init__(self, length: int) -> None:
        super().__init__(
            length, f"message is truncated, at least {length} bytes are needed"
        )


class LenParseError(LenError):
    """The message is invalid or exceeds the configured limits; ``length`` is 0."""

    def __init__(self) -> None:
        super().__init__(0, "message is invalid or exceeds the configured limits")


class _Step(enum.Enum):
    NEXT_MARKER = enum.auto()
    LIMIT_EXCEEDED = enum.auto()


_LEN_SIZES = {
    MarkerKind.BIN8: 1,
    MarkerKind.BIN16: 2,
    MarkerKind.BIN32: 4,
    MarkerKind.EXT8: 1,
    MarkerKind.EXT16: 2,
    MarkerKind.EXT32: 4,
    MarkerKind.STR8: 1,
    MarkerKind.STR16: 2,
    MarkerKind.STR32: 4,
    MarkerKind.ARRAY16: 2,
    MarkerKind.ARRAY32: 4,
    MarkerKind.MAP16: 2,
    MarkerKind.MAP32: 4,
}

# Payload sizes of items whose size is fixed by the marker alone.
_FIXED_SIZES = {
    MarkerKind.F32: 4,
    MarkerKind.F64: 8,
    MarkerKind.U8: 1,
    MarkerKind.U16: 2,
    MarkerKind.U32: 4,
    MarkerKind.U64: 8,
    MarkerKind.I8: 1,
    MarkerKind.I16: 2,
    MarkerKind.I32: 4,
    MarkerKind.I64: 8,
    MarkerKind.FIX_EXT1: 2,
    MarkerKind.FIX_EXT2: 3,
    MarkerKind.FIX_EXT4: 5,
    MarkerKind.FIX_EXT8: 9,
    MarkerKind.FIX_EXT16: 17,
}

_SINGLE_BYTE = frozenset(
    {
        MarkerKind.FIX_POS,
        MarkerKind.FIX_NEG,
        MarkerKind.NULL,
        MarkerKind.RESERVED,
        MarkerKind.FALSE,
        MarkerKind.TRUE,
    }
)

_BLOB_KINDS = frozenset(
    {
        MarkerKind.BIN8,
        MarkerKind.BIN16,
        MarkerKind.BIN32,
        MarkerKind.STR8,
        MarkerKind.STR16,
        MarkerKind.STR32,
    }
)
_EXT_KINDS = frozenset({MarkerKind.EXT8, MarkerKind.EXT16, MarkerKind.EXT32})
_ARRAY_KINDS = frozenset({MarkerKind.ARRAY16, MarkerKind.ARRAY32})


@dataclass
class _Data:
    bytes_left: int


@dataclass
class _MarkerLen:
    kind: MarkerKind
    buf: bytes = b""

    @property
    def size(self) -> int:
        return _LEN_SIZES[self.kind]


@dataclass
class _Seq:
    items_left: int
    item_start: int


class _Incomplete(Exception):
    """Raised internally when parsing has to stop."""


class MessageLen:
    """Incremental parser that reports the encoded size of one MessagePack message.

    ``max_depth`` limits nesting of arrays and maps; ``max_len`` limits the size
    of any string or binary value and the item count of any array or map.
    """

    def __init__(self, max_depth: int = 1024, max_len: int = _U32_MAX) -> None:
        self._max_depth = min(max_depth, _U16_MAX)
        self._max_len = min(max_len, _U32_MAX)
        self._chunk = _EMPTY
        self._offset = 0
        self.reset()

    def reset(self) -> None:
        """Forget all state; the next fragment starts a new message."""
        self._wip: object = _Step.NEXT_MARKER
        self._max_position = 1
        self._position = 0
        self._open: list[_Seq] = []

    @staticmethod
    def len_of(complete_message) -> int:
        """Return the size in bytes of the message at the start of ``complete_message``.

        Extra bytes after the message are ignored.
        """
        return MessageLen(1024, 1 << 30).incremental_len(complete_message)

    def incremental_len(self, fragment) -> int:
        """Feed the next fragment and return the total size of the message.

        The size counts from the start of the first fragment. Raises
        :class:`TruncatedError` when more data is needed and
        :class:`LenParseError` when the end of the message cannot be found.
        """
        wip = self._wip
        if wip is None:
            return self._position
        if wip is _Step.LIMIT_EXCEEDED:
            raise LenParseError()
        self._wip = None
        self._chunk = memoryview(fragment).cast("B")
        self._offset = 0
        try:
            self._resume(wip)
            self._drain()
        except _Incomplete:
            if self._wip is _Step.LIMIT_EXCEEDED:
                raise LenParseError() from None
            for seq in self._open:
                self._set_max_position(seq.item_start + seq.items_left)
            raise TruncatedError(self._max_position) from None
        finally:
            self._chunk = _EMPTY
        return self._position

    def _resume(self, wip) -> None:
        if wip is _Step.NEXT_MARKER:
            self._read_item()
        elif isinstance(wip, _Data):
            self._skip_data(wip.bytes_left)
            self._finish_item()
        else:
            self._continue_len(wip)

    def _drain(self) -> None:
        while self._open:
            seq = self._open[-1]
            if not seq.items_left:
                self._open.pop()
                self._finish_item()
                continue
            seq.item_start = self._position
            self._read_item()

    def _finish_item(self) -> None:
        if self._open:
            self._open[-1].items_left -= 1

    def _open_sequence(self, items: int) -> None:
        if len(self._open) + 1 > self._max_depth:
            self._fail(_Step.LIMIT_EXCEEDED)
        self._open.append(_Seq(items, self._position))

    def _read_item(self) -> None:
        marker = self._read_marker()
        kind = marker.kind
        if kind in _SINGLE_BYTE:
            self._finish_item()
        elif kind is MarkerKind.FIX_MAP:
            self._open_sequence(marker.value * 2)
        elif kind is MarkerKind.FIX_ARRAY:
            self._open_sequence(marker.value)
        elif kind is MarkerKind.FIX_STR:
            self._skip_data(marker.value)
            self._finish_item()
        elif kind in _LEN_SIZES:
            self._continue_len(_MarkerLen(kind))
        else:
            self._skip_data(_FIXED_SIZES[kind])
            self._finish_item()

    def _continue_len(self, wip: _MarkerLen) -> None:
        size = wip.size
        wip.buf += self._take(size - len(wip.buf))
        if len(wip.buf) < size:
            self._fail(wip)
        length = int.from_bytes(wip.buf, "big")
        if length >= self._max_len:
            self._fail(_Step.LIMIT_EXCEEDED)
        kind = wip.kind
        if kind in _BLOB_KINDS:
            self._skip_data(length)
            self._finish_item()
        elif kind in _EXT_KINDS:
            self._skip_data(length + 1)
            self._finish_item()
        elif kind in _ARRAY_KINDS:
            self._open_sequence(length)
        else:
            items = length * 2
            if items >= self._max_len:
                self._fail(_Step.LIMIT_EXCEEDED)
            self._open_sequence(items)

    def _skip_data(self, wanted: int) -> None:
        left = wanted - len(self._take(wanted))
        if left:
            self._fail(_Data(left))

    def _read_marker(self) -> Marker:
        if self._offset >= len(self._chunk):
            self._fail(_Step.NEXT_MARKER)
        byte = self._chunk[self._offset]
        self._offset += 1
        self._position += 1
        return Marker.from_byte(byte)

    def _take(self, wanted: int) -> memoryview:
        end = min(len(self._chunk), self._offset + wanted)
        taken = self._chunk[self._offset : end]
        self._offset = end
        self._position += len(taken)
        return taken

    def _set_max_position(self, position: int) -> None:
        self._max_position = max(self._max_position, position)

    def _fail(self, wip) -> None:
        self._wip = wip
        if wip is _Step.NEXT_MARKER:
            pos = self._position + 1
        elif isinstance(wip, _Data):
            pos = self._position + wip.bytes_left
        elif isinstance(wip, _MarkerLen):
            pos = self._position + (wip.size - len(wip.buf))
        else:
            pos = 0
        self._set_max_position(pos)
        raise _Incomplete