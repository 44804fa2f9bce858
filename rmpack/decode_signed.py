"""Reading MessagePack signed integers and floating-point numbers."""

from __future__ import annotations

from .decode import read_marker
from .errors import TypeMismatchError
from .marker import MarkerKind
from .reader import as_reader, read_data


def _read_strict(rd, kind: MarkerKind, fmt: str):
    rd = as_reader(rd)
    marker = read_marker(rd)
    if marker.kind is not kind:
        raise TypeMismatchError(marker)
    return read_data(rd, fmt)


def read_nfix(rd) -> int:
    """Read a negative fixnum (``0xe0`` to ``0xff``), returning ``-32`` to ``-1``."""
    marker = read_marker(rd)
    if marker.kind is not MarkerKind.FIX_NEG:
        raise TypeMismatchError(marker)
    return marker.value


def read_i8(rd) -> int:
    """Read a value stored strictly in the ``i8`` format."""
    return _read_strict(rd, MarkerKind.I8, "i8")


def read_i16(rd) -> int:
    """Read a value stored strictly in the ``i16`` format."""
    return _read_strict(rd, MarkerKind.I16, "i16")


def read_i32(rd) -> int:
    """Read a value stored strictly in the ``i32`` format."""
    return _read_strict(rd, MarkerKind.I32, "i32")


def read_i64(rd) -> int:
    """Read a value stored strictly in the ``i64`` format."""
    return _read_strict(rd, MarkerKind.I64, "i64")


def read_f32(rd) -> float:
    """Read a single-precision float (marker plus 4 bytes)."""
    return _read_strict(rd, MarkerKind.F32, "f32")


def read_f64(rd) -> float:
    """Read a double-precision float (marker plus 8 bytes)."""
    return _read_strict(rd, MarkerKind.F64, "f64")