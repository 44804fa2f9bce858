import io

import pytest

from rmpack.decode_ext import (
    ExtMeta,
    read_ext_meta,
    read_fixext1,
    read_fixext2,
    read_fixext4,
    read_fixext8,
    read_fixext16,
)
from rmpack.errors import InvalidDataReadError, InvalidMarkerReadError, TypeMismatchError
from rmpack.marker import MarkerKind
from rmpack.reader import Bytes


def test_fixext1():
    assert read_fixext1(bytes([0xD4, 0x2A, 0xFF])) == (42, 255)


def test_fixext2():
    assert read_fixext2(bytes([0xD5, 0x01, 0xAA, 0xBB])) == (1, b"\xaa\xbb")


@pytest.mark.parametrize(
    "reader, marker, size",
    [
        (read_fixext4, 0xD6, 4),
        (read_fixext8, 0xD7, 8),
        (read_fixext16, 0xD8, 16),
    ],
)
def test_fixext_round_trip_payload(reader, marker, size):
    payload = bytes(range(1, size + 1))
    typeid, data = reader(bytes([marker, 0x05]) + payload)
    assert typeid == 5
    assert data == payload


def test_negative_type_tag():
    typeid, data = read_fixext2(bytes([0xD5, 0xFF, 0x00, 0x01]))
    assert typeid == -1
    assert data == b"\x00\x01"


def test_fixext_type_mismatch():
    with pytest.raises(TypeMismatchError) as info:
        read_fixext4(bytes([0xD5, 0x01, 0x00, 0x00]))
    assert info.value.marker.kind is MarkerKind.FIX_EXT2


def test_fixext_truncated_payload():
    with pytest.raises(InvalidDataReadError):
        read_fixext8(bytes([0xD7, 0x01, 0x00, 0x00]))


def test_fixext_empty_input():
    with pytest.raises(InvalidMarkerReadError):
        read_fixext1(b"")


@pytest.mark.parametrize(
    "marker, size",
    [(0xD4, 1), (0xD5, 2), (0xD6, 4), (0xD7, 8), (0xD8, 16)],
)
def test_ext_meta_fixed(marker, size):
    assert read_ext_meta(bytes([marker, 0x07])) == ExtMeta(7, size)


def test_ext_meta_ext8():
    assert read_ext_meta(bytes([0xC7, 0x03, 0x05])) == ExtMeta(5, 3)


def test_ext_meta_ext16():
    assert read_ext_meta(bytes([0xC8, 0x01, 0x00, 0x02])) == ExtMeta(2, 256)


def test_ext_meta_ext32():
    assert read_ext_meta(bytes([0xC9, 0x00, 0x01, 0x00, 0x00, 0x09])) == ExtMeta(9, 65536)


def test_ext_meta_leaves_payload_unread():
    rd = Bytes(bytes([0xC7, 0x02, 0x01, 0xAB, 0xCD]))
    meta = read_ext_meta(rd)
    assert meta == ExtMeta(1, 2)
    assert rd.read_exact(meta.size) == b"\xab\xcd"


def test_ext_meta_type_mismatch():
    with pytest.raises(TypeMismatchError) as info:
        read_ext_meta(bytes([0xC4, 0x01, 0x00]))
    assert info.value.marker.kind is MarkerKind.BIN8


def test_ext_meta_missing_type_tag():
    with pytest.raises(InvalidDataReadError):
        read_ext_meta(bytes([0xC7, 0x03]))


def test_fixext_from_stream():
    stream = io.BytesIO(bytes([0xD4, 0x03, 0x09, 0xD4, 0x04, 0x08]))
    assert read_fixext1(stream) == (3, 9)
    assert read_fixext1(stream) == (4, 8)