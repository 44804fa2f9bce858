import pytest

from rmpack.est import LenError, LenParseError, MessageLen, TruncatedError

COMPLEX = bytes(
    [
        0x94, 0x01, 0x00, 0x93, 0x91, 0x92, 0xa9, 0x31,
        0x32, 0x37, 0x2e, 0x30, 0x2e, 0x30, 0x2e, 0x31,
        0xcd, 0xe6, 0xc2, 0x01, 0x84, 0x00, 0x93, 0xa4,
        0x72, 0x65, 0x61, 0x64, 0x80, 0x82, 0x00, 0x92,
        0xa5, 0x76, 0x61, 0x6c, 0x75, 0x65, 0x80, 0x01,
        0x92, 0xa5, 0x65, 0x72, 0x72, 0x6f, 0x72, 0x80,
        0x01, 0x93, 0xa5, 0x77, 0x72, 0x69, 0x74, 0x65,
        0x80, 0x82, 0x00, 0x92, 0xa5, 0x76, 0x61, 0x6c,
        0x75, 0x65, 0x80, 0x01, 0x92, 0xa5, 0x65, 0x72,
        0x72, 0x6f, 0x72, 0x80, 0x02, 0x93, 0xa6, 0x72,
        0x65, 0x6d, 0x6f, 0x76, 0x65, 0x80, 0x82, 0x00,
        0x92, 0xa5, 0x76, 0x61, 0x6c, 0x75, 0x65, 0x80,
        0x01, 0x92, 0xa5, 0x65, 0x72, 0x72, 0x6f, 0x72,
        0x80, 0x03, 0x93, 0xa4, 0x66, 0x69, 0x6e, 0x64,
        0x80, 0x82, 0x00, 0x92, 0xa5, 0x76, 0x61, 0x6c,
        0x75, 0x65, 0x80, 0x01, 0x92, 0xa5, 0x65, 0x72,
        0x72, 0x6f, 0x72, 0x80, 0x91, 0x93, 0x50, 0x51,
        0x52,
    ]
)

MESSAGES = [
    b"\xc0",
    b"\xc1",
    b"\xc3",
    b"\x7f",
    b"\xff",
    b"\xcd\x01\x2c",
    b"\xca\x7f\x7f\xff\xff",
    b"\xcb\x40\x45\x00\x00\x00\x00\x00\x00",
    b"\xaa\x6c\x65\x20\x6d\x65\x73\x73\x61\x67\x65",
    b"\xc4\x02\xcc\x80",
    b"\x92\xa2\x6c\x65\xa4\x73\x68\x69\x74",
    b"\x82\x00\xa2\x6c\x65\x01\xa4\x73\x68\x69\x74",
    b"\xd4\x01\xff",
    b"\xc7\x02\x05\xaa\xbb",
    b"\xdc\x00\x02\x01\x02",
    b"\xde\x00\x01\x01\x02",
    b"\xd9\x03abc",
    b"\x90",
    b"\x80",
    COMPLEX,
]


def test_complex_message_length():
    assert MessageLen.len_of(COMPLEX) == len(COMPLEX)


def test_trailing_data_is_ignored():
    assert MessageLen.len_of(COMPLEX + b"\xc0\xc0") == len(COMPLEX)


@pytest.mark.parametrize("msg", MESSAGES)
def test_complete_messages(msg):
    assert MessageLen.len_of(msg) == len(msg)
    assert MessageLen.len_of(msg + b"\x01") == len(msg)


@pytest.mark.parametrize("msg", MESSAGES)
def test_prefixes_are_truncated_with_valid_bound(msg):
    for k in range(len(msg)):
        with pytest.raises(TruncatedError) as info:
            MessageLen.len_of(msg[:k])
        assert k < info.value.length <= len(msg)


def test_empty_input_needs_one_byte():
    with pytest.raises(TruncatedError) as info:
        MessageLen.len_of(b"")
    assert info.value.length == 1
    assert isinstance(info.value, LenError)


def test_byte_by_byte_feeding():
    parser = MessageLen()
    for i, byte in enumerate(COMPLEX[:-1]):
        with pytest.raises(TruncatedError) as info:
            parser.incremental_len(bytes([byte]))
        assert i + 1 < info.value.length <= len(COMPLEX)
    assert parser.incremental_len(COMPLEX[-1:]) == len(COMPLEX)


@pytest.mark.parametrize("split", range(len(COMPLEX)))
def test_two_fragments(split):
    parser = MessageLen()
    with pytest.raises(TruncatedError):
        parser.incremental_len(COMPLEX[:split])
    assert parser.incremental_len(COMPLEX[split:] + b"\xc0") == len(COMPLEX)


def test_finished_parser_keeps_answer():
    parser = MessageLen()
    assert parser.incremental_len(b"\xc3") == 1
    assert parser.incremental_len(b"\x92\x01\x02") == 1


def test_reset_starts_new_message():
    parser = MessageLen()
    with pytest.raises(TruncatedError):
        parser.incremental_len(b"\x92\x01")
    parser.reset()
    msg = b"\x92\xa2\x6c\x65\xa4\x73\x68\x69\x74"
    assert parser.incremental_len(msg) == len(msg)


def test_depth_limit():
    parser = MessageLen(max_depth=1)
    with pytest.raises(LenParseError) as info:
        parser.incremental_len(b"\x91\x91\x01")
    assert info.value.length == 0
    with pytest.raises(LenParseError):
        parser.incremental_len(b"\x01")


def test_depth_within_limit():
    assert MessageLen(max_depth=1).incremental_len(b"\x91\x01") == 2


def test_default_depth_limit():
    ok = b"\x91" * 1024 + b"\xc0"
    assert MessageLen().incremental_len(ok) == len(ok)
    with pytest.raises(LenParseError):
        MessageLen().incremental_len(b"\x91" * 1025 + b"\xc0")


def test_deep_nesting_does_not_recurse():
    msg = b"\x91" * 5000 + b"\xc0"
    assert MessageLen(max_depth=6000).incremental_len(msg) == len(msg)


def test_string_length_limit():
    msg = b"\xd9\x03abc"
    with pytest.raises(LenParseError):
        MessageLen(max_len=3).incremental_len(msg)
    assert MessageLen(max_len=4).incremental_len(msg) == len(msg)


def test_map_item_count_limit():
    msg = b"\xde\x00\x02\x01\x02\x03\x04"
    with pytest.raises(LenParseError):
        MessageLen(max_len=4).incremental_len(msg)
    assert MessageLen(max_len=5).incremental_len(msg) == len(msg)


def test_fixmap_is_not_length_limited():
    msg = b"\x81\x01\x02"
    assert MessageLen(max_len=1).incremental_len(msg) == len(msg)


def test_length_header_split_across_fragments():
    msg = b"\xdc\x00\x02\x01\x02"
    parser = MessageLen()
    with pytest.raises(TruncatedError) as info:
        parser.incremental_len(msg[:2])
    assert 2 < info.value.length <= len(msg)
    assert parser.incremental_len(msg[2:]) == len(msg)