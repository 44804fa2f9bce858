# rmpack

Low-level building blocks for reading and writing MessagePack data. You
choose the format for each value, and `rmpack` writes or reads exactly those
bytes.

`rmpack` needs only the standard library.

## Installation

```
pip install rmpack
```

## Modules

- `rmpack.marker`: `Marker` and `MarkerKind`, which cover the first byte of
  every encoded value (`Marker.from_byte`, `Marker.to_byte`). The module also
  provides `MSGPACK_VERSION`.
- `rmpack.writer`: the sinks `ByteBuf`, `FixedBuffer` and `StreamWriter`, and
  the helpers `as_writer`, `write_marker` and `write_data`.
- `rmpack.encode`: nil, booleans, array, map, string, binary and extension
  headers, strings, binaries and floats.
- `rmpack.encode_int`: unsigned and signed integers, in either a strict form
  or the most compact form.
- `rmpack.reader`: the sources `Bytes` and `StreamReader`, and the helpers
  `as_reader` and `read_data`.
- `rmpack.decode`: markers, nil, booleans, integers of any format
  (`read_int`), lengths, and strict unsigned integers.
- `rmpack.decode_signed`: strict signed integers, negative fixnums and floats.
- `rmpack.decode_str`: strings.
- `rmpack.decode_ext`: extension values and `ExtMeta`.
- `rmpack.est`: `MessageLen`, an incremental message length estimator.
- `rmpack.errors`: the exception hierarchy.

## Writing

Every write function accepts any of these sinks:

- a `ByteBuf`
- a `bytearray`, which is appended to in place
- a `FixedBuffer` or a writable `memoryview`, which is filled from its start
  and raises `OSError` when full
- any binary stream with a `write` method

Each function wraps its argument with `rmpack.writer.as_writer`.

```python
from rmpack.writer import ByteBuf
from rmpack.encode import write_array_len, write_str, write_nil
from rmpack.encode_int import write_uint, write_sint

buf = ByteBuf()
write_array_len(buf, 4)
write_str(buf, "le message")
write_uint(buf, 300)      # the most compact unsigned format (here u16)
write_sint(buf, -18)      # the most compact signed format (here a negative fixnum)
write_nil(buf)
data = buf.to_bytes()
```

Some functions choose the format themselves and return the `Marker` they
wrote: `write_uint`, `write_uint8`, `write_sint`, `write_str_len`,
`write_bin_len`, `write_array_len`, `write_map_len` and `write_ext_meta`. The
strict functions always write the one format they name, for example
`write_u8`, `write_i64` and `write_f32`. A value that does not fit the format
raises `ValueError`.

When the sink fails, the error is raised as `InvalidMarkerWriteError` or
`InvalidDataWriteError`. `write_nil`, `write_bool`, `write_pfix` and
`write_nfix` are the exceptions: they write one byte and let the sink's error
through unchanged.

## Reading

Every read function accepts any of these sources:

- `bytes`, `bytearray` or `memoryview`, which is read from its start
- a `Bytes`, which remembers how far it has been read
- a `StreamReader` or any binary stream with a `read` method

Pass a `Bytes` or a `StreamReader` when you read several values in a row.

```python
from rmpack.reader import Bytes
from rmpack.decode import read_array_len, read_int, read_nil
from rmpack.decode_str import read_str

rd = Bytes(data)
assert read_array_len(rd) == 4
assert read_str(rd, 16) == "le message"
assert read_int(rd, 0, 2**16 - 1) == 300
assert read_int(rd, -128, 127) == -18
read_nil(rd)
```

`read_str_from_slice` decodes one string from the start of a buffer. It
returns the string and the bytes that follow it.

## Errors

Every exception derives from `rmpack.errors.MsgpackError`:

- `TypeMismatchError` is raised when the next value has a different format
  from the one requested. Its `marker` attribute holds the marker that was
  found.
- `InvalidMarkerReadError` and `InvalidDataReadError` are raised when the
  input ends early or the stream fails. The cause is in `error`.
- `OutOfRangeError` is raised when the value read by `read_int` lies outside
  the bounds you gave.
- `BufferSizeTooSmallError` is raised by the string readers when a string is
  longer than the limit or than the data available.
- `InvalidUtf8Error` is raised by the string readers when the data is not
  valid UTF-8.

## Extension types

```python
from rmpack.reader import Bytes
from rmpack.decode_ext import read_ext_meta

meta = read_ext_meta(Bytes(b"\xd4\x2a\xff"))
assert (meta.typeid, meta.size) == (42, 1)
```

`read_fixext1` through `read_fixext16` read a whole fixed-size extension. They
return its type tag and its data. On the writing side, `write_ext_meta`
writes the header and leaves the payload to you.

## Message length estimation

`MessageLen` parses a message that may not be complete yet and reports how
long it is. If the message is truncated, it raises `TruncatedError`. The
error's `length` is the smallest total length the message can have, and it
never overshoots the real length. `LenParseError` is raised when the message
exceeds the limits (`max_depth`, `max_len`) and its end cannot be found.

```python
from rmpack.est import MessageLen, TruncatedError

assert MessageLen.len_of(b"\x92\xa2le\x01extra") == 5

parser = MessageLen()
try:
    parser.incremental_len(b"\x92\xa2")
except TruncatedError as err:
    print("need at least", err.length, "bytes")   # 4
assert parser.incremental_len(b"le\x01") == 5
```

Call `reset()` to start measuring a new message.

## What this package does not do

`rmpack` does not turn whole Python objects, such as dicts or lists, into
MessagePack, and it does not build such objects back from encoded data. It
gives you the primitives: you write and read each header and value yourself.