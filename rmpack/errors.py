"""Exceptions raised while reading and writing MessagePack data."""

from __future__ import annotations


class MsgpackError(Exception):
    """Base class for every error raised by this package."""


class InsufficientBytesError(MsgpackError, EOFError):
    """The input ran out before the requested number of bytes was read."""

    def __init__(self, expected: int, actual: int, position: int) -> None:
        self.expected = expected
        self.actual = actual
        self.position = position
        super().__init__(
            f"Expected at least bytes {expected}, but only got {actual} (pos {position})"
        )


class MarkerReadError(MsgpackError):
    """A marker byte could not be read from the input."""

    def __init__(self, error: BaseException | None = None) -> None:
        self.error = error
        super().__init__("failed to read MessagePack marker")


class ValueReadError(MsgpackError):
    """A MessagePack value could not be read."""

    def __init__(self, message: str = "failed to read MessagePack value") -> None:
        super().__init__(message)


class InvalidMarkerReadError(ValueReadError, MarkerReadError):
    """Reading the marker of a value failed."""

    def __init__(self, error: BaseException | None = None) -> None:
        self.error = error
        ValueReadError.__init__(self, "failed to read MessagePack marker")


class InvalidDataReadError(ValueReadError):
    """Reading the data that follows a marker failed."""

    def __init__(self, error: BaseException | None = None) -> None:
        self.error = error
        super().__init__("failed to read MessagePack data")


class TypeMismatchError(ValueReadError):
    """The decoded marker is not of the expected type."""

    def __init__(self, marker) -> None:
        self.marker = marker
        super().__init__("the type decoded isn't match with the expected one")


class OutOfRangeError(ValueReadError):
    """A decoded integer does not fit in the requested range."""

    def __init__(self) -> None:
        super().__init__("out of range integral type conversion attempted")


class DecodeStringError(ValueReadError):
    """A string value could not be decoded."""

    def __init__(self, message: str = "error while decoding string") -> None:
        super().__init__(message)


class BufferSizeTooSmallError(DecodeStringError):
    """The string is longer than the space allowed for it."""

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__()


class InvalidUtf8Error(DecodeStringError):
    """The string data is not valid UTF-8."""

    def __init__(self, data: bytes, reason: UnicodeDecodeError | None = None) -> None:
        self.data = data
        self.reason = reason
        super().__init__()


class ValueWriteError(MsgpackError):
    """A multi-byte MessagePack value could not be written."""

    def __init__(self, error: BaseException | None = None) -> None:
        self.error = error
        super().__init__("error while writing multi-byte MessagePack value")


class InvalidMarkerWriteError(ValueWriteError):
    """Writing the marker of a value failed."""


class InvalidDataWriteError(ValueWriteError):
    """Writing the data that follows a marker failed."""