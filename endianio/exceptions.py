"""
Error taxonomy for the codec and its streams.

Every error raised by this package derives from EndianIOError and also from
the closest built-in exception, so callers may catch either. Failures of the
wrapped source or sink (OSError and friends) are never wrapped: they reach
the caller unchanged. A stream that silently accepts or yields nothing
raises StreamStalledError instead.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    INSUFFICIENT_DATA = 'insufficient_data'
    INVALID_ARGUMENT = 'invalid_argument'
    BOUNDS_VIOLATION = 'bounds_violation'
    UNDERLYING_IO_FAILURE = 'underlying_io_failure'


class EndianIOError(Exception):
    """Base class for all endianio errors."""

    kind: ErrorKind


class InsufficientDataError(EndianIOError, EOFError):
    """Fewer bytes were available than a read required."""

    kind = ErrorKind.INSUFFICIENT_DATA

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f'Expected to read {expected} bytes but read {actual} bytes')


class InvalidArgumentError(EndianIOError, ValueError):
    """An argument was rejected before any side effect took place."""

    kind = ErrorKind.INVALID_ARGUMENT


class UTFDataFormatError(InvalidArgumentError):
    """Bytes are not valid modified UTF-8, or a string is too long to encode."""


class StreamStalledError(EndianIOError, OSError):
    """The wrapped stream accepted or produced nothing without reporting an error.

    Raised for a write that takes 0 bytes and for a non-blocking stream
    that has no data ready (None from read/readinto/write).
    """

    kind = ErrorKind.UNDERLYING_IO_FAILURE


class BoundsViolationError(EndianIOError, IndexError):
    """An offset/length pair does not fit inside the target array."""

    kind = ErrorKind.BOUNDS_VIOLATION

    def __init__(self, message: str, array_len: int, offset: int, length: int) -> None:
        self.array_len = array_len
        self.offset = offset
        self.length = length
        super().__init__(message)
