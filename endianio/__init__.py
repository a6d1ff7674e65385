"""Bit-exact byte-order codec and little-endian binary streams."""

from endianio.exceptions import (
    BoundsViolationError,
    EndianIOError,
    ErrorKind,
    InsufficientDataError,
    InvalidArgumentError,
    StreamStalledError,
    UTFDataFormatError,
)
from endianio.io import LittleEndianReader, LittleEndianWriter

__all__ = [
    'BoundsViolationError',
    'EndianIOError',
    'ErrorKind',
    'InsufficientDataError',
    'InvalidArgumentError',
    'LittleEndianReader',
    'LittleEndianWriter',
    'StreamStalledError',
    'UTFDataFormatError',
]
