"""Little-endian typed reader over a byte source."""

from __future__ import annotations

import threading
from typing import BinaryIO

from endianio.arrays import check_array, memset
from endianio.bits import (
    int_bits_to_float,
    long_bits_to_double,
    make_char,
    make_int,
    make_long,
    make_short,
    unsigned_byte,
    unsigned_short,
)
from endianio.const import NUM_OCTETS_IN_CHAR, NUM_OCTETS_IN_INT, NUM_OCTETS_IN_LONG, NUM_OCTETS_IN_SHORT, SCRATCH_SIZE
from endianio.exceptions import InsufficientDataError, InvalidArgumentError
from endianio.io.interfaces import ByteSource
from endianio.io.streams import as_data_source, fill


class LittleEndianReader:
    """Reads primitive values stored least significant byte first.

    Multi-byte values are gathered in a private 8-byte scratch buffer that is
    zeroed after every read, whether it succeeded or not. Multi-byte reads
    hold the reader's lock, so one reader never interleaves two assemblies.

    The source is borrowed; close() hands the decision to the source.
    """

    def __init__(self, source: ByteSource | BinaryIO) -> None:
        self._source = as_data_source(source)
        self._scratch = bytearray(SCRATCH_SIZE)
        self._lock = threading.RLock()

    @property
    def source(self) -> ByteSource:
        """The underlying byte source."""
        return self._source

    def _fill_scratch(self, count: int) -> None:
        with memoryview(self._scratch) as view:
            got = fill(self._source, view[:count])
        if got != count:
            raise InsufficientDataError(count, got)

    def _clear_scratch(self) -> None:
        memset(self._scratch, 0)

    def read(self) -> int:
        """Read one raw byte as 0 .. 255, or -1 at end of data."""
        return self._source.read_octet()

    def read_boolean(self) -> bool:
        """Read a boolean (1 byte, any non-zero value is true)."""
        return self.read_unsigned_byte() != 0

    def read_byte(self) -> int:
        """Read a signed 8-bit integer."""
        octet = self._source.read_octet()
        if octet < 0:
            raise InsufficientDataError(1, 0)
        return octet - 0x100 if octet >= 0x80 else octet

    def read_unsigned_byte(self) -> int:
        """Read an unsigned 8-bit integer."""
        return unsigned_byte(self.read_byte())

    def read_char(self) -> str:
        """Read a UTF-16 code unit (2 bytes)."""
        with self._lock:
            try:
                self._fill_scratch(NUM_OCTETS_IN_CHAR)
                return make_char(self._scratch[1], self._scratch[0])
            finally:
                self._clear_scratch()

    def read_short(self) -> int:
        """Read a signed 16-bit integer."""
        with self._lock:
            try:
                self._fill_scratch(NUM_OCTETS_IN_SHORT)
                return make_short(self._scratch[1], self._scratch[0])
            finally:
                self._clear_scratch()

    def read_unsigned_short(self) -> int:
        """Read an unsigned 16-bit integer."""
        return unsigned_short(self.read_short())

    def read_int(self) -> int:
        """Read a signed 32-bit integer."""
        with self._lock:
            try:
                self._fill_scratch(NUM_OCTETS_IN_INT)
                s = self._scratch
                return make_int(s[3], s[2], s[1], s[0])
            finally:
                self._clear_scratch()

    def read_long(self) -> int:
        """Read a signed 64-bit integer."""
        with self._lock:
            try:
                self._fill_scratch(NUM_OCTETS_IN_LONG)
                s = self._scratch
                return make_long(s[7], s[6], s[5], s[4], s[3], s[2], s[1], s[0])
            finally:
                self._clear_scratch()

    def read_float(self) -> float:
        """Read a 32-bit float from its raw bit pattern.

        A signaling NaN may be returned quieted, see int_bits_to_float.
        """
        return int_bits_to_float(self.read_int())

    def read_double(self) -> float:
        """Read a 64-bit double from its raw bit pattern."""
        return long_bits_to_double(self.read_long())

    def read_fully(self, buffer: bytearray | memoryview, offset: int = 0, length: int | None = None) -> None:
        """Copy exactly length bytes into buffer[offset:offset + length], no byte-order handling.

        length defaults to the rest of the buffer after offset. An empty range
        may start at len(buffer).

        Raises:
            InvalidArgumentError: if length is negative.
            BoundsViolationError: if the range does not fit in buffer.
            InsufficientDataError: if the source runs out first.
        """
        if length is None:
            length = len(buffer) - offset
        if length < 0:
            raise InvalidArgumentError(f'Negative length {length}')
        if length == 0 and buffer is not None and 0 <= offset <= len(buffer):
            return
        check_array(buffer, offset, length)

        with self._lock:
            with memoryview(buffer) as view:
                got = fill(self._source, view[offset : offset + length])
        if got != length:
            raise InsufficientDataError(length, got)

    def read_utf(self) -> str:
        """Read a length-prefixed modified UTF-8 string, decoded by the source."""
        with self._lock:
            return self._source.read_utf()

    def skip_bytes(self, n: int) -> int:
        """Skip up to n bytes, returning how many were actually skipped."""
        if n < 0:
            raise InvalidArgumentError(f'Negative skip count {n}')
        if n == 0:
            return 0
        with self._lock:
            return self._source.skip(n)

    def close(self) -> None:
        self._source.close()

    def __enter__(self) -> LittleEndianReader:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
