"""Little-endian typed writer over a byte sink."""

from __future__ import annotations

import threading
from typing import BinaryIO, Callable

from endianio.arrays import memset
from endianio.bits import (
    break_char_le,
    break_int_le,
    break_long_le,
    break_short_le,
    double_to_raw_long_bits,
    float_to_raw_int_bits,
    utf16_units,
)
from endianio.const import NUM_OCTETS_IN_CHAR, NUM_OCTETS_IN_INT, NUM_OCTETS_IN_LONG, NUM_OCTETS_IN_SHORT, SCRATCH_SIZE
from endianio.io.interfaces import ByteSink
from endianio.io.streams import as_data_sink


class LittleEndianWriter:
    """Writes primitive values least significant byte first.

    Multi-byte values are laid out in a private 8-byte scratch buffer that is
    zeroed after every write. Each multi-byte write is a critical section on
    the writer's lock.

    The sink is borrowed; close() hands the decision to the sink.
    """

    def __init__(self, sink: ByteSink | BinaryIO) -> None:
        self._sink = as_data_sink(sink)
        self._scratch = bytearray(SCRATCH_SIZE)
        self._lock = threading.RLock()

    @property
    def sink(self) -> ByteSink:
        """The underlying byte sink."""
        return self._sink

    @property
    def size(self) -> int:
        """Exact number of bytes written to the sink so far."""
        return self._sink.size

    def _clear_scratch(self) -> None:
        memset(self._scratch, 0)

    def _write_scratch(self, breaker: Callable, value: int | str, width: int) -> None:
        with self._lock:
            try:
                breaker(value, self._scratch, 0)
                self._sink.write(bytes(self._scratch[:width]))
            finally:
                self._clear_scratch()

    def write(self, data: bytes | bytearray | memoryview) -> None:
        """Write raw bytes, no byte-order handling."""
        self._sink.write(data)

    def write_boolean(self, value: bool) -> None:
        """Write boolean (1 byte)."""
        self._sink.write_octet(1 if value else 0)

    def write_byte(self, value: int) -> None:
        """Write the low 8 bits of value."""
        self._sink.write_octet(value)

    def write_short(self, value: int) -> None:
        """Write the low 16 bits of value."""
        self._write_scratch(break_short_le, value, NUM_OCTETS_IN_SHORT)

    def write_char(self, value: str | int) -> None:
        """Write a UTF-16 code unit (2 bytes)."""
        self._write_scratch(break_char_le, value, NUM_OCTETS_IN_CHAR)

    def write_int(self, value: int) -> None:
        """Write the low 32 bits of value."""
        self._write_scratch(break_int_le, value, NUM_OCTETS_IN_INT)

    def write_long(self, value: int) -> None:
        """Write the low 64 bits of value."""
        self._write_scratch(break_long_le, value, NUM_OCTETS_IN_LONG)

    def write_float(self, value: float) -> None:
        """Write a 32-bit float as its raw bit pattern."""
        self.write_int(float_to_raw_int_bits(value))

    def write_double(self, value: float) -> None:
        """Write a 64-bit double as its raw bit pattern."""
        self.write_long(double_to_raw_long_bits(value))

    def write_bytes(self, text: str) -> None:
        """Write the low byte of each UTF-16 code unit of text.

        Lossy outside U+0000 .. U+00FF; meant for ASCII text.
        """
        self._sink.write(bytes(unit & 0xFF for unit in utf16_units(text)))

    def write_chars(self, text: str) -> None:
        """Write every UTF-16 code unit of text as 2 little-endian bytes."""
        with self._lock:
            for unit in utf16_units(text):
                self.write_char(unit)

    def write_utf(self, text: str) -> None:
        """Write text as a length-prefixed modified UTF-8 string, encoded by the sink."""
        with self._lock:
            self._sink.write_utf(text)

    def flush(self) -> None:
        self._sink.flush()

    def close(self) -> None:
        self._sink.close()

    def __enter__(self) -> LittleEndianWriter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
