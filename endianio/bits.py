"""
Bit-level conversions between primitive values and bytes.

Python integers are unbounded, so every function here treats its integer
argument the way a narrowing cast would: only the low `width` bits are kept,
in two's complement. Assembled values come back signed for their width:

- short: 16 bits, -2**15 .. 2**15 - 1
- int:   32 bits, -2**31 .. 2**31 - 1
- long:  64 bits, -2**63 .. 2**63 - 1

A char is one UTF-16 code unit. It is returned as a one-character str and
accepted either as such a str or as its integer code.

Plain `make_*`/`break_*` functions are big-endian: the first byte is the most
significant. The `break_*_le` variants put the least significant byte first.
Floating-point conversions go through the raw bit pattern, so NaN payloads
are never canonicalized.
"""

from __future__ import annotations

import math
import struct
from typing import Iterator

from endianio.arrays import check_array
from endianio.const import (
    NUM_OCTETS_IN_CHAR,
    NUM_OCTETS_IN_INT,
    NUM_OCTETS_IN_LONG,
    NUM_OCTETS_IN_SHORT,
)
from endianio.exceptions import InvalidArgumentError


MASK_8 = 0xFF
MASK_16 = 0xFFFF
MASK_32 = 0xFFFFFFFF
MASK_64 = 0xFFFFFFFFFFFFFFFF

# Byte-order formats for the unsigned patterns written by break_*
_BE_FORMATS = {NUM_OCTETS_IN_SHORT: '>H', NUM_OCTETS_IN_INT: '>I', NUM_OCTETS_IN_LONG: '>Q'}
_LE_FORMATS = {NUM_OCTETS_IN_SHORT: '<H', NUM_OCTETS_IN_INT: '<I', NUM_OCTETS_IN_LONG: '<Q'}


def _signed(value: int, bits: int) -> int:
    """Interpret the low `bits` bits of value as a two's complement integer."""
    value &= (1 << bits) - 1
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def char_code(c: str | int) -> int:
    """Return the 16-bit code of a char given as a one-character str or an int."""
    if isinstance(c, str):
        if len(c) != 1:
            raise InvalidArgumentError(f'Expected a single character, got {len(c)} characters')
        code = ord(c)
        if code > MASK_16:
            raise InvalidArgumentError(f'Character U+{code:X} is not a single UTF-16 code unit')
        return code
    return c & MASK_16


# Rotations


def rotate_left_int(i: int, shift: int) -> int:
    """Rotate the 32 bits of i left by shift (0 <= shift < 32, not checked)."""
    v = i & MASK_32
    return _signed((v << shift) | (v >> (32 - shift)), 32)


def rotate_right_int(i: int, shift: int) -> int:
    """Rotate the 32 bits of i right by shift (0 <= shift < 32, not checked)."""
    v = i & MASK_32
    return _signed((v >> shift) | (v << (32 - shift)), 32)


def rotate_left_long(value: int, shift: int) -> int:
    """Rotate the 64 bits of value left by shift (0 <= shift < 64, not checked)."""
    v = value & MASK_64
    return _signed((v << shift) | (v >> (64 - shift)), 64)


def rotate_right_long(value: int, shift: int) -> int:
    """Rotate the 64 bits of value right by shift (0 <= shift < 64, not checked)."""
    v = value & MASK_64
    return _signed((v >> shift) | (v << (64 - shift)), 64)


# Unsigned promotion


def unsigned_byte(b: int) -> int:
    """Promote a byte to its unsigned value, 0 .. 255."""
    return b & MASK_8


def unsigned_short(s: int) -> int:
    """Promote a short to its unsigned value, 0 .. 65535."""
    return s & MASK_16


def unsigned_int(i: int) -> int:
    """Promote an int to its unsigned value, 0 .. 2**32 - 1."""
    return i & MASK_32


# Raw bit reinterpretation


def _pack_float32(f: float) -> bytes:
    try:
        return struct.pack('>f', f)
    except OverflowError:
        # Out of float32 range rounds to infinity, as a C cast does
        return struct.pack('>f', math.copysign(math.inf, f))


def float_to_raw_int_bits(f: float) -> int:
    """Return the IEEE-754 single precision bit pattern of f as a signed int."""
    return struct.unpack('>i', _pack_float32(f))[0]


def int_bits_to_float(i: int) -> float:
    """Return the float whose single precision bit pattern is the low 32 bits of i.

    Python floats are doubles, so the value is widened on the way. Quiet NaN
    payloads survive, but a signaling NaN (quiet bit 0x00400000 clear) may
    come back with the quiet bit set, e.g. 0x7F800001 as 0x7FC00001.
    """
    return struct.unpack('>f', struct.pack('>I', i & MASK_32))[0]


def double_to_raw_long_bits(d: float) -> int:
    """Return the IEEE-754 double precision bit pattern of d as a signed long."""
    return struct.unpack('>q', struct.pack('>d', d))[0]


def long_bits_to_double(value: int) -> float:
    """Return the float whose double precision bit pattern is the low 64 bits of value."""
    return struct.unpack('>d', struct.pack('>Q', value & MASK_64))[0]


# Assembly (big-endian)


def make_short(b1: int, b2: int) -> int:
    """Assemble a short from two bytes, b1 the highest."""
    return _signed((unsigned_byte(b1) << 8) | unsigned_byte(b2), 16)


def make_char(b1: int, b2: int) -> str:
    """Assemble a char from two bytes, b1 the highest."""
    return chr((unsigned_byte(b1) << 8) | unsigned_byte(b2))


def make_int(b1: int, b2: int, b3: int, b4: int) -> int:
    """Assemble an int from four bytes, b1 the highest."""
    value = (unsigned_byte(b1) << 24) | (unsigned_byte(b2) << 16) | (unsigned_byte(b3) << 8) | unsigned_byte(b4)
    return _signed(value, 32)


def make_long(b1: int, b2: int, b3: int, b4: int, b5: int, b6: int, b7: int, b8: int) -> int:
    """Assemble a long from eight bytes, b1 the highest."""
    value = (
        (unsigned_byte(b1) << 56)
        | (unsigned_byte(b2) << 48)
        | (unsigned_byte(b3) << 40)
        | (unsigned_byte(b4) << 32)
        | (unsigned_byte(b5) << 24)
        | (unsigned_byte(b6) << 16)
        | (unsigned_byte(b7) << 8)
        | unsigned_byte(b8)
    )
    return _signed(value, 64)


def make_float(b1: int, b2: int, b3: int, b4: int) -> float:
    """Assemble a float from the four bytes of its bit pattern, b1 the highest."""
    return int_bits_to_float(make_int(b1, b2, b3, b4))


def make_double(b1: int, b2: int, b3: int, b4: int, b5: int, b6: int, b7: int, b8: int) -> float:
    """Assemble a double from the eight bytes of its bit pattern, b1 the highest."""
    return long_bits_to_double(make_long(b1, b2, b3, b4, b5, b6, b7, b8))


# Disassembly


def _break(pattern: int, width: int, dest: bytearray | memoryview | None, offset: int, formats: dict[int, str]) -> bytearray | memoryview:
    """Write the unsigned width-byte pattern into dest[offset:offset + width].

    A new bytearray of width + offset bytes is allocated when dest is None.
    The range is validated before anything is written, and bytes outside it
    are left untouched.
    """
    if dest is None:
        dest = bytearray(width + max(offset, 0))
    check_array(dest, offset, width)
    struct.pack_into(formats[width], dest, offset, pattern)
    return dest


def break_short(s: int, dest: bytearray | memoryview | None = None, offset: int = 0) -> bytearray | memoryview:
    """Break a short into two bytes, big-endian."""
    return _break(s & MASK_16, NUM_OCTETS_IN_SHORT, dest, offset, _BE_FORMATS)


def break_char(c: str | int, dest: bytearray | memoryview | None = None, offset: int = 0) -> bytearray | memoryview:
    """Break a char into two bytes, big-endian."""
    return _break(char_code(c), NUM_OCTETS_IN_CHAR, dest, offset, _BE_FORMATS)


def break_int(i: int, dest: bytearray | memoryview | None = None, offset: int = 0) -> bytearray | memoryview:
    """Break an int into four bytes, big-endian."""
    return _break(i & MASK_32, NUM_OCTETS_IN_INT, dest, offset, _BE_FORMATS)


def break_long(value: int, dest: bytearray | memoryview | None = None, offset: int = 0) -> bytearray | memoryview:
    """Break a long into eight bytes, big-endian."""
    return _break(value & MASK_64, NUM_OCTETS_IN_LONG, dest, offset, _BE_FORMATS)


def break_float(f: float, dest: bytearray | memoryview | None = None, offset: int = 0) -> bytearray | memoryview:
    """Break the raw bit pattern of a float into four bytes, big-endian."""
    return break_int(float_to_raw_int_bits(f), dest, offset)


def break_double(d: float, dest: bytearray | memoryview | None = None, offset: int = 0) -> bytearray | memoryview:
    """Break the raw bit pattern of a double into eight bytes, big-endian."""
    return break_long(double_to_raw_long_bits(d), dest, offset)


def break_short_le(s: int, dest: bytearray | memoryview | None = None, offset: int = 0) -> bytearray | memoryview:
    """Break a short into two bytes, little-endian."""
    return _break(s & MASK_16, NUM_OCTETS_IN_SHORT, dest, offset, _LE_FORMATS)


def break_char_le(c: str | int, dest: bytearray | memoryview | None = None, offset: int = 0) -> bytearray | memoryview:
    """Break a char into two bytes, little-endian."""
    return _break(char_code(c), NUM_OCTETS_IN_CHAR, dest, offset, _LE_FORMATS)


def break_int_le(i: int, dest: bytearray | memoryview | None = None, offset: int = 0) -> bytearray | memoryview:
    """Break an int into four bytes, little-endian."""
    return _break(i & MASK_32, NUM_OCTETS_IN_INT, dest, offset, _LE_FORMATS)


def break_long_le(value: int, dest: bytearray | memoryview | None = None, offset: int = 0) -> bytearray | memoryview:
    """Break a long into eight bytes, little-endian."""
    return _break(value & MASK_64, NUM_OCTETS_IN_LONG, dest, offset, _LE_FORMATS)


def break_float_le(f: float, dest: bytearray | memoryview | None = None, offset: int = 0) -> bytearray | memoryview:
    """Break the raw bit pattern of a float into four bytes, little-endian."""
    return break_int_le(float_to_raw_int_bits(f), dest, offset)


def break_double_le(d: float, dest: bytearray | memoryview | None = None, offset: int = 0) -> bytearray | memoryview:
    """Break the raw bit pattern of a double into eight bytes, little-endian."""
    return break_long_le(double_to_raw_long_bits(d), dest, offset)


def utf16_units(text: str) -> Iterator[int]:
    """Yield the UTF-16 code units of text, splitting supplementary characters into surrogate pairs."""
    for ch in text:
        code = ord(ch)
        if code > MASK_16:
            code -= 0x10000
            yield 0xD800 | (code >> 10)
            yield 0xDC00 | (code & 0x3FF)
        else:
            yield code
