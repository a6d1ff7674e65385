"""Modified UTF-8 codec.

Modified UTF-8 differs from standard UTF-8 in two ways:
- U+0000 is written as the two bytes C0 80, so encoded text never holds a zero byte
- characters outside the BMP are written as their UTF-16 surrogate pair,
  each surrogate taking three bytes
"""

from __future__ import annotations

import struct

from endianio.bits import utf16_units
from endianio.exceptions import UTFDataFormatError


def encode_modified_utf8(text: str) -> bytes:
    """Encode text as modified UTF-8 (without the length prefix)."""
    out = bytearray()
    for unit in utf16_units(text):
        if 0 < unit < 0x80:
            out.append(unit)
        elif unit < 0x800:
            out += bytes((0xC0 | (unit >> 6), 0x80 | (unit & 0x3F)))
        else:
            out += bytes((0xE0 | (unit >> 12), 0x80 | ((unit >> 6) & 0x3F), 0x80 | (unit & 0x3F)))
    return bytes(out)


def encoded_length(text: str) -> int:
    """Return the number of bytes encode_modified_utf8 produces for text."""
    length = 0
    for unit in utf16_units(text):
        if 0 < unit < 0x80:
            length += 1
        elif unit < 0x800:
            length += 2
        else:
            length += 3
    return length


def decode_modified_utf8(data: bytes | bytearray | memoryview) -> str:
    """Decode modified UTF-8 bytes (without the length prefix).

    Raises:
        UTFDataFormatError: on a truncated or malformed sequence.
    """
    data = bytes(data)
    units = []
    i = 0
    n = len(data)
    while i < n:
        c = data[i]
        if c < 0x80:
            units.append(c)
            i += 1
        elif c >> 5 == 0b110:
            if i + 1 >= n:
                raise UTFDataFormatError(f'Partial character at end of input (byte {i})')
            c2 = data[i + 1]
            if c2 & 0xC0 != 0x80:
                raise UTFDataFormatError(f'Malformed input around byte {i + 1}')
            units.append(((c & 0x1F) << 6) | (c2 & 0x3F))
            i += 2
        elif c >> 4 == 0b1110:
            if i + 2 >= n:
                raise UTFDataFormatError(f'Partial character at end of input (byte {i})')
            c2 = data[i + 1]
            c3 = data[i + 2]
            if c2 & 0xC0 != 0x80 or c3 & 0xC0 != 0x80:
                raise UTFDataFormatError(f'Malformed input around byte {i + 1}')
            units.append(((c & 0x0F) << 12) | ((c2 & 0x3F) << 6) | (c3 & 0x3F))
            i += 3
        else:
            raise UTFDataFormatError(f'Malformed input around byte {i}')

    # Valid surrogate pairs recombine, lone surrogates pass through
    return struct.pack(f'<{len(units)}H', *units).decode('utf-16-le', 'surrogatepass')
