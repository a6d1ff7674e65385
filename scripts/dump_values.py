#!/usr/bin/env python3
"""
Dump little-endian values from a binary file.

Usage:
    uv run python scripts/dump_values.py FILE FORMAT [--offset N]

Format characters (an optional decimal repeat count may precede each one):
    ?  boolean          b  signed byte        B  unsigned byte
    c  char             h  short              H  unsigned short
    i  int              q  long               f  float
    d  double           u  modified UTF-8     x  skip one byte

Examples:
    # Header of two ints, a double and a string
    uv run python scripts/dump_values.py data.bin 2idu

    # Skip a 16 byte preamble, then read four shorts
    uv run python scripts/dump_values.py data.bin 4h --offset 16
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any

from endianio.exceptions import InvalidArgumentError
from endianio.io.reader import LittleEndianReader
from endianio.log import log, setup_logging


FORMAT_READERS = {
    '?': 'read_boolean',
    'b': 'read_byte',
    'B': 'read_unsigned_byte',
    'c': 'read_char',
    'h': 'read_short',
    'H': 'read_unsigned_short',
    'i': 'read_int',
    'q': 'read_long',
    'f': 'read_float',
    'd': 'read_double',
    'u': 'read_utf',
}
SKIP_CODE = 'x'


def parse_format(fmt: str) -> list[str]:
    """Expand a format string like '2ih' into ['i', 'i', 'h']."""
    codes = []
    count = ''
    for ch in fmt:
        if ch.isdigit():
            count += ch
            continue
        if ch not in FORMAT_READERS and ch != SKIP_CODE:
            raise InvalidArgumentError(f'Unknown format character {ch!r}')
        codes.extend([ch] * int(count or '1'))
        count = ''
    if count:
        raise InvalidArgumentError(f'Repeat count {count} without a format character')
    return codes


def decode_values(reader: LittleEndianReader, fmt: str) -> list[tuple[str, Any]]:
    """Read one value per format code, returning (code, value) pairs. Skipped bytes are not returned."""
    values = []
    for code in parse_format(fmt):
        if code == SKIP_CODE:
            reader.skip_bytes(1)
            continue
        values.append((code, getattr(reader, FORMAT_READERS[code])()))
    return values


def main() -> None:
    parser = argparse.ArgumentParser(description='Dump little-endian values from a binary file')
    parser.add_argument('file', type=Path, help='Binary file to read')
    parser.add_argument('format', help='Value format, e.g. 2idu')
    parser.add_argument('--offset', type=int, default=0, help='Bytes to skip before the first value')
    args = parser.parse_args()

    setup_logging(logging.INFO)

    if not args.file.exists():
        log.error(f'File not found: {args.file}')
        return

    with args.file.open('rb') as f:
        reader = LittleEndianReader(f)
        skipped = reader.skip_bytes(args.offset)
        if skipped != args.offset:
            log.warning(f'Only {skipped} of {args.offset} offset bytes available')

        for index, (code, value) in enumerate(decode_values(reader, args.format)):
            log.info(f'[{index}] {code}: {value!r}')


if __name__ == '__main__':
    main()
