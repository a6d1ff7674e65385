"""
Tests for the value dump script.
"""

import io
import struct

import pytest

from endianio.exceptions import InvalidArgumentError
from endianio.io.reader import LittleEndianReader
from scripts.dump_values import decode_values, parse_format


def test_parse_format() -> None:
    assert parse_format('2ih') == ['i', 'i', 'h']
    assert parse_format('x10B') == ['x'] + ['B'] * 10
    assert parse_format('') == []


@pytest.mark.parametrize('fmt', ['z', '3', 'i2'])
def test_parse_format_rejects(fmt: str) -> None:
    with pytest.raises(InvalidArgumentError):
        parse_format(fmt)


def test_decode_values() -> None:
    data = struct.pack('<?xhiqd', True, -2, 7, -9, 0.5) + b'\x00\x02hi'
    reader = LittleEndianReader(io.BytesIO(data))

    values = decode_values(reader, '?xhiqdu')

    assert values == [('?', True), ('h', -2), ('i', 7), ('q', -9), ('d', 0.5), ('u', 'hi')]
    assert reader.read() == -1
