"""
Tests for the little-endian reader.
"""

import io
import math
import struct
import threading

import pytest

from conftest import FailingStream, PipeStream
from endianio.exceptions import BoundsViolationError, InsufficientDataError, InvalidArgumentError
from endianio.io.reader import LittleEndianReader
from endianio.io.special import ConstantSource


def test_read_byte(reader_for) -> None:
    assert reader_for(b'\xff').read_byte() == -1
    assert reader_for(b'\x7f').read_byte() == 127


def test_read_unsigned_byte(reader_for) -> None:
    assert reader_for(b'\xff').read_unsigned_byte() == 255


def test_read_boolean(reader_for) -> None:
    reader = reader_for(b'\x00\x01\x02')
    assert reader.read_boolean() is False
    assert reader.read_boolean() is True
    assert reader.read_boolean() is True


def test_read_char(reader_for) -> None:
    """The second byte on the wire is the most significant."""
    assert reader_for(b'\xaa\xbb').read_char() == '\ubbaa'


def test_read_short(reader_for) -> None:
    assert reader_for(b'\xaa\xbb').read_short() == 0xBBAA - 0x10000
    assert reader_for(b'\x01\x00').read_short() == 1


def test_read_unsigned_short(reader_for) -> None:
    assert reader_for(b'\xff\xff').read_unsigned_short() == 0xFFFF


def test_read_int(reader_for) -> None:
    assert reader_for(b'\x78\x56\x34\x12').read_int() == 0x12345678
    assert reader_for(b'\xfe\xff\xff\xff').read_int() == -2


def test_read_long(reader_for) -> None:
    data = b'\xef\xcd\xab\x90\x78\x56\x34\x12'
    assert reader_for(data).read_long() == 0x1234567890ABCDEF


def test_read_float(reader_for) -> None:
    assert reader_for(struct.pack('<f', 1.5)).read_float() == 1.5
    value = reader_for(struct.pack('<f', math.pi)).read_float()
    assert value == pytest.approx(math.pi, abs=1e-6)


def test_read_double(reader_for) -> None:
    assert reader_for(struct.pack('<d', math.e)).read_double() == math.e


def test_read_double_keeps_nan_payload(reader_for) -> None:
    reader = reader_for(struct.pack('<Q', 0x7FF8000000000ABC))
    value = reader.read_double()

    assert math.isnan(value)
    assert struct.pack('<d', value) == struct.pack('<Q', 0x7FF8000000000ABC)


def test_read_int_from_empty_source(reader_for) -> None:
    """An empty source reports 4 expected bytes and 0 actual bytes."""
    with pytest.raises(InsufficientDataError) as exc_info:
        reader_for(b'').read_int()

    assert exc_info.value.expected == 4
    assert exc_info.value.actual == 0


def test_short_fill_clears_scratch(reader_for) -> None:
    reader = reader_for(b'\x01\x02\x03')

    with pytest.raises(InsufficientDataError) as exc_info:
        reader.read_int()

    assert exc_info.value.expected == 4
    assert exc_info.value.actual == 3
    assert reader._scratch == bytearray(8)


def test_scratch_cleared_after_success(reader_for) -> None:
    reader = reader_for(b'\xff' * 8)
    reader.read_long()
    assert reader._scratch == bytearray(8)


def test_read_byte_at_end(reader_for) -> None:
    with pytest.raises(InsufficientDataError) as exc_info:
        reader_for(b'').read_byte()

    assert exc_info.value.expected == 1
    assert exc_info.value.actual == 0


def test_read_raw(reader_for) -> None:
    reader = reader_for(b'\x80')
    assert reader.read() == 0x80
    assert reader.read() == -1


def test_trickling_source_still_fills() -> None:
    """Sources handing out one byte per call are read until the value is complete."""
    reader = LittleEndianReader(PipeStream(b'\x78\x56\x34\x12', trickle=True))
    assert reader.read_int() == 0x12345678


def test_io_error_propagates_unchanged() -> None:
    error = OSError('device unplugged')
    reader = LittleEndianReader(FailingStream(error))

    with pytest.raises(OSError) as exc_info:
        reader.read_long()

    assert exc_info.value is error
    assert reader._scratch == bytearray(8)


class TestReadFully:
    """Tests for raw byte copies."""

    def test_whole_buffer(self, reader_for) -> None:
        reader = reader_for(b'abcdef')
        buffer = bytearray(4)
        reader.read_fully(buffer)

        assert buffer == bytearray(b'abcd')
        assert reader.read_unsigned_byte() == ord('e')

    def test_offset_and_length(self, reader_for) -> None:
        buffer = bytearray(b'......')
        reader_for(b'xyz').read_fully(buffer, 2, 3)
        assert buffer == bytearray(b'..xyz.')

    def test_zero_length(self, reader_for) -> None:
        buffer = bytearray(2)
        reader_for(b'').read_fully(buffer, 0, 0)
        assert buffer == bytearray(2)

    def test_not_enough_data(self, reader_for) -> None:
        with pytest.raises(InsufficientDataError) as exc_info:
            reader_for(b'ab').read_fully(bytearray(5))

        assert exc_info.value.expected == 5
        assert exc_info.value.actual == 2

    def test_negative_length(self, reader_for) -> None:
        with pytest.raises(InvalidArgumentError):
            reader_for(b'ab').read_fully(bytearray(5), 0, -1)

    def test_range_outside_buffer(self, reader_for) -> None:
        reader = reader_for(b'abcdef')

        with pytest.raises(BoundsViolationError):
            reader.read_fully(bytearray(4), 2, 3)

        # Nothing was consumed
        assert reader.read() == ord('a')

    def test_empty_range_at_buffer_end(self, reader_for) -> None:
        reader = reader_for(b'ab')
        buffer = bytearray(4)
        reader.read_fully(buffer, 4, 0)
        reader.read_fully(buffer, 4)

        assert buffer == bytearray(4)
        assert reader.read() == ord('a')

    def test_empty_range_past_buffer_end(self, reader_for) -> None:
        with pytest.raises(BoundsViolationError):
            reader_for(b'ab').read_fully(bytearray(4), 5, 0)


class TestSkipBytes:
    """Tests for skipping."""

    def test_skip_zero_is_idempotent(self) -> None:
        stream = io.BytesIO(b'\x01\x02')
        reader = LittleEndianReader(stream)

        for _ in range(5):
            assert reader.skip_bytes(0) == 0

        assert stream.tell() == 0
        assert reader.read_byte() == 1

    def test_skip_within_data(self, reader_for) -> None:
        reader = reader_for(b'\x01\x02\x03\x04')
        assert reader.skip_bytes(3) == 3
        assert reader.read_byte() == 4

    def test_skip_past_end(self, reader_for) -> None:
        reader = reader_for(b'\x01\x02')
        assert reader.skip_bytes(10) == 2
        assert reader.read() == -1

    def test_skip_non_seekable(self) -> None:
        reader = LittleEndianReader(PipeStream(b'\x01\x02\x03', trickle=True))
        assert reader.skip_bytes(2) == 2
        assert reader.read_byte() == 3
        assert reader.skip_bytes(4) == 0

    def test_skip_negative(self, reader_for) -> None:
        with pytest.raises(InvalidArgumentError):
            reader_for(b'\x01').skip_bytes(-1)


def test_read_utf(reader_for) -> None:
    reader = reader_for(b'\x00\x05hello\x00\x02\xc0\x80')
    assert reader.read_utf() == 'hello'
    assert reader.read_utf() == '\x00'


def test_read_utf_truncated(reader_for) -> None:
    with pytest.raises(InsufficientDataError) as exc_info:
        reader_for(b'\x00\x05he').read_utf()

    assert exc_info.value.expected == 5
    assert exc_info.value.actual == 2


def test_reader_over_byte_source() -> None:
    reader = LittleEndianReader(ConstantSource(0x01))
    assert reader.read_int() == 0x01010101
    assert reader.read_short() == 0x0101


def test_close_leaves_stream_open() -> None:
    stream = io.BytesIO(b'\x01')

    with LittleEndianReader(stream) as reader:
        reader.read_byte()

    assert not stream.closed


def test_concurrent_reads_never_mix_values() -> None:
    """Threads sharing one reader each get whole values."""
    values = list(range(0x01010101, 0x01010101 + 4000))
    data = b''.join(struct.pack('<i', v) for v in values)
    reader = LittleEndianReader(io.BytesIO(data))
    results: list[int] = []
    lock = threading.Lock()

    def work() -> None:
        local = [reader.read_int() for _ in range(1000)]
        with lock:
            results.extend(local)

    threads = [threading.Thread(target=work) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(results) == values
