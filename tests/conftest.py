"""
Pytest configuration and shared fixtures.
"""

import io
from typing import Callable

import pytest

from endianio.io.reader import LittleEndianReader
from endianio.io.writer import LittleEndianWriter


class PipeStream(io.RawIOBase):
    """Non-seekable stream over fixed data, optionally handing out one byte per read."""

    def __init__(self, data: bytes, trickle: bool = False) -> None:
        self._data = io.BytesIO(data)
        self._trickle = trickle

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        if self._trickle:
            buffer = memoryview(buffer)[:1]
        return self._data.readinto(buffer)


class FailingStream(io.RawIOBase):
    """Stream whose every read and write fails."""

    def __init__(self, error: OSError) -> None:
        self.error = error

    def readable(self) -> bool:
        return True

    def writable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        raise self.error

    def write(self, data) -> int:
        raise self.error


class TrickleSink(io.RawIOBase):
    """Raw stream that accepts a single byte per write call."""

    def __init__(self) -> None:
        self.data = bytearray()
        self.calls = 0

    def writable(self) -> bool:
        return True

    def write(self, data) -> int:
        self.calls += 1
        self.data += bytes(data[:1])
        return 1


class StalledStream(io.RawIOBase):
    """Non-blocking stream with nothing ready: reads give None, writes give `accepted`."""

    def __init__(self, accepted: int | None = None) -> None:
        self.accepted = accepted

    def readable(self) -> bool:
        return True

    def writable(self) -> bool:
        return True

    def readinto(self, buffer):
        return None

    def write(self, data):
        return self.accepted


@pytest.fixture()
def stream() -> io.BytesIO:
    """Return an empty in-memory binary stream."""
    return io.BytesIO()


@pytest.fixture()
def writer(stream: io.BytesIO) -> LittleEndianWriter:
    """Return a writer over the in-memory stream."""
    return LittleEndianWriter(stream)


@pytest.fixture()
def reader_for() -> Callable[[bytes], LittleEndianReader]:
    """Return a factory building a reader over the given bytes."""

    def make(data: bytes) -> LittleEndianReader:
        return LittleEndianReader(io.BytesIO(data))

    return make
