"""Byte source and sink adapters over binary file objects."""

from __future__ import annotations

import io
import struct
from abc import ABC, abstractmethod
from typing import BinaryIO

from endianio.const import MAX_UTF_LENGTH, SKIP_CHUNK_SIZE
from endianio.exceptions import InsufficientDataError, InvalidArgumentError, StreamStalledError, UTFDataFormatError
from endianio.io.interfaces import ByteSink, ByteSource
from endianio.io.mutf8 import decode_modified_utf8, encode_modified_utf8
from endianio.log import log


def fill(source: ByteSource, buffer: bytearray | memoryview) -> int:
    """Read from source until buffer is full or the data runs out.

    Returns:
        The number of bytes placed in buffer.
    """
    total = 0
    with memoryview(buffer) as view:
        while total < len(view):
            count = source.readinto(view[total:])
            if not count:
                break
            total += count
    return total


def fill_exactly(source: ByteSource, buffer: bytearray | memoryview) -> None:
    """Fill buffer completely from source, or raise InsufficientDataError."""
    count = fill(source, buffer)
    if count != len(buffer):
        raise InsufficientDataError(len(buffer), count)


class BaseSource(ABC):
    """Common byte source behaviour built on readinto() and skip()."""

    @abstractmethod
    def readinto(self, buffer: bytearray | memoryview) -> int:
        ...

    @abstractmethod
    def skip(self, n: int) -> int:
        ...

    def read_octet(self) -> int:
        octet = bytearray(1)
        if not self.readinto(octet):
            return -1
        return octet[0]

    def read_utf(self) -> str:
        """Read a big-endian unsigned 16-bit byte length, then that many modified UTF-8 bytes."""
        header = bytearray(2)
        fill_exactly(self, header)
        (length,) = struct.unpack('>H', header)
        data = bytearray(length)
        fill_exactly(self, data)
        return decode_modified_utf8(data)

    def close(self) -> None:
        pass

    def __enter__(self) -> BaseSource:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class BaseSink(ABC):
    """Common byte sink behaviour: an exact running count of written bytes."""

    def __init__(self) -> None:
        self._written = 0

    @abstractmethod
    def _write_raw(self, data: memoryview) -> int | None:
        """Write some leading part of data, returning how many bytes were accepted."""
        ...

    @property
    def size(self) -> int:
        """Total bytes written so far."""
        return self._written

    def write(self, data: bytes | bytearray | memoryview) -> None:
        """Write every byte of data, counting only what the stream accepted.

        Raises:
            StreamStalledError: if the stream accepts nothing (0 or None).
        """
        with memoryview(data) as view, view.cast('B') as octets:
            total = len(octets)
            done = 0
            while done < total:
                count = self._write_raw(octets[done:])
                if not count:
                    raise StreamStalledError(f'Stream accepted no bytes after {done} of {total}')
                self._written += count
                done += count

    def write_octet(self, b: int) -> None:
        self.write(bytes((b & 0xFF,)))

    def write_utf(self, text: str) -> None:
        """Write a big-endian unsigned 16-bit byte length, then the modified UTF-8 bytes."""
        encoded = encode_modified_utf8(text)
        if len(encoded) > MAX_UTF_LENGTH:
            raise UTFDataFormatError(f'Encoded string too long: {len(encoded)} bytes (max {MAX_UTF_LENGTH})')
        self.write(struct.pack('>H', len(encoded)) + encoded)

    def flush(self) -> None:
        pass

    def close(self) -> None:
        self.flush()

    def __enter__(self) -> BaseSink:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class DataSource(BaseSource):
    """Byte source over a binary file object.

    The stream is borrowed: close() leaves it open unless close_stream is set.
    """

    def __init__(self, stream: BinaryIO, close_stream: bool = False) -> None:
        self._stream = stream
        self._close_stream = close_stream

    @property
    def stream(self) -> BinaryIO:
        return self._stream

    def readinto(self, buffer: bytearray | memoryview) -> int:
        """Read up to len(buffer) bytes, returning 0 at end of data.

        Raises:
            StreamStalledError: if a non-blocking stream has no data ready.
        """
        readinto = getattr(self._stream, 'readinto', None)
        if readinto is not None:
            count = readinto(buffer)
        else:
            data = self._stream.read(len(buffer))
            count = None if data is None else len(data)
            if count:
                buffer[:count] = data
        if count is None:
            raise StreamStalledError('Non-blocking stream has no data ready')
        return count

    def skip(self, n: int) -> int:
        """Skip up to n bytes; seeks when the stream allows it, reads and discards otherwise."""
        if n < 0:
            raise InvalidArgumentError(f'Negative skip count {n}')
        if n == 0:
            return 0

        if self._seekable():
            current = self._stream.tell()
            end = self._stream.seek(0, io.SEEK_END)
            target = max(current, min(current + n, end))
            self._stream.seek(target)
            skipped = target - current
        else:
            skipped = 0
            chunk = bytearray(min(n, SKIP_CHUNK_SIZE))
            while skipped < n:
                with memoryview(chunk) as view:
                    count = self.readinto(view[: min(n - skipped, len(chunk))])
                if not count:
                    break
                skipped += count

        if skipped < n:
            log.debug(f'Skipped {skipped} of {n} requested bytes, end of data reached')
        return skipped

    def _seekable(self) -> bool:
        seekable = getattr(self._stream, 'seekable', None)
        return bool(seekable and seekable())

    def close(self) -> None:
        if self._close_stream:
            log.debug(f'Closing underlying stream {self._stream!r}')
            self._stream.close()


class DataSink(BaseSink):
    """Byte sink over a binary file object, counting every byte written.

    Raw streams that take only part of a write (unbuffered files, pipes,
    sockets) are written to again until every byte is accepted. The stream
    is borrowed: close() only flushes it unless close_stream is set.
    """

    def __init__(self, stream: BinaryIO, close_stream: bool = False) -> None:
        super().__init__()
        self._stream = stream
        self._close_stream = close_stream

    @property
    def stream(self) -> BinaryIO:
        return self._stream

    def _write_raw(self, data: memoryview) -> int | None:
        return self._stream.write(data)

    def flush(self) -> None:
        self._stream.flush()

    def close(self) -> None:
        self.flush()
        if self._close_stream:
            log.debug(f'Closing underlying stream {self._stream!r}')
            self._stream.close()


def as_data_source(source: ByteSource | BinaryIO) -> ByteSource:
    """Return source unchanged if it already is a byte source, otherwise wrap it in a DataSource."""
    if isinstance(source, ByteSource):
        return source
    return DataSource(source)


def as_data_sink(sink: ByteSink | BinaryIO) -> ByteSink:
    """Return sink unchanged if it already is a byte sink, otherwise wrap it in a DataSink."""
    if isinstance(sink, ByteSink):
        return sink
    return DataSink(sink)
