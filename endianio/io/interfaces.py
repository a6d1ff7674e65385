"""Byte source and byte sink interfaces consumed by the typed readers and writers."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ByteSource(Protocol):
    """Anything bytes can be pulled from."""

    def read_octet(self) -> int:
        """Read one byte as 0 .. 255, or -1 at end of data."""
        ...

    def readinto(self, buffer: bytearray | memoryview) -> int:
        """Read up to len(buffer) bytes into buffer, returning the count obtained (0 at end of data)."""
        ...

    def skip(self, n: int) -> int:
        """Skip up to n bytes, returning the count actually skipped."""
        ...

    def read_utf(self) -> str:
        """Read a length-prefixed modified UTF-8 string."""
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class ByteSink(Protocol):
    """Anything bytes can be pushed to, with an exact running byte count."""

    @property
    def size(self) -> int:
        """Total bytes written so far."""
        ...

    def write_octet(self, b: int) -> None:
        """Write the low 8 bits of b."""
        ...

    def write(self, data: bytes | bytearray | memoryview) -> None:
        """Write every byte of data."""
        ...

    def write_utf(self, text: str) -> None:
        """Write text as a length-prefixed modified UTF-8 string."""
        ...

    def flush(self) -> None:
        ...

    def close(self) -> None:
        ...
