"""Endless sources and a discarding sink, handy for tests and benchmarks."""

from __future__ import annotations

import random
import threading

from endianio.arrays import memset
from endianio.exceptions import InvalidArgumentError
from endianio.io.streams import BaseSink, BaseSource


class ConstantSource(BaseSource):
    """Source that yields the same byte forever."""

    def __init__(self, constant: int) -> None:
        self._constant = constant & 0xFF

    @property
    def constant(self) -> int:
        return self._constant

    def read_octet(self) -> int:
        return self._constant

    def readinto(self, buffer: bytearray | memoryview) -> int:
        if len(buffer):
            memset(buffer, self._constant)
        return len(buffer)

    def skip(self, n: int) -> int:
        if n < 0:
            raise InvalidArgumentError(f'Negative skip count {n}')
        return n


class RandomSource(BaseSource):
    """Source that yields bytes drawn from a random.Random generator.

    Access to the generator is serialized, so one generator may back several
    sources used from different threads.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._lock = threading.Lock()

    @property
    def rng(self) -> random.Random:
        return self._rng

    def read_octet(self) -> int:
        with self._lock:
            return self._rng.randrange(256)

    def readinto(self, buffer: bytearray | memoryview) -> int:
        with self._lock:
            for i in range(len(buffer)):
                buffer[i] = self._rng.randrange(256)
        return len(buffer)

    def skip(self, n: int) -> int:
        """Skip n bytes, still drawing them so the generator sequence stays aligned."""
        if n < 0:
            raise InvalidArgumentError(f'Negative skip count {n}')
        with self._lock:
            for _ in range(n):
                self._rng.randrange(256)
        return n


class NullSink(BaseSink):
    """Sink that discards everything but still counts it."""

    def _write_raw(self, data: memoryview) -> int:
        return len(data)
