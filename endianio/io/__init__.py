"""Little-endian typed streams and their byte source/sink collaborators."""

from endianio.io.interfaces import ByteSink, ByteSource
from endianio.io.reader import LittleEndianReader
from endianio.io.special import ConstantSource, NullSink, RandomSource
from endianio.io.streams import DataSink, DataSource, as_data_sink, as_data_source
from endianio.io.writer import LittleEndianWriter

__all__ = [
    'ByteSink',
    'ByteSource',
    'ConstantSource',
    'DataSink',
    'DataSource',
    'LittleEndianReader',
    'LittleEndianWriter',
    'NullSink',
    'RandomSource',
    'as_data_sink',
    'as_data_source',
]
