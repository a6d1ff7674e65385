"""Boundary checks and fills for byte arrays."""

from __future__ import annotations

from endianio.exceptions import BoundsViolationError, InvalidArgumentError


def check_off_len(array_len: int, offset: int, length: int) -> None:
    """Check that [offset, offset + length) lies within an array of array_len items.

    The empty interval on an empty array is accepted. Any other interval must
    start on an existing index.

    Raises:
        BoundsViolationError: if the interval does not fit.
    """
    if array_len == 0 and offset == 0 and length == 0:
        return

    if array_len < 0:
        raise BoundsViolationError(f'No valid interval in an array of length {array_len}', array_len, offset, length)
    if offset < 0 or offset > array_len - 1:
        raise BoundsViolationError(f'Offset {offset} out of range [0, {array_len - 1}]', array_len, offset, length)
    if length < 0:
        raise BoundsViolationError(f'Negative length {length}', array_len, offset, length)
    if offset + length > array_len:
        raise BoundsViolationError(
            f'End {offset + length} is past the array end (length={array_len}, offset={offset}, count={length})',
            array_len,
            offset,
            length,
        )


def check_array(array: bytearray | memoryview | None, offset: int, length: int) -> None:
    """Check that array exists and can hold length items starting at offset."""
    if array is None:
        raise InvalidArgumentError('Array is None')
    check_off_len(len(array), offset, length)


def memset(array: bytearray | memoryview, value: int, offset: int = 0, length: int | None = None) -> None:
    """Fill array[offset:offset + length] with value (the whole array by default)."""
    if length is None:
        length = len(array) - offset
    check_array(array, offset, length)
    array[offset : offset + length] = bytes((value & 0xFF,)) * length
