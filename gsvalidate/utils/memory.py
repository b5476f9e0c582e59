"""
Memory hygiene for key-derived working buffers.
"""

from typing import Union


def secure_zero(data: Union[bytearray, memoryview]) -> None:
    """
    Overwrite a mutable buffer with zeros in place.

    Args:
        data: Memory to zero (must be mutable)
    """
    if isinstance(data, memoryview) and data.readonly:
        raise TypeError("Cannot zero a read-only memoryview")
    if not isinstance(data, (bytearray, memoryview)):
        raise TypeError("Data must be bytearray or memoryview")

    for i in range(len(data)):
        data[i] = 0
