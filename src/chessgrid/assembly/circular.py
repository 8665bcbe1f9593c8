"""
Index arithmetic on circular sequences, e.g. the corners of a square.
"""

from __future__ import annotations


def add_offset(index: int, offset: int, size: int) -> int:
    """
    Advance index by offset, wrapping into [0, size).

    Args:
        index: Starting index, in [0, size)
        offset: Number of steps, may be negative
        size: Length of the circular sequence

    Returns:
        The wrapped index
    """
    return (index + offset) % size
