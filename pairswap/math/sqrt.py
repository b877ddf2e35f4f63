"""Integer square root.

Used to size the genesis mint (geometric mean of the two deposits) and to
measure sqrt(k) growth for the protocol fee.
"""

from __future__ import annotations

__all__ = ["isqrt"]


def isqrt(y: int) -> int:
    """Return floor(sqrt(y)) for a non-negative integer.

    Babylonian method seeded with y // 2 + 1; the sequence decreases
    monotonically until it reaches the floor root, so the loop stops as soon
    as an iterate fails to shrink.

    Args:
        y: Non-negative integer

    Returns:
        Largest z such that z * z <= y

    Raises:
        ValueError: If y is negative
        TypeError: If y is not an int
    """
    if not isinstance(y, int) or isinstance(y, bool):
        raise TypeError(f"isqrt requires int, got {type(y).__name__}")
    if y < 0:
        raise ValueError(f"isqrt requires non-negative input, got {y}")
    if y > 3:
        z = y
        x = y // 2 + 1
        while x < z:
            z = x
            x = (y // x + x) // 2
        return z
    if y != 0:
        return 1
    return 0
