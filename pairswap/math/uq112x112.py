"""UQ112x112 binary fixed-point ratios.

A reserve is at most 112 bits wide, so a ratio of two reserves fits in 224
bits as an unsigned number with 112 integer and 112 fractional bits. Pools
accumulate these ratios multiplied by elapsed seconds; observers recover a
time-weighted average price from two accumulator snapshots.

All values are stored as integers scaled by 2^112.
"""

from __future__ import annotations

from decimal import Decimal, localcontext
from typing import ClassVar

from pairswap.safe_int import UINT112_MAX, UINT224_MAX, UINT256_MODULUS

__all__ = [
    # Classes
    "UQ112x112",
    # Functions
    "encode",
    "uqdiv",
    # Constants
    "Q112",
    "RESOLUTION",
]

RESOLUTION = 112
Q112 = 1 << RESOLUTION


def encode(y: int) -> int:
    """Encode a uint112 integer as UQ112x112 (y * 2^112).

    Raises:
        OverflowError: If y does not fit in 112 bits
    """
    if not 0 <= y <= UINT112_MAX:
        raise OverflowError(f"UQ112x112.encode requires uint112, got {y}")
    return y * Q112


def uqdiv(x: int, y: int) -> int:
    """Divide a UQ112x112 value by a uint112 integer, rounding down.

    Raises:
        ZeroDivisionError: If y is zero
    """
    if y == 0:
        raise ZeroDivisionError("UQ112x112 division by zero")
    return x // y


class UQ112x112:
    """Unsigned 112.112 fixed-point number stored as int.

    Example: 1.5 is stored as 3 * 2^111.
    """

    ONE: ClassVar[int] = Q112

    __slots__ = ("value",)
    __hash__ = None  # type: ignore[assignment]  # Unhashable since we define __eq__

    def __init__(self, value: int) -> None:
        """Create from raw scaled value."""
        if not 0 <= value <= UINT224_MAX:
            raise OverflowError(f"UQ112x112 value out of range: {value}")
        self.value = value

    @classmethod
    def from_int(cls, y: int) -> UQ112x112:
        """Create from a uint112 integer (scaled by 2^112)."""
        return cls(encode(y))

    @classmethod
    def ratio(cls, numerator: int, denominator: int) -> UQ112x112:
        """numerator / denominator for two uint112 reserves, rounded down.

        This is the per-second price observation a pool accumulates:
        ``ratio(reserve1, reserve0)`` is the price of token0 in token1.
        """
        return cls(uqdiv(encode(numerator), denominator))

    @classmethod
    def average(cls, cumulative_start: int, cumulative_end: int, elapsed: int) -> UQ112x112:
        """Time-weighted average between two accumulator snapshots.

        Accumulators wrap modulo 2^256, so the difference is taken modulo
        2^256 as well; a single wrap between snapshots is harmless.

        Raises:
            ZeroDivisionError: If elapsed is zero
        """
        if elapsed <= 0:
            raise ZeroDivisionError(f"Average over non-positive interval: {elapsed}")
        delta = (cumulative_end - cumulative_start) % UINT256_MODULUS
        return cls(delta // elapsed)

    def mul_decode(self, amount: int) -> int:
        """Multiply by an integer amount and drop the fractional bits.

        ``average_price.mul_decode(amount_in)`` quotes an amount at the
        averaged price.
        """
        return (self.value * amount) >> RESOLUTION

    def decode(self) -> int:
        """Integer part, rounding down."""
        return self.value >> RESOLUTION

    def to_decimal(self, precision: int = 50) -> Decimal:
        """Convert to Decimal for display."""
        with localcontext() as ctx:
            ctx.prec = precision
            return Decimal(self.value) / Decimal(self.ONE)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, UQ112x112):
            return self.value == other.value
        return NotImplemented

    def __lt__(self, other: UQ112x112) -> bool:
        return self.value < other.value

    def __repr__(self) -> str:
        return f"UQ112x112({self.value})"
