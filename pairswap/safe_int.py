"""Checked integers for reserve, balance and share accounting.

Pool arithmetic runs on unbounded Python ints, so nothing stops a negative
share count or a division by an empty reserve from slipping through. SafeInt
turns those into errors at the point they happen:

    sa, sb = S(balance), S(reserve)
    amount = (sa - sb).value          # Underflow if balance < reserve
    shares = (sa * supply // sb)      # DivisionByZero if reserve == 0

Wrapping arithmetic, used only for timestamps and price accumulators, is
spelled out with wrapping_add / wrapping_sub.
"""

from __future__ import annotations

UINT32_MODULUS = 2**32
UINT112_MAX = 2**112 - 1
UINT224_MAX = 2**224 - 1
UINT256_MODULUS = 2**256
UINT256_MAX = UINT256_MODULUS - 1


class SafeIntError(ArithmeticError):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Division by zero."""

    pass


class Underflow(SafeIntError):
    """Subtraction would produce negative result."""

    pass


class Uint256Overflow(SafeIntError):
    """Value does not fit in an unsigned 256-bit word."""

    pass


class SafeInt:
    """Non-wrapping integer for ledger quantities.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        if isinstance(value, SafeInt):
            self._value = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            self._value = value
        else:
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")

    @property
    def value(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    # --- Arithmetic ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _extract_value(other))

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val = _extract_value(other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"Underflow: {self._value} - {other_val} = {result}")
        return SafeInt(result)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _extract_value(other))

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Integer division, rounding down.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    def __truediv__(self, other: object) -> SafeInt:
        raise TypeError("SafeInt does not support true division, use floor division (//)")

    # --- Comparison ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    # --- Named operations ---

    def min(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(min(self._value, _extract_value(other)))

    def saturating_sub(self, other: SafeInt | int) -> SafeInt:
        """Subtract, clamping at zero instead of raising Underflow."""
        return SafeInt(max(0, self._value - _extract_value(other)))

    def wrapping_add(self, other: SafeInt | int, modulus: int = UINT256_MODULUS) -> SafeInt:
        """Add modulo ``modulus`` (2^256 by default), as price accumulators do."""
        return SafeInt((self._value + _extract_value(other)) % modulus)

    def wrapping_sub(self, other: SafeInt | int, modulus: int = UINT32_MODULUS) -> SafeInt:
        """Subtract modulo ``modulus`` (2^32 by default).

        Elapsed time across a timestamp wrap stays positive:
        ``S(5).wrapping_sub(2**32 - 5)`` is 10.
        """
        return SafeInt((self._value - _extract_value(other)) % modulus)

    def to_uint256(self) -> int:
        """Unwrap, requiring the value to fit a ledger amount.

        Raises:
            Uint256Overflow: If value is negative or exceeds 2^256-1
        """
        if self._value < 0:
            raise Uint256Overflow(f"Negative value cannot be uint256: {self._value}")
        if self._value > UINT256_MAX:
            raise Uint256Overflow(f"Value exceeds uint256 max: {self._value}")
        return self._value

    def is_uint112(self) -> bool:
        """True if the value fits the 112-bit reserve width."""
        return 0 <= self._value <= UINT112_MAX


def _extract_value(x: SafeInt | int) -> int:
    if isinstance(x, SafeInt):
        return x._value
    return x


# Convenience alias for concise code
S = SafeInt
