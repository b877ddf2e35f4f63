"""Tests for SafeInt safe arithmetic wrapper."""

import pytest

from pairswap.safe_int import (
    UINT112_MAX,
    UINT256_MAX,
    DivisionByZero,
    S,
    SafeInt,
    SafeIntError,
    Uint256Overflow,
    Underflow,
)


class TestSafeIntConstruction:
    """Tests for SafeInt construction."""

    def test_from_int(self):
        """SafeInt can be constructed from int."""
        s = SafeInt(42)
        assert s.value == 42

    def test_from_safeint(self):
        """SafeInt can be constructed from another SafeInt."""
        s2 = SafeInt(SafeInt(42))
        assert s2.value == 42

    def test_from_invalid_type_raises(self):
        """SafeInt rejects invalid types."""
        with pytest.raises(TypeError):
            SafeInt("42")  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(3.14)  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(True)

    def test_alias_s(self):
        """S is an alias for SafeInt."""
        assert S is SafeInt

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(S(1))


class TestSafeIntArithmetic:
    """Tests for SafeInt arithmetic operations."""

    def test_add(self):
        assert (S(10) + S(5)).value == 15
        assert (S(10) + 5).value == 15

    def test_sub_positive_result(self):
        assert (S(10) - S(3)).value == 7
        assert (S(10) - 10).value == 0

    def test_sub_underflow_raises(self):
        """Subtraction underflow raises Underflow."""
        with pytest.raises(Underflow) as exc_info:
            S(5) - S(10)
        assert "5 - 10" in str(exc_info.value)

    def test_mul_large(self):
        """Multiplication handles products wider than 256 bits."""
        result = S(UINT112_MAX) * S(UINT112_MAX) * S(10**6)
        assert result.value == UINT112_MAX * UINT112_MAX * 10**6

    def test_floordiv_rounds_down(self):
        assert (S(10) // S(3)).value == 3
        assert (S(10) // 3).value == 3

    def test_floordiv_by_zero_raises(self):
        with pytest.raises(DivisionByZero) as exc_info:
            S(10) // S(0)
        assert "Division by zero" in str(exc_info.value)

    def test_truediv_raises_typeerror(self):
        """True division raises TypeError to prevent float results."""
        with pytest.raises(TypeError) as exc_info:
            S(10) / S(3)
        assert "floor division" in str(exc_info.value)


class TestSafeIntComparison:
    """Tests for SafeInt comparison operations."""

    def test_eq(self):
        assert S(5) == S(5)
        assert S(5) == 5
        assert S(5) != 6

    def test_ordering(self):
        assert S(5) < S(6)
        assert S(5) <= 5
        assert S(6) > 5
        assert S(6) >= S(6)


class TestSafeIntNamedOps:
    """Tests for SafeInt named operations."""

    def test_min(self):
        assert S(10).min(5).value == 5
        assert S(5).min(S(10)).value == 5

    def test_saturating_sub(self):
        assert S(10).saturating_sub(3).value == 7
        assert S(10).saturating_sub(15).value == 0

    def test_wrapping_sub_defaults_to_uint32(self):
        """Elapsed time across a 32-bit timestamp wrap stays positive."""
        assert S(5).wrapping_sub(2**32 - 5).value == 10
        assert S(100).wrapping_sub(40).value == 60

    def test_wrapping_add_defaults_to_uint256(self):
        assert S(UINT256_MAX).wrapping_add(2).value == 1
        assert S(7).wrapping_add(3).value == 10

    def test_wrapping_custom_modulus(self):
        assert S(3).wrapping_sub(5, modulus=16).value == 14


class TestSafeIntBounds:
    """Tests for uint112/uint256 validation."""

    def test_to_uint256_valid(self):
        assert S(0).to_uint256() == 0
        assert S(UINT256_MAX).to_uint256() == UINT256_MAX

    def test_to_uint256_negative_raises(self):
        with pytest.raises(Uint256Overflow) as exc_info:
            S(-1).to_uint256()
        assert "Negative" in str(exc_info.value)

    def test_to_uint256_overflow_raises(self):
        with pytest.raises(Uint256Overflow) as exc_info:
            S(UINT256_MAX + 1).to_uint256()
        assert "exceeds uint256" in str(exc_info.value)

    def test_is_uint112(self):
        assert S(0).is_uint112() is True
        assert S(UINT112_MAX).is_uint112() is True
        assert S(UINT112_MAX + 1).is_uint112() is False
        assert S(-1).is_uint112() is False


class TestSafeIntExceptionHierarchy:
    """Tests for exception class hierarchy."""

    @pytest.mark.parametrize("error", [DivisionByZero, Underflow, Uint256Overflow])
    def test_errors_are_arithmetic_errors(self, error):
        assert issubclass(error, SafeIntError)
        assert issubclass(error, ArithmeticError)
