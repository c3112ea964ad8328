"""Tests for SafeInt safe arithmetic wrapper."""

import pytest

from dex.errors import ArithmeticOverflow
from dex.safe_int import (
    U64_MAX,
    U128_MAX,
    DivisionByZero,
    S,
    SafeInt,
    SafeIntError,
    Uint64Overflow,
    Uint128Overflow,
    Underflow,
)


class TestSafeIntConstruction:
    """Tests for SafeInt construction."""

    def test_from_int(self):
        """SafeInt can be constructed from int."""
        assert SafeInt(42).value == 42

    def test_from_safeint(self):
        """SafeInt can be constructed from another SafeInt."""
        assert SafeInt(SafeInt(42)).value == 42

    def test_from_negative(self):
        """SafeInt can hold negative values (validated on conversion)."""
        assert SafeInt(-10).value == -10

    def test_from_invalid_type_raises(self):
        """SafeInt rejects non-int types, including bool."""
        with pytest.raises(TypeError):
            SafeInt("42")  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(3.14)  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(True)

    def test_alias_s(self):
        """S is an alias for SafeInt."""
        assert S is SafeInt


class TestSafeIntArithmetic:
    """Tests for checked operators."""

    def test_add_and_mul(self):
        assert (S(3) + 4).value == 7
        assert (4 + S(3)).value == 7
        assert (S(6) * S(7)).value == 42
        assert (6 * S(7)).value == 42

    def test_sub(self):
        assert (S(10) - 3).value == 7
        assert (S(10) - S(10)).value == 0

    def test_sub_underflow_raises(self):
        """Subtraction below zero raises Underflow."""
        with pytest.raises(Underflow):
            S(3) - 4
        with pytest.raises(Underflow):
            3 - S(4)

    def test_floordiv(self):
        assert (S(7) // 2).value == 3

    def test_floordiv_by_zero_raises(self):
        """Division by zero raises DivisionByZero."""
        with pytest.raises(DivisionByZero):
            S(7) // 0

    def test_min(self):
        assert S(5).min(3).value == 3
        assert S(5).min(S(9)).value == 5

    def test_comparisons(self):
        assert S(1) < S(2)
        assert S(2) <= 2
        assert S(3) > 2
        assert S(3) >= S(3)
        assert S(3) == 3
        assert S(3) != S(4)

    def test_conversions(self):
        assert int(S(9)) == 9
        assert not S(0)
        assert [0, 1, 2][S(1)] == 1


class TestSafeIntBounds:
    """Tests for width checks."""

    def test_to_u64_bounds(self):
        assert S(U64_MAX).to_u64() == U64_MAX
        with pytest.raises(Uint64Overflow):
            S(U64_MAX + 1).to_u64()
        with pytest.raises(Uint64Overflow):
            S(-1).to_u64()

    def test_to_u128_bounds(self):
        assert S(U128_MAX).to_u128() == U128_MAX
        with pytest.raises(Uint128Overflow):
            S(U128_MAX + 1).to_u128()

    def test_is_u64(self):
        assert S(0).is_u64()
        assert not S(U64_MAX + 1).is_u64()
        assert not S(-1).is_u64()

    def test_errors_are_arithmetic_overflow(self):
        """Every SafeInt error belongs to the arithmetic-overflow kind."""
        for error in (DivisionByZero, Underflow, Uint64Overflow, Uint128Overflow):
            assert issubclass(error, SafeIntError)
            assert issubclass(error, ArithmeticOverflow)
        assert SafeIntError.kind == "arithmetic-overflow"
