"""Safe integer wrapper for arithmetic on reserve and share amounts.

This module provides SafeInt, a lightweight wrapper that makes arithmetic
operations safe by default:
- Division by zero raises DivisionByZero
- Subtraction underflow raises Underflow
- u64 / u128 overflow is caught on conversion

Usage pattern:
    from dex.safe_int import S

    def proportional(amount: int, supply: int, reserve: int) -> int:
        # Wrap at entry
        sa, ss, sr = S(amount), S(supply), S(reserve)

        # Natural arithmetic - automatically safe
        result = (sa * ss) // sr  # Raises if sr == 0

        # Unwrap at exit, checking the output range
        return result.to_u64()
"""

from __future__ import annotations

from dex.errors import ArithmeticOverflow

U64_MAX = 2**64 - 1
U128_MAX = 2**128 - 1


class SafeIntError(ArithmeticOverflow):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Division by zero."""

    pass


class Underflow(SafeIntError):
    """Subtraction would produce negative result."""

    pass


class Uint64Overflow(SafeIntError):
    """Value does not fit in u64."""

    pass


class Uint128Overflow(SafeIntError):
    """Value does not fit in u128."""

    pass


class SafeInt:
    """Non-negative integer with checked arithmetic.

    Wraps an integer and provides arithmetic operators that raise
    descriptive errors instead of producing invalid results. Python ints
    never overflow on their own, so width limits are enforced explicitly
    with to_u64() / to_u128() at the points where a fixed-width machine
    value would have been produced.

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
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _extract_value(other))

    def __radd__(self, other: int) -> SafeInt:
        return SafeInt(other + self._value)

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

    def __rsub__(self, other: int) -> SafeInt:
        result = other - self._value
        if result < 0:
            raise Underflow(f"Underflow: {other} - {self._value} = {result}")
        return SafeInt(result)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _extract_value(other))

    def __rmul__(self, other: int) -> SafeInt:
        return SafeInt(other * self._value)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Integer division, truncating toward zero for non-negative operands.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    # --- Conversion ---

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def __index__(self) -> int:
        return self._value

    def min(self, other: SafeInt | int) -> SafeInt:
        """Return minimum of self and other."""
        return SafeInt(min(self._value, _extract_value(other)))

    def to_u64(self) -> int:
        """Convert to int, validating u64 bounds.

        Raises:
            Uint64Overflow: If value is negative or exceeds 2^64-1
        """
        if self._value < 0:
            raise Uint64Overflow(f"Negative value cannot be u64: {self._value}")
        if self._value > U64_MAX:
            raise Uint64Overflow(f"Value exceeds u64 max: {self._value}")
        return self._value

    def to_u128(self) -> int:
        """Convert to int, validating u128 bounds.

        Raises:
            Uint128Overflow: If value is negative or exceeds 2^128-1
        """
        if self._value < 0:
            raise Uint128Overflow(f"Negative value cannot be u128: {self._value}")
        if self._value > U128_MAX:
            raise Uint128Overflow(f"Value exceeds u128 max: {self._value}")
        return self._value

    def is_u64(self) -> bool:
        """Check if value fits in u64 without raising."""
        return 0 <= self._value <= U64_MAX


def _extract_value(x: SafeInt | int) -> int:
    """Extract integer value from SafeInt or int."""
    if isinstance(x, SafeInt):
        return x._value
    return x


# Convenience alias for concise code
S = SafeInt
