"""Fixed-width integer math.

Reserves, amounts, and liquidity supply are unsigned 64-bit quantities.
Products of two of them are formed in a 128-bit accumulator and only the
final quotient is narrowed back to 64 bits. Every narrowing is checked:
a value outside the target width raises instead of wrapping.
"""

from __future__ import annotations

from dex.safe_int import U64_MAX, U128_MAX, S, Uint64Overflow

__all__ = [
    "U64_MAX",
    "U128_MAX",
    "checked_add",
    "checked_mul",
    "mul_div",
    "mul_u128",
    "sqrt",
]


def _u64(name: str, x: int) -> int:
    if not S(x).is_u64():
        raise Uint64Overflow(f"{name} is not a u64 value: {x}")
    return x


def checked_add(a: int, b: int) -> int:
    """Add two u64 values, raising if the sum leaves the u64 range."""
    return (S(_u64("a", a)) + S(_u64("b", b))).to_u64()


def checked_mul(a: int, b: int) -> int:
    """Multiply two u64 values, raising if the product leaves the u64 range."""
    return (S(_u64("a", a)) * S(_u64("b", b))).to_u64()


def mul_u128(a: int, b: int) -> int:
    """Widening multiply: the full product of two u64 values as a u128."""
    return (S(_u64("a", a)) * S(_u64("b", b))).to_u128()


def mul_div(a: int, b: int, denom: int) -> int:
    """Compute floor(a * b / denom) without intermediate overflow.

    Args:
        a: First u64 factor
        b: Second u64 factor
        denom: u64 divisor

    Returns:
        The truncated quotient as a u64

    Raises:
        DivisionByZero: If denom is zero
        Uint64Overflow: If an operand or the quotient is outside the u64 range
    """
    product = S(mul_u128(a, b))
    return (product // S(_u64("denom", denom))).to_u64()


def sqrt(x: int) -> int:
    """Integer square root of a u128 value, rounded down.

    Newton's iteration on integers, started from a power of two that is
    guaranteed to be at or above the root, so the sequence decreases
    monotonically until it reaches floor(sqrt(x)).
    """
    x = S(x).to_u128()
    if x < 2:
        return x

    guess = 1 << ((x.bit_length() + 1) // 2)
    while True:
        nxt = (guess + x // guess) // 2
        if nxt >= guess:
            return guess
        guess = nxt
