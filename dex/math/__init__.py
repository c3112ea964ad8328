"""Mathematical utilities for the exchange.

This package provides the fixed-width integer primitives every price and
share computation routes through:
- mul_div: floor(a * b / denom) with a 128-bit intermediate
- sqrt: exact integer square root used for bootstrap liquidity
"""

from dex.math.full_math import (
    U64_MAX,
    U128_MAX,
    checked_add,
    checked_mul,
    mul_div,
    mul_u128,
    sqrt,
)

__all__ = [
    "U64_MAX",
    "U128_MAX",
    "checked_add",
    "checked_mul",
    "mul_div",
    "mul_u128",
    "sqrt",
]
