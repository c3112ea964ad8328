"""Constant-product AMM pricing.

The pool keeps reserve_a * reserve_b non-decreasing across swaps. A
rational fee fee_num / fee_den is taken from the input before it reaches
the curve:

    effective_in = amount_in * (fee_den - fee_num)
    amount_out   = effective_in * reserve_out / (reserve_in * fee_den + effective_in)

get_amount_in inverts the formula and adds 1 after the floor division, so
the input it asks for is never short of what the curve requires.

Every intermediate is a u64 value and every division goes through
mul_div; values outside the u64 range raise ArithmeticOverflow rather than
wrapping.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from dex.amm.base import AMM, SwapResult
from dex.errors import InsufficientReserves, InvalidFee, ReserveExceeded, ZeroAmount
from dex.math import checked_add, checked_mul, mul_div

if TYPE_CHECKING:
    from dex.pools.pool import PoolSnapshot

logger = structlog.get_logger()


def validate_fee(fee_num: int, fee_den: int) -> None:
    """Check 0 < fee_num < fee_den.

    Raises:
        InvalidFee: If the ratio is out of range
    """
    if not (0 < fee_num < fee_den):
        raise InvalidFee(f"Fee must satisfy 0 < numerator < denominator, got {fee_num}/{fee_den}")


def get_amount_out(
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
    fee_num: int,
    fee_den: int,
) -> int:
    """Output received for an exact input.

    Args:
        amount_in: Input asset amount
        reserve_in: Reserve of input asset in pool
        reserve_out: Reserve of output asset in pool
        fee_num: Fee numerator
        fee_den: Fee denominator

    Returns:
        Output asset amount, rounded down

    Raises:
        ZeroAmount: If amount_in is zero
        InsufficientReserves: If either reserve is zero
        InvalidFee: If the fee ratio is out of range
        ArithmeticOverflow: If an intermediate leaves the u64 range
    """
    if amount_in == 0:
        raise ZeroAmount("amount_in must be positive")
    if reserve_in == 0 or reserve_out == 0:
        raise InsufficientReserves(f"Reserves must be positive: ({reserve_in}, {reserve_out})")
    validate_fee(fee_num, fee_den)

    effective_in = checked_mul(amount_in, fee_den - fee_num)
    denominator = checked_add(checked_mul(reserve_in, fee_den), effective_in)
    return mul_div(effective_in, reserve_out, denominator)


def get_amount_in(
    amount_out: int,
    reserve_in: int,
    reserve_out: int,
    fee_num: int,
    fee_den: int,
) -> int:
    """Input required for an exact output.

    Formula: amount_in = amount_out * fee_den * reserve_in
                         / ((reserve_out - amount_out) * (fee_den - fee_num)) + 1

    Raises:
        ZeroAmount: If amount_out is zero
        InsufficientReserves: If either reserve is zero
        ReserveExceeded: If amount_out >= reserve_out
        InvalidFee: If the fee ratio is out of range
        ArithmeticOverflow: If an intermediate leaves the u64 range
    """
    if amount_out == 0:
        raise ZeroAmount("amount_out must be positive")
    if reserve_in == 0 or reserve_out == 0:
        raise InsufficientReserves(f"Reserves must be positive: ({reserve_in}, {reserve_out})")
    if amount_out >= reserve_out:
        raise ReserveExceeded(f"Cannot take {amount_out} from reserve {reserve_out}")
    validate_fee(fee_num, fee_den)

    scaled_out = checked_mul(amount_out, fee_den)
    denominator = checked_mul(reserve_out - amount_out, fee_den - fee_num)
    return checked_add(mul_div(scaled_out, reserve_in, denominator), 1)


def quote(amount_a: int, reserve_a: int, reserve_b: int) -> int:
    """Amount of B matching amount_a at the current reserve ratio.

    Used for deposit ratio matching only; no fee is applied.

    Raises:
        ZeroAmount: If amount_a is zero
        InsufficientReserves: If either reserve is zero
    """
    if amount_a == 0:
        raise ZeroAmount("amount_a must be positive")
    if reserve_a == 0 or reserve_b == 0:
        raise InsufficientReserves(f"Reserves must be positive: ({reserve_a}, {reserve_b})")
    return mul_div(amount_a, reserve_b, reserve_a)


class ConstantProduct(AMM):
    """Constant-product pricing bound to a pool's fee configuration."""

    def get_amount_out(
        self,
        amount_in: int,
        reserve_in: int,
        reserve_out: int,
        fee_num: int = 0,
        fee_den: int = 0,
    ) -> int:
        return get_amount_out(amount_in, reserve_in, reserve_out, fee_num, fee_den)

    def get_amount_in(
        self,
        amount_out: int,
        reserve_in: int,
        reserve_out: int,
        fee_num: int = 0,
        fee_den: int = 0,
    ) -> int:
        return get_amount_in(amount_out, reserve_in, reserve_out, fee_num, fee_den)

    def quote(self, amount_a: int, reserve_a: int, reserve_b: int) -> int:
        return quote(amount_a, reserve_a, reserve_b)

    def simulate_swap(self, pool: PoolSnapshot, asset_in: str, amount_in: int) -> SwapResult:
        """Price an exact-input swap against a pool snapshot.

        Args:
            pool: Snapshot of the pool
            asset_in: Asset being sold
            amount_in: Amount to sell

        Returns:
            SwapResult with the guaranteed output
        """
        reserve_in, reserve_out = pool.get_reserves(asset_in)
        amount_out = self.get_amount_out(
            amount_in, reserve_in, reserve_out, pool.fee_numerator, pool.fee_denominator
        )
        return SwapResult(
            amount_in=amount_in,
            amount_out=amount_out,
            pair=pool.pair,
            asset_in=asset_in,
            asset_out=pool.get_asset_out(asset_in),
        )

    def simulate_swap_exact_output(
        self,
        pool: PoolSnapshot,
        asset_in: str,
        amount_out: int,
    ) -> SwapResult:
        """Price an exact-output swap against a pool snapshot.

        Returns:
            SwapResult with the required input and the requested output
        """
        reserve_in, reserve_out = pool.get_reserves(asset_in)
        amount_in = self.get_amount_in(
            amount_out, reserve_in, reserve_out, pool.fee_numerator, pool.fee_denominator
        )
        logger.debug(
            "exact_output_priced",
            pair=pool.pair,
            asset_in=asset_in,
            amount_in=amount_in,
            amount_out=amount_out,
        )
        return SwapResult(
            amount_in=amount_in,
            amount_out=amount_out,
            pair=pool.pair,
            asset_in=asset_in,
            asset_out=pool.get_asset_out(asset_in),
        )


# Singleton instance
constant_product = ConstantProduct()


__all__ = [
    "ConstantProduct",
    "constant_product",
    "get_amount_in",
    "get_amount_out",
    "quote",
    "validate_fee",
]
