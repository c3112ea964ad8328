"""Pool record and reserve accounting.

A pool holds the reserves of one canonical asset pair, the outstanding
liquidity supply, the permanently locked bootstrap liquidity, and the
pool's trading fee.

A pool is Unfunded (reserves and supply all zero) until its first deposit
and Funded forever after. Withdrawing every redeemable share leaves the
locked minimum and the reserves backing it in place.

Each mutating operation validates everything it needs before writing any
field, so a raised error leaves the pool exactly as it was. Operations run
under the pool's own lock; distinct pools never share state.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

import structlog

from dex.amm.constant_product import get_amount_in, get_amount_out, quote, validate_fee
from dex.assets import Coin, pair_key, validate_amount
from dex.constants import MAX_POOL_VALUE, MINIMUM_LIQUIDITY, UNSET_FEE
from dex.errors import (
    InsufficientLiquidityBurned,
    InsufficientLiquidityMinted,
    InsufficientReserves,
    InvalidAssetName,
    PoolFull,
    ReserveExceeded,
    SlippageExceeded,
    ZeroAmount,
)
from dex.math import checked_add, mul_div, mul_u128, sqrt

logger = structlog.get_logger()


@dataclass(frozen=True)
class AddLiquidityReport:
    """Amounts actually taken from the depositor and shares minted to them."""

    consumed_a: int
    consumed_b: int
    minted: int


@dataclass
class LiquidityDeposit:
    """Result of a deposit.

    Attributes:
        liquidity: Newly minted liquidity shares
        refund_a: Unused part of the A deposit
        refund_b: Unused part of the B deposit
        report: Consumed amounts and minted shares
    """

    liquidity: Coin
    refund_a: Coin
    refund_b: Coin
    report: AddLiquidityReport


@dataclass(frozen=True)
class PoolSnapshot:
    """Immutable copy of a pool's economic state."""

    asset_a: str
    asset_b: str
    pair: str
    reserve_a: int
    reserve_b: int
    liquidity_supply: int
    locked_minimum_liquidity: int
    fee_numerator: int
    fee_denominator: int
    registry_id: str

    @property
    def is_funded(self) -> bool:
        return self.liquidity_supply > 0

    def get_reserves(self, asset_in: str) -> tuple[int, int]:
        """Get reserves ordered as (reserve_in, reserve_out)."""
        if asset_in == self.asset_a:
            return self.reserve_a, self.reserve_b
        if asset_in == self.asset_b:
            return self.reserve_b, self.reserve_a
        raise InvalidAssetName(f"Asset {asset_in} not in pool {self.pair}")

    def get_asset_out(self, asset_in: str) -> str:
        """Get the output asset for a given input asset."""
        if asset_in == self.asset_a:
            return self.asset_b
        if asset_in == self.asset_b:
            return self.asset_a
        raise InvalidAssetName(f"Asset {asset_in} not in pool {self.pair}")


@dataclass(eq=False)
class Pool:
    """Economic state of one canonical asset pair.

    asset_a must sort before asset_b. The pair key, which is also the asset
    name of the pool's liquidity shares, is derived on construction.
    """

    asset_a: str
    asset_b: str
    registry_id: str = ""
    reserve_a: int = 0
    reserve_b: int = 0
    liquidity_supply: int = 0
    locked_minimum_liquidity: int = 0
    fee_numerator: int = UNSET_FEE[0]
    fee_denominator: int = UNSET_FEE[1]
    pair: str = field(init=False)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def __post_init__(self) -> None:
        self.pair = pair_key(self.asset_a, self.asset_b)
        self._check_invariants()

    def _check_invariants(self) -> None:
        funded = (self.reserve_a > 0, self.reserve_b > 0, self.liquidity_supply > 0)
        if len(set(funded)) != 1:
            raise InsufficientReserves(
                f"Pool {self.pair} must be fully empty or fully funded: "
                f"reserves=({self.reserve_a}, {self.reserve_b}) supply={self.liquidity_supply}"
            )
        if self.liquidity_supply < self.locked_minimum_liquidity:
            raise InsufficientLiquidityBurned(
                f"Supply {self.liquidity_supply} below locked {self.locked_minimum_liquidity}"
            )
        if (self.fee_numerator, self.fee_denominator) != UNSET_FEE:
            validate_fee(self.fee_numerator, self.fee_denominator)

    # --- Read-only views ---

    @property
    def is_funded(self) -> bool:
        with self.lock:
            return self.liquidity_supply > 0

    @property
    def redeemable_supply(self) -> int:
        """Liquidity units that holders can still burn."""
        with self.lock:
            return self.liquidity_supply - self.locked_minimum_liquidity

    def get_reserves(self) -> tuple[int, int]:
        with self.lock:
            return self.reserve_a, self.reserve_b

    def get_fee(self) -> tuple[int, int]:
        with self.lock:
            return self.fee_numerator, self.fee_denominator

    def snapshot(self) -> PoolSnapshot:
        with self.lock:
            return PoolSnapshot(
                asset_a=self.asset_a,
                asset_b=self.asset_b,
                pair=self.pair,
                reserve_a=self.reserve_a,
                reserve_b=self.reserve_b,
                liquidity_supply=self.liquidity_supply,
                locked_minimum_liquidity=self.locked_minimum_liquidity,
                fee_numerator=self.fee_numerator,
                fee_denominator=self.fee_denominator,
                registry_id=self.registry_id,
            )

    # --- Liquidity ---

    def calc_optimal_amounts(
        self,
        desired_a: int,
        min_a: int,
        desired_b: int,
        min_b: int,
    ) -> tuple[int, int]:
        """Largest deposit within the desired amounts that keeps the pool price.

        An Unfunded pool takes the desired amounts as-is, setting the
        initial price. A Funded pool takes all of one side and the matching
        amount of the other; whichever side is over-supplied keeps its
        excess.

        Raises:
            ZeroAmount: If either desired amount is zero
            SlippageExceeded: If the matched amount falls below its minimum
        """
        if desired_a == 0 or desired_b == 0:
            raise ZeroAmount("Deposit amounts must be positive")

        with self.lock:
            if not self.is_funded:
                return desired_a, desired_b

            implied_b = quote(desired_a, self.reserve_a, self.reserve_b)
            if implied_b <= desired_b:
                if implied_b < min_b:
                    raise SlippageExceeded(f"Matched B amount {implied_b} below minimum {min_b}")
                return desired_a, implied_b

            implied_a = quote(desired_b, self.reserve_b, self.reserve_a)
            if implied_a > desired_a:
                raise SlippageExceeded(f"Matched A amount {implied_a} above desired {desired_a}")
            if implied_a < min_a:
                raise SlippageExceeded(f"Matched A amount {implied_a} below minimum {min_a}")
            return implied_a, desired_b

    def _liquidity_to_mint(self, amount_a: int, amount_b: int) -> tuple[int, int]:
        """Return (minted to caller, newly locked) for a deposit of (amount_a, amount_b)."""
        if not self.is_funded:
            initial = sqrt(mul_u128(amount_a, amount_b))
            if initial <= MINIMUM_LIQUIDITY:
                raise InsufficientLiquidityMinted(
                    f"Initial liquidity {initial} must exceed {MINIMUM_LIQUIDITY}"
                )
            return initial - MINIMUM_LIQUIDITY, MINIMUM_LIQUIDITY

        share_a = mul_div(amount_a, self.liquidity_supply, self.reserve_a)
        share_b = mul_div(amount_b, self.liquidity_supply, self.reserve_b)
        minted = min(share_a, share_b)
        if minted == 0:
            raise InsufficientLiquidityMinted("Deposit too small to mint liquidity")
        return minted, 0

    def add_liquidity(self, coin_a: Coin, min_a: int, coin_b: Coin, min_b: int) -> LiquidityDeposit:
        """Deposit both assets and mint liquidity shares.

        The input coins are consumed; whatever part of them the pool does
        not take comes back as refund coins.

        Args:
            coin_a: Deposit of asset_a (its value is the desired amount)
            min_a: Minimum acceptable amount of A to deposit
            coin_b: Deposit of asset_b (its value is the desired amount)
            min_b: Minimum acceptable amount of B to deposit

        Returns:
            LiquidityDeposit with shares, refunds, and the report

        Raises:
            ZeroAmount, SlippageExceeded, InsufficientLiquidityMinted,
            PoolFull, ArithmeticOverflow
        """
        coin_a.require_asset(self.asset_a)
        coin_b.require_asset(self.asset_b)
        validate_amount(min_a, "min_a")
        validate_amount(min_b, "min_b")

        with self.lock:
            bootstrap = not self.is_funded
            amount_a, amount_b = self.calc_optimal_amounts(coin_a.value, min_a, coin_b.value, min_b)
            minted, locked = self._liquidity_to_mint(amount_a, amount_b)

            new_reserve_a = self.reserve_a + amount_a
            new_reserve_b = self.reserve_b + amount_b
            if new_reserve_a > MAX_POOL_VALUE or new_reserve_b > MAX_POOL_VALUE:
                raise PoolFull(
                    f"Reserves ({new_reserve_a}, {new_reserve_b}) exceed {MAX_POOL_VALUE}"
                )
            new_supply = checked_add(self.liquidity_supply, checked_add(minted, locked))

            self.reserve_a += coin_a.split(amount_a).consume()
            self.reserve_b += coin_b.split(amount_b).consume()
            self.liquidity_supply = new_supply
            self.locked_minimum_liquidity += locked

            report = AddLiquidityReport(consumed_a=amount_a, consumed_b=amount_b, minted=minted)
            deposit = LiquidityDeposit(
                liquidity=Coin(self.pair, minted),
                refund_a=_drain(coin_a),
                refund_b=_drain(coin_b),
                report=report,
            )

            logger.info(
                "pool_bootstrapped" if bootstrap else "liquidity_added",
                pair=self.pair,
                consumed_a=amount_a,
                consumed_b=amount_b,
                minted=minted,
                locked=locked,
                reserve_a=self.reserve_a,
                reserve_b=self.reserve_b,
                supply=self.liquidity_supply,
            )
            return deposit

    def remove_liquidity(self, liquidity: Coin) -> tuple[Coin, Coin]:
        """Burn liquidity shares for a proportional slice of both reserves.

        Both outputs are rounded down, so any rounding residue stays in
        the pool.

        Raises:
            ZeroAmount: If the share coin is empty
            InsufficientLiquidityBurned: If it exceeds the redeemable supply
        """
        liquidity.require_asset(self.pair)

        with self.lock:
            amount = liquidity.require_positive("liquidity").value
            if amount > self.redeemable_supply:
                raise InsufficientLiquidityBurned(
                    f"Cannot burn {amount}; redeemable supply is {self.redeemable_supply}"
                )

            out_a = mul_div(self.reserve_a, amount, self.liquidity_supply)
            out_b = mul_div(self.reserve_b, amount, self.liquidity_supply)

            liquidity.consume()
            self.liquidity_supply -= amount
            self.reserve_a -= out_a
            self.reserve_b -= out_b

            logger.info(
                "liquidity_removed",
                pair=self.pair,
                burned=amount,
                out_a=out_a,
                out_b=out_b,
                supply=self.liquidity_supply,
            )
            return Coin(self.asset_a, out_a), Coin(self.asset_b, out_b)

    # --- Swaps ---

    def _check_swap(self, amount_a_in: int, amount_a_out: int, amount_b_in: int, amount_b_out: int) -> None:
        if amount_a_in == 0 and amount_b_in == 0:
            raise ZeroAmount("Swap needs a positive input")
        if amount_a_out == 0 and amount_b_out == 0:
            raise ZeroAmount("Swap needs a positive output")
        if not self.is_funded:
            raise InsufficientReserves(f"Pool {self.pair} has no liquidity")

        joined_a = self.reserve_a + amount_a_in
        joined_b = self.reserve_b + amount_b_in
        if joined_a > MAX_POOL_VALUE or joined_b > MAX_POOL_VALUE:
            raise PoolFull(f"Reserves ({joined_a}, {joined_b}) exceed {MAX_POOL_VALUE}")
        if amount_a_out >= joined_a or amount_b_out >= joined_b:
            raise ReserveExceeded(
                f"Outputs ({amount_a_out}, {amount_b_out}) would drain reserves ({joined_a}, {joined_b})"
            )

    def swap(
        self,
        coin_a_in: Coin,
        amount_a_out: int,
        coin_b_in: Coin,
        amount_b_out: int,
    ) -> tuple[Coin, Coin]:
        """Settle a swap: join the inputs, split out the requested outputs.

        This primitive does not check the outputs against the pricing
        curve. It is for internal callers that priced the trade first
        (swap_exact_in / swap_exact_out); calling it directly with
        arbitrary outputs can settle at any price.

        Returns:
            (coin_a_out, coin_b_out)

        Raises:
            ZeroAmount: If no input or no output is positive
            InsufficientReserves: If the pool is unfunded
            ReserveExceeded: If an output would drain a reserve
            PoolFull: If a reserve would exceed MAX_POOL_VALUE
        """
        coin_a_in.require_asset(self.asset_a)
        coin_b_in.require_asset(self.asset_b)
        validate_amount(amount_a_out, "amount_a_out")
        validate_amount(amount_b_out, "amount_b_out")

        with self.lock:
            self._check_swap(coin_a_in.value, amount_a_out, coin_b_in.value, amount_b_out)

            amount_a_in = coin_a_in.consume()
            amount_b_in = coin_b_in.consume()
            self.reserve_a = self.reserve_a + amount_a_in - amount_a_out
            self.reserve_b = self.reserve_b + amount_b_in - amount_b_out

            logger.info(
                "swap_settled",
                pair=self.pair,
                amount_a_in=amount_a_in,
                amount_a_out=amount_a_out,
                amount_b_in=amount_b_in,
                amount_b_out=amount_b_out,
                reserve_a=self.reserve_a,
                reserve_b=self.reserve_b,
            )
            return Coin(self.asset_a, amount_a_out), Coin(self.asset_b, amount_b_out)

    def _directed(self, a_to_b: bool) -> tuple[int, int]:
        if a_to_b:
            return self.reserve_a, self.reserve_b
        return self.reserve_b, self.reserve_a

    def _settle_directed(self, payment: Coin, amount_out: int, a_to_b: bool) -> Coin:
        if a_to_b:
            out_a, out_b = self.swap(payment, 0, Coin.zero(self.asset_b), amount_out)
            out_a.destroy_zero()
            return out_b
        out_a, out_b = self.swap(Coin.zero(self.asset_a), amount_out, payment, 0)
        out_b.destroy_zero()
        return out_a

    def _check_directed(self, amount_in: int, amount_out: int, a_to_b: bool) -> None:
        if a_to_b:
            self._check_swap(amount_in, 0, 0, amount_out)
        else:
            self._check_swap(0, amount_out, amount_in, 0)

    def swap_exact_in(self, coin_in: Coin, a_to_b: bool, min_amount_out: int) -> Coin:
        """Sell all of coin_in for at least min_amount_out of the other asset.

        Raises:
            SlippageExceeded: If the priced output is below min_amount_out
        """
        coin_in.require_asset(self.asset_a if a_to_b else self.asset_b)
        validate_amount(min_amount_out, "min_amount_out")

        with self.lock:
            reserve_in, reserve_out = self._directed(a_to_b)
            amount_in = coin_in.value
            amount_out = get_amount_out(
                amount_in, reserve_in, reserve_out, self.fee_numerator, self.fee_denominator
            )
            if amount_out < min_amount_out:
                raise SlippageExceeded(f"Output {amount_out} below minimum {min_amount_out}")
            return self._settle_directed(coin_in, amount_out, a_to_b)

    def swap_exact_out(self, coin_in: Coin, a_to_b: bool, amount_out: int) -> tuple[Coin, Coin]:
        """Buy exactly amount_out, paying at most coin_in's value.

        Returns:
            (coin_out, leftover of coin_in)

        Raises:
            SlippageExceeded: If the required input exceeds coin_in's value
        """
        coin_in.require_asset(self.asset_a if a_to_b else self.asset_b)
        validate_amount(amount_out, "amount_out")

        with self.lock:
            reserve_in, reserve_out = self._directed(a_to_b)
            amount_in = get_amount_in(
                amount_out, reserve_in, reserve_out, self.fee_numerator, self.fee_denominator
            )
            if amount_in > coin_in.value:
                raise SlippageExceeded(f"Required input {amount_in} above maximum {coin_in.value}")
            self._check_directed(amount_in, amount_out, a_to_b)

            coin_out = self._settle_directed(coin_in.split(amount_in), amount_out, a_to_b)
            return coin_out, _drain(coin_in)

    # --- Configuration ---

    def set_fee(self, fee_num: int, fee_den: int) -> None:
        """Replace the trading fee.

        Authorization is the caller's concern.

        Raises:
            InvalidFee: If the ratio does not satisfy 0 < fee_num < fee_den
        """
        validate_fee(fee_num, fee_den)
        with self.lock:
            previous = (self.fee_numerator, self.fee_denominator)
            self.fee_numerator = fee_num
            self.fee_denominator = fee_den
        logger.info("fee_updated", pair=self.pair, previous=previous, fee=(fee_num, fee_den))


def _drain(coin: Coin) -> Coin:
    """Move a coin's remaining value into a fresh coin and consume the original."""
    rest = coin.extract_all()
    coin.destroy_zero()
    return rest


__all__ = [
    "AddLiquidityReport",
    "LiquidityDeposit",
    "Pool",
    "PoolSnapshot",
]
