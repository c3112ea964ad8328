"""Entry operations.

Exchange is the boundary between callers and the pool core. Callers name
assets in whatever order they like; Exchange sorts the pair, resolves the
pool through the registry, flips sides where the caller's order differs
from the canonical one, and hands back coins in the caller's order.

(A, B) and (B, A) always resolve to the same pool.
"""

from __future__ import annotations

import structlog

from dex.amm.base import SwapResult
from dex.amm.constant_product import constant_product
from dex.assets import Coin, is_canonical, sort_assets, validate_amount
from dex.errors import PoolAlreadyRegistered
from dex.pools.pool import AddLiquidityReport, LiquidityDeposit, Pool, PoolSnapshot
from dex.pools.registry import PoolRegistry, get_registry

logger = structlog.get_logger()


def _flip(deposit: LiquidityDeposit) -> LiquidityDeposit:
    report = deposit.report
    return LiquidityDeposit(
        liquidity=deposit.liquidity,
        refund_a=deposit.refund_b,
        refund_b=deposit.refund_a,
        report=AddLiquidityReport(
            consumed_a=report.consumed_b,
            consumed_b=report.consumed_a,
            minted=report.minted,
        ),
    )


class Exchange:
    """Caller-facing operations over a pool registry.

    Args:
        registry: Registry to operate on. Defaults to the process-wide one.
    """

    def __init__(self, registry: PoolRegistry | None = None) -> None:
        self.registry = registry if registry is not None else get_registry()

    def _pool(self, asset_x: str, asset_y: str) -> Pool:
        return self.registry.get(*sort_assets(asset_x, asset_y))

    # --- Liquidity ---

    def add_liquidity(self, coin_x: Coin, min_x: int, coin_y: Coin, min_y: int) -> LiquidityDeposit:
        """Deposit two assets, registering the pair's pool on first use.

        Refunds and the report are in the caller's (x, y) order.

        Args:
            coin_x: Deposit of the first asset
            min_x: Minimum amount of x the caller accepts to deposit
            coin_y: Deposit of the second asset
            min_y: Minimum amount of y the caller accepts to deposit

        Returns:
            LiquidityDeposit with shares, refunds, and the report
        """
        coin_x.require_positive("deposit_x")
        coin_y.require_positive("deposit_y")
        validate_amount(min_x, "min_x")
        validate_amount(min_y, "min_y")

        canonical = is_canonical(coin_x.asset, coin_y.asset)
        asset_a, asset_b = sort_assets(coin_x.asset, coin_y.asset)

        def deposit(pool: Pool) -> LiquidityDeposit:
            if canonical:
                return pool.add_liquidity(coin_x, min_x, coin_y, min_y)
            return _flip(pool.add_liquidity(coin_y, min_y, coin_x, min_x))

        if not self.registry.has_registered(asset_a, asset_b):
            try:
                return self.registry.register_and_fund(asset_a, asset_b, deposit)
            except PoolAlreadyRegistered:
                logger.debug("registration_race_lost", asset_a=asset_a, asset_b=asset_b)

        return deposit(self.registry.get(asset_a, asset_b))

    def remove_liquidity(self, asset_x: str, asset_y: str, liquidity: Coin) -> tuple[Coin, Coin]:
        """Burn liquidity shares of the (x, y) pool.

        Returns:
            (coin_x, coin_y) in the caller's order
        """
        pool = self._pool(asset_x, asset_y)
        out_a, out_b = pool.remove_liquidity(liquidity)
        if pool.asset_a == asset_x:
            return out_a, out_b
        return out_b, out_a

    # --- Swaps ---

    def swap_exact_in(self, coin_in: Coin, asset_out: str, min_amount_out: int) -> Coin:
        """Sell all of coin_in for at least min_amount_out of asset_out.

        Raises:
            PoolNotRegistered: If the pair has no pool
            SlippageExceeded: If the output would fall below min_amount_out
        """
        pool = self._pool(coin_in.asset, asset_out)
        return pool.swap_exact_in(coin_in, coin_in.asset == pool.asset_a, min_amount_out)

    def swap_exact_out(self, coin_in: Coin, asset_out: str, amount_out: int) -> tuple[Coin, Coin]:
        """Buy exactly amount_out of asset_out, paying at most coin_in's value.

        Returns:
            (coin_out, leftover input)

        Raises:
            PoolNotRegistered: If the pair has no pool
            SlippageExceeded: If the required input exceeds coin_in's value
        """
        pool = self._pool(coin_in.asset, asset_out)
        return pool.swap_exact_out(coin_in, coin_in.asset == pool.asset_a, amount_out)

    # --- Configuration ---

    def set_fee(self, asset_x: str, asset_y: str, fee_num: int, fee_den: int) -> None:
        """Set the trading fee of the (x, y) pool. Does nothing if there is no pool."""
        asset_a, asset_b = sort_assets(asset_x, asset_y)
        if not self.registry.has_registered(asset_a, asset_b):
            logger.debug("set_fee_skipped", asset_a=asset_a, asset_b=asset_b, reason="unregistered")
            return
        self.registry.get(asset_a, asset_b).set_fee(fee_num, fee_den)

    # --- Read-only views ---

    def get_pool(self, asset_x: str, asset_y: str) -> PoolSnapshot:
        """Snapshot of the (x, y) pool."""
        return self._pool(asset_x, asset_y).snapshot()

    def list_pools(self) -> list[PoolSnapshot]:
        """Snapshots of all registered pools."""
        return [pool.snapshot() for pool in self.registry.pools()]

    def quote_exact_in(self, asset_in: str, asset_out: str, amount_in: int) -> SwapResult:
        """Output a swap_exact_in of amount_in would currently return."""
        snapshot = self.get_pool(asset_in, asset_out)
        return constant_product.simulate_swap(snapshot, asset_in, amount_in)

    def quote_exact_out(self, asset_in: str, asset_out: str, amount_out: int) -> SwapResult:
        """Input a swap_exact_out of amount_out would currently require."""
        snapshot = self.get_pool(asset_in, asset_out)
        return constant_product.simulate_swap_exact_output(snapshot, asset_in, amount_out)


def get_default_exchange() -> Exchange:
    """Exchange over the process-wide registry."""
    return Exchange(get_registry())


__all__ = ["Exchange", "get_default_exchange"]
