"""Pydantic models for API responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from dex.amm.base import SwapResult
from dex.pools.pool import PoolSnapshot


class PoolInfo(BaseModel):
    """Current state of one pool."""

    pair: str
    asset_a: str = Field(alias="assetA")
    asset_b: str = Field(alias="assetB")
    reserve_a: int = Field(alias="reserveA")
    reserve_b: int = Field(alias="reserveB")
    liquidity_supply: int = Field(alias="liquiditySupply")
    locked_minimum_liquidity: int = Field(alias="lockedMinimumLiquidity")
    fee_numerator: int = Field(alias="feeNumerator")
    fee_denominator: int = Field(alias="feeDenominator")
    registry_id: str = Field(alias="registryId")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_snapshot(cls, snapshot: PoolSnapshot) -> PoolInfo:
        return cls(
            pair=snapshot.pair,
            asset_a=snapshot.asset_a,
            asset_b=snapshot.asset_b,
            reserve_a=snapshot.reserve_a,
            reserve_b=snapshot.reserve_b,
            liquidity_supply=snapshot.liquidity_supply,
            locked_minimum_liquidity=snapshot.locked_minimum_liquidity,
            fee_numerator=snapshot.fee_numerator,
            fee_denominator=snapshot.fee_denominator,
            registry_id=snapshot.registry_id,
        )


class PoolList(BaseModel):
    """All registered pools."""

    pools: list[PoolInfo]


class AddLiquidityResponse(BaseModel):
    """Amounts taken from the account and shares credited to it."""

    pair: str
    consumed_x: int = Field(alias="consumedX")
    consumed_y: int = Field(alias="consumedY")
    minted: int

    model_config = {"populate_by_name": True}


class RemoveLiquidityResponse(BaseModel):
    """Amounts credited to the account for the burned shares."""

    pair: str
    burned: int
    amount_x: int = Field(alias="amountX")
    amount_y: int = Field(alias="amountY")

    model_config = {"populate_by_name": True}


class SwapResponse(BaseModel):
    """Executed or quoted swap amounts."""

    pair: str
    asset_in: str = Field(alias="assetIn")
    asset_out: str = Field(alias="assetOut")
    amount_in: int = Field(alias="amountIn")
    amount_out: int = Field(alias="amountOut")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_result(cls, result: SwapResult) -> SwapResponse:
        return cls(
            pair=result.pair,
            asset_in=result.asset_in,
            asset_out=result.asset_out,
            amount_in=result.amount_in,
            amount_out=result.amount_out,
        )


class AccountBalances(BaseModel):
    """Non-zero balances of an account."""

    account: str
    balances: dict[str, int]


class ErrorResponse(BaseModel):
    """Body returned for a rejected operation."""

    error: str = Field(description="Error kind, e.g. insufficient-value.")
    code: str = Field(description="Error class name.")
    detail: str


class FeeUpdateResponse(BaseModel):
    """Outcome of a fee update; unregistered pairs are left alone."""

    pair: str
    updated: bool
