"""Pydantic models for API request bodies."""

from pydantic import BaseModel, Field

from dex.models.types import AccountId, AssetName, Uint64


class CreditRequest(BaseModel):
    """Issue funds to an account."""

    asset: AssetName
    amount: Uint64


class AddLiquidityRequest(BaseModel):
    """Deposit both assets of a pair.

    Amounts are in the order of the path's (asset_x, asset_y).
    """

    account: AccountId
    amount_x: Uint64 = Field(alias="amountX", description="Desired deposit of asset_x.")
    min_x: Uint64 = Field(default=0, alias="minX", description="Least asset_x to deposit.")
    amount_y: Uint64 = Field(alias="amountY", description="Desired deposit of asset_y.")
    min_y: Uint64 = Field(default=0, alias="minY", description="Least asset_y to deposit.")

    model_config = {"populate_by_name": True}


class RemoveLiquidityRequest(BaseModel):
    """Burn liquidity shares held by an account."""

    account: AccountId
    liquidity: Uint64


class SwapExactInRequest(BaseModel):
    """Sell an exact amount of asset_in."""

    account: AccountId
    amount_in: Uint64 = Field(alias="amountIn")
    min_amount_out: Uint64 = Field(default=0, alias="minAmountOut")

    model_config = {"populate_by_name": True}


class SwapExactOutRequest(BaseModel):
    """Buy an exact amount of asset_out."""

    account: AccountId
    amount_out: Uint64 = Field(alias="amountOut")
    max_amount_in: Uint64 = Field(alias="maxAmountIn")

    model_config = {"populate_by_name": True}


class SetFeeRequest(BaseModel):
    """Replace a pool's trading fee."""

    fee_numerator: Uint64 = Field(alias="feeNumerator")
    fee_denominator: Uint64 = Field(alias="feeDenominator")

    model_config = {"populate_by_name": True}
