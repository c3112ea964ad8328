"""Pydantic models for the exchange API."""

from dex.models.requests import (
    AddLiquidityRequest,
    CreditRequest,
    RemoveLiquidityRequest,
    SetFeeRequest,
    SwapExactInRequest,
    SwapExactOutRequest,
)
from dex.models.responses import (
    AccountBalances,
    AddLiquidityResponse,
    ErrorResponse,
    FeeUpdateResponse,
    PoolInfo,
    PoolList,
    RemoveLiquidityResponse,
    SwapResponse,
)

__all__ = [
    # Requests
    "AddLiquidityRequest",
    "CreditRequest",
    "RemoveLiquidityRequest",
    "SetFeeRequest",
    "SwapExactInRequest",
    "SwapExactOutRequest",
    # Responses
    "AccountBalances",
    "AddLiquidityResponse",
    "ErrorResponse",
    "FeeUpdateResponse",
    "PoolInfo",
    "PoolList",
    "RemoveLiquidityResponse",
    "SwapResponse",
]
