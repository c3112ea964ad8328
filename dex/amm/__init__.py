"""AMM (Automated Market Maker) pricing."""

from dex.amm.base import AMM, SwapResult
from dex.amm.constant_product import (
    ConstantProduct,
    constant_product,
    get_amount_in,
    get_amount_out,
    quote,
    validate_fee,
)

__all__ = [
    # Base classes
    "AMM",
    "SwapResult",
    # Constant product
    "ConstantProduct",
    "constant_product",
    "get_amount_in",
    "get_amount_out",
    "quote",
    "validate_fee",
]
