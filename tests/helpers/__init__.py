"""Test helpers module for shared test utilities.

- constants: Asset names, fee, and standard pool amounts
- factories: Pool factory functions
"""

from tests.helpers.constants import (
    BOOTSTRAP_MINTED,
    BOOTSTRAP_SUPPLY,
    BTC,
    ETH,
    FEE_DEN,
    FEE_NUM,
    RESERVE_A,
    RESERVE_B,
    USDC,
)
from tests.helpers.factories import make_pool, product

__all__ = [
    # Constants
    "BTC",
    "ETH",
    "USDC",
    "FEE_NUM",
    "FEE_DEN",
    "RESERVE_A",
    "RESERVE_B",
    "BOOTSTRAP_MINTED",
    "BOOTSTRAP_SUPPLY",
    # Factories
    "make_pool",
    "product",
]
