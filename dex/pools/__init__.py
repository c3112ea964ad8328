"""Pool management package.

Provides Pool (reserve accounting for one pair) and PoolRegistry (the
pair-keyed mapping of all pools).
"""

from .pool import AddLiquidityReport, LiquidityDeposit, Pool, PoolSnapshot
from .registry import PoolRegistry, get_registry, init_registry, reset_registry

__all__ = [
    "AddLiquidityReport",
    "LiquidityDeposit",
    "Pool",
    "PoolSnapshot",
    "PoolRegistry",
    "get_registry",
    "init_registry",
    "reset_registry",
]
