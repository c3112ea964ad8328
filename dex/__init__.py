"""Constant-product exchange engine."""

__version__ = "0.1.0"

from dex.assets import Coin  # noqa: E402
from dex.exchange import Exchange, get_default_exchange  # noqa: E402
from dex.pools import Pool, PoolRegistry, get_registry, init_registry  # noqa: E402

__all__ = [
    "Coin",
    "Exchange",
    "Pool",
    "PoolRegistry",
    "get_default_exchange",
    "get_registry",
    "init_registry",
    "__version__",
]
