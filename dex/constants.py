"""Protocol constants for the exchange engine.

Centralizes the fixed parameters of pool accounting.
"""

from dex.safe_int import U64_MAX

# Liquidity units permanently locked when a pool is first funded.
# Counted in liquidity_supply but never minted to a caller.
MINIMUM_LIQUIDITY = 1000

# Ceiling for either reserve. Keeps reserve * fee_denominator and the
# proportional-share products well inside the 128-bit accumulator.
MAX_POOL_VALUE = U64_MAX // 10000

# Prefix of the canonical pair key: "LP-<lesser>-<greater>"
LP_PREFIX = "LP"
PAIR_SEPARATOR = "-"

# Fee of a freshly registered pool; swaps are rejected until set_fee
UNSET_FEE = (0, 0)
