"""Exchange error classes.

Every failure raised by the engine derives from ExchangeError and belongs
to exactly one kind:

- invalid-parameter: malformed caller input, never retried
- state-conflict: registration/ordering mismatch, a caller or boundary bug
- insufficient-value: economic rejection, retry with adjusted parameters
- arithmetic-overflow: parameter combination outside the safe u64 range

No operation mutates pool state before raising.
"""

from __future__ import annotations

from typing import ClassVar


class ExchangeError(Exception):
    """Base error for exchange operations."""

    kind: ClassVar[str] = "exchange-error"


# =============================================================================
# invalid-parameter
# =============================================================================


class InvalidParameter(ExchangeError, ValueError):
    """Caller supplied an invalid argument."""

    kind: ClassVar[str] = "invalid-parameter"


class ZeroAmount(InvalidParameter):
    """An amount that must be positive was zero."""

    pass


class InvalidAmount(InvalidParameter):
    """Amount is negative, not an integer, or exceeds the u64 range."""

    pass


class InvalidFee(InvalidParameter):
    """Fee ratio must satisfy 0 < numerator < denominator."""

    pass


class InsufficientReserves(InvalidParameter):
    """Pool reserves cannot support the requested computation."""

    pass


class IdenticalAssets(InvalidParameter):
    """Both sides of a pair name the same asset."""

    pass


class InvalidAssetName(InvalidParameter):
    """Asset names must be non-empty strings."""

    pass


class AssetMismatch(InvalidParameter):
    """A coin of the wrong asset was supplied."""

    pass


class CoinConsumed(InvalidParameter):
    """A coin was used after it had already been consumed."""

    pass


# =============================================================================
# state-conflict
# =============================================================================


class StateConflict(ExchangeError):
    """Operation conflicts with current registry or ordering state."""

    kind: ClassVar[str] = "state-conflict"


class PoolAlreadyRegistered(StateConflict):
    """A pool is already registered for this pair."""

    pass


class PoolNotRegistered(StateConflict):
    """No pool is registered for this pair."""

    pass


class NotCanonicalOrder(StateConflict):
    """Pair was not presented in canonical order."""

    pass


class RegistryAlreadyInitialized(StateConflict):
    """The process-wide registry can only be initialized once."""

    pass


# =============================================================================
# insufficient-value
# =============================================================================


class InsufficientValue(ExchangeError):
    """Economic rejection; nothing was mutated."""

    kind: ClassVar[str] = "insufficient-value"


class SlippageExceeded(InsufficientValue):
    """Computed amount violates the caller's slippage bound."""

    pass


class InsufficientLiquidityMinted(InsufficientValue):
    """Deposit would mint zero liquidity or fall below the bootstrap floor."""

    pass


class InsufficientLiquidityBurned(InsufficientValue):
    """Withdrawal exceeds the redeemable liquidity supply."""

    pass


class InsufficientBalance(InsufficientValue):
    """Account balance is too small for the requested withdrawal."""

    pass


class PoolFull(InsufficientValue):
    """A reserve would exceed MAX_POOL_VALUE."""

    pass


class ReserveExceeded(InsufficientValue):
    """Requested output meets or exceeds the pool reserve."""

    pass


# =============================================================================
# arithmetic-overflow
# =============================================================================


class ArithmeticOverflow(ExchangeError, ArithmeticError):
    """Intermediate or final value left the u64 range, or division by zero."""

    kind: ClassVar[str] = "arithmetic-overflow"


__all__ = [
    "ExchangeError",
    "InvalidParameter",
    "ZeroAmount",
    "InvalidAmount",
    "InvalidFee",
    "InsufficientReserves",
    "IdenticalAssets",
    "InvalidAssetName",
    "AssetMismatch",
    "CoinConsumed",
    "StateConflict",
    "PoolAlreadyRegistered",
    "PoolNotRegistered",
    "NotCanonicalOrder",
    "RegistryAlreadyInitialized",
    "InsufficientValue",
    "SlippageExceeded",
    "InsufficientLiquidityMinted",
    "InsufficientLiquidityBurned",
    "InsufficientBalance",
    "PoolFull",
    "ReserveExceeded",
    "ArithmeticOverflow",
]
