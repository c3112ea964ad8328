"""Asset value objects and canonical pair ordering.

A Coin is an owned amount of one asset. It cannot be copied, and every
operation that takes value from it either moves that value into another
Coin or consumes it outright, so the total amount in circulation is only
changed by explicit mint/consume calls at the edges of the system.

Asset identity is a canonical name string. Pairs are ordered by comparing
the UTF-8 bytes of the two names; that order decides which pool backs a
pair and how the pool's key is spelled.
"""

from __future__ import annotations

from dex.constants import LP_PREFIX, PAIR_SEPARATOR
from dex.errors import (
    AssetMismatch,
    CoinConsumed,
    IdenticalAssets,
    InvalidAmount,
    InvalidAssetName,
    NotCanonicalOrder,
    ZeroAmount,
)
from dex.safe_int import U64_MAX


def validate_asset_name(asset: str) -> str:
    """Return the asset name if it is a non-empty string.

    Raises:
        InvalidAssetName: If asset is not a non-empty string
    """
    if not isinstance(asset, str) or not asset:
        raise InvalidAssetName(f"Asset name must be a non-empty string, got {asset!r}")
    return asset


def validate_amount(amount: int, name: str = "amount") -> int:
    """Return amount if it is an int in the u64 range.

    Raises:
        InvalidAmount: If amount is not an int in [0, 2^64-1]
    """
    if not isinstance(amount, int) or isinstance(amount, bool):
        raise InvalidAmount(f"{name} must be an int, got {type(amount).__name__}")
    if amount < 0 or amount > U64_MAX:
        raise InvalidAmount(f"{name} out of u64 range: {amount}")
    return amount


def compare_assets(asset_a: str, asset_b: str) -> int:
    """Total order over asset names.

    Returns:
        -1 if asset_a sorts first, 1 if asset_b sorts first, 0 if equal
    """
    bytes_a = validate_asset_name(asset_a).encode("utf-8")
    bytes_b = validate_asset_name(asset_b).encode("utf-8")
    if bytes_a < bytes_b:
        return -1
    if bytes_a > bytes_b:
        return 1
    return 0


def is_canonical(asset_a: str, asset_b: str) -> bool:
    """True if (asset_a, asset_b) is already in canonical order.

    Raises:
        IdenticalAssets: If both names are equal
        InvalidAssetName: If a name contains the pair key separator
    """
    order = compare_assets(asset_a, asset_b)
    for asset in (asset_a, asset_b):
        if PAIR_SEPARATOR in asset:
            raise InvalidAssetName(f"Pooled asset names cannot contain '{PAIR_SEPARATOR}': {asset}")
    if order == 0:
        raise IdenticalAssets(f"Pair must name two different assets: {asset_a}")
    return order < 0


def sort_assets(asset_a: str, asset_b: str) -> tuple[str, str]:
    """Return the pair in canonical order."""
    if is_canonical(asset_a, asset_b):
        return asset_a, asset_b
    return asset_b, asset_a


def pair_key(asset_a: str, asset_b: str) -> str:
    """Canonical key for a pair: "LP-<lesser>-<greater>".

    The key doubles as the asset name of the pool's liquidity shares.

    Raises:
        IdenticalAssets: If both names are equal
        NotCanonicalOrder: If the pair is not in canonical order
    """
    if not is_canonical(asset_a, asset_b):
        raise NotCanonicalOrder(f"Pair ({asset_a}, {asset_b}) is not in canonical order")
    return PAIR_SEPARATOR.join((LP_PREFIX, asset_a, asset_b))


class Coin:
    """An owned, non-duplicable amount of one asset.

    Attributes:
        asset: Canonical asset name
        value: Amount held (read-only; raises once consumed)
    """

    __slots__ = ("_asset", "_value", "_consumed")

    def __init__(self, asset: str, value: int) -> None:
        self._asset = validate_asset_name(asset)
        self._value = validate_amount(value, "value")
        self._consumed = False

    @classmethod
    def zero(cls, asset: str) -> Coin:
        """Create an empty coin of the given asset."""
        return cls(asset, 0)

    @property
    def asset(self) -> str:
        return self._asset

    @property
    def value(self) -> int:
        self._check_live()
        return self._value

    @property
    def consumed(self) -> bool:
        return self._consumed

    def __repr__(self) -> str:
        state = "consumed" if self._consumed else str(self._value)
        return f"Coin({self._asset!r}, {state})"

    def __copy__(self) -> Coin:
        raise TypeError("Coin cannot be copied")

    def __deepcopy__(self, memo: dict) -> Coin:
        raise TypeError("Coin cannot be copied")

    def _check_live(self) -> None:
        if self._consumed:
            raise CoinConsumed(f"Coin of {self._asset} has already been consumed")

    def split(self, amount: int) -> Coin:
        """Move amount out of this coin into a new coin.

        Raises:
            InvalidAmount: If amount exceeds the coin's value
        """
        self._check_live()
        validate_amount(amount)
        if amount > self._value:
            raise InvalidAmount(f"Cannot split {amount} from coin holding {self._value}")
        self._value -= amount
        return Coin(self._asset, amount)

    def join(self, other: Coin) -> None:
        """Merge other into this coin, consuming other.

        Raises:
            AssetMismatch: If the coins hold different assets
        """
        self._check_live()
        other._check_live()
        if other is self:
            raise CoinConsumed("Cannot join a coin with itself")
        if other.asset != self._asset:
            raise AssetMismatch(f"Cannot join {other.asset} into {self._asset}")
        self._value = validate_amount(self._value + other._value, "joined value")
        other._mark_consumed()

    def extract_all(self) -> Coin:
        """Move the entire value into a new coin, leaving this one empty."""
        return self.split(self.value)

    def consume(self) -> int:
        """Spend the coin, returning its value."""
        self._check_live()
        value = self._value
        self._mark_consumed()
        return value

    def destroy_zero(self) -> None:
        """Consume an empty coin.

        Raises:
            InvalidAmount: If the coin is not empty
        """
        if self.value != 0:
            raise InvalidAmount(f"Cannot destroy non-empty coin holding {self._value}")
        self._mark_consumed()

    def require_asset(self, asset: str) -> Coin:
        """Return self if it holds asset, else raise AssetMismatch."""
        if self._asset != asset:
            raise AssetMismatch(f"Expected coin of {asset}, got {self._asset}")
        return self

    def require_positive(self, name: str = "coin") -> Coin:
        """Return self if its value is positive, else raise ZeroAmount."""
        if self.value == 0:
            raise ZeroAmount(f"{name} must be positive")
        return self

    def _mark_consumed(self) -> None:
        self._value = 0
        self._consumed = True


__all__ = [
    "Coin",
    "compare_assets",
    "is_canonical",
    "pair_key",
    "sort_assets",
    "validate_amount",
    "validate_asset_name",
]
