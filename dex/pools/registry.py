"""Pool registry.

Maps each canonical pair key ("LP-<lesser>-<greater>") to its Pool. At
most one pool exists per unordered pair and registration is one-shot;
pools are never removed.

Lookups and inserts go through a single registry lock, so concurrent
first registrations of the same pair serialize and exactly one succeeds.
Pool mutations take the pool's own lock, not the registry's.

One registry serves the whole process. It is created by init_registry()
(or lazily by the first get_registry() call) and reached only through
get_registry().
"""

from __future__ import annotations

import threading
import uuid
from collections.abc import Callable, Iterator
from typing import TypeVar

import structlog

from dex.assets import pair_key
from dex.errors import PoolAlreadyRegistered, PoolNotRegistered, RegistryAlreadyInitialized
from dex.pools.pool import Pool

logger = structlog.get_logger()

T = TypeVar("T")


class PoolRegistry:
    """Registry of pools keyed by canonical pair.

    Every method that names a pair expects (asset_a, asset_b) in canonical
    order; the boundary layer is responsible for sorting.
    """

    def __init__(self, registry_id: str | None = None) -> None:
        self.registry_id = registry_id or uuid.uuid4().hex
        self._pools: dict[str, Pool] = {}
        self._lock = threading.Lock()

    def has_registered(self, asset_a: str, asset_b: str) -> bool:
        """True if a pool exists for the pair.

        Raises:
            IdenticalAssets, NotCanonicalOrder: If the pair is malformed
        """
        key = pair_key(asset_a, asset_b)
        with self._lock:
            return key in self._pools

    def register(self, asset_a: str, asset_b: str) -> Pool:
        """Create an Unfunded pool for the pair.

        Raises:
            IdenticalAssets: If both assets are the same
            NotCanonicalOrder: If the pair is not in canonical order
            PoolAlreadyRegistered: If the pair already has a pool
        """
        key = pair_key(asset_a, asset_b)
        with self._lock:
            if key in self._pools:
                raise PoolAlreadyRegistered(f"Pool {key} is already registered")
            pool = Pool(asset_a=asset_a, asset_b=asset_b, registry_id=self.registry_id)
            self._pools[key] = pool

        logger.info("pool_registered", pair=key, registry_id=self.registry_id)
        return pool

    def get(self, asset_a: str, asset_b: str) -> Pool:
        """Get the pool for the pair.

        Raises:
            PoolNotRegistered: If no pool exists for the pair
        """
        key = pair_key(asset_a, asset_b)
        with self._lock:
            pool = self._pools.get(key)
        if pool is None:
            raise PoolNotRegistered(f"Pool {key} is not registered")
        return pool

    def register_and_fund(self, asset_a: str, asset_b: str, fund: Callable[[Pool], T]) -> T:
        """Register a pool and make its first deposit as one step.

        fund runs against the new pool while the registry lock is held. If
        it raises, the pool is discarded and nothing is registered.

        Raises:
            PoolAlreadyRegistered: If the pair already has a pool
        """
        key = pair_key(asset_a, asset_b)
        with self._lock:
            if key in self._pools:
                raise PoolAlreadyRegistered(f"Pool {key} is already registered")
            pool = Pool(asset_a=asset_a, asset_b=asset_b, registry_id=self.registry_id)
            result = fund(pool)
            self._pools[key] = pool

        logger.info("pool_registered", pair=key, registry_id=self.registry_id, funded=True)
        return result

    def pools(self) -> list[Pool]:
        """All registered pools, ordered by pair key."""
        with self._lock:
            return [self._pools[key] for key in sorted(self._pools)]

    def __iter__(self) -> Iterator[Pool]:
        return iter(self.pools())

    def __len__(self) -> int:
        with self._lock:
            return len(self._pools)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._pools

    @property
    def pool_count(self) -> int:
        return len(self)


# =============================================================================
# Process-wide instance
# =============================================================================

_registry: PoolRegistry | None = None
_registry_lock = threading.Lock()


def init_registry(registry_id: str | None = None) -> PoolRegistry:
    """Create the process-wide registry.

    Raises:
        RegistryAlreadyInitialized: If it already exists
    """
    global _registry
    with _registry_lock:
        if _registry is not None:
            raise RegistryAlreadyInitialized(
                f"Registry {_registry.registry_id} is already initialized"
            )
        _registry = PoolRegistry(registry_id)
        logger.info("registry_initialized", registry_id=_registry.registry_id)
        return _registry


def get_registry() -> PoolRegistry:
    """Return the process-wide registry, creating it on first use."""
    global _registry
    with _registry_lock:
        if _registry is None:
            _registry = PoolRegistry()
            logger.info("registry_initialized", registry_id=_registry.registry_id)
        return _registry


def reset_registry() -> None:
    """Drop the process-wide registry. For tests only."""
    global _registry
    with _registry_lock:
        _registry = None


__all__ = [
    "PoolRegistry",
    "get_registry",
    "init_registry",
    "reset_registry",
]
