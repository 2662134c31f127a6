"""
Name resolution facade: region pool, then global pool, then a synthetic
placeholder. Callers always get a name back.
"""

import logging
import random
from typing import Callable, Optional, Sequence, Set, Tuple

from namepool.config.regions import REGION_NAMES, region_index
from namepool.ingest.pool_builder import PoolSet, PoolStore
from namepool.rng.seeded_random import RandomSource, default_random
from namepool.sampling.weighted_sampler import draw

logger = logging.getLogger(__name__)

SYNTHETIC_NAME_PREFIX = "????"

Strategy = Callable[[PoolSet, int, Set[str]], Optional[str]]


class NameResolver:
    """
    Resolves a region identifier to a pool and samples a unique name.

    Strategies run in order and the first one that yields a name wins:
    region pool (key, then key - 1), global pool, synthetic placeholder.
    """

    def __init__(self, store: PoolStore, rng: RandomSource = default_random,
                 region_names: Sequence[str] = REGION_NAMES,
                 external_region_names: Optional[Sequence[str]] = None,
                 synthetic_prefix: str = SYNTHETIC_NAME_PREFIX):
        """
        Initialize the resolver.

        Args:
            store: Pool store to sample from
            rng: Random source used for every weighted draw
            region_names: Canonical region list that pool keys index into
            external_region_names: The caller's own region table, indexed by
                generate_any's hint (defaults to the canonical list)
            synthetic_prefix: Marker at the start of every placeholder name
        """
        self.store = store
        self.rng = rng
        self.region_names = list(region_names)
        self.external_region_names = list(external_region_names or region_names)
        self.synthetic_prefix = synthetic_prefix
        self.strategies: Tuple[Strategy, ...] = (
            self._from_region_pool,
            self._from_global_pool,
        )

    @staticmethod
    def resolve_region_key(pools: PoolSet, region_key: int) -> Optional[int]:
        """Accept zero-based keys first, then fall back to one-based (key - 1)."""
        if region_key in pools.region_pools:
            return region_key
        if region_key - 1 in pools.region_pools:
            return region_key - 1
        return None

    def _from_region_pool(self, pools: PoolSet, region_key: int, used: Set[str]) -> Optional[str]:
        key = self.resolve_region_key(pools, region_key)
        if key is None:
            logger.debug(f"Region {region_key} has no pool, falling back to global pool")
            return None
        return draw(pools.region_pool(key), used, self.rng)

    def _from_global_pool(self, pools: PoolSet, region_key: int, used: Set[str]) -> Optional[str]:
        return draw(pools.global_pool, used, self.rng)

    def synthetic_name(self, used: Set[str]) -> str:
        """Placeholder name distinct from every name in ``used``; registers it."""
        name = f"{self.synthetic_prefix}{random.random()}"
        while name in used:
            name = f"{self.synthetic_prefix}{random.random()}"
        used.add(name)
        logger.info(f"Using synthetic fallback name={name}")
        return name

    def generate_for_region(self, region_key: int, used: Optional[Set[str]] = None) -> str:
        """
        Draw a name for a region, degrading to the global pool and finally
        to a synthetic placeholder.

        Args:
            region_key: Zero-based (or one-based) region id
            used: Session-wide set of names already handed out; updated in place

        Returns:
            A name that was not in ``used``
        """
        used = used if used is not None else set()
        return self._generate_from(self.store.current, region_key, used)

    def _generate_from(self, pools: PoolSet, region_key: int, used: Set[str]) -> str:
        for strategy in self.strategies:
            name = strategy(pools, region_key, used)
            if name is not None:
                used.add(name)
                return name
        return self.synthetic_name(used)

    def region_key_for_hint(self, region_hint: int) -> int:
        """Map an index into the external region table to a pool key (-1 if unknown)."""
        if 0 <= region_hint < len(self.external_region_names):
            key = region_index(self.external_region_names[region_hint], self.region_names)
            if key is not None:
                return key
        logger.debug(f"Region hint {region_hint} does not match a known region")
        return -1

    def generate_any(self, region_hint: int = -1, used: Optional[Set[str]] = None) -> str:
        """
        Draw a name for an external region hint; a negative hint picks a
        random region that currently has a pool.

        Args:
            region_hint: Index into the external region table, or negative
            used: Session-wide set of names already handed out; updated in place

        Returns:
            A name that was not in ``used``
        """
        used = used if used is not None else set()
        pools = self.store.current
        region_keys = pools.region_keys
        if not region_keys:
            logger.info("No region pools available, using synthetic fallback")
            return self.synthetic_name(used)

        if region_hint < 0:
            key = region_keys[self.rng.choice_index(len(region_keys))]
            logger.debug(f"Random region pick key={key}")
        else:
            key = self.region_key_for_hint(region_hint)
        return self._generate_from(pools, key, used)
