"""
NameService: the single owning context for the random source, the pool
store and the resolver.
"""

import logging
from typing import Optional, Set

from namepool.config.config_loader import Config
from namepool.ingest.loader import Source, build_pools_from_file, build_pools_from_url, preload_name_pools
from namepool.ingest.pool_builder import PoolBuilder, PoolStore
from namepool.ingest.record_parser import RecordParser
from namepool.rng.daily_challenge import DailyChallenge, get_daily_challenge_params
from namepool.rng.seeded_random import RandomSource, SeededRandom, default_random
from namepool.sampling.name_resolver import NameResolver
from namepool.sampling.session import NameSession
from namepool.utils.logging_utils import ConditionalLogger

logger = logging.getLogger(__name__)


class _ServiceRandom(RandomSource):
    """Indirection so reseeding swaps the generator under every consumer."""

    def __init__(self, source: RandomSource):
        self.source = source

    def next(self) -> float:
        return self.source.next()


class NameService:
    """
    Builds name pools from the configured data source and hands out names.
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()
        self.log = ConditionalLogger(__name__, verbose=self.config.verbose)

        self.rng = _ServiceRandom(self._make_source(self.config.seed))
        self.store = PoolStore(
            parser=RecordParser(self.config.name_fields, self.config.score_fields),
            builder=PoolBuilder(
                capacity=self.config.region_capacity,
                recency_window=self.config.recency_window,
                weight_exponent=self.config.weight_exponent,
                region_count=len(self.config.region_names),
            ),
        )
        self.resolver = NameResolver(
            self.store,
            rng=self.rng,
            region_names=self.config.region_names,
            external_region_names=self.config.external_region_names,
            synthetic_prefix=self.config.synthetic_prefix,
        )
        self._autoload_attempted = False

    @staticmethod
    def _make_source(seed: Optional[int]) -> RandomSource:
        return default_random if seed is None else SeededRandom(seed)

    def reseed(self, seed: Optional[int]) -> None:
        """Replace this service's generator; None follows the process-wide one."""
        self.rng.source = self._make_source(seed)
        self.log.info(f"Name service reseeded with {seed}")

    def preload(self, source: Source) -> bool:
        ok = preload_name_pools(self.store, source)
        if ok:
            self.log.success(f"Name pools rebuilt: {self.store.stats()['total_names']} region names")
        return ok

    def ensure_pools(self) -> bool:
        """
        Lazily build pools from the configured path, then URL, the first
        time names are requested. Only one attempt is made.

        Returns:
            True if region pools are available
        """
        if not self.store.is_empty:
            return True
        if self._autoload_attempted:
            return False
        self._autoload_attempted = True

        if build_pools_from_file(self.store, self.config.data_path):
            return not self.store.is_empty
        if self.config.data_url and build_pools_from_url(self.store, self.config.data_url):
            return not self.store.is_empty
        logger.debug(f"No name data found at {self.config.data_path}")
        return False

    def generate_name(self, region_hint: int = -1, used: Optional[Set[str]] = None) -> str:
        self.ensure_pools()
        return self.resolver.generate_any(region_hint, used)

    def generate_name_by_region(self, region_key: int, used: Optional[Set[str]] = None) -> str:
        self.ensure_pools()
        return self.resolver.generate_for_region(region_key, used)

    def new_session(self) -> NameSession:
        self.ensure_pools()
        return NameSession(self.resolver)

    def start_daily_challenge(self) -> DailyChallenge:
        """Reseed from today's challenge parameters and return them."""
        params = get_daily_challenge_params()
        self.reseed(params.seed)
        return params
