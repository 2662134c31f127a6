"""
Aggregates parsed participation rows into weighted name pools.

One pool per region (capped, deduplicated) plus a single uncapped global
pool. Pools are always rebuilt from scratch and published as one
immutable snapshot, so readers never observe a half-built pool set.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Set, Union

from pydantic import BaseModel, Field

from namepool.config.regions import REGION_NAMES, is_valid_region_id
from namepool.ingest.record_parser import CandidateRow, RecordParser, split_lines

logger = logging.getLogger(__name__)

REGION_POOL_CAPACITY = 30
RECENCY_WINDOW = 5
WEIGHT_EXPONENT = 0.9


class NameRecord(BaseModel):
    """A sampleable name and its selection weight."""
    name: str = Field(min_length=1)
    weight: float = Field(ge=0.0)


def score_to_weight(score: float, exponent: float = WEIGHT_EXPONENT) -> float:
    """weight = max(score, 0) ** exponent; non-positive scores weigh 0."""
    return max(score, 0.0) ** exponent


class WeightedPool:
    """
    Ordered collection of NameRecords with a cached weight sum.

    The cached sum is only refreshed by recompute_weight_sum(); adding
    records does not patch it.
    """

    def __init__(self, capacity: Optional[int] = None, unique: bool = False):
        self.capacity = capacity
        self.unique = unique
        self.records: List[NameRecord] = []
        self.weight_sum: float = 0.0
        self._names: Set[str] = set()

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def __contains__(self, name: str) -> bool:
        return name in self._names

    @property
    def is_full(self) -> bool:
        return self.capacity is not None and len(self.records) >= self.capacity

    def add(self, record: NameRecord) -> bool:
        """
        Append a record unless the pool is full or (for unique pools) the
        name is already present. The first occurrence of a name wins.

        Returns:
            True if the record was appended
        """
        if self.is_full:
            return False
        if self.unique and record.name in self._names:
            return False
        self.records.append(record)
        self._names.add(record.name)
        return True

    def recompute_weight_sum(self) -> float:
        # accumulate left to right, exactly as the draw walk does
        total = 0.0
        for record in self.records:
            total += record.weight
        self.weight_sum = total
        return self.weight_sum

    @property
    def names(self) -> List[str]:
        return [record.name for record in self.records]


@dataclass(frozen=True)
class PoolSet:
    """Immutable snapshot of every pool built by one ingestion."""
    region_pools: Dict[int, WeightedPool] = field(default_factory=dict)
    global_pool: WeightedPool = field(default_factory=WeightedPool)

    @property
    def region_keys(self) -> List[int]:
        return sorted(self.region_pools)

    def region_pool(self, region_id: int) -> Optional[WeightedPool]:
        return self.region_pools.get(region_id)

    @property
    def total_region_names(self) -> int:
        return sum(len(pool) for pool in self.region_pools.values())


class PoolBuilder:
    """
    Two-pass aggregation of CandidateRows into a PoolSet.

    Pass one finds the newest match id; pass two keeps rows that took part
    in one of the last ``recency_window`` matches and distributes them into
    the global pool and every region pool they reference.
    """

    def __init__(self, capacity: int = REGION_POOL_CAPACITY,
                 recency_window: int = RECENCY_WINDOW,
                 weight_exponent: float = WEIGHT_EXPONENT,
                 region_count: int = len(REGION_NAMES)):
        self.capacity = capacity
        self.recency_window = recency_window
        self.weight_exponent = weight_exponent
        self.region_count = region_count

    def recency_threshold(self, rows: Iterable[CandidateRow]) -> int:
        max_match_id = 0
        for row in rows:
            for fact in row.facts:
                if fact.match_id > max_match_id:
                    max_match_id = fact.match_id
        return max(max_match_id - self.recency_window, 0)

    def region_ids(self, row: CandidateRow) -> List[int]:
        """Distinct valid region ids referenced by a row, in first-seen order."""
        seen: Dict[int, None] = {}
        for fact in row.facts:
            if is_valid_region_id(fact.region_id, self.region_count):
                seen.setdefault(fact.region_id, None)
        return list(seen)

    def build(self, rows: Sequence[CandidateRow]) -> PoolSet:
        threshold = self.recency_threshold(rows)
        region_pools: Dict[int, WeightedPool] = {}
        global_pool = WeightedPool()

        for row in rows:
            if not row.facts:
                continue
            if not any(fact.match_id >= threshold for fact in row.facts):
                continue
            if not row.name or row.score is None:
                continue

            record = NameRecord(name=row.name, weight=score_to_weight(row.score, self.weight_exponent))
            global_pool.add(record)

            for region_id in self.region_ids(row):
                pool = region_pools.get(region_id)
                if pool is None:
                    pool = region_pools[region_id] = WeightedPool(capacity=self.capacity, unique=True)
                pool.add(record)

        for pool in region_pools.values():
            pool.recompute_weight_sum()
        global_pool.recompute_weight_sum()

        logger.debug(f"Recency threshold {threshold}; global pool holds {len(global_pool)} entries")
        return PoolSet(region_pools=region_pools, global_pool=global_pool)


class PoolStore:
    """
    Holds the current PoolSet for a process or a NameService.

    ingest() builds a fresh PoolSet off to the side and swaps the reference
    in under a lock; a failed ingestion leaves the previous snapshot in place.
    """

    def __init__(self, parser: Optional[RecordParser] = None,
                 builder: Optional[PoolBuilder] = None):
        self.parser = parser or RecordParser()
        self.builder = builder or PoolBuilder()
        self._pools = PoolSet()
        self._lock = threading.Lock()

    @property
    def current(self) -> PoolSet:
        return self._pools

    @property
    def is_empty(self) -> bool:
        return not self._pools.region_pools

    def replace(self, pools: PoolSet) -> None:
        with self._lock:
            self._pools = pools

    def ingest(self, raw: Union[str, bytes, None]) -> bool:
        """
        Rebuild every pool from a full CSV text blob.

        Args:
            raw: CSV text (or UTF-8 bytes)

        Returns:
            True if the pools were rebuilt, False if the input was unusable
        """
        try:
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8-sig")
            if not isinstance(raw, str):
                logger.warning(f"Cannot build name pools from {type(raw).__name__}")
                return False

            lines = split_lines(raw)
            if not lines:
                logger.warning("No records found; keeping existing name pools")
                return False

            pools = self.builder.build(self.parser.parse_lines(lines))
        except Exception as e:
            logger.error(f"Failed to build name pools: {e}")
            return False

        self.replace(pools)
        logger.info(
            f"Loaded name pools. total_names={pools.total_region_names} "
            f"regions_with_names={len(pools.region_pools)}"
        )
        return True

    def stats(self) -> Dict[str, object]:
        pools = self._pools
        return {
            "total_names": pools.total_region_names,
            "regions_with_names": len(pools.region_pools),
            "global_pool_size": len(pools.global_pool),
            "global_weight_sum": pools.global_pool.weight_sum,
            "region_sizes": {key: len(pools.region_pools[key]) for key in pools.region_keys},
        }
