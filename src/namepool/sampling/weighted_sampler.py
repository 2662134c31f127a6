"""
Weighted draw of a not-yet-used name from a WeightedPool.
"""

from typing import AbstractSet, Optional

from namepool.ingest.pool_builder import WeightedPool
from namepool.rng.seeded_random import RandomSource, default_random


def _is_free(name: str, used: Optional[AbstractSet[str]]) -> bool:
    return used is None or name not in used


def draw(pool: Optional[WeightedPool], used: Optional[AbstractSet[str]] = None,
         rng: RandomSource = default_random) -> Optional[str]:
    """
    Draw one name from a pool according to its weights.

    A weighted hit on a used name is not re-rolled: the pool is scanned in
    order for the first unused name instead. Pools whose weights sum to
    zero are sampled uniformly over unused names. The caller adds the
    returned name to ``used``.

    Args:
        pool: Pool to draw from
        used: Names already handed out in this session
        rng: Random source

    Returns:
        A name, or None if the pool is empty or fully used
    """
    if pool is None or len(pool) == 0:
        return None

    if pool.weight_sum <= 0:
        available = [record.name for record in pool if _is_free(record.name, used)]
        if not available:
            return None
        return available[rng.choice_index(len(available))]

    r = rng.uniform(0, pool.weight_sum)
    acc = 0.0
    hit = None
    last_positive = None
    for record in pool:
        acc += record.weight
        if acc >= r:
            hit = record
            break
        if record.weight > 0:
            last_positive = record

    # a draw past the running total (float rounding) lands on the last weighted entry
    if hit is None:
        hit = last_positive
    if hit is not None and _is_free(hit.name, used):
        return hit.name

    for record in pool:
        if _is_free(record.name, used):
            return record.name
    return None
