"""
Seedable pseudo-random number source used by every name-sampling component.

The generator is an xorshift variant over two 32-bit state words. Games that
need a replayable sequence (e.g. the daily challenge) seed it explicitly;
everything else falls back to Python's own ``random`` module.
"""

import logging
import math
import random
import time
from typing import Optional

logger = logging.getLogger(__name__)

NATIVE_SEED = -1

_UINT32 = 0x100000000


def _to_int32(value: int) -> int:
    """Wrap an arbitrary integer to a signed 32-bit value."""
    value &= 0xFFFFFFFF
    return value - _UINT32 if value & 0x80000000 else value


class RandomSource:
    """
    Base class for random sources. Subclasses only implement ``next()``;
    every derived distribution is routed through it.
    """

    def next(self) -> float:
        raise NotImplementedError

    def uniform(self, min_value: float, max_value: float) -> float:
        return min_value + self.next() * (max_value - min_value)

    def uniform_int(self, min_value: int, max_value: int) -> int:
        """Integer in [min_value, max_value], both ends inclusive."""
        return math.floor(min_value + self.next() * (max_value - min_value + 1))

    def choice_index(self, length: int) -> int:
        return math.floor(self.next() * length)

    def normal(self, mean: float = 0.0, stddev: float = 1.0) -> float:
        """
        Sample a normal distribution with the Box-Muller transform.

        Args:
            mean: Distribution mean
            stddev: Standard deviation

        Returns:
            Normally distributed float
        """
        u = 0.0
        v = 0.0
        while u == 0.0:
            u = self.next()
        while v == 0.0:
            v = self.next()
        z = math.sqrt(-2.0 * math.log(u)) * math.cos(2 * math.pi * v)
        return z * stddev + mean


class SeededRandom(RandomSource):
    """
    Reproducible random source.

    ``seed == -1`` explicitly requests the non-reproducible platform source,
    ``seed is None`` derives a seed from the current time.
    """

    def __init__(self, seed: Optional[int] = None):
        self.use_native = seed == NATIVE_SEED
        self.seed = int(time.time() * 1000) if seed is None else int(seed)
        self.state0 = 0
        self.state1 = 0
        if not self.use_native:
            seed32 = _to_int32(self.seed)
            self.state0 = _to_int32(seed32 ^ 0x12345678)
            # the product is taken in double precision before wrapping to 32 bits
            self.state1 = _to_int32(_to_int32(int(float(self.seed) * 0x9E3779B9)) ^ 0x87654321)

    def next(self) -> float:
        if self.use_native:
            return random.random()

        s1 = self.state0
        s0 = self.state1
        self.state0 = s0
        s1 = _to_int32(s1 ^ (s1 << 23))
        s1 ^= s1 >> 17
        s1 ^= s0
        s1 ^= s0 >> 26
        self.state1 = _to_int32(s1)
        result = (self.state0 + self.state1) % _UINT32
        return result / _UINT32


def clamp(value: float, min_value: float, max_value: float) -> float:
    return max(min_value, min(max_value, value))


def clamp_int(value: float, min_value: int, max_value: int) -> int:
    # half-up rounding, not Python's banker's rounding
    return max(min_value, min(max_value, math.floor(value + 0.5)))


def sigmoid(x: float) -> float:
    return 1.0 / (1.0 + math.exp(-x))


# Process-wide generator; None means "use random.random()"
_global_rng: Optional[SeededRandom] = None


def set_random_seed(seed: Optional[int]) -> None:
    """
    Install (or clear) the process-wide seeded generator.

    Args:
        seed: Seed value, -1 for the platform source, None to reset
    """
    global _global_rng
    if seed is not None:
        _global_rng = SeededRandom(seed)
        if seed == NATIVE_SEED:
            logger.info("Random source set to platform random (seed -1)")
        else:
            logger.info(f"Random seed set: {seed}")
    else:
        _global_rng = None
        logger.info("Using default random number generator")


def get_random() -> float:
    """Float in [0, 1) from the process-wide generator."""
    if _global_rng is not None:
        return _global_rng.next()
    return random.random()


class _ProcessRandom(RandomSource):
    """Random source that always follows the current process-wide seed."""

    def next(self) -> float:
        return get_random()


default_random = _ProcessRandom()


def uniform(min_value: float, max_value: float) -> float:
    return default_random.uniform(min_value, max_value)


def uniform_int(min_value: int, max_value: int) -> int:
    return default_random.uniform_int(min_value, max_value)


def normal(mean: float = 0.0, stddev: float = 1.0) -> float:
    return default_random.normal(mean, stddev)
