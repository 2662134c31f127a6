"""
Per-game name session: owns the set of names already handed out so every
draw within one game is unique.
"""

from __future__ import annotations

from collections import Counter
from typing import List, Optional, Set

from namepool.sampling.name_resolver import NameResolver


class NameSession:
    """Tracks names used within one generation run.

    This class is intentionally lightweight and in-memory; nothing is
    persisted between runs.
    """

    def __init__(self, resolver: NameResolver, used: Optional[Set[str]] = None):
        self.resolver = resolver
        self.used: Set[str] = used if used is not None else set()
        self.history: List[str] = []
        self._synthetic_count = 0

    def _note(self, name: str) -> str:
        self.history.append(name)
        if name.startswith(self.resolver.synthetic_prefix):
            self._synthetic_count += 1
        return name

    def draw(self, region_hint: int = -1) -> str:
        """One unique name for an external region hint (negative = any region)."""
        return self._note(self.resolver.generate_any(region_hint, self.used))

    def draw_for_region(self, region_key: int) -> str:
        """One unique name for an internal pool key."""
        return self._note(self.resolver.generate_for_region(region_key, self.used))

    def draw_many(self, count: int, region_hint: int = -1) -> List[str]:
        return [self.draw(region_hint) for _ in range(count)]

    def contains(self, name: str) -> bool:
        return name in self.used

    @property
    def synthetic_count(self) -> int:
        return self._synthetic_count

    def summary(self) -> Counter:
        """Counts of data-backed vs. synthetic names drawn so far."""
        return Counter(
            synthetic=self._synthetic_count,
            pooled=len(self.history) - self._synthetic_count,
        )

    def reset(self) -> None:
        self.used.clear()
        self.history.clear()
        self._synthetic_count = 0
