import pytest

from namepool.ingest.pool_builder import NameRecord, PoolStore, WeightedPool
from namepool.rng import seeded_random
from namepool.rng.seeded_random import RandomSource


class FixedRandom(RandomSource):
    """Random source that replays a fixed list of values, cycling."""

    def __init__(self, *values: float):
        self.values = list(values) or [0.0]
        self.calls = 0

    def next(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


def make_pool(*entries, capacity=None, unique=False) -> WeightedPool:
    pool = WeightedPool(capacity=capacity, unique=unique)
    for name, weight in entries:
        pool.add(NameRecord(name=name, weight=weight))
    pool.recompute_weight_sum()
    return pool


def row(name: str, score, participation: str, school: str = "School") -> str:
    """One CSV line with the name in field 2 and the score in field 5."""
    return f"id,{school},{name},2021,,{score},{participation}"


@pytest.fixture(autouse=True)
def reset_process_random():
    yield
    seeded_random.set_random_seed(None)


@pytest.fixture
def store():
    return PoolStore()


@pytest.fixture
def sample_csv():
    return "\n".join([
        row("Alice", 90, "10:1:90:1:0:0"),
        row("Bob", 80, "10:2:80:2:0:0/9:2:70:3:4:0"),
        row("Carol", 70, "9:3:70:4:4:0"),
        row("Dave", 60, "8:4:60:5:7:0"),
        row("Erin", 50, "1:5:50:6:0:0"),
        row("Frank", 40, "10:6:40:7:99:0"),
    ])
