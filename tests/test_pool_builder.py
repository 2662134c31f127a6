import pytest

from conftest import row
from namepool.ingest.pool_builder import NameRecord, PoolBuilder, PoolStore, WeightedPool, score_to_weight
from namepool.ingest.record_parser import RecordParser


def test_reference_row_reaches_region_and_global(store):
    assert store.ingest("m1,School1,Zhang,2021,90,88.5,1:1:88.5:1:0:0")
    pools = store.current
    assert pools.region_pools[0].names == ["Zhang"]
    assert pools.global_pool.names == ["Zhang"]
    assert pools.region_pools[0].records[0].weight == pytest.approx(88.5 ** 0.9)
    assert pools.region_pools[0].records[0].weight == pytest.approx(56.5, abs=0.1)


def test_sample_csv_layout(store, sample_csv):
    assert store.ingest(sample_csv)
    pools = store.current
    assert pools.region_keys == [0, 4, 7]
    assert pools.region_pools[0].names == ["Alice", "Bob"]
    assert pools.region_pools[4].names == ["Bob", "Carol"]
    assert pools.region_pools[7].names == ["Dave"]
    # Erin is outside the recency window; Frank has no valid region
    assert pools.global_pool.names == ["Alice", "Bob", "Carol", "Dave", "Frank"]


def test_recency_threshold_boundary(store):
    text = "\n".join([
        row("One", 10, "1:1:1:1:0"),
        row("Two", 10, "2:1:1:1:0"),
        row("Three", 10, "3:1:1:1:0"),
        row("Ten", 10, "10:1:1:1:0"),
        row("Four", 10, "4:1:1:1:1"),
        row("Five", 10, "5:1:1:1:1"),
    ])
    assert store.ingest(text)
    pools = store.current
    assert PoolBuilder().recency_threshold(RecordParser().parse_lines(text.splitlines())) == 5
    assert pools.region_pools[1].names == ["Five"]
    assert "Four" not in pools.global_pool


def test_any_recent_fact_keeps_row(store):
    text = "\n".join([
        row("Old", 10, "1:1:1:1:2/20:1:1:1:3"),
        row("New", 10, "20:1:1:1:3"),
    ])
    store.ingest(text)
    # the old participation's region still counts once the row is kept
    assert store.current.region_pools[2].names == ["Old"]
    assert store.current.region_pools[3].names == ["Old", "New"]


def test_region_pool_capacity(store):
    text = "\n".join(row(f"N{i}", i + 1, "3:1:1:1:5") for i in range(40))
    store.ingest(text)
    pools = store.current
    assert len(pools.region_pools[5]) == 30
    assert pools.region_pools[5].names == [f"N{i}" for i in range(30)]
    assert len(pools.global_pool) == 40


def test_full_region_does_not_block_other_regions(store):
    lines = [row(f"N{i}", 1, "3:1:1:1:5") for i in range(30)]
    lines.append(row("Late", 1, "3:1:1:1:5/3:1:1:1:6"))
    store.ingest("\n".join(lines))
    pools = store.current
    assert "Late" not in pools.region_pools[5]
    assert pools.region_pools[6].names == ["Late"]
    assert "Late" in pools.global_pool


def test_duplicate_names_first_wins(store):
    text = "\n".join([
        row("Same", 10, "3:1:1:1:5"),
        row("Same", 90, "3:1:1:1:5"),
    ])
    store.ingest(text)
    pools = store.current
    assert len(pools.region_pools[5]) == 1
    assert pools.region_pools[5].records[0].weight == pytest.approx(10 ** 0.9)
    assert pools.global_pool.names == ["Same", "Same"]
    assert pools.global_pool.weight_sum == pytest.approx(10 ** 0.9 + 90 ** 0.9)


def test_region_pools_hold_distinct_names(store):
    text = "\n".join(row(f"N{i % 7}", i, f"3:1:1:1:{i % 3}") for i in range(100))
    store.ingest(text)
    for pool in store.current.region_pools.values():
        assert len(pool) <= 30
        assert len(set(pool.names)) == len(pool.names)


def test_non_positive_score_weighs_zero(store):
    text = "\n".join([
        row("Neg", -12, "3:1:1:1:5"),
        row("Zero", 0, "3:1:1:1:5"),
    ])
    store.ingest(text)
    pool = store.current.region_pools[5]
    assert pool.names == ["Neg", "Zero"]
    assert [r.weight for r in pool] == [0.0, 0.0]
    assert pool.weight_sum == 0.0


def test_unparseable_score_excludes_row_everywhere(store):
    store.ingest("id,School,NoScore,x,y,z,w,3:1:1:1:5\n" + row("Ok", 5, "3:1:1:1:5"))
    pools = store.current
    assert pools.global_pool.names == ["Ok"]
    assert pools.region_pools[5].names == ["Ok"]


def test_row_without_valid_region_still_reaches_global(store):
    store.ingest("\n".join([
        row("Nowhere", 5, "3:1:1:1"),
        row("Outside", 5, "3:1:1:1:34"),
        row("Negative", 5, "3:1:1:1:-1"),
    ]))
    pools = store.current
    assert pools.region_pools == {}
    assert pools.global_pool.names == ["Nowhere", "Outside", "Negative"]


def test_weight_sums_cached(store, sample_csv):
    store.ingest(sample_csv)
    for pool in store.current.region_pools.values():
        assert pool.weight_sum == pytest.approx(sum(r.weight for r in pool))


def test_empty_input_fails_and_keeps_pools(store, sample_csv):
    assert store.ingest(sample_csv)
    before = store.current
    assert store.ingest("") is False
    assert store.ingest("   \n\r\n") is False
    assert store.ingest(None) is False
    assert store.current is before


def test_empty_input_on_fresh_store(store):
    assert store.ingest("") is False
    assert store.current.region_pools == {}
    assert len(store.current.global_pool) == 0


def test_undecodable_bytes_fail(store):
    assert store.ingest(b"\xff\xfe\xfa") is False


def test_bytes_input(store):
    assert store.ingest(row("Bytes", 5, "3:1:1:1:5").encode("utf-8"))
    assert store.current.region_pools[5].names == ["Bytes"]


def test_lines_without_usable_rows_build_empty_pools(store, sample_csv):
    store.ingest(sample_csv)
    assert store.ingest("just,some,noise")
    assert store.is_empty
    assert len(store.current.global_pool) == 0


def test_rebuild_discards_previous_pools(store, sample_csv):
    store.ingest(sample_csv)
    store.ingest(row("Fresh", 5, "3:1:1:1:9"))
    pools = store.current
    assert pools.region_keys == [9]
    assert pools.global_pool.names == ["Fresh"]


def test_builder_settings():
    store = PoolStore(builder=PoolBuilder(capacity=2, recency_window=0, weight_exponent=1.0, region_count=3))
    store.ingest("\n".join([
        row("A", 4, "7:1:1:1:1"),
        row("B", 4, "7:1:1:1:1"),
        row("C", 4, "7:1:1:1:1"),
        row("D", 4, "6:1:1:1:1"),
        row("E", 4, "7:1:1:1:3"),
    ]))
    pools = store.current
    assert pools.region_pools[1].names == ["A", "B"]
    assert pools.region_pools[1].weight_sum == 8.0
    assert 3 not in pools.region_pools
    assert pools.global_pool.names == ["A", "B", "C", "E"]


def test_stats(store, sample_csv):
    store.ingest(sample_csv)
    stats = store.stats()
    assert stats["total_names"] == 5
    assert stats["regions_with_names"] == 3
    assert stats["global_pool_size"] == 5
    assert stats["region_sizes"] == {0: 2, 4: 2, 7: 1}


def test_score_to_weight():
    assert score_to_weight(-3) == 0.0
    assert score_to_weight(0) == 0.0
    assert score_to_weight(100) == pytest.approx(100 ** 0.9)


def test_name_record_rejects_negative_weight():
    with pytest.raises(ValueError):
        NameRecord(name="X", weight=-1.0)


def test_weight_sum_matches_running_total():
    pool = WeightedPool()
    for i in range(10):
        pool.add(NameRecord(name=f"N{i}", weight=0.1))
    total = 0.0
    for _ in range(10):
        total += 0.1
    assert pool.recompute_weight_sum() == total == 0.9999999999999999


def test_region_pool_lookup(store, sample_csv):
    store.ingest(sample_csv)
    assert store.current.region_pool(7).names == ["Dave"]
    assert store.current.region_pool(99) is None
