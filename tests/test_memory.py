import pytest

from memory import MemoryStore


def test_capacity_keeps_most_recent_records_in_order():
    store = MemoryStore(capacity=50)
    for index in range(60):
        store.record(f"e{index}", f"r{index}", True)

    assert len(store) == 50
    assert [record.event for record in store] == [f"e{index}" for index in range(10, 60)]


def test_size_never_exceeds_capacity():
    store = MemoryStore(capacity=3)
    for index in range(10):
        store.record(str(index), "", index % 2 == 0)
        assert len(store) <= 3


def test_query_matches_event_or_result_case_insensitively():
    store = MemoryStore()
    store.record("read_file: README", "File contents", True)
    store.record("calculate: sum", "2 + 3 = 5", True)
    store.record("write_file: notes", "Error: disk FULL", False)

    assert [r.event for r in store.query("README")] == ["read_file: README"]
    assert [r.event for r in store.query("full")] == ["write_file: notes"]
    assert [r.event for r in store.query("READ_FILE")] == ["read_file: README"]
    assert store.query("missing") == []


def test_recent_and_stats():
    store = MemoryStore(capacity=5)
    store.record("a", "", True)
    store.record("b", "", False)
    store.record("c", "", True)

    assert [r.event for r in store.recent(2)] == ["b", "c"]
    assert store.recent(0) == []
    stats = store.stats()
    assert stats["total"] == 3
    assert stats["successful"] == 2
    assert stats["success_rate"] == pytest.approx(2 / 3)
    assert stats["capacity"] == 5


def test_empty_stats():
    assert MemoryStore().stats()["success_rate"] == 0.0


def test_invalid_capacity():
    with pytest.raises(ValueError):
        MemoryStore(capacity=0)
