"""Tests for mastery.core.store - MemoryStore and UnitOfWork staging."""

from __future__ import annotations

import pytest

from mastery.core.exceptions import StoreError
from mastery.core.store import MemoryStore, Transactional, UnitOfWork


class RecordingParticipant:
    """Minimal transactional participant tracking lifecycle calls."""

    def __init__(self):
        self.calls: list[str] = []

    def begin(self):
        self.calls.append("begin")

    def commit(self):
        self.calls.append("commit")

    def rollback(self):
        self.calls.append("rollback")


@pytest.fixture
def store():
    s = MemoryStore()
    s.put("ns", "a", 1)
    s.put("ns", "b", 2)
    return s


class TestMemoryStore:
    """Tests for the in-memory backing store."""

    def test_get_default(self):
        assert MemoryStore().get("ns", "missing", "dflt") == "dflt"

    def test_put_overwrites(self, store):
        store.put("ns", "a", 10)
        assert store.get("ns", "a") == 10

    def test_delete(self, store):
        assert store.delete("ns", "a") is True
        assert store.delete("ns", "a") is False
        assert store.keys("ns") == ["b"]

    def test_namespaces_are_isolated(self, store):
        assert store.get("other", "a") is None
        assert store.keys("other") == []

    def test_contains_and_items(self, store):
        assert store.contains("ns", "a")
        assert not store.contains("ns", "z")
        assert list(store.items("ns")) == [("a", 1), ("b", 2)]

    def test_none_value_is_contained(self):
        s = MemoryStore()
        s.put("ns", "k", None)
        assert s.contains("ns", "k")

    def test_tuple_keys(self):
        s = MemoryStore()
        s.put("by_user", ("ST1", 1), 0)
        assert s.get("by_user", ("ST1", 1)) == 0


class TestUnitOfWork:
    """Tests for staged writes over a store."""

    def test_reads_see_staged_writes(self, store):
        txn = UnitOfWork(store)
        txn.put("ns", "a", 100)
        assert txn.get("ns", "a") == 100
        assert store.get("ns", "a") == 1

    def test_commit_applies(self, store):
        txn = UnitOfWork(store)
        txn.put("ns", "c", 3)
        txn.delete("ns", "a")
        txn.commit()

        assert store.get("ns", "c") == 3
        assert not store.contains("ns", "a")
        assert txn.closed

    def test_rollback_discards(self, store):
        txn = UnitOfWork(store)
        txn.put("ns", "a", 100)
        txn.rollback()
        assert store.get("ns", "a") == 1

    def test_staged_delete_hides_key(self, store):
        txn = UnitOfWork(store)
        assert txn.delete("ns", "a") is True
        assert txn.get("ns", "a") is None
        assert not txn.contains("ns", "a")
        assert txn.keys("ns") == ["b"]

    def test_keys_merge_overlay(self, store):
        txn = UnitOfWork(store)
        txn.put("ns", "c", 3)
        txn.put("ns", "a", 9)
        assert txn.keys("ns") == ["a", "b", "c"]

    def test_pending_writes(self, store):
        txn = UnitOfWork(store)
        txn.put("ns", "x", 1)
        txn.put("ns", "x", 2)
        assert txn.pending_writes == 1

    def test_use_after_close_raises(self, store):
        txn = UnitOfWork(store)
        txn.commit()
        with pytest.raises(StoreError):
            txn.put("ns", "a", 5)
        with pytest.raises(StoreError):
            txn.commit()

    def test_rollback_after_close_is_noop(self, store):
        txn = UnitOfWork(store)
        txn.commit()
        txn.rollback()

    def test_context_manager_commits(self, store):
        with UnitOfWork(store) as txn:
            txn.put("ns", "c", 3)
        assert store.get("ns", "c") == 3

    def test_context_manager_rolls_back_on_error(self, store):
        with pytest.raises(RuntimeError):
            with UnitOfWork(store) as txn:
                txn.put("ns", "c", 3)
                raise RuntimeError("boom")
        assert not store.contains("ns", "c")


class TestParticipants:
    """Transactional participants follow the unit of work."""

    def test_protocol_check(self):
        assert isinstance(RecordingParticipant(), Transactional)
        assert not isinstance(object(), Transactional)

    def test_commit_lifecycle(self, store):
        participant = RecordingParticipant()
        with UnitOfWork(store, [participant]):
            pass
        assert participant.calls == ["begin", "commit"]

    def test_rollback_lifecycle(self, store):
        participant = RecordingParticipant()
        with pytest.raises(ValueError):
            with UnitOfWork(store, [participant]):
                raise ValueError("nope")
        assert participant.calls == ["begin", "rollback"]

    def test_non_transactional_ignored(self, store):
        with UnitOfWork(store, [object()]) as txn:
            txn.put("ns", "c", 1)
        assert store.get("ns", "c") == 1

    def test_enlisted_once(self, store):
        participant = RecordingParticipant()
        txn = UnitOfWork(store, [participant, participant])
        txn.commit()
        assert participant.calls == ["begin", "commit"]
