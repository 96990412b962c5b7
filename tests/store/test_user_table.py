"""Tests for UserTable -- get-or-create with first-seen ordering."""
from __future__ import annotations

import pytest

from errorratio_lite.store.compact_array import CompactCounterArray
from errorratio_lite.store.sparse_map import SparseCounterMap
from errorratio_lite.store.user_table import UserTable, make_counter_store


class TestUserTable:
    def test_get_or_create_returns_same_store(self) -> None:
        table = UserTable()
        first = table.get_or_create("alice")
        assert table.get_or_create("alice") is first
        assert len(table) == 1

    def test_get_does_not_create(self) -> None:
        table = UserTable()
        assert table.get("ghost") is None
        assert "ghost" not in table
        assert len(table) == 0

    def test_items_in_first_seen_order(self) -> None:
        table = UserTable()
        for user in ["zed", "alice", "mike", "alice", "zed", "bob"]:
            table.get_or_create(user)
        assert [u for u, _ in table.items()] == ["zed", "alice", "mike", "bob"]

    def test_layout_selects_store_type(self) -> None:
        assert isinstance(UserTable("dense").get_or_create("a"), CompactCounterArray)
        assert isinstance(UserTable("sparse").get_or_create("a"), SparseCounterMap)

    def test_unknown_layout_rejected(self) -> None:
        with pytest.raises(ValueError, match="layout"):
            UserTable("columnar")
        with pytest.raises(ValueError, match="layout"):
            make_counter_store("columnar")

    def test_resize_all_reaches_global_count(self) -> None:
        table = UserTable("dense", growth=1.0)
        for user in ("a", "b", "c"):
            table.get_or_create(user, initial_size=1)
        table.resize_all(250)
        for _, store in table.items():
            assert len(store) >= 250

    def test_total_slots(self) -> None:
        table = UserTable("sparse")
        table.get_or_create("a").increment(0, is_error=False)
        table.get_or_create("b").increment(0, is_error=False)
        table.get_or_create("b").increment(5, is_error=False)
        assert table.total_slots() == 3

    def test_memory_usage_counts_users(self) -> None:
        table = UserTable("dense", growth=1.0)
        before = table.memory_usage_bytes()
        for i in range(100):
            table.get_or_create(f"user_{i}", initial_size=50)
        assert table.memory_usage_bytes() > before
