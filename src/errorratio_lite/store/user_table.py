"""UserTable: user id -> counter store, with explicit first-seen order.

Report rows are ordered by the user's first appearance in the log. That
order is kept in its own list rather than relying on dict iteration
order, so the report order is a property of this class and not of the
mapping type underneath it.
"""
from __future__ import annotations

import sys
from collections.abc import Iterator

from errorratio_lite.domain.types import UserId
from errorratio_lite.store.base import CounterStoreBase
from errorratio_lite.store.compact_array import DEFAULT_GROWTH, CompactCounterArray
from errorratio_lite.store.sparse_map import SparseCounterMap

LAYOUTS = ("sparse", "dense")


def make_counter_store(
    layout: str, initial_size: int = 0, growth: float = DEFAULT_GROWTH
) -> CounterStoreBase:
    """Build an empty counter store for the given layout name."""
    if layout == "dense":
        return CompactCounterArray(initial_size, growth=growth)
    if layout == "sparse":
        return SparseCounterMap()
    raise ValueError(f"Unknown counter layout {layout!r}, expected one of {LAYOUTS}")


class UserTable:
    """Get-or-create mapping from user id to its counter store.

    Args:
        layout: "sparse" or "dense", see make_counter_store()
        growth: slack multiplier for dense arrays
    """

    __slots__ = ("_layout", "_growth", "_users", "_order")

    def __init__(self, layout: str = "sparse", growth: float = DEFAULT_GROWTH) -> None:
        if layout not in LAYOUTS:
            raise ValueError(f"Unknown counter layout {layout!r}, expected one of {LAYOUTS}")
        self._layout = layout
        self._growth = growth
        self._users: dict[UserId, CounterStoreBase] = {}
        self._order: list[UserId] = []

    @property
    def layout(self) -> str:
        return self._layout

    def get_or_create(self, user_id: UserId, initial_size: int = 1) -> CounterStoreBase:
        """Return the user's store, creating it on first sight.

        initial_size is only a hint; the real size is set by resize_all()
        once the global endpoint count is known.
        """
        store = self._users.get(user_id)
        if store is None:
            store = make_counter_store(self._layout, initial_size, self._growth)
            self._users[user_id] = store
            self._order.append(user_id)
        return store

    def get(self, user_id: UserId) -> CounterStoreBase | None:
        return self._users.get(user_id)

    def resize_all(self, endpoint_count: int) -> None:
        """Size every user's store for endpoint_count endpoints."""
        for store in self._users.values():
            store.resize(endpoint_count)

    def items(self) -> Iterator[tuple[UserId, CounterStoreBase]]:
        """Yield (user_id, store) in first-seen order."""
        users = self._users
        for user_id in self._order:
            yield user_id, users[user_id]

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._users

    def total_slots(self) -> int:
        """Slots allocated across all users."""
        return sum(len(store) for store in self._users.values())

    def memory_usage_bytes(self) -> int:
        """Table shells, user id strings and every counter store."""
        total = sys.getsizeof(self._users) + sys.getsizeof(self._order)
        for user_id, store in self._users.items():
            total += sys.getsizeof(user_id) + store.memory_usage_bytes()
        return total
