"""SparseCounterMap: counter slots only for endpoints a user touched.

Layout:
    slots:    dict[endpoint_id -> slot index]
    entries:  array('I')   uint32, one per observed endpoint
    errors:   array('I')

Memory scales with observed (user, endpoint) pairs instead of
users x global endpoints, and the report only covers pairs that occur
in the log. Counting semantics match CompactCounterArray exactly.
"""
from __future__ import annotations

import array
import sys
from collections.abc import Iterator

from errorratio_lite.domain.types import COUNTER_MAX, EndpointId
from errorratio_lite.store.base import CounterStoreBase


class SparseCounterMap(CounterStoreBase):
    """Per-user map of endpoint id -> (entries, errors)."""

    __slots__ = ("_slots", "_entries", "_errors")

    def __init__(self) -> None:
        self._slots: dict[EndpointId, int] = {}
        self._entries = array.array("I")
        self._errors = array.array("I")

    def resize(self, endpoint_count: int) -> None:
        # Slots are created on first increment; nothing to pre-size.
        pass

    def get(self, endpoint_id: EndpointId) -> tuple[int, int]:
        if endpoint_id < 0:
            raise IndexError(f"endpoint id cannot be negative, got {endpoint_id}")
        slot = self._slots.get(endpoint_id)
        if slot is None:
            return 0, 0
        return self._entries[slot], self._errors[slot]

    def increment(self, endpoint_id: EndpointId, is_error: bool) -> bool:
        slot = self._slots.get(endpoint_id)
        if slot is None:
            if endpoint_id < 0:
                raise IndexError(f"endpoint id cannot be negative, got {endpoint_id}")
            slot = len(self._entries)
            self._slots[endpoint_id] = slot
            self._entries.append(0)
            self._errors.append(0)
        entries = self._entries[slot]
        if entries >= COUNTER_MAX:
            return False
        self._entries[slot] = entries + 1
        if is_error:
            self._errors[slot] += 1
        return True

    def rows(self, endpoint_count: int) -> Iterator[tuple[EndpointId, int, int]]:
        entries = self._entries
        errors = self._errors
        for endpoint_id in sorted(self._slots):
            if endpoint_id < endpoint_count:
                slot = self._slots[endpoint_id]
                yield endpoint_id, entries[slot], errors[slot]

    def __len__(self) -> int:
        return len(self._slots)

    def memory_usage_bytes(self) -> int:
        return (
            sys.getsizeof(self._slots)
            + sys.getsizeof(self._entries)
            + sys.getsizeof(self._errors)
        )
