"""CompactCounterArray: dense counter slots indexed by endpoint id.

Layout (struct-of-arrays, one pair of columns per user):
    entries:  array('I')   uint32, contiguous
    errors:   array('I')   uint32, contiguous

Slot i lives at entries[i] / errors[i]. Reading or writing past the end
grows both columns in place; new slots are zero. The growth multiplier
decides how much slack a grow reserves: 1.0 is exact fit (every
one-past-the-end access reallocates), larger values amortize repeated
growth. resize() exists so the pipeline can pre-grow once, after the
sizing pass, and never reallocate while counting.

This is the reference layout: every user pays for every endpoint seen
anywhere in the file, and the report covers the full cross-product of
users and endpoints. See SparseCounterMap for the memory-bounded layout.
"""
from __future__ import annotations

import array
import sys
from collections.abc import Iterator

from errorratio_lite.domain.types import COUNTER_MAX, EndpointId
from errorratio_lite.store.base import CounterStoreBase

DEFAULT_GROWTH = 1.5


def _zeros(n: int) -> array.array:
    return array.array("I", bytes(n * array.array("I").itemsize))


class CompactCounterArray(CounterStoreBase):
    """Auto-growing array of (entries, errors) counter pairs.

    Args:
        initial_size: slots allocated up front (a hint, may be 0)
        growth: slack multiplier applied on every grow; clamped to >= 1
    """

    __slots__ = ("_entries", "_errors", "_growth")

    def __init__(self, initial_size: int = 0, growth: float = DEFAULT_GROWTH) -> None:
        if initial_size < 0:
            raise ValueError(f"initial_size cannot be negative, got {initial_size}")
        self._growth = max(1.0, growth)
        self._entries = _zeros(initial_size)
        self._errors = _zeros(initial_size)

    @property
    def growth(self) -> float:
        return self._growth

    def _grow_to(self, min_length: int) -> None:
        target = max(min_length, int(min_length * self._growth))
        extra = target - len(self._entries)
        if extra > 0:
            self._entries.extend(_zeros(extra))
            self._errors.extend(_zeros(extra))

    def _ensure_index(self, index: int) -> None:
        if index < 0:
            raise IndexError(f"endpoint id cannot be negative, got {index}")
        if index >= len(self._entries):
            self._grow_to(index + 1)

    def resize(self, endpoint_count: int) -> None:
        """Pre-grow to endpoint_count * growth slots if currently shorter."""
        if endpoint_count > len(self._entries):
            self._grow_to(endpoint_count)

    def get(self, endpoint_id: EndpointId) -> tuple[int, int]:
        self._ensure_index(endpoint_id)
        return self._entries[endpoint_id], self._errors[endpoint_id]

    def set(self, endpoint_id: EndpointId, entries: int, errors: int) -> None:
        """Overwrite one slot. Rejects values that break errors <= entries."""
        if not 0 <= errors <= entries <= COUNTER_MAX:
            raise ValueError(
                f"Invalid counter pair entries={entries}, errors={errors}"
            )
        self._ensure_index(endpoint_id)
        self._entries[endpoint_id] = entries
        self._errors[endpoint_id] = errors

    def increment(self, endpoint_id: EndpointId, is_error: bool) -> bool:
        self._ensure_index(endpoint_id)
        entries = self._entries[endpoint_id]
        if entries >= COUNTER_MAX:
            # errors can never pass entries, so stop both at the ceiling
            return False
        self._entries[endpoint_id] = entries + 1
        if is_error:
            self._errors[endpoint_id] += 1
        return True

    def rows(self, endpoint_count: int) -> Iterator[tuple[EndpointId, int, int]]:
        self.resize(endpoint_count)
        entries = self._entries
        errors = self._errors
        for endpoint_id in range(endpoint_count):
            yield endpoint_id, entries[endpoint_id], errors[endpoint_id]

    def __len__(self) -> int:
        return len(self._entries)

    def memory_usage_bytes(self) -> int:
        return sys.getsizeof(self._entries) + sys.getsizeof(self._errors)
