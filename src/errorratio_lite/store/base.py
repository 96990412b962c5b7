"""Abstract base for per-user counter stores.

Both CompactCounterArray (dense) and SparseCounterMap (sparse) implement
this interface. The pipeline and the report writer only talk to the
base class, so the layout is a configuration choice.

Each slot holds two unsigned counters for one (user, endpoint id) pair:
entries (all lines) and errors (lines whose status does not start with
'2'). INVARIANT: errors <= entries for every slot.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator

from errorratio_lite.domain.types import EndpointId


class CounterStoreBase(ABC):
    """Interface that both counter layouts implement."""

    @abstractmethod
    def increment(self, endpoint_id: EndpointId, is_error: bool) -> bool:
        """Count one line for endpoint_id.

        Returns False if a counter was already at its maximum and the
        increment saturated instead of wrapping.
        """
        ...

    @abstractmethod
    def get(self, endpoint_id: EndpointId) -> tuple[int, int]:
        """Return (entries, errors) for endpoint_id."""
        ...

    @abstractmethod
    def resize(self, endpoint_count: int) -> None:
        """Prepare storage for endpoint_count distinct endpoints."""
        ...

    @abstractmethod
    def rows(self, endpoint_count: int) -> Iterator[tuple[EndpointId, int, int]]:
        """Yield (endpoint_id, entries, errors) in ascending id order.

        Which ids are yielded is the layout's report policy: the dense
        layout yields every id below endpoint_count, the sparse layout
        only the ids that were counted.
        """
        ...

    @abstractmethod
    def __len__(self) -> int:
        """Number of slots currently allocated."""
        ...

    @abstractmethod
    def memory_usage_bytes(self) -> int:
        """Approximate memory consumption of this store."""
        ...
