"""Counter storage: endpoint interning, per-user counters, the user table.

Two counter layouts share CounterStoreBase: the dense CompactCounterArray
(one slot per global endpoint per user) and the sparse SparseCounterMap
(one slot per observed pair).
"""
from errorratio_lite.store.base import CounterStoreBase
from errorratio_lite.store.compact_array import CompactCounterArray
from errorratio_lite.store.interner import UNKNOWN_ENDPOINT, EndpointInterner
from errorratio_lite.store.sparse_map import SparseCounterMap
from errorratio_lite.store.user_table import LAYOUTS, UserTable, make_counter_store

__all__ = [
    "CompactCounterArray",
    "CounterStoreBase",
    "EndpointInterner",
    "LAYOUTS",
    "SparseCounterMap",
    "UNKNOWN_ENDPOINT",
    "UserTable",
    "make_counter_store",
]
