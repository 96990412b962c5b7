"""EndpointInterner: bidirectional endpoint path <-> dense integer id.

Ids start at 0 and are handed out in strict first-seen order, so an id
doubles as an index into per-user counter storage. The table is
append-only: nothing is ever removed or renumbered during a run.

There is no upper bound on the number of paths. The expected domain tops
out at a few thousand endpoints; an input with unbounded distinct paths
grows this table without limit.
"""
from __future__ import annotations

import sys

from errorratio_lite.domain.types import EndpointId, EndpointPath

UNKNOWN_ENDPOINT = "unknown"


class EndpointInterner:
    """Append-only string interning table.

    Forward lookups go through a dict, reverse lookups through a list
    indexed by id.
    """

    __slots__ = ("_ids", "_paths")

    def __init__(self) -> None:
        self._ids: dict[EndpointPath, EndpointId] = {}
        self._paths: list[EndpointPath] = []

    def intern(self, path: EndpointPath) -> EndpointId:
        """Return the id for path, assigning the next free id if unseen."""
        endpoint_id = self._ids.get(path)
        if endpoint_id is None:
            endpoint_id = len(self._paths)
            self._ids[path] = endpoint_id
            self._paths.append(path)
        return endpoint_id

    def get_id(self, path: EndpointPath) -> EndpointId | None:
        """Return the id for path without assigning one."""
        return self._ids.get(path)

    def lookup(self, endpoint_id: EndpointId) -> EndpointPath:
        """Return the path for an id.

        Out-of-range ids yield "unknown" instead of raising. Ids only come
        from intern(), so this should not happen in practice.
        """
        if 0 <= endpoint_id < len(self._paths):
            return self._paths[endpoint_id]
        return UNKNOWN_ENDPOINT

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, path: object) -> bool:
        return path in self._ids

    def memory_usage_bytes(self) -> int:
        """Dict and list shells plus each path string once."""
        total = sys.getsizeof(self._ids) + sys.getsizeof(self._paths)
        total += sum(sys.getsizeof(p) for p in self._paths)
        return total
