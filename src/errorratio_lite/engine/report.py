"""ReportWriter: stream (user, endpoint, error ratio) rows to a text sink.

Output format, tab separated, one row per line:

    UID<TAB>endpoint<TAB>error_ratio

Users come in first-seen order; within a user, endpoints come in
ascending id order (global first-seen order). Which endpoints appear for
a user is decided by the counter layout: every global endpoint for the
dense layout, only the observed ones for the sparse layout.

The ratio is errors / (entries - errors). When nothing succeeded the
ratio is the literal "inf", which for the dense layout includes pairs
the user never visited at all.

Rows are joined and written in batches of batch_size lines; the header
counts toward the first batch and the trailing partial batch is flushed
at the end.
"""
from __future__ import annotations

from typing import TextIO

from errorratio_lite.engine.config import DEFAULT_BATCH_SIZE
from errorratio_lite.engine.progress import ProgressTracker
from errorratio_lite.store.interner import EndpointInterner
from errorratio_lite.store.user_table import UserTable

HEADER = "UID\tendpoint\terror_ratio"
INFINITE_RATIO = "inf"


def format_ratio(entries: int, errors: int, precision: int = 7) -> str:
    """Error-to-success ratio as text.

    >>> format_ratio(10, 4)
    '0.6666667'
    >>> format_ratio(1, 0)
    '0'
    >>> format_ratio(5, 5)
    'inf'
    """
    successful = entries - errors
    if successful == 0:
        return INFINITE_RATIO
    return format(errors / successful, f".{precision}g")


class ReportWriter:
    """Writes the final report for a populated user table."""

    def __init__(
        self,
        sink: TextIO,
        batch_size: int = DEFAULT_BATCH_SIZE,
        precision: int = 7,
        progress_interval: float = 1.0,
    ) -> None:
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self._sink = sink
        self._batch_size = batch_size
        self._precision = precision
        self._progress_interval = progress_interval
        self.batches_written = 0
        self.rows_written = 0
        self.elapsed_s = 0.0

    def _flush(self, batch: list[str]) -> None:
        self._sink.write("\n".join(batch) + "\n")
        self.batches_written += 1
        batch.clear()

    def write(self, users: UserTable, endpoints: EndpointInterner) -> int:
        """Write header and all rows. Returns the number of rows (no header)."""
        progress = ProgressTracker("Writing report", len(users), self._progress_interval)
        endpoint_count = len(endpoints)
        lookup = endpoints.lookup
        precision = self._precision
        batch_size = self._batch_size

        batch = [HEADER]
        rows = 0
        for user_index, (user_id, store) in enumerate(users.items(), start=1):
            for endpoint_id, entries, errors in store.rows(endpoint_count):
                ratio = format_ratio(entries, errors, precision)
                batch.append(f"{user_id}\t{lookup(endpoint_id)}\t{ratio}")
                rows += 1
                if len(batch) >= batch_size:
                    self._flush(batch)
            progress.update(user_index)

        if batch:
            self._flush(batch)

        self.rows_written = rows
        self.elapsed_s = progress.finish(f"{rows} rows written")
        return rows
