"""AggregationPipeline: two sequential passes over one access log.

Endpoint ids are discovered while scanning, so the final number of
endpoints is only known after the whole file has been read once. Rather
than regrow every user's counters while counting, the pipeline reads
the file twice:

    1. Sizing pass: register every user and intern every endpoint.
       Status and timing fields are ignored. Afterwards every user's
       counter store is resized to the global endpoint count.
    2. Counting pass: resolve the existing user and endpoint id for each
       line and bump (entries, errors) for that pair. Nothing new may
       appear here; if it does, the file changed between the passes.

Fields are split on runs of spaces and tabs only (see split_fields).
Memory depends on the number of users and endpoints, never on the size
of the file. A line with fewer than four fields aborts the run.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from errorratio_lite.domain.errors import PassInconsistencyError
from errorratio_lite.domain.record import decode_field, split_fields
from errorratio_lite.domain.types import FIELD_ENDPOINT, FIELD_STATUS, FIELD_USER
from errorratio_lite.engine.config import AnalyzerConfig
from errorratio_lite.engine.progress import ProgressTracker
from errorratio_lite.engine.source import LogSource
from errorratio_lite.store.interner import EndpointInterner
from errorratio_lite.store.user_table import UserTable

log = logging.getLogger(__name__)

_ERROR_FREE_PREFIX = ord("2")


@dataclass(slots=True)
class PassStats:
    """What a single pass over the input consumed."""
    name: str
    lines: int
    bytes_read: int
    elapsed_s: float


class AggregationPipeline:
    """Owns the user table and endpoint interner for one run.

    Call run(), or sizing_pass() followed by counting_pass(). Both
    passes open the source afresh and read it front to back.
    """

    def __init__(self, source: LogSource, config: AnalyzerConfig | None = None) -> None:
        self._source = source
        self._config = config or AnalyzerConfig()
        self.users = UserTable(layout=self._config.layout, growth=self._config.growth)
        self.endpoints = EndpointInterner()
        self.sizing_stats: PassStats | None = None
        self.counting_stats: PassStats | None = None
        self.saturated = 0

    @property
    def config(self) -> AnalyzerConfig:
        return self._config

    def sizing_pass(self) -> PassStats:
        """Discover all users and endpoints, then pre-size counter stores."""
        total = self._source.total_bytes
        progress = ProgressTracker("Sizing pass", total, self._config.progress_interval)
        get_or_create = self.users.get_or_create
        intern = self.endpoints.intern

        lines = 0
        bytes_read = 0
        with self._source.open() as stream:
            for line in stream:
                lines += 1
                bytes_read += len(line)
                fields = split_fields(line, lines)
                get_or_create(decode_field(fields[FIELD_USER]), 1)
                intern(decode_field(fields[FIELD_ENDPOINT]))
                progress.update(bytes_read, lines)

        endpoint_count = len(self.endpoints)
        log.info(
            "Found %d users and %d endpoints, resizing counters",
            len(self.users), endpoint_count,
        )
        self.users.resize_all(endpoint_count)

        elapsed = progress.finish(f"{lines} lines processed")
        self.sizing_stats = PassStats("sizing", lines, bytes_read, elapsed)
        return self.sizing_stats

    def counting_pass(self) -> PassStats:
        """Count entries and errors for every (user, endpoint) pair.

        Raises PassInconsistencyError if a user, an endpoint or the line
        count differs from what the sizing pass saw.
        """
        if self.sizing_stats is None:
            raise RuntimeError("counting_pass() requires a completed sizing_pass()")

        total = self._source.total_bytes
        progress = ProgressTracker("Counting pass", total, self._config.progress_interval)
        get_user = self.users.get
        get_id = self.endpoints.get_id

        lines = 0
        bytes_read = 0
        saturated = 0
        with self._source.open() as stream:
            for line in stream:
                lines += 1
                bytes_read += len(line)
                fields = split_fields(line, lines)
                user_id = decode_field(fields[FIELD_USER])
                store = get_user(user_id)
                if store is None:
                    raise PassInconsistencyError(
                        f"Line {lines}: user {user_id!r} was not seen in the sizing pass"
                    )
                path = decode_field(fields[FIELD_ENDPOINT])
                endpoint_id = get_id(path)
                if endpoint_id is None:
                    raise PassInconsistencyError(
                        f"Line {lines}: endpoint {path!r} was not seen in the sizing pass"
                    )
                if not store.increment(endpoint_id, fields[FIELD_STATUS][0] != _ERROR_FREE_PREFIX):
                    saturated += 1
                progress.update(bytes_read, lines)

        if lines != self.sizing_stats.lines:
            raise PassInconsistencyError(
                f"Counting pass read {lines} lines, sizing pass read "
                f"{self.sizing_stats.lines}"
            )
        if saturated:
            log.warning(
                "%d increments saturated at the counter maximum; "
                "affected ratios are approximate", saturated,
            )

        elapsed = progress.finish(f"{lines} lines processed")
        self.saturated = saturated
        self.counting_stats = PassStats("counting", lines, bytes_read, elapsed)
        return self.counting_stats

    def run(self) -> tuple[PassStats, PassStats]:
        """Run both passes in order."""
        log.info("Analyzing '%s' (%d bytes)", self._source.name, self._source.total_bytes)
        return self.sizing_pass(), self.counting_pass()
