"""Error taxonomy for an analysis run.

Every error here is fatal: the pipeline never skips or repairs a line,
and nothing retries. I/O failures are not wrapped; OSError propagates
as-is so callers see the real cause.
"""
from __future__ import annotations


class AnalysisError(Exception):
    """Base class for fatal analysis errors."""


class MalformedLineError(AnalysisError, ValueError):
    """A log line has fewer fields than the record format requires."""

    def __init__(self, line_number: int, field_count: int, line: str = "") -> None:
        self.line_number = line_number
        self.field_count = field_count
        self.line = line
        super().__init__(
            f"Malformed log line {line_number}: expected at least 4 fields, "
            f"got {field_count}: {line[:120]!r}"
        )


class PassInconsistencyError(AnalysisError, RuntimeError):
    """The counting pass saw input the sizing pass never did.

    This means the file changed between the two reads.
    """
