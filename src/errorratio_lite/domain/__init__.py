"""Domain types for access-log error-ratio analysis."""
from errorratio_lite.domain.errors import (
    AnalysisError,
    MalformedLineError,
    PassInconsistencyError,
)
from errorratio_lite.domain.record import LogRecord, decode_field, parse_line, split_fields

__all__ = [
    "AnalysisError",
    "LogRecord",
    "MalformedLineError",
    "PassInconsistencyError",
    "decode_field",
    "parse_line",
    "split_fields",
]
