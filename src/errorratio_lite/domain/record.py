"""LogRecord -- the fields of one access-log line the analysis consumes.

Line format (separated by runs of spaces and/or tabs):

    IP  user-id  endpoint-path  status-code  execution-time-ms

Only user-id, endpoint-path and the first character of status-code
matter. The execution time is optional as far as parsing goes: a line
needs at least four fields.

Fields are decoded as UTF-8 with surrogateescape, so ids that are not
valid UTF-8 stay distinct and are written back byte for byte.
"""
from __future__ import annotations

from dataclasses import dataclass

from errorratio_lite.domain.errors import MalformedLineError
from errorratio_lite.domain.types import (
    FIELD_ENDPOINT,
    FIELD_STATUS,
    FIELD_USER,
    MIN_FIELDS,
    EndpointPath,
    UserId,
)

FIELD_ENCODING = "utf-8"
FIELD_ERRORS = "surrogateescape"


@dataclass(frozen=True, slots=True)
class LogRecord:
    """Parsed view of a single log line."""
    user_id: UserId
    endpoint: EndpointPath
    status: str

    @property
    def is_error(self) -> bool:
        """Anything whose status does not start with '2' counts as an error."""
        return not self.status.startswith("2")


def decode_field(raw: bytes) -> str:
    """Lossless bytes -> str for ids; see FIELD_ERRORS."""
    return raw.decode(FIELD_ENCODING, FIELD_ERRORS)


def split_fields(line: bytes, line_number: int) -> list[bytes]:
    """Split a raw line on runs of spaces and tabs and check the field count.

    The line terminator (\\n or \\r\\n) is dropped first. Other control
    characters stay inside their field.
    """
    fields = [f for f in line.rstrip(b"\r\n").replace(b"\t", b" ").split(b" ") if f]
    if len(fields) < MIN_FIELDS:
        raise MalformedLineError(
            line_number, len(fields), line.decode(FIELD_ENCODING, "replace").rstrip()
        )
    return fields


def parse_line(line: str | bytes, line_number: int = 0) -> LogRecord:
    """Parse one line into a LogRecord.

    Raises MalformedLineError when fewer than four fields are present.
    """
    if isinstance(line, str):
        line = line.encode(FIELD_ENCODING, FIELD_ERRORS)
    fields = split_fields(line, line_number)
    return LogRecord(
        user_id=decode_field(fields[FIELD_USER]),
        endpoint=decode_field(fields[FIELD_ENDPOINT]),
        status=decode_field(fields[FIELD_STATUS]),
    )
