"""Shared type aliases and constants used across the domain."""
from __future__ import annotations

from typing import TypeAlias

UserId: TypeAlias = str
EndpointPath: TypeAlias = str
EndpointId: TypeAlias = int  # dense, assigned in first-seen order

# IP, user-id, endpoint-path, status-code, execution-time-ms
FIELD_USER = 1
FIELD_ENDPOINT = 2
FIELD_STATUS = 3
MIN_FIELDS = 4

# uint32 counters; increments past this value saturate
COUNTER_MAX = 0xFFFFFFFF
