"""Log sources: a re-readable, line-oriented byte stream of known size.

The pipeline reads its input twice, front to back, and needs the total
size up front to report progress. LogSource covers files on disk;
MemoryLogSource wraps a bytes buffer for tests and small inputs.
"""
from __future__ import annotations

import io
import os
from pathlib import Path
from typing import BinaryIO

from errorratio_lite.engine.config import DEFAULT_BUFFER_SIZE


class LogSource:
    """A log file opened fresh, read-only and buffered, for every pass."""

    def __init__(self, path: str | os.PathLike[str], buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        self._path = Path(path)
        self._buffer_size = buffer_size

    @property
    def name(self) -> str:
        return str(self._path)

    @property
    def total_bytes(self) -> int:
        return self._path.stat().st_size

    def open(self) -> BinaryIO:
        return open(self._path, "rb", buffering=self._buffer_size)


class MemoryLogSource(LogSource):
    """In-memory log contents, same interface as LogSource."""

    def __init__(self, data: bytes | str, name: str = "<memory>") -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._data = data
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def total_bytes(self) -> int:
        return len(self._data)

    def open(self) -> BinaryIO:
        return io.BytesIO(self._data)
