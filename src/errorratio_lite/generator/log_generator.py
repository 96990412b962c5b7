"""Generate synthetic access logs for testing and benchmarking.

Traffic pattern:
  - num_users users named user_1 .. user_N
  - num_endpoints endpoints named /endpoint_1 .. /endpoint_N
  - user and endpoint picked uniformly at random per line
  - status drawn uniformly from {200, 400, 403, 404, 500}, so roughly
    one line in five is a success
  - execution time 1-999 ms, random IPv4 source address

Everything comes from one seeded random.Random, so a given seed always
produces the same file.
"""
from __future__ import annotations

import os
import random
from collections.abc import Iterator

from errorratio_lite.engine.progress import ProgressTracker

STATUS_CODES = (200, 400, 403, 404, 500)


class LogGenerator:
    """Generate access-log lines in the analyzer's input format."""

    __slots__ = (
        "_seed", "_users", "_endpoints", "_total_lines", "_batch_size",
    )

    def __init__(
        self,
        num_users: int = 1000,
        num_endpoints: int = 300,
        total_lines: int = 100_000,
        seed: int = 42,
        batch_size: int = 10_000,
    ) -> None:
        if num_users < 1 or num_endpoints < 1:
            raise ValueError(
                f"num_users and num_endpoints must be positive, got "
                f"{num_users}, {num_endpoints}"
            )
        if total_lines < 0:
            raise ValueError(f"total_lines cannot be negative, got {total_lines}")
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self._seed = seed
        self._users = [f"user_{i + 1}" for i in range(num_users)]
        self._endpoints = [f"/endpoint_{i + 1}" for i in range(num_endpoints)]
        self._total_lines = total_lines
        self._batch_size = batch_size

    @property
    def users(self) -> list[str]:
        return list(self._users)

    @property
    def endpoints(self) -> list[str]:
        return list(self._endpoints)

    @property
    def total_lines(self) -> int:
        return self._total_lines

    @staticmethod
    def _random_ip(rng: random.Random) -> str:
        return (
            f"{rng.randint(1, 254)}.{rng.randint(0, 254)}."
            f"{rng.randint(0, 254)}.{rng.randint(1, 254)}"
        )

    def lines(self) -> Iterator[str]:
        """Yield total_lines log lines, without trailing newlines."""
        rng = random.Random(self._seed)
        users = self._users
        endpoints = self._endpoints
        for _ in range(self._total_lines):
            user = rng.choice(users)
            endpoint = rng.choice(endpoints)
            status = rng.choice(STATUS_CODES)
            elapsed_ms = rng.randint(1, 999)
            yield f"{self._random_ip(rng)} {user} {endpoint} {status} {elapsed_ms}"

    def write(self, path: str | os.PathLike[str], progress_interval: float = 1.0) -> int:
        """Write the log to path in batches. Returns the number of lines."""
        progress = ProgressTracker("Generating log", self._total_lines, progress_interval)
        written = 0
        batch: list[str] = []
        with open(path, "w", encoding="utf-8", newline="\n") as out:
            for line in self.lines():
                batch.append(line)
                written += 1
                if len(batch) >= self._batch_size:
                    out.write("\n".join(batch) + "\n")
                    batch.clear()
                progress.update(written)
            if batch:
                out.write("\n".join(batch) + "\n")
        progress.finish(f"Log file with {written} lines created: {os.fspath(path)}")
        return written
