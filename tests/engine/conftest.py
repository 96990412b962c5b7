"""Shared fixtures for engine tests."""
from __future__ import annotations

import random
from collections import Counter
from pathlib import Path

import pytest

# The five-line fragment from the problem statement
SAMPLE_LOG = (
    "153.12.279.13 hGsd8sdk /admin 200 121\n"
    "153.12.279.13 hGsd8sdk /user/contacts 400 10\n"
    "153.12.279.31 hGsd8sdk /user/contacts 400 10\n"
    "13.0.163.102 lxY7nKxl /user/contacts 200 452\n"
    "13.0.163.102 lxY7nKxl /messages 403 10\n"
)

SEED = 42


def random_log(n: int, users: int = 20, endpoints: int = 15, seed: int = SEED) -> str:
    """n lines with mixed separators and statuses, fixed seed."""
    rng = random.Random(seed)
    out = []
    for _ in range(n):
        sep = rng.choice([" ", "\t", "  ", " \t "])
        fields = [
            f"10.0.{rng.randint(0, 255)}.{rng.randint(1, 254)}",
            f"u{rng.randrange(users)}",
            f"/e{rng.randrange(endpoints)}",
            str(rng.choice([200, 201, 204, 301, 400, 403, 404, 500])),
            str(rng.randint(1, 999)),
        ]
        out.append(sep.join(fields))
    return "\n".join(out) + "\n"


def expected_counts(log_text: str) -> Counter:
    """Brute-force (user, endpoint) -> [entries, errors] for comparison."""
    counts: Counter = Counter()
    for line in log_text.splitlines():
        _, user, endpoint, status, *_ = line.split()
        counts[(user, endpoint, "entries")] += 1
        if not status.startswith("2"):
            counts[(user, endpoint, "errors")] += 1
    return counts


@pytest.fixture
def sample_log() -> str:
    return SAMPLE_LOG


@pytest.fixture
def sample_log_file(tmp_path: Path) -> Path:
    path = tmp_path / "access.log"
    path.write_text(SAMPLE_LOG, encoding="utf-8")
    return path
