"""Progress logging for long sequential passes.

A pass over a few hundred GB takes a while, so each task logs its
progress every `interval` percent, together with elapsed time and an
estimate of what is left. The check on every call is a single integer
comparison against the next reporting mark, cheap enough for per-line
calls in the hot loop.
"""
from __future__ import annotations

import logging
import time
from typing import Callable

log = logging.getLogger(__name__)


def format_duration(seconds: float) -> str:
    """Format seconds as HH:MM:SS (hours may exceed 24)."""
    seconds = max(0, int(seconds))
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


class ProgressTracker:
    """Logs start, periodic progress and finish of one task.

    Args:
        task: name shown in every log line
        total: amount of work in whatever unit update() receives
        interval: percent of progress between two log lines
        clock: monotonic time source, replaceable in tests
        unit: what the optional item count in update() counts
    """

    def __init__(
        self,
        task: str,
        total: int,
        interval: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        unit: str = "lines",
    ) -> None:
        self.task = task
        self._total = total
        self._interval = interval
        self._clock = clock
        self._unit = unit
        self._start = clock()
        self._next_mark = self._mark_for(interval)
        self.reports = 0
        log.info("Task '%s' started", task)

    def _mark_for(self, percent: float) -> int:
        if self._total <= 0:
            return 0
        return int(self._total * percent / 100)

    @property
    def elapsed(self) -> float:
        return self._clock() - self._start

    def update(self, done: int, items: int | None = None) -> None:
        """Record that `done` of total is complete; log if a mark was passed.

        items, when given, is shown as a count of `unit` (e.g. lines read).
        """
        if done < self._next_mark or self._total <= 0:
            return
        percent = round(100 * done / self._total, 2)
        elapsed = self.elapsed
        estimated_total = elapsed / percent * 100 if percent > 0 else 0.0
        remaining = estimated_total - elapsed
        progress = f"{percent}%" if items is None else f"{percent}% ({items} {self._unit})"
        log.info(
            "'%s' progress: %s, spent: %s, estimated remaining: %s, estimated total: %s",
            self.task,
            progress,
            format_duration(elapsed),
            format_duration(remaining),
            format_duration(estimated_total),
        )
        self.reports += 1
        self._next_mark = self._mark_for(percent + self._interval)

    def finish(self, message: str | None = None) -> float:
        """Log completion and return the elapsed seconds."""
        elapsed = self.elapsed
        log.info("Task '%s' finished, spent: %s", self.task, format_duration(elapsed))
        if message:
            log.info(message)
        return elapsed
