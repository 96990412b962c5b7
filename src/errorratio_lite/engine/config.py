"""Run configuration for an analysis.

All knobs live on one frozen dataclass so a run can be described (and
logged) as a single value. The CLI maps its flags one-to-one onto the
fields.
"""
from __future__ import annotations

from dataclasses import dataclass

from errorratio_lite.store.compact_array import DEFAULT_GROWTH
from errorratio_lite.store.user_table import LAYOUTS

DEFAULT_BUFFER_SIZE = 16 * 1024 * 1024
DEFAULT_BATCH_SIZE = 1000


@dataclass(frozen=True, slots=True)
class AnalyzerConfig:
    """Tunables for the two-pass aggregation and the report.

    buffer_size:        read buffer for each pass, in bytes
    batch_size:         report rows buffered per write
    growth:             slack multiplier for dense counter arrays
    layout:             "sparse" (observed pairs) or "dense" (cross-product)
    progress_interval:  percent of progress between progress log lines
    ratio_precision:    significant digits in the ratio column
    """
    buffer_size: int = DEFAULT_BUFFER_SIZE
    batch_size: int = DEFAULT_BATCH_SIZE
    growth: float = DEFAULT_GROWTH
    layout: str = "sparse"
    progress_interval: float = 1.0
    ratio_precision: int = 7

    def __post_init__(self) -> None:
        if self.buffer_size < 1:
            raise ValueError(f"buffer_size must be positive, got {self.buffer_size}")
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {self.batch_size}")
        if self.growth < 1.0:
            raise ValueError(f"growth must be >= 1.0, got {self.growth}")
        if self.layout not in LAYOUTS:
            raise ValueError(f"layout must be one of {LAYOUTS}, got {self.layout!r}")
        if self.progress_interval <= 0:
            raise ValueError(
                f"progress_interval must be positive, got {self.progress_interval}"
            )
        if self.ratio_precision < 1:
            raise ValueError(
                f"ratio_precision must be positive, got {self.ratio_precision}"
            )
