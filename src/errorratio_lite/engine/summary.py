"""Run summary: what an analysis found and what it cost.

Formats AnalysisResult data into a readable block for terminal output.
"""
from __future__ import annotations

from dataclasses import dataclass

from errorratio_lite.engine.pipeline import PassStats


@dataclass(slots=True)
class AnalysisResult:
    """Outcome of a completed analysis run."""
    input_name: str
    output_path: str
    layout: str
    users: int
    endpoints: int
    rows_written: int
    sizing: PassStats
    counting: PassStats
    report_time_s: float
    saturated: int
    counter_slots: int
    memory_bytes: int

    @property
    def lines(self) -> int:
        return self.counting.lines

    @property
    def avg_slots_per_user(self) -> float:
        return self.counter_slots / self.users if self.users else 0.0

    @property
    def total_time_s(self) -> float:
        return self.sizing.elapsed_s + self.counting.elapsed_s + self.report_time_s


def format_summary(result: AnalysisResult) -> str:
    """Format an AnalysisResult as a readable report string."""
    lines = [
        f"=== {result.input_name} ===",
        f"Lines:             {result.lines:,}",
        f"Unique users:      {result.users:,}",
        f"Unique endpoints:  {result.endpoints:,}",
        f"Avg slots/user:    {result.avg_slots_per_user:.1f} ({result.layout} layout)",
        f"Counter memory:    {result.memory_bytes / 1024 / 1024:.1f} MiB",
        f"Rows written:      {result.rows_written:,} -> {result.output_path}",
        f"",
        f"Timing:",
        f"  Sizing pass:     {result.sizing.elapsed_s:.2f} s",
        f"  Counting pass:   {result.counting.elapsed_s:.2f} s",
        f"  Report:          {result.report_time_s:.2f} s",
        f"  Total:           {result.total_time_s:.2f} s",
    ]
    if result.saturated:
        lines.append(f"Saturated counts:  {result.saturated:,}")
    return "\n".join(lines)
