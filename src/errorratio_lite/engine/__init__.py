"""Two-pass streaming aggregation engine.

Public API:
    analyze: input log -> report file, returns an AnalysisResult
    AggregationPipeline: the sizing and counting passes
    ReportWriter: batched report emission
    AnalyzerConfig: run tunables
    LogSource / MemoryLogSource: re-readable inputs of known size
"""

from errorratio_lite.engine.analyzer import analyze, write_report
from errorratio_lite.engine.config import AnalyzerConfig
from errorratio_lite.engine.pipeline import AggregationPipeline, PassStats
from errorratio_lite.engine.progress import ProgressTracker, format_duration
from errorratio_lite.engine.report import HEADER, ReportWriter, format_ratio
from errorratio_lite.engine.source import LogSource, MemoryLogSource
from errorratio_lite.engine.summary import AnalysisResult, format_summary

__all__ = [
    "AggregationPipeline",
    "AnalysisResult",
    "AnalyzerConfig",
    "HEADER",
    "LogSource",
    "MemoryLogSource",
    "PassStats",
    "ProgressTracker",
    "ReportWriter",
    "analyze",
    "format_duration",
    "format_ratio",
    "format_summary",
    "write_report",
]
