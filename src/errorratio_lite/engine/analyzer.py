"""analyze(): run the full job from an input path to a report file.

The report is written to a temporary file in the output directory and
moved into place only after the last row is flushed. A failed run never
leaves a partial report at the output path.
"""
from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from errorratio_lite.domain.record import FIELD_ENCODING, FIELD_ERRORS
from errorratio_lite.engine.config import AnalyzerConfig
from errorratio_lite.engine.pipeline import AggregationPipeline
from errorratio_lite.engine.report import ReportWriter
from errorratio_lite.engine.source import LogSource
from errorratio_lite.engine.summary import AnalysisResult

log = logging.getLogger(__name__)


def _default_file_mode() -> int:
    """Mode a plain open() would give a new file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_report(
    pipeline: AggregationPipeline, output_path: str | os.PathLike[str]
) -> ReportWriter:
    """Write the pipeline's report atomically to output_path."""
    config = pipeline.config
    target = Path(output_path)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
    )
    try:
        with open(
            fd, "w", encoding=FIELD_ENCODING, errors=FIELD_ERRORS, newline="\n"
        ) as sink:
            writer = ReportWriter(
                sink,
                batch_size=config.batch_size,
                precision=config.ratio_precision,
                progress_interval=config.progress_interval,
            )
            writer.write(pipeline.users, pipeline.endpoints)
        # mkstemp creates 0600; give the report the usual mode
        os.chmod(tmp_name, _default_file_mode())
        os.replace(tmp_name, target)
    except BaseException:
        os.unlink(tmp_name)
        raise
    return writer


def analyze(
    input_path: str | os.PathLike[str] | LogSource,
    output_path: str | os.PathLike[str],
    config: AnalyzerConfig | None = None,
) -> AnalysisResult:
    """Analyze an access log and write the per-(user, endpoint) error ratios.

    input_path may also be a ready LogSource (e.g. a MemoryLogSource).
    """
    config = config or AnalyzerConfig()
    if isinstance(input_path, LogSource):
        source = input_path
    else:
        source = LogSource(input_path, buffer_size=config.buffer_size)

    pipeline = AggregationPipeline(source, config)
    sizing, counting = pipeline.run()
    writer = write_report(pipeline, output_path)

    log.info("Everything is complete")
    return AnalysisResult(
        input_name=source.name,
        output_path=str(output_path),
        layout=config.layout,
        users=len(pipeline.users),
        endpoints=len(pipeline.endpoints),
        rows_written=writer.rows_written,
        sizing=sizing,
        counting=counting,
        report_time_s=writer.elapsed_s,
        saturated=pipeline.saturated,
        counter_slots=pipeline.users.total_slots(),
        memory_bytes=(
            pipeline.users.memory_usage_bytes()
            + pipeline.endpoints.memory_usage_bytes()
        ),
    )
