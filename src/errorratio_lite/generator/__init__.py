"""Synthetic access-log generation."""

from errorratio_lite.generator.log_generator import STATUS_CODES, LogGenerator

__all__ = ["LogGenerator", "STATUS_CODES"]
