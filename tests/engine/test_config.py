"""Tests for AnalyzerConfig validation."""
from __future__ import annotations

import dataclasses

import pytest

from errorratio_lite.engine.config import AnalyzerConfig


class TestAnalyzerConfig:
    def test_defaults(self) -> None:
        config = AnalyzerConfig()
        assert config.layout == "sparse"
        assert config.batch_size == 1000
        assert config.growth == 1.5
        assert config.buffer_size == 16 * 1024 * 1024

    def test_frozen(self) -> None:
        config = AnalyzerConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.layout = "dense"  # type: ignore[misc]

    @pytest.mark.parametrize("kwargs", [
        {"buffer_size": 0},
        {"batch_size": 0},
        {"growth": 0.9},
        {"layout": "columnar"},
        {"progress_interval": 0},
        {"ratio_precision": 0},
    ])
    def test_invalid_values_rejected(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            AnalyzerConfig(**kwargs)
