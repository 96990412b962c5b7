"""Tests for the synthetic log generator."""
from __future__ import annotations

from collections import Counter
from pathlib import Path

import pytest

from errorratio_lite.domain.record import parse_line
from errorratio_lite.engine.analyzer import analyze
from errorratio_lite.engine.config import AnalyzerConfig
from errorratio_lite.generator.log_generator import STATUS_CODES, LogGenerator


class TestLogGenerator:
    def test_generates_correct_count(self) -> None:
        gen = LogGenerator(total_lines=500, seed=42)
        assert sum(1 for _ in gen.lines()) == 500

    def test_lines_parse(self) -> None:
        gen = LogGenerator(num_users=5, num_endpoints=4, total_lines=200, seed=1)
        for line in gen.lines():
            fields = line.split(" ")
            assert len(fields) == 5
            rec = parse_line(line)
            assert rec.user_id in gen.users
            assert rec.endpoint in gen.endpoints
            assert int(rec.status) in STATUS_CODES
            assert 1 <= int(fields[4]) <= 999

    def test_names_follow_pattern(self) -> None:
        gen = LogGenerator(num_users=3, num_endpoints=2)
        assert gen.users == ["user_1", "user_2", "user_3"]
        assert gen.endpoints == ["/endpoint_1", "/endpoint_2"]

    def test_deterministic_with_seed(self) -> None:
        a = list(LogGenerator(total_lines=100, seed=99).lines())
        b = list(LogGenerator(total_lines=100, seed=99).lines())
        c = list(LogGenerator(total_lines=100, seed=100).lines())
        assert a == b
        assert a != c

    def test_status_mix_is_mostly_errors(self) -> None:
        gen = LogGenerator(total_lines=5000, seed=7)
        statuses = Counter(parse_line(line).status for line in gen.lines())
        assert set(statuses) == {str(s) for s in STATUS_CODES}
        # one status in five is a success
        assert 800 < statuses["200"] < 1200

    @pytest.mark.parametrize("kwargs", [
        {"num_users": 0},
        {"num_endpoints": 0},
        {"total_lines": -1},
        {"batch_size": 0},
    ])
    def test_invalid_arguments(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            LogGenerator(**kwargs)


class TestWrite:
    def test_write_matches_lines(self, tmp_path: Path) -> None:
        gen = LogGenerator(num_users=10, num_endpoints=5, total_lines=1234, seed=3, batch_size=100)
        path = tmp_path / "gen.log"
        assert gen.write(path) == 1234
        assert path.read_text(encoding="utf-8").splitlines() == list(gen.lines())

    def test_empty_log(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.log"
        assert LogGenerator(total_lines=0).write(path) == 0
        assert path.read_text(encoding="utf-8") == ""

    def test_generated_log_analyzes(self, tmp_path: Path) -> None:
        gen = LogGenerator(num_users=20, num_endpoints=8, total_lines=3000, seed=5)
        log_path = tmp_path / "gen.log"
        gen.write(log_path)
        result = analyze(log_path, tmp_path / "out.tsv", AnalyzerConfig(layout="dense"))
        assert result.lines == 3000
        assert result.users == 20
        assert result.endpoints == 8
        assert result.rows_written == 20 * 8
