"""Tests for log line parsing and the error taxonomy."""
from __future__ import annotations

import pytest

from errorratio_lite.domain.errors import (
    AnalysisError,
    MalformedLineError,
    PassInconsistencyError,
)
from errorratio_lite.domain.record import LogRecord, decode_field, parse_line, split_fields


class TestParseLine:
    def test_parses_sample_line(self) -> None:
        rec = parse_line("153.12.279.13 hGsd8sdk /admin 200 121")
        assert rec == LogRecord(user_id="hGsd8sdk", endpoint="/admin", status="200")
        assert not rec.is_error

    def test_non_2xx_is_error(self) -> None:
        for status in ("400", "403", "404", "500", "301", "100"):
            rec = parse_line(f"1.2.3.4 u /x {status} 5")
            assert rec.is_error, status

    def test_any_2xx_is_success(self) -> None:
        for status in ("200", "201", "204", "299"):
            assert not parse_line(f"1.2.3.4 u /x {status} 5").is_error

    def test_whitespace_runs_collapse(self) -> None:
        rec = parse_line("1.2.3.4 \t  alice\t\t/messages    403   \t10\r\n")
        assert rec.user_id == "alice"
        assert rec.endpoint == "/messages"
        assert rec.status == "403"

    def test_four_fields_is_enough(self) -> None:
        rec = parse_line(b"1.2.3.4 bob /admin 500")
        assert rec.user_id == "bob"
        assert rec.is_error

    def test_extra_fields_ignored(self) -> None:
        rec = parse_line("1.2.3.4 bob /admin 200 12 trailing junk")
        assert rec.endpoint == "/admin"

    @pytest.mark.parametrize("line", [
        "",
        "   ",
        "1.2.3.4",
        "1.2.3.4 bob",
        "1.2.3.4 bob /admin",
    ])
    def test_short_lines_are_malformed(self, line: str) -> None:
        with pytest.raises(MalformedLineError):
            parse_line(line, line_number=7)

    def test_malformed_error_carries_context(self) -> None:
        with pytest.raises(MalformedLineError) as exc_info:
            split_fields(b"1.2.3.4 bob /admin\n", 12)
        err = exc_info.value
        assert err.line_number == 12
        assert err.field_count == 3
        assert "line 12" in str(err)

    def test_only_spaces_and_tabs_separate_fields(self) -> None:
        fields = split_fields(b"1.2.3.4 bob\x0b2 /a\x0cb 200\t5\r\n", 1)
        assert fields == [b"1.2.3.4", b"bob\x0b2", b"/a\x0cb", b"200", b"5"]

    def test_carriage_return_inside_line_is_not_a_separator(self) -> None:
        with pytest.raises(MalformedLineError):
            split_fields(b"1.2.3.4 bob\r/admin 200\n", 1)


class TestDecodeField:
    def test_invalid_bytes_stay_distinct(self) -> None:
        assert decode_field(b"u\xff") != decode_field(b"u\xfe")

    def test_invalid_bytes_round_trip(self) -> None:
        raw = b"user\xff\xfe"
        assert decode_field(raw).encode("utf-8", "surrogateescape") == raw

    def test_valid_utf8_decodes_normally(self) -> None:
        assert decode_field("käyttäjä".encode()) == "käyttäjä"

    def test_parse_line_matches_pipeline_decoding(self) -> None:
        rec = parse_line(b"1.2.3.4 u\xff /a 200 1")
        assert rec.user_id == decode_field(b"u\xff")


class TestErrorTaxonomy:
    def test_malformed_is_analysis_and_value_error(self) -> None:
        err = MalformedLineError(1, 0)
        assert isinstance(err, AnalysisError)
        assert isinstance(err, ValueError)

    def test_inconsistency_is_analysis_and_runtime_error(self) -> None:
        err = PassInconsistencyError("changed")
        assert isinstance(err, AnalysisError)
        assert isinstance(err, RuntimeError)
