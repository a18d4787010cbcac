"""Tests for rows.py — datagrid projection and headline stats."""

from __future__ import annotations

import pytest

from dto_dashboard.models import DtoResult
from dto_dashboard.rows import (
    NO_DATA_YET,
    map_rows,
    parse_timestamp,
    round_half_up,
    summarize,
)

from tests.conftest import make_record


class TestMapRows:
    def test_projection_fields(self):
        rows = map_rows([make_record("a", file_name="a.pdf")])
        row = rows[0]
        assert row.id == "a"
        assert row.file_name == "a.pdf"
        assert row.file_type == "pdf"
        assert row.dto_result == DtoResult.success
        assert row.ingested_at == "2024-05-01T10:00:00Z"

    def test_classification(self):
        rows = map_rows([
            make_record("ok", llm_description="described"),
            make_record("empty", llm_description=""),
            make_record("none", llm_description=None),
        ])
        result = {r.id: r.dto_result for r in rows}
        assert result == {
            "ok": DtoResult.success,
            "empty": DtoResult.fail,
            "none": DtoResult.fail,
        }

    def test_sorted_newest_first_missing_last(self):
        rows = map_rows([
            make_record("old", ingested_at="2023-01-01T00:00:00Z"),
            make_record("missing", ingested_at=None),
            make_record("new", ingested_at="2024-06-01T12:00:00+00:00"),
            make_record("garbage", ingested_at="not a date"),
            make_record("mid", ingested_at="2024-01-15T08:30:00"),
        ])
        assert [r.id for r in rows][:3] == ["new", "mid", "old"]
        assert {r.id for r in rows[3:]} == {"missing", "garbage"}
        stamps = [parse_timestamp(r.ingested_at) for r in rows]
        assert stamps == sorted(stamps, reverse=True)

    def test_ties_keep_catalog_order(self):
        rows = map_rows([make_record("first", ingested_at=None), make_record("second", ingested_at=None)])
        assert [r.id for r in rows] == ["first", "second"]

    def test_empty(self):
        assert map_rows([]) == []


class TestSummarize:
    def test_empty_catalog(self):
        stats = summarize([])
        assert stats.total == 0
        assert stats.success_count == 0
        assert stats.success_rate == 0
        assert stats.latest_ingested == NO_DATA_YET

    def test_rate_and_latest(self):
        rows = map_rows([
            make_record("a", ingested_at="2024-01-01T00:00:00Z"),
            make_record("b", llm_description=None, ingested_at="2024-03-01T00:00:00Z"),
            make_record("c", ingested_at="2024-02-01T00:00:00Z"),
        ])
        stats = summarize(rows)
        assert stats.total == 3
        assert stats.success_count == 2
        assert stats.success_rate == 67
        assert stats.latest_ingested == "2024-03-01T00:00:00Z"

    def test_latest_without_timestamp_uses_sentinel(self):
        stats = summarize(map_rows([make_record("a", ingested_at=None)]))
        assert stats.latest_ingested == NO_DATA_YET

    @pytest.mark.parametrize("success,total", [(0, 1), (1, 1), (1, 3), (1, 8), (5, 7)])
    def test_rate_is_integer_percentage(self, success, total):
        records = [
            make_record(str(i), llm_description="d" if i < success else None)
            for i in range(total)
        ]
        rate = summarize(map_rows(records)).success_rate
        assert isinstance(rate, int)
        assert 0 <= rate <= 100


class TestHelpers:
    def test_round_half_up(self):
        assert round_half_up(12.5) == 13
        assert round_half_up(66.666) == 67
        assert round_half_up(0.4) == 0

    def test_parse_timestamp(self):
        assert parse_timestamp(None) == 0.0
        assert parse_timestamp("") == 0.0
        assert parse_timestamp("yesterday") == 0.0
        assert parse_timestamp("1970-01-01T00:00:10Z") == 10.0
