"""Tests for export assembly in enriched and aggregated modes."""

import pytest

from csv_to_h3.models.dataset import ExportMode
from csv_to_h3.models.schemas import ExportOptions
from csv_to_h3.pipeline.export import (
    aggregated_records,
    assemble_export,
    enriched_records,
    export_fields,
)
from csv_to_h3.pipeline.h3_indexer import row_cell
from tests.conftest import LA, NYC, make_row


class TestEnrichedRecords:
    """Original rows plus h3Index."""

    def test_appends_cell_in_row_order(self, sample_rows):
        records = enriched_records(sample_rows, resolution=7)
        assert [r["id"] for r in records] == ["a", "b", "c", "d", "e"]
        for row, record in zip(sample_rows, records):
            assert record["h3Index"] == row_cell(row, 7)
            assert list(record)[:-1] == list(row)

    def test_coordinates_excluded(self, sample_rows):
        records = enriched_records(sample_rows, resolution=7, include_coordinates=False)
        for record in records:
            assert "lat" not in record
            assert "lon" not in record
            assert "h3Index" in record
        assert export_fields(records) == ["id", "price", "visits", "h3Index"]

    def test_source_rows_untouched(self, sample_rows):
        before = [dict(r) for r in sample_rows]
        enriched_records(sample_rows, resolution=7, include_coordinates=False)
        assert sample_rows == before

    def test_existing_h3index_column_overwritten_in_place(self):
        row = {"h3Index": "stale", "lat": NYC[0], "lon": NYC[1], "name": "x"}
        (record,) = enriched_records([row], resolution=5)
        assert list(record) == ["h3Index", "lat", "lon", "name"]
        assert record["h3Index"] == row_cell(row, 5)

    def test_uniform_fields_for_ragged_rows(self):
        rows = [make_row(NYC, a="1"), make_row(LA, a="2", b="extra"), {"lat": LA[0], "lon": LA[1], "a": None}]
        records = enriched_records(rows, resolution=7)
        fields = ["lat", "lon", "a", "h3Index", "b"]
        assert all(list(r) == fields for r in records)
        assert records[0]["b"] == ""
        assert records[1]["b"] == "extra"
        assert records[2]["a"] == ""

    def test_empty(self):
        assert enriched_records([], resolution=7) == []


class TestAggregatedRecords:
    def test_one_record_per_cell(self, sample_rows):
        records = aggregated_records(sample_rows, ["price", "visits"], {"price": "sum"}, resolution=7)
        assert [r["h3Index"] for r in records] == [row_cell(make_row(LA), 7), row_cell(make_row(NYC), 7)]
        assert [r["price"] for r in records] == [40.0, 120.0]
        assert export_fields(records) == ["h3Index", "price"]

    def test_no_configured_columns_gives_cells_only(self, sample_rows):
        records = aggregated_records(sample_rows, ["price"], {}, resolution=7)
        assert all(list(r) == ["h3Index"] for r in records)


class TestAssembleExport:
    """Mode dispatch driven by ExportOptions."""

    def test_enriched_by_default(self, sample_rows):
        options = ExportOptions(resolution=8, include_coordinates=False)
        records = assemble_export(sample_rows, ["price"], options)
        assert len(records) == len(sample_rows)
        assert "lat" not in records[0]
        assert records[0]["h3Index"] == row_cell(sample_rows[0], 8)

    def test_aggregated_mode(self, sample_rows):
        options = ExportOptions(resolution=7, aggregation_settings={"visits": "max"})
        records = assemble_export(sample_rows, ["price", "visits"], options, ExportMode.AGGREGATED)
        assert records == [
            {"h3Index": row_cell(make_row(LA), 7), "visits": 3.0},
            {"h3Index": row_cell(make_row(NYC), 7), "visits": 5.0},
        ]

    def test_mode_accepts_string(self, sample_rows):
        records = assemble_export(sample_rows, [], ExportOptions(), "aggregated")
        assert len(records) == 2

    def test_unknown_mode_rejected(self, sample_rows):
        with pytest.raises(ValueError):
            assemble_export(sample_rows, [], ExportOptions(), "pivot")


class TestExportFields:
    def test_union_in_first_seen_order(self):
        assert export_fields([{"a": 1}, {"b": 2, "a": 3}, {"c": 4}]) == ["a", "b", "c"]

    def test_empty(self):
        assert export_fields([]) == []
