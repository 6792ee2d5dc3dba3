"""
Tests for services/rows.py: grid/record mapping.
"""

from sheet_api.services.rows import (
    column_letter,
    extend,
    grid_to_records,
    headers_from_grid,
    parse_value,
    record_to_row,
)
from sheet_api.services.signing import content_signature, to_json


class TestParseValue:
    def test_json_text_is_parsed(self):
        assert parse_value("true") is True
        assert parse_value("12") == 12
        assert parse_value('{"k": [1, 2]}') == {"k": [1, 2]}

    def test_plain_text_passes_through(self):
        assert parse_value("hello") == "hello"
        assert parse_value("") == ""
        assert parse_value("{broken") == "{broken"

    def test_non_finite_constants_stay_text(self):
        assert parse_value("NaN") == "NaN"
        assert parse_value("Infinity") == "Infinity"

    def test_typed_cells_pass_through(self):
        assert parse_value(5) == 5
        assert parse_value(False) is False


class TestGridToRecords:
    def test_one_record_per_data_row_with_positional_id(self):
        grid = [["a", "b"]] + [[str(i), "x"] for i in range(7)]
        records = grid_to_records(grid)

        assert len(records) == 7
        assert [r["_id"] for r in records] == list(range(1, 8))

    def test_fields_are_parsed_and_short_rows_padded(self):
        records = grid_to_records([["a", "b"], ["1", "x"], ['{"k": 2}']])

        assert records == [
            {"_id": 1, "a": 1, "b": "x"},
            {"_id": 2, "a": {"k": 2}, "b": ""},
        ]
        assert list(records[0].keys()) == ["_id", "a", "b"]

    def test_empty_and_header_only_grids(self):
        assert grid_to_records([]) == []
        assert grid_to_records([["a", "b"]]) == []

    def test_headers_from_grid(self):
        assert headers_from_grid([["a", "_id", "b"]]) == ["_id", "a", "b"]
        assert headers_from_grid([]) == ["_id"]


class TestRecordToRow:
    HEADERS = ["_id", "title", "status", "enabled", "_hash"]

    def test_id_is_not_written_and_missing_fields_are_none(self):
        row = record_to_row({"_id": 1, "title": "T", "status": "a"}, self.HEADERS)

        assert row[:3] == ["T", "a", None]
        assert len(row) == len(self.HEADERS) - 1

    def test_hash_is_signature_of_row_with_blank_hash_slot(self):
        record = {"_id": 3, "title": "T", "status": "a", "enabled": True, "_hash": "stale"}
        row = record_to_row(record, self.HEADERS)

        assert row[3] == content_signature(to_json(["T", "a", True, ""]))

    def test_structured_values_are_written_as_json_text(self):
        row = record_to_row({"_id": 1, "text": "hi", "tags": ["x", "y"]}, ["_id", "text", "tags"])

        assert row == ["hi", '["x","y"]']


class TestColumnLetter:
    def test_letters(self):
        assert column_letter(1) == "A"
        assert column_letter(26) == "Z"
        assert column_letter(27) == "AA"
        assert column_letter(53) == "BA"
        assert column_letter(702) == "ZZ"
        assert column_letter(703) == "AAA"


class TestExtend:
    def test_later_values_win_including_none(self):
        base = {"enabled": True, "a": 1}
        merged = extend(base, {"enabled": None}, {"b": 2})

        assert merged == {"enabled": None, "a": 1, "b": 2}
        assert base == {"enabled": True, "a": 1}
