"""
Tests for CSV parsing and the column contract.
"""

import itertools

import pytest

from backend.ingestion.csv_parser import (
    REQUIRED_COLUMNS,
    decode_csv_buffer,
    parse_csv_buffer,
    validate_columns,
)
from backend.ingestion.errors import EmptyTableError, MissingColumnsError, ParseFailureError


class TestParseCsvBuffer:
    def test_rows_keep_raw_string_values(self, sample_csv_data):
        rows = parse_csv_buffer(sample_csv_data)

        assert len(rows) == 3
        assert rows[0] == {"name": "Pen", "description": "Blue ink", "price": "10.50"}
        assert rows[1]["description"] == ""
        assert rows[1]["price"] == "20.00"

    def test_header_names_are_trimmed(self):
        rows = parse_csv_buffer(b" name , price \nPen,1\n")

        assert list(rows[0].keys()) == ["name", "price"]

    def test_header_only_yields_no_rows(self):
        assert parse_csv_buffer(b"name,price\n") == []

    def test_empty_buffer_yields_no_rows(self):
        assert parse_csv_buffer(b"") == []
        assert parse_csv_buffer(b"\n\n") == []

    def test_blank_lines_are_skipped(self):
        rows = parse_csv_buffer(b"name,price\nPen,1\n\nBook,2\n")

        assert [row["name"] for row in rows] == ["Pen", "Book"]

    def test_custom_separator(self):
        rows = parse_csv_buffer(b"name;price\nPen;10.50\n", separator=";")

        assert rows == [{"name": "Pen", "price": "10.50"}]

    def test_multi_character_separator_is_literal(self):
        rows = parse_csv_buffer(b"name||price\nPen||3.5\n", separator="||")

        assert rows == [{"name": "Pen", "price": "3.5"}]

    def test_quoted_field_may_contain_separator(self):
        rows = parse_csv_buffer(b'name,price\n"Pen, blue",2\n')

        assert rows[0]["name"] == "Pen, blue"

    def test_short_row_fills_missing_values_with_empty_strings(self):
        rows = parse_csv_buffer(b"name,description,price\nPen\n")

        assert rows == [{"name": "Pen", "description": "", "price": ""}]

    def test_na_like_values_stay_text(self):
        rows = parse_csv_buffer(b"name,price\nNA,null\n")

        assert rows == [{"name": "NA", "price": "null"}]

    def test_utf8_bom_is_removed(self):
        rows = parse_csv_buffer("\ufeffname,price\nCafé,2\n".encode("utf-8"))

        assert rows == [{"name": "Café", "price": "2"}]

    def test_non_utf8_buffer_uses_detected_encoding(self):
        buffer = "name,description,price\nCafé,Crème brûlée maison,4\n".encode("latin-1")

        rows = parse_csv_buffer(buffer)

        assert len(rows) == 1
        assert rows[0]["name"].startswith("Caf")
        assert rows[0]["price"] == "4"

    def test_row_with_too_many_fields_is_a_parse_failure(self):
        with pytest.raises(ParseFailureError):
            parse_csv_buffer(b"name,price\nPen,1\nBook,2,3,4\n")

    @pytest.mark.parametrize(
        "buffer",
        [
            b"name,price\nPen,10.50,EXTRA\nBook,20.00\n",
            b"name,price\nBook,20.00\nPen,10.50,EXTRA\n",
        ],
    )
    def test_one_extra_field_fails_wherever_it_appears(self, buffer):
        with pytest.raises(ParseFailureError):
            parse_csv_buffer(buffer)

    def test_empty_separator_is_a_parse_failure(self):
        with pytest.raises(ParseFailureError):
            parse_csv_buffer(b"name,price\nPen,1\n", separator="")

    def test_parse_failure_kind(self):
        with pytest.raises(ParseFailureError) as exc_info:
            parse_csv_buffer(b"name,price\nPen,1\nBook,2,3,4\n")

        assert exc_info.value.kind == "parse_failure"


def test_decode_prefers_utf8():
    assert decode_csv_buffer("name\nÜber\n".encode("utf-8")) == "name\nÜber\n"


class TestValidateColumns:
    def test_passes_with_required_columns(self):
        validate_columns([{"name": "Pen", "price": "1"}], REQUIRED_COLUMNS)

    def test_extra_columns_are_ignored(self):
        validate_columns([{"name": "Pen", "price": "1", "sku": "X1", "colour": "red"}])

    def test_description_is_optional(self):
        validate_columns([{"name": "Pen", "price": "1"}])

    def test_column_names_compare_case_and_whitespace_insensitively(self):
        validate_columns([{" NAME ": "Pen", "Price": "1"}])

    def test_empty_table(self):
        with pytest.raises(EmptyTableError) as exc_info:
            validate_columns([], REQUIRED_COLUMNS)

        assert exc_info.value.kind == "empty_table"

    def test_missing_price_is_named_exactly(self):
        with pytest.raises(MissingColumnsError) as exc_info:
            validate_columns([{"name": "Pen", "description": "Blue"}], REQUIRED_COLUMNS)

        assert exc_info.value.missing == ["price"]
        assert exc_info.value.required == ["name", "price"]
        assert exc_info.value.kind == "missing_columns"

    def test_missing_columns_keep_required_order(self):
        with pytest.raises(MissingColumnsError) as exc_info:
            validate_columns([{"description": "Blue"}], REQUIRED_COLUMNS)

        assert exc_info.value.missing == ["name", "price"]

    def test_only_first_row_is_inspected(self):
        validate_columns([{"name": "Pen", "price": "1"}, {"other": "x"}])

    @pytest.mark.parametrize(
        "header",
        list(itertools.permutations(["name", "description", "price"]))
        + list(itertools.permutations(["name", "description"])),
    )
    def test_outcome_does_not_depend_on_column_order(self, header):
        row = {column: "x" for column in header}
        has_all = {"name", "price"} <= set(header)

        if has_all:
            validate_columns([row])
        else:
            with pytest.raises(MissingColumnsError):
                validate_columns([row])
