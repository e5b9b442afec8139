"""Unit tests for the CSV row parser."""

from __future__ import annotations

import io

import pytest
from structlog.testing import capture_logs

from convert.row_parser import RowParser
from core.errors import ConversionFailure


def test_read_header_returns_ordered_columns() -> None:
    """Header should keep column names in file order."""
    parser = RowParser(io.StringIO("id,name,city\n1,Ann,Oslo\n"))

    header = parser.read_header()

    assert header.columns == ("id", "name", "city")


def test_iter_records_yields_rows_in_order() -> None:
    """Records should map header names to values by position."""
    parser = RowParser(io.StringIO("id,name\n1,Ann\n2,Bo\n"))

    records = [record.as_mapping() for record in parser.iter_records()]

    assert records == [{"id": "1", "name": "Ann"}, {"id": "2", "name": "Bo"}]


def test_iter_records_skips_mismatched_rows_with_diagnostic() -> None:
    """Rows with the wrong column count should be logged and skipped."""
    parser = RowParser(io.StringIO("id,name\n1,Ann\n2,Bo\n3,4,5\n"), source_name="people.csv")

    with capture_logs() as logs:
        records = [record.as_mapping() for record in parser.iter_records()]

    skipped_events = [entry for entry in logs if entry["event"] == "row_skipped"]
    assert records == [{"id": "1", "name": "Ann"}, {"id": "2", "name": "Bo"}]
    assert parser.rows_skipped == 1
    assert len(skipped_events) == 1
    assert skipped_events[0]["stage"] == "parser"
    assert skipped_events[0]["line_number"] == 4
    assert skipped_events[0]["line"] == ["3", "4", "5"]


def test_iter_records_continues_after_short_row() -> None:
    """Parsing should continue with later rows after a skipped row."""
    parser = RowParser(io.StringIO("a,b,c\n1,2\n4,5,6\n"))

    records = [record.values for record in parser.iter_records()]

    assert records == [("4", "5", "6")] and parser.rows_skipped == 1


def test_iter_records_respects_quoted_delimiter() -> None:
    """Quoted fields may contain the delimiter character."""
    parser = RowParser(io.StringIO('a,b\n"x,y",z\n'))

    records = [record.as_mapping() for record in parser.iter_records()]

    assert records == [{"a": "x,y", "b": "z"}]


def test_iter_records_handles_embedded_newline_and_doubled_quote() -> None:
    """Quoted fields keep newlines and doubled quotes collapse to one."""
    parser = RowParser(io.StringIO('id,note\n1,"line one\nline two"\n2,"say ""hi"""\n'))

    records = [record.as_mapping()["note"] for record in parser.iter_records()]

    assert records == ["line one\nline two", 'say "hi"']


def test_iter_records_uses_semicolon_delimiter() -> None:
    """Semicolon delimiter should split on semicolons only."""
    parser = RowParser(io.StringIO("a;b\n1,5;2\n"), delimiter="semicolon")

    records = [record.as_mapping() for record in parser.iter_records()]

    assert records == [{"a": "1,5", "b": "2"}]


def test_iter_records_skips_blank_lines_without_counting() -> None:
    """Blank lines carry no data and are not counted as skipped rows."""
    parser = RowParser(io.StringIO("a,b\n\n1,2\n\n"))

    records = [record.values for record in parser.iter_records()]

    assert records == [("1", "2")] and parser.rows_skipped == 0


def test_read_header_raises_for_empty_input() -> None:
    """Empty input has no header and should fail the parse stage."""
    parser = RowParser(io.StringIO(""))

    with pytest.raises(ConversionFailure) as error_info:
        parser.read_header()

    assert error_info.value.stage == "parse"


def test_iter_records_raises_for_unterminated_quote() -> None:
    """An unterminated quoted field is a fatal parse failure."""
    parser = RowParser(io.StringIO('id,name\n1,Ann\n2,"Bo\n'))
    parsed: list[dict[str, str]] = []

    with pytest.raises(ConversionFailure) as error_info:
        for record in parser.iter_records():
            parsed.append(record.as_mapping())

    assert error_info.value.stage == "parse"
    assert parsed == [{"id": "1", "name": "Ann"}]


def test_duplicate_header_columns_keep_last_value() -> None:
    """Later duplicate columns overwrite earlier ones in the mapping."""
    parser = RowParser(io.StringIO("id,name,id\n1,Ann,9\n"))

    with capture_logs() as logs:
        records = [record.as_mapping() for record in parser.iter_records()]

    assert records == [{"id": "9", "name": "Ann"}]
    assert [entry["event"] for entry in logs] == ["duplicate_columns"]


def test_iter_records_accepts_cell_beyond_default_field_limit() -> None:
    """Large well-formed cells should parse instead of failing the run."""
    blob = "x" * 200_000
    parser = RowParser(io.StringIO(f'id,blob\n1,{blob}\n2,"{blob}"\n'))

    records = [record.as_mapping() for record in parser.iter_records()]

    assert [record["id"] for record in records] == ["1", "2"]
    assert all(len(record["blob"]) == 200_000 for record in records)


def test_iter_records_keeps_bare_quote_in_unquoted_field() -> None:
    """A quote inside an unquoted field is kept as a literal character."""
    parser = RowParser(io.StringIO('id,name\n1,a"b\n'))

    records = [record.as_mapping() for record in parser.iter_records()]

    assert records == [{"id": "1", "name": 'a"b'}]
