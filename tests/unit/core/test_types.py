"""Unit tests for the record model."""

from __future__ import annotations

import pytest

from core.types import Header, Record


def test_header_reports_duplicate_columns() -> None:
    """Header should list repeated column names once, in file order."""
    header = Header(columns=("id", "name", "id", "name", "city"))

    assert header.duplicate_columns == ("id", "name")
    assert header.unique_columns == ("id", "name", "city")


def test_record_rejects_mismatched_value_count() -> None:
    """Records must have one value per header column."""
    header = Header(columns=("id", "name"))

    with pytest.raises(ValueError):
        Record(header=header, values=("1",))

    assert len(header) == 2


def test_record_mapping_keeps_header_order() -> None:
    """Mapping keys should follow header order."""
    header = Header(columns=("zeta", "alpha", "mid"))
    record = Record(header=header, values=("1", "2", "3"))

    assert list(record.as_mapping()) == ["zeta", "alpha", "mid"]


def test_records_share_header_instance() -> None:
    """Records should reference the header rather than copy it."""
    header = Header(columns=("id",))
    first = Record(header=header, values=("1",))
    second = Record(header=header, values=("2",))

    assert first.header is second.header
