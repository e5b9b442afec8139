"""Row parser for delimited input.

This module reads the header row and lazily yields one record per
well-formed data row. Column-count mismatches are skipped with a logged
diagnostic; tokenizer errors end the run.
"""

from __future__ import annotations

import csv
from typing import Iterator, TextIO

from core.constants import CSV_FIELD_SIZE_LIMIT, DELIMITER_CHARACTERS, STREAM_SOURCE_NAME
from core.errors import ConversionFailure
from core.logging_config import get_logger
from core.types import Delimiter, Header, Record

_LOGGER = get_logger(__name__)


class RowParser:
    """Stateful reader producing records from one CSV source."""

    def __init__(
        self,
        source: TextIO,
        delimiter: Delimiter = "comma",
        source_name: str = STREAM_SOURCE_NAME,
    ) -> None:
        self._source_name = source_name
        # Process-wide setting; cells have no size cap.
        csv.field_size_limit(CSV_FIELD_SIZE_LIMIT)
        self._reader = csv.reader(
            source,
            delimiter=DELIMITER_CHARACTERS[delimiter],
            strict=True,
        )
        self._header: Header | None = None
        self.rows_skipped = 0

    def read_header(self) -> Header:
        """Read the first record as the header.

        Returns:
            Parsed header.

        Raises:
            ConversionFailure: If the input is empty or malformed.
        """
        header_fields = self._next_fields()
        while header_fields == []:
            header_fields = self._next_fields()
        if header_fields is None:
            raise ConversionFailure(
                "parse",
                f"Failed to read header from {self._source_name}: input is empty. "
                "Provide a CSV file whose first line lists column names.",
            )
        self._header = Header(columns=tuple(header_fields))
        if self._header.duplicate_columns:
            _LOGGER.warning(
                "duplicate_columns",
                source=self._source_name,
                columns=list(self._header.duplicate_columns),
                resolution="last_value_wins",
            )
        return self._header

    def iter_records(self) -> Iterator[Record]:
        """Yield records for data rows matching the header width.

        Yields:
            One record per well-formed data row, in file order.

        Raises:
            ConversionFailure: If the tokenizer cannot recover.
        """
        header = self._header if self._header is not None else self.read_header()
        while True:
            fields = self._next_fields()
            if fields is None:
                return
            if not fields:
                continue
            if len(fields) != len(header):
                self._skip_row(fields, len(header))
                continue
            yield Record(header=header, values=tuple(fields))

    def _next_fields(self) -> list[str] | None:
        try:
            return next(self._reader)
        except StopIteration:
            return None
        except csv.Error as error:
            raise ConversionFailure(
                "parse",
                f"Failed to parse {self._source_name} at line {self._reader.line_num}: "
                f"{error}. Fix the CSV quoting and retry.",
                cause=error,
            ) from error
        except (OSError, UnicodeDecodeError) as error:
            raise ConversionFailure(
                "parse",
                f"Failed to read {self._source_name} after line {self._reader.line_num}: "
                f"{error}. Check that the input is readable UTF-8 text.",
                cause=error,
            ) from error

    def _skip_row(self, fields: list[str], expected_count: int) -> None:
        self.rows_skipped += 1
        _LOGGER.warning(
            "row_skipped",
            stage="parser",
            source=self._source_name,
            line_number=self._reader.line_num,
            line=fields,
            reason=(
                f"line has {len(fields)} columns but header has {expected_count}; "
                "skipping line"
            ),
        )
