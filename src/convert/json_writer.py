"""Incremental JSON array writer.

This module renders records one at a time and assembles them into a
single JSON array on an output sink it exclusively owns.
"""

from __future__ import annotations

from contextlib import suppress
import json
from types import TracebackType
from typing import Iterable, TextIO

from core.constants import (
    COMPACT_SEPARATORS,
    PRETTY_INDENT,
    PRETTY_LINE_BREAK,
    PRETTY_SEPARATORS,
    STREAM_SOURCE_NAME,
)
from core.errors import ConversionFailure
from core.types import Record


class JsonFragmentWriter:
    """Text sink wrapper that writes fragments and finishes one output handle.

    Args:
        sink: Writable text handle.
        sink_name: Display name used in failure messages.
        close_sink: Close the handle on finish. Caller-owned streams such
            as stdout keep it False and are only flushed.
    """

    def __init__(
        self,
        sink: TextIO,
        sink_name: str = STREAM_SOURCE_NAME,
        close_sink: bool = True,
    ) -> None:
        self._sink = sink
        self._sink_name = sink_name
        self._close_sink = close_sink
        self._finished = False

    def write_fragment(self, text: str) -> None:
        """Write a text fragment to the sink.

        Raises:
            ConversionFailure: If the sink rejects the write.
        """
        try:
            self._sink.write(text)
        except (OSError, ValueError) as error:
            raise self._write_failure("write to", error) from error

    def finish(self) -> None:
        """Flush and release the sink.

        Raises:
            ConversionFailure: If flushing or closing fails.
        """
        if self._finished:
            return
        self._finished = True
        try:
            self._sink.flush()
            if self._close_sink:
                self._sink.close()
        except (OSError, ValueError) as error:
            raise self._write_failure("finish", error) from error

    def __enter__(self) -> JsonFragmentWriter:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.finish()
            return
        if not self._finished and self._close_sink:
            self._finished = True
            with suppress(OSError, ValueError):
                self._sink.close()

    def _write_failure(self, action: str, error: Exception) -> ConversionFailure:
        return ConversionFailure(
            "write",
            f"Failed to {action} JSON output {self._sink_name}: {error}. "
            "Check disk space and permissions, then retry.",
            cause=error,
        )


def render_record(record: Record, pretty: bool = False) -> str:
    """Serialize one record as a JSON object in header column order.

    Args:
        record: Parsed data row.
        pretty: Render with indentation nested one level inside the array.

    Returns:
        JSON object text without a trailing line break.
    """
    mapping = record.as_mapping()
    if not pretty:
        return json.dumps(mapping, ensure_ascii=False, separators=COMPACT_SEPARATORS)
    rendered = json.dumps(
        mapping,
        ensure_ascii=False,
        indent=len(PRETTY_INDENT),
        separators=PRETTY_SEPARATORS,
    )
    return PRETTY_LINE_BREAK.join(
        PRETTY_INDENT + line for line in rendered.split(PRETTY_LINE_BREAK)
    )


class JsonArrayWriter:
    """Writes records as elements of one JSON array."""

    def __init__(self, fragments: JsonFragmentWriter, pretty: bool = False) -> None:
        self._fragments = fragments
        self._pretty = pretty
        self._line_break = PRETTY_LINE_BREAK if pretty else ""

    def write_records(self, records: Iterable[Record]) -> int:
        """Write every record, close the array, and finish the sink.

        Args:
            records: Records in output order.

        Returns:
            Number of records written.

        Raises:
            ConversionFailure: If the sink fails.
        """
        self._fragments.write_fragment("[" + self._line_break)
        written_count = 0
        for record in records:
            if written_count > 0:
                self._fragments.write_fragment("," + self._line_break)
            self._fragments.write_fragment(render_record(record, self._pretty))
            written_count += 1
        closing = self._line_break + "]" if written_count > 0 else "]"
        self._fragments.write_fragment(closing)
        self._fragments.finish()
        return written_count
