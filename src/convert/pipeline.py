"""Conversion pipeline coordination.

This module runs the row parser and the JSON array writer as two
concurrent tasks joined by a single-slot record channel, and turns their
outcomes into exactly one result or terminal failure per run.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor, wait
from contextlib import ExitStack
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from core.constants import PIPELINE_THREAD_PREFIX, STREAM_SOURCE_NAME, TEXT_ENCODING
from core.errors import ChannelAbortedError, ConversionFailure
from core.file_paths import resolve_output_path
from core.logging_config import get_logger
from core.types import ConversionOptions, ConversionResult, Delimiter
from convert.channel import RecordChannel
from convert.json_writer import JsonArrayWriter, JsonFragmentWriter
from convert.row_parser import RowParser

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class ParseSummary:
    """Parser stage outcome."""

    records_sent: int
    rows_skipped: int


def convert_stream(
    source: TextIO,
    sink: TextIO,
    delimiter: Delimiter = "comma",
    pretty: bool = False,
    source_name: str = STREAM_SOURCE_NAME,
    sink_name: str = STREAM_SOURCE_NAME,
    close_sink: bool = False,
) -> ConversionResult:
    """Convert CSV text from ``source`` into a JSON array on ``sink``.

    Args:
        source: Readable text stream positioned at the header line.
        sink: Writable text stream receiving the JSON document.
        delimiter: Column separator name.
        pretty: Render indented JSON.
        source_name: Display name of the source for diagnostics.
        sink_name: Display name of the sink for diagnostics.
        close_sink: Close ``sink`` once the document is complete.

    Returns:
        Completed conversion summary.

    Raises:
        ConversionFailure: If parsing or writing fails.
    """
    parser = RowParser(source, delimiter=delimiter, source_name=source_name)
    fragments = JsonFragmentWriter(sink, sink_name=sink_name, close_sink=close_sink)
    channel = RecordChannel()
    _LOGGER.info(
        "conversion_started",
        source=source_name,
        output=sink_name,
        delimiter=delimiter,
        pretty=pretty,
    )
    with ThreadPoolExecutor(max_workers=2, thread_name_prefix=PIPELINE_THREAD_PREFIX) as executor:
        parse_future = executor.submit(_run_parser_stage, parser, channel)
        write_future = executor.submit(_run_writer_stage, fragments, channel, pretty)
        wait([parse_future, write_future])
    _raise_first_failure(parse_future, write_future)
    parse_summary = parse_future.result()
    records_written = write_future.result()
    _LOGGER.info(
        "conversion_completed",
        source=source_name,
        output=sink_name,
        records_written=records_written,
        rows_skipped=parse_summary.rows_skipped,
    )
    return ConversionResult(
        output_path=None,
        records_written=records_written,
        rows_skipped=parse_summary.rows_skipped,
    )


def convert_file(options: ConversionOptions) -> ConversionResult:
    """Convert one CSV file into a JSON file.

    Args:
        options: Conversion request options.

    Returns:
        Completed conversion summary including the output path.

    Raises:
        ConversionFailure: If opening, parsing, or writing fails.
        CsvJsonInputError: If the output path is the input file.
    """
    input_path = Path(options.input_path)
    output_path = resolve_output_path(input_path, options.output_path)
    with ExitStack() as stack:
        source = stack.enter_context(_open_input(input_path))
        sink = stack.enter_context(_open_output(output_path))
        result = convert_stream(
            source,
            sink,
            delimiter=options.delimiter,
            pretty=options.pretty,
            source_name=str(input_path),
            sink_name=str(output_path),
            close_sink=True,
        )
    return ConversionResult(
        output_path=output_path,
        records_written=result.records_written,
        rows_skipped=result.rows_skipped,
    )


def _run_parser_stage(parser: RowParser, channel: RecordChannel) -> ParseSummary:
    """Parse records and hand each one to the writer."""
    records_sent = 0
    try:
        with channel.sending() as send:
            parser.read_header()
            for record in parser.iter_records():
                send(record)
                records_sent += 1
    except ConversionFailure as error:
        _log_failure(error)
        raise
    return ParseSummary(records_sent=records_sent, rows_skipped=parser.rows_skipped)


def _run_writer_stage(
    fragments: JsonFragmentWriter,
    channel: RecordChannel,
    pretty: bool,
) -> int:
    """Drain the channel into the JSON array and finish the sink."""
    try:
        with fragments, channel.receiving() as records:
            _LOGGER.info("json_write_started", pretty=pretty)
            return JsonArrayWriter(fragments, pretty=pretty).write_records(records)
    except ConversionFailure as error:
        _log_failure(error)
        raise


def _raise_first_failure(*futures: Future) -> None:
    """Re-raise the terminal failure of a run, ignoring derived channel aborts."""
    errors = [future.exception() for future in futures]
    for error in errors:
        if isinstance(error, ConversionFailure):
            raise error
    for error in errors:
        if error is not None and not isinstance(error, ChannelAbortedError):
            raise error
    for error in errors:
        if error is not None:
            raise error


def _open_input(input_path: Path) -> TextIO:
    try:
        return open(input_path, encoding=TEXT_ENCODING, newline="")
    except OSError as error:
        failure = ConversionFailure(
            "input-open",
            f"Failed to open CSV input {input_path}: {error}. "
            "Provide a readable CSV file and retry.",
            cause=error,
        )
        _log_failure(failure)
        raise failure from error


def _open_output(output_path: Path) -> TextIO:
    try:
        return open(output_path, "w", encoding=TEXT_ENCODING)
    except OSError as error:
        failure = ConversionFailure(
            "output-open",
            f"Failed to create JSON output {output_path}: {error}. "
            "Check that the directory exists and is writable.",
            cause=error,
        )
        _log_failure(failure)
        raise failure from error


def _log_failure(error: ConversionFailure) -> None:
    _LOGGER.error("conversion_failed", stage=error.stage, error=str(error))
