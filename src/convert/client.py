"""Python SDK for CSV to JSON conversions.

This module exposes a high-level client that validates requests, fills
unset options from runtime configuration, and runs the pipeline.
"""

from __future__ import annotations

from pathlib import Path

from core.config import CsvJsonConfig
from core.file_paths import resolve_output_path, validate_csv_path
from core.run_spec_execution import execute_run_spec_file
from core.types import ConversionOptions, ConversionResult, Delimiter
from convert.pipeline import convert_file


class CsvJsonClient:
    """Primary SDK entry point for conversions."""

    def __init__(self, config: CsvJsonConfig | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
        """
        self._config = config or CsvJsonConfig.from_env()

    def convert(
        self,
        input_path: str | Path,
        output_path: str | Path | None = None,
        delimiter: Delimiter | None = None,
        pretty: bool | None = None,
    ) -> ConversionResult:
        """Convert one CSV file to a JSON array file.

        Args:
            input_path: Existing ``.csv`` file.
            output_path: Optional destination, defaults to ``<stem>.json`` beside input.
            delimiter: Column separator, defaults to config.
            pretty: Indented rendering, defaults to config.

        Returns:
            Completed conversion summary.

        Raises:
            CsvJsonInputError: If the input path is invalid.
            ConversionFailure: If the pipeline fails.
        """
        csv_path = validate_csv_path(input_path)
        options = ConversionOptions(
            input_path=csv_path,
            output_path=resolve_output_path(csv_path, output_path),
            delimiter=delimiter or self._config.delimiter,
            pretty=self._config.pretty if pretty is None else pretty,
        )
        return convert_file(options)

    def run_spec(self, spec_file: str) -> tuple[str, ...]:
        """Execute a YAML run-spec and return printable result lines."""
        return execute_run_spec_file(self, spec_file)
