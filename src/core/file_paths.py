"""Conversion path validation and resolution.

This module checks user-supplied CSV paths and derives the JSON
destination written next to the source file.
"""

from __future__ import annotations

from pathlib import Path

from core.constants import INPUT_FILE_EXTENSION, OUTPUT_FILE_EXTENSION
from core.errors import CsvJsonInputError


def validate_csv_path(raw_path: str | Path) -> Path:
    """Validate that a path names an existing CSV file.

    Args:
        raw_path: User-supplied input path.

    Returns:
        Expanded input path.

    Raises:
        CsvJsonInputError: If the extension is wrong or the file is missing.
    """
    csv_path = Path(raw_path).expanduser()
    if csv_path.suffix != INPUT_FILE_EXTENSION:
        raise CsvJsonInputError(
            f"File {csv_path} is not a CSV. Provide a path ending in {INPUT_FILE_EXTENSION}."
        )
    if not csv_path.exists():
        raise CsvJsonInputError(
            f"File {csv_path} does not exist. Provide an existing CSV file."
        )
    return csv_path


def default_json_path(csv_path: Path) -> Path:
    """Return the JSON path that sits beside a CSV file."""
    return csv_path.with_name(f"{csv_path.stem}{OUTPUT_FILE_EXTENSION}")


def resolve_output_path(csv_path: Path, output_path: str | Path | None) -> Path:
    """Resolve explicit or derived output location for a conversion.

    Raises:
        CsvJsonInputError: If the output would overwrite the input file.
    """
    if output_path is None:
        return default_json_path(csv_path)
    resolved_output = Path(output_path).expanduser()
    if resolved_output.resolve() == Path(csv_path).expanduser().resolve():
        raise CsvJsonInputError(
            f"Output path {resolved_output} is the input file. "
            "Choose a different --output path so the CSV is not overwritten."
        )
    return resolved_output
