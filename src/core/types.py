"""Shared typed models.

This module defines the immutable record model and the request and
result types exchanged between the pipeline, SDK, and CLI layers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

Delimiter = Literal["comma", "semicolon"]


@dataclass(frozen=True)
class Header:
    """Ordered column names parsed from the first input line.

    Attributes:
        columns: Column names in file order, duplicates included.
    """

    columns: tuple[str, ...]
    unique_columns: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "unique_columns", tuple(dict.fromkeys(self.columns)))

    def __len__(self) -> int:
        return len(self.columns)

    @property
    def duplicate_columns(self) -> tuple[str, ...]:
        """Return column names that appear more than once, in file order."""
        seen: set[str] = set()
        duplicates: dict[str, None] = {}
        for column in self.columns:
            if column in seen:
                duplicates[column] = None
            seen.add(column)
        return tuple(duplicates)


@dataclass(frozen=True)
class Record:
    """One parsed data row keyed by its header.

    Attributes:
        header: Shared header of the source table.
        values: Cell values by column position.
    """

    header: Header
    values: tuple[str, ...]

    def __post_init__(self) -> None:
        if len(self.values) != len(self.header):
            raise ValueError(
                f"Record has {len(self.values)} values but header has "
                f"{len(self.header)} columns."
            )

    def as_mapping(self) -> dict[str, str]:
        """Return column-to-value mapping in header order.

        When the header repeats a column name, the later value wins while
        the key keeps the position of its first occurrence.
        """
        mapping: dict[str, str] = {}
        for column, value in zip(self.header.columns, self.values):
            mapping[column] = value
        return mapping


@dataclass(frozen=True)
class ConversionOptions:
    """Conversion request options.

    Attributes:
        input_path: Source CSV file.
        output_path: Destination JSON file, derived from input when unset.
        delimiter: Column separator name.
        pretty: Render indented JSON instead of compact JSON.
    """

    input_path: Path
    output_path: Path | None = None
    delimiter: Delimiter = "comma"
    pretty: bool = False


@dataclass(frozen=True)
class ConversionResult:
    """Completed conversion summary.

    Attributes:
        output_path: Written JSON file, or None for stream conversions.
        records_written: Number of objects in the output array.
        rows_skipped: Data rows dropped for a column-count mismatch.
    """

    output_path: Path | None
    records_written: int
    rows_skipped: int
