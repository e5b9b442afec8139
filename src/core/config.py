"""Runtime configuration model for csvjson.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import cast

from core.constants import (
    DEFAULT_DELIMITER,
    FALSE_ENV_VALUES,
    PRETTY_ENV_VAR,
    SEPARATOR_ENV_VAR,
    SUPPORTED_DELIMITERS,
    TRUE_ENV_VALUES,
)
from core.errors import CsvJsonConfigError
from core.types import Delimiter


@dataclass(frozen=True)
class CsvJsonConfig:
    """Validated runtime configuration.

    Attributes:
        delimiter: Default column separator when a request does not set one.
        pretty: Default rendering mode when a request does not set one.
    """

    delimiter: Delimiter = cast(Delimiter, DEFAULT_DELIMITER)
    pretty: bool = False

    @classmethod
    def from_env(cls) -> "CsvJsonConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            CsvJsonConfigError: If environment values are invalid.
        """
        delimiter = _parse_delimiter(os.getenv(SEPARATOR_ENV_VAR, DEFAULT_DELIMITER))
        pretty = _parse_pretty(os.getenv(PRETTY_ENV_VAR, ""))
        return cls(delimiter=delimiter, pretty=pretty)


def _parse_delimiter(raw_value: str) -> Delimiter:
    """Parse the separator environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Supported delimiter name.

    Raises:
        CsvJsonConfigError: If the separator is not supported.
    """
    normalized_value = raw_value.strip().lower()
    if normalized_value in SUPPORTED_DELIMITERS:
        return cast(Delimiter, normalized_value)
    supported_rows = ", ".join(SUPPORTED_DELIMITERS)
    raise CsvJsonConfigError(
        f"Invalid {SEPARATOR_ENV_VAR} value: expected one of {supported_rows}, "
        f"got '{raw_value}'. Set {SEPARATOR_ENV_VAR} to a supported separator."
    )


def _parse_pretty(raw_value: str) -> bool:
    """Parse the pretty-print environment flag."""
    normalized_value = raw_value.strip().lower()
    if normalized_value in TRUE_ENV_VALUES:
        return True
    if normalized_value in FALSE_ENV_VALUES:
        return False
    raise CsvJsonConfigError(
        f"Invalid {PRETTY_ENV_VAR} value: expected a boolean, got '{raw_value}'. "
        f"Set {PRETTY_ENV_VAR} to true or false."
    )
