"""csvjson exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations

from typing import Literal

FailureStage = Literal["input-open", "parse", "output-open", "write"]


class CsvJsonError(Exception):
    """Base exception for all csvjson failures."""


class CsvJsonConfigError(CsvJsonError):
    """Raised for invalid runtime configuration."""


class CsvJsonInputError(CsvJsonError):
    """Raised when a conversion request fails validation."""


class CsvJsonRunSpecError(CsvJsonError):
    """Raised for invalid or unsupported run-spec configuration."""


class ConversionFailure(CsvJsonError):
    """Terminal failure of one conversion run.

    Attributes:
        stage: Pipeline stage that failed.
        cause: Underlying exception, when one exists.
    """

    def __init__(
        self,
        stage: FailureStage,
        message: str,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.stage = stage
        self.cause = cause


class ChannelAbortedError(CsvJsonError):
    """Raised on a channel endpoint after the other side failed."""


class ChannelProtocolError(CsvJsonError):
    """Raised when channel usage discipline is violated."""
