"""Public SDK surface for csvjson.

This module provides a stable import path for library users.
It re-exports the client, the pipeline entry points, and typed models.
"""

from __future__ import annotations

from convert.client import CsvJsonClient
from convert.pipeline import convert_file, convert_stream
from core.config import CsvJsonConfig
from core.errors import ConversionFailure, CsvJsonError
from core.types import ConversionOptions, ConversionResult, Header, Record

__all__ = [
    "ConversionFailure",
    "ConversionOptions",
    "ConversionResult",
    "CsvJsonClient",
    "CsvJsonConfig",
    "CsvJsonError",
    "Header",
    "Record",
    "convert_file",
    "convert_stream",
]
