"""Core constants used across csvjson modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in conversion logic.
"""

from __future__ import annotations

DEFAULT_DELIMITER = "comma"
SUPPORTED_DELIMITERS = ("comma", "semicolon")
DELIMITER_CHARACTERS = {"comma": ",", "semicolon": ";"}
INPUT_FILE_EXTENSION = ".csv"
OUTPUT_FILE_EXTENSION = ".json"
TEXT_ENCODING = "utf-8"
PRETTY_INDENT = "   "
PRETTY_LINE_BREAK = "\n"
COMPACT_SEPARATORS = (",", ":")
PRETTY_SEPARATORS = (",", ": ")
PIPELINE_THREAD_PREFIX = "csvjson"
STREAM_SOURCE_NAME = "<stream>"
CSV_FIELD_SIZE_LIMIT = 2**31 - 1
SEPARATOR_ENV_VAR = "CSVJSON_SEPARATOR"
PRETTY_ENV_VAR = "CSVJSON_PRETTY"
TRUE_ENV_VALUES = ("1", "true", "yes", "on")
FALSE_ENV_VALUES = ("0", "false", "no", "off", "")
