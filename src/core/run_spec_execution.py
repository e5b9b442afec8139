"""Shared run-spec execution engine for CLI and SDK workflows.

This module maps validated run-spec steps to client conversions so
different entry points execute one declarative batch path without drift.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from core.errors import CsvJsonRunSpecError
from core.run_spec import RunSpec, RunSpecDefaults, RunSpecStep, load_run_spec, parse_delimiter
from core.run_spec_fields import optional_bool, optional_string, required_string
from core.types import ConversionResult, Delimiter


class RunSpecClient(Protocol):
    """Client API contract required by run-spec execution."""

    def convert(
        self,
        input_path: str | Path,
        output_path: str | Path | None = None,
        delimiter: Delimiter | None = None,
        pretty: bool | None = None,
    ) -> ConversionResult: ...


@dataclass(frozen=True)
class RunSpecExecutionContext:
    """In-memory context used to execute run-spec steps."""

    client: RunSpecClient
    defaults: RunSpecDefaults
    base_dir: Path


def execute_run_spec_file(client: RunSpecClient, spec_file: str) -> tuple[str, ...]:
    """Load and execute a run-spec file, returning printable output lines."""
    spec = load_run_spec(spec_file)
    return execute_run_spec(client, spec)


def execute_run_spec(client: RunSpecClient, spec: RunSpec) -> tuple[str, ...]:
    """Execute a parsed run-spec object and return output lines."""
    context = RunSpecExecutionContext(
        client=client,
        defaults=spec.defaults,
        base_dir=spec.base_dir,
    )
    return tuple(_execute_step(context, step) for step in spec.steps)


def format_result_line(result: ConversionResult) -> str:
    """Render a conversion result as one printable summary line."""
    return (
        f"output={result.output_path or '-'}\t"
        f"records={result.records_written}\t"
        f"skipped={result.rows_skipped}"
    )


def _execute_step(context: RunSpecExecutionContext, step: RunSpecStep) -> str:
    if step.command == "convert":
        return _execute_convert_step(context, step)
    raise CsvJsonRunSpecError(f"Unsupported run-spec command '{step.command}'.")


def _execute_convert_step(context: RunSpecExecutionContext, step: RunSpecStep) -> str:
    output_value = optional_string(step.args, "output")
    pretty = optional_bool(step.args, "pretty")
    result = context.client.convert(
        input_path=_resolve_path(context, required_string(step.args, "input")),
        output_path=None if output_value is None else _resolve_path(context, output_value),
        delimiter=_resolve_delimiter(context, step),
        pretty=context.defaults.pretty if pretty is None else pretty,
    )
    return format_result_line(result)


def _resolve_delimiter(context: RunSpecExecutionContext, step: RunSpecStep) -> Delimiter | None:
    raw_separator = step.args.get("separator")
    if raw_separator is None:
        return context.defaults.delimiter
    return parse_delimiter(raw_separator, "run spec step")


def _resolve_path(context: RunSpecExecutionContext, raw_path: str) -> Path:
    path = Path(raw_path).expanduser()
    return path if path.is_absolute() else context.base_dir / path
