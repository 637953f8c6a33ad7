from __future__ import annotations

import json
import logging
from enum import StrEnum
from pathlib import Path
from typing import Final

import typer
from pydantic import TypeAdapter, ValidationError

from tsconform.diagnostics import ActualDiagnostic, normalize_code
from tsconform.expected import FixtureError, read_expected_errors
from tsconform.reconcile import ReconciliationResult, reconcile, render_report
from tsconform.runner import RunConfig, SuiteLayout, iter_fixture_paths
from tsconform.selection import FixtureSelector, SelectionConfigError

app = typer.Typer(help="TypeScript checker conformance oracle")

_EXIT_OK: Final[int] = 0
_EXIT_MISMATCH: Final[int] = 1
_EXIT_INPUT_ERROR: Final[int] = 2
_ACTUAL_ADAPTER: Final[TypeAdapter[list[ActualDiagnostic]]] = TypeAdapter(list[ActualDiagnostic])


class OutputFormat(StrEnum):
    TEXT = "text"
    JSON = "json"


class LogLevel(StrEnum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@app.callback()
def main(
    log_level: LogLevel = typer.Option(
        LogLevel.WARNING,
        "--log-level",
        case_sensitive=False,
        help="Logging level for harness messages",
        show_default=True,
    ),
) -> None:
    logging.basicConfig(
        level=log_level.value,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_actual(path: Path) -> list[ActualDiagnostic]:
    try:
        return _ACTUAL_ADAPTER.validate_json(path.read_bytes())
    except OSError as exc:
        raise ValueError(f"failed to read actual diagnostics '{path}': {exc}") from exc
    except ValidationError as exc:
        raise ValueError(f"invalid actual diagnostics '{path}': {exc}") from exc


def _result_payload(result: ReconciliationResult) -> dict[str, object]:
    return {
        "success": result.success,
        "matched": result.matched,
        "missing": [error.model_dump() for error in result.missing],
        "extra": [diagnostic.model_dump(exclude_none=True) for diagnostic in result.extra],
        "required": len(result.expected),
        "remove_only": result.remove_only,
        "error_code_only": result.error_code_only,
    }


def _fail_input(message: str) -> typer.Exit:
    typer.echo(message, err=True)
    return typer.Exit(code=_EXIT_INPUT_ERROR)


@app.command("reconcile")
def reconcile_command(
    expected: Path,
    actual: Path,
    shift: int = typer.Option(0, "--shift", min=0, help="Line offset for non-wildcard entries"),
    format: OutputFormat = typer.Option(
        OutputFormat.TEXT,
        "--format",
        help="Output format: text|json",
        show_default=True,
    ),
) -> None:
    """Reconcile a golden errors file against a checker diagnostics file."""
    try:
        expected_errors = read_expected_errors(expected, line_shift=shift)
        actual_diagnostics = _load_actual(actual)
    except (FixtureError, ValueError) as exc:
        raise _fail_input(str(exc)) from exc

    result = reconcile(expected_errors, actual_diagnostics)
    if format is OutputFormat.JSON:
        typer.echo(json.dumps(_result_payload(result), sort_keys=True))
    else:
        include_full = RunConfig.from_env().print_matched
        typer.echo(render_report(result, title=expected.name, include_full_lists=include_full))
    raise typer.Exit(code=_EXIT_OK if result.success else _EXIT_MISMATCH)


@app.command("select")
def select_command(
    fixtures: Path,
    repo_root: Path = typer.Option(
        Path("."),
        "--repo-root",
        help="Directory holding the tests/*.txt selection lists",
    ),
) -> None:
    """List fixtures under FIXTURES admitted by the selection lists."""
    config = RunConfig.from_env()
    try:
        lists = SuiteLayout(root=repo_root).load_selection_lists(config)
    except SelectionConfigError as exc:
        raise _fail_input(str(exc)) from exc

    selector = FixtureSelector(lists, test_filter=config.test_filter)
    for path in iter_fixture_paths(fixtures):
        if selector.admit(path):
            typer.echo(path.as_posix())


@app.command("normalize")
def normalize_command(codes: list[str]) -> None:
    """Print the canonical form of each error code."""
    for code in codes:
        try:
            typer.echo(normalize_code(code))
        except ValueError as exc:
            raise _fail_input(str(exc)) from exc
