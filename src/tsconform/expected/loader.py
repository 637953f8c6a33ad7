from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from pydantic import ValidationError

from tsconform.diagnostics import (
    ErrorCodeTable,
    ExpectedError,
    normalize_code,
    sort_expected,
)

from .errors import FixtureErrorCode, build_fixture_error
from .variant import TestVariant

logger = logging.getLogger(__name__)

ERRORS_FILE_SUFFIX: Final[str] = ".errors.json"
STATS_FILE_SUFFIX: Final[str] = ".stats.yaml"


@dataclass(frozen=True, slots=True)
class ExpectedErrorSet:
    suffix: str
    errors: tuple[ExpectedError, ...]
    source_path: Path
    exists: bool

    @property
    def codes(self) -> tuple[str, ...]:
        return tuple(error.code for error in self.errors)


def expected_errors_path(
    fixture_path: Path,
    variant: TestVariant | None = None,
    *,
    use_target: bool | None = None,
) -> Path:
    name_by_target = (variant is not None) if use_target is None else use_target
    if name_by_target:
        if variant is None:
            raise ValueError("a variant is required to name the sidecar by target")
        return fixture_path.with_name(
            f"{fixture_path.stem}(target={variant.raw_target}){ERRORS_FILE_SUFFIX}"
        )
    return fixture_path.with_suffix(ERRORS_FILE_SUFFIX)


def load_expected_errors(
    fixture_path: Path,
    variant: TestVariant | None = None,
    *,
    use_target: bool | None = None,
    table: ErrorCodeTable | None = None,
) -> ExpectedErrorSet:
    """Load the golden diagnostics that belong to ``fixture_path``.

    A missing sidecar is an empty expectation set. Codes are canonicalized,
    non-wildcard lines are shifted by ``variant.line_shift`` when a variant is
    given, and the result is ordered by ``(line, column, code)``.
    """
    errors_path = expected_errors_path(fixture_path, variant, use_target=use_target)
    suffix = errors_path.name.removesuffix(ERRORS_FILE_SUFFIX)

    if not errors_path.exists():
        logger.info("errors file does not exist: %s", errors_path.as_posix())
        return ExpectedErrorSet(suffix=suffix, errors=(), source_path=errors_path, exists=False)

    line_shift = variant.line_shift if variant is not None else 0
    return ExpectedErrorSet(
        suffix=suffix,
        errors=read_expected_errors(errors_path, line_shift=line_shift, table=table),
        source_path=errors_path,
        exists=True,
    )


def read_expected_errors(
    errors_path: Path,
    *,
    line_shift: int = 0,
    table: ErrorCodeTable | None = None,
) -> tuple[ExpectedError, ...]:
    if line_shift < 0:
        raise ValueError("line_shift must be >= 0")
    errors = [
        _canonical_entry(entry, index=index, path=errors_path, line_shift=line_shift, table=table)
        for index, entry in enumerate(_read_golden_entries(errors_path))
    ]
    return tuple(sort_expected(errors))


def _read_golden_entries(path: Path) -> list[object]:
    try:
        raw_text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise build_fixture_error(
            FixtureErrorCode.E_FIXTURE_GOLDEN_UNREADABLE,
            f"failed to open errors file: {exc}",
            path.as_posix(),
        ) from exc
    try:
        payload = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        raise build_fixture_error(
            FixtureErrorCode.E_FIXTURE_GOLDEN_INVALID_JSON,
            f"failed to parse errors file: {exc}",
            path.as_posix(),
        ) from exc
    if not isinstance(payload, list):
        raise build_fixture_error(
            FixtureErrorCode.E_FIXTURE_GOLDEN_NOT_A_LIST,
            "errors file must contain a JSON array",
            path.as_posix(),
        )
    return payload


def _canonical_entry(
    entry: object,
    *,
    index: int,
    path: Path,
    line_shift: int,
    table: ErrorCodeTable | None,
) -> ExpectedError:
    try:
        error = ExpectedError.model_validate(entry)
        code = normalize_code(error.code, table=table)
    except (ValidationError, ValueError) as exc:
        raise build_fixture_error(
            FixtureErrorCode.E_FIXTURE_GOLDEN_ENTRY_INVALID,
            f"invalid errors file entry at index {index}",
            path.as_posix(),
            witness=(str(exc),),
        ) from exc

    line = error.line if error.is_wildcard else error.line + line_shift
    if code == error.code and line == error.line:
        return error
    return error.model_copy(update={"code": code, "line": line})
