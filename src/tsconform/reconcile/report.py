from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from typing import Final

from tsconform.diagnostics import ActualDiagnostic, ExpectedError

from .reconciler import ReconciliationResult

_RULE: Final[str] = "=" * 60


def format_expected(errors: Sequence[ExpectedError]) -> str:
    return "[" + ", ".join(f"({e.line}:{e.column}, {e.code})" for e in errors) + "]"


def format_actual(diagnostics: Sequence[ActualDiagnostic]) -> str:
    return "[" + ", ".join(f"({d.line}, {d.code})" for d in diagnostics) + "]"


def render_report(
    result: ReconciliationResult,
    *,
    title: str = "",
    include_full_lists: bool = True,
) -> str:
    lines = [
        _RULE,
        title,
        _RULE,
        (
            f"{len(result.missing)} unmatched errors out of {len(result.expected)} errors. "
            f"Got {len(result.extra)} extra errors."
        ),
        f"Wanted: {format_expected(result.missing)}",
        f"Unwanted: {format_actual(result.extra)}",
    ]
    if include_full_lists:
        lines.append("")
        lines.append(f"All required errors: {format_expected(result.expected)}")
        lines.append(f"All actual errors: {format_actual(result.actual)}")
    return "\n".join(lines)


def printable_diagnostics(
    result: ReconciliationResult,
    *,
    print_all: bool = False,
) -> tuple[ActualDiagnostic, ...]:
    """Diagnostics worth showing: all of them on success, else only the unwanted ones."""
    if result.success or print_all:
        return result.actual
    unwanted = Counter(diagnostic.key for diagnostic in result.extra)
    return tuple(diagnostic for diagnostic in result.actual if unwanted[diagnostic.key] > 0)


def render_diagnostic(diagnostic: ActualDiagnostic) -> str:
    if diagnostic.message:
        return f"{diagnostic.code} (line {diagnostic.line}): {diagnostic.message}"
    return f"{diagnostic.code} (line {diagnostic.line})"
