from __future__ import annotations

from collections.abc import Iterable

from .models import ActualDiagnostic, ExpectedError


def expected_sort_key(error: ExpectedError) -> tuple[int, int, str]:
    return (error.line, error.column, error.code)


def actual_sort_key(diagnostic: ActualDiagnostic) -> tuple[int, str, str]:
    # message only breaks ties between otherwise interchangeable entries
    return (diagnostic.line, diagnostic.code, diagnostic.message or "")


def sort_expected(errors: Iterable[ExpectedError]) -> list[ExpectedError]:
    return sorted(errors, key=expected_sort_key)


def sort_actual(diagnostics: Iterable[ActualDiagnostic]) -> list[ActualDiagnostic]:
    return sorted(diagnostics, key=actual_sort_key)
