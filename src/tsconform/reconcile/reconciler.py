from __future__ import annotations

from collections import defaultdict, deque
from collections.abc import Iterable
from dataclasses import dataclass

from tsconform.diagnostics import (
    ActualDiagnostic,
    ExpectedError,
    expected_sort_key,
    sort_actual,
    sort_expected,
)


@dataclass(frozen=True, slots=True)
class ReconciliationResult:
    matched: int
    missing: tuple[ExpectedError, ...]
    extra: tuple[ActualDiagnostic, ...]
    expected: tuple[ExpectedError, ...]
    actual: tuple[ActualDiagnostic, ...]

    def __post_init__(self) -> None:
        if self.matched < 0:
            raise ValueError("matched must be >= 0")
        if self.matched + len(self.missing) != len(self.expected):
            raise ValueError("matched + missing must account for every expected entry")
        if self.matched + len(self.extra) != len(self.actual):
            raise ValueError("matched + extra must account for every actual diagnostic")

    @property
    def success(self) -> bool:
        return not self.missing and not self.extra

    @property
    def remove_only(self) -> bool:
        """Every expected error was produced; only false positives remain."""
        return not self.missing and bool(self.extra)

    @property
    def error_code_only(self) -> bool:
        """Missing and extra sit on the same lines, so only the codes disagree."""
        if self.success or len(self.missing) != len(self.extra):
            return False
        return [error.line for error in self.missing] == [diag.line for diag in self.extra]


class _ExpectedIndex:
    """Unconsumed expected entries bucketed by ``(line, code)`` and by wildcard ``code``.

    Buckets are FIFO in ``(line, column, code)`` order, so popping the left end
    takes the entry a linear scan over the sorted list would find first.
    """

    __slots__ = ("_exact", "_wildcard")

    def __init__(self, expected: Iterable[ExpectedError]) -> None:
        self._exact: defaultdict[tuple[int, str], deque[ExpectedError]] = defaultdict(deque)
        self._wildcard: defaultdict[str, deque[ExpectedError]] = defaultdict(deque)
        for error in expected:
            if error.is_wildcard:
                self._wildcard[error.code].append(error)
            else:
                self._exact[(error.line, error.code)].append(error)

    def consume(self, diagnostic: ActualDiagnostic) -> ExpectedError | None:
        # wildcard entries sort ahead of every exact line, so they win the tie
        wildcard = self._wildcard.get(diagnostic.code)
        if wildcard:
            return wildcard.popleft()
        exact = self._exact.get(diagnostic.key)
        if exact:
            return exact.popleft()
        return None

    def remaining(self) -> list[ExpectedError]:
        leftovers = [error for bucket in self._wildcard.values() for error in bucket]
        leftovers.extend(error for bucket in self._exact.values() for error in bucket)
        return sorted(leftovers, key=expected_sort_key)


def reconcile(
    expected: Iterable[ExpectedError],
    actual: Iterable[ActualDiagnostic],
) -> ReconciliationResult:
    """Match actual diagnostics against golden ones with greedy first-fit.

    An actual ``(line, code)`` matches an expected entry with the same code on
    the same line or on the wildcard line ``0``. Entries sharing ``(line, code)``
    are interchangeable, so the first-fit match is stable without being a
    maximum bipartite matching. Duplicates count with multiplicity.
    """
    ordered_expected = tuple(sort_expected(expected))
    ordered_actual = tuple(sort_actual(actual))

    index = _ExpectedIndex(ordered_expected)
    matched = 0
    extra: list[ActualDiagnostic] = []
    for diagnostic in ordered_actual:
        if index.consume(diagnostic) is None:
            extra.append(diagnostic)
        else:
            matched += 1

    return ReconciliationResult(
        matched=matched,
        missing=tuple(index.remaining()),
        extra=tuple(extra),
        expected=ordered_expected,
        actual=ordered_actual,
    )
