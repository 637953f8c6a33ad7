from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Protocol, runtime_checkable

from tsconform.diagnostics import ActualDiagnostic
from tsconform.expected import TestVariant
from tsconform.reconcile import ReconciliationResult
from tsconform.stats import Stats

type OutcomeStatus = Literal["pass", "fail", "crashed", "error", "postponed", "snapshot_drift"]

_PASSING_STATUSES: frozenset[str] = frozenset({"pass", "postponed"})


@runtime_checkable
class Checker(Protocol):
    def check(self, entry_file: Path, variant: TestVariant) -> Sequence[ActualDiagnostic]: ...


@runtime_checkable
class VariantLoader(Protocol):
    def __call__(self, fixture_path: Path) -> Sequence[TestVariant]: ...


class ConformanceFailure(AssertionError):
    def __init__(self, outcome: FixtureOutcome) -> None:
        failed = [variant for variant in outcome.variants if not variant.passed]
        details = "\n\n".join(variant.describe() for variant in failed)
        super().__init__(f"{outcome.path.as_posix()}: {len(failed)} variant(s) failed\n{details}")
        self.outcome = outcome


@dataclass(frozen=True, slots=True)
class VariantOutcome:
    status: OutcomeStatus
    variant: TestVariant
    suffix: str
    stats: Stats | None = None
    result: ReconciliationResult | None = None
    report: str = ""
    reason: str | None = None

    @property
    def passed(self) -> bool:
        return self.status in _PASSING_STATUSES

    def describe(self) -> str:
        head = f"[{self.status}] {self.suffix}"
        if self.reason:
            head = f"{head}: {self.reason}"
        if self.report:
            return f"{head}\n{self.report}"
        return head


@dataclass(frozen=True, slots=True)
class FixtureOutcome:
    path: Path
    variants: tuple[VariantOutcome, ...]

    @property
    def passed(self) -> bool:
        return all(variant.passed for variant in self.variants)

    def raise_for_failure(self) -> None:
        if not self.passed:
            raise ConformanceFailure(self)


@dataclass(frozen=True, slots=True)
class SuiteReport:
    outcomes: tuple[FixtureOutcome, ...]
    excluded: tuple[Path, ...]
    totals: Stats

    @property
    def passed(self) -> tuple[Path, ...]:
        return tuple(outcome.path for outcome in self.outcomes if outcome.passed)

    @property
    def failed(self) -> tuple[Path, ...]:
        return tuple(outcome.path for outcome in self.outcomes if not outcome.passed)
