from __future__ import annotations

import dataclasses
import logging
import time
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from tsconform.diagnostics import ErrorCodeTable, is_parser_test
from tsconform.expected import (
    ERRORS_FILE_SUFFIX,
    STATS_FILE_SUFFIX,
    ExpectedErrorSet,
    FixtureError,
    FixtureErrorCode,
    TestVariant,
    expected_errors_path,
    load_expected_errors,
)
from tsconform.expected.errors import build_fixture_error
from tsconform.reconcile import printable_diagnostics, reconcile, render_diagnostic, render_report
from tsconform.selection import FixtureSelector, SourceParser, source_parses
from tsconform.stats import (
    SnapshotGate,
    SnapshotGateError,
    SnapshotGateErrorCode,
    Stats,
    StatsAggregator,
)
from tsconform.timing import TimingRecorder

from .config import RunConfig, SuiteLayout
from .types import (
    Checker,
    FixtureOutcome,
    OutcomeStatus,
    SuiteReport,
    VariantLoader,
    VariantOutcome,
)

logger = logging.getLogger(__name__)

FIXTURE_SUFFIXES: Final[tuple[str, ...]] = (".ts", ".tsx")
_MULTI_FILE_MARKERS: Final[tuple[str, ...]] = ("@filename", "<reference path")
_DRIFT_CODES: Final[frozenset[str]] = frozenset(
    {
        SnapshotGateErrorCode.E_SNAPSHOT_BASELINE_MISSING.value,
        SnapshotGateErrorCode.E_SNAPSHOT_DRIFT.value,
    }
)


@dataclass(frozen=True, slots=True)
class FixturePlan:
    path: Path
    variants: tuple[TestVariant, ...]

    @property
    def use_target(self) -> bool:
        return len(self.variants) > 1


def iter_fixture_paths(root: Path) -> tuple[Path, ...]:
    return tuple(
        sorted(
            path
            for path in root.rglob("*")
            if path.is_file()
            and path.suffix in FIXTURE_SUFFIXES
            and not path.name.endswith(".d.ts")
        )
    )


def is_multi_file_source(source: str) -> bool:
    lowered = source.lower()
    return any(marker in lowered for marker in _MULTI_FILE_MARKERS)


def _read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise build_fixture_error(
            FixtureErrorCode.E_FIXTURE_SOURCE_UNREADABLE,
            f"failed to read fixture source: {exc}",
            path.as_posix(),
        ) from exc


def _sidecar_suffix(path: Path, variant: TestVariant, *, use_target: bool) -> str:
    sidecar = expected_errors_path(path, variant, use_target=use_target)
    return sidecar.name.removesuffix(ERRORS_FILE_SUFFIX)


def _gate_failure_status(exc: SnapshotGateError) -> OutcomeStatus:
    if exc.detail.code in _DRIFT_CODES:
        return "snapshot_drift"
    return "error"


class ConformanceSuite:
    """Runs fixtures through the checker and owns all suite-wide accounting.

    Every variant yields exactly one ``VariantOutcome``; the suite records the
    stats carried by that outcome once, so a crashing checker is counted as a
    panic without being dropped or double counted.
    """

    def __init__(  # noqa: PLR0913
        self,
        *,
        checker: Checker,
        variant_loader: VariantLoader,
        selector: FixtureSelector,
        config: RunConfig | None = None,
        aggregator: StatsAggregator | None = None,
        timings: TimingRecorder | None = None,
        parser: SourceParser | None = None,
        code_table: ErrorCodeTable | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._checker = checker
        self._variant_loader = variant_loader
        self._selector = selector
        self._config = config if config is not None else RunConfig()
        self._aggregator = (
            aggregator
            if aggregator is not None
            else StatsAggregator(enabled=self._config.records_stats)
        )
        self._timings = (
            timings
            if timings is not None
            else TimingRecorder(enabled=self._config.records_timings)
        )
        self._gate = SnapshotGate(ci=self._config.ci)
        self._parser = parser
        self._code_table = code_table
        self._clock = clock

    @classmethod
    def from_layout(  # noqa: PLR0913
        cls,
        layout: SuiteLayout,
        *,
        checker: Checker,
        variant_loader: VariantLoader,
        config: RunConfig | None = None,
        parser: SourceParser | None = None,
        code_table: ErrorCodeTable | None = None,
    ) -> ConformanceSuite:
        run_config = config if config is not None else RunConfig.from_env()
        lists = layout.load_selection_lists(run_config)
        aggregator = StatsAggregator(
            enabled=run_config.records_stats,
            totals_path=layout.resolve(layout.totals_path) if run_config.full_suite else None,
        )
        timings = TimingRecorder(
            enabled=run_config.records_timings,
            report_path=layout.resolve(layout.timings_path),
            write_report=run_config.full_suite,
        )
        return cls(
            checker=checker,
            variant_loader=variant_loader,
            selector=FixtureSelector(lists, test_filter=run_config.test_filter),
            config=run_config,
            aggregator=aggregator,
            timings=timings,
            parser=parser,
            code_table=code_table,
        )

    @property
    def aggregator(self) -> StatsAggregator:
        return self._aggregator

    @property
    def timings(self) -> TimingRecorder:
        return self._timings

    def plan(self, path: Path) -> FixturePlan | None:
        """Decide whether ``path`` is scheduled; ``None`` means not applicable."""
        if not self._selector.admit(path):
            return None
        try:
            variants = tuple(self._variant_loader(path))
        except Exception as exc:
            logger.info("excluding %s: fixture directives failed to load: %s", path, exc)
            return None
        if not variants:
            return None

        plan = FixturePlan(path=path, variants=variants)
        for variant in variants:
            try:
                expected = self._load_expected(path, variant, use_target=plan.use_target)
            except FixtureError:
                # reported as a fixture error when the variant runs
                continue
            if is_parser_test(expected.codes):
                logger.info("excluding %s: primarily a parser test", path)
                return None

        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return plan
        if not source_parses(path, source, self._parser):
            return None
        return plan

    def run_fixture(self, plan: FixturePlan) -> FixtureOutcome:
        outcomes = []
        for variant in plan.variants:
            outcome = self._run_variant(plan.path, variant, use_target=plan.use_target)
            outcomes.append(self._account(plan.path, outcome))
        return FixtureOutcome(path=plan.path, variants=tuple(outcomes))

    def run(self, paths: Iterable[Path], *, max_workers: int | None = None) -> SuiteReport:
        candidates = tuple(paths)
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            planned = tuple(executor.map(self.plan, candidates))
            plans = tuple(plan for plan in planned if plan is not None)
            outcomes = tuple(executor.map(self.run_fixture, plans))
        excluded = tuple(
            path for path, plan in zip(candidates, planned, strict=True) if plan is None
        )
        return SuiteReport(outcomes=outcomes, excluded=excluded, totals=self._aggregator.totals)

    def _load_expected(
        self, path: Path, variant: TestVariant, *, use_target: bool
    ) -> ExpectedErrorSet:
        return load_expected_errors(path, variant, use_target=use_target, table=self._code_table)

    def _run_variant(self, path: Path, variant: TestVariant, *, use_target: bool) -> VariantOutcome:
        try:
            expected = self._load_expected(path, variant, use_target=use_target)
            source = _read_source(path)
        except FixtureError as exc:
            logger.error("fixture error in %s: %s", path, exc)
            return VariantOutcome(
                status="error",
                variant=variant,
                suffix=_sidecar_suffix(path, variant, use_target=use_target),
                reason=str(exc),
            )

        required = len(expected.errors)
        if is_multi_file_source(source):
            return VariantOutcome(
                status="postponed",
                variant=variant,
                suffix=expected.suffix,
                stats=Stats(required_error=required),
                reason="multi-file fixtures are not checked yet",
            )

        try:
            return self._check_variant(path, variant, expected, source)
        except Exception as exc:
            logger.exception("checker crashed on %s (%s)", path, expected.suffix)
            return VariantOutcome(
                status="crashed",
                variant=variant,
                suffix=expected.suffix,
                stats=Stats.crashed(required_error=required),
                reason=f"{type(exc).__name__}: {exc}",
            )

    def _check_variant(
        self,
        path: Path,
        variant: TestVariant,
        expected: ExpectedErrorSet,
        source: str,
    ) -> VariantOutcome:
        started = self._clock()
        actual = tuple(self._checker.check(path, variant))
        checked = self._clock()
        result = reconcile(expected.errors, actual)
        finished = self._clock()

        self._record_timing(path, len(source.splitlines()), checked - started, finished - started)

        report = render_report(
            result,
            title=f"{path.as_posix()} ({expected.suffix})",
            include_full_lists=self._config.print_matched,
        )
        if result.success:
            logger.info("%s", report)
        else:
            logger.warning("%s", report)
        for diagnostic in printable_diagnostics(result, print_all=self._config.print_all):
            logger.info("%s", render_diagnostic(diagnostic))
        if result.remove_only:
            logger.info("[REMOVE_ONLY]%s", path.as_posix())
        if result.error_code_only:
            logger.info("[ERROR_CODE_ONLY]%s", path.as_posix())

        return VariantOutcome(
            status="pass" if result.success else "fail",
            variant=variant,
            suffix=expected.suffix,
            stats=Stats(
                required_error=len(result.expected),
                matched_error=result.matched,
                extra_error=len(result.extra),
            ),
            result=result,
            report=report,
        )

    def _record_timing(
        self, path: Path, line_count: int, check_seconds: float, full_seconds: float
    ) -> None:
        if not self._timings.enabled:
            return
        try:
            self._timings.record(line_count, check_seconds, full_seconds)
        except (OSError, ValueError) as exc:
            logger.warning("timing sample for %s not recorded: %s", path.as_posix(), exc)

    def _account(self, path: Path, outcome: VariantOutcome) -> VariantOutcome:
        if outcome.stats is None:
            return outcome
        if outcome.status == "postponed":
            if self._config.full_suite:
                self._aggregator.record(outcome.stats)
            return outcome

        accounted = outcome
        if self._config.records_stats:
            stats_path = path.with_name(f"{outcome.suffix}{STATS_FILE_SUFFIX}")
            try:
                self._gate.check(stats_path, outcome.stats)
            except SnapshotGateError as exc:
                logger.error("%s", exc)
                if outcome.status != "crashed":
                    accounted = dataclasses.replace(
                        outcome, status=_gate_failure_status(exc), reason=str(exc)
                    )
        totals = self._aggregator.record(outcome.stats)
        logger.debug("[TOTAL_STATS] %s", totals)
        return accounted
