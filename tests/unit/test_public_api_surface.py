from __future__ import annotations

import pytest

import tsconform.diagnostics as diagnostics_api
import tsconform.expected as expected_api
import tsconform.reconcile as reconcile_api
import tsconform.runner as runner_api
import tsconform.selection as selection_api
import tsconform.stats as stats_api
import tsconform.timing as timing_api

pytestmark = pytest.mark.unit


def test_reconcile_public_api_surface_is_explicit_and_stable() -> None:
    assert reconcile_api.__all__ == [
        "ReconciliationResult",
        "format_actual",
        "format_expected",
        "printable_diagnostics",
        "reconcile",
        "render_diagnostic",
        "render_report",
    ]
    assert not hasattr(reconcile_api, "_ExpectedIndex")


def test_expected_public_api_surface_is_explicit_and_stable() -> None:
    assert expected_api.__all__ == [
        "ERRORS_FILE_SUFFIX",
        "ExpectedErrorSet",
        "FixtureError",
        "FixtureErrorCode",
        "FixtureErrorDetail",
        "STATS_FILE_SUFFIX",
        "TestVariant",
        "expected_errors_path",
        "load_expected_errors",
        "read_expected_errors",
    ]


def test_stats_and_timing_public_api_surface_is_explicit_and_stable() -> None:
    assert stats_api.__all__ == [
        "PENDING_SNAPSHOT_SUFFIX",
        "STATS_FIELDS",
        "SnapshotGate",
        "SnapshotGateError",
        "SnapshotGateErrorCode",
        "SnapshotGateErrorDetail",
        "Stats",
        "StatsAggregator",
        "parse_snapshot",
        "pending_snapshot_path",
        "render_snapshot",
    ]
    assert timing_api.__all__ == ["TimingRecorder", "TimingTotals"]


def test_selection_and_runner_public_api_surface_is_explicit_and_stable() -> None:
    assert selection_api.__all__ == [
        "FixtureSelector",
        "SelectionConfigError",
        "SelectionLists",
        "SourceParser",
        "load_list",
        "load_selection_lists",
        "parse_list",
        "source_parses",
    ]
    assert "ConformanceSuite" in runner_api.__all__
    assert "RunConfig" in runner_api.__all__
    assert not hasattr(runner_api, "_read_source")


def test_every_exported_name_resolves() -> None:
    for module in (
        diagnostics_api,
        expected_api,
        reconcile_api,
        runner_api,
        selection_api,
        stats_api,
        timing_api,
    ):
        for name in module.__all__:
            assert hasattr(module, name), f"{module.__name__}.{name}"
