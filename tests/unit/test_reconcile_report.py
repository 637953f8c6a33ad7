from __future__ import annotations

import pytest

from tsconform.diagnostics import ActualDiagnostic, ExpectedError
from tsconform.reconcile import (
    format_actual,
    format_expected,
    printable_diagnostics,
    reconcile,
    render_diagnostic,
    render_report,
)

pytestmark = pytest.mark.unit

_RULE = "=" * 60


def test_format_helpers_render_compact_lists() -> None:
    errors = [ExpectedError(line=3, column=1, code="TS2322")]
    diagnostics = [ActualDiagnostic(line=4, code="TS2345"), ActualDiagnostic(line=5, code="TS2")]

    assert format_expected(errors) == "[(3:1, TS2322)]"
    assert format_actual(diagnostics) == "[(4, TS2345), (5, TS2)]"
    assert format_expected([]) == "[]"


def test_render_report_lists_unmatched_and_full_inputs() -> None:
    result = reconcile(
        [ExpectedError(line=3, column=1, code="TS2322")],
        [ActualDiagnostic(line=4, code="TS2345")],
    )

    report = render_report(result, title="a.ts (a)")

    assert report.splitlines() == [
        _RULE,
        "a.ts (a)",
        _RULE,
        "1 unmatched errors out of 1 errors. Got 1 extra errors.",
        "Wanted: [(3:1, TS2322)]",
        "Unwanted: [(4, TS2345)]",
        "",
        "All required errors: [(3:1, TS2322)]",
        "All actual errors: [(4, TS2345)]",
    ]


def test_render_report_can_omit_full_lists() -> None:
    result = reconcile([], [])

    report = render_report(result, title="empty.ts", include_full_lists=False)

    assert "All required errors" not in report
    assert "0 unmatched errors out of 0 errors. Got 0 extra errors." in report


def test_printable_diagnostics_shows_only_unwanted_on_failure() -> None:
    matched = ActualDiagnostic(line=3, code="TS2322")
    unwanted = ActualDiagnostic(line=4, code="TS2345", message="Argument mismatch")
    result = reconcile([ExpectedError(line=3, column=1, code="TS2322")], [unwanted, matched])

    assert printable_diagnostics(result) == (unwanted,)
    assert printable_diagnostics(result, print_all=True) == (matched, unwanted)


def test_printable_diagnostics_shows_everything_on_success() -> None:
    diagnostic = ActualDiagnostic(line=3, code="TS2322")
    result = reconcile([ExpectedError(line=3, column=1, code="TS2322")], [diagnostic])

    assert printable_diagnostics(result) == (diagnostic,)


def test_render_diagnostic_includes_message_when_present() -> None:
    assert (
        render_diagnostic(ActualDiagnostic(line=2, code="TS2304", message="Cannot find name 'x'."))
        == "TS2304 (line 2): Cannot find name 'x'."
    )
    assert render_diagnostic(ActualDiagnostic(line=2, code="TS2304")) == "TS2304 (line 2)"
