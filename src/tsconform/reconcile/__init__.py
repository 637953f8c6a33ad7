from .reconciler import ReconciliationResult, reconcile
from .report import (
    format_actual,
    format_expected,
    printable_diagnostics,
    render_diagnostic,
    render_report,
)

__all__ = [
    "ReconciliationResult",
    "format_actual",
    "format_expected",
    "printable_diagnostics",
    "reconcile",
    "render_diagnostic",
    "render_report",
]
