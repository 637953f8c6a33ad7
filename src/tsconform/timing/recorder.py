from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path

import yaml  # type: ignore[import-untyped]


@dataclass(frozen=True, slots=True)
class TimingTotals:
    lines: int = 0
    check_seconds: float = 0.0
    full_seconds: float = 0.0
    samples: int = 0

    def as_payload(self) -> dict[str, object]:
        return {
            "lines": self.lines,
            "check_seconds": round(self.check_seconds, 6),
            "full_seconds": round(self.full_seconds, 6),
            "samples": self.samples,
        }


class TimingRecorder:
    """Advisory performance totals; never affects a pass/fail verdict."""

    def __init__(
        self,
        *,
        enabled: bool = True,
        report_path: Path | None = None,
        write_report: bool = False,
    ) -> None:
        self._enabled = enabled
        self._report_path = report_path
        self._write_report = write_report
        self._lock = threading.Lock()
        self._totals = TimingTotals()

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def totals(self) -> TimingTotals:
        with self._lock:
            return self._totals

    def record(self, line_count: int, check_seconds: float, full_seconds: float) -> TimingTotals:
        if line_count < 0:
            raise ValueError("line_count must be >= 0")
        if check_seconds < 0.0 or full_seconds < 0.0:
            raise ValueError("durations must be >= 0")
        if not self._enabled:
            return self.totals

        with self._lock:
            current = self._totals
            self._totals = TimingTotals(
                lines=current.lines + line_count,
                check_seconds=current.check_seconds + check_seconds,
                full_seconds=current.full_seconds + full_seconds,
                samples=current.samples + 1,
            )
            totals = self._totals
            if self._write_report and self._report_path is not None:
                self._report_path.write_text(
                    yaml.safe_dump(totals.as_payload(), sort_keys=False), encoding="utf-8"
                )
        return totals
