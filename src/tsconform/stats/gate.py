from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Final, Literal

from .models import Stats, render_snapshot

logger = logging.getLogger(__name__)

PENDING_SNAPSHOT_SUFFIX: Final[str] = ".new"

type GateAction = Literal["matched", "written"]


class SnapshotGateErrorCode(StrEnum):
    E_SNAPSHOT_BASELINE_MISSING = "E_SNAPSHOT_BASELINE_MISSING"
    E_SNAPSHOT_DRIFT = "E_SNAPSHOT_DRIFT"
    E_SNAPSHOT_BASELINE_UNREADABLE = "E_SNAPSHOT_BASELINE_UNREADABLE"
    E_SNAPSHOT_WRITE_FAILED = "E_SNAPSHOT_WRITE_FAILED"


@dataclass(frozen=True, slots=True)
class SnapshotGateErrorDetail:
    code: str
    message: str
    path: str
    baseline: str | None
    fresh: str


class SnapshotGateError(ValueError):
    def __init__(self, detail: SnapshotGateErrorDetail) -> None:
        super().__init__(f"{detail.code}: {detail.message}")
        self.detail = detail


def pending_snapshot_path(path: Path) -> Path:
    return path.with_name(path.name + PENDING_SNAPSHOT_SUFFIX)


def _gate_error(
    code: SnapshotGateErrorCode,
    message: str,
    path: Path,
    *,
    baseline: str | None,
    fresh: str,
) -> SnapshotGateError:
    return SnapshotGateError(
        SnapshotGateErrorDetail(
            code=code.value,
            message=message,
            path=path.as_posix(),
            baseline=baseline,
            fresh=fresh,
        )
    )


@dataclass(frozen=True, slots=True)
class SnapshotGate:
    """Per-test regression baseline.

    Under CI the freshly rendered snapshot must equal the checked-in file byte
    for byte; any drift, better or worse, fails and leaves the fresh text in a
    ``.new`` file for review. Outside CI the baseline is simply rewritten.
    """

    ci: bool = False

    def check(self, path: Path, stats: Stats) -> GateAction:
        fresh = render_snapshot(stats)
        if not self.ci:
            try:
                path.write_text(fresh, encoding="utf-8")
            except OSError as exc:
                raise _gate_error(
                    SnapshotGateErrorCode.E_SNAPSHOT_WRITE_FAILED,
                    f"unable to write stats snapshot: {exc}",
                    path,
                    baseline=None,
                    fresh=fresh,
                ) from exc
            return "written"

        try:
            baseline = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            self._stage_pending(path, fresh)
            raise _gate_error(
                SnapshotGateErrorCode.E_SNAPSHOT_BASELINE_MISSING,
                f"CI=1 so a stats baseline is required: {path.as_posix()}",
                path,
                baseline=None,
                fresh=fresh,
            ) from None
        except (OSError, UnicodeDecodeError) as exc:
            self._stage_pending(path, fresh)
            raise _gate_error(
                SnapshotGateErrorCode.E_SNAPSHOT_BASELINE_UNREADABLE,
                f"unable to read stats baseline: {exc}",
                path,
                baseline=None,
                fresh=fresh,
            ) from exc

        if baseline != fresh:
            self._stage_pending(path, fresh)
            raise _gate_error(
                SnapshotGateErrorCode.E_SNAPSHOT_DRIFT,
                f"CI=1 so test stats must match the baseline: {path.as_posix()}",
                path,
                baseline=baseline,
                fresh=fresh,
            )
        return "matched"

    @staticmethod
    def _stage_pending(path: Path, fresh: str) -> None:
        pending = pending_snapshot_path(path)
        try:
            pending.write_text(fresh, encoding="utf-8")
        except OSError as exc:
            logger.warning("unable to stage %s: %s", pending.as_posix(), exc)
            return
        logger.warning("stats drift staged for review: %s", pending.as_posix())
