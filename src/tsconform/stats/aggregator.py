from __future__ import annotations

import logging
import threading
from pathlib import Path

from .models import Stats, render_snapshot

logger = logging.getLogger(__name__)


class StatsAggregator:
    """Suite-wide error counters shared by every worker thread.

    When disabled, ``record`` hands back the stats it was given instead of the
    running totals. Totals only grow for the lifetime of the aggregator; a
    failed totals-file write is logged and leaves the in-memory totals intact.
    """

    def __init__(self, *, enabled: bool = True, totals_path: Path | None = None) -> None:
        self._enabled = enabled
        self._totals_path = totals_path
        self._lock = threading.Lock()
        self._totals = Stats()
        self._records = 0

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def totals(self) -> Stats:
        with self._lock:
            return self._totals

    @property
    def record_count(self) -> int:
        with self._lock:
            return self._records

    def record(self, stats: Stats) -> Stats:
        if not self._enabled:
            return stats

        with self._lock:
            self._totals = self._totals + stats
            self._records += 1
            totals = self._totals
            if self._totals_path is not None:
                try:
                    self._totals_path.write_text(render_snapshot(totals), encoding="utf-8")
                except OSError as exc:
                    logger.warning(
                        "unable to write totals %s: %s", self._totals_path.as_posix(), exc
                    )

        logger.debug("running totals: %s", totals)
        return totals
