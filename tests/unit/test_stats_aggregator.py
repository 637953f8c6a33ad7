from __future__ import annotations

import threading
from pathlib import Path

import pytest

from tsconform.stats import Stats, StatsAggregator, parse_snapshot

pytestmark = pytest.mark.unit

_THREADS = 8
_RECORDS_PER_THREAD = 250


def test_disabled_aggregator_echoes_input() -> None:
    aggregator = StatsAggregator(enabled=False)
    stats = Stats(required_error=3, matched_error=1)

    assert aggregator.record(stats) is stats
    assert aggregator.totals == Stats()
    assert aggregator.record_count == 0


def test_enabled_aggregator_accumulates_and_returns_totals() -> None:
    aggregator = StatsAggregator()

    first = aggregator.record(Stats(required_error=2, matched_error=2))
    second = aggregator.record(Stats(required_error=1, panic=1))

    assert first == Stats(required_error=2, matched_error=2)
    assert second == Stats(required_error=3, matched_error=2, panic=1)
    assert aggregator.totals == second
    assert aggregator.record_count == 2


def test_totals_file_tracks_latest_totals(tmp_path: Path) -> None:
    totals_path = tmp_path / "tsc-stats.yaml"
    aggregator = StatsAggregator(totals_path=totals_path)

    aggregator.record(Stats(required_error=1, matched_error=1))
    aggregator.record(Stats(extra_error=2))

    assert parse_snapshot(totals_path.read_text(encoding="utf-8")) == Stats(
        required_error=1, matched_error=1, extra_error=2
    )


def test_concurrent_records_are_never_lost() -> None:
    aggregator = StatsAggregator()
    barrier = threading.Barrier(_THREADS)

    def worker() -> None:
        barrier.wait()
        for _ in range(_RECORDS_PER_THREAD):
            aggregator.record(Stats(required_error=1, matched_error=1, extra_error=0))

    threads = [threading.Thread(target=worker) for _ in range(_THREADS)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    expected = _THREADS * _RECORDS_PER_THREAD
    assert aggregator.totals == Stats(required_error=expected, matched_error=expected)
    assert aggregator.record_count == expected


def test_unwritable_totals_file_keeps_counting(tmp_path: Path) -> None:
    aggregator = StatsAggregator(totals_path=tmp_path)

    aggregator.record(Stats(required_error=1, matched_error=1))
    totals = aggregator.record(Stats(required_error=2, panic=1))

    assert totals == Stats(required_error=3, matched_error=1, panic=1)
    assert aggregator.record_count == 2
