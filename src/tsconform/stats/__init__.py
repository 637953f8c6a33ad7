from .aggregator import StatsAggregator
from .gate import (
    PENDING_SNAPSHOT_SUFFIX,
    SnapshotGate,
    SnapshotGateError,
    SnapshotGateErrorCode,
    SnapshotGateErrorDetail,
    pending_snapshot_path,
)
from .models import STATS_FIELDS, Stats, parse_snapshot, render_snapshot

__all__ = [
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
