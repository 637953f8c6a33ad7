from __future__ import annotations

import argparse
from pathlib import Path
from typing import Final

from tsconform.stats import PENDING_SNAPSHOT_SUFFIX, parse_snapshot

_DEFAULT_FIXTURE_DIR: Final[str] = "tests/fixtures/conformance"


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[2]


def _iter_pending_paths(fixture_dir: Path) -> tuple[Path, ...]:
    return tuple(sorted(fixture_dir.rglob(f"*.stats.yaml{PENDING_SNAPSHOT_SUFFIX}")))


def _promote(pending: Path) -> Path:
    text = pending.read_text(encoding="utf-8")
    parse_snapshot(text)
    baseline = pending.with_name(pending.name.removesuffix(PENDING_SNAPSHOT_SUFFIX))
    baseline.write_text(text, encoding="utf-8")
    pending.unlink()
    return baseline


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Promote staged conformance stats snapshots")
    parser.add_argument(
        "--approve",
        action="store_true",
        help="required explicit acknowledgment to rewrite stats baselines",
    )
    parser.add_argument(
        "--fixtures",
        type=Path,
        default=None,
        help=f"fixture directory to scan (default: {_DEFAULT_FIXTURE_DIR})",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    if not args.approve:
        raise SystemExit(
            "refusing to update stats baselines without --approve (explicit workflow gate)"
        )

    fixture_dir = (
        args.fixtures if args.fixtures is not None else _repo_root() / _DEFAULT_FIXTURE_DIR
    )
    pending_paths = _iter_pending_paths(fixture_dir)
    if not pending_paths:
        print(f"no staged snapshots under {fixture_dir.as_posix()}")
        return 0
    for pending in pending_paths:
        baseline = _promote(pending)
        print(f"approved {baseline.as_posix()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
