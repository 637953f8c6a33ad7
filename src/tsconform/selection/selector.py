from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from .lists import SelectionLists

logger = logging.getLogger(__name__)


@runtime_checkable
class SourceParser(Protocol):
    """Grammar check for a fixture; raises when the source does not parse."""

    def __call__(self, source: str, *, tsx: bool) -> object: ...


def _path_text(path: Path) -> str:
    return path.as_posix()


@dataclass(frozen=True, slots=True)
class FixtureSelector:
    lists: SelectionLists
    test_filter: str | None = None

    def is_ignored(self, path: Path) -> bool:
        text = _path_text(path)
        return any(entry in text for entry in self.lists.ignored)

    def admit(self, path: Path) -> bool:
        if self.is_ignored(path):
            return False
        text = _path_text(path)
        if self.test_filter is not None:
            return self.test_filter in text
        return any(entry in text for entry in self.lists.admitted)


def source_parses(path: Path, source: str, parser: SourceParser | None) -> bool:
    """Return whether ``source`` passes the grammar gate.

    A parse failure makes the fixture non-applicable rather than failed, so
    parser defects are never charged to the type checker.
    """
    if parser is None:
        return True
    try:
        parser(source, tsx="tsx" in _path_text(path))
    except Exception as exc:
        logger.info("excluding %s: source does not parse: %s", _path_text(path), exc)
        return False
    return True
