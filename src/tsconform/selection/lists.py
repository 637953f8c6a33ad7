from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final

_MODULE_SEPARATOR: Final[str] = "::"
_PATH_SEPARATOR: Final[str] = "/"


class SelectionConfigError(ValueError):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message


@dataclass(frozen=True, slots=True)
class SelectionLists:
    ignored: tuple[str, ...] = ()
    passing: tuple[str, ...] = ()
    wip: tuple[str, ...] = ()
    include_wip: bool = False

    def __post_init__(self) -> None:
        for field_name in ("ignored", "passing", "wip"):
            entries = tuple(getattr(self, field_name))
            if any(not entry for entry in entries):
                raise ValueError(f"{field_name} entries must be non-empty")
            object.__setattr__(self, field_name, entries)

    @property
    def admitted(self) -> tuple[str, ...]:
        if self.include_wip:
            return self.passing + self.wip
        return self.passing


def parse_list(text: str) -> tuple[str, ...]:
    """Parse a selection list: one path substring per line, ``::`` meaning ``/``."""
    entries: list[str] = []
    for line in text.splitlines():
        entry = line.replace(_MODULE_SEPARATOR, _PATH_SEPARATOR).strip()
        if entry:
            entries.append(entry)
    return tuple(entries)


def load_list(path: Path) -> tuple[str, ...]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SelectionConfigError(
            "E_SELECTION_LIST_READ_FAILED", f"unable to read selection list '{path}': {exc}"
        ) from exc
    return parse_list(text)


def load_selection_lists(
    *,
    ignored_path: Path,
    pass_paths: Sequence[Path],
    wip_path: Path | None = None,
    include_wip: bool = False,
) -> SelectionLists:
    passing: list[str] = []
    for pass_path in pass_paths:
        passing.extend(load_list(pass_path))
    wip = load_list(wip_path) if wip_path is not None and include_wip else ()
    return SelectionLists(
        ignored=load_list(ignored_path),
        passing=tuple(passing),
        wip=wip,
        include_wip=include_wip,
    )
