from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Final, cast

import yaml  # type: ignore[import-untyped]

STATS_FIELDS: Final[tuple[str, ...]] = (
    "required_error",
    "matched_error",
    "extra_error",
    "panic",
)


@dataclass(frozen=True, slots=True)
class Stats:
    required_error: int = 0
    matched_error: int = 0
    extra_error: int = 0
    panic: int = 0

    def __post_init__(self) -> None:
        for field_name in STATS_FIELDS:
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{field_name} must be an int")
            if value < 0:
                raise ValueError(f"{field_name} must be >= 0")

    def __add__(self, other: Stats) -> Stats:
        return Stats(
            required_error=self.required_error + other.required_error,
            matched_error=self.matched_error + other.matched_error,
            extra_error=self.extra_error + other.extra_error,
            panic=self.panic + other.panic,
        )

    @classmethod
    def crashed(cls, *, required_error: int) -> Stats:
        return cls(required_error=required_error, panic=1)


def render_snapshot(stats: Stats) -> str:
    payload = asdict(stats)
    return yaml.safe_dump({key: payload[key] for key in STATS_FIELDS}, sort_keys=False)


def parse_snapshot(text: str) -> Stats:
    try:
        payload = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"invalid stats snapshot yaml: {exc}") from exc
    if not isinstance(payload, dict):
        raise ValueError("stats snapshot must be a mapping")
    raw = cast(dict[str, object], payload)
    unknown = sorted(set(raw) - set(STATS_FIELDS))
    if unknown:
        raise ValueError(f"stats snapshot has unsupported keys: {', '.join(unknown)}")
    values: dict[str, int] = {}
    for field_name in STATS_FIELDS:
        value = raw.get(field_name, 0)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"stats snapshot field {field_name} must be an integer")
        values[field_name] = value
    return Stats(**values)
