from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class FixtureErrorCode(StrEnum):
    E_FIXTURE_GOLDEN_UNREADABLE = "E_FIXTURE_GOLDEN_UNREADABLE"
    E_FIXTURE_GOLDEN_INVALID_JSON = "E_FIXTURE_GOLDEN_INVALID_JSON"
    E_FIXTURE_GOLDEN_NOT_A_LIST = "E_FIXTURE_GOLDEN_NOT_A_LIST"
    E_FIXTURE_GOLDEN_ENTRY_INVALID = "E_FIXTURE_GOLDEN_ENTRY_INVALID"
    E_FIXTURE_SOURCE_UNREADABLE = "E_FIXTURE_SOURCE_UNREADABLE"


@dataclass(frozen=True, slots=True)
class FixtureErrorDetail:
    code: str
    message: str
    path: str
    witness: tuple[str, ...] | None = None


class FixtureError(ValueError):
    def __init__(self, detail: FixtureErrorDetail) -> None:
        super().__init__(f"{detail.code}: {detail.message}")
        self.detail = detail


def build_fixture_error(
    code: FixtureErrorCode,
    message: str,
    path: str,
    witness: tuple[str, ...] | None = None,
) -> FixtureError:
    return FixtureError(
        FixtureErrorDetail(
            code=code.value,
            message=message,
            path=path,
            witness=witness,
        )
    )
