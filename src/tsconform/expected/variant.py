from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TestVariant:
    """One compilation configuration of a fixture.

    ``line_shift`` is the number of directive lines stripped from the fixture
    before it reaches the checker; golden line numbers are offset by it.
    """

    __test__ = False

    target: str
    raw_target: str
    libs: tuple[str, ...] = ()
    strict: bool = False
    module: str | None = None
    line_shift: int = 0

    def __post_init__(self) -> None:
        if not self.target:
            raise ValueError("target must be non-empty")
        if not self.raw_target:
            raise ValueError("raw_target must be non-empty")
        if self.line_shift < 0:
            raise ValueError("line_shift must be >= 0")
        object.__setattr__(self, "libs", tuple(self.libs))
