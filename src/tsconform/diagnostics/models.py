from __future__ import annotations

import re
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

WILDCARD_LINE: Final[int] = 0
_CODE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^TS[0-9]+$")


def _validate_code(code: str) -> str:
    if not _CODE_PATTERN.fullmatch(code):
        raise ValueError(f"diagnostic code must look like 'TS<digits>', got {code!r}")
    return code


class ExpectedError(BaseModel):
    """One golden diagnostic; ``line == 0`` leaves the source line unchecked."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    line: int = Field(ge=0)
    column: int = Field(ge=0)
    code: str

    @field_validator("code")
    @classmethod
    def _validate_code(cls, code: str) -> str:
        return _validate_code(code)

    @property
    def is_wildcard(self) -> bool:
        return self.line == WILDCARD_LINE


class ActualDiagnostic(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    line: int = Field(ge=0)
    code: str
    message: str | None = None

    @field_validator("code")
    @classmethod
    def _validate_code(cls, code: str) -> str:
        return _validate_code(code)

    @property
    def key(self) -> tuple[int, str]:
        return (self.line, self.code)
