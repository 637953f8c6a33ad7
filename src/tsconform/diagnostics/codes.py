from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from functools import cache
from pathlib import Path
from types import MappingProxyType
from typing import Final, cast

import yaml  # type: ignore[import-untyped]

DEFAULT_ALIAS_TABLE_PATH: Final[Path] = (
    Path(__file__).resolve().parent / "data/error_code_aliases.yaml"
)
CODE_PREFIX: Final[str] = "TS"
_SYNTAX_ERROR_FAMILY_PREFIX: Final[str] = "TS1"
_SYNTAX_ERROR_CODE_LENGTH: Final[int] = 6
# reported by the parser even though it sits outside the TS1xxx family
PARSER_ONLY_CODES: Final[frozenset[str]] = frozenset({"TS2369"})
_SUPPORTED_SCHEMA_VERSION: Final[int] = 1


class CodeTableError(ValueError):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message


@dataclass(frozen=True, slots=True)
class ErrorCodeTable:
    aliases: Mapping[int, int]
    artifact_path: str

    def normalize(self, code: int) -> int:
        return self.aliases.get(code, code)


def load_error_code_table(path: str | Path | None = None) -> ErrorCodeTable:
    selected_path = Path(path) if path is not None else DEFAULT_ALIAS_TABLE_PATH
    return _load_error_code_table_cached(str(selected_path.resolve()))


@cache
def _load_error_code_table_cached(path: str) -> ErrorCodeTable:
    target = Path(path)
    try:
        raw_text = target.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CodeTableError(
            "E_CODE_TABLE_READ_FAILED", f"unable to read alias table '{target}': {exc}"
        ) from exc
    try:
        payload = yaml.safe_load(raw_text)
    except yaml.YAMLError as exc:
        raise CodeTableError(
            "E_CODE_TABLE_PARSE_FAILED", f"invalid alias table yaml in '{target}': {exc}"
        ) from exc
    if not isinstance(payload, dict):
        raise CodeTableError("E_CODE_TABLE_INVALID", "alias table must be a mapping")

    raw = cast(dict[str, object], payload)
    if raw.get("schema_version") != _SUPPORTED_SCHEMA_VERSION:
        raise CodeTableError(
            "E_CODE_TABLE_INVALID",
            f"unsupported schema_version: {raw.get('schema_version')!r}",
        )
    raw_aliases = raw.get("aliases")
    if not isinstance(raw_aliases, dict):
        raise CodeTableError(
            "E_CODE_TABLE_INVALID", "missing or invalid mapping for key 'aliases'"
        )
    return ErrorCodeTable(
        aliases=_build_alias_mapping(cast(dict[object, object], raw_aliases)),
        artifact_path=str(target),
    )


def _build_alias_mapping(raw_aliases: dict[object, object]) -> Mapping[int, int]:
    aliases: dict[int, int] = {}
    for canonical, variants in raw_aliases.items():
        canonical_code = _require_code_number(canonical, context="canonical code")
        if not isinstance(variants, list) or not variants:
            raise CodeTableError(
                "E_CODE_TABLE_INVALID",
                f"aliases for {canonical_code} must be a non-empty list",
            )
        for variant in variants:
            alias_code = _require_code_number(variant, context=f"alias of {canonical_code}")
            previous = aliases.get(alias_code)
            if previous is not None and previous != canonical_code:
                raise CodeTableError(
                    "E_CODE_TABLE_INVALID",
                    f"alias {alias_code} maps to both {previous} and {canonical_code}",
                )
            aliases[alias_code] = canonical_code

    chained = sorted(set(aliases) & set(aliases.values()))
    if chained:
        listed = ", ".join(str(code) for code in chained)
        raise CodeTableError(
            "E_CODE_TABLE_INVALID", f"canonical codes must not also be aliases: {listed}"
        )
    return MappingProxyType({key: aliases[key] for key in sorted(aliases)})


def _require_code_number(value: object, *, context: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise CodeTableError("E_CODE_TABLE_INVALID", f"{context} must be a positive integer")
    return value


def parse_code_number(code: str) -> int:
    if not code.startswith(CODE_PREFIX):
        raise ValueError(f"error code must start with '{CODE_PREFIX}': {code!r}")
    digits = code[len(CODE_PREFIX) :]
    if not digits.isdigit():
        raise ValueError(f"error code must be '{CODE_PREFIX}' followed by digits: {code!r}")
    return int(digits)


def normalize_error_code(code: int, *, table: ErrorCodeTable | None = None) -> int:
    selected = table if table is not None else load_error_code_table()
    return selected.normalize(code)


def normalize_code(code: str, *, table: ErrorCodeTable | None = None) -> str:
    """Return the canonical ``TSxxxx`` spelling of ``code``.

    Codes without an alias entry come back unchanged, so applying this twice
    yields the same value as applying it once.
    """
    number = parse_code_number(code)
    canonical = normalize_error_code(number, table=table)
    if canonical == number:
        return code
    return f"{CODE_PREFIX}{canonical}"


def is_syntax_error_code(code: str) -> bool:
    return code.startswith(_SYNTAX_ERROR_FAMILY_PREFIX) and len(code) == _SYNTAX_ERROR_CODE_LENGTH


def is_parser_test(codes: Iterable[str]) -> bool:
    return any(is_syntax_error_code(code) or code in PARSER_ONLY_CODES for code in codes)
