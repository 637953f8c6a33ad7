from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Final

from tsconform.selection import SelectionLists, load_selection_lists

ENV_TEST: Final[str] = "TEST"
ENV_IGNORE_WIP: Final[str] = "STC_IGNORE_WIP"
ENV_CI: Final[str] = "CI"
ENV_DO_NOT_PRINT_MATCHED: Final[str] = "DO_NOT_PRINT_MATCHED"
ENV_PRINT_ALL: Final[str] = "PRINT_ALL"
ENV_PROFILE: Final[str] = "STC_PROFILE"
_ENABLED: Final[str] = "1"


class BuildProfile(StrEnum):
    DEBUG = "debug"
    RELEASE = "release"


def _flag(environ: Mapping[str, str], key: str) -> bool:
    return environ.get(key, "") == _ENABLED


@dataclass(frozen=True, slots=True)
class RunConfig:
    test_filter: str | None = None
    include_wip: bool = False
    ci: bool = False
    print_matched: bool = True
    print_all: bool = False
    profile: BuildProfile = BuildProfile.DEBUG

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RunConfig:
        env = os.environ if environ is None else environ
        raw_profile = env.get(ENV_PROFILE, BuildProfile.DEBUG.value) or BuildProfile.DEBUG.value
        try:
            profile = BuildProfile(raw_profile.lower())
        except ValueError as exc:
            choices = ", ".join(member.value for member in BuildProfile)
            raise ValueError(f"{ENV_PROFILE} must be one of: {choices}") from exc
        return cls(
            test_filter=env.get(ENV_TEST),
            include_wip=_flag(env, ENV_IGNORE_WIP),
            ci=_flag(env, ENV_CI),
            print_matched=not _flag(env, ENV_DO_NOT_PRINT_MATCHED),
            print_all=_flag(env, ENV_PRINT_ALL),
            profile=profile,
        )

    @property
    def full_suite(self) -> bool:
        """``TEST`` is set but empty: every non-ignored fixture runs."""
        return self.test_filter == ""

    @property
    def records_stats(self) -> bool:
        return self.profile is BuildProfile.DEBUG

    @property
    def records_timings(self) -> bool:
        return self.profile is BuildProfile.RELEASE


@dataclass(frozen=True, slots=True)
class SuiteLayout:
    root: Path
    ignored_list: str = "tests/tsc.ignored.txt"
    pass_lists: tuple[str, ...] = ("tests/conformance.pass.txt", "tests/compiler.pass.txt")
    wip_list: str = "tests/tsc.wip.txt"
    totals_path: str = "tests/tsc-stats.yaml"
    timings_path: str = "tests/tsc.timings.yaml"

    def resolve(self, relative: str) -> Path:
        return self.root / relative

    def load_selection_lists(self, config: RunConfig) -> SelectionLists:
        return load_selection_lists(
            ignored_path=self.resolve(self.ignored_list),
            pass_paths=tuple(self.resolve(name) for name in self.pass_lists),
            wip_path=self.resolve(self.wip_list),
            include_wip=config.include_wip,
        )
