from .config import BuildProfile, RunConfig, SuiteLayout
from .suite import (
    FIXTURE_SUFFIXES,
    ConformanceSuite,
    FixturePlan,
    is_multi_file_source,
    iter_fixture_paths,
)
from .types import (
    Checker,
    ConformanceFailure,
    FixtureOutcome,
    OutcomeStatus,
    SuiteReport,
    VariantLoader,
    VariantOutcome,
)

__all__ = [
    "BuildProfile",
    "Checker",
    "ConformanceFailure",
    "ConformanceSuite",
    "FIXTURE_SUFFIXES",
    "FixtureOutcome",
    "FixturePlan",
    "OutcomeStatus",
    "RunConfig",
    "SuiteLayout",
    "SuiteReport",
    "VariantLoader",
    "VariantOutcome",
    "is_multi_file_source",
    "iter_fixture_paths",
]
