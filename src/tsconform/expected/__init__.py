from .errors import FixtureError, FixtureErrorCode, FixtureErrorDetail
from .loader import (
    ERRORS_FILE_SUFFIX,
    STATS_FILE_SUFFIX,
    ExpectedErrorSet,
    expected_errors_path,
    load_expected_errors,
    read_expected_errors,
)
from .variant import TestVariant

__all__ = [
    "ERRORS_FILE_SUFFIX",
    "ExpectedErrorSet",
    "FixtureError",
    "FixtureErrorCode",
    "FixtureErrorDetail",
    "STATS_FILE_SUFFIX",
    "TestVariant",
    "expected_errors_path",
    "load_expected_errors",
    "read_expected_errors",
]
