from .codes import (
    CodeTableError,
    ErrorCodeTable,
    is_parser_test,
    is_syntax_error_code,
    load_error_code_table,
    normalize_code,
    normalize_error_code,
    parse_code_number,
)
from .models import WILDCARD_LINE, ActualDiagnostic, ExpectedError
from .sort import actual_sort_key, expected_sort_key, sort_actual, sort_expected

__all__ = [
    "ActualDiagnostic",
    "CodeTableError",
    "ErrorCodeTable",
    "ExpectedError",
    "WILDCARD_LINE",
    "actual_sort_key",
    "expected_sort_key",
    "is_parser_test",
    "is_syntax_error_code",
    "load_error_code_table",
    "normalize_code",
    "normalize_error_code",
    "parse_code_number",
    "sort_actual",
    "sort_expected",
]
