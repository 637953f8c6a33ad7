from .lists import (
    SelectionConfigError,
    SelectionLists,
    load_list,
    load_selection_lists,
    parse_list,
)
from .selector import FixtureSelector, SourceParser, source_parses

__all__ = [
    "FixtureSelector",
    "SelectionConfigError",
    "SelectionLists",
    "SourceParser",
    "load_list",
    "load_selection_lists",
    "parse_list",
    "source_parses",
]
