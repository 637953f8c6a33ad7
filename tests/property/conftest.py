"""Hypothesis profile for the reconciliation and code-normalization properties.

Diagnostic multisets are small, so a derandomized run with a fixed example
budget keeps CI reproducible while still covering duplicate and wildcard mixes.
"""

from __future__ import annotations

from hypothesis import settings
from hypothesis.errors import InvalidArgument

_PROPERTY_PROFILE = "tsconform_property_ci"


def pytest_configure(config: object) -> None:
    del config
    try:
        settings.get_profile(_PROPERTY_PROFILE)
    except InvalidArgument:
        # no deadline: permutation draws dominate and vary by machine
        settings.register_profile(
            _PROPERTY_PROFILE,
            settings(
                derandomize=True,
                max_examples=100,
                deadline=None,
                print_blob=True,
            ),
        )
    settings.load_profile(_PROPERTY_PROFILE)
