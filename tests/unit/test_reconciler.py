from __future__ import annotations

from random import Random

import pytest

from tsconform.diagnostics import ActualDiagnostic, ExpectedError
from tsconform.reconcile import ReconciliationResult, reconcile

pytestmark = pytest.mark.unit


def _expected(line: int, code: str, column: int = 1) -> ExpectedError:
    return ExpectedError(line=line, column=column, code=code)


def _actual(line: int, code: str) -> ActualDiagnostic:
    return ActualDiagnostic(line=line, code=code)


def _keys(items: tuple[ExpectedError, ...] | tuple[ActualDiagnostic, ...]) -> list[tuple[int, str]]:
    return [(item.line, item.code) for item in items]


def test_identical_multisets_reconcile_fully() -> None:
    expected = [_expected(3, "TS2322"), _expected(3, "TS2322"), _expected(7, "TS2304")]
    actual = [_actual(7, "TS2304"), _actual(3, "TS2322"), _actual(3, "TS2322")]

    result = reconcile(expected, actual)

    assert result.success
    assert result.matched == len(expected)
    assert result.missing == ()
    assert result.extra == ()


def test_wildcard_line_matches_any_line_with_same_code() -> None:
    result = reconcile([_expected(0, "TS2304", column=0)], [_actual(42, "TS2304")])

    assert result.success
    assert result.matched == 1


def test_wildcard_requires_same_code() -> None:
    result = reconcile([_expected(0, "TS2304", column=0)], [_actual(42, "TS2322")])

    assert result.matched == 0
    assert _keys(result.missing) == [(0, "TS2304")]
    assert _keys(result.extra) == [(42, "TS2322")]


def test_duplicates_count_with_multiplicity() -> None:
    expected = [_expected(5, "TS2322"), _expected(5, "TS2322")]
    actual = [_actual(5, "TS2322"), _actual(5, "TS2322"), _actual(5, "TS2322")]

    result = reconcile(expected, actual)

    assert result.matched == 2
    assert result.missing == ()
    assert _keys(result.extra) == [(5, "TS2322")]


def test_extra_only_is_remove_only() -> None:
    result = reconcile([], [_actual(1, "TS7006")])

    assert not result.success
    assert result.remove_only
    assert not result.error_code_only
    assert result.matched == 0
    assert _keys(result.extra) == [(1, "TS7006")]


def test_missing_only_is_not_remove_only() -> None:
    result = reconcile([_expected(2, "TS2345")], [])

    assert not result.success
    assert not result.remove_only
    assert not result.error_code_only
    assert _keys(result.missing) == [(2, "TS2345")]


def test_same_lines_with_different_codes_is_error_code_only() -> None:
    expected = [_expected(3, "TS2322"), _expected(9, "TS2339")]
    actual = [_actual(9, "TS2551"), _actual(3, "TS2345")]

    result = reconcile(expected, actual)

    assert result.error_code_only
    assert not result.remove_only


def test_different_lines_are_not_error_code_only() -> None:
    result = reconcile([_expected(3, "TS2322")], [_actual(4, "TS2345")])

    assert not result.error_code_only


def test_wildcard_wins_tie_with_exact_line() -> None:
    expected = [_expected(0, "TS2322", column=0), _expected(5, "TS2322")]

    result = reconcile(expected, [_actual(5, "TS2322")])

    assert result.matched == 1
    assert _keys(result.missing) == [(5, "TS2322")]


def test_result_lists_are_canonically_ordered() -> None:
    expected = [_expected(9, "TS2322"), _expected(1, "TS2304"), _expected(4, "TS2339")]
    actual = [_actual(8, "TS7006"), _actual(2, "TS2345"), _actual(4, "TS2339")]

    result = reconcile(expected, actual)

    assert _keys(result.expected) == [(1, "TS2304"), (4, "TS2339"), (9, "TS2322")]
    assert _keys(result.actual) == [(2, "TS2345"), (4, "TS2339"), (8, "TS7006")]
    assert _keys(result.missing) == [(1, "TS2304"), (9, "TS2322")]
    assert _keys(result.extra) == [(2, "TS2345"), (8, "TS7006")]


def test_reconcile_is_invariant_under_input_order() -> None:
    seed_expected = [
        _expected(0, "TS2304", column=0),
        _expected(0, "TS2304", column=0),
        _expected(3, "TS2304"),
        _expected(3, "TS2322"),
        _expected(3, "TS2322"),
        _expected(8, "TS2345"),
    ]
    seed_actual = [
        _actual(3, "TS2304"),
        _actual(3, "TS2322"),
        _actual(6, "TS2304"),
        _actual(8, "TS2345"),
        _actual(8, "TS2345"),
        _actual(11, "TS7006"),
    ]
    baseline = reconcile(seed_expected, seed_actual)
    rng = Random(0)

    for _ in range(200):
        permuted_expected = list(seed_expected)
        permuted_actual = list(seed_actual)
        rng.shuffle(permuted_expected)
        rng.shuffle(permuted_actual)
        assert reconcile(permuted_expected, permuted_actual) == baseline


def test_accounting_holds_for_mixed_inputs() -> None:
    expected = [_expected(0, "TS2304", column=0), _expected(2, "TS2322"), _expected(2, "TS2322")]
    actual = [_actual(2, "TS2322"), _actual(2, "TS2304"), _actual(5, "TS2304"), _actual(6, "TS1")]

    result = reconcile(expected, actual)

    assert result.matched + len(result.missing) == len(result.expected)
    assert result.matched + len(result.extra) == len(result.actual)
    assert result.matched == 2
    assert _keys(result.missing) == [(2, "TS2322")]
    assert _keys(result.extra) == [(5, "TS2304"), (6, "TS1")]


def test_result_rejects_inconsistent_accounting() -> None:
    with pytest.raises(ValueError, match="expected entry"):
        ReconciliationResult(
            matched=1,
            missing=(),
            extra=(),
            expected=(),
            actual=(_actual(1, "TS2322"),),
        )
    with pytest.raises(ValueError, match="actual diagnostic"):
        ReconciliationResult(
            matched=0,
            missing=(),
            extra=(),
            expected=(),
            actual=(_actual(1, "TS2322"),),
        )
