import warnings

import pytest

import rabi
from rabi import codes
from rabi import distance
from rabi import common_types as ct


def test_exact_no_warnings():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        code_set = rabi.generate_exact_code(total_length=4, redundancy=1, alphabet_size=5)

    assert len(code_set) == 125
    assert distance.min_distance(code_set) >= 2


def test_exact_primality_adjustment():
    with pytest.warns(ct.PrimalityAdjustment, match="alphabet size 5"):
        code_set = rabi.generate_exact_code(total_length=4, redundancy=1, alphabet_size=6)

    expected = rabi.generate_exact_code(total_length=4, redundancy=1, alphabet_size=5)
    assert code_set == expected
    assert all(symbol < 5 for code in code_set for symbol in code)


def test_exact_length_clamped():
    with pytest.warns(ct.LengthClamped, match="changed to 3"):
        params, code_set = codes.build_exact_code(total_length=5, redundancy=1, alphabet_size=3)

    assert params == ct.CodeParams(total_length=3, redundancy=1, alphabet_size=3)
    assert len(code_set) == 3 ** 2
    assert all(len(code) == 3 for code in code_set)


def test_exact_both_adjustments():
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        params, code_set = codes.build_exact_code(total_length=7, redundancy=2, alphabet_size=6)

    categories = [warning.category for warning in caught]
    assert categories == [ct.PrimalityAdjustment, ct.LengthClamped]
    assert params == ct.CodeParams(total_length=5, redundancy=2, alphabet_size=5)
    assert len(code_set) == 5 ** 3


def test_exact_clamp_leaves_no_message():
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        try:
            rabi.generate_exact_code(total_length=6, redundancy=3, alphabet_size=3)
            assert False, "expected InvalidParameter"
        except ct.InvalidParameter as ex:
            assert "redundancy=3" in str(ex)


INVALID_PARAMS = [
    # redundancy >= total_length
    (4, 4, 5),
    (4, 5, 5),
    # redundancy < 1
    (4, 0, 5),
    (4, -1, 5),
    # alphabet too small
    (4, 1, 1),
    # not integers
    (4.0, 1, 5),
    (4, "1", 5),
    (4, 1, None),
    (True, 1, 5),
]


@pytest.mark.parametrize("total_length, redundancy, alphabet_size", INVALID_PARAMS)
def test_exact_invalid_params(total_length, redundancy, alphabet_size):
    try:
        rabi.generate_exact_code(total_length, redundancy, alphabet_size)
        assert False, "expected InvalidParameter"
    except ct.InvalidParameter:
        pass


@pytest.mark.parametrize("total_length, redundancy, alphabet_size", INVALID_PARAMS)
def test_greedy_invalid_params(total_length, redundancy, alphabet_size):
    try:
        rabi.generate_greedy_code(total_length, redundancy, alphabet_size, num_trials=1)
        assert False, "expected InvalidParameter"
    except ct.InvalidParameter:
        pass


def test_redundancy_checked_first():
    # both redundancy and alphabet_size are invalid
    try:
        rabi.generate_exact_code(total_length=3, redundancy=3, alphabet_size=1)
        assert False, "expected InvalidParameter"
    except ct.InvalidParameter as ex:
        assert "redundancy" in str(ex)


def test_invalid_parameter_is_value_error():
    assert issubclass(ct.InvalidParameter, ValueError)
    assert issubclass(ct.InvalidInput, ValueError)


def test_exact_pool_too_large():
    try:
        rabi.generate_exact_code(total_length=200, redundancy=1, alphabet_size=251)
        assert False, "expected InvalidParameter"
    except ct.InvalidParameter as ex:
        assert "too large" in str(ex)


def test_exact_huge_alphabet():
    for alphabet_size in [2 ** 64 + 1, 2 ** 100]:
        try:
            rabi.generate_exact_code(total_length=2, redundancy=1, alphabet_size=alphabet_size)
            assert False, "expected InvalidParameter"
        except ct.InvalidParameter as ex:
            assert "too large" in str(ex)


def test_exact_clamped_pool_not_rejected():
    # 5 ** 99 would be too large, but after clamping to length 5 only
    # 5 ** 4 codes remain
    with pytest.warns(ct.LengthClamped):
        code_set = rabi.generate_exact_code(total_length=100, redundancy=1, alphabet_size=5)
    assert len(code_set) == 5 ** 4
