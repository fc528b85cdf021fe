import math

import pytest

from jqkit.errors import InvalidArgTypeError
from jqkit.mathfuncs import binary_math, infinite, nan, ternary_math, unary_math


def test_nan_and_infinite_ignore_input():
    assert math.isnan(nan([1, 2]))
    assert infinite("x") == math.inf


@pytest.mark.parametrize(
    "name, arg, expected",
    [
        ("log", 0.0, -math.inf),
        ("log2", 0.0, -math.inf),
        ("log10", 0.0, -math.inf),
        ("exp", 1000.0, math.inf),
        ("atanh", 1.0, math.inf),
        ("atanh", -1.0, -math.inf),
        ("sinh", -1000.0, -math.inf),
        ("cosh", -1000.0, math.inf),
        ("floor", math.inf, math.inf),
        ("ceil", -math.inf, -math.inf),
    ],
)
def test_infinite_results(name, arg, expected):
    assert unary_math(name, arg) == expected


@pytest.mark.parametrize(
    "name, arg",
    [("sqrt", -1.0), ("log", -1.0), ("asin", 2.0), ("acosh", 0.5), ("sin", math.inf)],
)
def test_domain_errors_give_nan(name, arg):
    result = unary_math(name, arg)
    assert repr(float(result)) == "nan"


def test_round_half_away_from_zero():
    assert unary_math("round", 2.5) == 3.0
    assert unary_math("round", -2.5) == -3.0
    assert unary_math("round", 0.49999999999999994) == 0.0


def test_integral_functions_keep_sign_of_zero():
    assert math.copysign(1.0, unary_math("ceil", -0.5)) == -1.0
    assert math.copysign(1.0, unary_math("trunc", -0.7)) == -1.0


@pytest.mark.parametrize("x", [27.0, -8.0, 2.0, 1e-9])
def test_cbrt_inverts_cube(x):
    root = unary_math("cbrt", x)
    assert root**3 == pytest.approx(x)
    assert math.copysign(1.0, root) == math.copysign(1.0, x)


@pytest.mark.parametrize("x", [0.5, 3.0, 10.0])
def test_exp_log_round_trip(x):
    assert unary_math("log", unary_math("exp", x)) == pytest.approx(x)
    assert unary_math("exp2", unary_math("log2", x)) == pytest.approx(x)
    assert unary_math("exp10", unary_math("log10", x)) == pytest.approx(x)


def test_exp10_of_integer():
    assert unary_math("exp10", 2) == 100.0


def test_predicates():
    assert unary_math("isnan", math.nan) is True
    assert unary_math("isinfinite", -math.inf) is True
    assert unary_math("isnormal", 1.0) is True
    assert unary_math("isnormal", 5e-324) is False
    assert unary_math("isnormal", 0) is False


def test_fabs_and_sqrt():
    assert unary_math("fabs", -4.0) == 4.0
    assert unary_math("sqrt", 16) ** 2 == 16.0


def test_fmax_fmin_ignore_nan():
    assert binary_math("fmax", math.nan, 1.0) == 1.0
    assert binary_math("fmin", 1.0, math.nan) == 1.0
    assert binary_math("fmax", 2.0, 3.0) == 3.0
    assert binary_math("fmin", 2.0, 3.0) == 2.0


def test_pow_edge_cases():
    assert binary_math("pow", 0.0, -1.0) == math.inf
    assert binary_math("pow", -0.0, -1.0) == -math.inf
    assert math.isnan(binary_math("pow", -8.0, 1.0 / 3.0))
    assert binary_math("pow", 10.0, 400.0) == math.inf
    assert binary_math("pow", 3.0, 2.0) == 9.0


def test_copysign_and_hypot():
    assert binary_math("copysign", 2.0, -1.0) == -2.0
    assert binary_math("hypot", 3.0, 4.0) == pytest.approx(math.sqrt(25.0))


def test_fma_rounds_once():
    assert 0.1 * 10 - 1 == 0.0
    assert ternary_math("fma", 0.1, 10.0, -1.0) > 0.0


@pytest.mark.parametrize("a, b", [(2, 3), (7, -5), (0.5, 8)])
def test_fma_with_zero_addend_is_product(a, b):
    assert ternary_math("fma", a, b, 0) == a * b


def test_unary_rejects_non_number():
    with pytest.raises(InvalidArgTypeError) as info:
        unary_math("floor", "x")
    assert info.value.value == "x"
    assert info.value.function == "floor"


def test_binary_reports_second_argument_first():
    with pytest.raises(InvalidArgTypeError) as info:
        binary_math("pow", "a", "b")
    assert info.value.value == "b"
    with pytest.raises(InvalidArgTypeError) as info:
        binary_math("pow", "a", 1.0)
    assert info.value.value == "a"


def test_ternary_reports_last_non_number():
    with pytest.raises(InvalidArgTypeError) as info:
        ternary_math("fma", "a", "b", "c")
    assert info.value.value == "c"
    with pytest.raises(InvalidArgTypeError) as info:
        ternary_math("fma", "a", 1.0, 2.0)
    assert info.value.value == "a"


def test_booleans_are_not_numbers():
    with pytest.raises(InvalidArgTypeError):
        unary_math("sqrt", True)


def test_unknown_function():
    with pytest.raises(ValueError):
        unary_math("nosuch", 1.0)