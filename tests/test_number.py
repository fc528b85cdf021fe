import math

import pytest

from jqkit.number import format_number, is_number, parse_number, saturating_int


@pytest.mark.parametrize("value, expected", [(1, True), (1.5, True), (True, False), ("1", False), (None, False)])
def test_is_number(value, expected):
    assert is_number(value) is expected


@pytest.mark.parametrize("text", ["1.5", "-2", "1e5", ".5", "3.", "+7"])
def test_parse_number_matches_float(text):
    assert parse_number(text) == float(text)


@pytest.mark.parametrize("text", ["", " 1", "1 ", "1_000", "abc", "0x10", ".", "e5"])
def test_parse_number_rejects(text):
    with pytest.raises(ValueError):
        parse_number(text)


def test_parse_special_values():
    assert parse_number("inf") == math.inf
    assert parse_number("-Infinity") == -math.inf
    assert math.isnan(parse_number("NaN"))


def test_format_integral_has_no_fraction():
    assert format_number(2.0) == "2"


def test_format_nan():
    assert format_number(float("nan")) == "NaN"


@pytest.mark.parametrize("value", [1e20, 1e-7, 0.1, 123.456, -5.25, 1.7976931348623157e308])
def test_format_round_trips_without_exponent(value):
    text = format_number(value)
    assert "e" not in text.lower()
    assert parse_number(text) == value


def test_format_infinity_round_trips():
    assert parse_number(format_number(math.inf)) == math.inf
    assert parse_number(format_number(-math.inf)) == -math.inf


def test_saturating_int_truncates():
    assert saturating_int(3.7, -10, 10) == 3
    assert saturating_int(-3.7, -10, 10) == -3


@pytest.mark.parametrize(
    "value, expected",
    [(1e30, 10), (-1e30, -10), (math.inf, 10), (-math.inf, -10), (math.nan, -10), (11, 10)],
)
def test_saturating_int_bounds(value, expected):
    assert saturating_int(value, -10, 10) == expected