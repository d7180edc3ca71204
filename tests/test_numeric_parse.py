import math

import pytest

from regression_analyzer.numeric_parse import (
    is_numeric_value, parse_decimal_prefix, to_finite_float,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("42", 42.0),
        ("  3.5  ", 3.5),
        ("\t-7\n", -7.0),
        ("12abc", 12.0),
        ("3.5 kg", 3.5),
        ("-.5", -0.5),
        ("+7", 7.0),
        ("5.", 5.0),
        (".25", 0.25),
        ("1e3", 1000.0),
        ("1.5E-2", 0.015),
        ("2e", 2.0),
        ("2e+", 2.0),
        ("1.5.6", 1.5),
        ("0x1A", 0.0),
        ("1,234", 1.0),
        ("007", 7.0),
    ],
)
def test_parse_decimal_prefix_accepts_leading_literal(text, expected):
    assert parse_decimal_prefix(text) == pytest.approx(expected)


@pytest.mark.parametrize(
    "text",
    ["", "   ", "abc", ".", "-", "+", "e5", "NaN", "nan", "$12", "١٢"],
)
def test_parse_decimal_prefix_rejects_non_numeric(text):
    with pytest.raises(ValueError):
        parse_decimal_prefix(text)


def test_parse_decimal_prefix_infinity_and_overflow():
    assert parse_decimal_prefix("Infinity") == math.inf
    assert parse_decimal_prefix("-Infinity units") == -math.inf
    assert parse_decimal_prefix("1e999") == math.inf


@pytest.mark.parametrize(
    "value, expected",
    [
        (5, 5.0),
        (2.5, 2.5),
        ("12abc", 12.0),
        (" 0 ", 0.0),
    ],
)
def test_to_finite_float_converts(value, expected):
    assert to_finite_float(value) == expected


@pytest.mark.parametrize(
    "value",
    ["", "abc", "Infinity", "1e999", math.nan, math.inf, -math.inf,
     True, False, None],
)
def test_to_finite_float_rejects(value):
    assert to_finite_float(value) is None


def test_is_numeric_value():
    assert is_numeric_value("3 apples")
    assert not is_numeric_value("apples")
