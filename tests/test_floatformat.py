import math

import pytest

from roadrouter.floatformat import append_exponent, format_buffer, to_chars


def test_zero_looks_like_a_float():
    assert to_chars(0.0) == "0.0"


def test_negative_zero_keeps_sign():
    assert to_chars(-0.0) == "-0.0"


def test_integral_value_gets_fraction():
    assert to_chars(1.0) == "1.0"


@pytest.mark.parametrize("value", [0.1, 1.5, 123.456, 0.001, 2.25, 42.0])
def test_simple_values_match_shortest_repr(value):
    assert to_chars(value) == repr(value)


@pytest.mark.parametrize(
    "value",
    [
        1e-300,
        5e-324,
        1.7976931348623157e308,
        123456789.123,
        1 / 3,
        -2.5e-7,
        6.02214076e23,
        1e16,
        1e15,
        99999.99999,
    ],
)
def test_round_trip(value):
    assert float(to_chars(value)) == value


def test_large_value_uses_exponent():
    text = to_chars(1e16)
    assert "e+" in text
    assert float(text) == 1e16


def test_small_value_uses_exponent():
    text = to_chars(1e-10)
    assert "e-" in text
    assert float(text) == 1e-10


def test_negative_value_has_leading_minus():
    text = to_chars(-3.75)
    assert text.startswith("-")
    assert float(text) == -3.75


@pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
def test_non_finite_rejected(value):
    with pytest.raises(ValueError):
        to_chars(value)


def test_append_exponent_pads_to_two_digits():
    assert append_exponent(5) == "+05"


def test_append_exponent_negative_three_digits():
    assert append_exponent(-123) == "-123"


@pytest.mark.parametrize("e", [1000, -1000])
def test_append_exponent_out_of_range(e):
    with pytest.raises(ValueError):
        append_exponent(e)


@pytest.mark.parametrize(
    "digits,exponent",
    [("123", 0), ("123", -1), ("123", -5), ("5", 20), ("17", -30), ("9", 2), ("314", -2)],
)
def test_format_buffer_preserves_value(digits, exponent):
    text = format_buffer(digits, exponent, -4, 15)
    assert float(text) == float(f"{digits}e{exponent}")
    assert "." in text or "e" in text


def test_format_buffer_rejects_bad_limits():
    with pytest.raises(ValueError):
        format_buffer("1", 0, 0, 15)
    with pytest.raises(ValueError):
        format_buffer("1", 0, -4, 0)


def test_format_buffer_rejects_non_digits():
    with pytest.raises(ValueError):
        format_buffer("1a", 0, -4, 15)