"""Formatting of floating-point numbers as JSON number text."""

from __future__ import annotations

import math

from roadrouter.dtoa import grisu2

MIN_EXP = -4
MAX_EXP = 15  # decimal digits a double always holds


def append_exponent(e: int) -> str:
    """Render a decimal exponent with its sign and at least two digits."""
    if not -1000 < e < 1000:
        raise ValueError(f"exponent {e} is out of range")
    sign = "-" if e < 0 else "+"
    return f"{sign}{abs(e):02d}"


def format_buffer(digits: str, decimal_exponent: int, min_exp: int, max_exp: int) -> str:
    """Lay out ``digits * 10**decimal_exponent`` in fixed or exponential notation.

    Values in ``[10**min_exp, 10**max_exp)`` are written in fixed-point form,
    all others in exponential form.
    """
    if min_exp >= 0:
        raise ValueError("min_exp must be negative")
    if max_exp <= 0:
        raise ValueError("max_exp must be positive")
    if not digits or not digits.isdigit():
        raise ValueError("digits must be a non-empty string of decimal digits")

    k = len(digits)
    n = k + decimal_exponent

    if k <= n <= max_exp:
        return digits + "0" * (n - k) + ".0"
    if 0 < n <= max_exp:
        return f"{digits[:n]}.{digits[n:]}"
    if min_exp < n <= 0:
        return "0." + "0" * -n + digits

    mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
    return f"{mantissa}e{append_exponent(n - 1)}"


def to_chars(value: float) -> str:
    """Return the shortest text that reads back as ``value``, in the style of ``%g``."""
    value = float(value)
    if not math.isfinite(value):
        raise ValueError("only finite numbers can be formatted")
    sign = "-" if math.copysign(1.0, value) < 0 else ""
    value = abs(value)
    if value == 0:
        return sign + "0.0"
    digits, exponent = grisu2(value)
    return sign + format_buffer(digits, exponent, MIN_EXP, MAX_EXP)