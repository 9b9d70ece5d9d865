"""Number formatting for the rendered table (pt-BR conventions)."""

import math

POSITIVE = "positive"
NEGATIVE = "negative"

# Swap en-US grouping for pt-BR: "." groups thousands, "," marks decimals
_PT_BR = str.maketrans({",": ".", ".": ","})


def to_number(value: object) -> float:
    """Lenient numeric reading; anything unreadable becomes NaN."""
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return math.nan


def is_non_negative(value: object) -> bool:
    """True when value reads as a number >= 0; NaN is never non-negative."""
    return to_number(value) >= 0


def sign_token(value: object) -> str:
    """Color token for a signed quantity."""
    return POSITIVE if is_non_negative(value) else NEGATIVE


def format_currency(value: object, decimals: int = 4) -> str:
    """
    Format an FX price with a fixed number of decimals in pt-BR style.

    >>> format_currency("5")
    '5,0000'
    >>> format_currency(5123.45678)
    '5.123,4568'
    """
    number = to_number(value)
    if math.isnan(number):
        return "NaN"
    return f"{number:,.{decimals}f}".translate(_PT_BR)


def format_signed_percent(value: object) -> str:
    """
    Two-decimal percentage with an explicit '+' for values >= 0.

    >>> format_signed_percent("-1.2345")
    '-1.23%'
    >>> format_signed_percent("0")
    '+0.00%'
    """
    number = to_number(value)
    if math.isnan(number):
        return "NaN%"
    if number >= 0:
        # abs() folds -0.0 into +0.00
        return f"+{abs(number):.2f}%"
    return f"{number:.2f}%"
