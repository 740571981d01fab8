"""
Fraction normalization for ingredient and step text.

Rewrites fractions and mixed numbers as rounded decimals:
    "1/2 TL Salz"     -> "0.5 TL Salz"
    "1 1/2 Tassen"    -> "1.5 Tassen"
    "2/3 cup"         -> "0.67 cup"
    "999/1000"        -> "1"
    "1/0"             -> "1/0" (left alone)
"""

import re
from decimal import ROUND_HALF_UP, Decimal
from fractions import Fraction

UNICODE_FRACTIONS: dict[str, Fraction] = {
    "½": Fraction(1, 2),
    "¼": Fraction(1, 4),
    "¾": Fraction(3, 4),
    "⅓": Fraction(1, 3),
    "⅔": Fraction(2, 3),
    "⅛": Fraction(1, 8),
    "⅜": Fraction(3, 8),
    "⅝": Fraction(5, 8),
    "⅞": Fraction(7, 8),
}

# Optional whole part, numerator, denominator. Dates like 1/2/2024 never match.
_FRACTION = re.compile(r"(?<![\d.,/])(?:(\d+)\s+)?(\d+)\s*/\s*(\d+)(?![\d/])")
_UNICODE_FRACTION = re.compile(
    r"(?<![\d.,])(?:(\d+)\s*)?([" + "".join(UNICODE_FRACTIONS) + r"])"
)

_HUNDREDTHS = Decimal("0.01")


def format_quantity(value: Fraction | Decimal | float | int) -> str:
    """
    Render a quantity rounded half-up to 2 decimals.

    Integers render without a decimal point and trailing zeros are stripped:
        Fraction(1, 2) -> "0.5"
        Fraction(999, 1000) -> "1"
        2.25 -> "2.25"
    """
    if isinstance(value, Fraction):
        exact = Decimal(value.numerator) / Decimal(value.denominator)
    else:
        exact = Decimal(str(value))

    rounded = exact.quantize(_HUNDREDTHS, rounding=ROUND_HALF_UP)
    if rounded == rounded.to_integral_value():
        return str(int(rounded))
    return format(rounded, "f").rstrip("0").rstrip(".")


def _replace_fraction(match: re.Match) -> str:
    whole, numerator, denominator = match.groups()
    if int(denominator) == 0:
        return match.group(0)

    value = Fraction(int(numerator), int(denominator))
    if whole:
        value += int(whole)
    return format_quantity(value)


def _replace_unicode_fraction(match: re.Match) -> str:
    whole, symbol = match.groups()
    value = UNICODE_FRACTIONS[symbol]
    if whole:
        value += int(whole)
    return format_quantity(value)


def normalize_fractions(text: str) -> str:
    """
    Convert every fraction in the text to a decimal, leaving the rest verbatim.

    Idempotent: text that already uses decimals passes through unchanged.
    """
    if not text:
        return text

    converted = _FRACTION.sub(_replace_fraction, text)
    return _UNICODE_FRACTION.sub(_replace_unicode_fraction, converted)
