"""
Fixed-Point Encoder
===================
Exact decimal-string <-> scaled-integer conversion.

A display value like "123.45" with exponent -8 becomes 12345000000
(value × 10^|exponent|). The conversion works on the digit string and
Python's arbitrary-precision int; it never passes through float.
"""

from __future__ import annotations

import re

from feed_updater.execution.execution_result import (
    EncodingError,
    EncodingErrorKind,
    ValidationError,
    ValidationErrorKind,
)

# Digits in the largest signed 64-bit magnitude
MAX_SCALED_DIGITS = 19

# Optional sign, digits, at most one '.', digits. "5.", ".5" and "-0.25" are valid.
_DECIMAL_RE = re.compile(r"^(?P<sign>[+-]?)(?P<int>\d*)(?:\.(?P<frac>\d*))?$", re.ASCII)


def _split(display_value: str) -> tuple:
    if not isinstance(display_value, str):
        raise ValidationError(
            ValidationErrorKind.BAD_FORMAT,
            f"Invalid number format for price: {display_value!r}",
        )

    text = display_value.strip()
    match = _DECIMAL_RE.match(text)
    if not match or not (match.group("int") or match.group("frac")):
        raise ValidationError(
            ValidationErrorKind.BAD_FORMAT,
            f"Invalid number format for price: {display_value!r}",
        )

    return match.group("sign"), match.group("int") or "0", match.group("frac") or ""


def encode(display_value: str, exponent: int) -> int:
    """
    Convert a decimal display string into a scaled integer.

    Args:
        display_value: Decimal text, e.g. "123.45"
        exponent: Signed exponent; only its magnitude sets the scale

    Returns:
        display_value × 10^|exponent| as an exact int

    Raises:
        ValidationError(BAD_FORMAT): not a decimal numeral
        ValidationError(PRECISION_EXCEEDED): more fractional digits than |exponent|
        EncodingError(OVERFLOW): more digits than any i64 can hold
    """
    sign, integer_part, fractional_part = _split(display_value)
    scale = abs(exponent)

    if len(fractional_part) > scale:
        raise ValidationError(
            ValidationErrorKind.PRECISION_EXCEEDED,
            f"Input precision ({len(fractional_part)} decimals) exceeds exponent precision ({scale}).",
        )

    raw = (integer_part + fractional_part.ljust(scale, "0")).lstrip("0") or "0"
    if len(raw) > MAX_SCALED_DIGITS:
        raise EncodingError(
            EncodingErrorKind.OVERFLOW,
            f"Scaled price has {len(raw)} digits and does not fit in a signed 64-bit integer",
        )
    return int(sign + raw)


def decode(amount: int, exponent: int) -> str:
    """Inverse of encode(), in normalized display form."""
    scale = abs(exponent)
    sign = "-" if amount < 0 else ""
    digits = str(abs(amount))

    if scale == 0:
        return sign + digits

    digits = digits.rjust(scale + 1, "0")
    integer_part, fractional_part = digits[:-scale], digits[-scale:].rstrip("0")

    text = integer_part + (f".{fractional_part}" if fractional_part else "")
    return sign + text if text != "0" else "0"


def normalize(display_value: str) -> str:
    """
    Canonical display form: no '+', no redundant leading/trailing zeros, no "-0".

    decode(encode(v, e), e) == normalize(v) for every valid pair.
    """
    sign, integer_part, fractional_part = _split(display_value)

    integer_part = integer_part.lstrip("0") or "0"
    fractional_part = fractional_part.rstrip("0")

    text = integer_part + (f".{fractional_part}" if fractional_part else "")
    if sign == "-" and text != "0":
        return "-" + text
    return text


class FixedPointEncoder:
    """
    Encoder bound to a fixed exponent.

    Usage:
        encoder = FixedPointEncoder(-8)
        raw = encoder.encode("123.45")   # 12345000000
    """

    def __init__(self, exponent: int):
        self.exponent = exponent

    def encode(self, display_value: str) -> int:
        return encode(display_value, self.exponent)

    def decode(self, amount: int) -> str:
        return decode(amount, self.exponent)
