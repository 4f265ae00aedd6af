"""Decimal text form of fixed-point numbers."""

from __future__ import annotations

import operator
import re
from typing import Any, TypeVar

from numutil.fixedsigned import FixedPointFormat

__all__ = ["format_fixed_point", "parse_fixed_point"]

FixedPoint = TypeVar("FixedPoint")

_NUMBER = re.compile(
    r"\s*(?P<sign>-)?(?:(?P<integer>[0-9]+)(?:\.(?P<fraction>[0-9]*))?"
    r"|\.(?P<bare_fraction>[0-9]*))\s*"
)


def format_fixed_point(x: Any, precision: int = 6) -> str:
    """Return the decimal text of a fixed-point value.

    At most ``precision`` digits follow the decimal point. The last digit is
    rounded half up, trailing zeros of the fraction are dropped, and the point
    is left out when no fractional digits remain.
    """
    precision = operator.index(precision)
    if precision < 0:
        raise ValueError("precision must be non-negative")

    fmt: FixedPointFormat = x.fmt
    data = x.unsigned_data()
    negative = x.is_negative()
    if negative:
        data = -data & fmt.mask

    if fmt.fractional_bits < fmt.bit_size:
        digits = str(data >> fmt.fractional_bits)
    else:
        digits = "0"
    dot_position = len(digits)

    word = 1 << fmt.bit_size
    remainder = (data << fmt.integer_bits) & fmt.mask
    fraction_digits = []
    for _ in range(precision):
        if not remainder:
            break
        digit, remainder = divmod(remainder * 10, word)
        fraction_digits.append(str(digit))
    digits += "".join(fraction_digits)

    if remainder & fmt.high_bit_mask:
        rounded = str(int(digits) + 1).zfill(len(digits))
        if len(rounded) > len(digits):
            dot_position += 1
        digits = rounded

    integer_text = digits[:dot_position]
    fraction_text = digits[dot_position:].rstrip("0")
    text = f"{integer_text}.{fraction_text}" if fraction_text else integer_text
    return f"-{text}" if negative else text


def parse_fixed_point(text: str, cls: type[FixedPoint], fmt: FixedPointFormat) -> FixedPoint:
    """Parse decimal text into a value of ``cls`` in format ``fmt``.

    The text is an optional ``-`` followed by digits with an optional
    fraction, or by a point and fraction digits; surrounding whitespace is
    allowed. The integer part wraps around the word size and the fraction is
    truncated, not rounded. Raises ValueError on malformed text.
    """
    match = _NUMBER.fullmatch(text)
    if match is None:
        raise ValueError(f"invalid fixed-point literal: {text!r}")

    integer_part = 0
    for digit in match["integer"] or "":
        integer_part = (integer_part * 10 + int(digit)) & fmt.mask

    fraction_digits = match["fraction"] or match["bare_fraction"] or ""
    place = 1 << (2 * fmt.bit_size)
    fraction = 0
    for digit in fraction_digits:
        place //= 10
        if not place:
            break
        fraction += int(digit) * place
    fraction_high = fraction >> fmt.bit_size

    if fmt.fractional_bits < fmt.bit_size:
        data = (integer_part << fmt.fractional_bits) | (fraction_high >> fmt.integer_bits)
    else:
        data = fraction_high
    data &= fmt.mask
    if match["sign"]:
        data = -data & fmt.mask
    return cls.from_raw_data(fmt, data)