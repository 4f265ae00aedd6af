from fractions import Fraction

import pytest
from hypothesis import given
from hypothesis import strategies as st

from numutil.fixedsigned import FixedPointFormat, SignedFixedPoint
from numutil.fixedtext import format_fixed_point, parse_fixed_point
from numutil.fixedunsigned import UnsignedFixedPoint

FMT = FixedPointFormat(8, 4)

formats = st.sampled_from(
    [
        FixedPointFormat(8, 4),
        FixedPointFormat(16, 8),
        FixedPointFormat(16, 16),
        FixedPointFormat(32, 5),
        FixedPointFormat(12, 1),
    ]
)
kinds = st.sampled_from([SignedFixedPoint, UnsignedFixedPoint])


@st.composite
def fixed_values(draw):
    fmt = draw(formats)
    cls = draw(kinds)
    raw = draw(st.integers(0, (1 << fmt.bit_size) - 1))
    return cls.from_raw_data(fmt, raw)


def exact_value(x):
    raw = x.signed_data() if x.is_negative() else x.unsigned_data()
    return Fraction(raw, 1 << x.fmt.fractional_bits)


def test_format_simple_values():
    assert format_fixed_point(SignedFixedPoint.from_raw_data(FMT, 24)) == "1.5"
    assert format_fixed_point(SignedFixedPoint.from_raw_data(FMT, -36)) == "-2.25"
    assert format_fixed_point(SignedFixedPoint(FMT, 0)) == "0"
    assert format_fixed_point(UnsignedFixedPoint(FMT, 7)) == "7"


def test_format_rounds_at_zero_precision():
    assert format_fixed_point(SignedFixedPoint.from_raw_data(FMT, 24), 0) == "2"


def test_format_all_fractional_bits():
    fmt = FixedPointFormat(8, 8)
    assert format_fixed_point(UnsignedFixedPoint.from_raw_data(fmt, 0x80)) == "0.5"


def test_format_rejects_negative_precision():
    with pytest.raises(ValueError):
        format_fixed_point(SignedFixedPoint(FMT, 1), -1)


def test_parse_integers():
    assert parse_fixed_point("3", SignedFixedPoint, FMT) == SignedFixedPoint(FMT, 3)
    assert parse_fixed_point("-3", SignedFixedPoint, FMT) == SignedFixedPoint(FMT, -3)
    assert parse_fixed_point("  7 ", UnsignedFixedPoint, FMT) == UnsignedFixedPoint(FMT, 7)


def test_parse_bare_point_is_zero():
    assert parse_fixed_point(".", SignedFixedPoint, FMT).unsigned_data() == 0


@pytest.mark.parametrize("text", ["", "   ", "-", "abc", "1.2.3", "1 2", "- 5", "+1"])
def test_parse_rejects_malformed(text):
    with pytest.raises(ValueError):
        parse_fixed_point(text, SignedFixedPoint, FMT)


@given(fixed_values())
def test_format_is_exact_with_enough_precision(x):
    assert Fraction(format_fixed_point(x, 40)) == exact_value(x)


@given(fixed_values(), st.integers(0, 6))
def test_format_error_within_half_unit(x, precision):
    text = format_fixed_point(x, precision)
    assert abs(Fraction(text) - exact_value(x)) <= Fraction(1, 2 * 10**precision)
    if "." in text:
        assert not text.endswith("0")
        assert len(text.split(".")[1]) <= precision


@given(fixed_values())
def test_round_trip_within_one_unit(x):
    parsed = parse_fixed_point(format_fixed_point(x, 40), type(x), x.fmt)
    diff = exact_value(parsed) - exact_value(x)
    unit = Fraction(1, 1 << x.fmt.fractional_bits)
    assert abs(diff) <= unit
    assert parsed.truncated_to_integer() == x.truncated_to_integer() or abs(diff) == unit


@given(formats, kinds, st.integers(0, 100))
def test_integer_round_trip_is_exact(fmt, cls, n):
    if fmt.integer_bits < 8:
        n %= 1 << max(fmt.integer_bits - 1, 0)
    x = cls(fmt, n)
    assert parse_fixed_point(format_fixed_point(x), cls, fmt) == x