import math

import pytest
from hypothesis import given, strategies as st

from numutil.fixedsigned import FixedPointFormat, SignedFixedPoint

FMT = FixedPointFormat(16, 8)
WIDE = FixedPointFormat(32, 16)
EPS = 2.0 ** -8
WIDE_EPS = 2.0 ** -16


def _round_away(v):
    return math.copysign(math.floor(abs(v) + 0.5), v)


@pytest.mark.parametrize("bits,frac", [(16, 0), (16, 17), (0, 0), (8, -1)])
def test_format_rejects_bad_sizes(bits, frac):
    with pytest.raises(ValueError):
        FixedPointFormat(bits, frac)


def test_format_integer_bits():
    assert FixedPointFormat(16, 5).integer_bits == 11


@given(st.integers(-128, 127))
def test_integer_constructor_round_trip(n):
    x = SignedFixedPoint(FMT, n)
    assert x.to_float() == n
    assert x.truncated_to_integer() == n
    assert x.rounded_to_integer() == n
    assert int(x) == n
    assert float(x) == n


def test_integer_construction_wraps():
    assert SignedFixedPoint(FMT, 128) == SignedFixedPoint(FMT, -128)


def test_all_fractional_bits_integer_is_zero():
    fmt = FixedPointFormat(8, 8)
    assert SignedFixedPoint(fmt, 5).unsigned_data() == 0
    assert SignedFixedPoint(fmt, 5).truncated_to_integer() == 0


def test_limits():
    lo = SignedFixedPoint.min_value(FMT)
    hi = SignedFixedPoint.max_value(FMT)
    eps = SignedFixedPoint.epsilon(FMT)
    assert lo.signed_data() == -(1 << 15)
    assert hi.signed_data() == (1 << 15) - 1
    assert eps.unsigned_data() == 1
    assert eps.to_float() == EPS
    assert lo < eps < hi
    assert lo.is_negative() and not hi.is_negative()


def test_raw_data_is_masked():
    x = SignedFixedPoint.from_raw_data(FMT, -1)
    assert x.unsigned_data() == (1 << 16) - 1
    assert x.signed_data() == -1
    assert x.hamming_weight() == 16


@given(st.floats(-127.0, 127.0))
def test_from_float_is_within_half_epsilon(v):
    x = SignedFixedPoint.from_float(FMT, v)
    assert abs(x.to_float() - v) <= EPS / 2


def test_from_float_rounds_half_away_from_zero():
    assert SignedFixedPoint.from_float(FMT, 2 ** -9).signed_data() == 1
    assert SignedFixedPoint.from_float(FMT, -(2 ** -9)).signed_data() == -1


@pytest.mark.parametrize("v", [math.inf, -math.inf, math.nan])
def test_from_float_rejects_non_finite(v):
    with pytest.raises(ValueError):
        SignedFixedPoint.from_float(FMT, v)


raw = st.integers(-(1 << 13), 1 << 13)


@given(raw, raw)
def test_add_and_sub_are_exact_in_range(a, b):
    x = SignedFixedPoint.from_raw_data(FMT, a)
    y = SignedFixedPoint.from_raw_data(FMT, b)
    assert (x + y).to_float() == x.to_float() + y.to_float()
    assert (x - y).to_float() == x.to_float() - y.to_float()
    assert (x - y) + y == x


@given(raw)
def test_int_operands(a):
    x = SignedFixedPoint.from_raw_data(FMT, a)
    one = SignedFixedPoint(FMT, 1)
    assert x + 1 == x + one
    assert 1 + x == x + one
    assert 1 - x == one - x
    assert x * 2 == x + x


@given(raw)
def test_negation(a):
    x = SignedFixedPoint.from_raw_data(FMT, a)
    assert (-x).to_float() == -x.to_float()
    assert -(-x) == x


def test_negating_minimum_wraps():
    lo = SignedFixedPoint.min_value(FMT)
    assert -lo == lo


wide_raw = st.integers(-(1 << 20), 1 << 20)


@given(wide_raw, wide_raw)
def test_multiplication_rounds_to_nearest(a, b):
    x = SignedFixedPoint.from_raw_data(WIDE, a)
    y = SignedFixedPoint.from_raw_data(WIDE, b)
    exact = x.to_float() * y.to_float()
    assert abs((x * y).to_float() - exact) <= WIDE_EPS / 2
    assert x * y == y * x


@given(wide_raw)
def test_multiplication_by_one(a):
    x = SignedFixedPoint.from_raw_data(WIDE, a)
    assert x * SignedFixedPoint(WIDE, 1) == x


@given(wide_raw, wide_raw.filter(lambda v: abs(v) >= 1 << 14))
def test_division_rounds_to_nearest(a, b):
    x = SignedFixedPoint.from_raw_data(WIDE, a)
    y = SignedFixedPoint.from_raw_data(WIDE, b)
    exact = x.to_float() / y.to_float()
    assert abs((x / y).to_float() - exact) <= WIDE_EPS / 2 + 1e-12


@given(st.integers(1, 1 << 10))
def test_divide_by_self_is_one(a):
    x = SignedFixedPoint.from_raw_data(FMT, a)
    assert x / x == 1
    assert (-x) / x == -1


def test_division_by_zero():
    with pytest.raises(ZeroDivisionError):
        SignedFixedPoint(FMT, 3) / SignedFixedPoint(FMT, 0)


def test_division_saturates_on_overflow():
    hi = SignedFixedPoint.max_value(FMT)
    eps = SignedFixedPoint.epsilon(FMT)
    assert hi / eps == hi
    assert (-hi) / eps == SignedFixedPoint.min_value(FMT)


def test_zero_divided_is_zero():
    eps = SignedFixedPoint.epsilon(FMT)
    assert SignedFixedPoint(FMT, 0) / eps == 0


@given(raw, raw)
def test_comparisons_match_floats(a, b):
    x = SignedFixedPoint.from_raw_data(FMT, a)
    y = SignedFixedPoint.from_raw_data(FMT, b)
    assert (x < y) == (x.to_float() < y.to_float())
    assert (x == y) == (x.to_float() == y.to_float())
    assert (x >= y) == (x.to_float() >= y.to_float())


@given(st.integers(-(1 << 14), 1 << 14))
def test_integral_rounding(a):
    x = SignedFixedPoint.from_raw_data(FMT, a)
    v = x.to_float()
    assert math.floor(x).to_float() == math.floor(v)
    assert math.ceil(x).to_float() == math.ceil(v)
    assert math.trunc(x).to_float() == math.trunc(v)
    assert round(x).to_float() == _round_away(v)
    assert x.truncated_to_integer() == math.trunc(v)
    assert x.rounded_to_integer() == _round_away(v)


def test_round_rejects_digit_count():
    with pytest.raises(TypeError):
        round(SignedFixedPoint(FMT, 1), 2)


@given(st.integers(-(1 << 12), 1 << 12), st.integers(0, 3))
def test_signed_shift_right_divides(a, n):
    x = SignedFixedPoint.from_raw_data(FMT, a << 3)
    assert x.signed_shift_right(n).to_float() == x.to_float() / 2 ** n
    assert (x >> n) == x.signed_shift_right(n)
    assert (x >> n) << n == x


def test_unsigned_shift_right_clears_sign():
    x = SignedFixedPoint(FMT, -1)
    assert x.signed_shift_right(1).is_negative()
    assert not x.unsigned_shift_right(1).is_negative()
    assert x.unsigned_shift_right(1).unsigned_data() == x.unsigned_data() >> 1


@pytest.mark.parametrize("n", [-1, 16])
def test_shift_count_out_of_range(n):
    x = SignedFixedPoint(FMT, 1)
    with pytest.raises(ValueError):
        x.signed_shift_right(n)
    with pytest.raises(ValueError):
        x << n


@given(raw, raw)
def test_bitwise_operations(a, b):
    x = SignedFixedPoint.from_raw_data(FMT, a)
    y = SignedFixedPoint.from_raw_data(FMT, b)
    mask = (1 << 16) - 1
    assert (x & y).unsigned_data() == (a & b) & mask
    assert (x | y).unsigned_data() == (a | b) & mask
    assert (x ^ y).unsigned_data() == (a ^ b) & mask
    assert (~x).unsigned_data() == ~a & mask


@given(raw.filter(lambda v: v != 0))
def test_exponent_brackets_magnitude(a):
    x = SignedFixedPoint.from_raw_data(FMT, a)
    e = x.exponent()
    assert 2.0 ** (e - 1) <= abs(x.to_float()) < 2.0 ** e


def test_mixed_formats_are_rejected():
    with pytest.raises(TypeError):
        SignedFixedPoint(FMT, 1) + SignedFixedPoint(WIDE, 1)
    assert SignedFixedPoint(FMT, 1) != SignedFixedPoint(WIDE, 1)


def test_repr_round_trip():
    x = SignedFixedPoint.from_raw_data(FMT, -300)
    assert "from_raw_data" in repr(x)
    assert SignedFixedPoint.from_raw_data(FMT, x.signed_data()) == x