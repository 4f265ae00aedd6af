"""Binary fixed-point formats and signed two's-complement fixed-point numbers."""

from __future__ import annotations

import functools
import math
import operator
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class FixedPointFormat:
    """Word size and binary point position of a fixed-point number.

    ``fractional_bits`` must lie in ``1 .. bit_size``; the remaining
    ``integer_bits`` hold the integer part.
    """

    bit_size: int
    fractional_bits: int

    def __post_init__(self) -> None:
        if operator.index(self.bit_size) <= 0:
            raise ValueError("bit_size must be positive")
        if not 0 < operator.index(self.fractional_bits) <= self.bit_size:
            raise ValueError("illegal number of fractional bits")

    @property
    def integer_bits(self) -> int:
        return self.bit_size - self.fractional_bits

    @property
    def mask(self) -> int:
        """All bits of a word set."""
        return (1 << self.bit_size) - 1

    @property
    def high_bit_mask(self) -> int:
        return 1 << (self.bit_size - 1)

    @property
    def fractional_part_high_bit_mask(self) -> int:
        return 1 << (self.fractional_bits - 1)

    @property
    def fractional_part_low_bits_mask(self) -> int:
        return self.fractional_part_high_bit_mask - 1

    @property
    def fractional_part_mask(self) -> int:
        return (1 << self.fractional_bits) - 1

    @property
    def integer_part_low_bit_mask(self) -> int:
        if self.fractional_bits < self.bit_size:
            return 1 << self.fractional_bits
        return 0

    @property
    def integer_part_mask(self) -> int:
        return ~self.fractional_part_mask & self.mask

    def to_signed(self, data: int) -> int:
        """Interpret a word as a two's-complement integer."""
        data &= self.mask
        return data - (1 << self.bit_size) if data & self.high_bit_mask else data

    def from_integer(self, value: int) -> int:
        """Return the word holding the integer ``value`` shifted into place."""
        value = operator.index(value)
        if self.fractional_bits < self.bit_size:
            return (value << self.fractional_bits) & self.mask
        return 0


@functools.total_ordering
class SignedFixedPoint:
    """A signed fixed-point number stored as a two's-complement word.

    Arithmetic wraps around like machine integers, except that division
    saturates to the minimum or maximum on overflow. Plain integers take
    part in arithmetic and comparisons as fixed-point values.
    """

    __slots__ = ("fmt", "_data")

    def __init__(self, fmt: FixedPointFormat, value: int = 0) -> None:
        self.fmt = fmt
        self._data = fmt.from_integer(value)

    # construction

    @classmethod
    def from_raw_data(cls, fmt: FixedPointFormat, raw: int) -> "SignedFixedPoint":
        """Make a value whose word is ``raw`` reduced to ``fmt.bit_size`` bits."""
        result = cls.__new__(cls)
        result.fmt = fmt
        result._data = operator.index(raw) & fmt.mask
        return result

    @classmethod
    def from_float(cls, fmt: FixedPointFormat, x: float) -> "SignedFixedPoint":
        """Convert a float, rounding halves away from zero."""
        x = float(x)
        if not math.isfinite(x):
            raise ValueError("cannot convert a non-finite value to fixed point")
        scaled = math.ldexp(
            math.ldexp(x, fmt.fractional_bits + 1) + (-1 if x < 0 else 1), -1
        )
        return cls.from_raw_data(fmt, int(scaled))

    @classmethod
    def min_value(cls, fmt: FixedPointFormat) -> "SignedFixedPoint":
        return cls.from_raw_data(fmt, fmt.high_bit_mask)

    @classmethod
    def max_value(cls, fmt: FixedPointFormat) -> "SignedFixedPoint":
        return cls.from_raw_data(fmt, fmt.high_bit_mask - 1)

    @classmethod
    def epsilon(cls, fmt: FixedPointFormat) -> "SignedFixedPoint":
        return cls.from_raw_data(fmt, 1)

    def _make(self, raw: int) -> "SignedFixedPoint":
        return type(self).from_raw_data(self.fmt, raw)

    def _coerce(self, other: Any) -> Any:
        if isinstance(other, SignedFixedPoint) and type(other) is type(self):
            if other.fmt != self.fmt:
                raise TypeError("fixed-point formats differ")
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return type(self)(self.fmt, other)
        return NotImplemented

    # inspection

    def signed_data(self) -> int:
        return self.fmt.to_signed(self._data)

    def unsigned_data(self) -> int:
        return self._data

    def is_negative(self) -> bool:
        return self.is_high_bit_set()

    def is_high_bit_set(self) -> bool:
        return bool(self._data & self.fmt.high_bit_mask)

    def hamming_weight(self) -> int:
        return bin(self._data).count("1")

    def truncated_to_integer(self) -> int:
        fmt = self.fmt
        if fmt.fractional_bits >= fmt.bit_size:
            return 0
        data = self._data + fmt.fractional_part_mask if self.is_negative() else self._data
        return fmt.to_signed(data) >> fmt.fractional_bits

    def rounded_to_integer(self) -> int:
        fmt = self.fmt
        if fmt.fractional_bits >= fmt.bit_size:
            return 0
        bias = (
            fmt.fractional_part_low_bits_mask
            if self.is_negative()
            else fmt.fractional_part_high_bit_mask
        )
        return fmt.to_signed(self._data + bias) >> fmt.fractional_bits

    def to_float(self) -> float:
        return math.ldexp(float(self.signed_data()), -self.fmt.fractional_bits)

    def exponent(self) -> int:
        """Return ``e`` with ``2**(e-1) <= abs(self) < 2**e``."""
        return abs(self.signed_data()).bit_length() - self.fmt.fractional_bits

    # shifts

    def _check_shift(self, n: int) -> int:
        n = operator.index(n)
        if not 0 <= n < self.fmt.bit_size:
            raise ValueError("shift count out of range")
        return n

    def signed_shift_right(self, n: int) -> "SignedFixedPoint":
        n = self._check_shift(n)
        return self._make(self.signed_data() >> n)

    def unsigned_shift_right(self, n: int) -> "SignedFixedPoint":
        n = self._check_shift(n)
        return self._make(self._data >> n)

    def __lshift__(self, n: int) -> "SignedFixedPoint":
        n = self._check_shift(n)
        return self._make(self._data << n)

    def __rshift__(self, n: int) -> "SignedFixedPoint":
        return self.signed_shift_right(n)

    # arithmetic

    def __pos__(self) -> "SignedFixedPoint":
        return self

    def __neg__(self) -> "SignedFixedPoint":
        return self._make(-self._data)

    def __invert__(self) -> "SignedFixedPoint":
        return self._make(~self._data)

    def __add__(self, other: Any) -> Any:
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        return self._make(self._data + o._data)

    __radd__ = __add__

    def __sub__(self, other: Any) -> Any:
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        return self._make(self._data - o._data)

    def __rsub__(self, other: Any) -> Any:
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        return o - self

    def __mul__(self, other: Any) -> Any:
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        fmt = self.fmt
        negative = self.is_negative() != o.is_negative()
        product = abs(self.signed_data()) * abs(o.signed_data())
        product += fmt.fractional_part_high_bit_mask
        r = (product >> fmt.fractional_bits) & fmt.mask
        return self._make(-r if negative else r)

    __rmul__ = __mul__

    def _overflow(self, negative: bool) -> "SignedFixedPoint":
        cls = type(self)
        return cls.min_value(self.fmt) if negative else cls.max_value(self.fmt)

    def __truediv__(self, other: Any) -> Any:
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        if o._data == 0:
            raise ZeroDivisionError("fixed-point division by zero")
        fmt = self.fmt
        bits = fmt.bit_size
        negative = self.is_negative() != o.is_negative()
        av = abs(self.signed_data())
        bv = abs(o.signed_data())
        shift = bits - bv.bit_length()
        bv <<= shift
        shift += fmt.fractional_bits + 1
        if shift > bits and av >> (2 * bits - shift):
            return self._overflow(negative)
        if shift == 2 * bits:
            return self._make(0)
        numerator = av << shift
        if numerator >> bits >= bv:
            return self._overflow(negative)
        r = (((numerator // bv) + 1) & fmt.mask) >> 1
        return self._make(-r if negative else r)

    def __rtruediv__(self, other: Any) -> Any:
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        return o / self

    def __and__(self, other: Any) -> Any:
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        return self._make(self._data & o._data)

    __rand__ = __and__

    def __or__(self, other: Any) -> Any:
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        return self._make(self._data | o._data)

    __ror__ = __or__

    def __xor__(self, other: Any) -> Any:
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        return self._make(self._data ^ o._data)

    __rxor__ = __xor__

    # rounding to integral values, keeping the fixed-point type

    def __floor__(self) -> "SignedFixedPoint":
        return self._make(self._data & self.fmt.integer_part_mask)

    def __ceil__(self) -> "SignedFixedPoint":
        fmt = self.fmt
        return self._make((self._data + fmt.fractional_part_mask) & fmt.integer_part_mask)

    def __trunc__(self) -> "SignedFixedPoint":
        fmt = self.fmt
        data = self._data + fmt.fractional_part_mask if self.is_negative() else self._data
        return self._make(data & fmt.integer_part_mask)

    def __round__(self, ndigits: Optional[int] = None) -> "SignedFixedPoint":
        if ndigits is not None:
            raise TypeError("fixed-point rounding takes no digit count")
        fmt = self.fmt
        bias = (
            fmt.fractional_part_low_bits_mask
            if self.is_negative()
            else fmt.fractional_part_high_bit_mask
        )
        return self._make((self._data + bias) & fmt.integer_part_mask)

    # comparison and conversion

    def __eq__(self, other: object) -> bool:
        try:
            o = self._coerce(other)
        except TypeError:
            return False
        if o is NotImplemented:
            return NotImplemented
        return self._data == o._data

    def __lt__(self, other: Any) -> bool:
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        return self.signed_data() < o.signed_data()

    def __hash__(self) -> int:
        return hash((self.fmt, self._data))

    def __bool__(self) -> bool:
        return self._data != 0

    def __int__(self) -> int:
        return self.truncated_to_integer()

    def __float__(self) -> float:
        return self.to_float()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}.from_raw_data({self.fmt!r}, "
            f"{self.signed_data()})"
        )