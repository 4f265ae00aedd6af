"""Unsigned fixed-point numbers sharing their formats with the signed kind."""

from __future__ import annotations

import functools
import math
import operator
from typing import Any, Optional

from numutil.fixedsigned import FixedPointFormat, SignedFixedPoint

__all__ = ["UnsignedFixedPoint"]


@functools.total_ordering
class UnsignedFixedPoint:
    """An unsigned fixed-point number stored as a word of ``fmt.bit_size`` bits.

    Arithmetic wraps around like machine integers, except that division
    saturates to the maximum on overflow. Plain integers, and signed values
    of the same format, take part in arithmetic and comparisons.
    """

    __slots__ = ("fmt", "_data")

    def __init__(self, fmt: FixedPointFormat, value: int = 0) -> None:
        self.fmt = fmt
        self._data = fmt.from_integer(value)

    # construction

    @classmethod
    def from_raw_data(cls, fmt: FixedPointFormat, raw: int) -> "UnsignedFixedPoint":
        """Make a value whose word is ``raw`` reduced to ``fmt.bit_size`` bits."""
        result = cls.__new__(cls)
        result.fmt = fmt
        result._data = operator.index(raw) & fmt.mask
        return result

    @classmethod
    def from_float(cls, fmt: FixedPointFormat, x: float) -> "UnsignedFixedPoint":
        """Convert a float, rounding halves upwards."""
        x = float(x)
        if not math.isfinite(x):
            raise ValueError("cannot convert a non-finite value to fixed point")
        scaled = math.ldexp(math.ldexp(x, fmt.fractional_bits + 1) + 1, -1)
        return cls.from_raw_data(fmt, int(scaled))

    @classmethod
    def from_signed(cls, x: SignedFixedPoint) -> "UnsignedFixedPoint":
        """Reinterpret the word of a signed value as unsigned."""
        return cls.from_raw_data(x.fmt, x.unsigned_data())

    @classmethod
    def min_value(cls, fmt: FixedPointFormat) -> "UnsignedFixedPoint":
        return cls.from_raw_data(fmt, 0)

    @classmethod
    def max_value(cls, fmt: FixedPointFormat) -> "UnsignedFixedPoint":
        return cls.from_raw_data(fmt, fmt.mask)

    @classmethod
    def epsilon(cls, fmt: FixedPointFormat) -> "UnsignedFixedPoint":
        return cls.from_raw_data(fmt, 1)

    def _make(self, raw: int) -> "UnsignedFixedPoint":
        return type(self).from_raw_data(self.fmt, raw)

    def _coerce(self, other: Any) -> Any:
        if isinstance(other, UnsignedFixedPoint):
            if other.fmt != self.fmt:
                raise TypeError("fixed-point formats differ")
            return other
        if isinstance(other, SignedFixedPoint):
            if other.fmt != self.fmt:
                raise TypeError("fixed-point formats differ")
            return type(self).from_signed(other)
        if isinstance(other, int) and not isinstance(other, bool):
            return type(self)(self.fmt, other)
        return NotImplemented

    # inspection

    def signed_data(self) -> int:
        return self.fmt.to_signed(self._data)

    def unsigned_data(self) -> int:
        return self._data

    def is_negative(self) -> bool:
        return False

    def is_high_bit_set(self) -> bool:
        return bool(self._data & self.fmt.high_bit_mask)

    def hamming_weight(self) -> int:
        return bin(self._data).count("1")

    def truncated_to_integer(self) -> int:
        fmt = self.fmt
        if fmt.fractional_bits >= fmt.bit_size:
            return 0
        return self._data >> fmt.fractional_bits

    def rounded_to_integer(self) -> int:
        fmt = self.fmt
        if fmt.fractional_bits >= fmt.bit_size:
            return 0
        data = (self._data + fmt.fractional_part_high_bit_mask) & fmt.mask
        return data >> fmt.fractional_bits

    def to_float(self) -> float:
        return math.ldexp(float(self._data), -self.fmt.fractional_bits)

    def to_signed(self) -> SignedFixedPoint:
        """Reinterpret the word as a signed value of the same format."""
        return SignedFixedPoint.from_raw_data(self.fmt, self._data)

    def exponent(self) -> int:
        """Return ``e`` with ``2**(e-1) <= self < 2**e``."""
        return self._data.bit_length() - self.fmt.fractional_bits

    # shifts

    def _check_shift(self, n: int) -> int:
        n = operator.index(n)
        if not 0 <= n < self.fmt.bit_size:
            raise ValueError("shift count out of range")
        return n

    def signed_shift_right(self, n: int) -> "UnsignedFixedPoint":
        """Shift right, copying the high bit into the vacated positions."""
        n = self._check_shift(n)
        return self._make(self.signed_data() >> n)

    def unsigned_shift_right(self, n: int) -> "UnsignedFixedPoint":
        n = self._check_shift(n)
        return self._make(self._data >> n)

    def __lshift__(self, n: int) -> "UnsignedFixedPoint":
        n = self._check_shift(n)
        return self._make(self._data << n)

    def __rshift__(self, n: int) -> "UnsignedFixedPoint":
        return self.unsigned_shift_right(n)

    # arithmetic

    def __pos__(self) -> "UnsignedFixedPoint":
        return self

    def __neg__(self) -> "UnsignedFixedPoint":
        return self._make(-self._data)

    def __invert__(self) -> "UnsignedFixedPoint":
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
        product = self._data * o._data + fmt.fractional_part_high_bit_mask
        return self._make(product >> fmt.fractional_bits)

    __rmul__ = __mul__

    def __truediv__(self, other: Any) -> Any:
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        if o._data == 0:
            raise ZeroDivisionError("fixed-point division by zero")
        fmt = self.fmt
        bits = fmt.bit_size
        bv = o._data
        shift = bits - bv.bit_length()
        bv <<= shift
        shift += fmt.fractional_bits + 1
        rounded = (self._data << shift) // bv + 1
        if rounded >> (bits + 1):
            return type(self).max_value(fmt)
        return self._make(rounded >> 1)

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

    def __floor__(self) -> "UnsignedFixedPoint":
        return self._make(self._data & self.fmt.integer_part_mask)

    def __ceil__(self) -> "UnsignedFixedPoint":
        fmt = self.fmt
        return self._make((self._data + fmt.fractional_part_mask) & fmt.integer_part_mask)

    def __trunc__(self) -> "UnsignedFixedPoint":
        return self.__floor__()

    def __round__(self, ndigits: Optional[int] = None) -> "UnsignedFixedPoint":
        if ndigits is not None:
            raise TypeError("fixed-point rounding takes no digit count")
        fmt = self.fmt
        return self._make(
            (self._data + fmt.fractional_part_high_bit_mask) & fmt.integer_part_mask
        )

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
        return self._data < o._data

    def __hash__(self) -> int:
        return hash((self.fmt, self._data))

    def __bool__(self) -> bool:
        return self._data != 0

    def __int__(self) -> int:
        return self.truncated_to_integer()

    def __float__(self) -> float:
        return self.to_float()

    def __repr__(self) -> str:
        return f"{type(self).__name__}.from_raw_data({self.fmt!r}, {self._data})"