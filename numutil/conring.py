"""Residue classes of the integers modulo a fixed positive modulus."""

from __future__ import annotations

import functools
import operator
from typing import Any, Union

_Operand = Union["CongruenceRing", int]


@functools.total_ordering
class CongruenceRing:
    """An element of the ring of integers modulo ``modulus``.

    The base class has no modulus; concrete rings are made with :func:`z_ring`
    or by subclassing with a ``modulus`` class attribute. Values are always
    kept in the range ``0 .. modulus - 1``. Plain integers take part in
    arithmetic and comparisons after being reduced modulo ``modulus``.
    """

    __slots__ = ("_value",)

    modulus: int = 0

    def __init__(self, value: _Operand = 0) -> None:
        if not self.modulus:
            raise TypeError(
                f"{type(self).__name__} has no modulus; create a ring with z_ring()"
            )
        if isinstance(value, CongruenceRing):
            if value.modulus != self.modulus:
                raise TypeError(
                    f"cannot convert a value modulo {value.modulus} "
                    f"to one modulo {self.modulus}"
                )
            value = value._value
        self._value = operator.index(value) % self.modulus

    @property
    def value(self) -> int:
        """The representative in ``0 .. modulus - 1``."""
        return self._value

    def _coerce(self, other: Any) -> Any:
        if isinstance(other, CongruenceRing):
            if other.modulus != self.modulus:
                return NotImplemented
            return other._value
        if isinstance(other, int):
            return other % self.modulus
        return NotImplemented

    def _make(self, value: int) -> "CongruenceRing":
        return type(self)(value)

    def inverse(self) -> "CongruenceRing":
        """Return the multiplicative inverse.

        Raises ZeroDivisionError when the value shares a factor with the modulus.
        """
        try:
            return self._make(pow(self._value, -1, self.modulus))
        except ValueError:
            raise ZeroDivisionError(
                f"{self._value} is not invertible modulo {self.modulus}"
            ) from None

    def __pos__(self) -> "CongruenceRing":
        return self

    def __neg__(self) -> "CongruenceRing":
        return self._make(-self._value)

    def __add__(self, other: Any) -> Any:
        value = self._coerce(other)
        if value is NotImplemented:
            return NotImplemented
        return self._make(self._value + value)

    __radd__ = __add__

    def __sub__(self, other: Any) -> Any:
        value = self._coerce(other)
        if value is NotImplemented:
            return NotImplemented
        return self._make(self._value - value)

    def __rsub__(self, other: Any) -> Any:
        value = self._coerce(other)
        if value is NotImplemented:
            return NotImplemented
        return self._make(value - self._value)

    def __mul__(self, other: Any) -> Any:
        value = self._coerce(other)
        if value is NotImplemented:
            return NotImplemented
        return self._make(self._value * value)

    __rmul__ = __mul__

    def __truediv__(self, other: Any) -> Any:
        value = self._coerce(other)
        if value is NotImplemented:
            return NotImplemented
        return self * self._make(value).inverse()

    def __rtruediv__(self, other: Any) -> Any:
        value = self._coerce(other)
        if value is NotImplemented:
            return NotImplemented
        return self._make(value) * self.inverse()

    def __eq__(self, other: object) -> bool:
        value = self._coerce(other)
        if value is NotImplemented:
            return NotImplemented
        return self._value == value

    def __lt__(self, other: Any) -> bool:
        value = self._coerce(other)
        if value is NotImplemented:
            return NotImplemented
        return self._value < value

    def __hash__(self) -> int:
        return hash(self._value)

    def __bool__(self) -> bool:
        return self._value != 0

    def __int__(self) -> int:
        return self._value

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value})"


@functools.lru_cache(maxsize=None)
def z_ring(modulus: int) -> type[CongruenceRing]:
    """Return the ring class of integers modulo ``modulus``.

    The same class is returned for the same modulus.
    """
    modulus = operator.index(modulus)
    if modulus <= 0:
        raise ValueError("modulus must be positive")
    return type(f"Z{modulus}", (CongruenceRing,), {"modulus": modulus, "__slots__": ()})