# numutil

A small library of numeric building blocks, with no runtime dependencies.

## Modules

- **`numutil.sequences`**: `concatenate(first, *args)` returns a new list or
  deque holding `first` followed by the items of every further iterable. The
  result has the same kind as `first`, a deque keeps its `maxlen`, and `first`
  itself is not changed. Any other kind of `first` raises `TypeError`.
- **`numutil.conring`**: `CongruenceRing`, an integer modulo a fixed modulus,
  always kept in `0 .. modulus - 1`. `z_ring(modulus)` returns the ring class
  for that modulus (the same class for the same modulus; a non-positive
  modulus raises `ValueError`). Elements support `+`, `-`, `*`, `/`,
  comparisons, `int()` and `hash()`, and plain integers mix in after being
  reduced. `inverse()` gives the multiplicative inverse, and it and division
  raise `ZeroDivisionError` when the value shares a factor with the modulus.
- **`numutil.mathext`**: Gaussian elimination on square matrices given as
  sequences of rows. `solve_linear_system(a, b)` swaps rows only where a pivot
  is zero; `solve_linear_system_with_pivoting(a, b, compare=None)` uses full
  pivoting, by default choosing the element of larger absolute value.
  `determinant(a)` and `determinant_with_pivoting(a, compare=None)` return the
  determinant. Inputs are never modified. A singular system raises
  `SingularMatrixError`; a non-square matrix or a free vector of the wrong
  length raises `ValueError`.
- **`numutil.specfun`**: `log_add` and `log_sub` compute
  `log(exp(a) ± exp(b))` safely (`log_sub` requires `a > b`).
  `stirling_number_of_1st_kind(n, k)` gives signed Stirling numbers,
  `bernoulli_number(n)` exact Bernoulli numbers as `Fraction` (with
  `B_1 = -1/2`), `gamma_asymptotic_series_coefficient(n)` and
  `log_gamma_asymptotic_series_coefficient(n)` the exact coefficients of the
  Stirling series for gamma and log-gamma, and
  `incomplete_gamma_head_series_aux(a, x)` the series behind the lower
  incomplete gamma function. Exact tables are cached and grow as needed.
- **`numutil.fixedsigned`**: `FixedPointFormat(bit_size, fractional_bits)`
  describes a word, and `SignedFixedPoint` is a two's-complement fixed-point
  number in such a format. Addition, subtraction and bit operations wrap
  around; multiplication rounds; division rounds and saturates to the minimum
  or maximum on overflow. `math.floor`, `math.ceil`, `math.trunc` and `round`
  return fixed-point values. Values are built with the constructor (from an
  integer), `from_raw_data`, `from_float`, `min_value`, `max_value` and
  `epsilon`, and inspected with `signed_data`, `unsigned_data`,
  `truncated_to_integer`, `rounded_to_integer`, `to_float`, `exponent`,
  `hamming_weight` and the shift methods.
- **`numutil.fixedunsigned`**: `UnsignedFixedPoint`, the unsigned counterpart,
  with the same interface plus `from_signed` and `to_signed`, which
  reinterpret the word of a value of the same format.
- **`numutil.fixedtext`**: `format_fixed_point(x, precision=6)` writes the
  exact decimal text of a fixed-point value, rounding the last digit half up
  and dropping trailing zeros. `parse_fixed_point(text, cls, fmt)` reads such
  text back into `cls`, truncating the fraction, and raises `ValueError` on
  malformed input.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

```python
from fractions import Fraction

from numutil.conring import z_ring
from numutil.mathext import determinant, solve_linear_system
from numutil.specfun import bernoulli_number

Z7 = z_ring(7)
x = Z7(3)
print(x * x.inverse())          # 1

a = [[2.0, 1.0], [1.0, 3.0]]
b = [3.0, 5.0]
print(solve_linear_system(a, b))
print(determinant(a))

print(bernoulli_number(2) == Fraction(1, 6))   # True
```

```python
from numutil.fixedsigned import FixedPointFormat, SignedFixedPoint
from numutil.fixedtext import format_fixed_point, parse_fixed_point

fmt = FixedPointFormat(32, 16)
v = SignedFixedPoint.from_float(fmt, -1.25)
print(format_fixed_point(v, 6))              # -1.25
w = parse_fixed_point("3.5", SignedFixedPoint, fmt)
print(w.to_float())                          # 3.5
```

## Limits

The package is a library only: it has no command-line tool. It evaluates
the coefficients of the gamma and log-gamma series but does not itself
evaluate the gamma, beta or incomplete gamma and beta functions.