"""Special-function helpers: log-space arithmetic, Stirling and Bernoulli
numbers, and the coefficients of the gamma function's asymptotic series.

Exact coefficients are returned as :class:`fractions.Fraction` (or ``int``)
and are cached, so repeated calls grow the tables only as far as needed.
"""

from __future__ import annotations

import math
import operator
from fractions import Fraction

__all__ = [
    "log_add",
    "log_sub",
    "stirling_number_of_1st_kind",
    "bernoulli_number",
    "gamma_asymptotic_series_coefficient",
    "log_gamma_asymptotic_series_coefficient",
    "incomplete_gamma_head_series_aux",
]


def log_add(a: float, b: float) -> float:
    """Return ``log(exp(a) + exp(b))`` without overflowing."""
    if a > b:
        return a + math.log1p(math.exp(b - a))
    return b + math.log1p(math.exp(a - b))


def log_sub(a: float, b: float) -> float:
    """Return ``log(exp(a) - exp(b))``; ``a`` must be greater than ``b``."""
    if not a > b:
        raise ValueError("log_sub requires a > b")
    return a + math.log1p(-math.exp(b - a))


def _index(n: object, name: str = "n") -> int:
    value = operator.index(n)
    if value < 0:
        raise ValueError(f"{name} must be non-negative")
    return value


_stirling_rows: list[list[int]] = [[1]]


def stirling_number_of_1st_kind(n: int, k: int) -> int:
    """Return the signed Stirling number of the first kind ``s(n, k)``.

    Requires ``n >= 0`` and ``0 <= k <= n``.
    """
    n = _index(n)
    k = _index(k, "k")
    if k > n:
        raise ValueError("k must not exceed n")
    while len(_stirling_rows) <= n:
        previous = _stirling_rows[-1]
        factor = len(_stirling_rows) - 1
        row = [0]
        row.extend(
            low - factor * high for low, high in zip(previous, previous[1:])
        )
        row.append(1)
        _stirling_rows.append(row)
    return _stirling_rows[n][k]


_bernoulli: list[Fraction] = [Fraction(1), Fraction(-1, 2), Fraction(1, 6)]


def bernoulli_number(n: int) -> Fraction:
    """Return the Bernoulli number ``B_n`` (with ``B_1 = -1/2``)."""
    n = _index(n)
    while len(_bernoulli) <= n:
        m = len(_bernoulli)
        if m % 2:
            _bernoulli.append(Fraction(0))
            continue
        total = Fraction(0)
        binomial = 1
        for i, value in enumerate(_bernoulli):
            total += binomial * value
            binomial = binomial * (m + 1 - i) // (i + 1)
        _bernoulli.append(-total / (m + 1))
    return _bernoulli[n]


_gamma_series: list[Fraction] = [Fraction(1), Fraction(1)]
_gamma_scaled: list[Fraction] = []
_gamma_factor = 1


def gamma_asymptotic_series_coefficient(n: int) -> Fraction:
    """Return the ``n``-th coefficient of the Stirling series for the gamma function.

    ``gamma(x) ~ sqrt(2 pi) x**(x - 1/2) exp(-x) * sum(c_n / x**n)``.
    """
    global _gamma_factor
    n = _index(n)
    while len(_gamma_series) <= 2 * n + 1:
        size = len(_gamma_series)
        t = _gamma_series[-1]
        for i in range(2, size):
            t -= i * _gamma_series[i] * _gamma_series[size + 1 - i]
        _gamma_series.append(t / (size + 1))
    while len(_gamma_scaled) <= n:
        i = 2 * len(_gamma_scaled) + 1
        _gamma_factor *= i
        _gamma_scaled.append(_gamma_factor * _gamma_series[i])
    return _gamma_scaled[n]


def log_gamma_asymptotic_series_coefficient(n: int) -> Fraction:
    """Return ``B_{2n+2} / ((2n+1)(2n+2))``, the ``n``-th term of the log-gamma series.

    ``log gamma(x) ~ (x - 1/2) log x - x + log(2 pi)/2 + sum(c_n / x**(2n+1))``.
    """
    n = _index(n)
    q = 2 * n + 2
    return bernoulli_number(q) / ((q - 1) * q)


def incomplete_gamma_head_series_aux(a: float, x: float) -> float:
    """Sum the series ``sum(x**n / (a (a+1) ... (a+n)))`` until it stops changing.

    Multiplied by ``x**a * exp(-x)`` this gives the lower incomplete gamma
    function. Requires ``a > 0``.
    """
    a = float(a)
    x = float(x)
    if not a > 0:
        raise ValueError("a must be positive")
    y = 1.0 / a
    s = y
    n = 1
    while True:
        y *= x / (a + n)
        t = s
        s += y
        if s == t:
            return s
        n += 1