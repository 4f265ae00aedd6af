"""Gaussian elimination: linear systems and determinants."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Optional

Compare = Callable[[Any, Any], bool]


class SingularMatrixError(ArithmeticError):
    """Raised when a linear system has a singular matrix."""


def _default_compare(current: Any, candidate: Any) -> bool:
    return abs(current) < abs(candidate)


def _copy_square(a: Sequence[Sequence[Any]]) -> list[list[Any]]:
    rows = [list(row) for row in a]
    dimension = len(rows)
    if any(len(row) != dimension for row in rows):
        raise ValueError("matrix must be square")
    return rows


def _copy_vector(b: Sequence[Any], dimension: int) -> list[Any]:
    values = list(b)
    if len(values) != dimension:
        raise ValueError("free vector length does not match the matrix")
    return values


def _eliminate_below(a: list[list[Any]], b: Optional[list[Any]], i: int) -> None:
    dimension = len(a)
    pivot_row = a[i]
    for j in range(i + 1, dimension):
        row = a[j]
        if row[i] != 0:
            c = row[i] / pivot_row[i]
            row[i] = 0
            for k in range(i + 1, dimension):
                row[k] -= c * pivot_row[k]
            if b is not None:
                b[j] -= c * b[i]


def _find_nonzero_pivot(a: list[list[Any]], i: int) -> Optional[int]:
    if a[i][i] != 0:
        return i
    return next((j for j in range(i + 1, len(a)) if a[j][i] != 0), None)


def _choose_pivot(a: list[list[Any]], i: int, compare: Compare) -> tuple[int, int]:
    dimension = len(a)
    c = a[i][i]
    p = q = i
    for k in range(i + 1, dimension):
        if compare(c, a[i][k]):
            c, q = a[i][k], k
    for j in range(i + 1, dimension):
        for k in range(i, dimension):
            if compare(c, a[j][k]):
                c, p, q = a[j][k], j, k
    return p, q


def _swap_columns(a: list[list[Any]], i: int, q: int) -> None:
    for row in a:
        row[i], row[q] = row[q], row[i]


def _product_of_diagonal(a: list[list[Any]], negate: bool) -> Any:
    r = -1 if negate else 1
    for i, row in enumerate(a):
        r *= row[i]
    return r


def solve_linear_system(a: Sequence[Sequence[Any]], b: Sequence[Any]) -> list[Any]:
    """Solve ``a @ x == b`` by elimination, swapping rows only where a pivot is zero.

    The inputs are not modified. Raises SingularMatrixError if no pivot is found.
    """
    m = _copy_square(a)
    dimension = len(m)
    v = _copy_vector(b, dimension)
    for i in range(dimension):
        p = _find_nonzero_pivot(m, i)
        if p is None:
            raise SingularMatrixError("matrix is singular")
        if p != i:
            m[i][i:], m[p][i:] = m[p][i:], m[i][i:]
            v[i], v[p] = v[p], v[i]
        _eliminate_below(m, v, i)
    x: list[Any] = [0] * dimension
    for i in reversed(range(dimension)):
        c = v[i]
        for k in range(i + 1, dimension):
            c -= m[i][k] * x[k]
        x[i] = c / m[i][i]
    return x


def determinant(a: Sequence[Sequence[Any]]) -> Any:
    """Return the determinant of a square matrix; the input is not modified."""
    m = _copy_square(a)
    negate = False
    for i in range(len(m)):
        p = _find_nonzero_pivot(m, i)
        if p is None:
            return m[i][i] * 0
        if p != i:
            m[i][i:], m[p][i:] = m[p][i:], m[i][i:]
            negate = not negate
        _eliminate_below(m, None, i)
    return _product_of_diagonal(m, negate)


def solve_linear_system_with_pivoting(
    a: Sequence[Sequence[Any]],
    b: Sequence[Any],
    compare: Optional[Compare] = None,
) -> list[Any]:
    """Solve ``a @ x == b`` with full pivoting.

    ``compare(current, candidate)`` tells whether ``candidate`` is a better
    pivot; by default the element of larger absolute value wins. The inputs
    are not modified. Raises SingularMatrixError if the matrix is singular.
    """
    compare = compare or _default_compare
    m = _copy_square(a)
    dimension = len(m)
    v = _copy_vector(b, dimension)
    solution_index = list(range(dimension))
    for i in range(dimension):
        p, q = _choose_pivot(m, i, compare)
        if p != i:
            m[i][i:], m[p][i:] = m[p][i:], m[i][i:]
            v[i], v[p] = v[p], v[i]
        if q != i:
            _swap_columns(m, i, q)
            solution_index[i], solution_index[q] = solution_index[q], solution_index[i]
        if m[i][i] == 0:
            raise SingularMatrixError("matrix is singular")
        _eliminate_below(m, v, i)
    x: list[Any] = [0] * dimension
    for i in reversed(range(dimension)):
        c = v[i]
        for j in range(i + 1, dimension):
            c -= m[i][j] * x[solution_index[j]]
        x[solution_index[i]] = c / m[i][i]
    return x


def determinant_with_pivoting(
    a: Sequence[Sequence[Any]],
    compare: Optional[Compare] = None,
) -> Any:
    """Return the determinant using full pivoting; the input is not modified."""
    compare = compare or _default_compare
    m = _copy_square(a)
    negate = False
    for i in range(len(m)):
        p, q = _choose_pivot(m, i, compare)
        if p != i:
            m[i][i:], m[p][i:] = m[p][i:], m[i][i:]
            negate = not negate
        if q != i:
            _swap_columns(m, i, q)
            negate = not negate
        if m[i][i] == 0:
            return m[i][i] * 0
        _eliminate_below(m, None, i)
    return _product_of_diagonal(m, negate)