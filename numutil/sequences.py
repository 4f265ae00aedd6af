"""Concatenation of lists and deques with arbitrary iterables."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from typing import Any, Union

Sequence = Union[list, deque]


def concatenate(first: Sequence, *args: Iterable[Any]) -> Sequence:
    """Return a new list or deque holding ``first`` followed by every iterable in ``args``.

    The result has the same kind as ``first``; a deque keeps its ``maxlen``.
    ``first`` itself is left unchanged.
    """
    if isinstance(first, deque):
        result: Sequence = deque(first, maxlen=first.maxlen)
    elif isinstance(first, list):
        result = list(first)
    else:
        raise TypeError(
            f"expected a list or deque, got {type(first).__name__}"
        )
    for items in args:
        result.extend(items)
    return result