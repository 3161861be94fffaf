"""Kernel flags – structural equality used for change detection."""
from __future__ import annotations

from typing import Any


def values_equal(a: Any, b: Any) -> bool:
    """Compare two flag values the way a change is defined.

    Lists compare element-wise and order-sensitively.  A list never equals a
    scalar and a bool never equals a number, so ``True -> 1`` is a change
    while ``1 -> 1.0`` is not.
    """
    a_list = isinstance(a, (list, tuple))
    b_list = isinstance(b, (list, tuple))
    if a_list or b_list:
        if not (a_list and b_list) or len(a) != len(b):
            return False
        return all(values_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    return bool(a == b)


__all__ = ["values_equal"]
