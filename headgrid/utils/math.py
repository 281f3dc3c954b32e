"""Numeric helpers."""

from __future__ import annotations


def total(*values: int | float) -> int | float:
    """Return the sum of all arguments, ``0`` when called without any."""
    result: int | float = 0
    for value in values:
        result += value
    return result
