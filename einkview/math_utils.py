"""Pure math utilities - no external dependencies."""

from __future__ import annotations
import math


def clamp(v: float, a: float, b: float) -> float:
    """Clamp value v to range [a, b]."""
    return a if v < a else b if v > b else v


def diagonal(w: float, h: float) -> float:
    """Length of the diagonal of a w x h rectangle."""
    return math.sqrt(w * w + h * h)


def half_diagonal_step(distance: float) -> float:
    """Per-axis component of a 45 degree move of the given length."""
    return math.sqrt(distance * distance / 2)


def in_open_range(v: float, lo: float, hi: float) -> bool:
    """Check lo < v < hi."""
    return lo < v < hi
