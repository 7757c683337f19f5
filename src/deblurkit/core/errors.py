# src/deblurkit/core/errors.py
"""Exception types raised by deblurkit operations."""
from __future__ import annotations

__all__ = [
    "GridShapeError",
    "DegenerateInputError",
]


class GridShapeError(ValueError):
    """A grid, mask or kernel does not satisfy an operation's preconditions."""


class DegenerateInputError(ValueError):
    """
    Input is well-formed but numerically degenerate.

    Raised instead of dividing by zero, e.g. for a constant region in a
    correlation or a grid without dynamic range in a normalization.
    """
