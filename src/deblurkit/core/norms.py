# src/deblurkit/core/norms.py
"""Normalization utilities for real and two-channel grids."""
from __future__ import annotations

import numpy as np

from .errors import DegenerateInputError
from .fft import merge_planes, split_planes

__all__ = [
    "normalize_symmetric",
    "normalize_minmax",
]


def _symmetric_plane(x: np.ndarray) -> np.ndarray:
    if x.size == 0:
        return x.astype(np.float64)
    scale = float(max(abs(float(np.min(x))), abs(float(np.max(x)))))
    if scale == 0.0 or not np.isfinite(scale):
        raise DegenerateInputError(f"Cannot normalize a plane with peak magnitude {scale}")
    return np.asarray(x, dtype=np.float64) / scale


def normalize_symmetric(grid: np.ndarray) -> np.ndarray:
    """
    Scale a grid by ``1 / max(|min|, |max|)``.

    The signed range is preserved proportionally around zero, so the result
    lies in [-1, 1] with at least one extreme at exactly +-1.

    Parameters
    ----------
    grid : ndarray
        - 2D real: one channel.
        - 2D complex or real (H, W, 2): the rule is applied independently to
          each plane and the planes are recombined in the input layout.

    Returns
    -------
    ndarray
        New array; the input is not modified.

    Raises
    ------
    DegenerateInputError
        If a plane is identically zero.
    """
    arr = np.asarray(grid)
    if arr.ndim == 2 and not np.iscomplexobj(arr):
        return _symmetric_plane(arr)

    real, imag = split_planes(arr)
    return merge_planes(_symmetric_plane(real), _symmetric_plane(imag), like=arr)


def normalize_minmax(grid: np.ndarray, lo: float = 0.0, hi: float = 1.0) -> np.ndarray:
    """
    Linearly map ``[min, max]`` of a real grid onto ``[lo, hi]``.

    Raises
    ------
    DegenerateInputError
        If the grid has no dynamic range (max == min).
    """
    arr = np.asarray(grid, dtype=np.float64)
    if arr.size == 0:
        return arr
    xmin = float(arr.min())
    xmax = float(arr.max())
    if not xmax > xmin:
        raise DegenerateInputError(f"Cannot min/max normalize a grid with range [{xmin}, {xmax}]")
    return (arr - xmin) / (xmax - xmin) * (hi - lo) + lo
