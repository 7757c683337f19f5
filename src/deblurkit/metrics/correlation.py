# src/deblurkit/metrics/correlation.py
"""Masked normalized cross-correlation between grayscale grids."""
from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from deblurkit.core.errors import DegenerateInputError
from deblurkit.core.grids import as_mask, as_real_grid, check_same_shape

logger = logging.getLogger(__name__)

ArrayLike = np.ndarray

__all__ = [
    "cross_correlation",
    "gradient_magnitude",
]


def cross_correlation(x: ArrayLike, y: ArrayLike, mask: Optional[ArrayLike] = None) -> float:
    """
    Normalized cross-correlation of two grids over the active mask region.

    With means taken over active samples only::

        E  = sum((x - mx) * (y - my))
        DX = sqrt(sum((x - mx)**2))
        DY = sqrt(sum((y - my)**2))
        r  = E / (DX * DY)

    The deviation sums are not divided by the sample count.

    Parameters
    ----------
    x, y : ndarray, shape (H, W)
        Real grids of identical shape.
    mask : ndarray, shape (H, W), optional
        Nonzero marks active samples. None means every sample is active.

    Returns
    -------
    float
        Score in [-1, 1].

    Raises
    ------
    GridShapeError
        If shapes of `x`, `y` and `mask` differ.
    DegenerateInputError
        If no sample is active or either grid is constant over the region.
    """
    xa = as_real_grid(x, name="x")
    ya = as_real_grid(y, name="y")
    check_same_shape(xa, ya, ("x", "y"))
    region = as_mask(mask, xa.shape)

    n_active = int(np.count_nonzero(region))
    if n_active == 0:
        raise DegenerateInputError("mask has no active samples")

    xv = xa[region]
    yv = ya[region]
    # the mean of a constant region is not exact in floating point
    if np.ptp(xv) == 0 or np.ptp(yv) == 0:
        raise DegenerateInputError(
            f"constant values over {n_active} active samples"
        )
    dx = xv - xv.mean()
    dy = yv - yv.mean()

    e = float(np.sum(dx * dy))
    dev_x = float(np.sqrt(np.sum(dx * dx)))
    dev_y = float(np.sqrt(np.sum(dy * dy)))
    if dev_x == 0.0 or dev_y == 0.0:
        raise DegenerateInputError(
            f"zero deviation over {n_active} active samples (x: {dev_x}, y: {dev_y})"
        )

    r = e / (dev_x * dev_y)
    logger.debug("cross_correlation over %d samples: %.6f", n_active, r)
    return r


def gradient_magnitude(gx: ArrayLike, gy: ArrayLike) -> np.ndarray:
    """Per-pixel Euclidean norm ``sqrt(gx**2 + gy**2)`` of two gradient maps."""
    ga = as_real_grid(gx, name="gx")
    gb = as_real_grid(gy, name="gy")
    check_same_shape(ga, gb, ("gx", "gy"))
    return np.hypot(ga, gb)
