# src/deblurkit/conv2d/kernels.py
"""Smoothing kernels and the Gaussian blur used by edge tapering."""
from __future__ import annotations

from typing import Optional
import numpy as np

from deblurkit.core.grids import as_real_grid
from .convolve import convolve

__all__ = [
    "gaussian_sigma_for_size",
    "gaussian_1d",
    "gaussian_kernel",
    "gaussian_blur",
]


ArrayLike = np.ndarray


# ---------------------------------------------------------------------------
# Gaussian kernels
# ---------------------------------------------------------------------------

def gaussian_sigma_for_size(ksize: int) -> float:
    """
    Standard deviation implied by a kernel size when none is given.

    Uses the usual rule ``0.3 * ((ksize - 1) * 0.5 - 1) + 0.8``, so e.g.
    ksize=19 gives 3.2 and ksize=51 gives 8.0.
    """
    if ksize < 1 or ksize % 2 == 0:
        raise ValueError(f"ksize must be a positive odd integer, got {ksize}")
    return 0.3 * ((ksize - 1) * 0.5 - 1.0) + 0.8


def gaussian_1d(
    sigma: float,
    radius: Optional[int] = None,
    truncate: float = 3.0,
    normalize: bool = True,
) -> ArrayLike:
    """
    1D Gaussian kernel.

    Parameters
    ----------
    sigma : float
        Standard deviation of the Gaussian.
    radius : int | None
        Number of samples on each side of zero. If None, computed as
        round(truncate * sigma).
    truncate : float
        Truncation in standard deviations if radius is None.
    normalize : bool
        If True, kernel sums to 1.

    Returns
    -------
    w : ndarray, shape (2*radius+1,)
    """
    if sigma <= 0:
        raise ValueError("sigma must be positive")

    if radius is None:
        radius = int(round(truncate * sigma))
        radius = max(1, radius)

    x = np.arange(-radius, radius + 1, dtype=np.float64)
    g = np.exp(-0.5 * (x / sigma) ** 2)

    if normalize:
        g_sum = g.sum()
        if g_sum != 0:
            g /= g_sum
    return g


def gaussian_kernel(ksize: int, sigma: Optional[float] = None) -> ArrayLike:
    """
    Normalized 1D Gaussian taps of odd length `ksize`.

    If `sigma` is None or <= 0 it is derived from `ksize`.
    """
    if ksize < 1 or ksize % 2 == 0:
        raise ValueError(f"ksize must be a positive odd integer, got {ksize}")
    if sigma is None or sigma <= 0:
        sigma = gaussian_sigma_for_size(ksize)
    return gaussian_1d(sigma, radius=ksize // 2, normalize=True)


# ---------------------------------------------------------------------------
# Blur
# ---------------------------------------------------------------------------

def gaussian_blur(img: ArrayLike, ksize: int, sigma: Optional[float] = None) -> np.ndarray:
    """
    Separable Gaussian blur of a 2D grid, output of the same size.

    Borders are mirrored without repeating the edge sample
    (``dcb|abcd|cba``), then the padded grid is convolved with the column
    and row taps using valid cropping.

    Parameters
    ----------
    img : ndarray, shape (H, W)
        Real or integer grid.
    ksize : int
        Odd kernel size.
    sigma : float or None
        Standard deviation; derived from `ksize` when None.

    Returns
    -------
    ndarray, float64
    """
    arr = as_real_grid(img, name="img")
    taps = gaussian_kernel(ksize, sigma)
    r = ksize // 2
    if r == 0:
        return arr.copy()

    padded = np.pad(arr, pad_width=((r, r), (r, r)), mode="reflect")
    tmp = convolve(padded, taps[:, np.newaxis], shape="valid")
    return convolve(tmp, taps[np.newaxis, :], shape="valid")
