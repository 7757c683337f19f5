# src/deblurkit/core/fft.py
"""Frequency-domain construction and complex-plane utilities."""
from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

import numpy as np
from scipy.fft import next_fast_len as _scipy_next_fast_len

from .errors import GridShapeError
from .grids import as_real_grid

logger = logging.getLogger(__name__)

ArrayLike = np.ndarray

__all__ = [
    "next_fast_len_ge",
    "pad_to_optimal",
    "split_planes",
    "merge_planes",
    "to_spectrum",
    "from_spectrum",
    "complex_to_real",
    "crop_even",
    "swap_quadrants",
    "log_magnitude",
]

# ---------------------------------------------------------------------------
# Utilities
# ---------------------------------------------------------------------------

def next_fast_len_ge(n: int) -> int:
    """
    Return a fast DFT length >= n.

    Fast lengths are 5-smooth numbers (2^a * 3^b * 5^c), the sizes every
    common FFT backend handles without falling back to slow prime factors.

    Parameters
    ----------
    n : int
        Minimum length.

    Returns
    -------
    int
        Fast length >= n.
    """
    if n <= 1:
        return 1
    return int(_scipy_next_fast_len(int(n), real=True))


def pad_to_optimal(src: ArrayLike) -> np.ndarray:
    """
    Zero-pad a 2D grid with trailing rows/columns up to fast DFT sizes.

    Extra axes (e.g. a trailing planes axis) are left untouched.
    """
    arr = np.asarray(src)
    if arr.ndim < 2:
        raise GridShapeError(f"Expected at least 2D array, got shape {arr.shape}")
    rows, cols = arr.shape[:2]
    m = next_fast_len_ge(rows)
    n = next_fast_len_ge(cols)
    if (m, n) == (rows, cols):
        return arr.copy()

    logger.debug("padding %dx%d grid to fast DFT size %dx%d", rows, cols, m, n)
    pads = [(0, m - rows), (0, n - cols)] + [(0, 0)] * (arr.ndim - 2)
    return np.pad(arr, pad_width=pads, mode="constant", constant_values=0)


def _is_planes(arr: np.ndarray) -> bool:
    return arr.ndim == 3 and arr.shape[2] == 2 and not np.iscomplexobj(arr)


def split_planes(grid: ArrayLike) -> Tuple[np.ndarray, np.ndarray]:
    """
    Split a complex grid into its (real, imaginary) float64 planes.

    Accepts a 2D complex array or a real (H, W, 2) array of stacked planes.
    """
    arr = np.asarray(grid)
    if arr.ndim == 2 and np.iscomplexobj(arr):
        return arr.real.astype(np.float64), arr.imag.astype(np.float64)
    if _is_planes(arr):
        return arr[..., 0].astype(np.float64), arr[..., 1].astype(np.float64)
    raise GridShapeError(
        f"Expected a 2-channel grid (complex 2D or real (H, W, 2)), "
        f"got shape {arr.shape} dtype {arr.dtype}"
    )


def merge_planes(real: ArrayLike, imag: ArrayLike, like: Optional[ArrayLike] = None) -> np.ndarray:
    """
    Recombine two planes.

    The result is complex128 unless `like` is a (H, W, 2) planes array, in
    which case the same stacked layout is returned.
    """
    real = np.asarray(real, dtype=np.float64)
    imag = np.asarray(imag, dtype=np.float64)
    if real.shape != imag.shape:
        raise GridShapeError(f"Plane shapes differ: {real.shape} vs {imag.shape}")
    if like is not None and _is_planes(np.asarray(like)):
        return np.stack([real, imag], axis=-1)
    return real + 1j * imag


# ---------------------------------------------------------------------------
# Forward / inverse transforms
# ---------------------------------------------------------------------------

def to_spectrum(src: ArrayLike, optimal_size: bool = True) -> np.ndarray:
    """
    Full complex 2D DFT of a grid.

    Parameters
    ----------
    src : ndarray
        Real 2D grid, complex 2D grid, or real (H, W, 2) planes.
    optimal_size : bool
        If True, zero-pad with trailing rows/columns to the next fast DFT
        size before transforming. Otherwise transform at native size.

    Returns
    -------
    ndarray, complex128
        Unshifted spectrum (DC at [0, 0]) in full, unpacked layout.
    """
    arr = np.asarray(src)
    if arr.ndim == 2 and np.iscomplexobj(arr):
        planes = arr.astype(np.complex128)
    elif _is_planes(arr):
        planes = merge_planes(arr[..., 0], arr[..., 1])
    else:
        real = as_real_grid(arr, name="src")
        # real plane plus a zero imaginary plane
        planes = real.astype(np.complex128)

    if optimal_size:
        planes = pad_to_optimal(planes)

    return np.fft.fft2(planes)


def from_spectrum(spectrum: ArrayLike, shape: Optional[Sequence[int]] = None) -> np.ndarray:
    """
    Inverse 2D DFT returning the real plane.

    Parameters
    ----------
    spectrum : ndarray
        Complex 2D grid or real (H, W, 2) planes.
    shape : (rows, cols) or None
        If given, crop the top-left region of this size, which undoes the
        trailing padding added by ``to_spectrum(..., optimal_size=True)``.
    """
    real, imag = split_planes(spectrum)
    y = np.fft.ifft2(real + 1j * imag).real
    if shape is not None:
        rows, cols = (int(s) for s in shape)
        if rows > y.shape[0] or cols > y.shape[1]:
            raise GridShapeError(f"Cannot crop {y.shape} spectrum to larger shape {(rows, cols)}")
        y = y[:rows, :cols].copy()
    return y


def complex_to_real(src: ArrayLike) -> np.ndarray:
    """Real plane of a 2-channel grid. Single-plane input is rejected."""
    real, _ = split_planes(src)
    return real


# ---------------------------------------------------------------------------
# Centered spectra
# ---------------------------------------------------------------------------

def crop_even(grid: ArrayLike) -> np.ndarray:
    """View of `grid` with the last row/column dropped where the size is odd."""
    arr = np.asarray(grid)
    rows, cols = arr.shape[:2]
    return arr[: rows & -2, : cols & -2]


def swap_quadrants(grid: np.ndarray) -> None:
    """
    Swap quadrants in place so a DC-at-corner spectrum becomes DC-at-center.

    Top-left is exchanged with bottom-right and top-right with bottom-left.
    The grid is modified in place; both spatial dimensions must be even
    (see `crop_even`). Trailing axes, such as stacked planes, move along.
    """
    if not isinstance(grid, np.ndarray):
        raise TypeError(f"swap_quadrants works in place on an ndarray, got {type(grid).__name__}")
    if grid.ndim < 2:
        raise GridShapeError(f"Expected at least 2D array, got shape {grid.shape}")
    rows, cols = grid.shape[:2]
    if rows % 2 or cols % 2:
        raise GridShapeError(f"swap_quadrants needs even dimensions, got {rows}x{cols}")

    cy, cx = rows // 2, cols // 2
    tmp = grid[:cy, :cx].copy()
    grid[:cy, :cx] = grid[cy:, cx:]
    grid[cy:, cx:] = tmp

    tmp = grid[:cy, cx:].copy()
    grid[:cy, cx:] = grid[cy:, :cx]
    grid[cy:, :cx] = tmp


def log_magnitude(spectrum: ArrayLike) -> np.ndarray:
    """
    Centered log-magnitude of a spectrum scaled to [0, 1].

    Computes log(1 + |F|), crops to even size, swaps quadrants and applies
    min/max normalization. A flat magnitude (e.g. the spectrum of a single
    impulse) has nothing to display and maps to all zeros.
    """
    # local import: norms depends on split_planes from this module
    from .norms import normalize_minmax

    real, imag = split_planes(spectrum)
    mag = np.log1p(np.hypot(real, imag))
    mag = crop_even(mag).copy()
    swap_quadrants(mag)
    if mag.size and not mag.max() > mag.min():
        logger.debug("log_magnitude: flat magnitude %s, returning zeros", mag.shape)
        return np.zeros_like(mag)
    return normalize_minmax(mag)
