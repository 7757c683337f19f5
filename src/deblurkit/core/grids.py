# src/deblurkit/core/grids.py
"""Grid primitives: validation of real grids, masks, kernels and byte images."""
from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from .errors import GridShapeError

ArrayLike = np.ndarray

__all__ = [
    "ConvShape",
    "as_conv_shape",
    "as_real_grid",
    "as_mask",
    "as_kernel",
    "as_byte_grid",
    "check_same_shape",
]


class ConvShape(str, Enum):
    """Output sizing policy of a linear convolution."""

    FULL = "full"
    SAME = "same"
    VALID = "valid"


def as_conv_shape(shape: Union[ConvShape, str]) -> ConvShape:
    """
    Coerce a shape policy given as enum member or string.

    Strings are matched case-insensitively ("full", "SAME", ...).
    """
    if isinstance(shape, ConvShape):
        return shape
    if isinstance(shape, str):
        try:
            return ConvShape(shape.strip().lower())
        except ValueError:
            pass
    raise GridShapeError(f"Invalid convolution shape {shape!r}; expected one of full, same, valid")


def as_real_grid(x: ArrayLike, name: str = "grid") -> np.ndarray:
    """
    Return `x` as a 2D float64 array.

    Raises
    ------
    GridShapeError
        If `x` is not two-dimensional or holds complex values.
    """
    arr = np.asarray(x)
    if arr.ndim != 2:
        raise GridShapeError(f"{name} must be a 2D single-channel array, got shape {arr.shape}")
    if np.iscomplexobj(arr):
        raise GridShapeError(f"{name} must be real-valued, got dtype {arr.dtype}")
    return arr.astype(np.float64, copy=False)


def as_mask(mask: Optional[ArrayLike], shape: Sequence[int], name: str = "mask") -> np.ndarray:
    """
    Boolean activity mask of exactly `shape`.

    ``None`` means every sample is active. Any nonzero value is active.
    """
    shape_t = tuple(int(s) for s in shape)
    if mask is None:
        return np.ones(shape_t, dtype=bool)
    arr = np.asarray(mask)
    if arr.shape != shape_t:
        raise GridShapeError(f"{name} must have shape {shape_t}, got {arr.shape}")
    return arr != 0


def as_kernel(kernel: ArrayLike) -> np.ndarray:
    """
    Kernel taps as a 2D float64 array in natural (non-flipped) orientation.

    A 1D kernel is treated as a single row.
    """
    k = np.asarray(kernel)
    if k.ndim == 1:
        k = k[np.newaxis, :]
    if k.ndim != 2:
        raise GridShapeError(f"kernel must be 1D or 2D, got shape {k.shape}")
    if k.shape[0] < 1 or k.shape[1] < 1:
        raise GridShapeError(f"kernel must be at least 1x1, got shape {k.shape}")
    if np.iscomplexobj(k):
        raise GridShapeError(f"kernel must be real-valued, got dtype {k.dtype}")
    return k.astype(np.float64, copy=False)


def as_byte_grid(x: ArrayLike, name: str = "image") -> np.ndarray:
    """Validate an 8-bit grayscale image (2D uint8)."""
    arr = np.asarray(x)
    if arr.ndim != 2:
        raise GridShapeError(f"{name} must be a 2D grayscale image, got shape {arr.shape}")
    if arr.dtype != np.uint8:
        raise GridShapeError(f"{name} must have dtype uint8, got {arr.dtype}")
    return arr


def check_same_shape(a: ArrayLike, b: ArrayLike, names: Tuple[str, str] = ("x", "y")) -> None:
    if np.shape(a) != np.shape(b):
        raise GridShapeError(
            f"{names[0]} and {names[1]} must have the same shape, "
            f"got {np.shape(a)} and {np.shape(b)}"
        )
