# src/deblurkit/conv2d/convolve.py
"""Shape-aware 2D linear convolution (full / same / valid)."""
from __future__ import annotations

import logging
from typing import Literal, Sequence, Tuple, Union

import numpy as np
from scipy import signal

from deblurkit.core.errors import GridShapeError
from deblurkit.core.grids import ConvShape, as_conv_shape, as_kernel, as_real_grid

logger = logging.getLogger(__name__)

ArrayLike = np.ndarray
Method = Literal["direct", "fft"]
ShapeLike = Union[ConvShape, str]

__all__ = [
    "convolve",
    "output_shape",
]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _anchored_convolve(padded: ArrayLike, kernel: ArrayLike, method: Method) -> ArrayLike:
    """
    True convolution of `padded` with the output anchored at the last tap.

    With kernel shape (kh, kw),
    out[i, j] = sum_{u, v} kernel[u, v] * padded[i + kh - 1 - u, j + kw - 1 - v],
    with zeros outside `padded`. The output has the size of `padded`.
    """
    kh, kw = kernel.shape
    rows, cols = padded.shape
    if method == "direct":
        full = signal.convolve2d(padded, kernel, mode="full", boundary="fill", fillvalue=0.0)
    elif method == "fft":
        full = signal.fftconvolve(padded, kernel, mode="full")
    else:
        raise ValueError(f"Unknown convolution method {method!r}")
    # shift so the last kernel tap lands on the origin of the padded grid
    return full[kh - 1 : kh - 1 + rows, kw - 1 : kw - 1 + cols]


def _crop_rect(
    conv: ArrayLike,
    src_shape: Tuple[int, int],
    kernel_shape: Tuple[int, int],
    shape: ConvShape,
) -> Tuple[slice, slice]:
    rows, cols = src_shape
    kh, kw = kernel_shape
    pad_y, pad_x = kh - 1, kw - 1
    tmp_rows, tmp_cols = conv.shape

    if shape is ConvShape.FULL:
        return slice(0, tmp_rows - pad_y), slice(0, tmp_cols - pad_x)

    if shape is ConvShape.SAME:
        # +1 rounds the centering offset up for odd remainders
        x0 = (tmp_cols - pad_x - cols + 1) // 2
        y0 = (tmp_rows - pad_y - rows + 1) // 2
        return slice(y0, y0 + rows), slice(x0, x0 + cols)

    if shape is ConvShape.VALID:
        width = cols - kw + 1
        height = rows - kh + 1
        x0 = (tmp_cols - pad_x - width) // 2
        y0 = (tmp_rows - pad_y - height) // 2
        return slice(y0, y0 + height), slice(x0, x0 + width)

    raise GridShapeError(f"Invalid convolution shape {shape!r}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def output_shape(
    src_shape: Sequence[int],
    kernel_shape: Sequence[int],
    shape: ShapeLike = ConvShape.FULL,
) -> Tuple[int, int]:
    """
    Size of ``convolve(src, kernel, shape)`` without computing it.

    Raises
    ------
    GridShapeError
        For VALID when the kernel is larger than the source along an axis.
    """
    rows, cols = (int(s) for s in src_shape)
    kh, kw = (int(s) for s in kernel_shape)
    mode = as_conv_shape(shape)
    if mode is ConvShape.FULL:
        return rows + kh - 1, cols + kw - 1
    if mode is ConvShape.SAME:
        return rows, cols
    if kh > rows or kw > cols:
        raise GridShapeError(
            f"valid convolution needs a kernel no larger than the source, "
            f"got kernel {(kh, kw)} for source {(rows, cols)}"
        )
    return rows - kh + 1, cols - kw + 1


def convolve(
    src: ArrayLike,
    kernel: ArrayLike,
    shape: ShapeLike = ConvShape.FULL,
    method: Method = "direct",
) -> np.ndarray:
    """
    2D linear convolution with classic full/same/valid output sizing.

    The source is zero-padded by ``kernel.rows - 1`` rows and
    ``kernel.cols - 1`` columns on every side, convolved with zero borders
    throughout, and cropped:

    - ``full``  : (H + kh - 1, W + kw - 1), top-left aligned.
    - ``same``  : (H, W), centered; odd remainders round the offset up.
    - ``valid`` : (H - kh + 1, W - kw + 1), only fully overlapping positions.

    Parameters
    ----------
    src : ndarray, shape (H, W)
        Real grid.
    kernel : ndarray, shape (kh, kw) or (kw,)
        Filter taps in natural orientation (convolution, not correlation).
    shape : ConvShape or {"full", "same", "valid"}
        Output sizing policy.
    method : {"direct", "fft"}
        Spatial sum or FFT product for the padded convolution. Results agree
        to floating-point tolerance.

    Returns
    -------
    ndarray, float64
        New array, independent of `src` and internal buffers.
    """
    img = as_real_grid(src, name="src")
    ker = as_kernel(kernel)
    mode = as_conv_shape(shape)
    # validates VALID sizes before any work is done
    out_shape = output_shape(img.shape, ker.shape, mode)

    pad_y = ker.shape[0] - 1
    pad_x = ker.shape[1] - 1
    padded = np.pad(
        img,
        pad_width=((pad_y, pad_y), (pad_x, pad_x)),
        mode="constant",
        constant_values=0.0,
    )
    logger.debug(
        "convolve %s: src %s kernel %s padded %s -> %s",
        mode.value, img.shape, ker.shape, padded.shape, out_shape,
    )

    conv = _anchored_convolve(padded, ker, method)
    rows, cols = _crop_rect(conv, img.shape, ker.shape, mode)
    return np.array(conv[rows, cols], dtype=np.float64, copy=True)
