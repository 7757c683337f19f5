"""
deblurkit.core
==============

Low-level primitives shared by the convolution, metric and taper modules.

Submodules
----------
- :mod:`deblurkit.core.grids`  : Grid/mask/kernel validation and ``ConvShape``.
- :mod:`deblurkit.core.errors` : Exception types.
- :mod:`deblurkit.core.fft`    : Spectrum construction and complex-plane helpers.
- :mod:`deblurkit.core.norms`  : Symmetric and min/max normalization.
"""

from .errors import GridShapeError, DegenerateInputError
from .grids import (
    ConvShape,
    as_conv_shape,
    as_real_grid,
    as_mask,
    as_kernel,
    as_byte_grid,
    check_same_shape,
)
from .fft import (
    next_fast_len_ge,
    pad_to_optimal,
    to_spectrum,
    from_spectrum,
    complex_to_real,
    crop_even,
    swap_quadrants,
    log_magnitude,
)
from .norms import (
    normalize_symmetric,
    normalize_minmax,
)

__all__ = [
    # errors
    "GridShapeError",
    "DegenerateInputError",
    # grids
    "ConvShape",
    "as_conv_shape",
    "as_real_grid",
    "as_mask",
    "as_kernel",
    "as_byte_grid",
    "check_same_shape",
    # fft
    "next_fast_len_ge",
    "pad_to_optimal",
    "to_spectrum",
    "from_spectrum",
    "complex_to_real",
    "crop_even",
    "swap_quadrants",
    "log_magnitude",
    # norms
    "normalize_symmetric",
    "normalize_minmax",
]
