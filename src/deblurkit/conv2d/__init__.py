"""
deblurkit.conv2d
================

2D spatial convolution for grayscale grids.

Submodules
----------
- :mod:`deblurkit.conv2d.convolve` : Linear convolution with full/same/valid sizing.
- :mod:`deblurkit.conv2d.kernels`  : Gaussian kernels and blur.
"""

from .convolve import convolve, output_shape
from .kernels import (
    gaussian_sigma_for_size,
    gaussian_1d,
    gaussian_kernel,
    gaussian_blur,
)

__all__ = [
    # convolution
    "convolve",
    "output_shape",
    # kernels
    "gaussian_sigma_for_size",
    "gaussian_1d",
    "gaussian_kernel",
    "gaussian_blur",
]
