"""
deblurkit.metrics
=================

Similarity measures between grayscale grids.

Submodules
----------
- :mod:`deblurkit.metrics.correlation` : Masked normalized cross-correlation.
"""

from .correlation import cross_correlation, gradient_magnitude

__all__ = [
    "cross_correlation",
    "gradient_magnitude",
]
