"""
deblurkit.taper
===============

Border tapering that suppresses ringing before spectral deconvolution.

Submodules
----------
- :mod:`deblurkit.taper.edge` : Gap filling and ``edge_taper``.
"""

from .edge import TaperConfig, fill_gaps, edge_taper

__all__ = [
    "TaperConfig",
    "fill_gaps",
    "edge_taper",
]
