"""
deblurkit
Numeric primitives for image-deblurring preprocessing.
"""

from importlib import metadata as _metadata

try:
    __version__ = _metadata.version("deblurkit")
except _metadata.PackageNotFoundError:
    # Not installed (dev mode) or no metadata available
    __version__ = "0.0.0.dev0"

# Re-export subpackages for convenience
from . import core, conv2d, metrics, taper  # noqa: E402

__all__ = ["core", "conv2d", "metrics", "taper", "__version__"]
