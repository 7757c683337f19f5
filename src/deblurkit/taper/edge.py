# src/deblurkit/taper/edge.py
"""
Edge tapering of 8-bit grayscale images.

Occluded (zero-valued) runs are filled from their bounding neighbors in both
scan directions, the region of interest is flattened from its own border
values, and the result is blended with a blurred guide image and smoothed.
The masked region is restored at the end, so only the surrounding context
changes and spectral processing no longer sees a hard seam.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from typing import Any, Callable, Iterator, Mapping, Optional, Tuple

import numpy as np

from deblurkit.conv2d.kernels import gaussian_blur
from deblurkit.core.errors import GridShapeError
from deblurkit.core.grids import as_byte_grid, as_real_grid, check_same_shape

logger = logging.getLogger(__name__)

ArrayLike = np.ndarray
DebugHook = Callable[[str, np.ndarray], None]

__all__ = [
    "TaperConfig",
    "fill_gaps",
    "edge_taper",
]


@dataclass(frozen=True)
class TaperConfig:
    """Blur sizes and blend weights of `edge_taper`."""

    guide_ksize: int = 19
    smooth_ksize: int = 51
    taper_weight: float = 0.7
    guide_weight: float = 0.3
    directional_weight: float = 0.5

    def __post_init__(self) -> None:
        for name in ("guide_ksize", "smooth_ksize"):
            k = getattr(self, name)
            if not isinstance(k, (int, np.integer)) or k < 1 or k % 2 == 0:
                raise ValueError(f"{name} must be a positive odd integer, got {k!r}")
        if not 0.0 <= self.directional_weight <= 1.0:
            raise ValueError(f"directional_weight must be in [0, 1], got {self.directional_weight!r}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TaperConfig":
        """Build a config from settings, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown taper settings: {', '.join(unknown)}")
        return cls(**dict(data))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Run filling
# ---------------------------------------------------------------------------

def _runs(gap: np.ndarray) -> Iterator[Tuple[int, int]]:
    """Yield (start, stop) of maximal True runs in a 1D bool array, stop exclusive."""
    edges = np.diff(np.concatenate(([0], gap.astype(np.int8), [0])))
    starts = np.flatnonzero(edges == 1)
    stops = np.flatnonzero(edges == -1)
    return zip(starts.tolist(), stops.tolist())


def _fill_line(values: np.ndarray, gap: np.ndarray, out: np.ndarray) -> None:
    n = values.shape[0]
    for start, stop in _runs(gap):
        left = values[start - 1] if start > 0 else None
        right = values[stop] if stop < n else None

        if left is None and right is None:
            left = right = 0
        elif left is None:
            left = right
        elif right is None:
            right = left

        # first half (rounded up) from the left neighbor
        split = start + (stop - start + 1) // 2
        out[start:split] = left
        out[split:stop] = right


def fill_gaps(values: ArrayLike, gap: ArrayLike, axis: int = 1) -> np.ndarray:
    """
    Fill every run of gap samples from its two bounding neighbors.

    Lines are scanned along `axis` (1: rows left to right, 0: columns top to
    bottom). A run covering samples ``[s, e]`` is split in the middle: the
    first ``ceil(len / 2)`` samples take ``values[s - 1]`` and the remaining
    ones take ``values[e + 1]``.

    A run touching the leading border uses its trailing neighbor for both
    halves and vice versa. A run spanning a whole line is filled with 0.

    Parameters
    ----------
    values : ndarray, shape (H, W)
        Grid to fill. Not modified.
    gap : ndarray, shape (H, W)
        Nonzero marks samples to be replaced.
    axis : {0, 1}
        Scan direction.

    Returns
    -------
    ndarray
        Filled copy with the dtype of `values`.
    """
    arr = np.asarray(values)
    mask = np.asarray(gap) != 0
    if arr.ndim != 2:
        raise GridShapeError(f"fill_gaps expects a 2D grid, got shape {arr.shape}")
    check_same_shape(arr, mask, ("values", "gap"))
    if axis not in (0, 1, -1, -2):
        raise GridShapeError(f"axis must be 0 or 1, got {axis}")

    out = arr.copy()
    # moveaxis returns views, so filling lines of out_v writes into out
    src_v = np.moveaxis(arr, axis, -1)
    gap_v = np.moveaxis(mask, axis, -1)
    out_v = np.moveaxis(out, axis, -1)
    for i in range(src_v.shape[0]):
        if gap_v[i].any():
            _fill_line(src_v[i], gap_v[i], out_v[i])
    return out


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def _to_uint8(x: np.ndarray) -> np.ndarray:
    return np.clip(np.rint(x), 0, 255).astype(np.uint8)


def _no_debug(name: str, grid: np.ndarray) -> None:
    return None


def edge_taper(
    src: ArrayLike,
    mask: ArrayLike,
    guide: ArrayLike,
    config: Optional[TaperConfig] = None,
    debug: Optional[DebugHook] = None,
) -> np.ndarray:
    """
    Taper an 8-bit grayscale image outside a region of interest.

    Stages:

    1. fill zero runs along rows,
    2. fill zero runs along columns,
    3. average both fills,
    4. refill mask-active runs along rows from the values bordering the mask,
    5. blend with the Gaussian-blurred `guide` and blur the blend again,
    6. copy `src` back wherever `mask` is active.

    Parameters
    ----------
    src : ndarray, shape (H, W), uint8
        Image whose zero pixels are treated as occluded.
    mask : ndarray, shape (H, W)
        Region of interest; nonzero is active.
    guide : ndarray, shape (H, W)
        Grayscale image blended in after blurring (often the source itself).
        A uint8 guide has its blur rounded to uint8 before the blend.
    config : TaperConfig, optional
        Blur sizes and weights.
    debug : callable(name, grid), optional
        Receives every intermediate grid. Defaults to a no-op.

    Returns
    -------
    ndarray, shape (H, W), uint8
        New image; pixels where `mask` is active equal `src` exactly.
    """
    img = as_byte_grid(src, name="src")
    mask_arr = np.asarray(mask)
    if mask_arr.ndim != 2:
        raise GridShapeError(f"mask must be 2D, got shape {mask_arr.shape}")
    check_same_shape(img, mask_arr, ("src", "mask"))
    guide_is_bytes = np.asarray(guide).dtype == np.uint8
    guide_arr = as_real_grid(guide, name="guide")
    check_same_shape(img, guide_arr, ("src", "guide"))

    cfg = config if config is not None else TaperConfig()
    show = debug if debug is not None else _no_debug
    region = mask_arr != 0

    occluded = img == 0
    logger.debug(
        "edge_taper on %s: %d occluded, %d masked pixels",
        img.shape, int(occluded.sum()), int(region.sum()),
    )

    horizontal = fill_gaps(img, occluded, axis=1)
    show("taper_horizontal", horizontal)
    vertical = fill_gaps(img, occluded, axis=0)
    show("taper_vertical", vertical)

    w = cfg.directional_weight
    blended = _to_uint8(w * horizontal.astype(np.float64) + (1.0 - w) * vertical.astype(np.float64))
    show("taper_blend", blended)

    # flatten the region of interest so the blur cannot carry its content outwards
    flattened = fill_gaps(blended, region, axis=1)
    show("taper_mask_fill", flattened)

    guide_blur = gaussian_blur(guide_arr, cfg.guide_ksize)
    if guide_is_bytes:
        guide_blur = _to_uint8(guide_blur).astype(np.float64)
    combined = _to_uint8(cfg.taper_weight * flattened.astype(np.float64) + cfg.guide_weight * guide_blur)
    show("taper_guide_blend", combined)

    out = _to_uint8(gaussian_blur(combined, cfg.smooth_ksize))
    show("taper_smooth", out)

    out[region] = img[region]
    return out
