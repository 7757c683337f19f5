# tests/test_taper_edge.py
import numpy as np
import pytest

from deblurkit.core.errors import GridShapeError
from deblurkit.conv2d.kernels import gaussian_blur
from deblurkit.taper.edge import TaperConfig, _to_uint8, edge_taper, fill_gaps


def _fill_row(row, gap=None):
    values = np.array([row], dtype=np.uint8)
    gap = values == 0 if gap is None else np.array([gap], dtype=bool)
    return fill_gaps(values, gap, axis=1)[0].tolist()


# ---------------------------------------------------------------------------
# fill_gaps
# ---------------------------------------------------------------------------

def test_row_without_gaps_is_unchanged():
    assert _fill_row([3, 7, 1, 9]) == [3, 7, 1, 9]


def test_odd_run_splits_toward_left_neighbor():
    assert _fill_row([5, 0, 0, 0, 9]) == [5, 5, 5, 9, 9]


def test_even_run_splits_evenly():
    assert _fill_row([5, 0, 0, 9]) == [5, 5, 9, 9]
    assert _fill_row([5, 0, 9]) == [5, 5, 9]


def test_several_runs_in_one_line():
    assert _fill_row([3, 0, 6, 0, 0, 8]) == [3, 3, 6, 6, 8, 8]


def test_border_runs_take_the_only_neighbor():
    assert _fill_row([0, 0, 7, 3]) == [7, 7, 7, 3]
    assert _fill_row([4, 0, 0]) == [4, 4, 4]
    assert _fill_row([0, 2, 0]) == [2, 2, 2]


def test_fully_occluded_line_is_zero():
    assert _fill_row([0, 0, 0, 0]) == [0, 0, 0, 0]


def test_gap_mask_independent_of_values():
    values = np.array([[1, 2, 3, 4, 5]], dtype=np.uint8)
    gap = np.array([[0, 1, 1, 1, 0]])
    assert fill_gaps(values, gap)[0].tolist() == [1, 1, 1, 5, 5]


def test_vertical_scan_is_transposed_horizontal(rng):
    img = rng.integers(0, 4, size=(9, 13), dtype=np.uint8)
    vertical = fill_gaps(img, img == 0, axis=0)
    horizontal_t = fill_gaps(img.T, img.T == 0, axis=1).T
    np.testing.assert_array_equal(vertical, horizontal_t)


def test_fill_gaps_does_not_mutate(rng):
    img = rng.integers(0, 3, size=(6, 6), dtype=np.uint8)
    before = img.copy()
    out = fill_gaps(img, img == 0)
    np.testing.assert_array_equal(img, before)
    assert out.dtype == np.uint8


def test_fill_gaps_rejects_mismatched_gap():
    with pytest.raises(GridShapeError):
        fill_gaps(np.ones((3, 3)), np.ones((3, 4)))


# ---------------------------------------------------------------------------
# edge_taper
# ---------------------------------------------------------------------------

def test_mask_region_is_bit_identical(occluded_scene):
    img, mask = occluded_scene
    out = edge_taper(img, mask, img)
    inside = mask != 0
    assert out.dtype == np.uint8
    assert out.shape == img.shape
    np.testing.assert_array_equal(out[inside], img[inside])


def test_occluded_context_is_filled(occluded_scene):
    img, mask = occluded_scene
    out = edge_taper(img, mask, img)
    assert out[mask == 0].min() > 0


def test_constant_image_is_a_fixed_point():
    img = np.full((20, 24), 100, dtype=np.uint8)
    out = edge_taper(img, np.zeros_like(img), img)
    np.testing.assert_array_equal(out, img)


def test_full_mask_returns_source(rng):
    img = rng.integers(0, 256, size=(16, 16), dtype=np.uint8)
    out = edge_taper(img, np.ones_like(img), img)
    np.testing.assert_array_equal(out, img)


def test_inputs_not_mutated(occluded_scene):
    img, mask = occluded_scene
    guide = img.astype(np.float32)
    img0, mask0, guide0 = img.copy(), mask.copy(), guide.copy()
    edge_taper(img, mask, guide)
    np.testing.assert_array_equal(img, img0)
    np.testing.assert_array_equal(mask, mask0)
    np.testing.assert_array_equal(guide, guide0)


def test_debug_hook_sees_every_stage():
    img = np.full((8, 5), 50, dtype=np.uint8)
    img[3] = [5, 0, 0, 0, 9]
    mask = np.zeros_like(img)
    mask[0, 0] = 1
    seen = {}

    def hook(name, grid):
        seen[name] = grid.copy()

    edge_taper(img, mask, img, config=TaperConfig(guide_ksize=3, smooth_ksize=3), debug=hook)

    assert list(seen) == [
        "taper_horizontal",
        "taper_vertical",
        "taper_blend",
        "taper_mask_fill",
        "taper_guide_blend",
        "taper_smooth",
    ]
    assert seen["taper_horizontal"][3].tolist() == [5, 5, 5, 9, 9]
    # columns fill from the rows above and below
    assert seen["taper_vertical"][3].tolist() == [5, 50, 50, 50, 9]
    assert seen["taper_blend"][3].tolist() == [5, 28, 28, 30, 9]


def test_mask_fill_flattens_region_from_its_border():
    img = np.array([[10, 20, 30, 40, 50, 60]], dtype=np.uint8).repeat(3, axis=0)
    mask = np.zeros_like(img)
    mask[:, 1:5] = 1
    seen = {}
    edge_taper(
        img, mask, img,
        config=TaperConfig(guide_ksize=1, smooth_ksize=1),
        debug=lambda name, grid: seen.setdefault(name, grid.copy()),
    )
    assert seen["taper_mask_fill"][0].tolist() == [10, 10, 10, 60, 60, 60]


@pytest.mark.parametrize("guide_dtype", [np.uint8, np.float64])
def test_guide_blur_rounding_follows_guide_type(occluded_scene, guide_dtype):
    img, mask = occluded_scene
    guide = img.astype(guide_dtype)
    cfg = TaperConfig(guide_ksize=5, smooth_ksize=3)
    seen = {}
    edge_taper(img, mask, guide, config=cfg, debug=lambda name, grid: seen.setdefault(name, grid.copy()))

    guide_blur = gaussian_blur(guide, cfg.guide_ksize)
    if guide_dtype == np.uint8:
        guide_blur = _to_uint8(guide_blur).astype(np.float64)
    expected = _to_uint8(
        cfg.taper_weight * seen["taper_mask_fill"].astype(np.float64) + cfg.guide_weight * guide_blur
    )
    np.testing.assert_array_equal(seen["taper_guide_blend"], expected)


def test_contract_violations():
    img = np.ones((6, 6), dtype=np.uint8)
    with pytest.raises(GridShapeError):
        edge_taper(img.astype(np.float32), img, img)
    with pytest.raises(GridShapeError):
        edge_taper(img, np.ones((6, 5)), img)
    with pytest.raises(GridShapeError):
        edge_taper(img, img, np.ones((5, 6)))
    with pytest.raises(GridShapeError):
        edge_taper(np.ones((6, 6, 3), dtype=np.uint8), img, img)


def test_config_validation_and_mapping():
    cfg = TaperConfig.from_mapping({"guide_ksize": 21, "taper_weight": 0.6})
    assert cfg.guide_ksize == 21
    assert cfg.smooth_ksize == 51
    assert cfg.to_dict()["taper_weight"] == 0.6
    with pytest.raises(ValueError):
        TaperConfig(guide_ksize=20)
    with pytest.raises(ValueError):
        TaperConfig(directional_weight=1.5)
    with pytest.raises(ValueError):
        TaperConfig.from_mapping({"kernel": 3})
