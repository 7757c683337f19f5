# tests/test_core_norms.py
import numpy as np
import pytest

from deblurkit.core.errors import DegenerateInputError
from deblurkit.core.norms import normalize_minmax, normalize_symmetric


def test_symmetric_scales_by_largest_magnitude():
    x = np.array([[-2.0, 1.0], [0.0, 4.0]])
    y = normalize_symmetric(x)
    assert y.max() == pytest.approx(1.0)
    assert y.min() == pytest.approx(-0.5)
    np.testing.assert_allclose(y, x / 4.0)


def test_symmetric_negative_dominant():
    y = normalize_symmetric(np.array([[-8.0, 2.0]]))
    np.testing.assert_allclose(y, [[-1.0, 0.25]])


def test_symmetric_constant_nonzero_grid():
    np.testing.assert_allclose(normalize_symmetric(np.full((2, 3), 3.0)), np.ones((2, 3)))
    np.testing.assert_allclose(normalize_symmetric(np.full((2, 3), -3.0)), -np.ones((2, 3)))


def test_symmetric_complex_per_plane():
    z = np.array([[-2.0 + 1.0j, 4.0 - 0.5j]])
    y = normalize_symmetric(z)
    assert np.iscomplexobj(y)
    np.testing.assert_allclose(y.real, [[-0.5, 1.0]])
    np.testing.assert_allclose(y.imag, [[1.0, -0.5]])


def test_symmetric_planes_layout_kept():
    planes = np.zeros((2, 2, 2))
    planes[..., 0] = [[1.0, -4.0], [2.0, 0.0]]
    planes[..., 1] = [[0.5, 0.25], [-1.0, 0.0]]
    y = normalize_symmetric(planes)
    assert y.shape == (2, 2, 2)
    np.testing.assert_allclose(y[..., 0], planes[..., 0] / 4.0)
    np.testing.assert_allclose(y[..., 1], planes[..., 1] / 1.0)


def test_symmetric_does_not_mutate_input():
    x = np.array([[-2.0, 4.0]])
    normalize_symmetric(x)
    np.testing.assert_array_equal(x, [[-2.0, 4.0]])


def test_symmetric_zero_plane_is_degenerate():
    with pytest.raises(DegenerateInputError):
        normalize_symmetric(np.zeros((3, 3)))
    with pytest.raises(DegenerateInputError):
        normalize_symmetric(np.array([[1.0 + 0j, -2.0 + 0j]]))


def test_minmax_maps_range():
    x = np.array([[-2.0, 0.0], [2.0, 6.0]])
    np.testing.assert_allclose(normalize_minmax(x), [[0.0, 0.25], [0.5, 1.0]])
    np.testing.assert_allclose(normalize_minmax(x, lo=-1.0, hi=1.0), [[-1.0, -0.5], [0.0, 1.0]])


def test_minmax_constant_is_degenerate():
    with pytest.raises(DegenerateInputError):
        normalize_minmax(np.full((4, 4), 7.0))
