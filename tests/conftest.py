# tests/conftest.py
from __future__ import annotations

import numpy as np
import pytest


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(0)


@pytest.fixture
def occluded_scene() -> tuple[np.ndarray, np.ndarray]:
    """
    Constant gray image with a zeroed frame and a centered square mask.

    Returns (image uint8 (40, 48), mask uint8 (40, 48)).
    """
    img = np.full((40, 48), 100, dtype=np.uint8)
    img[:4, :] = 0
    img[:, -5:] = 0
    img[30:, :6] = 0

    mask = np.zeros_like(img)
    mask[12:28, 14:34] = 1
    return img, mask
