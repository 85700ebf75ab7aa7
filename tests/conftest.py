"""Shared test fixtures — synthetic leaf masks."""

from __future__ import annotations

import numpy as np
import pytest
from skimage.draw import disk, rectangle


def disk_mask(size: int = 121, radius: int = 40) -> np.ndarray:
    """Centred disk; symmetric under flips and transposition."""
    mask = np.zeros((size, size), dtype=bool)
    rr, cc = disk((size // 2, size // 2), radius, shape=mask.shape)
    mask[rr, cc] = True
    return mask


def rectangle_mask(width: int = 150, height: int = 30) -> np.ndarray:
    """Axis-aligned width x height block with a 20 px margin."""
    mask = np.zeros((height + 40, width + 40), dtype=bool)
    rr, cc = rectangle(start=(20, 20), extent=(height, width), shape=mask.shape)
    mask[rr, cc] = True
    return mask


def petioled_mask() -> np.ndarray:
    """Disk blade with a 3 px stalk running to the bottom edge."""
    mask = np.zeros((120, 120), dtype=bool)
    rr, cc = disk((50, 60), 35, shape=mask.shape)
    mask[rr, cc] = True
    mask[84:120, 59:62] = True
    return mask


def make_samples(pinks, goldens=None):
    from leafcomplex.utils.paths import PathSample

    goldens = goldens if goldens is not None else [0] * len(pinks)
    return [
        PathSample(
            index=i,
            x=i,
            y=0,
            angle=0.0,
            straight_length=10.0,
            diego_length=10.0,
            pink=p,
            golden=g,
            thornfiddle=10.0,
        )
        for i, (p, g) in enumerate(zip(pinks, goldens))
    ]


@pytest.fixture
def circle() -> np.ndarray:
    return disk_mask()


@pytest.fixture
def rectangle_5_1() -> np.ndarray:
    return rectangle_mask()


@pytest.fixture
def petioled_leaf() -> np.ndarray:
    return petioled_mask()


@pytest.fixture
def square_3x3() -> np.ndarray:
    mask = np.zeros((7, 7), dtype=bool)
    mask[2:5, 2:5] = True
    return mask
