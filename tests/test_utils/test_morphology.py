"""Tests for morphological opening and kernel sizing."""

import numpy as np
import pytest

from leafcomplex.errors import InvalidParameterError
from leafcomplex.utils.morphology import (
    border_ring,
    circular_kernel,
    density_opening_percentage,
    kernel_diameter,
    open_mask,
    opened_away,
    pink_marking,
    shape_opening_percentage,
)
from tests.conftest import disk_mask


def test_circular_kernel_shapes():
    assert circular_kernel(1).tolist() == [[True]]
    assert circular_kernel(2).all()
    assert circular_kernel(3).astype(int).tolist() == [[0, 1, 0], [1, 1, 1], [0, 1, 0]]
    k = circular_kernel(9)
    assert k.shape == (9, 9)
    assert (k == k[::-1, :]).all() and (k == k.T).all()


def test_circular_kernel_rejects_zero():
    with pytest.raises(InvalidParameterError):
        circular_kernel(0)


@pytest.mark.parametrize("diameter", [1, 2, 3, 5, 8, 11])
def test_opening_never_adds_pixels(diameter):
    rng = np.random.default_rng(7)
    mask = rng.random((48, 48)) > 0.35
    opened = open_mask(mask, diameter)
    assert not (opened & ~mask).any()


def test_sub_one_diameter_is_noop():
    mask = disk_mask(31, 10)
    opened = open_mask(mask, 0)
    assert (opened == mask).all()
    assert opened is not mask


def test_opening_removes_thin_protrusion():
    mask = disk_mask(121, 30)
    mask[60, 90:110] = True
    opened = open_mask(mask, 5)
    assert not opened[60, 100:110].any()
    assert opened[60, 60]
    removed = opened_away(mask, opened)
    assert removed[60, 100:110].all()


def test_border_ring():
    mask = np.zeros((7, 7), dtype=bool)
    mask[1:6, 1:6] = True
    assert border_ring(mask).sum() == 16
    # The image edge counts as outside; the inner 2x2 has all 8 neighbours
    ring = border_ring(np.ones((4, 4), dtype=bool))
    assert ring.sum() == 12
    assert not ring[1:3, 1:3].any()


def test_pink_marking_covers_ring_and_removed():
    mask = disk_mask(121, 30)
    mask[60, 90:110] = True
    opened = open_mask(mask, 5)
    pink = pink_marking(mask, opened)
    assert pink[60, 100:110].all()
    assert (pink & ~mask).sum() == 0
    assert not pink[60, 60]


def test_density_percentage_monotonic_and_bounded():
    values = [density_opening_percentage(d, 40.0, 10.0, 3.0) for d in np.linspace(0, 80, 33)]
    assert values[0] == pytest.approx(3.0)
    assert values[-1] == pytest.approx(10.0)
    assert all(b >= a for a, b in zip(values, values[1:]))
    assert all(3.0 <= v <= 10.0 for v in values)
    assert density_opening_percentage(20.0, 40.0, 10.0, 3.0) == pytest.approx(6.5)


def test_shape_percentage_monotonic_and_bounded():
    values = [shape_opening_percentage(si, 15.0, 5.0) for si in np.linspace(0.5, 8.0, 31)]
    assert all(b <= a for a, b in zip(values, values[1:]))
    assert shape_opening_percentage(1.0, 15.0, 5.0) == pytest.approx(15.0)
    assert shape_opening_percentage(0.5, 15.0, 5.0) == pytest.approx(15.0)
    assert shape_opening_percentage(3.0, 15.0, 5.0) == pytest.approx(10.0)
    assert shape_opening_percentage(5.0, 15.0, 5.0) == pytest.approx(5.0)
    assert shape_opening_percentage(12.0, 15.0, 5.0) == pytest.approx(5.0)


def test_percentage_bounds_are_checked():
    with pytest.raises(InvalidParameterError):
        shape_opening_percentage(2.0, 5.0, 15.0)
    with pytest.raises(InvalidParameterError):
        density_opening_percentage(10.0, 0.0, 10.0, 3.0)


def test_kernel_diameter():
    assert kernel_diameter(10.0, 100) == 10
    assert kernel_diameter(0.4, 100) == 0
    assert kernel_diameter(250.0, 40) == 40
    with pytest.raises(InvalidParameterError):
        kernel_diameter(10.0, 0)
    with pytest.raises(InvalidParameterError):
        kernel_diameter(-1.0, 100)
