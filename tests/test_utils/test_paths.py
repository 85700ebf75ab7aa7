"""Tests for DiegoPath construction and petiole filtering."""

import numpy as np
import pytest

from leafcomplex.utils.contour import trace_contour
from leafcomplex.utils.paths import (
    apply_pink_threshold,
    build_path_samples,
    detect_petiole,
    filter_petiole_values,
    rasterize_line,
    remove_petiole,
    thornfiddle_value,
    zero_petiole,
)
from tests.conftest import make_samples


def test_rasterize_line_endpoints():
    rr, cc = rasterize_line((0, 0), (3, 0))
    assert rr.tolist() == [0, 0, 0, 0]
    assert cc.tolist() == [0, 1, 2, 3]
    rr, cc = rasterize_line((1, 1), (4, 4))
    assert list(zip(cc.tolist(), rr.tolist())) == [(1, 1), (2, 2), (3, 3), (4, 4)]


def test_convex_mask_has_no_detours():
    mask = np.zeros((30, 30), dtype=bool)
    mask[5:25, 5:25] = True
    contour = trace_contour(mask)
    samples = build_path_samples(contour, (15, 15), mask, None, None)
    assert len(samples) == len(contour)
    assert [s.index for s in samples] == list(range(len(contour)))
    for s in samples:
        assert s.diego_length == pytest.approx(s.straight_length)
        assert s.thornfiddle == pytest.approx(s.diego_length)
        assert s.pink == 0 and s.golden == 0


def test_notch_forces_geodesic_detour():
    mask = np.zeros((40, 40), dtype=bool)
    mask[5:35, 5:35] = True
    mask[5:25, 15:25] = False  # slot cut from the top
    contour = trace_contour(mask)
    samples = build_path_samples(contour, (20, 30), mask, None, None)
    assert all(s.diego_length >= s.straight_length - 1e-9 for s in samples)
    assert any(s.diego_length > s.straight_length + 1.0 for s in samples)
    detoured = [s for s in samples if s.diego_length > s.straight_length + 1e-9]
    assert all(s.thornfiddle > s.diego_length for s in detoured)


def test_marked_crossings_are_counted():
    mask = np.ones((11, 11), dtype=bool)
    pink = np.zeros_like(mask)
    pink[5, 8:11] = True
    golden = np.zeros_like(mask)
    golden[5, 9:11] = True
    contour = np.array([[10, 5], [5, 10], [0, 5]])
    samples = build_path_samples(contour, (5, 5), mask, pink, golden)
    assert [s.pink for s in samples] == [3, 0, 0]
    assert [s.golden for s in samples] == [2, 0, 0]
    assert samples[0].angle == pytest.approx(0.0)


def test_thornfiddle_value():
    assert thornfiddle_value(10.0, 12.0) == pytest.approx(14.4)
    assert thornfiddle_value(10.0, 8.0) == pytest.approx(8.0)
    assert thornfiddle_value(0.0, 3.0) == 3.0


def test_detect_petiole_single_run():
    signal = np.zeros(100)
    signal[40:50] = 5.0
    assert detect_petiole(signal) == list(range(40, 50))


def test_detect_petiole_wraps():
    signal = np.zeros(100)
    signal[95:] = 5.0
    signal[:5] = 5.0
    assert detect_petiole(signal) == [95, 96, 97, 98, 99, 0, 1, 2, 3, 4]


def test_detect_petiole_requires_outlier():
    signal = np.zeros(100)
    signal[10:30] = 2.0
    signal[60:66] = 9.0
    assert detect_petiole(signal) == list(range(60, 66))


def test_detect_petiole_none():
    assert detect_petiole(np.ones(50)) is None
    assert detect_petiole(np.full(50, 4.0)) is None
    assert detect_petiole(np.array([])) is None


def test_detect_petiole_leaves_enough_samples():
    signal = np.full(10, 5.0)
    signal[0] = 0.0
    assert detect_petiole(signal) is None
    signal[:4] = 0.0
    assert detect_petiole(signal) == [4, 5, 6, 7, 8, 9]


def test_remove_petiole_shrinks_and_renumbers():
    samples = make_samples([0, 0, 5, 5, 0, 0])
    kept = remove_petiole(samples, [2, 3])
    assert len(kept) == 4
    assert [s.index for s in kept] == [0, 1, 2, 3]
    assert [s.x for s in kept] == [0, 1, 4, 5]


def test_remove_petiole_across_wrap():
    samples = make_samples([5, 0, 0, 0, 5, 5])
    kept = remove_petiole(samples, [4, 5, 0])
    assert [s.x for s in kept] == [1, 2, 3]
    assert [s.index for s in kept] == [0, 1, 2]


def test_zero_petiole_keeps_length():
    samples = make_samples([0, 7, 7, 0])
    zeroed = zero_petiole(samples, [1, 2])
    assert [s.pink for s in zeroed] == [0, 0, 0, 0]
    assert [s.petiole for s in zeroed] == [False, True, True, False]
    assert samples[1].pink == 7


def test_pink_threshold():
    samples = make_samples([0, 1, 3, 4, 10])
    filtered = apply_pink_threshold(samples, 3.0)
    assert [s.pink for s in filtered] == [0, 0, 0, 4, 10]


def test_filter_petiole_values():
    values = np.arange(6, dtype=float)
    assert filter_petiole_values(values, [1, 2], remove_completely=True).tolist() == [0, 3, 4, 5]
    assert filter_petiole_values(values, [1, 2], remove_completely=False).tolist() == [0, 0, 0, 3, 4, 5]
    assert filter_petiole_values(values, [], remove_completely=True).tolist() == values.tolist()
