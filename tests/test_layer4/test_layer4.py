"""Tests for Layer 4 transforms — signals computed on the filtered paths."""

import numpy as np
import pytest

import leafcomplex.engine.layer4.t4_01_harmonic_chains
import leafcomplex.engine.layer4.t4_02_spectral_entropy
import leafcomplex.engine.layer4.t4_03_approximate_entropy
import leafcomplex.engine.layer4.t4_04_edge_complexity

from leafcomplex.engine.config import AnalysisConfig
from leafcomplex.engine.context import AnalysisContext
from leafcomplex.engine.pipeline import create_pipeline
from leafcomplex.engine.registry import Layer, get_registry
from leafcomplex.utils.paths import pink_signal
from leafcomplex.utils.signal import approximate_entropy, interpolate_periodic
from tests.conftest import disk_mask, petioled_mask


def _run(mask, config=None) -> AnalysisContext:
    ctx = AnalysisContext(mask=mask, config=config or AnalysisConfig())
    return create_pipeline().run(ctx, through=Layer.SIGNAL)


def test_layer4_registers_4_transforms():
    layer4 = get_registry().get_layer(Layer.SIGNAL)
    assert [s.id for s in layer4] == ["T4.01", "T4.02", "T4.03", "T4.04"]


def test_disk_has_no_chains():
    ctx = _run(disk_mask())

    assert ctx.lmc_harmonics.chain_count == 0
    assert ctx.lec_harmonics.valid_chain_count == 0
    base = np.array([s.thornfiddle for s in ctx.lmc_paths])
    assert np.allclose(ctx.lmc_harmonic_path, base)


def test_thornfiddle_resampled_to_configured_points():
    ctx = _run(disk_mask(), AnalysisConfig(thornfiddle_interpolation_points=200))

    assert len(ctx.smoothed_thornfiddle) == len(ctx.lmc_paths)
    assert len(ctx.interpolated_thornfiddle) == 200
    assert ctx.spectral_entropy >= 0.0
    assert ctx.spectral_entropy_contour >= 0.0


def test_approximate_entropy_on_interpolated_pink_path():
    ctx = _run(petioled_mask())

    expected = approximate_entropy(interpolate_periodic(pink_signal(ctx.lec_paths), 1000), 2, 0.2)
    assert ctx.approximate_entropy == pytest.approx(expected)
    assert ctx.approximate_entropy >= 0.0


def test_edge_complexity_scales_linearly():
    base = _run(petioled_mask())
    doubled = _run(petioled_mask(), AnalysisConfig(lec_scaling_factor=6.0))
    muted = _run(petioled_mask(), AnalysisConfig(lec_scaling_factor=0.0))

    assert doubled.edge_complexity == pytest.approx(2 * base.edge_complexity)
    assert muted.edge_complexity == 0.0
