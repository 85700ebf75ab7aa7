"""Tests for Layer 1 transforms — pipeline through Layer 0+1."""

import numpy as np
import pytest

import leafcomplex.engine.layer1.t1_01_pink_opening
import leafcomplex.engine.layer1.t1_02_lmc_mask
import leafcomplex.engine.layer1.t1_03_shape_index
import leafcomplex.engine.layer1.t1_04_golden_opening

from leafcomplex.engine.config import AnalysisConfig
from leafcomplex.engine.context import AnalysisContext
from leafcomplex.engine.pipeline import create_pipeline
from leafcomplex.engine.registry import Layer, get_registry
from tests.conftest import disk_mask, petioled_mask, rectangle_mask


def _run(mask: np.ndarray, config: AnalysisConfig | None = None) -> AnalysisContext:
    ctx = AnalysisContext(mask=mask, config=config or AnalysisConfig())
    return create_pipeline().run(ctx, through=Layer.MORPHOLOGY)


def test_layer1_registers_4_transforms():
    layer1 = get_registry().get_layer(Layer.MORPHOLOGY)
    assert [s.id for s in layer1] == ["T1.01", "T1.02", "T1.03", "T1.04"]


def test_layer1_masks_nest_on_disk():
    mask = disk_mask()
    ctx = _run(mask)

    assert ctx.pink_mask.shape == mask.shape
    assert not (ctx.pink_mask & ~mask).any()
    assert not (ctx.lmc_mask & ~mask).any()
    assert not (ctx.lmc_mask & ctx.pink_mask).any()
    assert not (ctx.golden_mask & ~ctx.lmc_mask).any()
    # Border ring is always marked
    assert ctx.pink_mask[60, 21]
    assert ctx.pink_percentage is not None
    assert ctx.lmc_shape_index == pytest.approx(1.0, abs=0.05)
    assert ctx.golden_percentage == pytest.approx(15.0, abs=0.2)


def test_layer1_marks_petiole_pink():
    ctx = _run(petioled_mask())

    assert ctx.pink_kernel_diameter > 3
    assert ctx.pink_mask[110, 60]
    assert not ctx.lmc_mask[110, 60]
    assert ctx.lmc_mask[50, 60]


def test_layer1_fixed_kernel():
    ctx = _run(disk_mask(), AnalysisConfig(opening_kernel_size=5))

    assert ctx.pink_percentage is None
    assert ctx.pink_kernel_diameter == 5


def test_layer1_elongated_shape_gets_smallest_golden_kernel():
    ctx = _run(rectangle_mask())

    assert ctx.lec_shape_index == pytest.approx(5.0)
    assert ctx.lmc_shape_index >= 5.0
    assert ctx.golden_percentage == 5.0
    assert ctx.golden_kernel_diameter >= 1
