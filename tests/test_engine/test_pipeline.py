"""Tests for the pipeline orchestrator and end-to-end analysis."""

import dataclasses

import numpy as np
import pytest

from leafcomplex.engine.config import AnalysisConfig, ReferencePointChoice
from leafcomplex.engine.context import AnalysisContext
from leafcomplex.engine.pipeline import Pipeline, analyze_mask, create_pipeline, register_transforms
from leafcomplex.engine.registry import Layer, TransformRegistry, TransformSpec, get_registry
from leafcomplex.errors import DegenerateShapeError


def _ctx() -> AnalysisContext:
    return AnalysisContext(mask=np.ones((4, 4), dtype=bool))


def test_pipeline_runs_transforms():
    reg = TransformRegistry()
    results = []

    def t1(ctx: AnalysisContext) -> None:
        results.append("t1")

    def t2(ctx: AnalysisContext) -> None:
        results.append("t2")

    reg.register(TransformSpec(id="T0.02", layer=Layer.MASK, fn=t2, dependencies=["T0.01"]))
    reg.register(TransformSpec(id="T0.01", layer=Layer.MASK, fn=t1))

    ctx = Pipeline(registry=reg).run(_ctx())

    assert results == ["t1", "t2"]
    assert ctx.completed_transforms == {"T0.01", "T0.02"}
    assert set(ctx.timings_ms) == {"T0.01", "T0.02"}


def test_pipeline_stops_on_error():
    reg = TransformRegistry()
    results = []

    def fail(ctx: AnalysisContext) -> None:
        raise DegenerateShapeError("test error")

    def later(ctx: AnalysisContext) -> None:
        results.append("later")

    reg.register(TransformSpec(id="T0.01", layer=Layer.MASK, fn=fail))
    reg.register(TransformSpec(id="T1.01", layer=Layer.MORPHOLOGY, fn=later, dependencies=["T0.01"]))

    ctx = _ctx()
    with pytest.raises(DegenerateShapeError, match="test error"):
        Pipeline(registry=reg).run(ctx)
    assert results == []
    assert ctx.completed_transforms == set()


def test_all_transforms_registered():
    register_transforms()
    register_transforms()
    registry = get_registry()
    assert registry.count == 17
    order = [s.id for s in registry.resolve_order()]
    assert order[0] == "T0.01"
    assert order[-1] == "T5.01"


def test_circle(circle):
    record = analyze_mask(circle)
    assert record.area == int(circle.sum())
    assert record.lmc_shape_index == pytest.approx(1.0, abs=0.05)
    assert record.harmonic_chain_count == 0
    assert record.weighted_chain_score == 0.0
    assert record.spectral_entropy < 0.05
    assert record.spectral_entropy_contour < 0.01
    assert record.lec_circularity > 0.8
    # Staircase steps may form a short outlier arc; it is never the whole outline
    assert record.petiole_length <= record.outline_count - 4
    assert len(record.lec_paths) == record.outline_count - record.petiole_length


def test_elongated_rectangle(rectangle_5_1):
    record = analyze_mask(rectangle_5_1)
    assert record.lmc_shape_index >= 5.0
    assert record.golden_opening_percentage == 5.0
    assert record.lec_length >= record.lec_width


def test_petiole_removed(petioled_leaf):
    record = analyze_mask(petioled_leaf)
    assert record.petiole_length > 0
    assert len(record.lec_paths) == record.outline_count - record.petiole_length
    assert [s.index for s in record.lec_paths] == list(range(len(record.lec_paths)))


def test_petiole_zeroed(petioled_leaf):
    cfg = AnalysisConfig(petiole_remove_completely=False)
    record = analyze_mask(petioled_leaf, cfg)
    assert record.petiole_length > 0
    assert len(record.lec_paths) == record.outline_count
    assert sum(1 for s in record.lec_paths if s.petiole) == record.petiole_length
    assert all(s.pink == 0 for s in record.lec_paths if s.petiole)


def test_emerge_point_reference(petioled_leaf):
    cfg = AnalysisConfig(reference_point_choice=ReferencePointChoice.EP)
    ctx = create_pipeline().run(AnalysisContext(mask=petioled_leaf, config=cfg))
    x, y = ctx.record.lec_reference_point
    # The stalk tip is pink-marked; the EP sits on the unmarked base
    assert x == 60.0
    assert y < 119.0
    assert petioled_leaf[int(y), int(x)]
    assert not ctx.pink_mask[int(y), int(x)]
    assert ctx.record.petiole_length > 0
    assert len(ctx.record.lec_paths) >= 4


def test_emerge_point_reference_on_disk(circle):
    cfg = AnalysisConfig(reference_point_choice=ReferencePointChoice.EP)
    ctx = create_pipeline().run(AnalysisContext(mask=circle, config=cfg))
    x, y = ctx.record.lec_reference_point
    assert not ctx.pink_mask[int(y), int(x)]
    assert len(ctx.record.lec_paths) == ctx.record.outline_count - ctx.record.petiole_length
    assert len(ctx.record.lec_paths) >= 4


def test_run_through_layer(circle):
    ctx = create_pipeline().run(AnalysisContext(mask=circle), through=Layer.CONTOUR)
    assert ctx.completed_transforms == {"T0.01", "T1.01", "T1.02", "T1.03", "T1.04", "T2.01", "T2.02", "T2.03", "T2.04"}
    assert ctx.lec_contour is not None
    assert ctx.lec_raw_paths == []
    assert ctx.record is None


def test_fixed_opening_kernel(circle):
    record = analyze_mask(circle, AnalysisConfig(opening_kernel_size=5))
    assert record.pink_opening_percentage is None
    assert record.pink_kernel_diameter == 5


def test_empty_mask_rejected():
    with pytest.raises(DegenerateShapeError):
        analyze_mask(np.zeros((30, 30), dtype=bool))


def test_record_is_frozen(circle):
    record = analyze_mask(circle)
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.area = 0
    assert "lec_paths" not in record.summary()
    assert record.summary()["area"] == record.area
