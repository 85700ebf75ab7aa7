"""T1.03 — Shape index.

Longer / shorter bounding dimension of the LEC and LMC masks. ≥ 1.0.
"""

from __future__ import annotations

from leafcomplex.engine.context import AnalysisContext
from leafcomplex.engine.registry import Layer, transform
from leafcomplex.utils.geometry import shape_index as bbox_shape_index
from leafcomplex.utils.mask import bounding_dimensions


@transform(
    id="T1.03",
    layer=Layer.MORPHOLOGY,
    dependencies=["T1.02"],
    description="Bounding-box shape index of LEC and LMC masks",
)
def shape_index(ctx: AnalysisContext) -> None:
    ctx.lec_shape_index = bbox_shape_index(*bounding_dimensions(ctx.mask))
    width, height = bounding_dimensions(ctx.lmc_mask)
    ctx.lmc_shape_index = bbox_shape_index(width, height)
    ctx.lmc_shorter_dimension = min(width, height)
