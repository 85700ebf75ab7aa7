"""T1.04 — Golden lobe marking.

Opens the LMC mask with a kernel sized from its shape index: round leaves
get the largest kernel, elongated ones the smallest. Whatever the opening
strips off is golden.
"""

from __future__ import annotations

import logging

from leafcomplex.engine.context import AnalysisContext
from leafcomplex.engine.registry import Layer, transform
from leafcomplex.utils.morphology import kernel_diameter, open_mask, opened_away, shape_opening_percentage

logger = logging.getLogger(__name__)


@transform(
    id="T1.04",
    layer=Layer.MORPHOLOGY,
    dependencies=["T1.03"],
    description="Shape-adaptive opening of the LMC mask into golden lobes",
)
def golden_opening(ctx: AnalysisContext) -> None:
    cfg = ctx.config
    ctx.golden_percentage = shape_opening_percentage(
        ctx.lmc_shape_index,
        cfg.thornfiddle_max_opening_percentage,
        cfg.thornfiddle_min_opening_percentage,
    )
    ctx.golden_kernel_diameter = max(kernel_diameter(ctx.golden_percentage, ctx.lmc_shorter_dimension), 1)
    opened = open_mask(ctx.lmc_mask, ctx.golden_kernel_diameter)
    ctx.golden_mask = opened_away(ctx.lmc_mask, opened)
    logger.debug(
        "Golden opening: shape index %.3f -> %.1f%% -> %d px kernel (of %d px), %d golden pixels",
        ctx.lmc_shape_index,
        ctx.golden_percentage,
        ctx.golden_kernel_diameter,
        ctx.lmc_shorter_dimension,
        int(ctx.golden_mask.sum()),
    )
