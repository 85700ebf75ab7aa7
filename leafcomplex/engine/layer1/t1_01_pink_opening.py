"""T1.01 — Pink marking.

Opens the mask with a kernel sized from foreground density (or a fixed
diameter when configured) and marks what the opening removed, plus the
outer border ring.
"""

from __future__ import annotations

import logging

from leafcomplex.engine.context import AnalysisContext
from leafcomplex.engine.registry import Layer, transform
from leafcomplex.utils.mask import shorter_dimension
from leafcomplex.utils.morphology import density_opening_percentage, kernel_diameter, open_mask, pink_marking

logger = logging.getLogger(__name__)


@transform(
    id="T1.01",
    layer=Layer.MORPHOLOGY,
    dependencies=["T0.01"],
    description="Density-adaptive opening and pink region marking",
)
def pink_opening(ctx: AnalysisContext) -> None:
    cfg = ctx.config
    if cfg.opening_kernel_size is not None:
        ctx.pink_percentage = None
        ctx.pink_kernel_diameter = min(cfg.opening_kernel_size, shorter_dimension(ctx.mask))
    else:
        ctx.pink_percentage = density_opening_percentage(
            ctx.density,
            cfg.adaptive_opening_max_density,
            cfg.adaptive_opening_max_percentage,
            cfg.adaptive_opening_min_percentage,
        )
        ctx.pink_kernel_diameter = kernel_diameter(ctx.pink_percentage, shorter_dimension(ctx.mask))

    opened = open_mask(ctx.mask, ctx.pink_kernel_diameter)
    ctx.pink_mask = pink_marking(ctx.mask, opened)
    logger.debug(
        "Pink opening: %s -> %d px kernel, %d pixels marked",
        "fixed" if ctx.pink_percentage is None else f"{ctx.pink_percentage:.2f}%",
        ctx.pink_kernel_diameter,
        int(ctx.pink_mask.sum()),
    )
