"""T2.03 — Golden spiral alignment.

Scores every rotation of a golden spiral around each reference point
against its contour and keeps the best step.
"""

from __future__ import annotations

import logging

from leafcomplex.engine.context import AnalysisContext
from leafcomplex.engine.registry import Layer, transform
from leafcomplex.utils.reference import golden_spiral_search

logger = logging.getLogger(__name__)


@transform(
    id="T2.03",
    layer=Layer.CONTOUR,
    dependencies=["T2.01", "T2.02"],
    description="Golden-spiral rotation search around the reference points",
)
def golden_spiral(ctx: AnalysisContext) -> None:
    cfg = ctx.config
    ctx.lec_spiral = golden_spiral_search(
        ctx.lec_contour,
        ctx.lec_reference,
        ctx.mask.shape,
        cfg.golden_spiral_rotation_steps,
        cfg.golden_spiral_phi_exponent_factor,
    )
    ctx.lmc_spiral = golden_spiral_search(
        ctx.lmc_contour,
        ctx.lmc_reference,
        ctx.mask.shape,
        cfg.golden_spiral_rotation_steps,
        cfg.golden_spiral_phi_exponent_factor,
    )
    logger.debug(
        "Golden spiral: LEC step %d (score %.2f), LMC step %d (score %.2f)",
        ctx.lec_spiral.step,
        ctx.lec_spiral.score,
        ctx.lmc_spiral.step,
        ctx.lmc_spiral.score,
    )
