"""T2.01 — Contours.

Moore-traced outer boundaries of the LEC and LMC masks.
"""

from __future__ import annotations

import logging

from leafcomplex.engine.context import AnalysisContext
from leafcomplex.engine.registry import Layer, transform
from leafcomplex.utils.contour import trace_contour

logger = logging.getLogger(__name__)


@transform(
    id="T2.01",
    layer=Layer.CONTOUR,
    dependencies=["T1.02"],
    description="Trace LEC and LMC outer contours",
)
def contours(ctx: AnalysisContext) -> None:
    tolerance = ctx.config.component_tolerance
    ctx.lec_contour = trace_contour(ctx.mask, tolerance)
    ctx.lmc_contour = trace_contour(ctx.lmc_mask, tolerance)
    logger.debug("Contours: LEC %d points, LMC %d points", len(ctx.lec_contour), len(ctx.lmc_contour))
