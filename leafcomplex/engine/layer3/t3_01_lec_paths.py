"""T3.01 — LEC DiegoPaths.

One PathSample per LEC contour point, with pink and golden crossings
counted along the line to the LEC reference point.
"""

from __future__ import annotations

import logging

from leafcomplex.engine.context import AnalysisContext
from leafcomplex.engine.registry import Layer, transform
from leafcomplex.utils.paths import build_path_samples

logger = logging.getLogger(__name__)


@transform(
    id="T3.01",
    layer=Layer.PATHS,
    dependencies=["T1.04", "T2.01", "T2.02"],
    description="Build LEC path samples",
)
def lec_paths(ctx: AnalysisContext) -> None:
    ctx.lec_raw_paths = build_path_samples(
        ctx.lec_contour,
        ctx.lec_reference.pixel,
        ctx.mask,
        ctx.pink_mask,
        ctx.golden_mask,
    )
    detours = sum(1 for s in ctx.lec_raw_paths if s.diego_length > s.straight_length)
    logger.debug("LEC paths: %d samples, %d detour around background", len(ctx.lec_raw_paths), detours)
