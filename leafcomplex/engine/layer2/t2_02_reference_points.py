"""T2.02 — Reference points.

COM or EP, computed separately for the LEC and LMC masks. The LEC emerge
point skips pink-marked pixels; a configured emerge point anchors both.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from leafcomplex.engine.config import ReferencePointChoice
from leafcomplex.engine.context import AnalysisContext
from leafcomplex.engine.registry import Layer, transform
from leafcomplex.utils.reference import ReferencePoint, center_of_mass, emerge_point, validate_reference

logger = logging.getLogger(__name__)


def _resolve(
    ctx: AnalysisContext,
    mask: NDArray[np.bool_],
    marked: NDArray[np.bool_] | None = None,
) -> ReferencePoint:
    cfg = ctx.config
    if cfg.reference_point_choice is ReferencePointChoice.COM:
        point = center_of_mass(mask)
    elif cfg.emerge_point is not None:
        point = ReferencePoint(*cfg.emerge_point)
    else:
        point = emerge_point(mask, marked)
    return validate_reference(mask, point)


@transform(
    id="T2.02",
    layer=Layer.CONTOUR,
    dependencies=["T1.02"],
    description="Resolve LEC and LMC reference points",
)
def reference_points(ctx: AnalysisContext) -> None:
    ctx.lec_reference = _resolve(ctx, ctx.mask, ctx.pink_mask)
    ctx.lmc_reference = _resolve(ctx, ctx.lmc_mask)
    logger.debug(
        "Reference points (%s): LEC (%.1f, %.1f), LMC (%.1f, %.1f)",
        ctx.config.reference_point_choice.value,
        ctx.lec_reference.x,
        ctx.lec_reference.y,
        ctx.lmc_reference.x,
        ctx.lmc_reference.y,
    )
