"""T1.02 — LMC mask.

Foreground minus the pink marking, restricted to the connected component
holding its centre of mass (the largest component when the centre falls
on background).
"""

from __future__ import annotations

import logging

import numpy as np

from leafcomplex.engine.context import AnalysisContext
from leafcomplex.engine.registry import Layer, transform
from leafcomplex.errors import DegenerateShapeError
from leafcomplex.utils.mask import component_at, largest_component
from leafcomplex.utils.reference import center_of_mass

logger = logging.getLogger(__name__)


@transform(
    id="T1.02",
    layer=Layer.MORPHOLOGY,
    dependencies=["T1.01"],
    description="Build the LMC mask from the unmarked foreground",
)
def lmc_mask(ctx: AnalysisContext) -> None:
    remaining = ctx.mask & ~ctx.pink_mask
    if not remaining.any():
        raise DegenerateShapeError("Pink marking covers the whole leaf; nothing left for LMC analysis")

    com = center_of_mass(remaining)
    component = component_at(remaining, com.x, com.y)
    if component is None:
        component, _ = largest_component(remaining)
        logger.debug("LMC centre of mass on background; using largest component")
    ctx.lmc_mask = component
    logger.debug("LMC mask: %d of %d pixels kept", int(np.count_nonzero(component)), ctx.foreground_pixels)
