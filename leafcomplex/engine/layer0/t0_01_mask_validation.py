"""T0.01 — Mask validation.

Rejects empty masks and records foreground count and density (% of image).
"""

from __future__ import annotations

import logging

from leafcomplex.engine.context import AnalysisContext
from leafcomplex.engine.registry import Layer, transform
from leafcomplex.utils.mask import foreground_density, require_foreground

logger = logging.getLogger(__name__)


@transform(
    id="T0.01",
    layer=Layer.MASK,
    description="Validate the foreground mask and measure its density",
)
def mask_validation(ctx: AnalysisContext) -> None:
    ctx.foreground_pixels = require_foreground(ctx.mask)
    ctx.density = foreground_density(ctx.mask)
    logger.info("Mask %dx%d: %d foreground pixels (%.2f%%)", ctx.width, ctx.height, ctx.foreground_pixels, ctx.density)
