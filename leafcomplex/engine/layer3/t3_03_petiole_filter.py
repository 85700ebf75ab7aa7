"""T3.03 — Petiole and pink threshold filtering.

Detects the petiole arc on the LEC pink signal and removes or zeroes it,
then zeroes pink values at or below the configured threshold.
"""

from __future__ import annotations

import logging

from leafcomplex.engine.config import PetioleMode
from leafcomplex.engine.context import AnalysisContext
from leafcomplex.engine.registry import Layer, transform
from leafcomplex.utils.paths import apply_pink_threshold, detect_petiole, pink_signal, remove_petiole, zero_petiole

logger = logging.getLogger(__name__)


@transform(
    id="T3.03",
    layer=Layer.PATHS,
    dependencies=["T3.01"],
    description="Petiole removal and pink threshold filter on LEC paths",
)
def petiole_filter(ctx: AnalysisContext) -> None:
    cfg = ctx.config
    samples = list(ctx.lec_raw_paths)

    if cfg.enable_petiole_filter_lec:
        ctx.petiole_indices = detect_petiole(pink_signal(samples))
        if ctx.petiole_indices is not None:
            if cfg.petiole_mode is PetioleMode.REMOVE:
                samples = remove_petiole(samples, ctx.petiole_indices)
                logger.info("LEC petiole removal: %d -> %d samples", len(ctx.lec_raw_paths), len(samples))
            else:
                samples = zero_petiole(samples, ctx.petiole_indices)
                logger.info("LEC petiole zeroing: %d samples", len(ctx.petiole_indices))

    if cfg.enable_pink_threshold_filter:
        samples = apply_pink_threshold(samples, cfg.pink_threshold_value)

    ctx.lec_paths = samples
