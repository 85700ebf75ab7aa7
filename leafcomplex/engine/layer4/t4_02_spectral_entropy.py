"""T4.02 — Spectral entropies.

Harmonic LMC Thornfiddle path (smoothed, resampled), LEC pink path, and
LEC contour signature.
"""

from __future__ import annotations

import logging

from leafcomplex.engine.context import AnalysisContext
from leafcomplex.engine.registry import Layer, transform
from leafcomplex.utils.paths import pink_signal
from leafcomplex.utils.signal import (
    contour_spectral_entropy,
    interpolate_periodic,
    periodic_smooth,
    scaled_spectral_entropy,
)

logger = logging.getLogger(__name__)


@transform(
    id="T4.02",
    layer=Layer.SIGNAL,
    dependencies=["T4.01"],
    description="Spectral entropy of Thornfiddle, pink and contour signals",
)
def spectral_entropy(ctx: AnalysisContext) -> None:
    cfg = ctx.config
    n_points = cfg.thornfiddle_interpolation_points

    ctx.smoothed_thornfiddle = periodic_smooth(ctx.lmc_harmonic_path, cfg.thornfiddle_smoothing_strength)
    ctx.interpolated_thornfiddle = interpolate_periodic(ctx.smoothed_thornfiddle, n_points)
    ctx.spectral_entropy = scaled_spectral_entropy(ctx.interpolated_thornfiddle)

    ctx.spectral_entropy_pink = scaled_spectral_entropy(interpolate_periodic(pink_signal(ctx.lec_paths), n_points))
    ctx.spectral_entropy_contour = contour_spectral_entropy(ctx.lec_contour, n_points)
    logger.debug(
        "Spectral entropy: thornfiddle %.4f, pink %.4f, contour %.4f",
        ctx.spectral_entropy,
        ctx.spectral_entropy_pink,
        ctx.spectral_entropy_contour,
    )
