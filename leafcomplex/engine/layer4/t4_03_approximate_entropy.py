"""T4.03 — Approximate entropy of the filtered LEC pink path.

The pink path is resampled to the Thornfiddle point count first so ApEn
compares leaves of different outline lengths on the same footing.
"""

from __future__ import annotations

from leafcomplex.engine.context import AnalysisContext
from leafcomplex.engine.registry import Layer, transform
from leafcomplex.utils.paths import pink_signal
from leafcomplex.utils.signal import approximate_entropy as apen
from leafcomplex.utils.signal import interpolate_periodic


@transform(
    id="T4.03",
    layer=Layer.SIGNAL,
    dependencies=["T3.03"],
    description="ApEn(m, r) of the interpolated pink path",
)
def approximate_entropy(ctx: AnalysisContext) -> None:
    cfg = ctx.config
    signal = interpolate_periodic(pink_signal(ctx.lec_paths), cfg.thornfiddle_interpolation_points)
    ctx.approximate_entropy = apen(signal, cfg.approximate_entropy_m, cfg.approximate_entropy_r)
