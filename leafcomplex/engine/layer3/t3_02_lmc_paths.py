"""T3.02 — LMC DiegoPaths.

Same construction on the LMC contour; pink marking does not exist on
the LMC mask, so only golden crossings are counted.
"""

from __future__ import annotations

from leafcomplex.engine.context import AnalysisContext
from leafcomplex.engine.registry import Layer, transform
from leafcomplex.utils.paths import build_path_samples


@transform(
    id="T3.02",
    layer=Layer.PATHS,
    dependencies=["T1.04", "T2.01", "T2.02"],
    description="Build LMC path samples",
)
def lmc_paths(ctx: AnalysisContext) -> None:
    ctx.lmc_paths = build_path_samples(
        ctx.lmc_contour,
        ctx.lmc_reference.pixel,
        ctx.lmc_mask,
        None,
        ctx.golden_mask,
    )
