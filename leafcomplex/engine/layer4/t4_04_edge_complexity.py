"""T4.04 — Edge complexity.

Feature density × (1 + √mean magnitude) of the pink path, times the LEC
scaling factor.
"""

from __future__ import annotations

from leafcomplex.engine.config import PetioleMode
from leafcomplex.engine.context import AnalysisContext
from leafcomplex.engine.registry import Layer, transform
from leafcomplex.utils.paths import pink_signal
from leafcomplex.utils.signal import edge_complexity as edge_feature_density


@transform(
    id="T4.04",
    layer=Layer.SIGNAL,
    dependencies=["T3.03"],
    description="Edge complexity from pink crossings",
)
def edge_complexity(ctx: AnalysisContext) -> None:
    cfg = ctx.config
    ctx.edge_complexity = edge_feature_density(
        pink_signal(ctx.lec_paths),
        cfg.lec_scaling_factor,
        petiole_filter=cfg.enable_petiole_filter_edge_complexity,
        remove_completely=cfg.petiole_mode is PetioleMode.REMOVE,
    )
