"""T2.04 — Shape metrics.

Biological length/width (longest chord and perpendicular span) and
circularity 4π·A/P² for both masks.
"""

from __future__ import annotations

import numpy as np

from leafcomplex.engine.context import AnalysisContext
from leafcomplex.engine.registry import Layer, transform
from leafcomplex.utils.contour import contour_circumference
from leafcomplex.utils.geometry import biological_dimensions, circularity


@transform(
    id="T2.04",
    layer=Layer.CONTOUR,
    dependencies=["T2.01"],
    description="Biological dimensions and circularity",
)
def shape_metrics(ctx: AnalysisContext) -> None:
    ctx.lec_dimensions = biological_dimensions(ctx.lec_contour)
    ctx.lmc_dimensions = biological_dimensions(ctx.lmc_contour)
    ctx.lec_circularity = circularity(ctx.foreground_pixels, contour_circumference(ctx.lec_contour))
    ctx.lmc_circularity = circularity(int(np.count_nonzero(ctx.lmc_mask)), contour_circumference(ctx.lmc_contour))
