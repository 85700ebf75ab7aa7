"""T5.01 — Feature record.

Pure assembly of the FeatureRecord from values already on the context.
"""

from __future__ import annotations

import logging

from leafcomplex.engine.context import AnalysisContext
from leafcomplex.engine.record import FeatureRecord
from leafcomplex.engine.registry import Layer, transform

logger = logging.getLogger(__name__)


@transform(
    id="T5.01",
    layer=Layer.AGGREGATION,
    dependencies=["T1.03", "T2.03", "T2.04", "T4.01", "T4.02", "T4.03", "T4.04"],
    description="Assemble the FeatureRecord",
)
def feature_record(ctx: AnalysisContext) -> None:
    lmc = ctx.lmc_harmonics
    ctx.record = FeatureRecord(
        area=ctx.foreground_pixels,
        outline_count=len(ctx.lec_contour),
        lec_length=ctx.lec_dimensions[0],
        lec_width=ctx.lec_dimensions[1],
        lec_shape_index=ctx.lec_shape_index,
        lmc_length=ctx.lmc_dimensions[0],
        lmc_width=ctx.lmc_dimensions[1],
        lmc_shape_index=ctx.lmc_shape_index,
        lec_circularity=ctx.lec_circularity,
        lmc_circularity=ctx.lmc_circularity,
        pink_kernel_diameter=ctx.pink_kernel_diameter,
        pink_opening_percentage=ctx.pink_percentage,
        golden_kernel_diameter=ctx.golden_kernel_diameter,
        golden_opening_percentage=ctx.golden_percentage,
        spectral_entropy=ctx.spectral_entropy,
        spectral_entropy_pink=ctx.spectral_entropy_pink,
        spectral_entropy_contour=ctx.spectral_entropy_contour,
        approximate_entropy=ctx.approximate_entropy,
        edge_complexity=ctx.edge_complexity,
        harmonic_chain_count=lmc.chain_count,
        valid_harmonic_chain_count=lmc.valid_chain_count,
        mean_chain_length=lmc.mean_chain_length,
        total_chain_length=lmc.total_chain_length,
        weighted_chain_score=lmc.weighted_chain_score,
        lec_valid_harmonic_chain_count=ctx.lec_harmonics.valid_chain_count,
        lec_weighted_chain_score=ctx.lec_harmonics.weighted_chain_score,
        lec_reference_point=ctx.lec_reference.as_tuple(),
        lmc_reference_point=ctx.lmc_reference.as_tuple(),
        lec_spiral_step=ctx.lec_spiral.step,
        lmc_spiral_step=ctx.lmc_spiral.step,
        petiole_length=len(ctx.petiole_indices or []),
        lec_paths=tuple(ctx.lec_paths),
        lmc_paths=tuple(ctx.lmc_paths),
        lec_harmonic_path=tuple(float(v) for v in ctx.lec_harmonic_path),
        lmc_harmonic_path=tuple(float(v) for v in ctx.lmc_harmonic_path),
    )
    logger.info(
        "Features: shape index %.3f, spectral entropy %.4f, ApEn %.4f, edge complexity %.4f, %d chains",
        ctx.record.lmc_shape_index,
        ctx.record.spectral_entropy,
        ctx.record.approximate_entropy,
        ctx.record.edge_complexity,
        ctx.record.valid_harmonic_chain_count,
    )
