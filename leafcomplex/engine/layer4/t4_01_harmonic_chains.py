"""T4.01 — Harmonic chains.

Golden chains on the LEC and LMC path signals, their summary statistics,
and the harmonic Thornfiddle path they produce.
"""

from __future__ import annotations

import logging

import numpy as np

from leafcomplex.engine.context import AnalysisContext
from leafcomplex.engine.registry import Layer, transform
from leafcomplex.utils.contour import contour_circumference
from leafcomplex.utils.harmonics import HarmonicSummary, detect_golden_chains, enhance_thornfiddle, summarize_chains
from leafcomplex.utils.paths import PathSample

logger = logging.getLogger(__name__)


def _chains(ctx: AnalysisContext, samples: list[PathSample], circumference: float) -> tuple[HarmonicSummary, np.ndarray]:
    cfg = ctx.config
    golden = np.array([s.golden for s in samples], dtype=np.int64)
    chains = detect_golden_chains(golden, cfg.thornfiddle_pixel_threshold)
    summary = summarize_chains(chains, cfg.harmonic_min_chain_length, cfg.harmonic_strength_multiplier)
    base = np.array([s.thornfiddle for s in samples], dtype=np.float64)
    harmonic = enhance_thornfiddle(
        base,
        summary.chains,
        circumference,
        cfg.harmonic_strength_multiplier,
        cfg.harmonic_max_harmonics,
    )
    return summary, harmonic


@transform(
    id="T4.01",
    layer=Layer.SIGNAL,
    dependencies=["T3.02", "T3.03"],
    description="Golden chain detection and harmonic enhancement",
)
def harmonic_chains(ctx: AnalysisContext) -> None:
    ctx.lec_harmonics, ctx.lec_harmonic_path = _chains(ctx, ctx.lec_paths, contour_circumference(ctx.lec_contour))
    ctx.lmc_harmonics, ctx.lmc_harmonic_path = _chains(ctx, ctx.lmc_paths, contour_circumference(ctx.lmc_contour))
    logger.info(
        "Harmonic chains: LEC %d valid / %d, LMC %d valid / %d (weighted %.1f)",
        ctx.lec_harmonics.valid_chain_count,
        ctx.lec_harmonics.chain_count,
        ctx.lmc_harmonics.valid_chain_count,
        ctx.lmc_harmonics.chain_count,
        ctx.lmc_harmonics.weighted_chain_score,
    )
