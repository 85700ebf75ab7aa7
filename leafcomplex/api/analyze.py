"""POST /api/analyze — full pipeline analysis of one mask."""

from __future__ import annotations

import logging
import time
from dataclasses import asdict

import numpy as np
from fastapi import APIRouter, HTTPException

from leafcomplex.config import settings
from leafcomplex.engine.config import AnalysisConfig
from leafcomplex.engine.context import AnalysisContext
from leafcomplex.engine.pipeline import create_pipeline
from leafcomplex.errors import LeafAnalysisError
from leafcomplex.models.requests import AnalyzeRequest
from leafcomplex.models.responses import AnalyzeResponse, FeatureSummary

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze(req: AnalyzeRequest) -> AnalyzeResponse:
    start = time.perf_counter()

    mask = np.asarray(req.mask, dtype=bool)
    if max(mask.shape) > settings.max_mask_side:
        raise HTTPException(status_code=413, detail=f"Mask side exceeds {settings.max_mask_side} pixels")

    try:
        config = AnalysisConfig.from_mapping({**asdict(AnalysisConfig()), **req.config})
        ctx = AnalysisContext(mask=mask, config=config)
        ctx = create_pipeline().run(ctx)
    except LeafAnalysisError as e:
        logger.warning("Analysis rejected: %s", e)
        raise HTTPException(status_code=422, detail=str(e)) from e

    elapsed = (time.perf_counter() - start) * 1000
    return AnalyzeResponse(
        features=FeatureSummary(**ctx.record.summary()),
        processing_time_ms=round(elapsed, 1),
        transforms_completed=len(ctx.completed_transforms),
        lec_points=len(ctx.record.lec_paths),
        lmc_points=len(ctx.record.lmc_paths),
    )
