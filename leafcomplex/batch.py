"""Batch runner — independent per-mask analyses on a process pool.

Each mask is its own task; a failure is reported for that mask only and
never cancels its siblings. Results arrive in completion order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from leafcomplex.config import settings
from leafcomplex.engine.config import AnalysisConfig
from leafcomplex.engine.pipeline import analyze_mask
from leafcomplex.engine.record import FeatureRecord
from leafcomplex.errors import LeafAnalysisError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchResult:
    key: str
    record: FeatureRecord | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _analyze_one(key: str, mask: NDArray[np.bool_], config: AnalysisConfig) -> BatchResult:
    try:
        return BatchResult(key=key, record=analyze_mask(mask, config))
    except LeafAnalysisError as e:
        return BatchResult(key=key, error=f"{type(e).__name__}: {e}")


def iter_batch(
    masks: Iterable[tuple[str, NDArray[np.bool_]]],
    config: AnalysisConfig | None = None,
    max_workers: int | None = None,
) -> Iterator[BatchResult]:
    """Yield one BatchResult per (key, mask) as each analysis finishes."""
    config = config or AnalysisConfig()
    config.validate()
    workers = max_workers if max_workers is not None else settings.max_workers

    with ProcessPoolExecutor(max_workers=workers) as ex:
        futures = {ex.submit(_analyze_one, key, mask, config): key for key, mask in masks}
        for fut in as_completed(futures):
            key = futures[fut]
            try:
                result = fut.result()
            except Exception as e:
                # Worker crashed outside the analysis itself (pickling, memory)
                result = BatchResult(key=key, error=f"{type(e).__name__}: {e}")
            if not result.ok:
                logger.warning("Error processing %s: %s", key, result.error)
            yield result


def analyze_batch(
    masks: Iterable[tuple[str, NDArray[np.bool_]]],
    config: AnalysisConfig | None = None,
    max_workers: int | None = None,
) -> list[BatchResult]:
    """Analyse every mask and return the results sorted by key."""
    results = list(iter_batch(masks, config, max_workers))
    failed = sum(1 for r in results if not r.ok)
    logger.info("Batch complete: %d masks, %d failed", len(results), failed)
    return sorted(results, key=lambda r: r.key)
