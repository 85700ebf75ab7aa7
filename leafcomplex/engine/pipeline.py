"""Pipeline orchestrator — runs analysis transforms in dependency order."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time

import numpy as np
from numpy.typing import NDArray

from leafcomplex.engine.config import AnalysisConfig
from leafcomplex.engine.context import AnalysisContext
from leafcomplex.engine.record import FeatureRecord
from leafcomplex.engine.registry import Layer, TransformRegistry, get_registry
from leafcomplex.utils.mask import as_mask

logger = logging.getLogger(__name__)

_LAYER_PACKAGES = ["layer0", "layer1", "layer2", "layer3", "layer4", "layer5"]


class Pipeline:
    """Orchestrates the transform pipeline for one mask at a time."""

    def __init__(self, registry: TransformRegistry | None = None) -> None:
        self.registry = registry or get_registry()

    def run(self, ctx: AnalysisContext, through: Layer | None = None) -> AnalysisContext:
        """Run registered transforms on the context in dependency order.

        With ``through`` set, stops after that layer; dependencies never point
        forward, so the earlier layers are complete. The first failing
        transform is logged and its exception re-raised.
        """
        start = time.perf_counter()
        ordered = [s for s in self.registry.resolve_order() if through is None or s.layer <= through]
        logger.info("Pipeline: %d transforms queued for %dx%d mask", len(ordered), ctx.width, ctx.height)

        for spec in ordered:
            t0 = time.perf_counter()
            try:
                spec.fn(ctx)
            except Exception as e:
                logger.warning("  %s FAILED: %s", spec.id, e)
                raise
            elapsed = (time.perf_counter() - t0) * 1000
            ctx.completed_transforms.add(spec.id)
            ctx.timings_ms[spec.id] = elapsed
            logger.debug("  %s completed in %.1fms", spec.id, elapsed)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d/%d transforms in %.0fms",
            len(ctx.completed_transforms),
            len(ordered),
            total,
        )
        return ctx


def register_transforms() -> None:
    """Import all transform modules so @transform decorators fire. Safe to call repeatedly."""
    for layer_name in _LAYER_PACKAGES:
        package_name = f"leafcomplex.engine.{layer_name}"
        package = importlib.import_module(package_name)
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package_name}.{module_name}")


def create_pipeline() -> Pipeline:
    """Factory function for a pipeline over the global registry."""
    register_transforms()
    return Pipeline()


def analyze_mask(mask: NDArray, config: AnalysisConfig | None = None) -> FeatureRecord:
    """Run the full analysis on one foreground mask and return its FeatureRecord."""
    config = config or AnalysisConfig()
    config.validate()
    ctx = AnalysisContext(mask=as_mask(np.asarray(mask)), config=config)
    create_pipeline().run(ctx)
    assert ctx.record is not None
    return ctx.record
