"""LeafComplex analysis engine."""

from leafcomplex.engine.config import AnalysisConfig, PetioleMode, ReferencePointChoice
from leafcomplex.engine.context import AnalysisContext
from leafcomplex.engine.pipeline import Pipeline, analyze_mask, create_pipeline, register_transforms
from leafcomplex.engine.record import FeatureRecord
from leafcomplex.engine.registry import Layer, get_registry, transform

__all__ = [
    "transform",
    "Layer",
    "get_registry",
    "AnalysisConfig",
    "ReferencePointChoice",
    "PetioleMode",
    "AnalysisContext",
    "FeatureRecord",
    "Pipeline",
    "analyze_mask",
    "create_pipeline",
    "register_transforms",
]
