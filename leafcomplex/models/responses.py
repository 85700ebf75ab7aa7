"""API response models."""

from __future__ import annotations

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    transforms_registered: int = 0


class FeatureSummary(BaseModel):
    """Scalar FeatureRecord metrics."""

    area: int
    outline_count: int
    lec_length: float
    lec_width: float
    lec_shape_index: float
    lmc_length: float
    lmc_width: float
    lmc_shape_index: float
    lec_circularity: float
    lmc_circularity: float
    pink_kernel_diameter: int
    pink_opening_percentage: float | None
    golden_kernel_diameter: int
    golden_opening_percentage: float
    spectral_entropy: float
    spectral_entropy_pink: float
    spectral_entropy_contour: float
    approximate_entropy: float
    edge_complexity: float
    harmonic_chain_count: int
    valid_harmonic_chain_count: int
    mean_chain_length: float
    total_chain_length: int
    weighted_chain_score: float
    lec_valid_harmonic_chain_count: int
    lec_weighted_chain_score: float
    lec_reference_point: tuple[float, float]
    lmc_reference_point: tuple[float, float]
    lec_spiral_step: int
    lmc_spiral_step: int
    petiole_length: int = 0


class AnalyzeResponse(BaseModel):
    features: FeatureSummary
    processing_time_ms: float = 0.0
    transforms_completed: int = 0
    lec_points: int = 0
    lmc_points: int = 0
