"""FeatureRecord — the immutable per-image result handed back to the caller."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from leafcomplex.utils.paths import PathSample


@dataclass(frozen=True)
class FeatureRecord:
    # Shape
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

    # Opening kernels actually used
    pink_kernel_diameter: int
    pink_opening_percentage: float | None
    golden_kernel_diameter: int
    golden_opening_percentage: float

    # Entropies and edge metrics
    spectral_entropy: float
    spectral_entropy_pink: float
    spectral_entropy_contour: float
    approximate_entropy: float
    edge_complexity: float

    # Harmonic chains (LMC drives the headline numbers)
    harmonic_chain_count: int
    valid_harmonic_chain_count: int
    mean_chain_length: float
    total_chain_length: int
    weighted_chain_score: float
    lec_valid_harmonic_chain_count: int
    lec_weighted_chain_score: float

    # Reference points and spiral alignment
    lec_reference_point: tuple[float, float]
    lmc_reference_point: tuple[float, float]
    lec_spiral_step: int
    lmc_spiral_step: int

    petiole_length: int = 0

    # Per-point signals
    lec_paths: tuple[PathSample, ...] = field(default_factory=tuple)
    lmc_paths: tuple[PathSample, ...] = field(default_factory=tuple)
    lec_harmonic_path: tuple[float, ...] = field(default_factory=tuple)
    lmc_harmonic_path: tuple[float, ...] = field(default_factory=tuple)

    def summary(self) -> dict[str, Any]:
        """Scalar metrics only, keyed by field name."""
        skip = {"lec_paths", "lmc_paths", "lec_harmonic_path", "lmc_harmonic_path"}
        return {name: getattr(self, name) for name in self.__dataclass_fields__ if name not in skip}
