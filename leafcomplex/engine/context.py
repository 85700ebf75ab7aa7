"""AnalysisContext — the single state object flowing through all transforms.

Each transform fills in its own fields; none rewrites a field another
transform produced. LEC (original mask) and LMC (post-opening mask)
results live side by side and are never merged.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from leafcomplex.engine.config import AnalysisConfig
from leafcomplex.engine.record import FeatureRecord
from leafcomplex.utils.harmonics import HarmonicSummary
from leafcomplex.utils.paths import PathSample
from leafcomplex.utils.reference import ReferencePoint, SpiralAlignment


@dataclass
class AnalysisContext:
    """Shared state for one leaf analysis run."""

    # Input foreground mask (rows = y, cols = x)
    mask: NDArray[np.bool_]
    config: AnalysisConfig = field(default_factory=AnalysisConfig)

    # --- Layer 0: mask ---
    foreground_pixels: int = 0
    density: float = 0.0  # % of the image

    # --- Layer 1: morphology ---
    pink_percentage: float | None = None  # None when a fixed kernel is configured
    pink_kernel_diameter: int = 0
    pink_mask: NDArray[np.bool_] | None = None
    lmc_mask: NDArray[np.bool_] | None = None
    lec_shape_index: float = 1.0
    lmc_shape_index: float = 1.0
    lmc_shorter_dimension: int = 0
    golden_percentage: float = 0.0
    golden_kernel_diameter: int = 0
    golden_mask: NDArray[np.bool_] | None = None

    # --- Layer 2: contours & reference points ---
    lec_contour: NDArray[np.int64] | None = None
    lmc_contour: NDArray[np.int64] | None = None
    lec_reference: ReferencePoint | None = None
    lmc_reference: ReferencePoint | None = None
    lec_spiral: SpiralAlignment | None = None
    lmc_spiral: SpiralAlignment | None = None
    lec_dimensions: tuple[float, float] = (0.0, 0.0)  # biological (length, width)
    lmc_dimensions: tuple[float, float] = (0.0, 0.0)
    lec_circularity: float = 0.0
    lmc_circularity: float = 0.0

    # --- Layer 3: paths ---
    lec_raw_paths: list[PathSample] = field(default_factory=list)
    lec_paths: list[PathSample] = field(default_factory=list)
    lmc_paths: list[PathSample] = field(default_factory=list)
    petiole_indices: list[int] | None = None

    # --- Layer 4: signals ---
    lec_harmonics: HarmonicSummary | None = None
    lmc_harmonics: HarmonicSummary | None = None
    lec_harmonic_path: NDArray[np.float64] | None = None
    lmc_harmonic_path: NDArray[np.float64] | None = None
    smoothed_thornfiddle: NDArray[np.float64] | None = None
    interpolated_thornfiddle: NDArray[np.float64] | None = None
    spectral_entropy: float = 0.0
    spectral_entropy_pink: float = 0.0
    spectral_entropy_contour: float = 0.0
    approximate_entropy: float = 0.0
    edge_complexity: float = 0.0

    # --- Layer 5: output ---
    record: FeatureRecord | None = None

    # --- Pipeline metadata ---
    completed_transforms: set[str] = field(default_factory=set)
    timings_ms: dict[str, float] = field(default_factory=dict)

    @property
    def height(self) -> int:
        return int(self.mask.shape[0])

    @property
    def width(self) -> int:
        return int(self.mask.shape[1])
