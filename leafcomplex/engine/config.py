"""Analysis configuration — one immutable value threaded through every stage."""

from __future__ import annotations

import enum
import logging
import math
import numbers
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, fields, replace
from typing import Any

from leafcomplex.errors import InvalidParameterError

logger = logging.getLogger(__name__)


class ReferencePointChoice(str, enum.Enum):
    EP = "EP"  # emerge point: petiole insertion at the leaf base
    COM = "COM"  # centre of mass


class PetioleMode(str, enum.Enum):
    REMOVE = "remove"  # drop the arc and stitch the loop shut
    ZERO = "zero"  # keep the arc with its pink values zeroed


@dataclass(frozen=True)
class AnalysisConfig:
    """Controls every tunable of one leaf analysis run.

    Defaults follow the reference config.toml shipped with the original tool.
    """

    # Reference point
    reference_point_choice: ReferencePointChoice = ReferencePointChoice.COM
    emerge_point: tuple[float, float] | None = None  # explicit (x, y) EP anchor

    # Pink marking (LEC): fixed kernel, or density-adaptive when None
    opening_kernel_size: int | None = None
    adaptive_opening_max_density: float = 40.0  # % foreground
    adaptive_opening_max_percentage: float = 10.0  # % of shorter image side
    adaptive_opening_min_percentage: float = 3.0

    # Golden lobes (LMC): shape-index-adaptive opening
    thornfiddle_max_opening_percentage: float = 15.0  # % of shorter LMC side
    thornfiddle_min_opening_percentage: float = 5.0

    # Golden spiral
    golden_spiral_rotation_steps: int = 36
    golden_spiral_phi_exponent_factor: float = 2.0 / math.pi

    # Petiole and threshold filters
    enable_petiole_filter_lec: bool = True
    enable_petiole_filter_edge_complexity: bool = True
    petiole_remove_completely: bool = True
    enable_pink_threshold_filter: bool = True
    pink_threshold_value: float = 3.0

    # Thornfiddle
    thornfiddle_smoothing_strength: float = 2.0
    thornfiddle_interpolation_points: int = 1000

    # Approximate entropy
    approximate_entropy_m: int = 2
    approximate_entropy_r: float = 0.2

    lec_scaling_factor: float = 3.0

    # Harmonic chains
    thornfiddle_pixel_threshold: int = 10
    harmonic_strength_multiplier: float = 1.0
    harmonic_min_chain_length: int = 3
    harmonic_max_harmonics: int = 12

    # Share of foreground allowed outside the traced component
    component_tolerance: float = 0.05

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> AnalysisConfig:
        """Build a config from an already-parsed mapping such as a TOML table.

        Keys that are not analysis settings (input paths, colours, resize
        options) are ignored.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in values.items() if k in known}
        ignored = sorted(set(values) - known)
        if ignored:
            logger.debug("Ignoring non-analysis config keys: %s", ", ".join(ignored))

        if "reference_point_choice" in kwargs and not isinstance(kwargs["reference_point_choice"], ReferencePointChoice):
            try:
                kwargs["reference_point_choice"] = ReferencePointChoice(str(kwargs["reference_point_choice"]).upper())
            except ValueError as e:
                raise InvalidParameterError(
                    f"reference_point_choice must be EP or COM, got {kwargs['reference_point_choice']!r}"
                ) from e
        point = kwargs.get("emerge_point")
        if point is not None:
            if isinstance(point, str) or not isinstance(point, Sequence) or len(point) != 2:
                raise InvalidParameterError(f"emerge_point must be an (x, y) pair, got {point!r}")
            if not all(_is_real(v) for v in point):
                raise InvalidParameterError(f"emerge_point coordinates must be numbers, got {point!r}")
            kwargs["emerge_point"] = (float(point[0]), float(point[1]))

        config = cls(**kwargs)
        config.validate()
        return config

    @property
    def petiole_mode(self) -> PetioleMode:
        return PetioleMode.REMOVE if self.petiole_remove_completely else PetioleMode.ZERO

    def with_overrides(self, **overrides: Any) -> AnalysisConfig:
        config = replace(self, **overrides)
        config.validate()
        return config

    def _check_types(self) -> None:
        if not isinstance(self.reference_point_choice, ReferencePointChoice):
            raise InvalidParameterError(f"reference_point_choice must be EP or COM, got {self.reference_point_choice!r}")
        point = self.emerge_point
        if point is not None and not (isinstance(point, tuple) and len(point) == 2 and all(_is_real(v) for v in point)):
            raise InvalidParameterError(f"emerge_point must be an (x, y) pair of numbers, got {point!r}")
        for f in fields(self):
            check = _TYPE_CHECKS.get(f.type)
            if check is None:
                continue
            is_valid, expected = check
            value = getattr(self, f.name)
            if not is_valid(value):
                raise InvalidParameterError(f"{f.name} must be {expected}, got {value!r}")

    def validate(self) -> None:
        """Raise InvalidParameterError on the first mistyped or out-of-range setting."""
        self._check_types()
        if self.opening_kernel_size is not None and self.opening_kernel_size < 0:
            raise InvalidParameterError(f"opening_kernel_size must be >= 0, got {self.opening_kernel_size}")
        if self.adaptive_opening_max_density <= 0:
            raise InvalidParameterError("adaptive_opening_max_density must be > 0")
        _check_percentages(
            "adaptive_opening",
            self.adaptive_opening_min_percentage,
            self.adaptive_opening_max_percentage,
        )
        _check_percentages(
            "thornfiddle_opening",
            self.thornfiddle_min_opening_percentage,
            self.thornfiddle_max_opening_percentage,
        )
        if self.golden_spiral_rotation_steps < 1:
            raise InvalidParameterError("golden_spiral_rotation_steps must be >= 1")
        if self.golden_spiral_phi_exponent_factor <= 0:
            raise InvalidParameterError("golden_spiral_phi_exponent_factor must be > 0")
        if self.pink_threshold_value < 0:
            raise InvalidParameterError("pink_threshold_value must be >= 0")
        if self.thornfiddle_smoothing_strength <= 0:
            raise InvalidParameterError("thornfiddle_smoothing_strength must be > 0")
        if self.thornfiddle_interpolation_points < 4:
            raise InvalidParameterError("thornfiddle_interpolation_points must be >= 4")
        if self.approximate_entropy_m < 1:
            raise InvalidParameterError("approximate_entropy_m must be >= 1")
        if self.approximate_entropy_r <= 0:
            raise InvalidParameterError("approximate_entropy_r must be > 0")
        if self.lec_scaling_factor < 0:
            raise InvalidParameterError("lec_scaling_factor must be >= 0")
        if self.thornfiddle_pixel_threshold < 1:
            raise InvalidParameterError("thornfiddle_pixel_threshold must be >= 1")
        if self.harmonic_strength_multiplier < 0:
            raise InvalidParameterError("harmonic_strength_multiplier must be >= 0")
        if self.harmonic_min_chain_length < 1:
            raise InvalidParameterError("harmonic_min_chain_length must be >= 1")
        if self.harmonic_max_harmonics < 1:
            raise InvalidParameterError("harmonic_max_harmonics must be >= 1")
        if not 0.0 <= self.component_tolerance < 1.0:
            raise InvalidParameterError("component_tolerance must be in [0, 1)")


def _is_int(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _is_real(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


# Keyed by the field annotation string
_TYPE_CHECKS = {
    "int": (_is_int, "an integer"),
    "int | None": (lambda v: v is None or _is_int(v), "an integer or null"),
    "float": (_is_real, "a finite number"),
    "bool": (lambda v: isinstance(v, bool), "true or false"),
}


def _check_percentages(name: str, low: float, high: float) -> None:
    if low < 0 or high > 100 or low > high:
        raise InvalidParameterError(f"{name} percentages must satisfy 0 <= min <= max <= 100, got {low}, {high}")
