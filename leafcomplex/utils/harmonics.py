"""Harmonic chains — runs of golden-marked crossings and the overtone enhancement they drive."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from leafcomplex.errors import InvalidParameterError
from leafcomplex.utils.math_helpers import circular_runs

logger = logging.getLogger(__name__)

# Linear congruential generator for deterministic overtone phases.
_LCG_MULTIPLIER = 1103515245
_LCG_INCREMENT = 12345
_U64_MASK = (1 << 64) - 1


@dataclass(frozen=True)
class GoldenChain:
    """One contiguous run of samples whose golden crossing count meets the threshold."""

    indices: tuple[int, ...]
    total_golden: int
    max_crossing: int

    @property
    def length(self) -> int:
        return len(self.indices)

    @property
    def start(self) -> int:
        return self.indices[0]

    @property
    def intensity(self) -> float:
        """Mean golden pixels per sample."""
        return self.total_golden / self.length


@dataclass(frozen=True)
class HarmonicSummary:
    """Chain statistics. Only valid chains (length >= minimum) feed the length and score fields."""

    chain_count: int = 0
    valid_chain_count: int = 0
    mean_chain_length: float = 0.0
    total_chain_length: int = 0
    weighted_chain_score: float = 0.0
    chains: tuple[GoldenChain, ...] = field(default_factory=tuple)


def detect_golden_chains(golden_counts: NDArray, pixel_threshold: float) -> list[GoldenChain]:
    """Circular runs of samples with golden count >= pixel_threshold.

    A run that reaches the end of the contour continues at index 0.
    """
    counts = np.asarray(golden_counts, dtype=np.int64)
    chains = []
    for run in circular_runs(counts >= pixel_threshold):
        values = counts[run]
        chains.append(GoldenChain(indices=tuple(run), total_golden=int(values.sum()), max_crossing=int(values.max())))
    return chains


def summarize_chains(
    chains: list[GoldenChain],
    min_chain_length: int,
    strength_multiplier: float,
) -> HarmonicSummary:
    if min_chain_length < 1:
        raise InvalidParameterError(f"harmonic_min_chain_length must be >= 1, got {min_chain_length}")
    valid = [c for c in chains if c.length >= min_chain_length]
    if not valid:
        return HarmonicSummary(chain_count=len(chains))

    total_length = sum(c.length for c in valid)
    weighted = strength_multiplier * sum(c.total_golden * c.length for c in valid)
    logger.debug(
        "Golden chains: %d total, %d valid (>= %d points), weighted score %.1f",
        len(chains),
        len(valid),
        min_chain_length,
        weighted,
    )
    return HarmonicSummary(
        chain_count=len(chains),
        valid_chain_count=len(valid),
        mean_chain_length=total_length / len(valid),
        total_chain_length=total_length,
        weighted_chain_score=weighted,
        chains=tuple(valid),
    )


def global_complexity(chains: tuple[GoldenChain, ...] | list[GoldenChain]) -> float:
    """Chain-count, length and intensity combined; isolated chains beyond two add 30% each."""
    if not chains:
        return 0.0
    n = len(chains)
    total_length = sum(c.length for c in chains)
    mean_intensity = sum(c.total_golden for c in chains) / n
    isolation = 1.0 if n <= 2 else 1.0 + (n - 2) * 0.3
    return (math.log(n) + 1.0) * math.sqrt(total_length) * math.sqrt(mean_intensity) * isolation


def overtone_count(chain_length: int, max_harmonics: int) -> int:
    """floor(log2(length)) + 3 overtones, capped at max_harmonics."""
    if chain_length <= 0:
        return 0
    return max(1, min(int(math.floor(math.log2(chain_length))) + 3, max_harmonics))


def base_frequency(circumference: float, n_points: int) -> float:
    if circumference <= 0 or n_points == 0:
        return 1.0
    return 2.0 / (1.0 + (circumference / n_points) / 10.0)


def chaos_factor(position_ratio: float, stress: float, intensity: float, max_crossing: float) -> float:
    """Monotonic in position along the chain, capped at 2."""
    progression = math.log10(1.0 + position_ratio * 9.0) * (0.8 + position_ratio * 0.4)
    golden = intensity / max_crossing if max_crossing > 0 else 1.0
    return min(progression * golden * (1.0 + stress), 2.0)


def harmonic_component(position: int, n_harmonics: int, frequency: float, chaos: float, position_ratio: float) -> float:
    """Mean of an overtone series with amplitudes 1/k and seeded pseudo-random phases."""
    if n_harmonics == 0:
        return 0.0
    state = int(position * 1000.0 + frequency * 100.0) & _U64_MASK
    total = 0.0
    for k in range(1, n_harmonics + 1):
        state = (state * _LCG_MULTIPLIER + _LCG_INCREMENT) & _U64_MASK
        phase = state / float(_U64_MASK) * 2.0 * math.pi
        total += (1.0 / k) * chaos * math.sin(frequency * k * position_ratio * 2.0 * math.pi + phase)
    return total / n_harmonics


def enhance_thornfiddle(
    values: NDArray[np.float64],
    chains: tuple[GoldenChain, ...] | list[GoldenChain],
    circumference: float,
    strength_multiplier: float,
    max_harmonics: int,
) -> NDArray[np.float64]:
    """Thornfiddle path with each valid chain's overtone series folded in.

    Points outside every chain keep their base value; a point inside a chain
    becomes v·(1 + strength·component).
    """
    if max_harmonics < 1:
        raise InvalidParameterError(f"harmonic_max_harmonics must be >= 1, got {max_harmonics}")
    enhanced = np.asarray(values, dtype=np.float64).copy()
    if not chains:
        return enhanced

    complexity = global_complexity(chains)
    frequency = base_frequency(circumference, len(enhanced))
    for chain_index, chain in enumerate(chains):
        n_harmonics = overtone_count(chain.length, max_harmonics)
        stress = math.tanh(chain_index * 0.3) * complexity
        for position, idx in enumerate(chain.indices):
            ratio = position / chain.length
            chaos = chaos_factor(ratio, stress, chain.intensity, chain.max_crossing)
            component = harmonic_component(position, n_harmonics, frequency, chaos, ratio)
            enhanced[idx] += enhanced[idx] * component * strength_multiplier
    return enhanced
