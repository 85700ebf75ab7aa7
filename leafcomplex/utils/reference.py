"""Reference points (centre of mass, emerge point) and the golden-spiral rotation search."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from leafcomplex.errors import DegenerateShapeError, InvalidParameterError
from leafcomplex.utils.geometry import polar_angles, radial_distances
from leafcomplex.utils.mask import in_bounds, require_foreground

GOLDEN_RATIO = (1 + math.sqrt(5)) / 2
# Full spiral turns (arms) matched against the contour.
SPIRAL_TURNS = 2
# Central band (fraction of image width) preferred for the emerge point.
_EP_BAND = (0.49, 0.51)


@dataclass(frozen=True)
class ReferencePoint:
    x: float
    y: float

    @property
    def pixel(self) -> tuple[int, int]:
        """Nearest pixel as (x, y)."""
        return (int(round(self.x)), int(round(self.y)))

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class SpiralAlignment:
    """Outcome of the golden-spiral rotation search."""

    step: int
    angle: float
    score: float
    scores: tuple[float, ...]
    growth_rate: float
    scale: float


def center_of_mass(mask: NDArray[np.bool_]) -> ReferencePoint:
    """Mean (x, y) of all foreground pixels."""
    require_foreground(mask)
    ys, xs = np.nonzero(mask)
    return ReferencePoint(float(xs.mean()), float(ys.mean()))


def emerge_point(mask: NDArray[np.bool_], marked: NDArray[np.bool_] | None = None) -> ReferencePoint:
    """Bottom-most unmarked foreground pixel closest to the horizontal image centre.

    Pixels in ``marked`` (the pink border ring and opened-away regions) are
    skipped. Pixels inside the central 49-51% band win over those outside it.
    """
    candidates_mask = mask & ~marked if marked is not None else mask
    if not candidates_mask.any():
        raise DegenerateShapeError("No unmarked foreground pixel left for the emerge point")
    ys, xs = np.nonzero(candidates_mask)
    bottom = int(ys.max())
    candidates = xs[ys == bottom]
    width = mask.shape[1]
    center = width * 0.5
    band = candidates[(candidates >= width * _EP_BAND[0]) & (candidates <= width * _EP_BAND[1])]
    pool = band if len(band) else candidates
    # Stable: the left-most of equally close pixels wins.
    best = pool[int(np.argmin(np.abs(pool - center)))]
    return ReferencePoint(float(best), float(bottom))


def spiral_radii(theta: NDArray[np.float64], scale: float, growth_rate: float) -> NDArray[np.float64]:
    """Logarithmic spiral r(θ) = a·exp(b·θ)."""
    return scale * np.exp(growth_rate * theta)


def golden_spiral_search(
    contour: NDArray,
    center: ReferencePoint,
    mask_shape: tuple[int, int],
    rotation_steps: int,
    phi_exponent_factor: float,
) -> SpiralAlignment:
    """Rotate a golden spiral around the reference point and pick the best-aligned step.

    The spiral grows by φ^(factor·θ); its scale is set so the outermost arm
    ends at the largest contour radius. For every rotation step the score is
    the mean radial gap between each contour point and the nearest spiral arm
    crossing its polar angle. All steps are scored; the lowest score wins and
    ties go to the lowest step.
    """
    if rotation_steps < 1:
        raise InvalidParameterError(f"rotation_steps must be >= 1, got {rotation_steps}")
    if phi_exponent_factor <= 0:
        raise InvalidParameterError(f"phi_exponent_factor must be > 0, got {phi_exponent_factor}")
    h, w = mask_shape
    if not (0 <= center.x <= w - 1 and 0 <= center.y <= h - 1):
        raise InvalidParameterError(f"Reference point ({center.x:.1f}, {center.y:.1f}) lies outside the image")

    c = center.as_tuple()
    distances = radial_distances(contour, c)
    r_max = float(distances.max())
    if r_max <= 0:
        raise DegenerateShapeError("Contour collapses onto the reference point")

    growth_rate = phi_exponent_factor * math.log(GOLDEN_RATIO)
    theta_max = 2 * math.pi * SPIRAL_TURNS
    scale = r_max / math.exp(growth_rate * theta_max)

    angles = polar_angles(contour, c)
    arms = np.arange(SPIRAL_TURNS) * 2 * math.pi

    scores = np.empty(rotation_steps, dtype=np.float64)
    for step in range(rotation_steps):
        offset = 2 * math.pi * step / rotation_steps
        psi = np.mod(angles - offset, 2 * math.pi)
        arm_radii = spiral_radii(psi[:, None] + arms[None, :], scale, growth_rate)
        residuals = np.abs(distances[:, None] - arm_radii).min(axis=1)
        scores[step] = residuals.mean()

    best = int(np.argmin(scores))
    return SpiralAlignment(
        step=best,
        angle=2 * math.pi * best / rotation_steps,
        score=float(scores[best]),
        scores=tuple(float(s) for s in scores),
        growth_rate=growth_rate,
        scale=scale,
    )


def validate_reference(mask: NDArray[np.bool_], point: ReferencePoint) -> ReferencePoint:
    """Reject reference points that fall outside the image."""
    if not in_bounds(mask, point.x, point.y):
        raise InvalidParameterError(f"Reference point ({point.x:.1f}, {point.y:.1f}) lies outside the image")
    return point
