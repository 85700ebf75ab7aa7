"""DiegoPath construction — per-contour-point lines to the reference point, plus petiole and threshold filters."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace

import numpy as np
from numpy.typing import NDArray
from skimage.draw import line
from skimage.graph import MCP_Geometric

from leafcomplex.utils.math_helpers import circular_runs

logger = logging.getLogger(__name__)

# Pink values above this belong to a feature run during petiole detection.
PETIOLE_DETECTION_THRESHOLD = 1.0
# A run must reach this percentile of the signal to qualify as the petiole.
PETIOLE_OUTLIER_PERCENTILE = 0.95
# Samples that must survive petiole removal for the signal to stay analysable.
PETIOLE_MIN_REMAINING = 4


@dataclass(frozen=True)
class PathSample:
    """Signals for one contour point. ``index`` follows circular contour order."""

    index: int
    x: int
    y: int
    angle: float
    straight_length: float
    diego_length: float
    pink: int
    golden: int
    thornfiddle: float
    petiole: bool = False


def rasterize_line(start: tuple[int, int], end: tuple[int, int]) -> tuple[NDArray[np.intp], NDArray[np.intp]]:
    """Bresenham pixels from start to end, both (x, y). Returns (rows, cols)."""
    rr, cc = line(int(start[1]), int(start[0]), int(end[1]), int(end[0]))
    return rr, cc


def geodesic_lengths(mask: NDArray[np.bool_], origin: tuple[int, int]) -> NDArray[np.float64]:
    """Shortest in-foreground path length from origin (x, y) to every pixel.

    Unreachable pixels are inf. A background origin is allowed to step onto
    adjacent foreground.
    """
    costs = np.where(mask, 1.0, np.inf)
    ox, oy = origin
    costs[oy, ox] = 1.0
    mcp = MCP_Geometric(costs, fully_connected=True)
    cumulative, _ = mcp.find_costs([(oy, ox)])
    return np.asarray(cumulative, dtype=np.float64)


def build_path_samples(
    contour: NDArray,
    reference: tuple[int, int],
    mask: NDArray[np.bool_],
    pink_mask: NDArray[np.bool_] | None,
    golden_mask: NDArray[np.bool_] | None,
) -> list[PathSample]:
    """One PathSample per contour point.

    The straight line from the reference pixel to each point is sampled for
    pink and golden crossings. When its interior crosses background the
    DiegoPath length switches to the geodesic length through the mask.
    """
    rx, ry = reference
    geodesic: NDArray[np.float64] | None = None
    samples: list[PathSample] = []

    for idx, (px, py) in enumerate(np.asarray(contour)):
        px, py = int(px), int(py)
        rr, cc = rasterize_line((rx, ry), (px, py))
        straight = math.hypot(px - rx, py - ry)

        diego = straight
        if len(rr) > 2 and not mask[rr[1:-1], cc[1:-1]].all():
            if geodesic is None:
                geodesic = geodesic_lengths(mask, (rx, ry))
            detour = geodesic[py, px]
            if np.isfinite(detour):
                diego = max(float(detour), straight)

        pink = int(np.count_nonzero(pink_mask[rr, cc])) if pink_mask is not None else 0
        golden = int(np.count_nonzero(golden_mask[rr, cc])) if golden_mask is not None else 0

        samples.append(
            PathSample(
                index=idx,
                x=px,
                y=py,
                angle=math.atan2(py - ry, px - rx),
                straight_length=straight,
                diego_length=diego,
                pink=pink,
                golden=golden,
                thornfiddle=thornfiddle_value(straight, diego),
            )
        )
    return samples


def thornfiddle_value(straight: float, diego: float) -> float:
    """DiegoPath length weighted by its detour ratio (>= 1)."""
    if straight <= 0 or diego <= 0:
        return diego
    return diego * max(diego / straight, 1.0)


def pink_signal(samples: list[PathSample]) -> NDArray[np.float64]:
    return np.array([s.pink for s in samples], dtype=np.float64)


def detect_petiole(
    signal: NDArray[np.float64],
    threshold: float = PETIOLE_DETECTION_THRESHOLD,
) -> list[int] | None:
    """Indices of the petiole arc, or None.

    Candidates are circular runs above ``threshold`` that contain at least
    one value at or above the 95th percentile; the longest candidate wins
    (earliest on ties). A run that would leave fewer than
    PETIOLE_MIN_REMAINING samples behind is not a petiole.
    """
    values = np.asarray(signal, dtype=np.float64)
    n = len(values)
    if n == 0:
        return None
    ordered = np.sort(values)
    outlier = ordered[min(int(n * PETIOLE_OUTLIER_PERCENTILE), n - 1)]

    runs = circular_runs(values > threshold)
    candidates = [run for run in runs if n - len(run) >= PETIOLE_MIN_REMAINING and values[run].max() >= outlier]
    if not candidates:
        logger.debug("No petiole sequence detected (outlier threshold %.2f)", outlier)
        return None
    petiole = max(candidates, key=len)
    logger.debug("Detected petiole sequence with %d points", len(petiole))
    return petiole


def remove_petiole(samples: list[PathSample], indices: list[int]) -> list[PathSample]:
    """Drop petiole samples, merge the loose ends and renumber contiguously.

    Survivors keep their contour order, so the sequence stays a closed
    loop with the cut stitched shut.
    """
    drop = set(indices)
    kept = [s for s in samples if s.index not in drop]
    return [replace(sample, index=new_idx) for new_idx, sample in enumerate(kept)]


def zero_petiole(samples: list[PathSample], indices: list[int]) -> list[PathSample]:
    """Zero the pink signal on the petiole arc and flag those samples."""
    marked = set(indices)
    return [replace(s, pink=0, petiole=True) if s.index in marked else s for s in samples]


def filter_petiole_values(values: NDArray[np.float64], indices: list[int], remove_completely: bool) -> NDArray[np.float64]:
    """Petiole filtering on a bare signal."""
    values = np.asarray(values, dtype=np.float64)
    if not indices:
        return values.copy()
    if remove_completely:
        keep = np.ones(len(values), dtype=bool)
        keep[indices] = False
        return values[keep]
    filtered = values.copy()
    filtered[indices] = 0.0
    return filtered


def apply_pink_threshold(samples: list[PathSample], threshold: float) -> list[PathSample]:
    """Zero every pink value <= threshold."""
    filtered = [replace(s, pink=0) if 0 < s.pink <= threshold else s for s in samples]
    changed = sum(1 for a, b in zip(samples, filtered) if a is not b)
    if changed:
        logger.debug("Pink threshold filter: %d values <= %.1f set to zero", changed, threshold)
    return filtered
