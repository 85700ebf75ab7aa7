"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray


def shape_index(width: float, height: float) -> float:
    """Longer / shorter dimension. Always >= 1.0; degenerate widths read as circular."""
    longer, shorter = max(width, height), min(width, height)
    if shorter <= 0:
        return 1.0
    return float(longer / shorter)


def centroid(points: NDArray[np.float64]) -> tuple[float, float]:
    """Compute centroid of a point set."""
    if len(points) == 0:
        return (0.0, 0.0)
    return (float(np.mean(points[:, 0])), float(np.mean(points[:, 1])))


def centroid_distances(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Distance from centroid to each boundary point."""
    cx, cy = centroid(points)
    return np.sqrt((points[:, 0] - cx) ** 2 + (points[:, 1] - cy) ** 2)


def closed_perimeter(points: NDArray) -> float:
    """Length of a closed polyline, including the closing segment."""
    if len(points) < 2:
        return 0.0
    pts = np.asarray(points, dtype=np.float64)
    diffs = np.roll(pts, -1, axis=0) - pts
    return float(np.sum(np.sqrt(np.sum(diffs**2, axis=1))))


def circularity(area: int, perimeter: float) -> float:
    """4π·A/P² with a digitisation correction on the perimeter. Circle ≈ 1.0."""
    if perimeter <= 0:
        return 0.0
    initial = 4 * math.pi * area / perimeter**2
    # Pixel staircases inflate perimeters; rounder shapes inflate more.
    if initial > 0.75:
        corrected = perimeter * 0.945
    elif initial > 0.5:
        corrected = perimeter * 0.975
    else:
        corrected = perimeter * 0.99
    return float(4 * math.pi * area / corrected**2)


def biological_dimensions(contour: NDArray) -> tuple[float, float]:
    """(length, width): longest chord, and the span perpendicular to it.

    Large contours are subsampled for the chord search.
    """
    pts = np.asarray(contour, dtype=np.float64)
    if len(pts) < 2:
        return (0.0, 0.0)
    step = max(1, len(pts) // 250) if len(pts) > 500 else 1
    sample = pts[::step]
    diffs = sample[:, None, :] - sample[None, :, :]
    dist_sq = np.sum(diffs**2, axis=2)
    i, j = np.unravel_index(int(np.argmax(dist_sq)), dist_sq.shape)
    p1, p2 = sample[i], sample[j]
    length = float(np.sqrt(dist_sq[i, j]))
    axis = (p2 - p1) / length if length > 0 else np.array([1.0, 0.0])
    perp = np.array([-axis[1], axis[0]])
    projections = (pts - p1) @ perp
    width = float(projections.max() - projections.min())
    return (length, width)


def polar_angles(points: NDArray, center: tuple[float, float]) -> NDArray[np.float64]:
    """atan2 angle of each point around a centre, in [-π, π]."""
    pts = np.asarray(points, dtype=np.float64)
    return np.arctan2(pts[:, 1] - center[1], pts[:, 0] - center[0])


def radial_distances(points: NDArray, center: tuple[float, float]) -> NDArray[np.float64]:
    pts = np.asarray(points, dtype=np.float64)
    return np.hypot(pts[:, 0] - center[0], pts[:, 1] - center[1])
