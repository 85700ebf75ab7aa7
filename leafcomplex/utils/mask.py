"""Mask primitives — foreground masks, density, bounding boxes, components. No engine imports."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from leafcomplex.errors import DegenerateShapeError, InvalidParameterError

# Alpha value at or above which an RGBA pixel counts as foreground.
ALPHA_THRESHOLD = 128

# 8-connectivity structure for component labelling.
_EIGHT_CONNECTED = np.ones((3, 3), dtype=bool)


def as_mask(array: NDArray) -> NDArray[np.bool_]:
    """Coerce a 2D array to a fresh boolean mask."""
    mask = np.asarray(array)
    if mask.ndim != 2:
        raise InvalidParameterError(f"Mask must be 2D, got shape {mask.shape}")
    if mask.shape[0] == 0 or mask.shape[1] == 0:
        raise DegenerateShapeError("Mask has zero width or height")
    return mask.astype(bool, copy=True)


def mask_from_rgba(rgba: NDArray[np.uint8], alpha_threshold: int = ALPHA_THRESHOLD) -> NDArray[np.bool_]:
    """Foreground mask from a decoded (H, W, 4) RGBA array."""
    rgba = np.asarray(rgba)
    if rgba.ndim != 3 or rgba.shape[2] != 4:
        raise InvalidParameterError(f"Expected an (H, W, 4) RGBA array, got shape {rgba.shape}")
    return rgba[:, :, 3] >= alpha_threshold


def require_foreground(mask: NDArray[np.bool_]) -> int:
    """Return the foreground pixel count, raising DegenerateShapeError when it is zero."""
    count = int(np.count_nonzero(mask))
    if count == 0:
        raise DegenerateShapeError("Mask has no foreground pixels")
    return count


def foreground_density(mask: NDArray[np.bool_]) -> float:
    """Percentage (0-100) of foreground pixels in the whole image."""
    return 100.0 * np.count_nonzero(mask) / mask.size


def shorter_dimension(mask: NDArray[np.bool_]) -> int:
    """Shorter side of the image grid."""
    return int(min(mask.shape))


def bounding_box(mask: NDArray[np.bool_]) -> tuple[int, int, int, int]:
    """(xmin, ymin, xmax, ymax) of the foreground, inclusive."""
    ys, xs = np.nonzero(mask)
    if len(xs) == 0:
        raise DegenerateShapeError("Cannot take the bounding box of an empty mask")
    return (int(xs.min()), int(ys.min()), int(xs.max()), int(ys.max()))


def bounding_dimensions(mask: NDArray[np.bool_]) -> tuple[int, int]:
    """(width, height) of the foreground bounding box in pixels."""
    xmin, ymin, xmax, ymax = bounding_box(mask)
    return (xmax - xmin + 1, ymax - ymin + 1)


def label_components(mask: NDArray[np.bool_]) -> tuple[NDArray[np.int32], int]:
    """Label 8-connected foreground components."""
    labels, n = ndimage.label(mask, structure=_EIGHT_CONNECTED)
    return labels.astype(np.int32), int(n)


def largest_component(mask: NDArray[np.bool_]) -> tuple[NDArray[np.bool_], float]:
    """Largest 8-connected component and the share of foreground it holds.

    Ties between equally large components go to the lowest label
    (first in raster order).
    """
    total = require_foreground(mask)
    labels, n = label_components(mask)
    if n == 1:
        return labels == 1, 1.0
    sizes = np.bincount(labels.ravel())[1:]
    best = int(np.argmax(sizes)) + 1
    return labels == best, float(sizes[best - 1]) / total


def component_at(mask: NDArray[np.bool_], x: float, y: float) -> NDArray[np.bool_] | None:
    """Component containing the pixel nearest (x, y), or None when it is background."""
    col, row = int(round(x)), int(round(y))
    h, w = mask.shape
    if not (0 <= row < h and 0 <= col < w) or not mask[row, col]:
        return None
    labels, _ = label_components(mask)
    return labels == labels[row, col]


def in_bounds(mask: NDArray[np.bool_], x: float, y: float) -> bool:
    h, w = mask.shape
    return 0 <= x <= w - 1 and 0 <= y <= h - 1
