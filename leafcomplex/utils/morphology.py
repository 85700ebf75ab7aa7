"""Morphological opening with circular structuring elements and adaptive kernel sizing."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from leafcomplex.errors import InvalidParameterError

# Shape index at which a leaf counts as fully elongated for kernel sizing.
MAX_SHAPE_INDEX = 5.0


def circular_kernel(diameter: int) -> NDArray[np.bool_]:
    """Disk-shaped structuring element of the given diameter.

    Odd diameters use radius (d-1)/2 so d=3 gives a cross; even diameters
    use radius d/2 around centre (d-1)/2 so d=2 gives a full 2x2 block.
    """
    if diameter < 1:
        raise InvalidParameterError(f"Kernel diameter must be >= 1, got {diameter}")
    center = (diameter - 1) / 2.0
    radius_sq = ((diameter - 1) / 2.0) ** 2 if diameter % 2 == 1 else (diameter / 2.0) ** 2
    yy, xx = np.mgrid[0:diameter, 0:diameter]
    dist_sq = (xx - center) ** 2 + (yy - center) ** 2
    return dist_sq <= radius_sq + 1e-6


def open_mask(mask: NDArray[np.bool_], diameter: int) -> NDArray[np.bool_]:
    """Binary opening (erode then dilate) with a circular element.

    Pixels outside the image count as background. A diameter below 1 is a
    no-op and returns a copy of the input.
    """
    if diameter < 1:
        return mask.copy()
    kernel = circular_kernel(diameter)
    eroded = ndimage.binary_erosion(mask, structure=kernel, border_value=0)
    opened = ndimage.binary_dilation(eroded, structure=kernel, border_value=0)
    # Even kernels can shift by one pixel in the dilation; opening never adds pixels.
    return opened & mask


def opened_away(original: NDArray[np.bool_], opened: NDArray[np.bool_]) -> NDArray[np.bool_]:
    """Pixels present in the original but removed by the opening."""
    return original & ~opened


def border_ring(mask: NDArray[np.bool_]) -> NDArray[np.bool_]:
    """Foreground pixels with an 8-neighbour that is background or off-image."""
    interior = ndimage.binary_erosion(mask, structure=np.ones((3, 3), dtype=bool), border_value=0)
    return mask & ~interior


def pink_marking(original: NDArray[np.bool_], opened: NDArray[np.bool_]) -> NDArray[np.bool_]:
    """Marked region for edge analysis: removed protrusions plus the outer border ring."""
    return opened_away(original, opened) | border_ring(original)


def density_opening_percentage(
    density: float,
    max_density: float,
    max_percentage: float,
    min_percentage: float,
) -> float:
    """Opening size (% of the shorter image side) from foreground density (%).

    Rises linearly from min_percentage at 0% density to max_percentage at
    max_density and stays there above it.
    """
    _check_bounds(min_percentage, max_percentage)
    if max_density <= 0:
        raise InvalidParameterError(f"max_density must be > 0, got {max_density}")
    if density >= max_density:
        pct = max_percentage
    else:
        pct = min_percentage + (max(density, 0.0) / max_density) * (max_percentage - min_percentage)
    return float(min(max(pct, min_percentage), max_percentage))


def shape_opening_percentage(shape_index: float, max_percentage: float, min_percentage: float) -> float:
    """Opening size (% of the shorter LMC side) from shape index.

    Circular leaves (index 1.0) get max_percentage, elongated ones
    (index >= 5.0) get min_percentage.
    """
    _check_bounds(min_percentage, max_percentage)
    clamped = min(max(shape_index, 1.0), MAX_SHAPE_INDEX)
    factor = (clamped - 1.0) / (MAX_SHAPE_INDEX - 1.0)
    pct = max_percentage - factor * (max_percentage - min_percentage)
    return float(min(max(pct, min_percentage), max_percentage))


def kernel_diameter(percentage: float, dimension: float) -> int:
    """Kernel diameter in pixels, never larger than the limiting dimension."""
    if dimension <= 0:
        raise InvalidParameterError(f"Limiting dimension must be > 0, got {dimension}")
    if percentage < 0:
        raise InvalidParameterError(f"Opening percentage must be >= 0, got {percentage}")
    diameter = int(round(percentage / 100.0 * dimension))
    return min(diameter, int(dimension))


def _check_bounds(min_percentage: float, max_percentage: float) -> None:
    if min_percentage < 0 or max_percentage > 100 or min_percentage > max_percentage:
        raise InvalidParameterError(
            f"Opening percentages must satisfy 0 <= min <= max <= 100, "
            f"got min={min_percentage}, max={max_percentage}"
        )
