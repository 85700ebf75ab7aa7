"""Contour extraction — Moore-neighbour boundary tracing of the outer leaf boundary.

Convention: the largest 8-connected component is traced clockwise (image
coordinates, y down) starting at its first foreground pixel in raster order.
Tracing stops when the first move out of the start pixel is about to repeat,
so one-pixel-wide necks are walked in both directions and the start pixel
is never duplicated at the end.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from leafcomplex.errors import DegenerateShapeError
from leafcomplex.utils.geometry import closed_perimeter
from leafcomplex.utils.mask import largest_component, require_foreground

logger = logging.getLogger(__name__)

# (drow, dcol) clockwise starting at north. Even indices are axis moves.
_MOORE = [(-1, 0), (-1, 1), (0, 1), (1, 1), (1, 0), (1, -1), (0, -1), (-1, -1)]
_WEST = 6

MIN_CONTOUR_POINTS = 3


def trace_contour(mask: NDArray[np.bool_], component_tolerance: float = 0.05) -> NDArray[np.int64]:
    """Ordered outer boundary of the mask as an (N, 2) array of (x, y).

    Raises DegenerateShapeError when the mask is empty, when fragments
    outside the largest component exceed ``component_tolerance`` of the
    foreground, or when fewer than three boundary points exist.
    """
    require_foreground(mask)
    component, share = largest_component(mask)
    if share < 1.0 - component_tolerance:
        raise DegenerateShapeError(
            f"Foreground is fragmented: largest component holds {share:.1%} "
            f"(tolerance {component_tolerance:.1%})"
        )
    if share < 1.0:
        logger.debug("Tracing largest component (%.1f%% of foreground)", share * 100)

    points = _moore_trace(component)
    if len(points) < MIN_CONTOUR_POINTS:
        raise DegenerateShapeError(f"Contour has {len(points)} points, need >= {MIN_CONTOUR_POINTS}")
    return np.array([(c, r) for r, c in points], dtype=np.int64)


def _moore_trace(component: NDArray[np.bool_]) -> list[tuple[int, int]]:
    """Trace one component, returning (row, col) pixels in unpadded coordinates."""
    grid = np.pad(component, 1, mode="constant", constant_values=False)
    rows, cols = np.nonzero(grid)
    start = (int(rows[0]), int(cols[0]))

    contour = [start]
    current = start
    backtrack = _WEST
    first_move: int | None = None
    # Each boundary pixel is entered at most once per side of a neck.
    limit = 4 * grid.size

    for _ in range(limit):
        move = _next_move(grid, current, backtrack)
        if move is None:
            break  # isolated pixel
        if current == start and move == first_move:
            break
        if first_move is None:
            first_move = move
        dr, dc = _MOORE[move]
        current = (current[0] + dr, current[1] + dc)
        # Background cell scanned just before the move, seen from the new pixel.
        backtrack = (move + 6) % 8 if move % 2 == 0 else (move + 5) % 8
        if current == start and _next_move(grid, current, backtrack) == first_move:
            break
        contour.append(current)
    else:
        logger.warning("Contour trace hit the %d step limit", limit)

    return [(r - 1, c - 1) for r, c in contour]


def _next_move(grid: NDArray[np.bool_], pixel: tuple[int, int], backtrack: int) -> int | None:
    """Index of the first foreground neighbour clockwise after the backtrack cell."""
    r, c = pixel
    for i in range(1, 9):
        idx = (backtrack + i) % 8
        dr, dc = _MOORE[idx]
        if grid[r + dr, c + dc]:
            return idx
    return None


def contour_circumference(contour: NDArray) -> float:
    """Closed length of the contour in pixels."""
    return closed_perimeter(contour)
