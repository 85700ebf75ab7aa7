"""Math helpers — CV, circular runs, Shannon entropy. No engine imports."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def coefficient_of_variation(values: NDArray[np.float64]) -> float:
    """CV = std / mean. Zero when the mean vanishes."""
    mean = float(np.mean(values))
    if abs(mean) < 1e-6:
        return 0.0
    return float(np.std(values) / mean)


def circular_runs(flags: NDArray[np.bool_]) -> list[list[int]]:
    """Maximal runs of True in a circular sequence, as index lists in traversal order.

    A run crossing the end of the sequence continues at index 0. Runs are
    ordered by their first index; an all-True sequence is a single run
    starting at 0.
    """
    flags = np.asarray(flags, dtype=bool)
    n = len(flags)
    if n == 0 or not flags.any():
        return []
    if flags.all():
        return [list(range(n))]

    # Start scanning just after a False so no run is split at the seam.
    origin = int(np.argmin(flags)) + 1
    runs: list[list[int]] = []
    current: list[int] = []
    for k in range(n):
        idx = (origin + k) % n
        if flags[idx]:
            current.append(idx)
        elif current:
            runs.append(current)
            current = []
    if current:
        runs.append(current)
    return sorted(runs, key=lambda run: run[0])


def shannon_entropy(distribution: NDArray[np.float64]) -> float:
    """Shannon entropy in bits, normalised by log2 of the number of bins."""
    p = np.asarray(distribution, dtype=np.float64)
    if len(p) < 2:
        return 0.0
    nz = p[p > 1e-12]
    entropy = float(-np.sum(nz * np.log2(nz)))
    return entropy / float(np.log2(len(p)))
