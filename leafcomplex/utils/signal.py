"""Thornfiddle signal processing — periodic smoothing, resampling, spectral and approximate entropy.

All signals are closed loops: index n wraps to 0.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from scipy.ndimage import correlate1d

from leafcomplex.errors import InsufficientSamplesError, InvalidParameterError
from leafcomplex.utils.geometry import centroid_distances
from leafcomplex.utils.math_helpers import coefficient_of_variation, shannon_entropy
from leafcomplex.utils.paths import PETIOLE_DETECTION_THRESHOLD, detect_petiole, filter_petiole_values

# Returned by approximate_entropy when there are too few windows.
APEN_UNDEFINED = -1.0

# Gaussian window bounds (samples) for periodic smoothing.
_MIN_WINDOW = 3
_MAX_WINDOW = 21
_MIN_SIGMA = 0.5

# Variance below which a signal has no spectrum worth analysing.
_FLAT_VARIANCE = 1e-6


def gaussian_window(size: int, sigma: float) -> NDArray[np.float64]:
    """Normalised Gaussian weights centred on size // 2."""
    offsets = np.arange(size) - size // 2
    weights = np.exp(-0.5 * (offsets / sigma) ** 2)
    return weights / weights.sum()


def periodic_smooth(signal: NDArray[np.float64], sigma: float) -> NDArray[np.float64]:
    """Circular Gaussian smoothing; the ends borrow neighbours from the opposite end.

    Window length is n // 8 clamped to [3, 21]; sigma is floored at 0.5.
    Signals shorter than 3 samples are returned unchanged.
    """
    values = np.asarray(signal, dtype=np.float64)
    if len(values) < 3:
        return values.copy()
    size = min(max(len(values) // 8, _MIN_WINDOW), _MAX_WINDOW)
    weights = gaussian_window(size, max(sigma, _MIN_SIGMA))
    return correlate1d(values, weights, mode="wrap")


def interpolate_periodic(signal: NDArray[np.float64], n_points: int) -> NDArray[np.float64]:
    """Linear resampling of a closed loop to exactly n_points samples."""
    values = np.asarray(signal, dtype=np.float64)
    if n_points < 2:
        raise InvalidParameterError(f"Interpolation needs at least 2 points, got {n_points}")
    if len(values) < 2:
        raise InsufficientSamplesError(f"Cannot interpolate a signal with {len(values)} samples")
    n = len(values)
    source = np.arange(n, dtype=np.float64)
    target = np.arange(n_points, dtype=np.float64) * n / n_points
    return np.interp(target, source, values, period=n)


def power_spectrum(signal: NDArray[np.float64]) -> NDArray[np.float64]:
    """Normalised power of the positive, non-DC frequencies. Empty for flat signals."""
    values = np.asarray(signal, dtype=np.float64)
    if len(values) < 4:
        raise InsufficientSamplesError(f"Spectral analysis needs >= 4 samples, got {len(values)}")
    if np.var(values) < _FLAT_VARIANCE:
        return np.empty(0)
    spectrum = np.fft.rfft(values - values.mean())
    # Drop DC; drop Nyquist so even and odd lengths share the same bin count.
    powers = np.abs(spectrum[1 : (len(values) + 1) // 2]) ** 2
    total = powers.sum()
    if total <= 0:
        return np.empty(0)
    return powers / total


def spectral_entropy(signal: NDArray[np.float64]) -> float:
    """Normalised Shannon entropy of the power spectrum, in [0, 1].

    All-zero and constant signals give 0; a single frequency gives ~0; white
    noise approaches 1.
    """
    powers = power_spectrum(signal)
    if len(powers) == 0:
        return 0.0
    return shannon_entropy(powers)


def scaled_spectral_entropy(signal: NDArray[np.float64]) -> float:
    """Spectral entropy damped by the signal's coefficient of variation.

    Near-constant signals (CV < 0.01, < 0.05) map to small fixed bands
    instead of the entropy of their digitisation noise.
    """
    values = np.asarray(signal, dtype=np.float64)
    if not values.any():
        return 0.0
    cv = coefficient_of_variation(values)
    if cv < 0.01:
        return 0.001 + cv * 0.01
    if cv < 0.05:
        return 0.01 + cv * 0.1
    return spectral_entropy(values) * min(cv * 2.0, 1.0)


def approximate_entropy(signal: NDArray[np.float64], m: int, r: float) -> float:
    """ApEn(m, r) with r scaled by the signal's standard deviation.

    Self-matches are counted. Returns APEN_UNDEFINED when fewer than m + 1
    windows of length m + 1 fit in the signal.
    """
    if m < 1:
        raise InvalidParameterError(f"ApEn pattern length m must be >= 1, got {m}")
    if r <= 0:
        raise InvalidParameterError(f"ApEn tolerance r must be > 0, got {r}")
    values = np.asarray(signal, dtype=np.float64)
    if len(values) - m < m + 1:
        return APEN_UNDEFINED
    std = float(np.std(values))
    tolerance = r * std if std > 1e-6 else r
    return max(0.0, _phi(values, m, tolerance) - _phi(values, m + 1, tolerance))


def _phi(values: NDArray[np.float64], m: int, tolerance: float) -> float:
    windows = np.lib.stride_tricks.sliding_window_view(values, m)
    count = len(windows)
    matches = np.zeros(count, dtype=np.int64)
    # Row blocks keep the pairwise Chebyshev matrix small.
    block = 256
    for start in range(0, count, block):
        chunk = windows[start : start + block]
        dist = np.abs(chunk[:, None, :] - windows[None, :, :]).max(axis=2)
        matches[start : start + block] = np.count_nonzero(dist <= tolerance, axis=1)
    ratios = matches / count
    return float(np.mean(np.log(ratios)))


def contour_signature(contour: NDArray, n_points: int) -> NDArray[np.float64]:
    """Absolute deviation of centroid distance from its mean along the resampled contour."""
    pts = np.asarray(contour, dtype=np.float64)
    if len(pts) < 3:
        raise InsufficientSamplesError(f"Contour signature needs >= 3 points, got {len(pts)}")
    resampled = np.column_stack([interpolate_periodic(pts[:, 0], n_points), interpolate_periodic(pts[:, 1], n_points)])
    distances = periodic_smooth(centroid_distances(resampled), sigma=1.0)
    return np.abs(distances - distances.mean())


def contour_spectral_entropy(contour: NDArray, n_points: int) -> float:
    """Spectral entropy of the contour signature, damped by deviation magnitude (pixels).

    Outlines whose radius never strays more than a few pixels from the mean
    land in fixed low bands.
    """
    signature = contour_signature(contour, n_points)
    mean_dev = float(signature.mean())
    if mean_dev < 5.0:
        return 0.001 + mean_dev * 0.0001
    if float(signature.max()) < 10.0:
        return 0.01 + mean_dev * 0.001
    return spectral_entropy(signature) * min(mean_dev / 20.0, 1.0)


def edge_complexity(
    pink_values: NDArray[np.float64],
    scaling_factor: float,
    petiole_filter: bool = True,
    remove_completely: bool = True,
) -> float:
    """Density of marked crossings times (1 + sqrt(mean magnitude)), scaled.

    Values > 1 count as edge features. With ``petiole_filter`` the petiole
    arc is removed (or zeroed) from the signal first.
    """
    values = np.asarray(pink_values, dtype=np.float64)
    if len(values) == 0:
        raise InsufficientSamplesError("Edge complexity needs a non-empty pink signal")
    if petiole_filter:
        petiole = detect_petiole(values, PETIOLE_DETECTION_THRESHOLD)
        if petiole is not None:
            values = filter_petiole_values(values, petiole, remove_completely)
    if len(values) == 0:
        return 0.0
    features = values[values > PETIOLE_DETECTION_THRESHOLD]
    density = len(features) / len(values)
    magnitude = float(features.mean()) if len(features) else 0.0
    return float(density * (1.0 + np.sqrt(magnitude)) * scaling_factor)
