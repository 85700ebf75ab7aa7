"""Error taxonomy for leaf analysis. Every failure of a single image run is a LeafAnalysisError."""

from __future__ import annotations


class LeafAnalysisError(Exception):
    """Base class for per-image analysis failures."""


class DegenerateShapeError(LeafAnalysisError):
    """Mask is empty, fragmented beyond tolerance, or too small to trace."""


class InvalidParameterError(LeafAnalysisError, ValueError):
    """A configuration value or derived kernel size is out of range."""


class InsufficientSamplesError(LeafAnalysisError):
    """A signal is too short for the requested analysis."""
