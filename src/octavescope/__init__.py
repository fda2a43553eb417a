"""Spectral-to-geometry engine for octave-aligned music visualizations."""

from octavescope.config import LissajousConfig, SpectrumConfig, ViewportConfig
from octavescope.core.peaks import PeakEntry, PeakSelector, find_peak_candidates
from octavescope.core.topology import BinTopology
from octavescope.errors import ConfigurationError
from octavescope.geometry.base import (
    LissajousCurve,
    OctaveCurve,
    SpiralCurve,
    WindingDirection,
)
from octavescope.geometry.elliptical import EllipticalCurveGenerator
from octavescope.geometry.lissajous import LissajousSynthesizer
from octavescope.geometry.spiral import SpiralCurveGenerator

__version__ = "0.1.0"
__all__ = [
    "BinTopology",
    "ConfigurationError",
    "EllipticalCurveGenerator",
    "LissajousConfig",
    "LissajousCurve",
    "LissajousSynthesizer",
    "OctaveCurve",
    "PeakEntry",
    "PeakSelector",
    "SpectrumConfig",
    "SpiralCurve",
    "SpiralCurveGenerator",
    "ViewportConfig",
    "WindingDirection",
    "find_peak_candidates",
]
