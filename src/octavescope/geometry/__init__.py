"""Curve generators that turn spectra and peaks into polylines."""

from octavescope.geometry.base import (
    BaseCurveGenerator,
    LissajousCurve,
    OctaveCurve,
    SpiralCurve,
    WindingDirection,
)
from octavescope.geometry.elliptical import EllipticalCurveGenerator
from octavescope.geometry.lissajous import LissajousSynthesizer, octave_bottom_bins
from octavescope.geometry.spiral import SpiralCurveGenerator, spiral_index

__all__ = [
    "BaseCurveGenerator",
    "EllipticalCurveGenerator",
    "LissajousCurve",
    "LissajousSynthesizer",
    "OctaveCurve",
    "SpiralCurve",
    "SpiralCurveGenerator",
    "WindingDirection",
    "octave_bottom_bins",
    "spiral_index",
]
