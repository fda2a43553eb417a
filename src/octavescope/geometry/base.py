"""
Shared types for the curve generators.
"""

import abc
import enum
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from octavescope.config import SpectrumConfig, ViewportConfig
from octavescope.core.topology import BinTopology
from octavescope.errors import ConfigurationError


class WindingDirection(enum.IntEnum):
    """
    Sign applied to the spiral index.

    Angles are measured clockwise from 12 o'clock, so a negative spiral index
    winds the spiral clockwise as the octave number grows.
    """

    CLOCKWISE = -1
    COUNTER_CLOCKWISE = 1


def freeze_points(xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    """Stack x/y into a fresh read-only (n, 2) float64 array."""
    points = np.column_stack((xs, ys)).astype(np.float64, copy=False)
    points.flags.writeable = False
    return points


@dataclass(frozen=True)
class OctaveCurve:
    """Closed polygon for one octave of the elliptical view."""

    octave: int
    points: np.ndarray  # (n, 2), first point == last point


@dataclass(frozen=True)
class SpiralCurve:
    """Closed polygon spanning all octaves of the spiral view."""

    points: np.ndarray  # (n, 2), first point == last point


@dataclass(frozen=True)
class LissajousCurve:
    """Open polyline for one pair of peaks."""

    pair: Tuple[int, int]
    hue_index: int
    points: np.ndarray  # (sample_count, 2)


class BaseCurveGenerator(abc.ABC):
    """
    Base class for the spectrum-driven curve generators.

    Holds the shared topology and viewport plus any tables derived from
    them. ``generate`` must be a pure function of the spectrum it is given.
    """

    def __init__(
        self,
        topology: BinTopology,
        viewport: Optional[ViewportConfig] = None,
        points_per_octave: Optional[int] = None,
    ):
        self.topology = topology
        self.viewport = (viewport or ViewportConfig()).validate()

        if points_per_octave is None:
            points_per_octave = topology.bin_count // topology.octave_count
        if points_per_octave <= 0:
            raise ConfigurationError(f"points_per_octave must be positive, got {points_per_octave}")
        self.points_per_octave = int(points_per_octave)

    @classmethod
    def from_config(cls, config: SpectrumConfig, viewport: Optional[ViewportConfig] = None, **kwargs):
        """Build the topology from ``config`` and sample at its ``points_per_octave``."""
        return cls(BinTopology.from_config(config), viewport, config.points_per_octave, **kwargs)

    @abc.abstractmethod
    def generate(self, spectrum):
        """Build this frame's curve(s) from a spectrum snapshot."""
        pass
