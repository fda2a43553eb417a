"""
Spiral octave-aligned spectrum.

Lays every bin along one elongated Archimedean spiral, one revolution per
octave, so octave-related frequencies line up radially while neighbouring
bins stay adjacent along a single continuous line.

A scalar spiral index combines the octave (turn number) and the angular
fraction within it::

    s = direction * (octave + theta)
    x = X0 + A * s * sin(2 * pi * s)
    y = Y0 + B * s * cos(2 * pi * s)

``A`` and ``B`` are the horizontal and vertical radial increments (the gap
between successive turns), sized so that all octaves fill the viewport. With
the default clockwise winding ``s`` is negative, which starts every turn at
12 o'clock and walks it clockwise on screen.

The bottom bin of octave ``o+1`` has theta exactly 0, so its spiral index is
exactly ``direction * (o+1)``: the same point the top of octave ``o`` tends
to. Keeping this construction intact is what makes the octave seams
invisible.
"""

import logging
from typing import Optional

import numpy as np

from octavescope.config import ViewportConfig
from octavescope.core.snapshot import ArrayLike, freeze_spectrum
from octavescope.core.topology import BinTopology
from octavescope.geometry.base import (
    BaseCurveGenerator,
    SpiralCurve,
    WindingDirection,
    freeze_points,
)

logger = logging.getLogger(__name__)


def spiral_index(octave: float, theta: float, winding: WindingDirection = WindingDirection.CLOCKWISE) -> float:
    """Scalar position along the spiral: integer part is the turn, fraction the angle."""
    return int(winding) * (octave + theta)


class SpiralCurveGenerator(BaseCurveGenerator):
    """Builds the single closed, magnitude-bulged spiral spanning all octaves."""

    def __init__(
        self,
        topology: BinTopology,
        viewport: Optional[ViewportConfig] = None,
        points_per_octave: Optional[int] = None,
        winding: WindingDirection = WindingDirection.CLOCKWISE,
    ):
        super().__init__(topology, viewport, points_per_octave)
        self.winding = WindingDirection(winding)

        octave_count = topology.octave_count
        self.rad_inc_a = self.viewport.half_width / octave_count
        self.rad_inc_b = self.viewport.half_height / octave_count

        # Baseline from the outermost turn inward, one point per angular sample
        ppo = self.points_per_octave
        octaves = np.repeat(np.arange(octave_count - 1, -1, -1), ppo)
        samples = np.tile(np.arange(ppo - 1, -1, -1), octave_count)
        theta = samples / ppo
        angle = 2.0 * np.pi * theta
        self._baseline = self._place(octaves + theta, np.sin(angle), np.cos(angle), 0.0)

        logger.debug(
            "Spiral generator ready: %d turns, %d baseline points, winding %s",
            octave_count,
            len(self._baseline),
            self.winding.name,
        )

    def _place(self, turns, sin_theta, cos_theta, magnitude):
        """
        Map unsigned turn positions (octave + theta) to points.

        The octave part of ``s`` is a whole number of revolutions, so
        sin(2*pi*s) == direction * sin(2*pi*theta) and
        cos(2*pi*s) == cos(2*pi*theta); the trig comes from theta alone.
        """
        d = int(self.winding)
        s = d * turns
        x0, y0 = self.viewport.center
        # The data term carries the winding sign: for the clockwise default
        # this subtracts the magnitude from the (negative) radius.
        xs = x0 + (self.rad_inc_a * s + d * self.rad_inc_a * magnitude) * (d * sin_theta)
        ys = y0 + (self.rad_inc_b * s + d * self.rad_inc_b * magnitude) * cos_theta
        return freeze_points(xs, ys)

    def spiral_point(self, octave: float, theta: float, magnitude: float = 0.0):
        """
        Evaluate the spiral directly from its parametric form.

        Reference evaluator for the table-driven ``generate`` path. Slower,
        but takes arbitrary (octave, theta).
        """
        s = spiral_index(octave, theta, self.winding)
        d = int(self.winding)
        x0, y0 = self.viewport.center
        x = x0 + (self.rad_inc_a * s + d * self.rad_inc_a * magnitude) * np.sin(2.0 * np.pi * s)
        y = y0 + (self.rad_inc_b * s + d * self.rad_inc_b * magnitude) * np.cos(2.0 * np.pi * s)
        return float(x), float(y)

    @property
    def baseline(self) -> np.ndarray:
        """Inward baseline pass, shared across frames (read-only)."""
        return self._baseline

    def generate(self, spectrum: ArrayLike) -> SpiralCurve:
        """
        Build this frame's spiral.

        Args:
            spectrum: Per-bin magnitudes. Copied and clamped before use.

        Returns:
            SpiralCurve: baseline inward, data outward, closed on the start.
        """
        topo = self.topology
        snapshot = freeze_spectrum(spectrum, expected_length=topo.bin_count)

        turns = topo.octave_of_bin + topo.angular_fraction
        data = self._place(turns, topo.sin_table, topo.cos_table, snapshot)

        points = np.concatenate((self._baseline, data, self._baseline[:1]))
        points.flags.writeable = False
        return SpiralCurve(points=points)
