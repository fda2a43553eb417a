"""
Elliptical octave-aligned spectrum.

Draws one ellipse per octave, concentric about the viewport center, with
octave ``o`` at radial fraction ``(o+1)/(O+1)`` of the full half-width and
half-height. Each ellipse is a closed blob: an undecorated inner pass walked
counter-clockwise from 12 o'clock, then the bins of that octave walked
clockwise with their magnitude added to the radius.

The parametric ellipse, with theta measured clockwise from 12 o'clock and
screen y growing downward, is::

    x = X0 + A * sin(2 * pi * theta)
    y = Y0 - B * cos(2 * pi * theta)
"""

import logging
from typing import List, Optional

import numpy as np

from octavescope.config import ViewportConfig
from octavescope.core.snapshot import ArrayLike, freeze_spectrum
from octavescope.core.topology import BinTopology
from octavescope.geometry.base import BaseCurveGenerator, OctaveCurve, freeze_points

logger = logging.getLogger(__name__)


class EllipticalCurveGenerator(BaseCurveGenerator):
    """Builds one closed, magnitude-bulged ellipse per octave."""

    def __init__(
        self,
        topology: BinTopology,
        viewport: Optional[ViewportConfig] = None,
        points_per_octave: Optional[int] = None,
    ):
        super().__init__(topology, viewport, points_per_octave)

        octave_count = topology.octave_count
        x0, y0 = self.viewport.center

        # Divide the radius into O+1 parts; the innermost part carries no data
        self.radial_increment = 1.0 / (octave_count + 1)
        self.hor_bin_radius = self.viewport.half_width * self.radial_increment
        self.vert_bin_radius = self.viewport.half_height * self.radial_increment

        # Inner pass: k = P, P-1, ..., 0 so both ends sit exactly at 12 o'clock
        ppo = self.points_per_octave
        k = np.arange(ppo, -1, -1)
        angle = 2.0 * np.pi * (k % ppo) / ppo
        sample_sin, sample_cos = np.sin(angle), np.cos(angle)

        self._inner_passes = []
        for octave in range(octave_count):
            a, b = self.ellipse_radii(octave)
            self._inner_passes.append(
                freeze_points(x0 + a * sample_sin, y0 - b * sample_cos)
            )

        # Per-bin baseline radii, so the outer pass is one vectorized expression
        rad_frac = (topology.octave_of_bin + 1) * self.radial_increment
        self._bin_radius_a = self.viewport.half_width * rad_frac
        self._bin_radius_b = self.viewport.half_height * rad_frac

        logger.debug(
            "Elliptical generator ready: %d octaves, %d inner points each, viewport %sx%s",
            octave_count,
            ppo + 1,
            self.viewport.width,
            self.viewport.height,
        )

    def ellipse_radii(self, octave: int):
        """Baseline (horizontal, vertical) radii of an octave's ellipse."""
        rad_frac = (octave + 1) * self.radial_increment
        return self.viewport.half_width * rad_frac, self.viewport.half_height * rad_frac

    def outer_pass(self, snapshot: np.ndarray) -> np.ndarray:
        """
        Bulged points for every bin, in bin order.

        Args:
            snapshot: Sanitized spectrum from ``freeze_spectrum``.

        Returns:
            (N, 2) array of points.
        """
        topo = self.topology
        x0, y0 = self.viewport.center
        xs = x0 + (self._bin_radius_a + snapshot * self.hor_bin_radius) * topo.sin_table
        ys = y0 - (self._bin_radius_b + snapshot * self.vert_bin_radius) * topo.cos_table
        return np.column_stack((xs, ys))

    def generate(self, spectrum: ArrayLike) -> List[OctaveCurve]:
        """
        Build this frame's octave curves.

        Args:
            spectrum: Per-bin magnitudes. Copied and clamped before use.

        Returns:
            One OctaveCurve per octave, innermost first.
        """
        snapshot = freeze_spectrum(spectrum, expected_length=self.topology.bin_count)
        outer = self.outer_pass(snapshot)

        curves = []
        for octave in range(self.topology.octave_count):
            inner = self._inner_passes[octave]
            bins = slice(self.topology.bottom_bin(octave), self.topology.top_bin(octave) + 1)
            points = np.concatenate((inner, outer[bins], inner[:1]))
            points.flags.writeable = False
            curves.append(OctaveCurve(octave=octave, points=points))
        return curves
