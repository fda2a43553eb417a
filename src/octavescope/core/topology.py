"""
Bin/octave lookup tables.

Partitions the spectrum bins into contiguous octave ranges and assigns every
bin an angular fraction within its octave, measured clockwise from 12 o'clock.
The tables are built once and shared read-only by all curve generators.
"""

import logging

import numpy as np

from octavescope.config import SpectrumConfig
from octavescope.errors import ConfigurationError

logger = logging.getLogger(__name__)


def _readonly(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


class BinTopology:
    """
    Static mapping from bin index to (octave, angular fraction, octave range).

    Octave ``o`` covers bins ``[o*N//O, (o+1)*N//O - 1]``, so ranges are
    contiguous, non-overlapping and cover ``[0, N)`` exactly once. The angular
    fraction of a bin is its offset into that range divided by the range
    length, which puts every octave's bottom bin at exactly 0.0.
    """

    def __init__(self, bin_count: int, octave_count: int = 8, notes_per_octave: int = 12):
        """
        Build the lookup tables.

        Args:
            bin_count: Total number of spectrum bins (N).
            octave_count: Number of octaves (O).
            notes_per_octave: Notes per octave (P), used for note labelling.

        Raises:
            ConfigurationError: If any count is zero/negative, or there are
                fewer bins than octaves.
        """
        if bin_count <= 0:
            raise ConfigurationError(f"bin_count must be positive, got {bin_count}")
        if octave_count <= 0:
            raise ConfigurationError(f"octave_count must be positive, got {octave_count}")
        if notes_per_octave <= 0:
            raise ConfigurationError(f"notes_per_octave must be positive, got {notes_per_octave}")
        if bin_count < octave_count:
            raise ConfigurationError(
                f"bin_count ({bin_count}) must be at least octave_count ({octave_count})"
            )

        self.bin_count = int(bin_count)
        self.octave_count = int(octave_count)
        self.notes_per_octave = int(notes_per_octave)

        edges = (np.arange(self.octave_count + 1) * self.bin_count) // self.octave_count
        self.bottom_bins = _readonly(edges[:-1].astype(np.intp))
        self.top_bins = _readonly((edges[1:] - 1).astype(np.intp))

        bins = np.arange(self.bin_count)
        octave_of_bin = np.searchsorted(edges, bins, side="right") - 1
        octave_len = (self.top_bins - self.bottom_bins + 1)[octave_of_bin]
        offsets = bins - self.bottom_bins[octave_of_bin]

        self.octave_of_bin = _readonly(octave_of_bin.astype(np.intp))
        self.angular_fraction = _readonly(offsets / octave_len)

        # Trig tables reused by every generator
        angle = 2.0 * np.pi * self.angular_fraction
        self.sin_table = _readonly(np.sin(angle))
        self.cos_table = _readonly(np.cos(angle))

        logger.debug(
            "Built bin topology: %d bins, %d octaves, %d-%d bins/octave",
            self.bin_count,
            self.octave_count,
            int((self.top_bins - self.bottom_bins).min()) + 1,
            int((self.top_bins - self.bottom_bins).max()) + 1,
        )

    @classmethod
    def from_config(cls, config: SpectrumConfig) -> "BinTopology":
        config.validate()
        return cls(config.bin_count, config.octave_count, config.notes_per_octave)

    def __repr__(self) -> str:
        return (
            f"BinTopology(bin_count={self.bin_count}, octave_count={self.octave_count}, "
            f"notes_per_octave={self.notes_per_octave})"
        )

    def _check_bin(self, b: int) -> int:
        if not 0 <= b < self.bin_count:
            raise IndexError(f"bin {b} out of range [0, {self.bin_count})")
        return int(b)

    def _check_octave(self, o: int) -> int:
        if not 0 <= o < self.octave_count:
            raise IndexError(f"octave {o} out of range [0, {self.octave_count})")
        return int(o)

    def octave(self, b: int) -> int:
        return int(self.octave_of_bin[self._check_bin(b)])

    def angular_fraction_of(self, b: int) -> float:
        return float(self.angular_fraction[self._check_bin(b)])

    def bottom_bin(self, o: int) -> int:
        return int(self.bottom_bins[self._check_octave(o)])

    def top_bin(self, o: int) -> int:
        return int(self.top_bins[self._check_octave(o)])

    def bins_in_octave(self, o: int) -> int:
        return self.top_bin(o) - self.bottom_bin(o) + 1

    def octave_bins(self, o: int) -> range:
        """Inclusive bin range of octave ``o`` as a Python range."""
        return range(self.bottom_bin(o), self.top_bin(o) + 1)

    def note_of_bin(self, b: int) -> int:
        """Index of the note (0 = C) whose sector contains bin ``b``."""
        note = int(self.angular_fraction_of(b) * self.notes_per_octave)
        return min(note, self.notes_per_octave - 1)
