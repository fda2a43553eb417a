"""
Peak ranking for the Lissajous view.

Peak candidates come from an external analysis stage as (bin, amplitude)
pairs. The selector keeps the loudest few, in a deterministic order, and
annotates them with their frequency.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np
from scipy import signal as scipy_signal

from octavescope.core.snapshot import ArrayLike, freeze_spectrum, sanitize_amplitudes
from octavescope.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PeakEntry:
    """One ranked spectral peak. Amplitude 0.0 means "no peak"."""

    bin_index: int
    frequency: float
    amplitude: float

    @property
    def is_silent(self) -> bool:
        return self.amplitude == 0.0


SILENT_PEAK = PeakEntry(bin_index=0, frequency=0.0, amplitude=0.0)


class PeakSelector:
    """
    Top-K stable selection of peak candidates.

    Candidates are ordered by descending amplitude, ties going to the lower
    bin. Silent candidates are kept so downstream pairing can skip them, and
    the list is padded with silent entries up to ``peak_count``.
    """

    def __init__(self, peak_count: int = 4, bin_frequency_width: float = 44100.0 / 16384):
        """
        Args:
            peak_count: Fixed capacity of the output list (3 or 4 in practice).
            bin_frequency_width: Hz per FFT bin.
        """
        if peak_count <= 0:
            raise ConfigurationError(f"peak_count must be positive, got {peak_count}")
        if not bin_frequency_width > 0:
            raise ConfigurationError(
                f"bin_frequency_width must be positive, got {bin_frequency_width}"
            )
        self.peak_count = int(peak_count)
        self.bin_frequency_width = float(bin_frequency_width)

    def select(self, candidates: Sequence[Tuple[int, float]]) -> List[PeakEntry]:
        """
        Rank candidates and return exactly ``peak_count`` entries.

        Args:
            candidates: (bin_index, amplitude) pairs.

        Returns:
            PeakEntry list ordered by descending amplitude.
        """
        # Snapshot before sorting; the producer may refill its list concurrently
        items = list(candidates)
        if not items:
            return [SILENT_PEAK] * self.peak_count

        bins = np.array([int(b) for b, _ in items], dtype=np.intp)
        if (bins < 0).any():
            raise ValueError(f"peak bin indices must be non-negative, got {bins.min()}")
        amps = sanitize_amplitudes(np.array([a for _, a in items], dtype=np.float64))

        # lexsort uses the last key as primary: amplitude desc, then bin asc
        order = np.lexsort((bins, -amps))[: self.peak_count]

        peaks = [
            PeakEntry(
                bin_index=int(bins[i]),
                frequency=float(bins[i]) * self.bin_frequency_width,
                amplitude=float(amps[i]),
            )
            for i in order
        ]
        peaks.extend([SILENT_PEAK] * (self.peak_count - len(peaks)))
        return peaks


def find_peak_candidates(
    spectrum: ArrayLike,
    max_candidates: int = 16,
    min_amplitude: float = 0.0,
) -> List[Tuple[int, float]]:
    """
    Find local-maximum bins of a magnitude spectrum.

    Convenience for hosts without their own peak stage. Returns the loudest
    ``max_candidates`` maxima as (bin, amplitude) pairs, unsorted by bin.

    Args:
        spectrum: Per-bin magnitudes.
        max_candidates: Maximum number of candidates to return.
        min_amplitude: Maxima at or below this height are ignored.
    """
    snapshot = freeze_spectrum(spectrum)
    peak_bins, props = scipy_signal.find_peaks(snapshot, height=(min_amplitude, None))
    heights = props["peak_heights"]
    heights_ok = heights > min_amplitude
    peak_bins, heights = peak_bins[heights_ok], heights[heights_ok]

    order = np.lexsort((peak_bins, -heights))[:max_candidates]
    logger.debug("Found %d spectral maxima, keeping %d", len(peak_bins), len(order))
    return [(int(peak_bins[i]), float(heights[i])) for i in order]
