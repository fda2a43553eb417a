"""
Lissajous figures from the loudest spectral peaks.

Each ranked peak drives a sine oscillator at its own frequency. Every pair of
non-silent peaks is then plotted against each other like the X and Y inputs
of an oscilloscope: the louder peak on the horizontal axis, the quieter one
on the vertical axis. Harmonic ratios show up as stable, lobed figures.
"""

import itertools
import logging
import math
import time
from typing import List, Optional, Sequence

import librosa
import numpy as np

from octavescope.config import LissajousConfig, ViewportConfig
from octavescope.core.peaks import SILENT_PEAK, PeakEntry
from octavescope.errors import ConfigurationError
from octavescope.geometry.base import LissajousCurve, freeze_points

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi


def octave_bottom_bins(
    bin_frequency_width: float,
    octave_count: int = 8,
    lowest_note: str = "C1",
) -> List[int]:
    """
    First linear-FFT bin of each octave, starting at ``lowest_note``.

    Octave boundaries sit a quarter-tone below each C, so a slightly flat C
    still counts toward its own octave.

    Args:
        bin_frequency_width: Hz per FFT bin.
        octave_count: Number of octaves.
        lowest_note: Note name of the bottom octave.
    """
    if not bin_frequency_width > 0:
        raise ConfigurationError(f"bin_frequency_width must be positive, got {bin_frequency_width}")
    base_hz = float(librosa.note_to_hz(lowest_note)) * 2.0 ** (-1.0 / 24.0)
    return [int(math.ceil(base_hz * 2.0 ** o / bin_frequency_width)) for o in range(octave_count)]


class LissajousSynthesizer:
    """
    Synthesizes per-peak waveforms and pairs them into Lissajous curves.

    The waveform buffer is allocated once and refilled every frame, so one
    instance must not be shared between threads.
    """

    def __init__(
        self,
        config: Optional[LissajousConfig] = None,
        viewport: Optional[ViewportConfig] = None,
        sample_rate: float = 44100.0,
    ):
        self.cfg = (config or LissajousConfig()).validate()
        self.viewport = (viewport or ViewportConfig()).validate()
        if not sample_rate > 0:
            raise ConfigurationError(f"sample_rate must be positive, got {sample_rate}")
        self.sample_rate = float(sample_rate)

        n = self.cfg.sample_count
        self._ramp = TWO_PI * np.arange(n, dtype=np.float64) / self.sample_rate
        self._waveforms = np.zeros((self.cfg.peak_count, n), dtype=np.float64)
        self._pairs = list(itertools.combinations(range(self.cfg.peak_count), 2))

        logger.debug(
            "Lissajous synthesizer ready: %d peaks, %d pairs, %d samples, baseband=%s",
            self.cfg.peak_count,
            len(self._pairs),
            n,
            self.cfg.baseband,
        )

    def baseband_frequency(self, peak: PeakEntry) -> float:
        """
        Fold a peak's frequency down by a power of two according to its bin.

        A bin above the i-th threshold is divided by 2**(i+1); bins at or
        below the first threshold are left alone.
        """
        divisor = 1.0
        for i, threshold in enumerate(self.cfg.baseband_thresholds):
            if peak.bin_index > threshold:
                divisor = 2.0 ** (i + 1)
        return peak.frequency / divisor

    @staticmethod
    def _amplitude(peak: PeakEntry) -> float:
        """Sanitized amplitude; non-finite amplitude or frequency counts as silent."""
        if not (math.isfinite(peak.amplitude) and math.isfinite(peak.frequency)):
            return 0.0
        return min(max(peak.amplitude, 0.0), 1.0)

    def _snapshot_peaks(self, peaks: Sequence[PeakEntry]) -> List[PeakEntry]:
        items = list(peaks)[: self.cfg.peak_count]
        items.extend([SILENT_PEAK] * (self.cfg.peak_count - len(items)))
        return items

    def synthesize(self, peaks: Sequence[PeakEntry], current_time: Optional[float] = None) -> np.ndarray:
        """
        Fill the waveform buffer for this frame.

        The phase of each oscillator is recomputed as ``current_time * f``
        every frame, so the figures drift smoothly without accumulated error.

        Args:
            peaks: Ranked peaks; missing entries count as silent.
            current_time: Phase seed in seconds (defaults to wall-clock time).

        Returns:
            The internal (peak_count, sample_count) buffer. Valid until the
            next call.
        """
        if current_time is None:
            current_time = time.time()
        items = self._snapshot_peaks(peaks)

        for row, peak in zip(self._waveforms, items):
            amplitude = self._amplitude(peak)
            if amplitude == 0.0:
                row.fill(0.0)
                continue

            freq = self.baseband_frequency(peak) if self.cfg.baseband else peak.frequency
            phase = math.fmod(current_time * freq, TWO_PI)
            np.multiply(self._ramp, freq, out=row)
            row += phase
            np.sin(row, out=row)
            row *= self.cfg.amplitude_scale * amplitude

        return self._waveforms

    def generate(self, peaks: Sequence[PeakEntry], current_time: Optional[float] = None) -> List[LissajousCurve]:
        """
        Build one curve per pair of non-silent peaks.

        Args:
            peaks: Ranked peaks, loudest first.
            current_time: Phase seed in seconds (defaults to wall-clock time).

        Returns:
            Curves in pair order. ``hue_index`` is the pair's position among
            all ``peaks_max`` pairs, whether or not earlier pairs were skipped.
            This differs from a counter that advances only when the pair's
            first peak is non-silent: with peak 0 silent, such a counter
            starts the (1, 2) pair at hue 0 where this gives it 3.
        """
        items = self._snapshot_peaks(peaks)
        waves = self.synthesize(items, current_time)

        vp = self.viewport
        curves = []
        for hue_index, (i, j) in enumerate(self._pairs):
            if self._amplitude(items[i]) == 0.0 or self._amplitude(items[j]) == 0.0:
                continue
            xs = np.clip(vp.half_width + vp.half_width * waves[i], 0.0, vp.width)
            ys = np.clip(vp.half_height - vp.half_height * waves[j], 0.0, vp.height)
            curves.append(LissajousCurve(pair=(i, j), hue_index=hue_index, points=freeze_points(xs, ys)))
        return curves
