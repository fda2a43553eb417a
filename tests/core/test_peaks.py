"""Tests for peak ranking and candidate finding."""

import numpy as np
import pytest

from octavescope.core.peaks import PeakEntry, PeakSelector, SILENT_PEAK, find_peak_candidates
from octavescope.errors import ConfigurationError

BIN_WIDTH = 44100.0 / 16384


class TestPeakSelector:
    def test_descending_amplitude(self):
        selector = PeakSelector(peak_count=3, bin_frequency_width=BIN_WIDTH)
        peaks = selector.select([(10, 0.2), (20, 0.9), (30, 0.5), (40, 0.7)])

        assert [p.bin_index for p in peaks] == [20, 40, 30]
        assert [p.amplitude for p in peaks] == [0.9, 0.7, 0.5]

    def test_frequency_annotation(self):
        selector = PeakSelector(peak_count=3, bin_frequency_width=2.5)
        peaks = selector.select([(100, 0.5)])
        assert peaks[0].frequency == 250.0

    def test_ties_break_on_lower_bin(self):
        selector = PeakSelector(peak_count=4, bin_frequency_width=BIN_WIDTH)
        peaks = selector.select([(50, 0.5), (30, 0.5), (70, 0.8), (10, 0.5)])
        assert [p.bin_index for p in peaks] == [70, 10, 30, 50]

    def test_deterministic(self):
        selector = PeakSelector(peak_count=3)
        candidates = [(5, 0.3), (6, 0.3), (7, 0.3), (8, 0.3)]
        assert selector.select(candidates) == selector.select(list(reversed(candidates)))

    def test_zero_amplitude_kept(self):
        """Silent candidates stay in the list for the pairing stage to skip."""
        selector = PeakSelector(peak_count=3)
        peaks = selector.select([(12, 0.8), (99, 0.0), (40, 0.4)])
        assert len(peaks) == 3
        assert peaks[2].bin_index == 99
        assert peaks[2].is_silent

    def test_pads_to_capacity(self):
        selector = PeakSelector(peak_count=4)
        peaks = selector.select([(12, 0.8)])
        assert len(peaks) == 4
        assert peaks[1:] == [SILENT_PEAK] * 3

    def test_empty_candidates(self):
        peaks = PeakSelector(peak_count=3).select([])
        assert peaks == [SILENT_PEAK] * 3

    def test_amplitudes_sanitized(self):
        selector = PeakSelector(peak_count=3)
        peaks = selector.select([(1, float("nan")), (2, 3.0), (3, -1.0)])
        by_bin = {p.bin_index: p.amplitude for p in peaks}
        assert by_bin == {1: 0.0, 2: 1.0, 3: 0.0}
        assert peaks[0].bin_index == 2

    def test_negative_bin_rejected(self):
        with pytest.raises(ValueError):
            PeakSelector(peak_count=3).select([(-1, 0.5)])

    @pytest.mark.parametrize("kwargs", [{"peak_count": 0}, {"bin_frequency_width": 0.0}])
    def test_invalid_config(self, kwargs):
        with pytest.raises(ConfigurationError):
            PeakSelector(**kwargs)

    def test_entries_are_frozen(self):
        peak = PeakEntry(1, 2.0, 0.5)
        with pytest.raises(AttributeError):
            peak.amplitude = 0.9


class TestFindPeakCandidates:
    def test_finds_local_maxima(self):
        spectrum = np.zeros(100)
        spectrum[[20, 50, 80]] = [0.3, 0.9, 0.6]
        candidates = find_peak_candidates(spectrum)

        assert [b for b, _ in candidates] == [50, 80, 20]
        assert candidates[0][1] == pytest.approx(0.9)

    def test_limit(self):
        spectrum = np.zeros(100)
        spectrum[10:90:10] = np.linspace(0.1, 0.8, 8)
        assert len(find_peak_candidates(spectrum, max_candidates=3)) == 3

    def test_silent_spectrum(self):
        assert find_peak_candidates(np.zeros(64)) == []

    def test_clamps_before_search(self):
        spectrum = np.zeros(32)
        spectrum[10] = 7.0
        spectrum[20] = np.nan
        candidates = find_peak_candidates(spectrum)
        assert candidates == [(10, 1.0)]
