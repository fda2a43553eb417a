"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest

from octavescope.config import ViewportConfig
from octavescope.core.peaks import PeakEntry
from octavescope.core.topology import BinTopology

# Octave-spectrum shape used throughout: 8 octaves x 12 notes x 8 points
TEST_BINS = 768
TEST_OCTAVES = 8
BIN_WIDTH = 44100.0 / 16384


@pytest.fixture
def topology() -> BinTopology:
    """Default 768-bin, 8-octave topology (96 bins per octave)."""
    return BinTopology(TEST_BINS, TEST_OCTAVES, 12)


@pytest.fixture
def viewport() -> ViewportConfig:
    """Non-square viewport so horizontal and vertical scaling differ."""
    return ViewportConfig(width=800, height=600)


@pytest.fixture
def silent_spectrum() -> np.ndarray:
    return np.zeros(TEST_BINS)


@pytest.fixture
def single_tone_spectrum() -> np.ndarray:
    """All zeros except bin 400 at full scale."""
    spectrum = np.zeros(TEST_BINS)
    spectrum[400] = 1.0
    return spectrum


@pytest.fixture
def noisy_spectrum() -> np.ndarray:
    """Reproducible random spectrum with out-of-range values sprinkled in."""
    rng = np.random.default_rng(42)
    spectrum = rng.uniform(-0.5, 1.5, TEST_BINS)
    spectrum[::97] = np.nan
    spectrum[5] = np.inf
    spectrum[6] = -np.inf
    return spectrum


@pytest.fixture
def harmonic_peaks() -> list:
    """Four ranked peaks: A2 and its 2nd, 3rd and 4th harmonics."""
    bins = [41, 82, 123, 164]
    amps = [0.9, 0.7, 0.5, 0.3]
    return [PeakEntry(b, b * BIN_WIDTH, a) for b, a in zip(bins, amps)]
