"""
Configuration records for the spectral geometry engine.

All settings are explicit values handed to the generators at construction
time. Nothing is read from shared UI state.
"""

from dataclasses import dataclass
from typing import Tuple

from octavescope.errors import ConfigurationError

# The four display options of the Lissajous view: (peak_count, baseband)
LISSAJOUS_OPTIONS = {
    0: (4, False),
    1: (3, False),
    2: (4, True),
    3: (3, True),
}

# Octave bottom bins of a 16384-point FFT at 44.1 kHz, from C2 to C6.
DEFAULT_BASEBAND_THRESHOLDS = (24, 48, 95, 189, 378)

PROFILES = {
    "low": {"width": 1280, "height": 720},
    "medium": {"width": 1920, "height": 1080},
    "high": {"width": 3840, "height": 2160},
}


@dataclass(frozen=True)
class SpectrumConfig:
    """Shape of the incoming spectrum and of the FFT that produced it."""

    bin_count: int = 768
    octave_count: int = 8
    notes_per_octave: int = 12
    points_per_note: int = 8

    # Upstream FFT, used to turn peak bins into frequencies
    sample_rate: float = 44100.0
    fft_length: int = 16384

    @property
    def points_per_octave(self) -> int:
        return self.notes_per_octave * self.points_per_note

    @property
    def bin_frequency_width(self) -> float:
        """Width of one linear FFT bin in Hz."""
        return self.sample_rate / self.fft_length

    def validate(self) -> "SpectrumConfig":
        for name in ("bin_count", "octave_count", "notes_per_octave", "points_per_note", "fft_length"):
            value = getattr(self, name)
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")
        if not self.sample_rate > 0:
            raise ConfigurationError(f"sample_rate must be positive, got {self.sample_rate}")
        return self


@dataclass(frozen=True)
class ViewportConfig:
    """Target drawing surface. Origin is top-left, y grows downward."""

    width: float = 1920
    height: float = 1080

    @property
    def half_width(self) -> float:
        return self.width / 2.0

    @property
    def half_height(self) -> float:
        return self.height / 2.0

    @property
    def center(self) -> Tuple[float, float]:
        return (self.half_width, self.half_height)

    def validate(self) -> "ViewportConfig":
        if not (self.width > 0 and self.height > 0):
            raise ConfigurationError(
                f"viewport must have positive size, got {self.width}x{self.height}"
            )
        return self

    @classmethod
    def from_profile(cls, profile: str) -> "ViewportConfig":
        try:
            dims = PROFILES[profile]
        except KeyError:
            raise ConfigurationError(
                f"unknown profile {profile!r}, expected one of {sorted(PROFILES)}"
            ) from None
        return cls(width=dims["width"], height=dims["height"])


@dataclass(frozen=True)
class LissajousConfig:
    """Tagged mode value for the Lissajous synthesizer."""

    peak_count: int = 4
    baseband: bool = False
    sample_count: int = 1000  # looks pleasing at typical window sizes
    amplitude_scale: float = 0.2
    baseband_thresholds: Tuple[int, ...] = DEFAULT_BASEBAND_THRESHOLDS

    @property
    def peaks_max(self) -> int:
        """Number of distinct peak pairs, i.e. the hue index range."""
        return self.peak_count * (self.peak_count - 1) // 2

    @classmethod
    def from_option(cls, option: int, **overrides) -> "LissajousConfig":
        """
        Build the config for one of the four display options.

        Options 0 and 2 use four peaks (six curves), 1 and 3 use three
        peaks (three curves). Options 2 and 3 baseband the frequencies.
        """
        if option not in LISSAJOUS_OPTIONS:
            raise ConfigurationError(f"Lissajous option must be 0-3, got {option}")
        peak_count, baseband = LISSAJOUS_OPTIONS[option]
        return cls(peak_count=peak_count, baseband=baseband, **overrides)

    def validate(self) -> "LissajousConfig":
        if self.peak_count < 2:
            raise ConfigurationError(f"peak_count must be at least 2, got {self.peak_count}")
        if self.sample_count <= 0:
            raise ConfigurationError(f"sample_count must be positive, got {self.sample_count}")
        if list(self.baseband_thresholds) != sorted(self.baseband_thresholds):
            raise ConfigurationError("baseband_thresholds must be ascending")
        return self
