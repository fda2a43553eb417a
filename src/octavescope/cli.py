"""
Preview CLI for the octave-aligned curve generators.

Rasterizes one frame of each visualization to PNG so the geometry can be
inspected without a host application.

Usage:
    octavescope-preview elliptical --tone 400:1.0 -o elliptical.png
    octavescope-preview all --spectrum frame.npy --option 2
"""

import argparse
import colorsys
import logging
import math
import sys
import time
from pathlib import Path

import librosa
import numpy as np
from PIL import Image, ImageDraw

from octavescope.config import LissajousConfig, SpectrumConfig, ViewportConfig
from octavescope.core.peaks import PeakSelector, find_peak_candidates
from octavescope.core.topology import BinTopology
from octavescope.errors import ConfigurationError
from octavescope.geometry.elliptical import EllipticalCurveGenerator
from octavescope.geometry.lissajous import LissajousSynthesizer
from octavescope.geometry.spiral import SpiralCurveGenerator

MODES = ("elliptical", "spiral", "lissajous")
DEFAULT_TONES = ("300:0.9", "396:0.7", "492:0.5", "110:0.4")
BACKGROUND = (12, 12, 18)


def _hue_color(hue: float, value: float = 1.0):
    r, g, b = colorsys.hsv_to_rgb(hue % 1.0, 0.85, value)
    return (int(r * 255), int(g * 255), int(b * 255))


def _parse_tone(text: str):
    try:
        bin_text, amp_text = text.split(":")
        return int(bin_text), float(amp_text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected BIN:AMP, got {text!r}") from None


def synthetic_spectrum(bin_count: int, tones, width: float = 2.0) -> np.ndarray:
    """Sum of Gaussian bumps, one per (bin, amplitude) tone."""
    bins = np.arange(bin_count, dtype=np.float64)
    spectrum = np.zeros(bin_count, dtype=np.float64)
    for center, amp in tones:
        spectrum += amp * np.exp(-0.5 * ((bins - center) / width) ** 2)
    return spectrum


def fft_bin_of(topology: BinTopology, b: int, bin_frequency_width: float) -> int:
    """Linear FFT bin with the same frequency as octave-spectrum bin ``b``."""
    base_hz = float(librosa.note_to_hz("C1")) * 2.0 ** (-1.0 / 24.0)
    freq = base_hz * 2.0 ** (topology.octave(b) + topology.angular_fraction_of(b))
    return int(math.ceil(freq / bin_frequency_width))


def draw_elliptical(topology, viewport, spectrum, points_per_octave=None) -> Image.Image:
    img = Image.new("RGB", (int(viewport.width), int(viewport.height)), BACKGROUND)
    draw = ImageDraw.Draw(img)
    curves = EllipticalCurveGenerator(topology, viewport, points_per_octave).generate(spectrum)
    # Outermost first so inner octaves stay visible
    for curve in reversed(curves):
        color = _hue_color(curve.octave / topology.octave_count)
        draw.polygon([tuple(p) for p in curve.points.tolist()], fill=color, outline=(0, 0, 0))
    return img


def draw_spiral(topology, viewport, spectrum, points_per_octave=None) -> Image.Image:
    img = Image.new("RGB", (int(viewport.width), int(viewport.height)), BACKGROUND)
    draw = ImageDraw.Draw(img)
    curve = SpiralCurveGenerator(topology, viewport, points_per_octave).generate(spectrum)
    draw.polygon([tuple(p) for p in curve.points.tolist()], fill=(192, 57, 43))
    return img


def draw_lissajous(topology, viewport, spectrum, spectrum_cfg, option, current_time) -> Image.Image:
    img = Image.new("RGB", (int(viewport.width), int(viewport.height)), BACKGROUND)
    draw = ImageDraw.Draw(img)

    config = LissajousConfig.from_option(option)
    bin_width = spectrum_cfg.bin_frequency_width
    candidates = [
        (fft_bin_of(topology, b, bin_width), amp)
        for b, amp in find_peak_candidates(spectrum, max_candidates=16)
    ]
    peaks = PeakSelector(config.peak_count, bin_width).select(candidates)

    synth = LissajousSynthesizer(config, viewport, sample_rate=spectrum_cfg.sample_rate)
    for curve in synth.generate(peaks, current_time=current_time):
        color = _hue_color(curve.hue_index / config.peaks_max)
        draw.line([tuple(p) for p in curve.points.tolist()], fill=color, width=2)
    return img


def main():
    parser = argparse.ArgumentParser(
        prog="octavescope-preview",
        description="Render one frame of the octave-aligned visualizations to PNG",
    )
    parser.add_argument("mode", choices=MODES + ("all",), help="Visualization to render")
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output PNG path (default: octavescope_<mode>.png)",
    )

    # Resolution
    parser.add_argument(
        "-p", "--profile", type=str, default="medium",
        choices=["low", "medium", "high"],
        help="Viewport profile (low: 720p, medium: 1080p, high: 4k)",
    )
    parser.add_argument("--width", type=int, default=None, help="Width (overrides profile)")
    parser.add_argument("--height", type=int, default=None, help="Height (overrides profile)")

    # Spectrum
    parser.add_argument(
        "--tone", type=_parse_tone, action="append", default=None,
        help="Synthetic spectrum bump as BIN:AMP (repeatable)",
    )
    parser.add_argument("--spectrum", type=Path, default=None, help="Spectrum as a .npy array")
    parser.add_argument("--bins", type=int, default=768, help="Spectrum bin count (default: 768)")
    parser.add_argument("--octaves", type=int, default=8, help="Octave count (default: 8)")
    parser.add_argument(
        "--points-per-note", type=int, default=8,
        help="Inner-pass and baseline samples per note (default: 8)",
    )

    # Lissajous
    parser.add_argument(
        "--option", type=int, default=0, choices=[0, 1, 2, 3],
        help="Lissajous option: 0/1 = 4/3 peaks, 2/3 = same but basebanded",
    )
    parser.add_argument("--time", type=float, default=None, help="Phase seed in seconds (default: now)")

    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        profile = ViewportConfig.from_profile(args.profile)
        viewport = ViewportConfig(
            width=profile.width if args.width is None else args.width,
            height=profile.height if args.height is None else args.height,
        ).validate()
        spectrum_cfg = SpectrumConfig(
            bin_count=args.bins,
            octave_count=args.octaves,
            points_per_note=args.points_per_note,
        ).validate()
        topology = BinTopology.from_config(spectrum_cfg)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.spectrum is not None:
        if not args.spectrum.exists():
            print(f"Error: Spectrum file not found: {args.spectrum}", file=sys.stderr)
            sys.exit(1)
        spectrum = np.load(args.spectrum)
    else:
        tones = args.tone or [_parse_tone(t) for t in DEFAULT_TONES]
        spectrum = synthetic_spectrum(topology.bin_count, tones)

    if spectrum.ndim != 1 or len(spectrum) != topology.bin_count:
        print(
            f"Error: spectrum has shape {spectrum.shape}, expected ({topology.bin_count},)",
            file=sys.stderr,
        )
        sys.exit(1)

    current_time = args.time if args.time is not None else time.time()
    modes = MODES if args.mode == "all" else (args.mode,)

    print(f"Rendering {', '.join(modes)} at {int(viewport.width)}x{int(viewport.height)}")
    for mode in modes:
        t0 = time.time()
        if mode == "elliptical":
            img = draw_elliptical(topology, viewport, spectrum, spectrum_cfg.points_per_octave)
        elif mode == "spiral":
            img = draw_spiral(topology, viewport, spectrum, spectrum_cfg.points_per_octave)
        else:
            img = draw_lissajous(topology, viewport, spectrum, spectrum_cfg, args.option, current_time)

        output = args.output
        if output is None:
            output = Path(f"octavescope_{mode}.png")
        elif len(modes) > 1:
            output = output.with_name(f"{output.stem}_{mode}{output.suffix or '.png'}")

        img.save(output)
        print(f"  {mode}: {output} ({(time.time() - t0) * 1000:.1f} ms)")


if __name__ == "__main__":
    main()
