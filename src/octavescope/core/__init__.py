"""Lookup tables, input snapshots and peak ranking."""

from octavescope.core.peaks import PeakEntry, PeakSelector, find_peak_candidates
from octavescope.core.snapshot import freeze_spectrum, sanitize_amplitudes
from octavescope.core.topology import BinTopology

__all__ = [
    "BinTopology",
    "PeakEntry",
    "PeakSelector",
    "find_peak_candidates",
    "freeze_spectrum",
    "sanitize_amplitudes",
]
