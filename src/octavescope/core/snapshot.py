"""
Frozen, sanitized copies of per-frame input data.

The upstream analysis thread may keep writing into its spectrum buffer while
a frame is being computed. Generators therefore never iterate the caller's
array; they take one private copy up front and clamp it before any geometry.
"""

import logging
from typing import Optional, Sequence, Union

import numpy as np

logger = logging.getLogger(__name__)

ArrayLike = Union[Sequence[float], np.ndarray]


def sanitize_amplitudes(values: np.ndarray) -> np.ndarray:
    """
    Clamp amplitudes to [0, 1] in place, zeroing NaN and +/-inf first.

    Args:
        values: float64 array, modified in place.

    Returns:
        The same array.
    """
    non_finite = ~np.isfinite(values)
    n_bad = int(non_finite.sum())
    if n_bad:
        values[non_finite] = 0.0

    n_clamped = int(np.count_nonzero((values < 0.0) | (values > 1.0)))
    np.clip(values, 0.0, 1.0, out=values)

    if n_bad or n_clamped:
        logger.debug("Sanitized amplitudes: %d non-finite, %d out of range", n_bad, n_clamped)
    return values


def freeze_spectrum(spectrum: ArrayLike, expected_length: Optional[int] = None) -> np.ndarray:
    """
    Take a private, read-only, clamped snapshot of a magnitude spectrum.

    Args:
        spectrum: Per-bin magnitudes, nominally in [0, 1].
        expected_length: Required number of bins, if known.

    Returns:
        1-D float64 array with every value in [0, 1].

    Raises:
        ValueError: If the spectrum is not 1-D or has the wrong length.
    """
    snapshot = np.array(spectrum, dtype=np.float64, copy=True)
    if snapshot.ndim != 1:
        raise ValueError(f"spectrum must be 1-D, got shape {snapshot.shape}")
    if expected_length is not None and snapshot.shape[0] != expected_length:
        raise ValueError(
            f"spectrum has {snapshot.shape[0]} bins, expected {expected_length}"
        )

    sanitize_amplitudes(snapshot)
    snapshot.flags.writeable = False
    return snapshot
