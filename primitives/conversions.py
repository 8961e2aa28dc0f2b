"""Frequency unit conversions.

sample_rate=2 means the frequency is already normalised to Nyquist, so
nothing is converted.
"""

import numpy as np


def hertz_to_normalised(frequency, sample_rate=2.0) -> float:
    """Hz -> fraction of Nyquist. sample_rate=0 gives inf/NaN, never raises."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(frequency) / (np.float64(sample_rate) / 2.0))


def normalised_to_hertz(normalised, sample_rate=2.0) -> float:
    """Fraction of Nyquist -> Hz."""
    with np.errstate(invalid="ignore", over="ignore"):
        return float(np.float64(normalised) * (np.float64(sample_rate) / 2.0))
