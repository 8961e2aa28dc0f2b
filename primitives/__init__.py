"""Single-sample signal primitives: clipper, lowpass, hysteresis, scaler.

Each one takes a sample per process() call and returns a sample. Compose
them by chaining calls, e.g. scaler -> hysteresis -> clipper.
"""

from primitives.clipper import Clipper
from primitives.conversions import hertz_to_normalised, normalised_to_hertz
from primitives.filters import Direction, Hysteresis, Lowpass
from primitives.scaler import Scaler, ScaleType

__all__ = [
    "Clipper",
    "Direction",
    "Hysteresis",
    "Lowpass",
    "Scaler",
    "ScaleType",
    "hertz_to_normalised",
    "normalised_to_hertz",
]
