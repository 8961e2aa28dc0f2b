"""Scaler — maps a value from one range to another.

Linear, logarithmic or exponential curve, optional clipping of the input.

    # MIDI pitch to Hertz
    scaler = Scaler(input_start=69, input_end=81, output_start=440,
                    output_end=880, type="exponential", base=2)
    scaler.process(69)  # 440
    scaler.process(72)  # 523.251131
    scaler.process(93)  # 1760 (no clipping)

    # decibel to amplitude
    scaler = Scaler(input_start=0, input_end=20, output_start=1,
                    output_end=10, type="exp", base=10)
    scaler.process(-20)  # 0.1
"""

from __future__ import annotations

import logging
import math
from enum import Enum

import numpy as np

from primitives.params import ParamDef, ParamSchema, ParamType

log = logging.getLogger(__name__)


class ScaleType(Enum):
    LINEAR = "linear"
    LOGARITHMIC = "logarithmic"
    EXPONENTIAL = "exponential"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            return _ABBREVIATIONS.get(value)
        return None


_ABBREVIATIONS = {
    "lin": ScaleType.LINEAR,
    "log": ScaleType.LOGARITHMIC,
    "exp": ScaleType.EXPONENTIAL,
}

SCALER_PARAMS = ParamSchema([
    ParamDef("input_start", ParamType.FLOAT, 0.0, label="Input start"),
    ParamDef("input_end", ParamType.FLOAT, 1.0, label="Input end"),
    ParamDef("output_start", ParamType.FLOAT, 0.0, label="Output start"),
    ParamDef("output_end", ParamType.FLOAT, 1.0, label="Output end"),
    ParamDef("clip", ParamType.BOOL, False, label="Clip input"),
    ParamDef("type", ParamType.CHOICE, ScaleType.LINEAR, label="Curve",
             cast=ScaleType),
    ParamDef("base", ParamType.FLOAT, 1.0, label="Curve base",
             range=(0.0, np.inf)),
])


class Scaler:
    """Range mapping, pure function of the configuration.

    Either range being zero turns process() into a step: output_start for
    x <= input_min, output_end above. base == 1 is always linear.
    Out-of-domain logarithmic input gives NaN, it is not trapped.
    """

    schema = SCALER_PARAMS

    def __init__(self, input_start: float = 0.0, input_end: float = 1.0,
                 output_start: float = 0.0, output_end: float = 1.0,
                 clip: bool = False, type: ScaleType | str = ScaleType.LINEAR,
                 base: float = 1.0):
        self.input_start = 0.0
        self.input_end = 1.0
        self.output_start = 0.0
        self.output_end = 1.0
        self.clip = False
        self.type = ScaleType.LINEAR
        self.base = 1.0
        self.set(input_start=input_start, input_end=input_end,
                 output_start=output_start, output_end=output_end,
                 clip=clip, type=type, base=base)

    def set(self, **changes):
        """Partial update; type accepts ScaleType, names or lin/log/exp."""
        params = self.schema.validate(changes)
        self.input_start = params.get("input_start", self.input_start)
        self.input_end = params.get("input_end", self.input_end)
        self.output_start = params.get("output_start", self.output_start)
        self.output_end = params.get("output_end", self.output_end)
        self.clip = params.get("clip", self.clip)
        self.type = params.get("type", self.type)
        self.base = params.get("base", self.base)
        self._init()

    def _init(self):
        self.input_range = self.input_end - self.input_start
        self.output_range = self.output_end - self.output_start

        self.input_min = float(np.minimum(self.input_start, self.input_end))
        self.input_max = float(np.maximum(self.input_start, self.input_end))

        with np.errstate(divide="ignore", invalid="ignore"):
            self.log_base = float(np.log(self.base))

        log.debug("scaler [%s, %s] -> [%s, %s] %s base=%s clip=%s",
                  self.input_start, self.input_end,
                  self.output_start, self.output_end,
                  self.type.value, self.base, self.clip)

    def params(self) -> dict:
        return {
            "input_start": self.input_start,
            "input_end": self.input_end,
            "output_start": self.output_start,
            "output_end": self.output_end,
            "clip": self.clip,
            "type": self.type,
            "base": self.base,
        }

    def process(self, x: float) -> float:
        if self.input_range == 0 or self.output_range == 0:
            return self.output_start if x <= self.input_min else self.output_end

        if self.clip:
            if x < self.input_min:
                x = self.input_min
            elif x > self.input_max:
                x = self.input_max

        offset = x - self.input_start

        if self.base == 1 or self.type is ScaleType.LINEAR:
            return (self.output_start
                    + self.output_range * offset / self.input_range)

        if self.type is ScaleType.LOGARITHMIC:
            return (self.output_start + self.output_range
                    * _log((self.base - 1) * offset / self.input_range + 1)
                    / self.log_base)

        return (self.output_start + self.output_range
                * (_exp(self.log_base * offset / self.input_range) - 1)
                / (self.base - 1))


def _log(v: float) -> float:
    # IEEE results where math.log would raise
    if v > 0:
        return math.log(v)
    if v == 0:
        return -math.inf
    return math.nan


def _exp(v: float) -> float:
    try:
        return math.exp(v)
    except OverflowError:
        return math.inf
