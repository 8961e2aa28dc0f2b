"""Filters — one-pole lowpass and hysteresis (rate-dependent lowpass)."""

from __future__ import annotations

import logging
from enum import Enum
from typing import NamedTuple

import numpy as np

from primitives.conversions import hertz_to_normalised
from primitives.params import ParamDef, ParamSchema, ParamType

log = logging.getLogger(__name__)

LOWPASS_PARAMS = ParamSchema([
    ParamDef("sample_rate", ParamType.FLOAT, 2.0,
             label="Sample rate (Hz, 2 = normalised)"),
    ParamDef("lowpass_frequency", ParamType.FLOAT, 0.5,
             label="Cutoff"),
])

HYSTERESIS_PARAMS = ParamSchema([
    ParamDef("sample_rate", ParamType.FLOAT, 2.0,
             label="Sample rate (Hz, 2 = normalised)"),
    ParamDef("lowpass_frequency_up", ParamType.FLOAT, 0.5,
             label="Cutoff rising"),
    ParamDef("lowpass_frequency_down", ParamType.FLOAT, 0.5,
             label="Cutoff falling"),
])


class OnePoleCoefficients(NamedTuple):
    input_scale: float
    feedback_scale: float


def one_pole_coefficients(frequency: float, sample_rate: float) -> OnePoleCoefficients:
    """Cutoff -> (input_scale, feedback_scale), input_scale clamped to [0, 1].

    The pair always sums to 1. NaN stays NaN.
    """
    input_scale = float(np.clip(
        hertz_to_normalised(frequency, sample_rate=sample_rate), 0.0, 1.0))
    return OnePoleCoefficients(input_scale, 1.0 - input_scale)


class Direction(Enum):
    UP = "up"
    DOWN = "down"


class Lowpass:
    """One-pole lowpass filter (exponential smoothing).

    y[n] = input_scale * x[n] + feedback_scale * y[n-1]

    The first sample after construction or reset() seeds y[n-1], so it
    comes out unchanged. set() changes the coefficients without touching
    the history.

        lowpass = Lowpass(sample_rate=2, lowpass_frequency=0.9)
        lowpass.process(0)  # 0
        lowpass.process(1)  # 0.9
        lowpass.process(1)  # 0.99
    """

    schema = LOWPASS_PARAMS

    def __init__(self, sample_rate: float = 2.0, lowpass_frequency: float = 0.5):
        self.sample_rate = 2.0
        self.lowpass_frequency = 0.5
        self.output_value_last: float | None = None  # None until first sample
        self.set(sample_rate=sample_rate, lowpass_frequency=lowpass_frequency)

    def set(self, **changes):
        """Update sample_rate and/or lowpass_frequency, re-derive coefficients."""
        params = self.schema.validate(changes)
        self.sample_rate = params.get("sample_rate", self.sample_rate)
        self.lowpass_frequency = params.get("lowpass_frequency",
                                            self.lowpass_frequency)
        self._init()

    def _init(self):
        self.input_scale, self.feedback_scale = one_pole_coefficients(
            self.lowpass_frequency, self.sample_rate)
        log.debug("lowpass %s @ %s: input_scale=%s",
                  self.lowpass_frequency, self.sample_rate, self.input_scale)

    def params(self) -> dict:
        return {
            "sample_rate": self.sample_rate,
            "lowpass_frequency": self.lowpass_frequency,
        }

    @property
    def running(self) -> bool:
        return self.output_value_last is not None

    def process(self, x: float) -> float:
        if self.output_value_last is None:
            self.output_value_last = x
            return x

        y = x * self.input_scale + self.output_value_last * self.feedback_scale
        self.output_value_last = y
        return y

    def reset(self):
        self.output_value_last = None


class Hysteresis:
    """One-pole lowpass with separate cutoffs for rising and falling input.

    The "up" coefficients apply when x[n] > y[n-1] (strictly), otherwise
    "down". Feedback is recomputed from y[n-1] on every sample, so a
    cutoff change or a direction switch never jumps.

        hysteresis = Hysteresis(sample_rate=2, lowpass_frequency_up=0.9,
                                lowpass_frequency_down=0.1)
        hysteresis.process(0)  # 0
        hysteresis.process(1)  # 0.9 (fast attack)
        hysteresis.process(0)  # 0.81 (slow release)
    """

    schema = HYSTERESIS_PARAMS

    def __init__(self, sample_rate: float = 2.0,
                 lowpass_frequency_up: float = 0.5,
                 lowpass_frequency_down: float = 0.5):
        self.sample_rate = 2.0
        self.lowpass_frequency_up = 0.5
        self.lowpass_frequency_down = 0.5
        self.output_value_last: float | None = None
        self.direction: Direction | None = None
        self.set(sample_rate=sample_rate,
                 lowpass_frequency_up=lowpass_frequency_up,
                 lowpass_frequency_down=lowpass_frequency_down)

    def set(self, **changes):
        params = self.schema.validate(changes)
        self.sample_rate = params.get("sample_rate", self.sample_rate)
        self.lowpass_frequency_up = params.get("lowpass_frequency_up",
                                               self.lowpass_frequency_up)
        self.lowpass_frequency_down = params.get("lowpass_frequency_down",
                                                 self.lowpass_frequency_down)
        self._init()

    def _init(self):
        self.up = one_pole_coefficients(self.lowpass_frequency_up,
                                        self.sample_rate)
        self.down = one_pole_coefficients(self.lowpass_frequency_down,
                                          self.sample_rate)
        log.debug("hysteresis @ %s: up=%s down=%s",
                  self.sample_rate, self.up, self.down)

    def params(self) -> dict:
        return {
            "sample_rate": self.sample_rate,
            "lowpass_frequency_up": self.lowpass_frequency_up,
            "lowpass_frequency_down": self.lowpass_frequency_down,
        }

    @property
    def running(self) -> bool:
        return self.output_value_last is not None

    def process(self, x: float) -> float:
        if self.output_value_last is None:
            # a tie with the seed
            self.direction = Direction.DOWN
            self.output_value_last = x
            return x

        # ties and NaN go down
        if x > self.output_value_last:
            self.direction = Direction.UP
            input_scale, feedback_scale = self.up
        else:
            self.direction = Direction.DOWN
            input_scale, feedback_scale = self.down

        y = x * input_scale + self.output_value_last * feedback_scale
        self.output_value_last = y
        return y

    def reset(self):
        self.output_value_last = None
        self.direction = None
